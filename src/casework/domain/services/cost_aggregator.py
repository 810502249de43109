"""Module cost roll-up."""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from .hardware_resolver import CalculatedFastener, CalculatedHardware
    from .material_aggregator import MaterialTotals
    from .operation_calculator import CalculatedOperation

__all__ = ["CostAggregator", "ModuleCosts"]


@dataclass(frozen=True)
class ModuleCosts:
    """Cost breakdown of one module."""

    materials: float = 0.0
    hardware: float = 0.0
    fasteners: float = 0.0
    operations: float = 0.0

    @property
    def total(self) -> float:
        return self.materials + self.hardware + self.fasteners + self.operations

    def scaled(self, factor: float) -> ModuleCosts:
        return ModuleCosts(
            materials=self.materials * factor,
            hardware=self.hardware * factor,
            fasteners=self.fasteners * factor,
            operations=self.operations * factor,
        )

    def __add__(self, other: ModuleCosts) -> ModuleCosts:
        return ModuleCosts(
            materials=self.materials + other.materials,
            hardware=self.hardware + other.hardware,
            fasteners=self.fasteners + other.fasteners,
            operations=self.operations + other.operations,
        )


class CostAggregator:
    """Sums material, hardware, fastener and operation costs.

    Material cost is whatever price the caller populated on the material
    totals; the engine does not look prices up itself.
    """

    def aggregate(
        self,
        materials: MaterialTotals,
        hardware: Sequence[CalculatedHardware],
        fasteners: Sequence[CalculatedFastener],
        operations: Sequence[CalculatedOperation],
    ) -> ModuleCosts:
        return ModuleCosts(
            materials=materials.price,
            hardware=sum(item.cost for item in hardware),
            fasteners=sum(item.cost for item in fasteners),
            operations=sum(item.cost for item in operations),
        )
