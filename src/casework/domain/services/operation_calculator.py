"""Labour operation quantities and costs."""

from __future__ import annotations

from collections.abc import Iterable, Sequence
from dataclasses import dataclass
from typing import TYPE_CHECKING

from .expression import round_half_away

if TYPE_CHECKING:
    from ..entities import OperationSpec
    from .part_calculator import CalculatedFacade, CalculatedPart

__all__ = [
    "ASSEMBLY",
    "CUTTING",
    "CalculatedOperation",
    "EDGING",
    "OperationCostCalculator",
]

CUTTING = "cutting"
EDGING = "edging"
ASSEMBLY = "assembly"


@dataclass(frozen=True)
class CalculatedOperation:
    """An operation with its derived quantity and cost (both 2 decimals)."""

    spec: OperationSpec
    quantity: float
    price_per_unit: float
    cost: float

    @property
    def id(self) -> str:
        return self.spec.id


class OperationCostCalculator:
    """Derives operation quantities from the calculated parts.

    - cutting: saw cuts of all details
    - edging: metres of edge banding on details plus facade perimeters
    - assembly: one per module
    - anything else: the quantity preset on the operation (0 if unset)
    """

    def quantity_for(
        self,
        operation: OperationSpec,
        details: Sequence[CalculatedPart],
        facades: Sequence[CalculatedFacade],
    ) -> float:
        if operation.id == CUTTING:
            return float(sum(d.cuts for d in details))
        if operation.id == EDGING:
            return (
                sum(d.edging_total for d in details)
                + sum(f.perimeter_total for f in facades)
            ) / 1000
        if operation.id == ASSEMBLY:
            return 1.0
        return float(operation.quantity or 0)

    def calculate(
        self,
        operations: Iterable[OperationSpec],
        details: Sequence[CalculatedPart],
        facades: Sequence[CalculatedFacade],
    ) -> list[CalculatedOperation]:
        calculated: list[CalculatedOperation] = []
        for operation in operations:
            quantity = self.quantity_for(operation, details, facades)
            calculated.append(
                CalculatedOperation(
                    spec=operation,
                    quantity=round_half_away(quantity),
                    price_per_unit=operation.price_per_unit,
                    cost=round_half_away(quantity * operation.price_per_unit),
                )
            )
        return calculated
