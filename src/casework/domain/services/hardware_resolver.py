"""Hardware and fastener quantity resolution.

Hardware quantities are either fixed or a formula over aggregate counts of
the calculated module, e.g. ``"facades.door.count * 2"`` for two hinges per
door. The aggregate variables are:

- ``facades.count``: facade pieces of every type
- ``facades.door.count``: door pieces
- ``facades.drawer.count``: drawer-front pieces
- ``details.count``: carcass pieces
- ``shelves.count``: carcass pieces recognised as shelves

Counts are piece counts (part quantities summed), not template entries.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Sequence
from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from ..errors import HardwareQuantityError
from ..value_objects import FacadeType, FixedQuantity
from .expression import ExpressionEvaluator, extend_environment

if TYPE_CHECKING:
    from ..entities import FastenerSpec, HardwareSpec, PartSpec
    from .expression import Environment
    from .part_calculator import CalculatedFacade, CalculatedPart

__all__ = [
    "AGGREGATE_VARIABLES",
    "CalculatedFastener",
    "CalculatedHardware",
    "HardwareResolver",
    "ShelfMatcher",
    "aggregate_variables",
]

logger = logging.getLogger(__name__)

AGGREGATE_VARIABLES: tuple[str, ...] = (
    "facades.count",
    "facades.door.count",
    "facades.drawer.count",
    "details.count",
    "shelves.count",
)


@dataclass(frozen=True)
class ShelfMatcher:
    """Recognises shelf parts.

    An explicit ``is_shelf`` flag on the part always wins. Otherwise the part
    name is matched case-insensitively against ``keywords``; this is a naming
    convention, not something the data model guarantees.
    """

    keywords: tuple[str, ...] = ("shelf", "полк")

    def is_shelf(self, part: PartSpec) -> bool:
        if part.is_shelf is not None:
            return part.is_shelf
        name = part.name.casefold()
        return any(keyword.casefold() in name for keyword in self.keywords)


def aggregate_variables(
    details: Sequence[CalculatedPart],
    facades: Sequence[CalculatedFacade],
    shelf_matcher: ShelfMatcher | None = None,
) -> dict[str, float]:
    """Count calculated entries for hardware formulas.

    Each facade or part entry counts once whatever its quantity, so a door
    entry with quantity 2 gives ``facades.door.count == 1``.
    """
    matcher = shelf_matcher or ShelfMatcher()
    return {
        "facades.count": float(len(facades)),
        "facades.door.count": float(
            len([f for f in facades if f.spec.facade_type is FacadeType.DOOR])
        ),
        "facades.drawer.count": float(
            len([f for f in facades if f.spec.facade_type is FacadeType.DRAWER])
        ),
        "details.count": float(len(details)),
        "shelves.count": float(len([d for d in details if matcher.is_shelf(d.spec)])),
    }


@dataclass(frozen=True)
class CalculatedHardware:
    """Hardware with its resolved quantity and cost."""

    spec: HardwareSpec
    quantity: float
    price_per_unit: float
    cost: float

    @property
    def article(self) -> str:
        return self.spec.article

    @property
    def name(self) -> str:
        return self.spec.name


@dataclass(frozen=True)
class CalculatedFastener:
    """Fastener with its cost."""

    spec: FastenerSpec
    quantity: float
    price_per_unit: float
    cost: float

    @property
    def article(self) -> str:
        return self.spec.article

    @property
    def name(self) -> str:
        return self.spec.name


@dataclass
class HardwareResolver:
    """Resolves hardware quantities and costs for a calculated module."""

    evaluator: ExpressionEvaluator = field(default_factory=ExpressionEvaluator)
    shelf_matcher: ShelfMatcher = field(default_factory=ShelfMatcher)

    def hardware_environment(
        self,
        env: Environment,
        details: Sequence[CalculatedPart],
        facades: Sequence[CalculatedFacade],
    ) -> Environment:
        """Extend the module environment with the aggregate counts."""
        return extend_environment(
            env, aggregate_variables(details, facades, self.shelf_matcher)
        )

    def resolve(self, spec: HardwareSpec, hardware_env: Environment) -> CalculatedHardware:
        """Resolve one hardware item against a hardware environment.

        Raises:
            FormulaError: If the quantity formula cannot be evaluated.
            HardwareQuantityError: If the quantity is negative.
        """
        if isinstance(spec.quantity, FixedQuantity):
            quantity = spec.quantity.value
        else:
            quantity = self.evaluator.evaluate(spec.quantity.expression, hardware_env)
            logger.debug(
                f"Hardware {spec.article!r}: {spec.quantity.expression!r} = {quantity}"
            )
        if quantity < 0:
            raise HardwareQuantityError(spec.article, quantity)
        return CalculatedHardware(
            spec=spec,
            quantity=quantity,
            price_per_unit=spec.price_per_unit,
            cost=quantity * spec.price_per_unit,
        )

    def resolve_all(
        self,
        specs: Iterable[HardwareSpec],
        env: Environment,
        details: Sequence[CalculatedPart],
        facades: Sequence[CalculatedFacade],
    ) -> list[CalculatedHardware]:
        hardware_env = self.hardware_environment(env, details, facades)
        return [self.resolve(spec, hardware_env) for spec in specs]

    def resolve_fasteners(self, specs: Iterable[FastenerSpec]) -> list[CalculatedFastener]:
        return [
            CalculatedFastener(
                spec=spec,
                quantity=spec.quantity,
                price_per_unit=spec.price_per_unit,
                cost=spec.quantity * spec.price_per_unit,
            )
            for spec in specs
        ]
