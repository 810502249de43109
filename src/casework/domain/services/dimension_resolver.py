"""Resolution of part dimensions against the module environment."""

from __future__ import annotations

from typing import TYPE_CHECKING

from ..errors import FormulaError, PartCalculationError
from ..value_objects import DimensionValue, FixedDimension
from .expression import ExpressionEvaluator

if TYPE_CHECKING:
    from ..entities import FacadeSpec, PartSpec
    from .expression import Environment

__all__ = ["DimensionResolver"]


class DimensionResolver:
    """Turns fixed or formula dimensions into millimetre values."""

    def __init__(self, evaluator: ExpressionEvaluator | None = None) -> None:
        self.evaluator = evaluator or ExpressionEvaluator()

    def resolve_value(self, value: DimensionValue, env: Environment) -> float:
        """Resolve a single dimension.

        Raises:
            FormulaError: If a formula dimension cannot be evaluated.
        """
        if isinstance(value, FixedDimension):
            return self.evaluator.evaluate(value.value, env)
        return self.evaluator.evaluate(value.expression, env)

    def resolve(self, part: PartSpec, env: Environment) -> tuple[float, float]:
        """Resolve ``(length, width)`` of a detail.

        Raises:
            PartCalculationError: Naming the part and the failing field.
        """
        return (
            self._resolve_field(part.name, "length", part.length, env),
            self._resolve_field(part.name, "width", part.width, env),
        )

    def resolve_facade(self, facade: FacadeSpec, env: Environment) -> tuple[float, float]:
        """Resolve ``(width, height)`` of a facade."""
        return (
            self._resolve_field(facade.name, "width", facade.width, env),
            self._resolve_field(facade.name, "height", facade.height, env),
        )

    def _resolve_field(
        self, name: str, field: str, value: DimensionValue, env: Environment
    ) -> float:
        try:
            return self.resolve_value(value, env)
        except FormulaError as e:
            raise PartCalculationError(name, field, e) from e
