"""Static checks of the formulas in a module template.

Checks every formula for syntax and unknown variables without calculating
the module, so broken library entries can be reported up front.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from ..errors import FormulaSyntaxError
from ..value_objects import FormulaDimension, FormulaQuantity
from .expression import BASE_VARIABLES, ExpressionEvaluator, tokenize
from .hardware_resolver import AGGREGATE_VARIABLES

if TYPE_CHECKING:
    from ..entities import ModuleTemplate
    from ..value_objects import DimensionValue

__all__ = ["FormulaIssue", "FormulaValidationResult", "FormulaValidator"]


@dataclass(frozen=True)
class FormulaIssue:
    """A problem with one formula.

    Attributes:
        path: Location in the template, e.g. ``details[0].length``.
        formula: The offending formula.
        message: What is wrong.
    """

    path: str
    formula: str
    message: str


@dataclass(frozen=True)
class FormulaValidationResult:
    errors: tuple[FormulaIssue, ...] = field(default_factory=tuple)

    @property
    def is_valid(self) -> bool:
        return not self.errors


class FormulaValidator:
    """Validates template formulas against the variables they may use."""

    def __init__(self, evaluator: ExpressionEvaluator | None = None) -> None:
        self.evaluator = evaluator or ExpressionEvaluator()

    def check(self, formula: str, available: tuple[str, ...], path: str) -> list[FormulaIssue]:
        """Check one formula; returns its issues (empty when valid)."""
        try:
            tokenize(formula)
        except FormulaSyntaxError as e:
            return [FormulaIssue(path=path, formula=formula, message=str(e))]

        issues = [
            FormulaIssue(path=path, formula=formula, message=f"Unknown variable: {name}")
            for name in self.evaluator.missing_variables(formula, available)
        ]
        if issues:
            return issues

        # Grammar check with every variable bound to a placeholder value.
        probe = {name: 100.0 for name in available}
        evaluation = self.evaluator.try_evaluate(formula, probe)
        if evaluation.error is not None and isinstance(evaluation.error, FormulaSyntaxError):
            issues.append(FormulaIssue(path=path, formula=formula, message=str(evaluation.error)))
        return issues

    def validate_template(self, template: ModuleTemplate) -> FormulaValidationResult:
        errors: list[FormulaIssue] = []
        for index, part in enumerate(template.details):
            errors.extend(self._dimension(part.length, f"details[{index}].length"))
            errors.extend(self._dimension(part.width, f"details[{index}].width"))
        for index, facade in enumerate(template.facades):
            errors.extend(self._dimension(facade.width, f"facades[{index}].width"))
            errors.extend(self._dimension(facade.height, f"facades[{index}].height"))
        hardware_vars = BASE_VARIABLES + AGGREGATE_VARIABLES
        for index, item in enumerate(template.hardware):
            if isinstance(item.quantity, FormulaQuantity):
                errors.extend(
                    self.check(item.quantity.expression, hardware_vars, f"hardware[{index}].quantity")
                )
        return FormulaValidationResult(errors=tuple(errors))

    def _dimension(self, value: DimensionValue, path: str) -> list[FormulaIssue]:
        if isinstance(value, FormulaDimension):
            return self.check(value.expression, BASE_VARIABLES, path)
        return []
