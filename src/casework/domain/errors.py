"""Exception hierarchy for the calculation engine."""

from __future__ import annotations

__all__ = [
    "CalculationError",
    "FormulaArithmeticError",
    "FormulaError",
    "FormulaSyntaxError",
    "HardwareQuantityError",
    "MissingTemplateError",
    "PartCalculationError",
    "UnknownVariableError",
]


class CalculationError(Exception):
    """Base class for every error raised by the calculation engine."""


class FormulaError(CalculationError):
    """A formula could not be evaluated.

    Attributes:
        formula: The formula text that failed.
    """

    def __init__(self, message: str, formula: str) -> None:
        self.formula = formula
        super().__init__(message)


class FormulaSyntaxError(FormulaError):
    """Raised for disallowed characters, unbalanced parentheses or bad grammar."""

    def __init__(self, message: str, formula: str, position: int | None = None) -> None:
        self.position = position
        if position is not None:
            message = f"{message} at position {position} in {formula!r}"
        else:
            message = f"{message} in {formula!r}"
        super().__init__(message, formula)


class UnknownVariableError(FormulaError):
    """Raised when a formula references a name absent from the environment."""

    def __init__(self, name: str, formula: str) -> None:
        self.name = name
        super().__init__(f"Unknown variable {name!r} in {formula!r}", formula)


class FormulaArithmeticError(FormulaError, ArithmeticError):
    """Raised on division by zero or a non-finite result."""

    def __init__(self, message: str, formula: str) -> None:
        super().__init__(f"{message} in {formula!r}", formula)


class PartCalculationError(CalculationError):
    """A single part could not be calculated.

    Wraps the underlying formula error together with the part name and the
    field being resolved so callers can report the exact location.
    """

    def __init__(self, part_name: str, field: str, cause: FormulaError) -> None:
        self.part_name = part_name
        self.field = field
        self.cause = cause
        super().__init__(f"Part {part_name!r}, {field}: {cause}")


class HardwareQuantityError(CalculationError):
    """Raised when a hardware quantity resolves to a negative number."""

    def __init__(self, article: str, quantity: float) -> None:
        self.article = article
        self.quantity = quantity
        super().__init__(
            f"Hardware {article!r} resolved to a negative quantity ({quantity})"
        )


class MissingTemplateError(CalculationError):
    """A project references a module template that the library does not hold."""

    def __init__(self, module_id: str) -> None:
        self.module_id = module_id
        super().__init__(f"Module template not found: {module_id}")
