"""Data Transfer Objects for the application layer."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from casework.domain.services import FormulaValidationResult


@dataclass
class SizesInput:
    """Input DTO for optional size overrides (millimetres)."""

    width: float | None = None
    height: float | None = None
    depth: float | None = None

    def validate(self) -> list[str]:
        """Validate input and return list of error messages."""
        errors: list[str] = []
        for name in ("width", "height", "depth"):
            value = getattr(self, name)
            if value is not None and value <= 0:
                errors.append(f"{name.capitalize()} must be positive")
        return errors

    @property
    def is_empty(self) -> bool:
        return self.width is None and self.height is None and self.depth is None


@dataclass
class CatalogEntry:
    """Price of one library module at its default sizes.

    Attributes:
        module_id: Template identifier.
        code: Short template code.
        name: Template name.
        total: Total module cost, None when the calculation failed.
        error: Error message of a failed calculation.
    """

    module_id: str
    code: str
    name: str
    total: float | None = None
    error: str | None = None

    @property
    def ok(self) -> bool:
        return self.error is None


@dataclass
class LibraryValidationOutput:
    """Formula validation results of every template in a library."""

    results: dict[str, FormulaValidationResult] = field(default_factory=dict)

    @property
    def is_valid(self) -> bool:
        return all(result.is_valid for result in self.results.values())

    @property
    def error_count(self) -> int:
        return sum(len(result.errors) for result in self.results.values())
