"""Value objects for the module domain.

All sizes are in millimetres, all areas in square metres and all edge-banding
totals in metres unless a field name says otherwise.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from enum import Enum
from typing import Any, Union

__all__ = [
    "BackWallSpec",
    "CorpusSpec",
    "DEFAULT_EDGING_TYPE",
    "DimensionValue",
    "EdgeSide",
    "EdgingSides",
    "FacadeType",
    "FixedDimension",
    "FixedQuantity",
    "FormulaDimension",
    "FormulaQuantity",
    "HardwareCategory",
    "MaterialType",
    "ModuleCategory",
    "ModuleSizes",
    "QuantityValue",
    "SheetStock",
    "dimension_from_raw",
    "quantity_from_raw",
]

DEFAULT_EDGING_TYPE = "PVC_04"


class ModuleCategory(str, Enum):
    """Where a module sits in a kitchen run."""

    LOWER = "lower"
    UPPER = "upper"
    TALL = "tall"
    CORNER = "corner"


class MaterialType(str, Enum):
    """Board materials parts are cut from."""

    LDSP = "LDSP"
    MDF = "MDF"
    HDF = "HDF"
    PLYWOOD = "Plywood"


class FacadeType(str, Enum):
    """Kind of front a facade closes."""

    DOOR = "door"
    DRAWER = "drawer"
    PANEL = "panel"


class HardwareCategory(str, Enum):
    """Hardware groupings used for reporting."""

    HINGE = "hinge"
    SLIDE = "slide"
    HANDLE = "handle"
    LEG = "leg"
    FASTENER = "fastener"
    SYSTEM = "system"
    OTHER = "other"


class EdgeSide(str, Enum):
    """Sides of a rectangular part that may receive edge banding."""

    TOP = "top"
    BOTTOM = "bottom"
    LEFT = "left"
    RIGHT = "right"


@dataclass(frozen=True)
class ModuleSizes:
    """Overall module dimensions in millimetres."""

    width: float
    height: float
    depth: float

    def __post_init__(self) -> None:
        if self.width <= 0 or self.height <= 0 or self.depth <= 0:
            raise ValueError("All module sizes must be positive")

    def with_overrides(
        self,
        width: float | None = None,
        height: float | None = None,
        depth: float | None = None,
    ) -> ModuleSizes:
        """Copy with any given dimension replaced."""
        return ModuleSizes(
            width=self.width if width is None else width,
            height=self.height if height is None else height,
            depth=self.depth if depth is None else depth,
        )


@dataclass(frozen=True)
class BackWallSpec:
    """Back panel material and thickness."""

    material: MaterialType = MaterialType.HDF
    thickness: float = 3

    def __post_init__(self) -> None:
        if self.thickness <= 0:
            raise ValueError("Back wall thickness must be positive")


@dataclass(frozen=True)
class CorpusSpec:
    """Carcass material specification."""

    material: MaterialType = MaterialType.LDSP
    thickness: float = 19
    back_wall: BackWallSpec = BackWallSpec()

    def __post_init__(self) -> None:
        if self.thickness <= 0:
            raise ValueError("Corpus thickness must be positive")


@dataclass(frozen=True)
class EdgingSides:
    """Which sides of a part are edge banded.

    Top and bottom edges run along the part width, left and right edges
    along the part length.
    """

    top: bool = False
    bottom: bool = False
    left: bool = False
    right: bool = False

    @classmethod
    def all_sides(cls) -> EdgingSides:
        return cls(top=True, bottom=True, left=True, right=True)

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any]) -> EdgingSides:
        """Build from a mapping of side flags (booleans or 0/1)."""
        return cls(**{side.value: bool(data.get(side.value, False)) for side in EdgeSide})

    @property
    def sides(self) -> tuple[EdgeSide, ...]:
        return tuple(side for side in EdgeSide if getattr(self, side.value))

    @property
    def count(self) -> int:
        return len(self.sides)


@dataclass(frozen=True)
class FixedDimension:
    """A dimension given as a literal number of millimetres."""

    value: float

    def __post_init__(self) -> None:
        if self.value <= 0:
            raise ValueError("Fixed dimensions must be positive")


@dataclass(frozen=True)
class FormulaDimension:
    """A dimension given as a formula over the module variables."""

    expression: str

    def __post_init__(self) -> None:
        if not self.expression.strip():
            raise ValueError("Formula dimensions must not be empty")


DimensionValue = Union[FixedDimension, FormulaDimension]


@dataclass(frozen=True)
class FixedQuantity:
    """A hardware quantity given as a literal number."""

    value: float

    def __post_init__(self) -> None:
        if self.value < 0:
            raise ValueError("Hardware quantity cannot be negative")


@dataclass(frozen=True)
class FormulaQuantity:
    """A hardware quantity derived from module aggregate counts."""

    expression: str

    def __post_init__(self) -> None:
        if not self.expression.strip():
            raise ValueError("Quantity formulas must not be empty")


QuantityValue = Union[FixedQuantity, FormulaQuantity]


def _as_number(raw: Any) -> float | None:
    if isinstance(raw, bool):
        return None
    if isinstance(raw, (int, float)):
        return float(raw)
    if isinstance(raw, str):
        try:
            return float(raw.strip())
        except ValueError:
            return None
    return None


def dimension_from_raw(raw: Any) -> DimensionValue:
    """Resolve a raw number-or-formula field into a dimension variant.

    Numbers and numeric strings become FixedDimension, any other string
    becomes FormulaDimension.

    Raises:
        ValueError: If raw is neither a number nor a string.
    """
    if isinstance(raw, (FixedDimension, FormulaDimension)):
        return raw
    number = _as_number(raw)
    if number is not None:
        return FixedDimension(number)
    if isinstance(raw, str):
        return FormulaDimension(raw.strip())
    raise ValueError(f"Dimension must be a number or a formula, got {raw!r}")


def quantity_from_raw(quantity: Any = None, formula: str | None = None) -> QuantityValue:
    """Resolve the quantity/formula pair of a hardware record.

    A non-empty formula wins over the literal quantity, matching how module
    libraries store hardware.
    """
    if formula is not None and formula.strip():
        return FormulaQuantity(formula.strip())
    if quantity is None:
        return FixedQuantity(1)
    number = _as_number(quantity)
    if number is None:
        if isinstance(quantity, str):
            return FormulaQuantity(quantity.strip())
        raise ValueError(f"Quantity must be a number or a formula, got {quantity!r}")
    return FixedQuantity(number)


@dataclass(frozen=True)
class SheetStock:
    """Sheet goods a material is bought in."""

    length: float
    width: float

    def __post_init__(self) -> None:
        if self.length <= 0 or self.width <= 0:
            raise ValueError("Sheet dimensions must be positive")

    @property
    def area(self) -> float:
        """Sheet area in square metres."""
        return self.length * self.width / 1_000_000

    @property
    def label(self) -> str:
        return f"{self.length:g}x{self.width:g}"
