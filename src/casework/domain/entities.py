"""Domain entities: module templates and projects."""

from __future__ import annotations

from dataclasses import dataclass, field

from .value_objects import (
    DEFAULT_EDGING_TYPE,
    CorpusSpec,
    DimensionValue,
    EdgingSides,
    FacadeType,
    FixedQuantity,
    HardwareCategory,
    MaterialType,
    ModuleCategory,
    ModuleSizes,
    QuantityValue,
)

__all__ = [
    "FacadeSpec",
    "FastenerSpec",
    "HardwareSpec",
    "ModuleTemplate",
    "OperationSpec",
    "PartSpec",
    "Project",
    "ProjectItem",
]


@dataclass(frozen=True)
class PartSpec:
    """A carcass part (detail) of a module template.

    Attributes:
        name: Display name, also used by the shelf heuristic.
        length: Length along the left/right edges.
        width: Width along the top/bottom edges.
        quantity: Number of identical pieces.
        material: Board material.
        edging: Sides that receive edge banding.
        edging_type: Edge-banding article group (e.g. "PVC_04").
        optional: Whether the part can be left out of a calculation.
        is_shelf: Explicit shelf marker; None falls back to name matching.
    """

    name: str
    length: DimensionValue
    width: DimensionValue
    quantity: int = 1
    material: MaterialType = MaterialType.LDSP
    edging: EdgingSides = EdgingSides()
    edging_type: str = DEFAULT_EDGING_TYPE
    optional: bool = False
    is_shelf: bool | None = None

    def __post_init__(self) -> None:
        if self.quantity < 1:
            raise ValueError("Part quantity must be at least 1")


@dataclass(frozen=True)
class FacadeSpec:
    """A front (door, drawer front or panel) of a module template."""

    name: str
    width: DimensionValue
    height: DimensionValue
    quantity: int = 1
    material: MaterialType = MaterialType.MDF
    edging_type: str = DEFAULT_EDGING_TYPE
    facade_type: FacadeType = FacadeType.DOOR
    optional: bool = False

    def __post_init__(self) -> None:
        if self.quantity < 1:
            raise ValueError("Facade quantity must be at least 1")


@dataclass(frozen=True)
class HardwareSpec:
    """Hardware fitted to a module (hinges, slides, handles, legs...)."""

    name: str
    article: str
    quantity: QuantityValue = FixedQuantity(1)
    unit: str = "pcs"
    category: HardwareCategory = HardwareCategory.OTHER
    price_per_unit: float = 0.0
    optional: bool = False

    def __post_init__(self) -> None:
        if self.price_per_unit < 0:
            raise ValueError("Price per unit cannot be negative")


@dataclass(frozen=True)
class FastenerSpec:
    """Fasteners (confirmats, dowels, screws) with a fixed quantity."""

    name: str
    article: str = ""
    quantity: float = 0
    unit: str = "pcs"
    price_per_unit: float = 0.0

    def __post_init__(self) -> None:
        if self.quantity < 0:
            raise ValueError("Fastener quantity cannot be negative")
        if self.price_per_unit < 0:
            raise ValueError("Price per unit cannot be negative")


@dataclass(frozen=True)
class OperationSpec:
    """A labour operation priced per unit.

    The quantity of the well-known operations (cutting, edging, assembly)
    is derived from the parts; any other operation uses ``quantity``.
    """

    id: str
    unit: str = "pcs"
    price_per_unit: float = 0.0
    quantity: float | None = None
    name: str = ""


@dataclass(frozen=True)
class ModuleTemplate:
    """A parametric furniture module as stored in a module library."""

    id: str
    code: str
    name: str
    category: ModuleCategory = ModuleCategory.LOWER
    default_sizes: ModuleSizes = ModuleSizes(600, 890, 560)
    corpus: CorpusSpec = CorpusSpec()
    details: tuple[PartSpec, ...] = ()
    facades: tuple[FacadeSpec, ...] = ()
    hardware: tuple[HardwareSpec, ...] = ()
    fasteners: tuple[FastenerSpec, ...] = ()
    operations: tuple[OperationSpec, ...] = ()
    notes: str = ""


@dataclass(frozen=True)
class ProjectItem:
    """One placement of a library module inside a project.

    Attributes:
        module_id: Identifier of the template in the module library.
        sizes: Override sizes; None uses the template defaults.
        quantity: How many identical instances are placed.
    """

    module_id: str
    sizes: ModuleSizes | None = None
    quantity: int = 1

    def __post_init__(self) -> None:
        if self.quantity < 0:
            raise ValueError("Instance quantity cannot be negative")


@dataclass(frozen=True)
class Project:
    """A kitchen project: an ordered list of module placements."""

    name: str
    items: tuple[ProjectItem, ...] = field(default_factory=tuple)
