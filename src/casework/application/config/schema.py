"""Pydantic schemas for module library, project and price list files.

Module library files commonly use camelCase
keys (``defaultSizes``, ``edgingType``, ``pricePerUnit``...). Every such
field has a camelCase alias and also accepts its snake_case name.
"""

from pydantic import (
    BaseModel,
    ConfigDict,
    Field,
    field_validator,
    model_validator,
)

from casework.domain.value_objects import (
    DEFAULT_EDGING_TYPE,
    FacadeType,
    HardwareCategory,
    MaterialType,
    ModuleCategory,
)

# Supported schema versions for configuration files
# Version 1.0: Module libraries, projects and price lists
SUPPORTED_VERSIONS: frozenset[str] = frozenset({"1.0"})


class _Schema(BaseModel):
    model_config = ConfigDict(extra="forbid", populate_by_name=True)


def _check_version(value: str) -> str:
    if value not in SUPPORTED_VERSIONS:
        supported = ", ".join(sorted(SUPPORTED_VERSIONS))
        raise ValueError(f"Unsupported schema version {value!r} (supported: {supported})")
    return value


def _check_dimension(value: float | str) -> float | str:
    if isinstance(value, str):
        if not value.strip():
            raise ValueError("Dimension formula must not be empty")
        return value
    if value <= 0:
        raise ValueError("Dimension must be positive")
    return value


class SizesSchema(_Schema):
    """Overall module sizes in millimetres."""

    width: float = Field(gt=0)
    height: float = Field(gt=0)
    depth: float = Field(gt=0)


class BackWallSchema(_Schema):
    material: MaterialType = MaterialType.HDF
    thickness: float = Field(default=3, gt=0)


class CorpusSchema(_Schema):
    material: MaterialType = MaterialType.LDSP
    thickness: float = Field(default=19, gt=0)
    back_wall: BackWallSchema = Field(default_factory=BackWallSchema, alias="backWall")


class EdgingSchema(_Schema):
    """Edge-banded sides; accepts booleans or 0/1 flags."""

    top: bool = True
    bottom: bool = False
    left: bool = True
    right: bool = True


class PartSchema(_Schema):
    """A carcass detail.

    Attributes:
        length: Millimetres or a formula over width/height/depth/thickness.
        width: Millimetres or a formula over width/height/depth/thickness.
    """

    id: str | None = None
    name: str = Field(min_length=1)
    length: float | str
    width: float | str
    quantity: int = Field(default=1, ge=1)
    material: MaterialType = MaterialType.LDSP
    edging: EdgingSchema = Field(default_factory=EdgingSchema)
    edging_type: str = Field(default=DEFAULT_EDGING_TYPE, alias="edgingType")
    optional: bool = False
    is_shelf: bool | None = Field(default=None, alias="isShelf")
    notes: str = ""

    @field_validator("length", "width")
    @classmethod
    def dimension_valid(cls, v: float | str) -> float | str:
        return _check_dimension(v)


class FacadeSchema(_Schema):
    id: str | None = None
    name: str = Field(min_length=1)
    width: float | str
    height: float | str
    quantity: int = Field(default=1, ge=1)
    material: MaterialType = MaterialType.MDF
    edging_type: str = Field(default=DEFAULT_EDGING_TYPE, alias="edgingType")
    facade_type: FacadeType = Field(default=FacadeType.DOOR, alias="type")
    optional: bool = False
    notes: str = ""

    @field_validator("width", "height")
    @classmethod
    def dimension_valid(cls, v: float | str) -> float | str:
        return _check_dimension(v)


class HardwareSchema(_Schema):
    """Hardware item; ``formula`` wins over ``quantity`` when both are set."""

    id: str | None = None
    name: str = Field(min_length=1)
    article: str = ""
    quantity: float | str = 1
    formula: str | None = None
    unit: str = "pcs"
    category: HardwareCategory = HardwareCategory.OTHER
    price_per_unit: float = Field(default=0, ge=0, alias="pricePerUnit")
    optional: bool = False
    notes: str = ""

    @field_validator("quantity")
    @classmethod
    def quantity_not_negative(cls, v: float | str) -> float | str:
        if not isinstance(v, str) and v < 0:
            raise ValueError("Quantity must be >= 0")
        return v

    @model_validator(mode="after")
    def article_required(self) -> "HardwareSchema":
        if not self.article and not self.optional:
            raise ValueError(f"Hardware {self.name!r} needs an article")
        return self


class FastenerSchema(_Schema):
    id: str | None = None
    name: str = Field(min_length=1)
    article: str = ""
    quantity: float = Field(default=0, ge=0)
    unit: str = "pcs"
    price_per_unit: float = Field(default=0, ge=0, alias="pricePerUnit")
    notes: str = ""


class OperationSchema(_Schema):
    id: str = Field(min_length=1)
    name: str = ""
    unit: str = "pcs"
    price_per_unit: float = Field(default=0, ge=0, alias="pricePerUnit")
    quantity: float | None = Field(default=None, ge=0)


class ModuleSchema(_Schema):
    """A module template."""

    id: str = Field(min_length=1)
    code: str = Field(min_length=1)
    name: str = Field(min_length=1)
    category: ModuleCategory = ModuleCategory.LOWER
    default_sizes: SizesSchema = Field(
        default_factory=lambda: SizesSchema(width=600, height=890, depth=560),
        alias="defaultSizes",
    )
    corpus: CorpusSchema = Field(default_factory=CorpusSchema)
    details: list[PartSchema] = Field(default_factory=list)
    facades: list[FacadeSchema] = Field(default_factory=list)
    hardware: list[HardwareSchema] = Field(default_factory=list)
    fasteners: list[FastenerSchema] = Field(default_factory=list)
    operations: list[OperationSchema] = Field(default_factory=list)
    notes: str = ""
    created_at: str | None = Field(default=None, alias="createdAt")
    updated_at: str | None = Field(default=None, alias="updatedAt")


class SheetStockSchema(_Schema):
    """Sheet size a material is bought in, in millimetres."""

    material: MaterialType
    length: float = Field(gt=0)
    width: float = Field(gt=0)


class LibraryConfiguration(_Schema):
    """Root model of a module library file.

    Example:
        {
          "schema_version": "1.0",
          "modules": [{"id": "module_001", "code": "N1D", "name": "Base 1 door", ...}]
        }
    """

    schema_version: str = "1.0"
    waste_factor: float = Field(default=0.10, ge=0, le=1)
    sheet_stock: list[SheetStockSchema] | None = None
    modules: list[ModuleSchema] = Field(default_factory=list)

    @field_validator("schema_version")
    @classmethod
    def version_supported(cls, v: str) -> str:
        return _check_version(v)

    @model_validator(mode="after")
    def unique_module_ids(self) -> "LibraryConfiguration":
        seen: set[str] = set()
        for module in self.modules:
            if module.id in seen:
                raise ValueError(f"Duplicate module id: {module.id}")
            seen.add(module.id)
        return self


class ProjectItemSchema(_Schema):
    module_id: str = Field(min_length=1, alias="moduleId")
    sizes: SizesSchema | None = None
    quantity: int = Field(default=1, ge=0)


class ProjectConfiguration(_Schema):
    """Root model of a project file."""

    schema_version: str = "1.0"
    name: str = "Untitled project"
    modules: list[ProjectItemSchema] = Field(default_factory=list)

    @field_validator("schema_version")
    @classmethod
    def version_supported(cls, v: str) -> str:
        return _check_version(v)


class PriceSchema(_Schema):
    article: str = Field(min_length=1)
    price: float = Field(ge=0)
    name: str = ""
    last_updated: str | None = Field(default=None, alias="lastUpdated")


class PriceListConfiguration(_Schema):
    """Root model of a price list file."""

    schema_version: str = "1.0"
    prices: list[PriceSchema] = Field(default_factory=list)

    @field_validator("schema_version")
    @classmethod
    def version_supported(cls, v: str) -> str:
        return _check_version(v)

    def as_mapping(self) -> dict[str, float]:
        """Article to price; later entries win on duplicates."""
        return {entry.article: entry.price for entry in self.prices}
