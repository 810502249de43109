"""Pydantic response schemas for the REST API."""

from pydantic import BaseModel, Field


class SizesSchema(BaseModel):
    width: float
    height: float
    depth: float


class DetailResultSchema(BaseModel):
    """A calculated carcass part."""

    name: str
    material: str
    length: float = Field(..., description="Resolved length in mm")
    width: float = Field(..., description="Resolved width in mm")
    quantity: int
    area_one: float = Field(..., description="Area of one piece in m²")
    area_total: float = Field(..., description="Area of all pieces in m²")
    edging_one: float = Field(..., description="Edge banding of one piece in mm")
    edging_total: float = Field(..., description="Edge banding of all pieces in mm")
    cuts: int


class FacadeResultSchema(BaseModel):
    """A calculated front."""

    name: str
    type: str
    material: str
    width: float
    height: float
    quantity: int
    area_total: float
    perimeter_total: float = Field(..., description="Perimeter of all pieces in mm")


class ArticleResultSchema(BaseModel):
    """Hardware or fasteners of one article."""

    article: str
    name: str
    unit: str
    quantity: float
    price_per_unit: float | None = None
    cost: float


class MaterialResultSchema(BaseModel):
    material: str
    area: float = Field(..., description="Net area in m²")
    sheets: int | None = Field(default=None, description="Sheets to buy incl. waste")
    price: float


class EdgingResultSchema(BaseModel):
    edging_type: str
    length: float = Field(..., description="Edge banding in metres")
    price: float


class OperationResultSchema(BaseModel):
    id: str
    unit: str
    quantity: float
    price_per_unit: float | None = None
    cost: float


class CostsSchema(BaseModel):
    materials: float
    hardware: float
    fasteners: float
    operations: float
    total: float


class ModuleCalculationSchema(BaseModel):
    """Response for a module calculation."""

    module_id: str
    code: str
    name: str
    category: str
    sizes: SizesSchema
    details: list[DetailResultSchema] = Field(default_factory=list)
    facades: list[FacadeResultSchema] = Field(default_factory=list)
    hardware: list[ArticleResultSchema] = Field(default_factory=list)
    fasteners: list[ArticleResultSchema] = Field(default_factory=list)
    materials: list[MaterialResultSchema] = Field(default_factory=list)
    edging: list[EdgingResultSchema] = Field(default_factory=list)
    operations: list[OperationResultSchema] = Field(default_factory=list)
    costs: CostsSchema


class InstanceResultSchema(BaseModel):
    module_id: str
    quantity: int
    sizes: SizesSchema
    total: float = Field(..., description="Cost of one instance")


class ProjectWarningSchema(BaseModel):
    message: str
    module_id: str | None = None


class ProjectCalculationSchema(BaseModel):
    """Response for a project calculation."""

    name: str
    instances: list[InstanceResultSchema] = Field(default_factory=list)
    materials: list[MaterialResultSchema] = Field(default_factory=list)
    edging: list[EdgingResultSchema] = Field(default_factory=list)
    hardware: list[ArticleResultSchema] = Field(default_factory=list)
    fasteners: list[ArticleResultSchema] = Field(default_factory=list)
    operations: list[OperationResultSchema] = Field(default_factory=list)
    costs: CostsSchema
    warnings: list[ProjectWarningSchema] = Field(default_factory=list)


class FormulaIssueSchema(BaseModel):
    module_id: str
    path: str
    formula: str
    message: str


class LibraryValidationSchema(BaseModel):
    """Response for library validation."""

    is_valid: bool
    modules_checked: int
    errors: list[FormulaIssueSchema] = Field(default_factory=list)


class TemplateListItemSchema(BaseModel):
    name: str
    kind: str
    description: str


class TemplateListSchema(BaseModel):
    templates: list[TemplateListItemSchema] = Field(default_factory=list)


class ErrorResponseSchema(BaseModel):
    """Error body returned by every exception handler."""

    error: str
    error_type: str
    details: list[dict] | dict | None = None
