"""Domain layer: the presentation- and storage-agnostic calculation engine."""

from .entities import (
    FacadeSpec,
    FastenerSpec,
    HardwareSpec,
    ModuleTemplate,
    OperationSpec,
    PartSpec,
    Project,
    ProjectItem,
)
from .errors import (
    CalculationError,
    FormulaArithmeticError,
    FormulaError,
    FormulaSyntaxError,
    HardwareQuantityError,
    MissingTemplateError,
    PartCalculationError,
    UnknownVariableError,
)
from .services import (
    ExpressionEvaluator,
    ModuleCalculation,
    ModuleCalculator,
    ProjectAggregator,
    ProjectCalculation,
)
from .value_objects import (
    BackWallSpec,
    CorpusSpec,
    EdgingSides,
    FacadeType,
    FixedDimension,
    FixedQuantity,
    FormulaDimension,
    FormulaQuantity,
    HardwareCategory,
    MaterialType,
    ModuleCategory,
    ModuleSizes,
    SheetStock,
)

__all__ = [
    "BackWallSpec",
    "CalculationError",
    "CorpusSpec",
    "EdgingSides",
    "ExpressionEvaluator",
    "FacadeSpec",
    "FacadeType",
    "FastenerSpec",
    "FixedDimension",
    "FixedQuantity",
    "FormulaArithmeticError",
    "FormulaDimension",
    "FormulaError",
    "FormulaQuantity",
    "FormulaSyntaxError",
    "HardwareCategory",
    "HardwareQuantityError",
    "HardwareSpec",
    "MaterialType",
    "MissingTemplateError",
    "ModuleCalculation",
    "ModuleCalculator",
    "ModuleCategory",
    "ModuleSizes",
    "ModuleTemplate",
    "OperationSpec",
    "PartCalculationError",
    "PartSpec",
    "Project",
    "ProjectAggregator",
    "ProjectCalculation",
    "ProjectItem",
    "SheetStock",
    "UnknownVariableError",
]
