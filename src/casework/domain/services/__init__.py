"""Domain services for module calculation.

The services form a pipeline: formulas are evaluated by the
ExpressionEvaluator, parts are sized by the PartCalculator, hardware is
resolved against aggregate counts, and the MaterialAggregator,
OperationCostCalculator and CostAggregator roll everything up into a
ModuleCalculation. The ProjectAggregator merges module calculations.
"""

from __future__ import annotations

from .cost_aggregator import CostAggregator, ModuleCosts
from .dimension_resolver import DimensionResolver
from .expression import (
    BASE_VARIABLES,
    Environment,
    Evaluation,
    ExpressionEvaluator,
    base_environment,
    evaluate,
    extend_environment,
    round_half_away,
    tokenize,
)
from .formula_validator import FormulaIssue, FormulaValidationResult, FormulaValidator
from .hardware_resolver import (
    AGGREGATE_VARIABLES,
    CalculatedFastener,
    CalculatedHardware,
    HardwareResolver,
    ShelfMatcher,
    aggregate_variables,
)
from .material_aggregator import (
    DEFAULT_SHEET_STOCK,
    DEFAULT_WASTE_FACTOR,
    EdgingTotal,
    MaterialAggregator,
    MaterialBucket,
    MaterialTotals,
    sheets_required,
)
from .module_calculator import ModuleCalculation, ModuleCalculator
from .operation_calculator import (
    ASSEMBLY,
    CUTTING,
    EDGING,
    CalculatedOperation,
    OperationCostCalculator,
)
from .part_calculator import (
    CUTS_PER_PART,
    CalculatedFacade,
    CalculatedPart,
    PartCalculator,
    edging_length,
)
from .project_aggregator import (
    ArticleTotal,
    EdgingSum,
    MaterialSum,
    OperationTotal,
    ProjectAggregator,
    ProjectCalculation,
    ProjectInstance,
    ProjectTotals,
    ProjectWarning,
    merge_totals,
)

__all__ = [
    "AGGREGATE_VARIABLES",
    "ASSEMBLY",
    "ArticleTotal",
    "BASE_VARIABLES",
    "CUTS_PER_PART",
    "CUTTING",
    "CalculatedFacade",
    "CalculatedFastener",
    "CalculatedHardware",
    "CalculatedOperation",
    "CalculatedPart",
    "CostAggregator",
    "DEFAULT_SHEET_STOCK",
    "DEFAULT_WASTE_FACTOR",
    "DimensionResolver",
    "EDGING",
    "EdgingSum",
    "EdgingTotal",
    "Environment",
    "Evaluation",
    "ExpressionEvaluator",
    "FormulaIssue",
    "FormulaValidationResult",
    "FormulaValidator",
    "HardwareResolver",
    "MaterialAggregator",
    "MaterialBucket",
    "MaterialSum",
    "MaterialTotals",
    "ModuleCalculation",
    "ModuleCalculator",
    "ModuleCosts",
    "OperationCostCalculator",
    "OperationTotal",
    "PartCalculator",
    "ProjectAggregator",
    "ProjectCalculation",
    "ProjectInstance",
    "ProjectTotals",
    "ProjectWarning",
    "ShelfMatcher",
    "aggregate_variables",
    "base_environment",
    "edging_length",
    "evaluate",
    "extend_environment",
    "merge_totals",
    "round_half_away",
    "sheets_required",
    "tokenize",
]
