"""Calculation of a single module template at given sizes."""

from __future__ import annotations

import logging
from dataclasses import dataclass, replace
from typing import TYPE_CHECKING

from .cost_aggregator import CostAggregator, ModuleCosts
from .dimension_resolver import DimensionResolver
from .expression import ExpressionEvaluator, base_environment
from .hardware_resolver import (
    CalculatedFastener,
    CalculatedHardware,
    HardwareResolver,
    ShelfMatcher,
)
from .material_aggregator import MaterialAggregator, MaterialTotals
from .operation_calculator import CalculatedOperation, OperationCostCalculator
from .part_calculator import CalculatedFacade, CalculatedPart, PartCalculator

if TYPE_CHECKING:
    from ..entities import ModuleTemplate
    from ..value_objects import ModuleSizes

__all__ = ["ModuleCalculation", "ModuleCalculator"]

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ModuleCalculation:
    """Everything computed for one module at one set of sizes."""

    template: ModuleTemplate
    sizes: ModuleSizes
    details: tuple[CalculatedPart, ...]
    facades: tuple[CalculatedFacade, ...]
    hardware: tuple[CalculatedHardware, ...]
    fasteners: tuple[CalculatedFastener, ...]
    materials: MaterialTotals
    operations: tuple[CalculatedOperation, ...]
    costs: ModuleCosts

    def with_materials(self, materials: MaterialTotals) -> ModuleCalculation:
        """Copy with new (typically priced) material totals and updated costs."""
        return replace(
            self,
            materials=materials,
            costs=replace(self.costs, materials=materials.price),
        )


class ModuleCalculator:
    """Runs the full per-module pipeline.

    Sizes and corpus thickness form the base environment; details and
    facades are resolved against it, hardware against it extended with
    aggregate counts, and the results are rolled up into materials,
    operations and costs.
    """

    def __init__(
        self,
        evaluator: ExpressionEvaluator | None = None,
        material_aggregator: MaterialAggregator | None = None,
        operation_calculator: OperationCostCalculator | None = None,
        cost_aggregator: CostAggregator | None = None,
        shelf_matcher: ShelfMatcher | None = None,
    ) -> None:
        self.evaluator = evaluator or ExpressionEvaluator()
        self.part_calculator = PartCalculator(DimensionResolver(self.evaluator))
        self.hardware_resolver = HardwareResolver(
            evaluator=self.evaluator,
            shelf_matcher=shelf_matcher or ShelfMatcher(),
        )
        self.material_aggregator = material_aggregator or MaterialAggregator()
        self.operation_calculator = operation_calculator or OperationCostCalculator()
        self.cost_aggregator = cost_aggregator or CostAggregator()

    def calculate(
        self,
        template: ModuleTemplate,
        sizes: ModuleSizes | None = None,
        include_optional: bool = True,
    ) -> ModuleCalculation:
        """Calculate a module template.

        Args:
            template: The module template.
            sizes: Override sizes; the template defaults when None.
            include_optional: Whether optional parts and hardware are counted.

        Returns:
            The complete ModuleCalculation.

        Raises:
            PartCalculationError: A detail or facade dimension failed.
            FormulaError: A hardware quantity formula failed.
            HardwareQuantityError: A hardware quantity resolved negative.
        """
        sizes = sizes or template.default_sizes
        env = base_environment(sizes, template.corpus)
        logger.debug(f"Calculating module {template.id!r} with {dict(env)}")

        detail_specs = [d for d in template.details if include_optional or not d.optional]
        facade_specs = [f for f in template.facades if include_optional or not f.optional]
        hardware_specs = [h for h in template.hardware if include_optional or not h.optional]

        details = self.part_calculator.calculate_details(detail_specs, env)
        facades = self.part_calculator.calculate_facades(facade_specs, env)
        hardware = self.hardware_resolver.resolve_all(hardware_specs, env, details, facades)
        fasteners = self.hardware_resolver.resolve_fasteners(template.fasteners)
        materials = self.material_aggregator.aggregate(details, facades)
        operations = self.operation_calculator.calculate(template.operations, details, facades)
        costs = self.cost_aggregator.aggregate(materials, hardware, fasteners, operations)

        logger.debug(
            f"Module {template.id!r}: {len(details)} details, {len(facades)} facades, "
            f"total {costs.total:.2f}"
        )
        return ModuleCalculation(
            template=template,
            sizes=sizes,
            details=tuple(details),
            facades=tuple(facades),
            hardware=tuple(hardware),
            fasteners=tuple(fasteners),
            materials=materials,
            operations=tuple(operations),
            costs=costs,
        )
