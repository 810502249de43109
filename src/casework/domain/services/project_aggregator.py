"""Project-wide roll-up of module calculations.

Each placed module is calculated once and its results are scaled by the
instance quantity. Totals are merged by key (material, edging type, article,
operation id) with ``math.fsum``, so the result does not depend on the order
in which instances are merged.
"""

from __future__ import annotations

import logging
import math
from collections.abc import Iterable
from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from ..errors import MissingTemplateError
from .cost_aggregator import ModuleCosts
from .module_calculator import ModuleCalculation, ModuleCalculator

if TYPE_CHECKING:
    from ...contracts.protocols import ModuleCalculatorProtocol, TemplateLibraryProtocol
    from ..entities import ModuleTemplate, Project, ProjectItem
    from ..value_objects import MaterialType, ModuleSizes

__all__ = [
    "ArticleTotal",
    "EdgingSum",
    "MaterialSum",
    "OperationTotal",
    "ProjectAggregator",
    "ProjectCalculation",
    "ProjectInstance",
    "ProjectTotals",
    "ProjectWarning",
    "merge_totals",
]

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ProjectInstance:
    """A calculated placement of a module in a project."""

    item: ProjectItem
    template: ModuleTemplate
    calculation: ModuleCalculation

    @property
    def module_id(self) -> str:
        return self.item.module_id

    @property
    def sizes(self) -> ModuleSizes:
        return self.calculation.sizes

    @property
    def quantity(self) -> int:
        return self.item.quantity


@dataclass(frozen=True)
class ProjectWarning:
    """Non-fatal issue recorded while calculating a project.

    Attributes:
        message: Description of the warning condition.
        module_id: The project item the warning refers to, if any.
    """

    message: str
    module_id: str | None = None


@dataclass(frozen=True)
class MaterialSum:
    material: MaterialType
    area: float
    sheets: int | None
    price: float = 0.0


@dataclass(frozen=True)
class EdgingSum:
    edging_type: str
    length: float
    price: float = 0.0


@dataclass(frozen=True)
class ArticleTotal:
    """Hardware or fasteners of one article across the project."""

    article: str
    name: str
    unit: str
    quantity: float
    cost: float


@dataclass(frozen=True)
class OperationTotal:
    id: str
    unit: str
    quantity: float
    cost: float


@dataclass(frozen=True)
class ProjectTotals:
    """Totals over all instances, keyed and sorted by their merge keys."""

    materials: dict[MaterialType, MaterialSum] = field(default_factory=dict)
    edging: dict[str, EdgingSum] = field(default_factory=dict)
    hardware: dict[str, ArticleTotal] = field(default_factory=dict)
    fasteners: dict[str, ArticleTotal] = field(default_factory=dict)
    operations: dict[str, OperationTotal] = field(default_factory=dict)
    costs: ModuleCosts = field(default_factory=ModuleCosts)

    @property
    def edging_length(self) -> float:
        return math.fsum(e.length for e in self.edging.values())


@dataclass(frozen=True)
class ProjectCalculation:
    """Result of calculating a project."""

    name: str
    instances: tuple[ProjectInstance, ...]
    totals: ProjectTotals
    warnings: tuple[ProjectWarning, ...] = ()

    @property
    def has_warnings(self) -> bool:
        return bool(self.warnings)


class _Accumulator:
    """Collects scaled contributions per key; summed once at the end."""

    def __init__(self) -> None:
        self.values: dict[str, list[float]] = {}

    def add(self, key: str, value: float) -> None:
        self.values.setdefault(key, []).append(value)

    def total(self, key: str) -> float:
        return math.fsum(self.values.get(key, ()))


def _article_totals(
    entries: Iterable[tuple[str, str, str, float, float]],
) -> dict[str, ArticleTotal]:
    quantities = _Accumulator()
    costs = _Accumulator()
    names: dict[str, set[tuple[str, str]]] = {}
    for article, name, unit, quantity, cost in entries:
        quantities.add(article, quantity)
        costs.add(article, cost)
        names.setdefault(article, set()).add((name, unit))
    result: dict[str, ArticleTotal] = {}
    for article in sorted(names):
        # Same article may be named differently in different templates.
        name, unit = min(names[article])
        result[article] = ArticleTotal(
            article=article,
            name=name,
            unit=unit,
            quantity=quantities.total(article),
            cost=costs.total(article),
        )
    return result


def merge_totals(calculations: Iterable[tuple[ModuleCalculation, int]]) -> ProjectTotals:
    """Merge module calculations, each scaled by its instance quantity."""
    pairs = list(calculations)

    material_area = _Accumulator()
    material_price = _Accumulator()
    material_sheets: dict[MaterialType, int | None] = {}
    materials_seen: dict[str, MaterialType] = {}
    edging_length = _Accumulator()
    edging_price = _Accumulator()
    operation_qty = _Accumulator()
    operation_cost = _Accumulator()
    operation_units: dict[str, set[str]] = {}
    hardware_entries: list[tuple[str, str, str, float, float]] = []
    fastener_entries: list[tuple[str, str, str, float, float]] = []
    cost_parts: dict[str, list[float]] = {
        "materials": [], "hardware": [], "fasteners": [], "operations": []
    }

    for calc, qty in pairs:
        for material, bucket in calc.materials.buckets.items():
            materials_seen[material.value] = material
            material_area.add(material.value, bucket.area * qty)
            material_price.add(material.value, bucket.price * qty)
            if bucket.sheets is not None:
                material_sheets[material] = (material_sheets.get(material) or 0) + bucket.sheets * qty
            else:
                material_sheets.setdefault(material, None)
        for edging_type, edging in calc.materials.edging.items():
            edging_length.add(edging_type, edging.length * qty)
            edging_price.add(edging_type, edging.price * qty)
        for hw in calc.hardware:
            hardware_entries.append(
                (hw.article, hw.name, hw.spec.unit, hw.quantity * qty, hw.cost * qty)
            )
        for fastener in calc.fasteners:
            fastener_entries.append(
                (
                    fastener.article or fastener.name,
                    fastener.name,
                    fastener.spec.unit,
                    fastener.quantity * qty,
                    fastener.cost * qty,
                )
            )
        for operation in calc.operations:
            operation_qty.add(operation.id, operation.quantity * qty)
            operation_cost.add(operation.id, operation.cost * qty)
            operation_units.setdefault(operation.id, set()).add(operation.spec.unit)
        cost_parts["materials"].append(calc.costs.materials * qty)
        cost_parts["hardware"].append(calc.costs.hardware * qty)
        cost_parts["fasteners"].append(calc.costs.fasteners * qty)
        cost_parts["operations"].append(calc.costs.operations * qty)

    return ProjectTotals(
        materials={
            materials_seen[key]: MaterialSum(
                material=materials_seen[key],
                area=material_area.total(key),
                sheets=material_sheets[materials_seen[key]],
                price=material_price.total(key),
            )
            for key in sorted(materials_seen)
        },
        edging={
            key: EdgingSum(
                edging_type=key,
                length=edging_length.total(key),
                price=edging_price.total(key),
            )
            for key in sorted(edging_length.values)
        },
        hardware=_article_totals(hardware_entries),
        fasteners=_article_totals(fastener_entries),
        operations={
            key: OperationTotal(
                id=key,
                unit=min(operation_units[key]),
                quantity=operation_qty.total(key),
                cost=operation_cost.total(key),
            )
            for key in sorted(operation_qty.values)
        },
        costs=ModuleCosts(**{part: math.fsum(values) for part, values in cost_parts.items()}),
    )


class ProjectAggregator:
    """Calculates every placement of a project and merges the results."""

    def __init__(self, module_calculator: ModuleCalculatorProtocol | None = None) -> None:
        self.module_calculator = module_calculator or ModuleCalculator()

    def calculate(
        self,
        project: Project,
        library: TemplateLibraryProtocol,
        include_optional: bool = True,
    ) -> ProjectCalculation:
        """Calculate a project against a template library.

        Items whose template is missing from the library are skipped and
        reported in ``warnings``; the remaining items are still totalled.
        Formula errors in a found template propagate.
        """
        instances: list[ProjectInstance] = []
        warnings: list[ProjectWarning] = []

        for item in project.items:
            try:
                template = self._lookup(library, item.module_id)
            except MissingTemplateError as e:
                logger.warning(f"Skipping project item: {e}")
                warnings.append(ProjectWarning(message=str(e), module_id=item.module_id))
                continue
            calculation = self.module_calculator.calculate(
                template, item.sizes, include_optional=include_optional
            )
            instances.append(ProjectInstance(item=item, template=template, calculation=calculation))

        totals = merge_totals((i.calculation, i.quantity) for i in instances)
        logger.debug(
            f"Project {project.name!r}: {len(instances)} instances, "
            f"{len(warnings)} skipped, total {totals.costs.total:.2f}"
        )
        return ProjectCalculation(
            name=project.name,
            instances=tuple(instances),
            totals=totals,
            warnings=tuple(warnings),
        )

    def _lookup(self, library: TemplateLibraryProtocol, module_id: str) -> ModuleTemplate:
        template = library.get(module_id)
        if template is None:
            raise MissingTemplateError(module_id)
        return template
