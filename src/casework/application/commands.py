"""Application commands (use cases) for module and project estimation."""

from __future__ import annotations

import concurrent.futures
import logging
from typing import TYPE_CHECKING

from casework.domain.errors import CalculationError, MissingTemplateError
from casework.domain.services import (
    FormulaValidator,
    ModuleCalculator,
    ProjectAggregator,
)

from .dtos import CatalogEntry, LibraryValidationOutput, SizesInput
from .pricing import PricedModuleCalculator, PricingService

if TYPE_CHECKING:
    from casework.contracts.protocols import (
        ModuleCalculatorProtocol,
        PriceProviderProtocol,
        TemplateLibraryProtocol,
    )
    from casework.domain.entities import ModuleTemplate, Project
    from casework.domain.services import ModuleCalculation, ProjectCalculation

logger = logging.getLogger(__name__)


def _calculator(
    prices: PriceProviderProtocol | None,
    calculator: ModuleCalculatorProtocol | None,
) -> ModuleCalculatorProtocol:
    if prices is None:
        return calculator or ModuleCalculator()
    return PricedModuleCalculator(PricingService(prices), calculator)


class CalculateModuleCommand:
    """Command to calculate one library module, optionally at new sizes."""

    def __init__(
        self,
        prices: PriceProviderProtocol | None = None,
        module_calculator: ModuleCalculatorProtocol | None = None,
    ) -> None:
        self.module_calculator = _calculator(prices, module_calculator)

    def execute(
        self,
        library: TemplateLibraryProtocol,
        module_id: str,
        sizes: SizesInput | None = None,
        include_optional: bool = True,
    ) -> ModuleCalculation:
        """Execute the module calculation.

        Args:
            library: Library holding the template.
            module_id: Template identifier.
            sizes: Overrides applied on top of the template's default sizes.
            include_optional: Whether optional parts and hardware count.

        Raises:
            MissingTemplateError: If the library has no such module.
            ValueError: If a size override is not positive.
            CalculationError: If the template cannot be calculated.
        """
        template = library.get(module_id)
        if template is None:
            raise MissingTemplateError(module_id)

        module_sizes = template.default_sizes
        if sizes is not None:
            errors = sizes.validate()
            if errors:
                raise ValueError("; ".join(errors))
            module_sizes = module_sizes.with_overrides(sizes.width, sizes.height, sizes.depth)

        return self.module_calculator.calculate(
            template, module_sizes, include_optional=include_optional
        )


class CalculateProjectCommand:
    """Command to calculate a project against a module library."""

    def __init__(
        self,
        prices: PriceProviderProtocol | None = None,
        module_calculator: ModuleCalculatorProtocol | None = None,
    ) -> None:
        self.aggregator = ProjectAggregator(_calculator(prices, module_calculator))

    def execute(
        self,
        project: Project,
        library: TemplateLibraryProtocol,
        include_optional: bool = True,
    ) -> ProjectCalculation:
        return self.aggregator.calculate(project, library, include_optional=include_optional)


class CalculateCatalogCommand:
    """Command to price every module of a library at its default sizes.

    Templates are calculated concurrently; the calculation services keep no
    shared state. A template that fails is reported in its entry instead of
    aborting the catalog.
    """

    def __init__(
        self,
        prices: PriceProviderProtocol | None = None,
        module_calculator: ModuleCalculatorProtocol | None = None,
        max_workers: int = 4,
    ) -> None:
        self.module_calculator = _calculator(prices, module_calculator)
        self.max_workers = max_workers

    def _entry(self, template: ModuleTemplate) -> CatalogEntry:
        entry = CatalogEntry(module_id=template.id, code=template.code, name=template.name)
        try:
            entry.total = self.module_calculator.calculate(template).costs.total
        except CalculationError as e:
            logger.warning(f"Catalog: module {template.id!r} failed: {e}")
            entry.error = str(e)
        return entry

    def execute(self, library: TemplateLibraryProtocol) -> list[CatalogEntry]:
        """Return one entry per template, in library order."""
        templates = library.all()
        with concurrent.futures.ThreadPoolExecutor(max_workers=self.max_workers) as executor:
            return list(executor.map(self._entry, templates))


class ValidateLibraryCommand:
    """Command to check every formula of every template in a library."""

    def __init__(self, validator: FormulaValidator | None = None) -> None:
        self.validator = validator or FormulaValidator()

    def execute(self, library: TemplateLibraryProtocol) -> LibraryValidationOutput:
        output = LibraryValidationOutput()
        for template in library.all():
            output.results[template.id] = self.validator.validate_template(template)
        return output
