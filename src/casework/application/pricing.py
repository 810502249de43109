"""Price list application.

The calculation engine never looks prices up. PricingService fills them in
around it: hardware and fastener unit prices are taken from the price list
before a module is calculated, and material and edging prices are attached
to the material totals afterwards.
"""

from __future__ import annotations

import logging
from dataclasses import replace
from typing import TYPE_CHECKING

from casework.domain.services import ModuleCalculator

if TYPE_CHECKING:
    from casework.contracts.protocols import ModuleCalculatorProtocol, PriceProviderProtocol
    from casework.domain.entities import ModuleTemplate
    from casework.domain.services import MaterialTotals, ModuleCalculation
    from casework.domain.value_objects import ModuleSizes

logger = logging.getLogger(__name__)


class PricingService:
    """Applies a price list to templates and module calculations.

    Articles are matched exactly. Hardware and fasteners use their article;
    a material bucket uses the material name (e.g. ``"LDSP"``) and is priced
    per sheet when the material has sheet stock, per m² otherwise; edge
    banding uses the edging type and is priced per metre.
    """

    def __init__(self, prices: PriceProviderProtocol) -> None:
        self.prices = prices

    def price_template(self, template: ModuleTemplate) -> ModuleTemplate:
        """Copy of ``template`` with listed hardware and fastener prices."""
        hardware = []
        for item in template.hardware:
            price = self.prices.price_for(item.article) if item.article else None
            hardware.append(item if price is None else replace(item, price_per_unit=price))
        fasteners = []
        for fastener in template.fasteners:
            price = self.prices.price_for(fastener.article) if fastener.article else None
            fasteners.append(
                fastener if price is None else replace(fastener, price_per_unit=price)
            )
        return replace(template, hardware=tuple(hardware), fasteners=tuple(fasteners))

    def price_materials(self, materials: MaterialTotals) -> MaterialTotals:
        bucket_prices = {}
        for material, bucket in materials.buckets.items():
            price = self.prices.price_for(material.value)
            if price is None:
                logger.debug(f"No price listed for material {material.value}")
                continue
            amount = bucket.sheets if bucket.sheets is not None else bucket.area
            bucket_prices[material] = amount * price
        edging_prices = {}
        for edging_type, edging in materials.edging.items():
            price = self.prices.price_for(edging_type)
            if price is None:
                logger.debug(f"No price listed for edging {edging_type}")
                continue
            edging_prices[edging_type] = edging.length * price
        return materials.with_prices(bucket_prices, edging_prices)

    def price_calculation(self, calculation: ModuleCalculation) -> ModuleCalculation:
        """Attach material and edging prices and update the material cost."""
        return calculation.with_materials(self.price_materials(calculation.materials))


class PricedModuleCalculator:
    """Module calculator that prices templates and results with a price list.

    Satisfies ModuleCalculatorProtocol, so it can be handed to the
    ProjectAggregator to price a whole project.
    """

    def __init__(
        self,
        pricing: PricingService,
        calculator: ModuleCalculatorProtocol | None = None,
    ) -> None:
        self.pricing = pricing
        self.calculator = calculator or ModuleCalculator()

    def calculate(
        self,
        template: ModuleTemplate,
        sizes: ModuleSizes | None = None,
        include_optional: bool = True,
    ) -> ModuleCalculation:
        calculation = self.calculator.calculate(
            self.pricing.price_template(template), sizes, include_optional=include_optional
        )
        return self.pricing.price_calculation(calculation)
