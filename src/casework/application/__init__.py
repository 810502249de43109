"""Application layer - use cases and orchestration."""

from .commands import (
    CalculateCatalogCommand,
    CalculateModuleCommand,
    CalculateProjectCommand,
    ValidateLibraryCommand,
)
from .dtos import CatalogEntry, LibraryValidationOutput, SizesInput
from .pricing import PricedModuleCalculator, PricingService

__all__ = [
    "CalculateCatalogCommand",
    "CalculateModuleCommand",
    "CalculateProjectCommand",
    "CatalogEntry",
    "LibraryValidationOutput",
    "PricedModuleCalculator",
    "PricingService",
    "SizesInput",
    "ValidateLibraryCommand",
]
