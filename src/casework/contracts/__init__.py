"""Contracts module - protocols for cross-layer communication.

By depending on protocols rather than concrete implementations, the engine
stays independent of how templates and prices are stored.
"""

from .protocols import (
    ModuleCalculatorProtocol as ModuleCalculatorProtocol,
    PriceProviderProtocol as PriceProviderProtocol,
    TemplateLibraryProtocol as TemplateLibraryProtocol,
)

__all__ = [
    "ModuleCalculatorProtocol",
    "PriceProviderProtocol",
    "TemplateLibraryProtocol",
]
