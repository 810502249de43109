"""Infrastructure layer - storage adapters and formatters."""

from .formatters import (
    CatalogFormatter,
    HardwareReportFormatter,
    JsonExporter,
    MaterialReportFormatter,
    ModuleReportFormatter,
    PartListFormatter,
    ProjectReportFormatter,
    ValidationReportFormatter,
)
from .library import DictPriceList, InMemoryTemplateLibrary

__all__ = [
    "CatalogFormatter",
    "DictPriceList",
    "HardwareReportFormatter",
    "InMemoryTemplateLibrary",
    "JsonExporter",
    "MaterialReportFormatter",
    "ModuleReportFormatter",
    "PartListFormatter",
    "ProjectReportFormatter",
    "ValidationReportFormatter",
]
