"""Configuration schema and loading for module libraries, projects and prices.

Public API:
    - LibraryConfiguration: Root model of a module library file
    - ProjectConfiguration: Root model of a project file
    - PriceListConfiguration: Root model of a price list file
    - load_library / load_project / load_prices: Load a file from disk
    - load_*_from_dict: Validate already-parsed JSON data
    - ConfigError: Exception for configuration errors
    - config_to_*: Convert validated configuration to domain objects

Example:
    >>> from pathlib import Path
    >>> from casework.application.config import ConfigError, load_library
    >>>
    >>> try:
    ...     config = load_library(Path("kitchen.json"))
    ...     print(f"{len(config.modules)} modules")
    ... except ConfigError as e:
    ...     print(f"Error: {e}")
"""

from casework.application.config.adapter import (
    config_to_library,
    config_to_price_mapping,
    config_to_project,
    config_to_sheet_stock,
    config_to_templates,
    module_to_template,
    sizes_to_domain,
)
from casework.application.config.loader import (
    ConfigError,
    load_library,
    load_library_from_dict,
    load_module_from_dict,
    load_prices,
    load_prices_from_dict,
    load_project,
    load_project_from_dict,
)
from casework.application.config.schema import (
    SUPPORTED_VERSIONS,
    BackWallSchema,
    CorpusSchema,
    EdgingSchema,
    FacadeSchema,
    FastenerSchema,
    HardwareSchema,
    LibraryConfiguration,
    ModuleSchema,
    OperationSchema,
    PartSchema,
    PriceListConfiguration,
    PriceSchema,
    ProjectConfiguration,
    ProjectItemSchema,
    SheetStockSchema,
    SizesSchema,
)

__all__ = [
    "SUPPORTED_VERSIONS",
    "BackWallSchema",
    "ConfigError",
    "CorpusSchema",
    "EdgingSchema",
    "FacadeSchema",
    "FastenerSchema",
    "HardwareSchema",
    "LibraryConfiguration",
    "ModuleSchema",
    "OperationSchema",
    "PartSchema",
    "PriceListConfiguration",
    "PriceSchema",
    "ProjectConfiguration",
    "ProjectItemSchema",
    "SheetStockSchema",
    "SizesSchema",
    "config_to_library",
    "config_to_price_mapping",
    "config_to_project",
    "config_to_sheet_stock",
    "config_to_templates",
    "load_library",
    "load_library_from_dict",
    "load_module_from_dict",
    "load_prices",
    "load_prices_from_dict",
    "load_project",
    "load_project_from_dict",
    "module_to_template",
    "sizes_to_domain",
]
