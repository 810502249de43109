"""FastAPI dependency injection for estimator services."""

from typing import Annotated

from fastapi import Depends

from casework.application import ValidateLibraryCommand
from casework.application.templates.manager import TemplateManager
from casework.infrastructure import JsonExporter


def get_template_manager() -> TemplateManager:
    """Dependency for TemplateManager."""
    return TemplateManager()


def get_validate_command() -> ValidateLibraryCommand:
    return ValidateLibraryCommand()


def get_exporter() -> JsonExporter:
    return JsonExporter()


TemplateManagerDep = Annotated[TemplateManager, Depends(get_template_manager)]
ValidateCommandDep = Annotated[ValidateLibraryCommand, Depends(get_validate_command)]
ExporterDep = Annotated[JsonExporter, Depends(get_exporter)]
