"""Pydantic schemas for the REST API."""

from casework.web.schemas.requests import (
    CalculateModuleRequest,
    CalculateProjectRequest,
    LibraryValidateRequest,
    SizeOverridesSchema,
)
from casework.web.schemas.responses import (
    ErrorResponseSchema,
    LibraryValidationSchema,
    ModuleCalculationSchema,
    ProjectCalculationSchema,
    TemplateListSchema,
)

__all__ = [
    # Requests
    "CalculateModuleRequest",
    "CalculateProjectRequest",
    "LibraryValidateRequest",
    "SizeOverridesSchema",
    # Responses
    "ErrorResponseSchema",
    "LibraryValidationSchema",
    "ModuleCalculationSchema",
    "ProjectCalculationSchema",
    "TemplateListSchema",
]
