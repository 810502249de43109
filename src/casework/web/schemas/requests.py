"""Pydantic request schemas for the REST API."""

from typing import Any

from pydantic import BaseModel, Field


class SizeOverridesSchema(BaseModel):
    """Optional size overrides in millimetres."""

    width: float | None = Field(default=None, gt=0, description="Module width")
    height: float | None = Field(default=None, gt=0, description="Module height")
    depth: float | None = Field(default=None, gt=0, description="Module depth")


class CalculateModuleRequest(BaseModel):
    """Request for calculating a single module."""

    module: dict[str, Any] = Field(..., description="Module template JSON")
    sizes: SizeOverridesSchema | None = Field(default=None, description="Size overrides")
    prices: dict[str, float] = Field(
        default_factory=dict, description="Unit price per article"
    )
    include_optional: bool = Field(default=True, description="Count optional items")
    waste_factor: float = Field(default=0.10, ge=0, le=1, description="Sheet waste allowance")


class CalculateProjectRequest(BaseModel):
    """Request for calculating a project against a module library."""

    library: dict[str, Any] | list[Any] = Field(..., description="Module library JSON")
    project: dict[str, Any] = Field(..., description="Project JSON")
    prices: dict[str, float] = Field(
        default_factory=dict, description="Unit price per article"
    )
    include_optional: bool = Field(default=True, description="Count optional items")


class LibraryValidateRequest(BaseModel):
    """Request for validating the formulas of a module library."""

    library: dict[str, Any] | list[Any] = Field(..., description="Module library JSON")
