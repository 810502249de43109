"""Bundled sample library, project and price list."""

from casework.application.templates.manager import (
    TEMPLATE_KINDS,
    TEMPLATES,
    TemplateInfo,
    TemplateManager,
    TemplateNotFoundError,
)

__all__ = [
    "TEMPLATES",
    "TEMPLATE_KINDS",
    "TemplateInfo",
    "TemplateManager",
    "TemplateNotFoundError",
]
