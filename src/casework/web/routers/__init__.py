"""API routers for the REST API."""

from casework.web.routers.calculate import router as calculate_router
from casework.web.routers.templates import router as templates_router
from casework.web.routers.validate import router as validate_router

__all__ = [
    "calculate_router",
    "templates_router",
    "validate_router",
]
