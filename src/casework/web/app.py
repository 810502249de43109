"""Application factory for the estimator REST API.

All routers are mounted under ``API_PREFIX``; ``/health`` stays at the root
for load balancers.
"""

from collections.abc import Sequence

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from casework import __version__
from casework.web.exceptions import register_exception_handlers
from casework.web.routers import calculate_router, templates_router, validate_router

API_PREFIX = "/api/v1"

ROUTERS = (calculate_router, validate_router, templates_router)


def create_app(cors_origins: Sequence[str] = ("*",)) -> FastAPI:
    """Build the API.

    Args:
        cors_origins: Origins allowed to call the API from a browser.
    """
    api = FastAPI(
        title="Casework Estimator API",
        description=(
            "Cut lists, edging, hardware and cost estimates for parametric "
            "furniture modules and whole kitchen projects"
        ),
        version=__version__,
    )
    api.add_middleware(
        CORSMiddleware,
        allow_origins=list(cors_origins),
        allow_methods=["GET", "POST"],
        allow_headers=["*"],
    )
    register_exception_handlers(api)

    for router in ROUTERS:
        api.include_router(router, prefix=API_PREFIX)

    @api.get("/health")
    async def health() -> dict[str, str]:
        return {"status": "healthy", "version": __version__}

    return api


# Instance served by uvicorn: uvicorn casework.web.app:app
app = create_app()
