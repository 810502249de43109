"""Error handlers mapping engine and configuration errors to JSON responses.

Every error body has the same shape: ``error`` (message), ``error_type``
and ``details``.
"""

import logging

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from casework.application.config import ConfigError
from casework.application.templates.manager import TemplateNotFoundError
from casework.domain.errors import (
    CalculationError,
    FormulaError,
    MissingTemplateError,
    PartCalculationError,
)

logger = logging.getLogger(__name__)


def _error(status_code: int, message: str, error_type: str, details: object = None) -> JSONResponse:
    return JSONResponse(
        status_code=status_code,
        content={"error": message, "error_type": error_type, "details": details},
    )


def register_exception_handlers(app: FastAPI) -> None:
    """Register custom exception handlers with the FastAPI app."""

    @app.exception_handler(ConfigError)
    async def config_error_handler(request: Request, exc: ConfigError) -> JSONResponse:
        return _error(422, exc.message, exc.error_type, exc.details or None)

    @app.exception_handler(MissingTemplateError)
    async def missing_template_handler(
        request: Request, exc: MissingTemplateError
    ) -> JSONResponse:
        return _error(404, str(exc), "not_found", {"module_id": exc.module_id})

    @app.exception_handler(TemplateNotFoundError)
    async def template_not_found_handler(
        request: Request, exc: TemplateNotFoundError
    ) -> JSONResponse:
        return _error(404, f"Template not found: {exc.name}", "not_found")

    @app.exception_handler(PartCalculationError)
    async def part_calculation_handler(
        request: Request, exc: PartCalculationError
    ) -> JSONResponse:
        return _error(
            422,
            str(exc),
            "part_calculation",
            {"part": exc.part_name, "field": exc.field, "formula": exc.cause.formula},
        )

    @app.exception_handler(FormulaError)
    async def formula_error_handler(request: Request, exc: FormulaError) -> JSONResponse:
        return _error(422, str(exc), "formula", {"formula": exc.formula})

    @app.exception_handler(CalculationError)
    async def calculation_error_handler(
        request: Request, exc: CalculationError
    ) -> JSONResponse:
        logger.warning(f"Calculation failed: {exc}")
        return _error(422, str(exc), "calculation")
