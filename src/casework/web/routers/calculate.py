"""Module and project calculation endpoints."""

from fastapi import APIRouter, HTTPException

from casework.application import CalculateModuleCommand, CalculateProjectCommand, SizesInput
from casework.application.config import (
    config_to_library,
    config_to_project,
    config_to_sheet_stock,
    load_library_from_dict,
    load_module_from_dict,
    load_project_from_dict,
    module_to_template,
)
from casework.domain import ModuleCalculator
from casework.domain.services import MaterialAggregator
from casework.infrastructure import DictPriceList, InMemoryTemplateLibrary
from casework.web.dependencies import ExporterDep
from casework.web.schemas.requests import CalculateModuleRequest, CalculateProjectRequest
from casework.web.schemas.responses import ModuleCalculationSchema, ProjectCalculationSchema

router = APIRouter(prefix="/calculate", tags=["calculate"])


def _prices(prices: dict[str, float]) -> DictPriceList | None:
    return DictPriceList(prices) if prices else None


@router.post("/module", response_model=ModuleCalculationSchema)
async def calculate_module(
    request: CalculateModuleRequest,
    exporter: ExporterDep,
) -> ModuleCalculationSchema:
    """Calculate one module posted as JSON.

    Raises:
        HTTPException: If the module cannot be converted to a template.
    """
    module = load_module_from_dict(request.module)
    try:
        template = module_to_template(module)
    except ValueError as e:
        raise HTTPException(
            status_code=422,
            detail={"error": str(e), "error_type": "parse_error"},
        ) from e

    sizes = request.sizes
    command = CalculateModuleCommand(
        prices=_prices(request.prices),
        module_calculator=ModuleCalculator(
            material_aggregator=MaterialAggregator(waste_factor=request.waste_factor)
        ),
    )
    calculation = command.execute(
        InMemoryTemplateLibrary([template]),
        template.id,
        SizesInput(
            width=sizes.width if sizes else None,
            height=sizes.height if sizes else None,
            depth=sizes.depth if sizes else None,
        ),
        include_optional=request.include_optional,
    )
    return ModuleCalculationSchema.model_validate(exporter.module_to_dict(calculation))


@router.post("/project", response_model=ProjectCalculationSchema)
async def calculate_project(
    request: CalculateProjectRequest,
    exporter: ExporterDep,
) -> ProjectCalculationSchema:
    """Calculate a project against a posted module library.

    Project items whose module is missing from the library are reported in
    ``warnings``.
    """
    library_config = load_library_from_dict(request.library)
    project_config = load_project_from_dict(request.project)
    try:
        library = config_to_library(library_config)
    except ValueError as e:
        raise HTTPException(
            status_code=422,
            detail={"error": str(e), "error_type": "parse_error"},
        ) from e

    command = CalculateProjectCommand(
        prices=_prices(request.prices),
        module_calculator=ModuleCalculator(
            material_aggregator=MaterialAggregator(
                sheet_stock=config_to_sheet_stock(library_config),
                waste_factor=library_config.waste_factor,
            )
        ),
    )
    calculation = command.execute(
        config_to_project(project_config),
        library,
        include_optional=request.include_optional,
    )
    return ProjectCalculationSchema.model_validate(exporter.project_to_dict(calculation))
