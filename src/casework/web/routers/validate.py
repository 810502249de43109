"""Library formula validation endpoint."""

from fastapi import APIRouter, HTTPException

from casework.application.config import config_to_library, load_library_from_dict
from casework.web.dependencies import ValidateCommandDep
from casework.web.schemas.requests import LibraryValidateRequest
from casework.web.schemas.responses import FormulaIssueSchema, LibraryValidationSchema

router = APIRouter(prefix="/validate", tags=["validate"])


@router.post("", response_model=LibraryValidationSchema)
async def validate_library(
    request: LibraryValidateRequest,
    command: ValidateCommandDep,
) -> LibraryValidationSchema:
    """Check every formula of a module library without calculating it.

    Schema errors are returned as a 422 by the ConfigError handler; formula
    problems are listed in a 200 response.
    """
    try:
        library = config_to_library(load_library_from_dict(request.library))
    except ValueError as e:
        raise HTTPException(
            status_code=422,
            detail={"error": str(e), "error_type": "parse_error"},
        ) from e

    output = command.execute(library)
    return LibraryValidationSchema(
        is_valid=output.is_valid,
        modules_checked=len(output.results),
        errors=[
            FormulaIssueSchema(
                module_id=module_id,
                path=issue.path,
                formula=issue.formula,
                message=issue.message,
            )
            for module_id, result in output.results.items()
            for issue in result.errors
        ],
    )
