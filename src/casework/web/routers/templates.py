"""Endpoints serving the bundled library, project and price list."""

import json
from typing import Any

from fastapi import APIRouter, Query

from casework.web.dependencies import TemplateManagerDep
from casework.web.schemas.responses import TemplateListItemSchema, TemplateListSchema

router = APIRouter(prefix="/templates", tags=["templates"])


@router.get("", response_model=TemplateListSchema)
async def list_templates(
    manager: TemplateManagerDep,
    kind: str | None = Query(default=None, description="library, project or prices"),
) -> TemplateListSchema:
    items = [
        TemplateListItemSchema(name=info.name, kind=info.kind, description=info.description)
        for info in manager.list_templates(kind)
    ]
    return TemplateListSchema(templates=items)


@router.get("/{name}")
async def get_template(name: str, manager: TemplateManagerDep) -> dict[str, Any]:
    """Parsed content of one template; unknown names answer 404."""
    return json.loads(manager.get_template(name))
