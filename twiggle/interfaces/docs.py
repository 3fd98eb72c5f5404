"""
Grouped OpenAPI documents.

Serves one OpenAPI document per documentation group, next to the full
document FastAPI publishes at ``/openapi.json``.
"""

from fastapi import APIRouter, HTTPException, Request

from twiggle.core.openapi import API_GROUPS, build_group_openapi, find_group
from twiggle.interfaces.schemas import ApiGroupItem

DOCS_PREFIX = "/v3/api-docs"

router = APIRouter(prefix=DOCS_PREFIX, tags=["docs"], include_in_schema=False)


@router.get("/groups", response_model=list[ApiGroupItem])
def list_groups() -> list[ApiGroupItem]:
    """List the documentation groups and their document URLs."""
    return [
        ApiGroupItem(name=group.name, url=f"{DOCS_PREFIX}/{group.slug}")
        for group in API_GROUPS
    ]


@router.get("/{slug}")
def group_document(slug: str, request: Request) -> dict:
    """Return the OpenAPI document of one group."""
    group = find_group(slug)
    if group is None:
        raise HTTPException(status_code=404)
    return build_group_openapi(request.app, group)
