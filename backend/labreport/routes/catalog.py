"""Template catalog API routes.

Read-only views of the analyte catalog used by the report editor: the list
of panel groups, a group's analytes (for bulk row instantiation) and single
template lookup for a typed analyte name.
"""

from fastapi import APIRouter, Depends, HTTPException, Query, status

from labreport.schemas.catalog import GroupAnalytesResponse, GroupListResponse, Template
from labreport.services.catalog import TemplateCatalog, get_catalog

router = APIRouter(prefix="/catalog", tags=["catalog"])


@router.get("/groups", response_model=GroupListResponse)
async def list_groups(catalog: TemplateCatalog = Depends(get_catalog)) -> GroupListResponse:
    """List panel/section names in catalog order."""
    return GroupListResponse(groups=catalog.list_groups())


@router.get("/groups/{group}/analytes", response_model=GroupAnalytesResponse)
async def list_group_analytes(
    group: str,
    catalog: TemplateCatalog = Depends(get_catalog),
) -> GroupAnalytesResponse:
    """List a group's analytes with their templates, in catalog order."""
    if group not in catalog:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"Unknown group: {group}",
        )
    return GroupAnalytesResponse(
        group=group.strip().upper(),
        analytes=catalog.list_analytes_for_group(group),
    )


@router.get("/templates", response_model=Template)
async def resolve_template(
    analyte: str = Query(..., description="Analyte name as typed"),
    section: str = Query("", description="Section name hint"),
    catalog: TemplateCatalog = Depends(get_catalog),
) -> Template:
    """Resolve the best-matching template for a typed analyte name.

    Tries an exact match in the section, then a substring match in the
    section, then an exact match in any section.
    """
    template = catalog.resolve_template(section, analyte)
    if template is None:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="No template matches",
        )
    return template
