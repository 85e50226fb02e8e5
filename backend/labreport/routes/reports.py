"""Report editing API routes.

Stateless: the client posts the current section or report and receives the
updated copy. Nothing is persisted here.
"""

from fastapi import APIRouter, Depends, HTTPException, status

from labreport.config import settings
from labreport.schemas.report import (
    AssessReportRequest,
    AssessReportResponse,
    EntriesPayload,
    EntryFlag,
    PatientChangeRequest,
    Report,
    Section,
    SelectGroupRequest,
    UpdateEntryRequest,
)
from labreport.services.catalog import TemplateCatalog, get_catalog
from labreport.services.derived_values import recompute_derived
from labreport.services.range_classification import assess_result
from labreport.services.report_form import apply_patient_context, select_group, update_entry

router = APIRouter(tags=["reports"])


@router.post("/sections/recompute", response_model=EntriesPayload)
async def recompute_section(payload: EntriesPayload) -> EntriesPayload:
    """Recompute derived analytes (VLDL, LDL, ratios, eAG, globulin...)."""
    return EntriesPayload(entries=recompute_derived(payload.entries))


@router.post("/sections/select-group", response_model=Section)
async def select_section_group(
    request: SelectGroupRequest,
    catalog: TemplateCatalog = Depends(get_catalog),
) -> Section:
    """Replace a section's rows with all analytes of a catalog group."""
    if request.group not in catalog:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"Unknown group: {request.group}",
        )
    return select_group(
        request.section,
        request.group,
        catalog,
        request.patient,
        settings.pediatric_age_cutoff,
    )


@router.post("/sections/update-entry", response_model=Section)
async def update_section_entry(
    request: UpdateEntryRequest,
    catalog: TemplateCatalog = Depends(get_catalog),
) -> Section:
    """Edit one field of one row, enriching names and recomputing on results."""
    if not any(entry.id == request.entry_id for entry in request.section.entries):
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Entry not found",
        )
    return update_entry(
        request.section,
        request.entry_id,
        request.field,
        request.value,
        catalog,
        request.patient,
        settings.pediatric_age_cutoff,
    )


@router.post("/reports/patient", response_model=Report)
async def change_patient(
    request: PatientChangeRequest,
    catalog: TemplateCatalog = Depends(get_catalog),
) -> Report:
    """Apply new patient sex/age and re-resolve every row's range."""
    return apply_patient_context(
        request.report,
        request.patient,
        catalog,
        settings.pediatric_age_cutoff,
    )


@router.post("/reports/assess", response_model=AssessReportResponse)
async def assess_report(request: AssessReportRequest) -> AssessReportResponse:
    """Flag each numeric result against its resolved range for printing."""
    flags: list[EntryFlag] = []
    for section in request.report.sections:
        for entry in section.entries:
            if not entry.is_computable:
                continue
            assessment = assess_result(entry.result, entry.reference_range)
            if assessment is None:
                continue
            flags.append(
                EntryFlag(
                    section_id=section.id,
                    entry_id=entry.id,
                    analyte_name=entry.analyte_name,
                    status=assessment.status,
                    is_abnormal=assessment.is_abnormal,
                )
            )
    return AssessReportResponse(flags=flags)
