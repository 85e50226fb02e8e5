"""Reference range API routes.

Resolve a combined range expression for a patient, and classify or chart a
result against an already-resolved range.
"""

from fastapi import APIRouter

from labreport.config import settings
from labreport.schemas.report import (
    ClassifyRequest,
    ClassifyResponse,
    CompareRequest,
    ResolveRangeRequest,
    ResolveRangeResponse,
    ResultComparison,
)
from labreport.services.range_classification import assess_result, build_comparison
from labreport.services.reference_ranges import resolve_range

router = APIRouter(prefix="/ranges", tags=["ranges"])


@router.post("/resolve", response_model=ResolveRangeResponse)
async def resolve(request: ResolveRangeRequest) -> ResolveRangeResponse:
    """Pick the sex/age-appropriate sub-range of an expression."""
    resolved = resolve_range(
        request.expression,
        request.sex,
        request.age,
        settings.pediatric_age_cutoff,
    )
    return ResolveRangeResponse(reference_range=resolved)


@router.post("/classify", response_model=ClassifyResponse)
async def classify(request: ClassifyRequest) -> ClassifyResponse:
    """Classify a numeric result as Low/Normal/High.

    Fields are null when the result is not numeric or the range has no
    numeric bounds.
    """
    assessment = assess_result(request.result, request.reference_range)
    if assessment is None:
        return ClassifyResponse()
    return ClassifyResponse(bounds=assessment.bounds, status=assessment.status)


@router.post("/compare", response_model=ResultComparison | None)
async def compare(request: CompareRequest) -> ResultComparison | None:
    """Chart data comparing a result with its reference span, or null."""
    return build_comparison(
        request.analyte_name,
        request.result,
        request.reference_range,
        request.units,
    )
