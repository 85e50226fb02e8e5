"""Pydantic schemas."""

from labreport.schemas.catalog import (
    AnalyteTemplate,
    EntryType,
    GroupAnalytesResponse,
    GroupListResponse,
    Template,
)
from labreport.schemas.report import (
    PatientContext,
    RangeAssessment,
    RangeBounds,
    RangeStatus,
    Report,
    ResultComparison,
    RowKind,
    Section,
    TestEntry,
)

__all__ = [
    "AnalyteTemplate",
    "EntryType",
    "GroupAnalytesResponse",
    "GroupListResponse",
    "PatientContext",
    "RangeAssessment",
    "RangeBounds",
    "RangeStatus",
    "Report",
    "ResultComparison",
    "RowKind",
    "Section",
    "Template",
    "TestEntry",
]
