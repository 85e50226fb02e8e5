"""Pydantic schemas for report sections, test entries and patient context.

A report is an ordered list of sections; each section is an ordered list of
test entries. Entries are replaced (model_copy) rather than mutated in place,
so every engine operation returns new objects.
"""

import uuid
from enum import Enum
from typing import Literal

from pydantic import BaseModel, Field


def _new_id() -> str:
    return uuid.uuid4().hex


class RowKind(str, Enum):
    """Report row kind. Note rows carry free text only."""

    TEST = "test"
    NOTE = "note"


class TestEntry(BaseModel):
    """One row of a report section."""

    # Not a pytest test class despite the name
    __test__ = False

    id: str = Field(default_factory=_new_id)
    analyte_name: str = ""
    specimen: str = ""
    result: str = Field(default="", description="Free text, numeric-parseable or not")
    units: str = ""
    reference_range: str = Field(default="", description="Resolved display range")
    method: str = ""
    notes: str = ""
    row_kind: RowKind = RowKind.TEST
    is_header: bool = False

    @property
    def is_computable(self) -> bool:
        """Whether the row takes part in derived values and range resolution."""
        return self.row_kind == RowKind.TEST and not self.is_header


class Section(BaseModel):
    """A named group of entries reported together."""

    id: str = Field(default_factory=_new_id)
    name: str = ""
    report_group: str = Field(
        default="",
        description="Catalog group the rows were instantiated from, if any",
    )
    entries: list[TestEntry] = Field(default_factory=list)


class PatientContext(BaseModel):
    """Patient attributes that condition reference ranges."""

    name: str = Field(default="", description="Display name, prefixed Mr./Mrs. by sex")
    sex: str = Field(default="", description="'Male', 'Female' or free text")
    age: float | str | None = Field(
        default=None,
        description="Age in years; numeric-parseable strings are accepted",
    )


class Report(BaseModel):
    """A patient's report under construction."""

    patient: PatientContext = Field(default_factory=PatientContext)
    sections: list[Section] = Field(default_factory=list)


EditableField = Literal[
    "analyte_name",
    "specimen",
    "result",
    "units",
    "reference_range",
    "method",
    "notes",
]


# === Range classification ===


class RangeStatus(str, Enum):
    """Position of a numeric result relative to its reference bounds."""

    LOW = "Low"
    NORMAL = "Normal"
    HIGH = "High"


class RangeBounds(BaseModel):
    """Numeric bounds parsed from a resolved range text."""

    min: float
    max: float


class RangeAssessment(BaseModel):
    """Classification of a single result against its resolved range."""

    value: float
    bounds: RangeBounds
    status: RangeStatus

    @property
    def is_abnormal(self) -> bool:
        return self.status != RangeStatus.NORMAL


class ChartBar(BaseModel):
    """One bar of the result comparison chart."""

    name: str
    value: float
    label: str


class ResultComparison(BaseModel):
    """Chart data comparing a result with its reference span."""

    analyte_name: str
    units: str = ""
    bars: list[ChartBar]
    bounds: RangeBounds
    status: RangeStatus
    domain_min: float
    domain_max: float
    deviation: str | None = Field(
        default=None,
        description="e.g. '12.0 above maximum'; None when Normal",
    )


# === API request/response bodies ===


class ResolveRangeRequest(BaseModel):
    expression: str
    sex: str = ""
    age: float | str | None = None


class ResolveRangeResponse(BaseModel):
    reference_range: str


class ClassifyRequest(BaseModel):
    result: str
    reference_range: str


class ClassifyResponse(BaseModel):
    """Bounds and status are None when the range or result is not numeric."""

    bounds: RangeBounds | None = None
    status: RangeStatus | None = None


class CompareRequest(BaseModel):
    analyte_name: str
    result: str
    reference_range: str
    units: str = ""


class EntriesPayload(BaseModel):
    entries: list[TestEntry]


class SelectGroupRequest(BaseModel):
    section: Section
    group: str
    patient: PatientContext = Field(default_factory=PatientContext)


class UpdateEntryRequest(BaseModel):
    section: Section
    entry_id: str
    field: EditableField
    value: str
    patient: PatientContext = Field(default_factory=PatientContext)


class PatientChangeRequest(BaseModel):
    report: Report
    patient: PatientContext


class AssessReportRequest(BaseModel):
    report: Report


class EntryFlag(BaseModel):
    """Print-time flag for one entry."""

    section_id: str
    entry_id: str
    analyte_name: str
    status: RangeStatus
    is_abnormal: bool


class AssessReportResponse(BaseModel):
    flags: list[EntryFlag]
