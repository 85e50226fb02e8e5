"""Pydantic schemas for the analyte template catalog.

Templates are read-only metadata used to enrich a report row when an analyte
name is typed or a panel group is selected.
"""

from enum import Enum

from pydantic import BaseModel, ConfigDict, Field


class EntryType(str, Enum):
    """Kind of catalog row."""

    TEST = "test"
    GROUP_HEADER = "group_header"


class Template(BaseModel):
    """Metadata for one analyte within a panel/section."""

    model_config = ConfigDict(frozen=True)

    units: str = Field(default="", description="Display units (e.g. 'mg/dL')")
    reference_range: str = Field(
        default="",
        description="Raw range expression, may embed sex/age clauses",
    )
    specimen: str | None = Field(default=None, description="Specimen (e.g. 'Serum')")
    method: str | None = Field(default=None, description="Assay method")
    clinical_note: str | None = Field(default=None, description="Interpretive note")
    entry_type: EntryType = Field(default=EntryType.TEST)
    default_value: str | None = Field(
        default=None,
        description="Result pre-filled when the group is instantiated",
    )


class AnalyteTemplate(BaseModel):
    """An analyte name paired with its template, in catalog order."""

    model_config = ConfigDict(frozen=True)

    name: str
    template: Template


class GroupListResponse(BaseModel):
    """Ordered panel/section names."""

    groups: list[str]


class GroupAnalytesResponse(BaseModel):
    """Analytes of one panel/section, in catalog order."""

    group: str
    analytes: list[AnalyteTemplate]
