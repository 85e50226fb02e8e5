"""Report editing operations.

Pure functions over the report schemas: each takes the current section or
report and returns an updated copy. Wires together template resolution
(catalog), range resolution (reference_ranges) and derived values
(derived_values) the way the editing UI needs them:

- typing an analyte name enriches that row from the catalog
- editing a result recomputes derived values for that section only
- selecting a panel group replaces the section's rows with the group
- changing patient sex/age re-resolves every row of every section
"""

import logging
import re
from typing import get_args

from labreport.config import DEFAULT_PEDIATRIC_AGE_CUTOFF
from labreport.schemas.catalog import EntryType, Template
from labreport.schemas.report import (
    EditableField,
    PatientContext,
    Report,
    RowKind,
    Section,
    TestEntry,
)
from labreport.services.catalog import TemplateCatalog
from labreport.services.derived_values import recompute_derived
from labreport.services.reference_ranges import resolve_range

logger = logging.getLogger(__name__)

NAME_PREFIXES = ("Mr.", "Mrs.", "Ms.", "Miss.", "Dr.")
_PREFIX_RE = re.compile(
    r"^(?:" + "|".join(re.escape(p) for p in NAME_PREFIXES) + r")\s*",
    re.IGNORECASE,
)


# === Rows ===


def new_entry(row_kind: RowKind = RowKind.TEST) -> TestEntry:
    """A blank row with a fresh id."""
    return TestEntry(row_kind=row_kind)


def apply_template(
    entry: TestEntry,
    template: Template,
    patient: PatientContext,
    pediatric_cutoff: float = DEFAULT_PEDIATRIC_AGE_CUTOFF,
) -> TestEntry:
    """Copy template metadata onto a row, resolving the range for the patient.

    Specimen and method are only overwritten when the template has them.
    """
    update = {
        "units": template.units,
        "reference_range": resolve_range(
            template.reference_range, patient.sex, patient.age, pediatric_cutoff
        ),
    }
    if template.specimen:
        update["specimen"] = template.specimen
    if template.method:
        update["method"] = template.method
    return entry.model_copy(update=update)


def instantiate_group(
    catalog: TemplateCatalog,
    group: str,
    patient: PatientContext,
    pediatric_cutoff: float = DEFAULT_PEDIATRIC_AGE_CUTOFF,
) -> list[TestEntry]:
    """One row per catalog analyte of a group, headers flagged as note rows."""
    entries = []
    for analyte in catalog.list_analytes_for_group(group):
        template = analyte.template
        is_header = template.entry_type == EntryType.GROUP_HEADER
        entries.append(
            TestEntry(
                analyte_name=analyte.name,
                specimen=template.specimen or "",
                result=template.default_value or "",
                units=template.units,
                reference_range=resolve_range(
                    template.reference_range, patient.sex, patient.age, pediatric_cutoff
                ),
                method=template.method or "",
                is_header=is_header,
                row_kind=RowKind.NOTE if is_header else RowKind.TEST,
            )
        )
    return entries


# === Sections ===


def select_group(
    section: Section,
    group: str,
    catalog: TemplateCatalog,
    patient: PatientContext,
    pediatric_cutoff: float = DEFAULT_PEDIATRIC_AGE_CUTOFF,
) -> Section:
    """Replace a section's rows with a panel group's analytes."""
    entries = instantiate_group(catalog, group, patient, pediatric_cutoff)
    logger.debug("Instantiated group %r with %d rows", group, len(entries))
    return section.model_copy(update={"name": group, "report_group": group, "entries": entries})


def update_entry(
    section: Section,
    entry_id: str,
    field: str,
    value: str,
    catalog: TemplateCatalog,
    patient: PatientContext,
    pediatric_cutoff: float = DEFAULT_PEDIATRIC_AGE_CUTOFF,
) -> Section:
    """Set one field of one row and apply the follow-on effects.

    A non-blank analyte name pulls units, range, specimen and method from the
    catalog (section name as the lookup hint); unknown names keep whatever
    metadata the row had. A result edit triggers one derived-value pass over
    this section. An unknown entry_id leaves the section unchanged.

    Raises:
        ValueError: If field is not an editable text field.
    """
    if field not in get_args(EditableField):
        raise ValueError(f"Field {field!r} is not editable")

    entries = list(section.entries)
    for i, entry in enumerate(entries):
        if entry.id != entry_id:
            continue
        updated = entry.model_copy(update={field: value})
        if field == "analyte_name" and value.strip():
            template = catalog.resolve_template(section.name, value)
            if template is not None:
                updated = apply_template(updated, template, patient, pediatric_cutoff)
        entries[i] = updated
        break
    else:
        return section

    if field == "result":
        entries = recompute_derived(entries)
    return section.model_copy(update={"entries": entries})


def add_entry(section: Section, row_kind: RowKind = RowKind.TEST) -> Section:
    return section.model_copy(update={"entries": [*section.entries, new_entry(row_kind)]})


def add_note_row(section: Section) -> Section:
    return add_entry(section, RowKind.NOTE)


def remove_entry(section: Section, entry_id: str) -> Section:
    entries = [e for e in section.entries if e.id != entry_id]
    return section.model_copy(update={"entries": entries})


# === Reports ===


def add_section(report: Report) -> Report:
    section = Section(entries=[new_entry()])
    return report.model_copy(update={"sections": [*report.sections, section]})


def remove_section(report: Report, section_id: str) -> Report:
    sections = [s for s in report.sections if s.id != section_id]
    return report.model_copy(update={"sections": sections})


def _source_expression(section: Section, entry: TestEntry, catalog: TemplateCatalog) -> str | None:
    """Raw range expression a row was (or would be) filled from."""
    template = catalog.resolve_template(section.name, entry.analyte_name)
    if template is None or not template.reference_range:
        return None
    # Rows instantiated from a group keep that group's literal template
    if section.report_group:
        group_template = catalog.get(section.report_group, entry.analyte_name)
        if group_template is not None:
            return group_template.reference_range
    return template.reference_range


def apply_patient_context(
    report: Report,
    patient: PatientContext,
    catalog: TemplateCatalog,
    pediatric_cutoff: float = DEFAULT_PEDIATRIC_AGE_CUTOFF,
) -> Report:
    """Set the patient and re-resolve every row's range in every section.

    The patient name gets the honorific for the new sex. Note and header
    rows, blank names and names without a catalog template are left as they
    are.
    """
    sections = []
    changed = 0
    for section in report.sections:
        entries = []
        for entry in section.entries:
            if entry.is_computable and entry.analyte_name.strip():
                expression = _source_expression(section, entry, catalog)
                if expression is not None:
                    resolved = resolve_range(expression, patient.sex, patient.age, pediatric_cutoff)
                    if resolved != entry.reference_range:
                        entry = entry.model_copy(update={"reference_range": resolved})
                        changed += 1
            entries.append(entry)
        sections.append(section.model_copy(update={"entries": entries}))

    logger.debug("Patient context change re-resolved %d rows", changed)
    patient = patient.model_copy(update={"name": apply_name_prefix(patient.name, patient.sex)})
    return report.model_copy(update={"patient": patient, "sections": sections})


def apply_name_prefix(name: str, sex: str) -> str:
    """Replace any honorific with Mr. (Male) or Mrs. (Female).

    Other sexes get the bare name. Blank names are returned unchanged.
    """
    bare = _PREFIX_RE.sub("", name)
    if not bare.strip():
        return name
    if sex == "Male":
        return f"Mr. {bare}"
    if sex == "Female":
        return f"Mrs. {bare}"
    return bare
