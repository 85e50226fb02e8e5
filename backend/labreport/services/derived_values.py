"""Derived (calculated) analyte values within one report section.

Some results are not entered but computed from other results in the same
section: lipid fractions and ratios, estimated average glucose, globulin and
enzyme ratios. recompute_derived() runs every formula once, in a fixed order,
so a value written by an earlier formula (VLDL) is visible to a later one
(LDL) within the same pass.

Rows are located through ANALYTE_ALIASES, a canonical key -> spellings table,
because catalogs spell the same analyte differently ("Cholesterol,HDL" vs
"HDL Cholesterol"). A row matches a key when its name equals one of the
key's spellings (case-insensitive); failing that, when its name contains one
of them, unless that spelling only occurs inside a longer spelling of a
different key (so "Non-HDL Cholesterol" is never read as HDL, "VLDL
Cholesterol" as LDL, nor "Albumin/Globulin Ratio" as Albumin).

Missing or non-numeric sources skip a formula entirely; its targets keep
whatever they held. Division by zero, or a result too large to be finite,
skips just that target. Only existing rows are written; no rows are ever
added.
"""

import logging
import math
from collections.abc import Callable, Mapping, Sequence
from dataclasses import dataclass

from labreport.schemas.report import TestEntry
from labreport.utils.numbers import format_fixed, parse_number

logger = logging.getLogger(__name__)

# ---------------------------------------------------------------------------
# Canonical analyte keys
# ---------------------------------------------------------------------------

TRIGLYCERIDES = "triglycerides"
TOTAL_CHOLESTEROL = "total_cholesterol"
HDL = "hdl"
LDL = "ldl"
VLDL = "vldl"
NON_HDL = "non_hdl"
CHOLESTEROL_HDL_RATIO = "cholesterol_hdl_ratio"
LDL_HDL_RATIO = "ldl_hdl_ratio"
HDL_LDL_RATIO = "hdl_ldl_ratio"
HBA1C = "hba1c"
EAG = "eag"
TOTAL_PROTEIN = "total_protein"
ALBUMIN = "albumin"
GLOBULIN = "globulin"
ALBUMIN_GLOBULIN_RATIO = "albumin_globulin_ratio"
AST = "ast"
ALT = "alt"
AST_ALT_RATIO = "ast_alt_ratio"

ANALYTE_ALIASES: dict[str, tuple[str, ...]] = {
    TRIGLYCERIDES: ("Triglycerides",),
    TOTAL_CHOLESTEROL: ("Cholesterol,Total", "Total Cholesterol", "Cholesterol Total"),
    HDL: ("Cholesterol,HDL", "HDL Cholesterol"),
    LDL: ("Cholesterol,LDL", "LDL Cholesterol"),
    VLDL: ("Cholesterol,VLDL", "VLDL Cholesterol"),
    NON_HDL: ("Non-HDLCholesterol", "Non-HDL Cholesterol"),
    CHOLESTEROL_HDL_RATIO: ("Cholesterol/HDLRatio", "Total Cholesterol/HDL Ratio"),
    LDL_HDL_RATIO: ("LDL/HDLRatio", "LDL/HDL Ratio"),
    HDL_LDL_RATIO: ("HDL/LDLRatio", "HDL/LDL Ratio"),
    HBA1C: ("HbA1c", "Glycosylated Haemoglobin (HbA1c)"),
    EAG: ("Estimated Average Glucose (eAG)", "eAG"),
    TOTAL_PROTEIN: ("TotalProtein.", "Total Protein"),
    ALBUMIN: ("Albumin.", "Albumin"),
    GLOBULIN: ("Globulin.", "Globulin"),
    ALBUMIN_GLOBULIN_RATIO: ("Albumin/Globulin", "Albumin/Globulin Ratio", "A/G Ratio"),
    AST: ("Aspartateaminotransferase(AST/SGOT)", "SGOT/AST"),
    ALT: ("Alanineaminotransferase(ALT/SGPT)", "SGPT/ALT"),
    AST_ALT_RATIO: ("SGOT/SGPT",),
}


# ---------------------------------------------------------------------------
# Formulas
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class DerivedFormula:
    """A calculation producing one or more target analytes.

    Attributes:
        name: Label used in logs.
        sources: Canonical keys that must all hold numeric values.
        compute: Maps source values to {target key: display text}. Targets
            omitted from the result (e.g. a zero divisor) are left untouched.
    """

    name: str
    sources: tuple[str, ...]
    compute: Callable[[Mapping[str, float]], dict[str, str]]


def _vldl(v: Mapping[str, float]) -> dict[str, str]:
    return {VLDL: format_fixed(v[TRIGLYCERIDES] / 5, 1)}


def _cholesterol_fractions(v: Mapping[str, float]) -> dict[str, str]:
    chol, hdl = v[TOTAL_CHOLESTEROL], v[HDL]
    out = {NON_HDL: format_fixed(chol - hdl, 1)}
    if hdl != 0:
        out[CHOLESTEROL_HDL_RATIO] = format_fixed(chol / hdl, 1)
    return out


def _ldl(v: Mapping[str, float]) -> dict[str, str]:
    return {LDL: format_fixed(v[TOTAL_CHOLESTEROL] - v[HDL] - v[VLDL], 1)}


def _ldl_hdl_ratios(v: Mapping[str, float]) -> dict[str, str]:
    ldl, hdl = v[LDL], v[HDL]
    out = {}
    if hdl != 0:
        out[LDL_HDL_RATIO] = format_fixed(ldl / hdl, 1)
    if ldl != 0:
        out[HDL_LDL_RATIO] = format_fixed(hdl / ldl, 1)
    return out


def _eag(v: Mapping[str, float]) -> dict[str, str]:
    return {EAG: format_fixed(28.7 * v[HBA1C] - 46.7, 0)}


def _globulin(v: Mapping[str, float]) -> dict[str, str]:
    albumin = v[ALBUMIN]
    globulin_text = format_fixed(v[TOTAL_PROTEIN] - albumin, 1)
    out = {GLOBULIN: globulin_text}
    # Ratio uses the globulin as displayed
    globulin = float(globulin_text)
    if globulin != 0 and math.isfinite(globulin):
        out[ALBUMIN_GLOBULIN_RATIO] = format_fixed(albumin / globulin, 1)
    return out


def _ast_alt_ratio(v: Mapping[str, float]) -> dict[str, str]:
    if v[ALT] == 0:
        return {}
    return {AST_ALT_RATIO: format_fixed(v[AST] / v[ALT], 1)}


DERIVED_FORMULAS: tuple[DerivedFormula, ...] = (
    DerivedFormula("VLDL", (TRIGLYCERIDES,), _vldl),
    DerivedFormula("Non-HDL / Cholesterol:HDL", (TOTAL_CHOLESTEROL, HDL), _cholesterol_fractions),
    DerivedFormula("LDL", (TOTAL_CHOLESTEROL, HDL, VLDL), _ldl),
    DerivedFormula("LDL:HDL / HDL:LDL", (LDL, HDL), _ldl_hdl_ratios),
    DerivedFormula("eAG", (HBA1C,), _eag),
    DerivedFormula("Globulin / A:G", (TOTAL_PROTEIN, ALBUMIN), _globulin),
    DerivedFormula("SGOT:SGPT", (AST, ALT), _ast_alt_ratio),
)


# ---------------------------------------------------------------------------
# Section pass
# ---------------------------------------------------------------------------


class SectionValues:
    """Alias-aware read/write access to one section's entries during a pass.

    Values written during the pass are remembered per key, so a later formula
    sees them even when the section has no row for that analyte.
    """

    def __init__(
        self,
        entries: Sequence[TestEntry],
        aliases: Mapping[str, tuple[str, ...]] = ANALYTE_ALIASES,
    ):
        self.entries: list[TestEntry] = list(entries)
        self._aliases = {key: tuple(a.lower() for a in spellings) for key, spellings in aliases.items()}
        self._written: dict[str, float] = {}

    def find_index(self, key: str) -> int | None:
        """Index of the row holding a canonical analyte, or None."""
        spellings = self._aliases.get(key, ())
        if not spellings:
            return None

        names = [
            entry.analyte_name.strip().lower() if entry.is_computable else None
            for entry in self.entries
        ]

        for i, name in enumerate(names):
            if name and name in spellings:
                return i

        foreign = {
            spelling
            for other, other_spellings in self._aliases.items()
            if other != key
            for spelling in other_spellings
        }
        for i, name in enumerate(names):
            if name and any(
                s in name and not any(s in f and f in name for f in foreign) for s in spellings
            ):
                return i
        return None

    def value_of(self, key: str) -> float | None:
        """Numeric value of an analyte, or None if absent or not numeric."""
        if key in self._written:
            return self._written[key]
        index = self.find_index(key)
        if index is None:
            return None
        return parse_number(self.entries[index].result)

    def set_value(self, key: str, text: str) -> bool:
        """Write a result into the analyte's row. Returns False if no row exists."""
        self._written[key] = float(text)
        index = self.find_index(key)
        if index is None:
            return False
        self.entries[index] = self.entries[index].model_copy(update={"result": text})
        return True


def recompute_derived(
    entries: Sequence[TestEntry],
    formulas: Sequence[DerivedFormula] = DERIVED_FORMULAS,
    aliases: Mapping[str, tuple[str, ...]] = ANALYTE_ALIASES,
) -> list[TestEntry]:
    """Recompute every derived analyte of a section in one ordered pass.

    Pure: the input sequence and its entries are not modified. Running it
    again on its own output yields identical results.

    Args:
        entries: The section's rows, in display order.
        formulas: Ordered formulas (override in tests).
        aliases: Canonical key -> spellings table.

    Returns:
        A new list of entries with derived results written.
    """
    values = SectionValues(entries, aliases)

    for formula in formulas:
        inputs: dict[str, float] = {}
        for key in formula.sources:
            value = values.value_of(key)
            if value is None:
                break
            inputs[key] = value
        else:
            for target, text in formula.compute(inputs).items():
                if parse_number(text) is None:
                    logger.debug("Derived %s: %s not finite, skipped", formula.name, target)
                    continue
                if values.set_value(target, text):
                    logger.debug("Derived %s: %s = %s", formula.name, target, text)

    return values.entries
