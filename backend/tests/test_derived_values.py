"""Tests for the derived-value computation engine."""

import pytest

from labreport.schemas.report import RowKind
from labreport.services.derived_values import (
    ANALYTE_ALIASES,
    DERIVED_FORMULAS,
    HDL,
    LDL,
    NON_HDL,
    VLDL,
    DerivedFormula,
    SectionValues,
    recompute_derived,
)
from tests.conftest import make_entry, make_note


def results(entries) -> dict[str, str]:
    return {e.analyte_name: e.result for e in entries}


def lipid_panel(**values: str):
    names = [
        "Cholesterol,Total",
        "Triglycerides",
        "Cholesterol,HDL",
        "Cholesterol,LDL",
        "Cholesterol,VLDL",
        "Non-HDLCholesterol",
        "Cholesterol/HDLRatio",
        "LDL/HDLRatio",
        "HDL/LDLRatio",
    ]
    return [make_entry(name, values.get(name, "")) for name in names]


# ── Lipid profile ────────────────────────────────────────────────────────


class TestLipidFormulas:
    def test_vldl_from_triglycerides(self):
        out = results(recompute_derived(lipid_panel(Triglycerides="250")))
        assert out["Cholesterol,VLDL"] == "50.0"

    def test_full_lipid_panel(self):
        entries = lipid_panel(**{"Triglycerides": "250", "Cholesterol,Total": "200", "Cholesterol,HDL": "50"})
        out = results(recompute_derived(entries))
        assert out["Cholesterol,VLDL"] == "50.0"
        assert out["Non-HDLCholesterol"] == "150.0"
        assert out["Cholesterol/HDLRatio"] == "4.0"
        assert out["Cholesterol,LDL"] == "100.0"
        assert out["LDL/HDLRatio"] == "2.0"
        assert out["HDL/LDLRatio"] == "0.5"

    def test_alternate_spellings(self):
        entries = [
            make_entry("Total Cholesterol", "180"),
            make_entry("HDL Cholesterol", "45"),
            make_entry("Triglycerides", "150"),
            make_entry("VLDL Cholesterol"),
            make_entry("LDL Cholesterol"),
            make_entry("Non-HDL Cholesterol"),
            make_entry("Total Cholesterol/HDL Ratio"),
            make_entry("LDL/HDL Ratio"),
            make_entry("HDL/LDL Ratio"),
        ]
        out = results(recompute_derived(entries))
        assert out["VLDL Cholesterol"] == "30.0"
        assert out["Non-HDL Cholesterol"] == "135.0"
        assert out["Total Cholesterol/HDL Ratio"] == "4.0"
        assert out["LDL Cholesterol"] == "105.0"
        assert out["LDL/HDL Ratio"] == "2.3"
        assert out["HDL/LDL Ratio"] == "0.4"
        # Sources are never overwritten
        assert out["Total Cholesterol"] == "180"
        assert out["HDL Cholesterol"] == "45"

    def test_non_hdl_row_before_hdl_row(self):
        # "Non-HDL Cholesterol" contains "HDL Cholesterol" but must not be read as HDL
        entries = [
            make_entry("Non-HDL Cholesterol", "999"),
            make_entry("Total Cholesterol", "200"),
            make_entry("HDL Cholesterol", "50"),
        ]
        out = results(recompute_derived(entries))
        assert out["Non-HDL Cholesterol"] == "150.0"

    def test_vldl_row_not_read_as_ldl(self):
        entries = [
            make_entry("VLDL Cholesterol", "30"),
            make_entry("HDL Cholesterol", "50"),
            make_entry("LDL/HDL Ratio"),
        ]
        out = results(recompute_derived(entries))
        assert out["LDL/HDL Ratio"] == ""

    def test_substring_spelling(self):
        entries = [make_entry("Serum Triglycerides", "100"), make_entry("Cholesterol,VLDL")]
        assert results(recompute_derived(entries))["Cholesterol,VLDL"] == "20.0"

    def test_ldl_uses_existing_vldl_without_triglycerides(self):
        entries = lipid_panel(**{"Cholesterol,Total": "200", "Cholesterol,HDL": "50", "Cholesterol,VLDL": "30"})
        out = results(recompute_derived(entries))
        assert out["Cholesterol,VLDL"] == "30"
        assert out["Cholesterol,LDL"] == "120.0"

    def test_ldl_uses_fresh_vldl_without_vldl_row(self):
        entries = [
            make_entry("Cholesterol,Total", "200"),
            make_entry("Cholesterol,HDL", "50"),
            make_entry("Triglycerides", "100"),
            make_entry("Cholesterol,LDL"),
        ]
        assert results(recompute_derived(entries))["Cholesterol,LDL"] == "130.0"

    def test_ldl_skipped_without_any_vldl(self):
        entries = [
            make_entry("Cholesterol,Total", "200"),
            make_entry("Cholesterol,HDL", "50"),
            make_entry("Cholesterol,LDL", "111"),
        ]
        assert results(recompute_derived(entries))["Cholesterol,LDL"] == "111"

    def test_ratios_from_entered_ldl(self):
        entries = [
            make_entry("Cholesterol,HDL", "40"),
            make_entry("Cholesterol,LDL", "120"),
            make_entry("LDL/HDLRatio"),
            make_entry("HDL/LDLRatio"),
        ]
        out = results(recompute_derived(entries))
        assert out["LDL/HDLRatio"] == "3.0"
        assert out["HDL/LDLRatio"] == "0.3"


# ── Missing-input and division guards ────────────────────────────────────


class TestGuards:
    def test_missing_triglycerides_leaves_vldl(self):
        entries = lipid_panel(**{"Cholesterol,VLDL": "33.3"})
        assert results(recompute_derived(entries))["Cholesterol,VLDL"] == "33.3"

    def test_non_numeric_source_skips(self):
        entries = lipid_panel(**{"Triglycerides": "pending", "Cholesterol,VLDL": "old"})
        assert results(recompute_derived(entries))["Cholesterol,VLDL"] == "old"

    def test_partial_sources_never_write(self):
        entries = lipid_panel(**{"Cholesterol,Total": "200", "Non-HDLCholesterol": "x"})
        out = results(recompute_derived(entries))
        assert out["Non-HDLCholesterol"] == "x"
        assert out["Cholesterol/HDLRatio"] == ""

    def test_zero_hdl(self):
        entries = lipid_panel(**{
            "Cholesterol,Total": "200",
            "Cholesterol,HDL": "0",
            "Cholesterol/HDLRatio": "prior",
            "LDL/HDLRatio": "prior",
        })
        out = results(recompute_derived(entries))
        assert out["Non-HDLCholesterol"] == "200.0"
        assert out["Cholesterol/HDLRatio"] == "prior"
        assert out["LDL/HDLRatio"] == "prior"

    def test_zero_ldl(self):
        entries = [
            make_entry("Cholesterol,HDL", "50"),
            make_entry("Cholesterol,LDL", "0"),
            make_entry("LDL/HDLRatio"),
            make_entry("HDL/LDLRatio", "prior"),
        ]
        out = results(recompute_derived(entries))
        assert out["LDL/HDLRatio"] == "0.0"
        assert out["HDL/LDLRatio"] == "prior"

    def test_zero_alt(self):
        entries = [
            make_entry("SGOT/AST", "40"),
            make_entry("SGPT/ALT", "0"),
            make_entry("SGOT/SGPT", "prior"),
        ]
        assert results(recompute_derived(entries))["SGOT/SGPT"] == "prior"

    def test_zero_globulin(self):
        entries = [
            make_entry("Total Protein", "4.0"),
            make_entry("Albumin", "4.0"),
            make_entry("Globulin"),
            make_entry("A/G Ratio", "prior"),
        ]
        out = results(recompute_derived(entries))
        assert out["Globulin"] == "0.0"
        assert out["A/G Ratio"] == "prior"

    def test_huge_source_value(self):
        entries = [make_entry("Triglycerides", "1e60"), make_entry("Cholesterol,VLDL", "30.0")]
        vldl = results(recompute_derived(entries))["Cholesterol,VLDL"]
        assert float(vldl) == pytest.approx(2e59)

    def test_overflowing_target_skipped(self):
        entries = [
            make_entry("Cholesterol,Total", "1e308"),
            make_entry("Cholesterol,HDL", "-1e308"),
            make_entry("Non-HDLCholesterol", "prior"),
            make_entry("Cholesterol/HDLRatio"),
        ]
        out = results(recompute_derived(entries))
        assert out["Non-HDLCholesterol"] == "prior"
        assert out["Cholesterol/HDLRatio"] == "-1.0"

    def test_never_adds_rows(self):
        entries = [make_entry("Triglycerides", "250")]
        out = recompute_derived(entries)
        assert len(out) == 1
        assert out[0].result == "250"

    def test_note_and_header_rows_ignored(self):
        entries = [
            make_note("Triglycerides"),
            make_entry("Triglycerides", "999", is_header=True),
            make_entry("Triglycerides", "100"),
            make_entry("Cholesterol,VLDL", "", row_kind=RowKind.NOTE),
            make_entry("Cholesterol,VLDL"),
        ]
        out = recompute_derived(entries)
        assert [e.result for e in out] == ["", "999", "100", "", "20.0"]


# ── Diabetes, LFT, enzymes ───────────────────────────────────────────────


class TestOtherPanels:
    def test_eag_rounds_half_away_from_zero(self):
        entries = [make_entry("HbA1c", "6.0"), make_entry("Estimated Average Glucose (eAG)")]
        assert results(recompute_derived(entries))["Estimated Average Glucose (eAG)"] == "126"

    @pytest.mark.parametrize("hba1c,expected", [("5.0", "97"), ("7.0", "154"), ("8.5", "197")])
    def test_eag_values(self, hba1c, expected):
        entries = [make_entry("Glycosylated Haemoglobin (HbA1c)", hba1c), make_entry("eAG")]
        assert results(recompute_derived(entries))["eAG"] == expected

    def test_globulin_and_ag_ratio(self):
        entries = [
            make_entry("TotalProtein.", "7.2"),
            make_entry("Albumin.", "4.2"),
            make_entry("Globulin."),
            make_entry("Albumin/Globulin"),
        ]
        out = results(recompute_derived(entries))
        assert out["Globulin."] == "3.0"
        assert out["Albumin/Globulin"] == "1.4"

    def test_ag_ratio_row_not_read_as_albumin(self):
        entries = [
            make_entry("Albumin/Globulin", "9.9"),
            make_entry("Total Protein", "7.0"),
            make_entry("Albumin", "4.0"),
            make_entry("Globulin"),
        ]
        out = results(recompute_derived(entries))
        assert out["Globulin"] == "3.0"
        assert out["Albumin/Globulin"] == "1.3"

    def test_ag_ratio_spelling_not_read_as_albumin(self):
        entries = [
            make_entry("Total Protein", "7.0"),
            make_entry("Albumin/Globulin Ratio", "1.2"),
            make_entry("Serum Albumin", "4.0"),
            make_entry("Globulin"),
        ]
        out = results(recompute_derived(entries))
        assert out["Globulin"] == "3.0"
        assert out["Albumin/Globulin Ratio"] == "1.3"
        assert out["Serum Albumin"] == "4.0"

    def test_ratio_row_not_read_as_total_cholesterol(self):
        entries = [
            make_entry("Total Cholesterol/HDL Ratio", "9.9"),
            make_entry("Serum Total Cholesterol", "200"),
            make_entry("HDL Cholesterol", "50"),
            make_entry("Non-HDL Cholesterol"),
        ]
        out = results(recompute_derived(entries))
        assert out["Non-HDL Cholesterol"] == "150.0"
        assert out["Total Cholesterol/HDL Ratio"] == "4.0"

    def test_sgot_sgpt_ratio(self):
        entries = [
            make_entry("Aspartateaminotransferase(AST/SGOT)", "45"),
            make_entry("Alanineaminotransferase(ALT/SGPT)", "30"),
            make_entry("SGOT/SGPT"),
        ]
        assert results(recompute_derived(entries))["SGOT/SGPT"] == "1.5"

    def test_case_insensitive_names(self):
        entries = [make_entry("hba1c", "6.5"), make_entry("EAG")]
        assert results(recompute_derived(entries))["EAG"] == "140"


# ── Purity and idempotence ───────────────────────────────────────────────


class TestPurity:
    def _panel(self):
        return lipid_panel(**{"Triglycerides": "173", "Cholesterol,Total": "211", "Cholesterol,HDL": "37"}) + [
            make_entry("HbA1c", "6.0"),
            make_entry("eAG"),
            make_entry("Total Protein", "6.9"),
            make_entry("Albumin", "3.7"),
            make_entry("Globulin"),
            make_entry("A/G Ratio"),
        ]

    def test_idempotent(self):
        once = recompute_derived(self._panel())
        twice = recompute_derived(once)
        assert [e.model_dump() for e in twice] == [e.model_dump() for e in once]

    def test_input_not_mutated(self):
        entries = self._panel()
        before = [e.model_dump() for e in entries]
        out = recompute_derived(entries)
        assert [e.model_dump() for e in entries] == before
        assert out is not entries

    def test_ids_and_order_preserved(self):
        entries = self._panel()
        out = recompute_derived(entries)
        assert [e.id for e in out] == [e.id for e in entries]

    def test_empty(self):
        assert recompute_derived([]) == []


# ── Alias table and section accessor ─────────────────────────────────────


class TestSectionValues:
    def test_exact_match_preferred_over_substring(self):
        values = SectionValues([make_entry("Serum HDL Cholesterol", "1"), make_entry("HDL Cholesterol", "2")])
        assert values.value_of(HDL) == 2.0

    def test_missing_key(self):
        values = SectionValues([make_entry("Triglycerides", "100")])
        assert values.value_of(LDL) is None
        assert values.find_index("unknown") is None

    def test_set_value_without_row(self):
        values = SectionValues([make_entry("Triglycerides", "100")])
        assert values.set_value(VLDL, "20.0") is False
        assert values.value_of(VLDL) == 20.0
        assert len(values.entries) == 1

    def test_set_value_writes_first_match(self):
        values = SectionValues([make_entry("Non-HDLCholesterol"), make_entry("Non-HDL Cholesterol")])
        assert values.set_value(NON_HDL, "12.0")
        assert [e.result for e in values.entries] == ["12.0", ""]

    def test_every_formula_key_has_aliases(self):
        for formula in DERIVED_FORMULAS:
            for key in formula.sources:
                assert ANALYTE_ALIASES[key], key

    def test_custom_formula(self):
        double = DerivedFormula("double", (HDL,), lambda v: {LDL: str(v[HDL] * 2)})
        entries = [make_entry("HDL Cholesterol", "21"), make_entry("LDL Cholesterol")]
        out = recompute_derived(entries, formulas=[double])
        assert out[1].result == "42.0"
