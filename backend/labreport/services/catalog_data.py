"""Built-in analyte template catalog.

Structure:
    SECTION NAME -> {
        analyte display name -> {
            "units": str,
            "reference_range": str,   # may embed M:/F:/Men:/Women:/Children: clauses
            "specimen": str,          # optional
            "method": str,            # optional
            "clinical_note": str,     # optional
            "entry_type": "test" | "group_header",   # optional, default "test"
            "default_value": str,     # optional, pre-filled result
        }
    }

Section keys are upper case. Insertion order is significant: it is the order
rows are instantiated for a panel, and the order the substring tier of the
template resolver scans.

Ranges are demo-grade adult/pediatric values in conventional units.
"""

# ---------------------------------------------------------------------------
# Shared clinical notes
# ---------------------------------------------------------------------------

_LIPID_NOTE = (
    "NCEP ATP III classification:\n"
    "Total cholesterol: Desirable < 200, Borderline 200-239, High >= 240\n"
    "LDL cholesterol: Optimal < 100, Near optimal 100-129, Borderline 130-159, High 160-189\n"
    "Triglycerides: Normal < 150, Borderline 150-199, High 200-499"
)

_HBA1C_NOTE = (
    "Non-diabetic: < 5.7 %\n"
    "Prediabetes: 5.7-6.4 %\n"
    "Diabetes: >= 6.5 %\n"
    "eAG is calculated as 28.7 x HbA1c - 46.7"
)

_THYROID_NOTE = "Pregnancy and drug therapy alter thyroid hormone levels; interpret clinically."

TEMPLATE_CATALOG: dict[str, dict[str, dict]] = {
    # -----------------------------------------------------------------------
    # Hematology
    # -----------------------------------------------------------------------
    "COMPLETE BLOOD COUNT": {
        "Haemoglobin": {
            "units": "g/dL",
            "reference_range": "Men: 13.0-17.0\nWomen: 12.0-15.0\nChildren: 11.0-14.0",
            "specimen": "Whole Blood EDTA",
            "method": "Cyanmethemoglobin",
        },
        "Total WBC Count": {
            "units": "cells/cumm",
            "reference_range": "Adults: 4000-11000\nChildren: 5000-15000",
            "specimen": "Whole Blood EDTA",
            "method": "Impedance",
        },
        "RBC Count": {
            "units": "million/cumm",
            "reference_range": "M: 4.5-5.5, F: 3.8-4.8",
            "specimen": "Whole Blood EDTA",
            "method": "Impedance",
        },
        "Packed Cell Volume (PCV)": {
            "units": "%",
            "reference_range": "M: 40-50, F: 36-46",
            "specimen": "Whole Blood EDTA",
            "method": "Calculated",
        },
        "MCV": {"units": "fL", "reference_range": "83-101", "specimen": "Whole Blood EDTA", "method": "Calculated"},
        "MCH": {"units": "pg", "reference_range": "27-32", "specimen": "Whole Blood EDTA", "method": "Calculated"},
        "MCHC": {"units": "g/dL", "reference_range": "31.5-34.5", "specimen": "Whole Blood EDTA", "method": "Calculated"},
        "RDW-CV": {"units": "%", "reference_range": "11.6-14.0", "specimen": "Whole Blood EDTA", "method": "Calculated"},
        "Platelet Count": {
            "units": "lakhs/cumm",
            "reference_range": "1.5-4.1",
            "specimen": "Whole Blood EDTA",
            "method": "Impedance",
        },
        "DIFFERENTIAL COUNT": {"units": "", "reference_range": "", "entry_type": "group_header"},
        "Neutrophils": {"units": "%", "reference_range": "40-80", "specimen": "Whole Blood EDTA", "method": "Microscopy"},
        "Lymphocytes": {"units": "%", "reference_range": "20-40", "specimen": "Whole Blood EDTA", "method": "Microscopy"},
        "Eosinophils": {"units": "%", "reference_range": "1-6", "specimen": "Whole Blood EDTA", "method": "Microscopy"},
        "Monocytes": {"units": "%", "reference_range": "2-10", "specimen": "Whole Blood EDTA", "method": "Microscopy"},
        "Basophils": {
            "units": "%",
            "reference_range": "0-2",
            "specimen": "Whole Blood EDTA",
            "method": "Microscopy",
            "default_value": "0",
        },
    },
    "HEMATOLOGY": {
        "Hemoglobin": {
            "units": "g/dL",
            "reference_range": "M: 13.5-17.5, F: 12-15.5, Children: 11.0-14.0",
            "specimen": "Blood",
        },
        "WBC Count": {"units": "cells/μL", "reference_range": "4000-11000", "specimen": "Blood"},
        "RBC Count": {"units": "million/μL", "reference_range": "M: 4.5-5.5, F: 4.0-5.0", "specimen": "Blood"},
        "Platelet Count": {"units": "lakhs/μL", "reference_range": "1.5-4.5", "specimen": "Blood"},
        "Hematocrit": {"units": "%", "reference_range": "M: 40-54, F: 37-47", "specimen": "Blood"},
        "ESR": {
            "units": "mm/hr",
            "reference_range": "M: 0-15, F: 0-20, Children: 0-10",
            "specimen": "Blood",
            "method": "Westergren",
        },
        "Bleeding Time": {"units": "minutes", "reference_range": "2-7", "specimen": "Blood"},
        "Clotting Time": {"units": "minutes", "reference_range": "5-10", "specimen": "Blood"},
        "Blood Group": {"units": "", "reference_range": "", "specimen": "Blood", "method": "Slide agglutination"},
    },
    # -----------------------------------------------------------------------
    # Biochemistry
    # -----------------------------------------------------------------------
    "BIOCHEMISTRY": {
        "Glucose Fasting": {"units": "mg/dL", "reference_range": "70-110", "specimen": "Plasma", "method": "GOD-POD"},
        "Glucose Random": {"units": "mg/dL", "reference_range": "70-140", "specimen": "Plasma", "method": "GOD-POD"},
        "Glucose Post Prandial": {
            "units": "mg/dL",
            "reference_range": "Less than 140",
            "specimen": "Plasma",
            "method": "GOD-POD",
        },
        "Urea": {"units": "mg/dL", "reference_range": "15-40", "specimen": "Serum", "method": "Urease-GLDH"},
        "Creatinine": {
            "units": "mg/dL",
            "reference_range": "M: 0.7-1.3, F: 0.6-1.1, Children: 0.3-0.7",
            "specimen": "Serum",
            "method": "Jaffe kinetic",
        },
        "Uric Acid": {
            "units": "mg/dL",
            "reference_range": "M: 3.5-7.2, F: 2.6-6.0",
            "specimen": "Serum",
            "method": "Uricase",
        },
        "Aspartateaminotransferase(AST/SGOT)": {
            "units": "U/L",
            "reference_range": "M: Less than 40, F: Less than 32",
            "specimen": "Serum",
            "method": "IFCC without P5P",
        },
        "Alanineaminotransferase(ALT/SGPT)": {
            "units": "U/L",
            "reference_range": "M: Less than 41, F: Less than 33",
            "specimen": "Serum",
            "method": "IFCC without P5P",
        },
        "SGOT/SGPT": {"units": "Ratio", "reference_range": "0.8-1.5", "specimen": "Serum", "method": "Calculated"},
        "Alkaline Phosphatase": {
            "units": "U/L",
            "reference_range": "Adults: 40-129\nChildren: 100-390",
            "specimen": "Serum",
            "method": "PNPP-AMP",
        },
        "Calcium": {"units": "mg/dL", "reference_range": "8.5-10.5", "specimen": "Serum", "method": "Arsenazo III"},
        "Phosphorus": {
            "units": "mg/dL",
            "reference_range": "2.5-4.5\nChildren: 4.0-7.0",
            "specimen": "Serum",
            "method": "Phosphomolybdate",
        },
        "Sodium": {"units": "mmol/L", "reference_range": "135-145", "specimen": "Serum", "method": "ISE Direct"},
        "Potassium": {"units": "mmol/L", "reference_range": "3.5-5.1", "specimen": "Serum", "method": "ISE Direct"},
        "Chloride": {"units": "mmol/L", "reference_range": "98-107", "specimen": "Serum", "method": "ISE Direct"},
        "C-Reactive Protein (CRP)": {
            "units": "mg/L",
            "reference_range": "Less than 6.0",
            "specimen": "Serum",
            "method": "Latex turbidimetry",
        },
    },
    "DIABETIC PROFILE": {
        "Glycosylated Haemoglobin (HbA1c)": {
            "units": "%",
            "reference_range": "4.0-5.6",
            "specimen": "Whole Blood EDTA",
            "method": "HPLC",
            "clinical_note": _HBA1C_NOTE,
        },
        "Estimated Average Glucose (eAG)": {
            "units": "mg/dL",
            "reference_range": "Less than 117",
            "specimen": "Whole Blood EDTA",
            "method": "Calculated",
        },
        "Glucose Fasting": {"units": "mg/dL", "reference_range": "70-110", "specimen": "Plasma", "method": "GOD-POD"},
        "Glucose Post Prandial": {
            "units": "mg/dL",
            "reference_range": "Less than 140",
            "specimen": "Plasma",
            "method": "GOD-POD",
        },
    },
    "LIPID PROFILE": {
        "Cholesterol,Total": {
            "units": "mg/dL",
            "reference_range": "Less than 200",
            "specimen": "Serum",
            "method": "CHOD-PAP",
            "clinical_note": _LIPID_NOTE,
        },
        "Triglycerides": {
            "units": "mg/dL",
            "reference_range": "Less than 150",
            "specimen": "Serum",
            "method": "GPO-PAP",
        },
        "Cholesterol,HDL": {
            "units": "mg/dL",
            "reference_range": "M: Greater than 40, F: Greater than 50",
            "specimen": "Serum",
            "method": "Direct enzymatic",
        },
        "Cholesterol,LDL": {
            "units": "mg/dL",
            "reference_range": "Less than 130",
            "specimen": "Serum",
            "method": "Calculated",
        },
        "Cholesterol,VLDL": {
            "units": "mg/dL",
            "reference_range": "Less than 30",
            "specimen": "Serum",
            "method": "Calculated",
        },
        "Non-HDLCholesterol": {
            "units": "mg/dL",
            "reference_range": "Less than 130",
            "specimen": "Serum",
            "method": "Calculated",
        },
        "Cholesterol/HDLRatio": {
            "units": "Ratio",
            "reference_range": "Less than 5.0",
            "specimen": "Serum",
            "method": "Calculated",
        },
        "LDL/HDLRatio": {"units": "Ratio", "reference_range": "Less than 3.5", "specimen": "Serum", "method": "Calculated"},
        "HDL/LDLRatio": {"units": "Ratio", "reference_range": "Greater than 0.3", "specimen": "Serum", "method": "Calculated"},
    },
    "LIVER FUNCTION TEST": {
        "Bilirubin Total": {"units": "mg/dL", "reference_range": "0.3-1.2", "specimen": "Serum", "method": "Diazo"},
        "Bilirubin Direct": {"units": "mg/dL", "reference_range": "0.0-0.3", "specimen": "Serum", "method": "Diazo"},
        "Bilirubin Indirect": {"units": "mg/dL", "reference_range": "0.2-0.9", "specimen": "Serum", "method": "Calculated"},
        "Aspartateaminotransferase(AST/SGOT)": {
            "units": "U/L",
            "reference_range": "M: Less than 40, F: Less than 32",
            "specimen": "Serum",
            "method": "IFCC without P5P",
        },
        "Alanineaminotransferase(ALT/SGPT)": {
            "units": "U/L",
            "reference_range": "M: Less than 41, F: Less than 33",
            "specimen": "Serum",
            "method": "IFCC without P5P",
        },
        "SGOT/SGPT": {"units": "Ratio", "reference_range": "0.8-1.5", "specimen": "Serum", "method": "Calculated"},
        "Alkaline Phosphatase": {
            "units": "U/L",
            "reference_range": "Adults: 40-129\nChildren: 100-390",
            "specimen": "Serum",
            "method": "PNPP-AMP",
        },
        "TotalProtein.": {"units": "g/dL", "reference_range": "6.4-8.3", "specimen": "Serum", "method": "Biuret"},
        "Albumin.": {"units": "g/dL", "reference_range": "3.5-5.2", "specimen": "Serum", "method": "BCG"},
        "Globulin.": {"units": "g/dL", "reference_range": "2.0-3.5", "specimen": "Serum", "method": "Calculated"},
        "Albumin/Globulin": {"units": "Ratio", "reference_range": "1.1-2.2", "specimen": "Serum", "method": "Calculated"},
        "Gamma GT": {
            "units": "U/L",
            "reference_range": "M: 10-71, F: 6-42",
            "specimen": "Serum",
            "method": "IFCC",
        },
    },
    "KIDNEY FUNCTION TEST": {
        "Urea": {"units": "mg/dL", "reference_range": "15-40", "specimen": "Serum", "method": "Urease-GLDH"},
        "Blood Urea Nitrogen (BUN)": {"units": "mg/dL", "reference_range": "7-20", "specimen": "Serum", "method": "Calculated"},
        "Creatinine": {
            "units": "mg/dL",
            "reference_range": "M: 0.7-1.3, F: 0.6-1.1, Children: 0.3-0.7",
            "specimen": "Serum",
            "method": "Jaffe kinetic",
        },
        "Uric Acid": {
            "units": "mg/dL",
            "reference_range": "M: 3.5-7.2, F: 2.6-6.0",
            "specimen": "Serum",
            "method": "Uricase",
        },
        "Sodium": {"units": "mmol/L", "reference_range": "135-145", "specimen": "Serum", "method": "ISE Direct"},
        "Potassium": {"units": "mmol/L", "reference_range": "3.5-5.1", "specimen": "Serum", "method": "ISE Direct"},
        "Chloride": {"units": "mmol/L", "reference_range": "98-107", "specimen": "Serum", "method": "ISE Direct"},
    },
    # -----------------------------------------------------------------------
    # Endocrinology
    # -----------------------------------------------------------------------
    "THYROID PROFILE": {
        "Total T3": {
            "units": "ng/dL",
            "reference_range": "80-200",
            "specimen": "Serum",
            "method": "CLIA",
            "clinical_note": _THYROID_NOTE,
        },
        "Total T4": {"units": "μg/dL", "reference_range": "5.1-14.1", "specimen": "Serum", "method": "CLIA"},
        "TSH": {
            "units": "μIU/mL",
            "reference_range": "0.27-4.2\nChildren: 0.7-6.4",
            "specimen": "Serum",
            "method": "CLIA",
        },
        "Free T3": {"units": "pg/mL", "reference_range": "2.0-4.4", "specimen": "Serum", "method": "CLIA"},
        "Free T4": {"units": "ng/dL", "reference_range": "0.93-1.7", "specimen": "Serum", "method": "CLIA"},
    },
    "HORMONES": {
        "Cortisol": {"units": "μg/dL", "reference_range": "AM: 5-25, PM: 3-16", "specimen": "Serum", "method": "CLIA"},
        "Testosterone": {
            "units": "ng/dL",
            "reference_range": "M: 300-1000, F: 15-70",
            "specimen": "Serum",
            "method": "CLIA",
        },
        "Prolactin": {"units": "ng/mL", "reference_range": "M: 4-15, F: 4-23", "specimen": "Serum", "method": "CLIA"},
        "Estradiol": {"units": "pg/mL", "reference_range": "Variable by phase", "specimen": "Serum", "method": "CLIA"},
        "Progesterone": {"units": "ng/mL", "reference_range": "Variable by phase", "specimen": "Serum", "method": "CLIA"},
        "LH": {"units": "mIU/mL", "reference_range": "Variable by phase", "specimen": "Serum", "method": "CLIA"},
        "FSH": {"units": "mIU/mL", "reference_range": "Variable by phase", "specimen": "Serum", "method": "CLIA"},
    },
    "VITAMINS": {
        "Vitamin D (25-OH)": {
            "units": "ng/mL",
            "reference_range": "Deficiency: < 20\nInsufficiency: 20-30\nSufficiency: 30-100",
            "specimen": "Serum",
            "method": "CLIA",
        },
        "Vitamin B12": {"units": "pg/mL", "reference_range": "211-911", "specimen": "Serum", "method": "CLIA"},
        "Folate": {"units": "ng/mL", "reference_range": "3-17", "specimen": "Serum", "method": "CLIA"},
    },
    "ENZYMES": {
        "Amylase": {"units": "U/L", "reference_range": "28-100", "specimen": "Serum", "method": "CNPG3"},
        "Lipase": {"units": "U/L", "reference_range": "Less than 60", "specimen": "Serum", "method": "Colorimetric"},
        "LDH": {"units": "U/L", "reference_range": "140-280", "specimen": "Serum", "method": "IFCC"},
        "CPK": {"units": "U/L", "reference_range": "M: 38-174, F: 26-140", "specimen": "Serum", "method": "IFCC"},
    },
    # -----------------------------------------------------------------------
    # Serology / immunology
    # -----------------------------------------------------------------------
    "SEROLOGY": {
        "RA Factor": {"units": "IU/mL", "reference_range": "Less than 20", "specimen": "Serum", "method": "Latex"},
        "ASO": {"units": "IU/mL", "reference_range": "Less than 200", "specimen": "Serum", "method": "Latex"},
        "Widal": {
            "units": "",
            "reference_range": "Titre below 1:80 is not significant",
            "specimen": "Serum",
            "method": "Slide agglutination",
        },
        "VDRL": {"units": "", "reference_range": "Non-Reactive", "specimen": "Serum", "default_value": "Non-Reactive"},
        "HIV I & II": {
            "units": "",
            "reference_range": "Non-Reactive",
            "specimen": "Serum",
            "method": "Rapid card",
            "default_value": "Non-Reactive",
        },
        "HBsAg": {
            "units": "",
            "reference_range": "Non-Reactive",
            "specimen": "Serum",
            "method": "Rapid card",
            "default_value": "Non-Reactive",
        },
        "HCV": {
            "units": "",
            "reference_range": "Non-Reactive",
            "specimen": "Serum",
            "method": "Rapid card",
            "default_value": "Non-Reactive",
        },
    },
    # -----------------------------------------------------------------------
    # Clinical pathology
    # -----------------------------------------------------------------------
    "URINE ROUTINE": {
        "PHYSICAL EXAMINATION": {"units": "", "reference_range": "", "entry_type": "group_header"},
        "Colour": {"units": "", "reference_range": "Pale Yellow", "specimen": "Urine", "default_value": "Pale Yellow"},
        "Appearance": {"units": "", "reference_range": "Clear", "specimen": "Urine", "default_value": "Clear"},
        "Specific Gravity": {"units": "", "reference_range": "1.010-1.030", "specimen": "Urine"},
        "pH": {"units": "", "reference_range": "5.0-7.5", "specimen": "Urine"},
        "CHEMICAL EXAMINATION": {"units": "", "reference_range": "", "entry_type": "group_header"},
        "Protein": {"units": "", "reference_range": "Nil", "specimen": "Urine", "default_value": "Nil"},
        "Glucose": {"units": "", "reference_range": "Nil", "specimen": "Urine", "default_value": "Nil"},
        "Ketones": {"units": "", "reference_range": "Nil", "specimen": "Urine", "default_value": "Nil"},
        "Bile Salts": {"units": "", "reference_range": "Absent", "specimen": "Urine", "default_value": "Absent"},
        "Bile Pigments": {"units": "", "reference_range": "Absent", "specimen": "Urine", "default_value": "Absent"},
        "Urobilinogen": {"units": "", "reference_range": "Normal", "specimen": "Urine", "default_value": "Normal"},
        "MICROSCOPIC EXAMINATION": {"units": "", "reference_range": "", "entry_type": "group_header"},
        "Pus Cells": {"units": "/HPF", "reference_range": "M: 0-3, F: 0-5", "specimen": "Urine"},
        "Epithelial Cells": {"units": "/HPF", "reference_range": "Few", "specimen": "Urine", "default_value": "Few"},
        "RBCs": {"units": "/HPF", "reference_range": "Nil", "specimen": "Urine", "default_value": "Nil"},
        "Casts": {"units": "", "reference_range": "Nil", "specimen": "Urine", "default_value": "Nil"},
        "Crystals": {"units": "", "reference_range": "Nil", "specimen": "Urine", "default_value": "Nil"},
    },
    "COAGULATION": {
        "Prothrombin Time (PT)": {"units": "seconds", "reference_range": "11-14", "specimen": "Citrated Plasma"},
        "INR": {"units": "", "reference_range": "0.8-1.2", "specimen": "Citrated Plasma", "method": "Calculated"},
        "APTT": {"units": "seconds", "reference_range": "25-35", "specimen": "Citrated Plasma"},
    },
}
