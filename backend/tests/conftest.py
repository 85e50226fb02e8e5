"""Pytest configuration and shared fixtures.

This module provides centralized test fixtures for:
- HTTP client for API testing (built-in catalog injected)
- A small fixture catalog for resolver/report tests
- Test entry builders
"""

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient

from labreport.main import app
from labreport.schemas.report import RowKind, TestEntry
from labreport.services.catalog import TemplateCatalog, get_catalog
from labreport.services.catalog_data import TEMPLATE_CATALOG

FIXTURE_CATALOG: dict[str, dict[str, dict]] = {
    "LIPID PROFILE": {
        "Cholesterol,Total": {"units": "mg/dL", "reference_range": "Less than 200", "specimen": "Serum"},
        "Cholesterol,HDL": {
            "units": "mg/dL",
            "reference_range": "M: Greater than 40, F: Greater than 50",
            "specimen": "Serum",
        },
        "Triglycerides": {"units": "mg/dL", "reference_range": "Less than 150", "specimen": "Serum"},
    },
    "HEMATOLOGY": {
        "Haemoglobin": {
            "units": "g/dL",
            "reference_range": "Men: 13.0-17.0\nWomen: 12.0-15.0\nChildren: 11.0-14.0",
            "specimen": "Whole Blood EDTA",
            "method": "Cyanmethemoglobin",
        },
        "DIFFERENTIAL COUNT": {"units": "", "reference_range": "", "entry_type": "group_header"},
        "Neutrophils": {"units": "%", "reference_range": "40-80"},
        "Basophils": {"units": "%", "reference_range": "0-2", "default_value": "0"},
    },
    "SEROLOGY": {
        "HBsAg": {"units": "", "reference_range": "Non-Reactive", "default_value": "Non-Reactive"},
        "Triglycerides": {"units": "mmol/L", "reference_range": "Less than 1.7"},
    },
}


def make_entry(name: str, result: str = "", **fields) -> TestEntry:
    """Build a test row with a given analyte name and result."""
    return TestEntry(analyte_name=name, result=result, **fields)


def make_note(text: str = "") -> TestEntry:
    """Build a free-text note row."""
    return TestEntry(analyte_name=text, row_kind=RowKind.NOTE)


@pytest.fixture
def catalog() -> TemplateCatalog:
    """Small fixture catalog."""
    return TemplateCatalog(FIXTURE_CATALOG)


@pytest.fixture
def builtin_catalog() -> TemplateCatalog:
    """The shipped catalog."""
    return TemplateCatalog(TEMPLATE_CATALOG)


# =============================================================================
# HTTP Client Fixtures
# =============================================================================


@pytest_asyncio.fixture
async def client(builtin_catalog):
    """Async test client for the FastAPI app.

    Overrides the catalog dependency so API tests never depend on the
    CATALOG_FILE environment setting.
    """
    app.dependency_overrides[get_catalog] = lambda: builtin_catalog

    async with AsyncClient(
        transport=ASGITransport(app=app),
        base_url="http://test",
    ) as ac:
        yield ac

    app.dependency_overrides.pop(get_catalog, None)
