"""Analyte template catalog and template resolution.

The catalog is an immutable mapping of section name -> analyte name ->
Template, built once (from the built-in table or a JSON file) and passed to
whatever needs it. Lookup is a three-tier "first match wins" heuristic:

1. exact (case-insensitive) name within the hinted section
2. catalog name containing the typed name, within the hinted section
3. exact (case-insensitive) name in any section, in catalog order

Tier order decides which template silently applies to ambiguous names, so a
substring hit in the hinted section beats an exact hit elsewhere.
"""

import json
import logging
from collections.abc import Mapping
from functools import lru_cache
from pathlib import Path
from types import MappingProxyType

from labreport.config import settings
from labreport.schemas.catalog import AnalyteTemplate, Template
from labreport.services.catalog_data import TEMPLATE_CATALOG

logger = logging.getLogger(__name__)


def normalize_section(section_name: str) -> str:
    """Catalog section keys are upper case and trimmed."""
    return section_name.strip().upper()


class TemplateCatalog:
    """Read-only analyte template catalog.

    Args:
        sections: Mapping of section name -> analyte name -> Template (or a
            dict of Template fields). Section names are normalized to upper
            case; analyte names are kept verbatim for display.
    """

    def __init__(self, sections: Mapping[str, Mapping[str, Template | dict]]):
        built: dict[str, Mapping[str, Template]] = {}
        for section_name, analytes in sections.items():
            key = normalize_section(section_name)
            entries = dict(built.get(key, {}))
            for analyte_name, template in analytes.items():
                if not isinstance(template, Template):
                    template = Template.model_validate(template)
                entries[analyte_name] = template
            built[key] = MappingProxyType(entries)
        self._sections: Mapping[str, Mapping[str, Template]] = MappingProxyType(built)

    @classmethod
    def from_json_file(cls, path: str | Path) -> "TemplateCatalog":
        """Load a catalog from a JSON document shaped like TEMPLATE_CATALOG.

        Raises:
            FileNotFoundError: If the file does not exist.
            pydantic.ValidationError: If a template is malformed.
        """
        with open(path, encoding="utf-8") as f:
            data = json.load(f)
        return cls(data)

    def __len__(self) -> int:
        return sum(len(analytes) for analytes in self._sections.values())

    def __contains__(self, section_name: object) -> bool:
        return isinstance(section_name, str) and normalize_section(section_name) in self._sections

    def list_groups(self) -> list[str]:
        """Section names in catalog order."""
        return list(self._sections.keys())

    def list_analytes_for_group(self, section_name: str) -> list[AnalyteTemplate]:
        """Analytes of a section in catalog order; empty for unknown sections."""
        analytes = self._sections.get(normalize_section(section_name), {})
        return [AnalyteTemplate(name=name, template=tpl) for name, tpl in analytes.items()]

    def get(self, section_name: str, analyte_name: str) -> Template | None:
        """Literal (case-sensitive) lookup of one analyte in one section."""
        return self._sections.get(normalize_section(section_name), {}).get(analyte_name)

    def resolve_template(self, section_name: str, analyte_name: str) -> Template | None:
        """Find the best-matching template for a typed analyte name.

        Args:
            section_name: Section hint (any case).
            analyte_name: Name as typed; trimmed, compared case-insensitively.

        Returns:
            The matching Template, or None when no tier matches.
        """
        typed = analyte_name.strip().lower()
        if not typed:
            return None

        section = self._sections.get(normalize_section(section_name), {})

        for name, template in section.items():
            if name.lower() == typed:
                logger.debug("Template exact match: %r -> %r", analyte_name, name)
                return template

        for name, template in section.items():
            if typed in name.lower():
                logger.debug("Template substring match: %r -> %r", analyte_name, name)
                return template

        for section_key, analytes in self._sections.items():
            for name, template in analytes.items():
                if name.lower() == typed:
                    logger.debug(
                        "Template global match: %r -> %s/%r", analyte_name, section_key, name
                    )
                    return template

        return None


@lru_cache
def get_catalog() -> TemplateCatalog:
    """Process-wide catalog built from settings (FastAPI dependency).

    Uses settings.catalog_file when set, otherwise the built-in table.
    """
    if settings.catalog_file:
        catalog = TemplateCatalog.from_json_file(settings.catalog_file)
        source = settings.catalog_file
    else:
        catalog = TemplateCatalog(TEMPLATE_CATALOG)
        source = "built-in"
    logger.info(
        "Loaded %s template catalog: %d groups, %d analytes",
        source,
        len(catalog.list_groups()),
        len(catalog),
    )
    return catalog
