"""
Template Registry
=================
Fixed, insertion-ordered table of the five document templates.

The order is the order a template picker shows them in.
"""

from __future__ import annotations

from types import MappingProxyType

from grdocs.schema import (
    EntryPoint,
    TemplateSchema,
    TemplateType,
    UnknownTemplateError,
    to_template_type,
)
from grdocs.templates.analytical_note import ANALYTICAL_NOTE
from grdocs.templates.gr_report import GR_REPORT
from grdocs.templates.legislative_amendment import LEGISLATIVE_AMENDMENT
from grdocs.templates.official_letter import OFFICIAL_LETTER
from grdocs.templates.presentation import PRESENTATION

__all__ = [
    "TEMPLATE_REGISTRY",
    "UnknownTemplateError",
    "get_schema",
    "list_available",
    "list_templates",
]


TEMPLATE_REGISTRY: MappingProxyType[TemplateType, TemplateSchema] = MappingProxyType({
    TemplateType.ANALYTICAL_NOTE: ANALYTICAL_NOTE,
    TemplateType.LEGISLATIVE_AMENDMENT: LEGISLATIVE_AMENDMENT,
    TemplateType.OFFICIAL_LETTER: OFFICIAL_LETTER,
    TemplateType.GR_REPORT: GR_REPORT,
    TemplateType.PRESENTATION: PRESENTATION,
})


def get_schema(template_id: TemplateType | str) -> TemplateSchema:
    """Look up a template schema; raises UnknownTemplateError for unregistered ids."""
    return TEMPLATE_REGISTRY[to_template_type(template_id)]


def list_templates() -> list[TemplateSchema]:
    return list(TEMPLATE_REGISTRY.values())


def list_available(entry_point: EntryPoint | str) -> list[TemplateSchema]:
    """Templates that may be offered from `entry_point`, in registration order."""
    return [s for s in TEMPLATE_REGISTRY.values() if entry_point in s.available_from]
