"""
grdocs: template-driven generation of GR documents (analytical notes,
amendment proposals, official letters, GR reports, presentations).
"""

from grdocs.formatting import (
    format_currency_range,
    format_date,
    format_risk_level,
    format_stance,
    generate_export_filename,
    generate_outgoing_number,
)
from grdocs.generator import generate, generate_section, reset_section
from grdocs.models import GeneratedSection, GenerationContext
from grdocs.recommendations import get_recommendations
from grdocs.registry import TEMPLATE_REGISTRY, get_schema, list_available, list_templates
from grdocs.schema import (
    EntryPoint,
    ExportFormat,
    TemplateSchema,
    TemplateSectionSchema,
    TemplateType,
    UnknownTemplateError,
)

__version__ = "1.0.0"

__all__ = [
    "EntryPoint",
    "ExportFormat",
    "GeneratedSection",
    "GenerationContext",
    "TEMPLATE_REGISTRY",
    "TemplateSchema",
    "TemplateSectionSchema",
    "TemplateType",
    "UnknownTemplateError",
    "format_currency_range",
    "format_date",
    "format_risk_level",
    "format_stance",
    "generate",
    "generate_export_filename",
    "generate_outgoing_number",
    "generate_section",
    "get_recommendations",
    "get_schema",
    "list_available",
    "list_templates",
    "reset_section",
]
