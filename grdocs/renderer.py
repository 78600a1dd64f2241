"""
Document Renderer
=================
Lays out a generated section list as a Markdown document, or as a
Markdown slide deck for presentation templates, using Jinja2.

The renderer only arranges text the engine produced. It never changes
section titles or bodies, so an edited section list renders exactly as
edited.
"""

from __future__ import annotations

from typing import Sequence

from jinja2 import BaseLoader, Environment

from grdocs.formatting import format_date
from grdocs.models import GeneratedSection, GenerationContext
from grdocs.schema import TemplateSchema


# ---------------------------------------------------------------------------
# Layouts
# ---------------------------------------------------------------------------

DOCUMENT_LAYOUT = """\
# {{ schema.name }}

**Company:** {{ context.company.name }}
**Prepared by:** {{ context.current_user.name }}
**Date:** {{ context.current_date | ddmmyyyy }}
{% for section in sections %}
---

## {{ section.title }}

{{ section.text | trim }}
{% endfor %}"""

# Slides are separated by horizontal rules, one slide per section.
SLIDE_LAYOUT = """\
<!-- {{ schema.name }}: {{ context.company.name }}, {{ context.current_date | ddmmyyyy }} -->
{% for section in sections %}
{% if not loop.first %}---

{% endif %}## {{ section.title }}

{{ section.text | trim }}
{% endfor %}"""


# ---------------------------------------------------------------------------
# Renderer
# ---------------------------------------------------------------------------

class DocumentRenderer:
    """Renders generated sections through the layout matching the template."""

    def __init__(self) -> None:
        self.env = Environment(loader=BaseLoader(), autoescape=False, keep_trailing_newline=True)
        self.env.filters["ddmmyyyy"] = format_date

    def render(
        self,
        schema: TemplateSchema,
        sections: Sequence[GeneratedSection],
        context: GenerationContext,
    ) -> str:
        layout = SLIDE_LAYOUT if schema.is_slide_deck else DOCUMENT_LAYOUT
        template = self.env.from_string(layout)
        rendered = template.render(schema=schema, sections=list(sections), context=context)
        return rendered.rstrip() + "\n"
