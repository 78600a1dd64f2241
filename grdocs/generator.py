"""
Generation Engine
=================
Runs every section generator of a template, in declared order, over one
generation context.

The engine does not validate the context against the schema's
`requires_*` flags and does not catch generator errors: a failing
generator fails the whole document.
"""

from __future__ import annotations

from typing import Sequence

from grdocs.models import GeneratedSection, GenerationContext
from grdocs.schema import TemplateSchema


def generate(schema: TemplateSchema, context: GenerationContext) -> list[GeneratedSection]:
    """Return one GeneratedSection per schema section, in schema order."""
    return [
        GeneratedSection(title=section.title, text=section.generate(context))
        for section in schema.sections
    ]


def generate_section(
    schema: TemplateSchema, context: GenerationContext, key: str
) -> GeneratedSection:
    """
    Re-run a single section generator.

    With the same context this yields the text originally generated for
    that section, so it can be used to reset an edited section.
    """
    section = schema.section(key)
    return GeneratedSection(title=section.title, text=section.generate(context))


def reset_section(
    current: Sequence[GeneratedSection],
    original: Sequence[GeneratedSection],
    index: int,
) -> list[GeneratedSection]:
    """Copy of `current` with entry `index` restored from `original`."""
    if not 0 <= index < len(current) or index >= len(original):
        raise IndexError(f"Section index {index} out of range")

    restored = original[index]
    return [
        GeneratedSection(title=restored.title, text=restored.text) if i == index else s
        for i, s in enumerate(current)
    ]
