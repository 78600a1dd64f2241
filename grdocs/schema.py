"""
Template Schema
===============
Declarative description of a document template: an ordered list of
sections, each pairing display metadata with a pure generator
function over the generation context.

Schemas are built once at import time and never mutated.
"""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from enum import Enum
from typing import TYPE_CHECKING, Callable, Iterable

if TYPE_CHECKING:
    from grdocs.models import GenerationContext


class TemplateType(str, Enum):
    ANALYTICAL_NOTE = "analytical_note"
    LEGISLATIVE_AMENDMENT = "legislative_amendment"
    OFFICIAL_LETTER = "official_letter"
    GR_REPORT = "gr_report"
    PRESENTATION = "presentation"


class EntryPoint(str, Enum):
    """Screen a template picker is opened from."""
    INITIATIVE = "initiative"
    DOCUMENT = "document"
    REPORT = "report"


class ExportFormat(str, Enum):
    PDF = "pdf"
    PPTX = "pptx"


class UnknownTemplateError(ValueError):
    """Raised when a template id is not one of the registered types."""

    def __init__(self, template_id: object) -> None:
        self.template_id = template_id
        available = ", ".join(t.value for t in TemplateType)
        super().__init__(f"Unknown template: '{template_id}'. Available: {available}")


def to_template_type(template_id: TemplateType | str) -> TemplateType:
    """Coerce a raw id to TemplateType, raising UnknownTemplateError."""
    try:
        return TemplateType(template_id)
    except ValueError:
        raise UnknownTemplateError(template_id) from None


SectionGenerator = Callable[["GenerationContext"], str]


@dataclass(frozen=True)
class TemplateSectionSchema:
    """One titled block of a template and the function that writes it."""
    key: str
    title: str
    required: bool
    generate: SectionGenerator = field(compare=False, repr=False)


@dataclass(frozen=True)
class TemplateSchema:
    id: TemplateType
    name: str
    description: str
    icon: str
    sections: tuple[TemplateSectionSchema, ...]
    requires_addressee: bool = False
    requires_initiative: bool = False
    requires_period: bool = False
    export_formats: frozenset[ExportFormat] = frozenset({ExportFormat.PDF})
    available_from: frozenset[EntryPoint] = frozenset()

    def __post_init__(self) -> None:
        object.__setattr__(self, "sections", tuple(self.sections))
        object.__setattr__(self, "export_formats", frozenset(self.export_formats))
        object.__setattr__(self, "available_from", frozenset(self.available_from))

        if not self.sections:
            raise ValueError(f"Template '{self.id.value}' must declare at least one section.")

        seen: set[str] = set()
        duplicates = []
        for section in self.sections:
            if section.key in seen:
                duplicates.append(section.key)
            seen.add(section.key)
        if duplicates:
            raise ValueError(
                f"Template '{self.id.value}' has duplicate section keys: "
                + ", ".join(duplicates)
            )

    @property
    def section_keys(self) -> list[str]:
        return [s.key for s in self.sections]

    @property
    def is_slide_deck(self) -> bool:
        """Slide decks reuse the section shape but are rendered as slides."""
        return self.id == TemplateType.PRESENTATION

    def section(self, key: str) -> TemplateSectionSchema:
        for s in self.sections:
            if s.key == key:
                return s
        raise KeyError(f"Template '{self.id.value}' has no section '{key}'")

    def without_optional(self, keys: Iterable[str]) -> TemplateSchema:
        """
        Derive a schema with the given optional sections removed.

        Required sections cannot be dropped; asking for one raises
        ValueError. Unknown keys are ignored.
        """
        drop = set(keys)
        if not drop:
            return self

        required = [s.key for s in self.sections if s.key in drop and s.required]
        if required:
            raise ValueError(
                f"Cannot drop required sections of '{self.id.value}': "
                + ", ".join(required)
            )

        kept = tuple(s for s in self.sections if s.key not in drop)
        return replace(self, sections=kept)
