"""
Domain Models
=============
Read-only records consulted by the section generators, the per-template
configuration types, the generation context and the engine's output type.

Records are frozen and list-valued fields are tuples: a GenerationContext
is a snapshot assembled once per generation pass and never mutated.

`from_dict` constructors accept both snake_case keys and the camelCase
keys used by the dashboard's JSON payloads.
"""

from __future__ import annotations

from dataclasses import dataclass, fields
from typing import Any, Mapping, TypeVar, Union

from grdocs.schema import TemplateType


def _pick(data: Mapping[str, Any], *keys: str, default: Any = None) -> Any:
    """Return the first present, non-None value among `keys`."""
    for key in keys:
        value = data.get(key)
        if value is not None:
            return value
    return default


def _text(data: Mapping[str, Any], *keys: str) -> str:
    value = _pick(data, *keys, default="")
    return str(value)


def _optional_text(data: Mapping[str, Any], *keys: str) -> str | None:
    value = _pick(data, *keys)
    if value is None:
        return None
    return str(value)


def _number(data: Mapping[str, Any], *keys: str) -> float:
    """Numeric field; anything that does not parse as a number reads as 0."""
    try:
        return float(_pick(data, *keys, default=0))
    except (TypeError, ValueError):
        return 0.0


# ---------------------------------------------------------------------------
# Domain Records
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class Company:
    id: str
    name: str
    inn: str = ""
    industry: str = ""
    region: str = ""
    employees: int = 0
    exec_name: str | None = None
    exec_title: str | None = None
    gr_center_name: str | None = None
    outgoing_letter_number_counter: int | None = None

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> Company:
        counter = _pick(data, "outgoing_letter_number_counter", "outgoingLetterNumberCounter")
        return cls(
            id=_text(data, "id"),
            name=_text(data, "name"),
            inn=_text(data, "inn"),
            industry=_text(data, "industry"),
            region=_text(data, "region"),
            employees=int(_pick(data, "employees", default=0)),
            exec_name=_optional_text(data, "exec_name", "execName"),
            exec_title=_optional_text(data, "exec_title", "execTitle"),
            gr_center_name=_optional_text(data, "gr_center_name", "grCenterName"),
            outgoing_letter_number_counter=int(counter) if counter is not None else None,
        )


@dataclass(frozen=True)
class User:
    id: str
    name: str
    email: str = ""
    role: str = "gr_manager"
    company_id: str | None = None

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> User:
        return cls(
            id=_text(data, "id"),
            name=_text(data, "name"),
            email=_text(data, "email"),
            role=_text(data, "role") or "gr_manager",
            company_id=_optional_text(data, "company_id", "companyId"),
        )


@dataclass(frozen=True)
class Version:
    version: int
    date: str
    changes: str

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> Version:
        return cls(
            version=int(_pick(data, "version", default=1)),
            date=_text(data, "date"),
            changes=_text(data, "changes"),
        )


@dataclass(frozen=True)
class MediaMention:
    title: str
    source: str
    date: str
    sentiment: str

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> MediaMention:
        return cls(
            title=_text(data, "title"),
            source=_text(data, "source"),
            date=_text(data, "date"),
            sentiment=_text(data, "sentiment"),
        )


@dataclass(frozen=True)
class EconomicImpact:
    """Estimated monetary effect of an initiative, in som."""
    min: float
    max: float

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> EconomicImpact:
        return cls(min=_pick(data, "min", default=0), max=_pick(data, "max", default=0))


@dataclass(frozen=True)
class Initiative:
    id: str
    title: str
    summary: str = ""
    topic: str = ""
    region: str = ""
    status: str = ""
    risk: str = "medium"
    relevance_score: float = 0
    last_updated: str = ""
    deadline: str | None = None
    source: str | None = None
    versions: tuple[Version, ...] = ()
    stakeholder_ids: tuple[str, ...] = ()
    media_mentions: tuple[MediaMention, ...] = ()
    company_ids: tuple[str, ...] = ()
    domain_area: str | None = None
    risk_justification: str | None = None
    opportunities: tuple[str, ...] = ()
    estimated_economic_impact: EconomicImpact | None = None
    full_text_links: tuple[str, ...] = ()

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> Initiative:
        impact = _pick(data, "estimated_economic_impact", "estimatedEconomicImpact")
        return cls(
            id=_text(data, "id"),
            title=_text(data, "title"),
            summary=_text(data, "summary"),
            topic=_text(data, "topic"),
            region=_text(data, "region"),
            status=_text(data, "status"),
            risk=_text(data, "risk") or "medium",
            relevance_score=_number(data, "relevance_score", "relevanceScore"),
            last_updated=_text(data, "last_updated", "lastUpdated"),
            deadline=_optional_text(data, "deadline"),
            source=_optional_text(data, "source"),
            versions=tuple(Version.from_dict(v) for v in data.get("versions") or []),
            stakeholder_ids=tuple(_pick(data, "stakeholder_ids", "stakeholderIds", default=[])),
            media_mentions=tuple(
                MediaMention.from_dict(m)
                for m in _pick(data, "media_mentions", "mediaMentions", default=[])
            ),
            company_ids=tuple(_pick(data, "company_ids", "companyIds", default=[])),
            domain_area=_optional_text(data, "domain_area", "domainArea"),
            risk_justification=_optional_text(data, "risk_justification", "riskJustification"),
            opportunities=tuple(data.get("opportunities") or []),
            estimated_economic_impact=EconomicImpact.from_dict(impact) if impact else None,
            full_text_links=tuple(_pick(data, "full_text_links", "fullTextLinks", default=[])),
        )

    @property
    def latest_version(self) -> Version | None:
        return self.versions[-1] if self.versions else None

    def area(self, fallback: str) -> str:
        """Regulatory area, falling back to the topic and then `fallback`."""
        return self.domain_area or self.topic or fallback


@dataclass(frozen=True)
class Interaction:
    id: str
    type: str = ""
    date: str = ""
    summary: str = ""
    outcome: str = ""

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> Interaction:
        return cls(
            id=_text(data, "id"),
            type=_text(data, "type"),
            date=_text(data, "date"),
            summary=_text(data, "summary"),
            outcome=_text(data, "outcome"),
        )


@dataclass(frozen=True)
class Stakeholder:
    id: str
    name: str
    organization: str = ""
    type: str = ""
    role: str = ""
    influence: str = ""
    position: str = ""
    topics: tuple[str, ...] = ()
    interactions: tuple[Interaction, ...] = ()
    contact_address: str | None = None

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> Stakeholder:
        return cls(
            id=_text(data, "id"),
            name=_text(data, "name"),
            organization=_text(data, "organization"),
            type=_text(data, "type"),
            role=_text(data, "role"),
            influence=_text(data, "influence"),
            position=_text(data, "position"),
            topics=tuple(data.get("topics") or []),
            interactions=tuple(Interaction.from_dict(i) for i in data.get("interactions") or []),
            contact_address=_optional_text(data, "contact_address", "contactAddress"),
        )


@dataclass(frozen=True)
class Addressee:
    name: str
    title: str
    organization: str
    address: str | None = None

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> Addressee:
        return cls(
            name=_text(data, "name"),
            title=_text(data, "title"),
            organization=_text(data, "organization"),
            address=_optional_text(data, "address"),
        )

    @classmethod
    def from_stakeholder(cls, stakeholder: Stakeholder) -> Addressee:
        return cls(
            name=stakeholder.name,
            title=stakeholder.role,
            organization=stakeholder.organization,
            address=stakeholder.contact_address,
        )


# ---------------------------------------------------------------------------
# Per-template Configuration
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class AnalyticalNoteConfig:
    domain_area: str | None = None
    recipient_name: str | None = None
    include_risks: bool = True
    include_opportunities: bool = True
    include_economic_impact: bool = True
    include_attachments: bool = True

    def disabled_sections(self) -> list[str]:
        return [] if self.include_attachments else ["attachments"]


@dataclass(frozen=True)
class LegislativeAmendmentConfig:
    target_act: str | None = None
    change_goal: str | None = None
    include_international: bool = True

    def disabled_sections(self) -> list[str]:
        return []


LETTER_TYPES = ("clarification", "position", "proposal")


@dataclass(frozen=True)
class OfficialLetterConfig:
    letter_type: str = "clarification"
    selected_stakeholder_id: str | None = None

    def disabled_sections(self) -> list[str]:
        return []


@dataclass(frozen=True)
class GrReportConfig:
    include_monitoring: bool = True
    include_risks: bool = True
    include_stakeholders: bool = True
    include_media: bool = True
    include_financial_impact: bool = True

    def disabled_sections(self) -> list[str]:
        toggles = [
            (self.include_monitoring, "kpi_monitoring"),
            (self.include_risks, "kpi_risks"),
            (self.include_stakeholders, "kpi_stakeholders"),
            (self.include_media, "kpi_media"),
            (self.include_financial_impact, "financial"),
        ]
        return [key for enabled, key in toggles if not enabled]


@dataclass(frozen=True)
class PresentationConfig:
    presentation_title: str | None = None
    include_charts: bool = True

    def disabled_sections(self) -> list[str]:
        return []


TemplateConfig = Union[
    AnalyticalNoteConfig,
    LegislativeAmendmentConfig,
    OfficialLetterConfig,
    GrReportConfig,
    PresentationConfig,
]

CONFIG_TYPES: dict[TemplateType, type] = {
    TemplateType.ANALYTICAL_NOTE: AnalyticalNoteConfig,
    TemplateType.LEGISLATIVE_AMENDMENT: LegislativeAmendmentConfig,
    TemplateType.OFFICIAL_LETTER: OfficialLetterConfig,
    TemplateType.GR_REPORT: GrReportConfig,
    TemplateType.PRESENTATION: PresentationConfig,
}

# Keys produced by the dashboard wizard, mapped to config field names.
_CAMEL_ALIASES = {
    "domainArea": "domain_area",
    "recipientName": "recipient_name",
    "targetAct": "target_act",
    "changeGoal": "change_goal",
    "includeInternational": "include_international",
    "letterType": "letter_type",
    "selectedStakeholderId": "selected_stakeholder_id",
    "presentationTitle": "presentation_title",
    "includeCharts": "include_charts",
}

# Nested toggle groups used by the wizard.
_TOGGLE_GROUPS = {
    "sectionToggles": {
        "risks": "include_risks",
        "opportunities": "include_opportunities",
        "economicImpact": "include_economic_impact",
        "attachments": "include_attachments",
    },
    "kpiToggles": {
        "monitoring": "include_monitoring",
        "risks": "include_risks",
        "stakeholders": "include_stakeholders",
        "media": "include_media",
        "financialImpact": "include_financial_impact",
    },
}


def config_from_dict(
    template_id: TemplateType | str, data: Mapping[str, Any] | None
) -> TemplateConfig:
    """
    Build the closed config type for `template_id` from a loose mapping.

    Keys that do not belong to the template's config are ignored.
    """
    config_cls = CONFIG_TYPES[TemplateType(template_id)]
    allowed = {f.name for f in fields(config_cls)}
    values: dict[str, Any] = {}

    for key, value in (data or {}).items():
        if key in _TOGGLE_GROUPS and isinstance(value, Mapping):
            for toggle, name in _TOGGLE_GROUPS[key].items():
                if toggle in value and name in allowed:
                    values[name] = bool(value[toggle])
            continue
        name = _CAMEL_ALIASES.get(key, key)
        if name in allowed:
            values[name] = value

    return config_cls(**values)


# ---------------------------------------------------------------------------
# Generation Context & Output
# ---------------------------------------------------------------------------

C = TypeVar("C")


@dataclass(frozen=True)
class GenerationContext:
    """Everything a section generator may consult for one generation pass."""
    company: Company
    current_user: User
    current_date: str
    initiative: Initiative | None = None
    stakeholders: tuple[Stakeholder, ...] = ()
    all_initiatives: tuple[Initiative, ...] = ()
    addressee: Addressee | None = None
    period: str | None = None
    config: TemplateConfig | None = None
    reference_year: int | None = None

    def __post_init__(self) -> None:
        object.__setattr__(self, "stakeholders", tuple(self.stakeholders or ()))
        object.__setattr__(self, "all_initiatives", tuple(self.all_initiatives or ()))

    def config_as(self, config_cls: type[C]) -> C:
        """The context's config if it has the given type, else its defaults."""
        if isinstance(self.config, config_cls):
            return self.config
        return config_cls()


@dataclass
class GeneratedSection:
    """A titled block of generated text; owned and edited by the caller."""
    title: str
    text: str

    def to_dict(self) -> dict[str, str]:
        return {"title": self.title, "text": self.text}
