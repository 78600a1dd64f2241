"""
Analytical Note
===============
Memorandum on a single regulatory initiative: summary, description,
impact analysis, stakeholder positions and recommended actions.
"""

from __future__ import annotations

from grdocs.formatting import (
    format_currency_range,
    format_date,
    format_risk_level,
    format_stance,
    non_blank,
    numbered,
)
from grdocs.models import AnalyticalNoteConfig, GenerationContext
from grdocs.recommendations import get_recommendations
from grdocs.schema import (
    EntryPoint,
    ExportFormat,
    TemplateSchema,
    TemplateSectionSchema,
    TemplateType,
)

DEFAULT_GR_CENTER = "Government Relations Centre"
STAKEHOLDER_SUMMARY_LIMIT = 5


def _area(ctx: GenerationContext, fallback: str) -> str:
    config = ctx.config_as(AnalyticalNoteConfig)
    override = non_blank(config.domain_area)
    if override:
        return override
    if ctx.initiative:
        return ctx.initiative.area(fallback)
    return fallback


def _header(ctx: GenerationContext) -> str:
    config = ctx.config_as(AnalyticalNoteConfig)
    area = _area(ctx, "the industry")
    recipient = (
        non_blank(config.recipient_name)
        or (ctx.addressee.name if ctx.addressee else None)
        or ctx.company.exec_name
        or "Company management"
    )
    gr_center = ctx.company.gr_center_name or DEFAULT_GR_CENTER

    return (
        f"Analytical note on regulatory changes in {area}\n\n"
        f"Date: {format_date(ctx.current_date)}\n"
        f"To: {recipient}\n"
        f"From: {gr_center}\n"
        f"Subject: Overview of regulatory changes in {area} "
        f"and their potential impact on {ctx.company.name}"
    )


def _summary(ctx: GenerationContext) -> str:
    initiative = ctx.initiative
    if not initiative:
        return "Information about the initiative is unavailable."

    risk = format_risk_level(initiative.risk).lower()
    deadline = format_date(initiative.deadline) if initiative.deadline else "not set"

    parts = [
        initiative.summary.strip(),
        f"The risk level for the company is assessed as {risk}.",
        f"Current status of the initiative: {initiative.status or 'not specified'}.",
        f"Key deadline: {deadline}.",
        "This note contains an analysis of the potential impact "
        "and recommendations for a response.",
    ]
    return " ".join(p for p in parts if p)


def _description(ctx: GenerationContext) -> str:
    initiative = ctx.initiative
    if not initiative:
        return "A description of the regulatory change is unavailable."

    source = initiative.source or "source not specified"
    last_updated = (
        format_date(initiative.last_updated) if initiative.last_updated else "date not specified"
    )
    area = _area(ctx, "regulation")

    text = (
        f"The initiative “{initiative.title}” concerns {area} "
        f"and has the status “{initiative.status or 'not specified'}”. "
        f"Source: {source}. "
        f"Last updated: {last_updated}."
    )
    if initiative.summary:
        text += f"\n\n{initiative.summary}"

    latest = initiative.latest_version
    if latest:
        text += (
            f"\n\nLatest changes (version {latest.version}, "
            f"{format_date(latest.date)}): {latest.changes}"
        )

    if initiative.full_text_links:
        text += f"\n\nFull text: {initiative.full_text_links[0]}"

    return text


def _impact(ctx: GenerationContext) -> str:
    initiative = ctx.initiative
    if not initiative:
        return "An impact analysis is unavailable."

    config = ctx.config_as(AnalyticalNoteConfig)
    blocks: list[tuple[str, str]] = []

    if config.include_risks:
        justification = (
            initiative.risk_justification
            or "A detailed justification of the risk level requires further analysis."
        )
        blocks.append((
            "Potential risks",
            f"{format_risk_level(initiative.risk)} risk. {justification}",
        ))

    if config.include_opportunities:
        if initiative.opportunities:
            opportunities = numbered(initiative.opportunities)
        else:
            opportunities = "Potential opportunities require further assessment."
        blocks.append(("Potential opportunities", opportunities))

    if config.include_economic_impact:
        impact = initiative.estimated_economic_impact
        estimate = format_currency_range(impact.min, impact.max) if impact else "assessment required"
        blocks.append(("Economic effect", f"Estimated economic impact: {estimate}."))

    if not blocks:
        return "Impact subsections were excluded from this note."

    return "\n\n".join(
        f"2.{i}. {heading}:\n{body}" for i, (heading, body) in enumerate(blocks, 1)
    )


def _stakeholders(ctx: GenerationContext) -> str:
    if not ctx.stakeholders:
        return "Information about stakeholders is unavailable."

    lines = [
        f"{s.name} ({s.organization}, {s.role}) - {format_stance(s.position)}"
        for s in ctx.stakeholders[:STAKEHOLDER_SUMMARY_LIMIT]
    ]
    return numbered(lines)


def _recommendations(ctx: GenerationContext) -> str:
    initiative = ctx.initiative
    if not initiative:
        return "Recommendations will be prepared once the initiative has been analysed."
    return numbered(get_recommendations(initiative.risk, initiative.status), suffix=".")


def _attachments(ctx: GenerationContext) -> str:
    initiative = ctx.initiative
    if not initiative or not initiative.full_text_links:
        return "No attachments."
    return numbered(initiative.full_text_links)


ANALYTICAL_NOTE = TemplateSchema(
    id=TemplateType.ANALYTICAL_NOTE,
    name="Analytical note",
    description=(
        "Memorandum on regulatory changes with a risk assessment, "
        "impact analysis and recommendations"
    ),
    icon="FileText",
    requires_addressee=False,
    requires_initiative=True,
    requires_period=False,
    export_formats=frozenset({ExportFormat.PDF}),
    available_from=frozenset({EntryPoint.INITIATIVE, EntryPoint.DOCUMENT}),
    sections=(
        TemplateSectionSchema("header", "Header and details", True, _header),
        TemplateSectionSchema("summary", "Summary", True, _summary),
        TemplateSectionSchema("description", "1. Description of the regulatory change", True, _description),
        TemplateSectionSchema("impact", "2. Analysis of potential impact", True, _impact),
        TemplateSectionSchema("stakeholders", "3. Key stakeholders and their positions", True, _stakeholders),
        TemplateSectionSchema("recommendations", "4. Recommendations", True, _recommendations),
        TemplateSectionSchema("attachments", "Attachments", False, _attachments),
    ),
)
