"""
Presentation
============
Management deck on the regulatory environment. Sections are slides:
the {title, text} shape is the same, the caller renders them as slides.
"""

from __future__ import annotations

from grdocs.formatting import (
    date_sort_key,
    format_date,
    format_period,
    format_risk_level,
    is_high_risk,
    non_blank,
)
from grdocs.models import GenerationContext, PresentationConfig
from grdocs.schema import (
    EntryPoint,
    ExportFormat,
    TemplateSchema,
    TemplateSectionSchema,
    TemplateType,
)

TOP_CHANGES_LIMIT = 3
OPPORTUNITIES_LIMIT = 5
ACHIEVEMENTS_LIMIT = 3


def _slide_title(ctx: GenerationContext) -> str:
    config = ctx.config_as(PresentationConfig)
    custom = non_blank(config.presentation_title)
    period = non_blank(ctx.period)

    if custom:
        heading = custom
        if period:
            heading += f"\n{format_period(period)}"
    elif period:
        heading = f"Regulatory environment overview for {format_period(period)}"
    else:
        heading = "Regulatory environment overview"

    return (
        f"{heading}\n\n"
        f"[{ctx.company.name} logo]\n\n"
        f"Date: {format_date(ctx.current_date)}"
    )


def _slide_changes(ctx: GenerationContext) -> str:
    initiatives = ctx.all_initiatives
    if not initiatives:
        return "Top 3 regulatory changes:\n\nInformation about initiatives is unavailable."

    top = sorted(initiatives, key=lambda i: i.relevance_score, reverse=True)[:TOP_CHANGES_LIMIT]
    blocks = [
        f"{n}. {i.title}\n"
        f"   Status: {i.status or 'not specified'} | Risk: {format_risk_level(i.risk)}\n"
        f"   {i.summary}".rstrip()
        for n, i in enumerate(top, 1)
    ]
    return "Top 3 regulatory changes:\n\n" + "\n\n".join(blocks)


def _slide_risks(ctx: GenerationContext) -> str:
    initiatives = ctx.all_initiatives
    high_risk = [i for i in initiatives if is_high_risk(i.risk)]

    lines = ["RISKS:"]
    if high_risk:
        for i in high_risk:
            lines.append(f"  - {i.title}: {i.risk_justification or 'requires further assessment'}")
    else:
        lines.append("  There are no high-risk initiatives.")

    opportunities = [
        f"  - {opportunity} ({i.title})"
        for i in initiatives
        for opportunity in i.opportunities
    ]
    lines.append("")
    lines.append("OPPORTUNITIES:")
    if opportunities:
        lines.extend(opportunities[:OPPORTUNITIES_LIMIT])
    else:
        lines.append("  Additional opportunities require assessment.")

    if ctx.config_as(PresentationConfig).include_charts:
        lines.append("")
        lines.append("[Chart: initiatives by risk level]")

    return "\n".join(lines)


def _slide_activity(ctx: GenerationContext) -> str:
    initiatives = ctx.all_initiatives
    high_risk = sum(1 for i in initiatives if is_high_risk(i.risk))
    interactions = sum(len(s.interactions) for s in ctx.stakeholders)
    mentions = sum(len(i.media_mentions) for i in initiatives)

    recent = sorted(initiatives, key=lambda i: date_sort_key(i.last_updated), reverse=True)
    achievements = "\n".join(
        f"  - [{format_date(i.last_updated)}] {i.title}: {i.status or 'not specified'}"
        for i in recent[:ACHIEVEMENTS_LIMIT]
    )

    text = (
        f"Key indicators:\n"
        f"  - Initiatives under monitoring: {len(initiatives)}\n"
        f"  - High risk: {high_risk}\n"
        f"  - Stakeholder interactions: {interactions}\n"
        f"  - Media mentions: {mentions}\n\n"
        f"Main achievements in the period:\n"
        f"{achievements or '  Information will be added.'}"
    )

    if ctx.config_as(PresentationConfig).include_charts:
        text += "\n\n[Chart: GR activity over the period]"

    return text


PRESENTATION = TemplateSchema(
    id=TemplateType.PRESENTATION,
    name="Presentation",
    description=(
        "Management presentation reviewing regulatory changes, risks and GR activity"
    ),
    icon="Presentation",
    requires_addressee=False,
    requires_initiative=False,
    requires_period=True,
    export_formats=frozenset({ExportFormat.PPTX}),
    available_from=frozenset({EntryPoint.INITIATIVE, EntryPoint.DOCUMENT}),
    sections=(
        TemplateSectionSchema("slide_title", "Slide 1: Title", True, _slide_title),
        TemplateSectionSchema("slide_changes", "Slide 2: Key regulatory changes", True, _slide_changes),
        TemplateSectionSchema("slide_risks", "Slide 3: Risks and opportunities", True, _slide_risks),
        TemplateSectionSchema("slide_activity", "Slide 4: GR activity and results", True, _slide_activity),
    ),
)
