"""
GR Activity Report
==================
Periodic report on government-relations work: monitoring KPIs, regulatory
risks, stakeholder engagement, media activity, key events and the
aggregate financial effect of the monitored initiatives.

All figures are folded over `ctx.all_initiatives` and `ctx.stakeholders`
on every call.

The four KPI blocks and the financial block belong to the standard report
but are declared `required=False` in GR_REPORT: the KPI toggles drop them
through `TemplateSchema.without_optional`, and only optional sections may
be dropped.
"""

from __future__ import annotations

import math

from grdocs.formatting import (
    date_sort_key,
    format_currency_range,
    format_date,
    format_period,
    is_high_risk,
    numbered,
)
from grdocs.models import GenerationContext, MediaMention
from grdocs.schema import (
    EntryPoint,
    ExportFormat,
    TemplateSchema,
    TemplateSectionSchema,
    TemplateType,
)

RECENT_EVENTS_LIMIT = 5

_POSITIVE = ("positiv", "позитив")
_NEGATIVE = ("negativ", "негатив")


def classify_sentiment(mention: MediaMention) -> str:
    """'positive', 'negative' or 'neutral' for a media mention."""
    sentiment = mention.sentiment.lower()
    if any(s in sentiment for s in _POSITIVE):
        return "positive"
    if any(s in sentiment for s in _NEGATIVE):
        return "negative"
    return "neutral"


def _header(ctx: GenerationContext) -> str:
    return (
        f"GR activity report of {ctx.company.name}\n\n"
        f"Period: {format_period(ctx.period)}\n"
        f"Date prepared: {format_date(ctx.current_date)}"
    )


def _kpi_monitoring(ctx: GenerationContext) -> str:
    initiatives = ctx.all_initiatives
    if not initiatives:
        return "No initiatives are currently under monitoring."

    by_status: dict[str, int] = {}
    for initiative in initiatives:
        status = initiative.status or "status not specified"
        by_status[status] = by_status.get(status, 0) + 1
    high_risk = sum(1 for i in initiatives if is_high_risk(i.risk))

    breakdown = "\n".join(f"  - {status}: {count}" for status, count in by_status.items())
    return (
        f"Total initiatives under monitoring: {len(initiatives)}\n\n"
        f"Breakdown by status:\n{breakdown}\n\n"
        f"High-risk initiatives: {high_risk}"
    )


def _kpi_risks(ctx: GenerationContext) -> str:
    high_risk = [i for i in ctx.all_initiatives if is_high_risk(i.risk)]
    if not high_risk:
        return "There are no high-risk initiatives."

    listing = numbered(
        f"“{i.title}” (status: {i.status or 'not specified'})" for i in high_risk
    )
    return (
        f"Number of high-risk initiatives: {len(high_risk)}\n\n"
        f"List:\n{listing}"
    )


def _kpi_stakeholders(ctx: GenerationContext) -> str:
    stakeholders = ctx.stakeholders
    if not stakeholders:
        return "Information about stakeholders is unavailable."

    total = 0
    contacted = 0
    with_outcome = 0
    for stakeholder in stakeholders:
        count = len(stakeholder.interactions)
        total += count
        if count:
            contacted += 1
        with_outcome += sum(1 for i in stakeholder.interactions if i.outcome.strip())

    if total:
        effectiveness = f"{math.floor(with_outcome / total * 100 + 0.5)}%"
    else:
        effectiveness = "not available"

    return (
        f"Total interactions: {total}\n"
        f"Unique stakeholders contacted: {contacted}\n"
        f"Stakeholders in the database: {len(stakeholders)}\n"
        f"Interactions with a recorded outcome: {effectiveness}"
    )


def _kpi_media(ctx: GenerationContext) -> str:
    counts = {"positive": 0, "neutral": 0, "negative": 0}
    for initiative in ctx.all_initiatives:
        for mention in initiative.media_mentions:
            counts[classify_sentiment(mention)] += 1

    total = sum(counts.values())
    if not total:
        return "No media mentions were recorded for the monitored initiatives."

    index = math.floor((counts["positive"] - counts["negative"]) / total * 100 + 0.5)
    sign = "+" if index > 0 else ""
    return (
        f"Total media mentions: {total}\n"
        f"  - Positive: {counts['positive']}\n"
        f"  - Neutral: {counts['neutral']}\n"
        f"  - Negative: {counts['negative']}\n\n"
        f"Sentiment index: {sign}{index}%"
    )


def _events(ctx: GenerationContext) -> str:
    initiatives = ctx.all_initiatives
    if not initiatives:
        return "There were no key events in the reporting period."

    recent = sorted(initiatives, key=lambda i: date_sort_key(i.last_updated), reverse=True)
    lines = []
    for initiative in recent[:RECENT_EVENTS_LIMIT]:
        latest = initiative.latest_version
        change = latest.changes if latest else "information updated"
        lines.append(f"[{format_date(initiative.last_updated)}] “{initiative.title}”: {change}")
    return numbered(lines)


def _financial(ctx: GenerationContext) -> str:
    initiatives = ctx.all_initiatives
    impacts = [
        i.estimated_economic_impact for i in initiatives if i.estimated_economic_impact
    ]
    if not impacts:
        return (
            "An aggregate estimate of the financial effect is not yet available. "
            "The economic impact of the monitored initiatives requires further assessment."
        )

    total_min = sum(impact.min for impact in impacts)
    total_max = sum(impact.max for impact in impacts)
    return (
        f"Aggregate estimate of the economic impact of the monitored initiatives:\n\n"
        f"Total potential effect: {format_currency_range(total_min, total_max)}\n"
        f"Initiatives with an estimated effect: {len(impacts)} of {len(initiatives)}\n\n"
        f"Note: the estimate is preliminary and may be revised as the parameters "
        f"of the regulatory changes become clearer."
    )


def _conclusions(ctx: GenerationContext) -> str:
    period = format_period(ctx.period)
    initiatives = ctx.all_initiatives
    if not initiatives:
        return (
            f"No initiatives were under monitoring for {ctx.company.name} in {period}. "
            f"Conclusions will be prepared once monitoring data is available."
        )

    high_risk = sum(1 for i in initiatives if is_high_risk(i.risk))
    recommendations = numbered([
        "Continue monitoring the key high-risk initiatives.",
        "Step up engagement with the responsible government bodies.",
        "Prepare position papers on the most significant initiatives.",
        "Update the assessment of the economic impact.",
    ])
    return (
        f"In {period} systematic work was carried out to monitor and analyse regulatory "
        f"changes affecting {ctx.company.name}.\n\n"
        f"{len(initiatives)} initiatives are under monitoring, of which {high_risk} carry "
        f"a high level of risk and require priority attention.\n\n"
        f"Recommendations:\n{recommendations}"
    )


GR_REPORT = TemplateSchema(
    id=TemplateType.GR_REPORT,
    name="GR activity report",
    description=(
        "Periodic report on government-relations activity with KPIs and analytics"
    ),
    icon="BarChart3",
    requires_addressee=False,
    requires_initiative=False,
    requires_period=True,
    export_formats=frozenset({ExportFormat.PDF}),
    available_from=frozenset({EntryPoint.REPORT, EntryPoint.DOCUMENT}),
    sections=(
        TemplateSectionSchema("header", "Header", True, _header),
        TemplateSectionSchema("kpi_monitoring", "1.1. Monitoring of legislative initiatives", False, _kpi_monitoring),
        TemplateSectionSchema("kpi_risks", "1.2. Regulatory risks", False, _kpi_risks),
        TemplateSectionSchema("kpi_stakeholders", "1.3. Stakeholder engagement", False, _kpi_stakeholders),
        TemplateSectionSchema("kpi_media", "1.4. Media activity", False, _kpi_media),
        TemplateSectionSchema("events", "2. Key events and achievements", True, _events),
        TemplateSectionSchema("financial", "3. Financial effect", False, _financial),
        TemplateSectionSchema("conclusions", "4. Conclusions and recommendations", True, _conclusions),
    ),
)
