"""
Legislative Amendment Proposal
==============================
Formal proposal to amend a regulatory act, with economic, social and
(optionally) international rationale.

The target act and the goal of the change come from the template
config; when absent they render as bracketed placeholders.
"""

from __future__ import annotations

from grdocs.formatting import format_currency_range, format_date, non_blank, numbered
from grdocs.models import GenerationContext, LegislativeAmendmentConfig
from grdocs.schema import (
    EntryPoint,
    ExportFormat,
    TemplateSchema,
    TemplateSectionSchema,
    TemplateType,
)
from grdocs.templates.analytical_note import DEFAULT_GR_CENTER

TARGET_ACT_PLACEHOLDER = "[target act not specified]"
CHANGE_GOAL_PLACEHOLDER = "[goal of the change not specified]"


def _target_act(ctx: GenerationContext) -> str:
    return non_blank(ctx.config_as(LegislativeAmendmentConfig).target_act) or TARGET_ACT_PLACEHOLDER


def _header(ctx: GenerationContext) -> str:
    target_act = _target_act(ctx)
    change_goal = (
        non_blank(ctx.config_as(LegislativeAmendmentConfig).change_goal)
        or CHANGE_GOAL_PLACEHOLDER
    )
    gr_center = ctx.company.gr_center_name or DEFAULT_GR_CENTER
    addressee = ctx.addressee.name if ctx.addressee else "Authorised body"

    return (
        f"Proposal to amend {target_act}\n\n"
        f"Date: {format_date(ctx.current_date)}\n"
        f"From: {ctx.company.name} (via {gr_center})\n"
        f"To: {addressee}\n"
        f"Subject: On the need to amend {target_act} for the purpose of {change_goal}"
    )


def _problem(ctx: GenerationContext) -> str:
    initiative = ctx.initiative
    if not initiative:
        return "A description of the problem will be added."

    area = initiative.area("this field")
    text = (
        f"Regulation in {area} currently contains a number of gaps and contradictions "
        f"that adversely affect market participants."
    )
    if initiative.summary:
        text += f"\n\n{initiative.summary}"
    text += (
        "\n\nThe current rules do not fully reflect present-day conditions and create "
        "legal uncertainty for businesses. The situation calls for a prompt legislative response."
    )
    return text


def _changes(ctx: GenerationContext) -> str:
    target_act = _target_act(ctx)
    return (
        f"It is proposed to amend {target_act} by setting it out in the following wording:\n\n"
        f"[Text of the proposed wording]\n\n"
        f"The proposed changes aim to close the identified gaps in legal regulation "
        f"and to create conditions for the sustainable development of the industry."
    )


def _rationale(ctx: GenerationContext) -> str:
    initiative = ctx.initiative
    config = ctx.config_as(LegislativeAmendmentConfig)

    impact = initiative.estimated_economic_impact if initiative else None
    if impact:
        effect = (
            f"The estimated economic effect is "
            f"{format_currency_range(impact.min, impact.max)}."
        )
    else:
        effect = "A detailed assessment of the economic effect requires further analysis."

    economic = (
        f"Adopting the proposed changes will reduce regulatory costs for market participants. "
        f"{effect} "
        f"The changes will make the industry more attractive to investors and create "
        f"a predictable regulatory environment."
    )
    social = (
        "The proposed changes aim to improve the quality and accessibility of services for "
        "end consumers. A better regulatory framework will balance the interests of business, "
        "the state and society and will support competition."
    )

    text = (
        f"3.1. Economic rationale:\n{economic}\n\n"
        f"3.2. Social rationale:\n{social}"
    )

    if config.include_international:
        international = (
            "International practice shows that a number of jurisdictions (the EU, the United "
            "Kingdom, the Republic of Korea) have addressed similar issues through dedicated "
            "regulatory acts that provide balanced regulation. This experience should be taken "
            "into account when drafting national legislation."
        )
        text += f"\n\n3.3. International experience:\n{international}"

    return text


def _results(ctx: GenerationContext) -> str:
    initiative = ctx.initiative
    area = initiative.area("the industry") if initiative else "the industry"

    text = "Adopting the proposed changes will ensure:\n\n" + numbered([
        f"Removal of legal uncertainty in {area}.",
        "Favourable conditions for the development of the industry and for investment.",
        "Better quality of services for end consumers.",
        "A predictable and stable regulatory environment.",
    ])

    if initiative and initiative.opportunities:
        text += f"\n\nAdditional opportunities:\n{numbered(initiative.opportunities)}"

    return text


LEGISLATIVE_AMENDMENT = TemplateSchema(
    id=TemplateType.LEGISLATIVE_AMENDMENT,
    name="Legislative amendment proposal",
    description=(
        "Official proposal to amend a regulatory act, with rationale "
        "and expected results"
    ),
    icon="Scale",
    requires_addressee=True,
    requires_initiative=True,
    requires_period=False,
    export_formats=frozenset({ExportFormat.PDF}),
    available_from=frozenset({EntryPoint.INITIATIVE, EntryPoint.DOCUMENT}),
    sections=(
        TemplateSectionSchema("header", "Header", True, _header),
        TemplateSectionSchema("problem", "1. Existing problem", True, _problem),
        TemplateSectionSchema("changes", "2. Proposed changes", True, _changes),
        TemplateSectionSchema("rationale", "3. Rationale for the proposed changes", True, _rationale),
        TemplateSectionSchema("results", "4. Expected results", True, _results),
    ),
)
