"""
Official Letter
===============
Letter to a state body or other addressee about a regulatory initiative.

The letter type (clarification request, statement of position, or
proposal) drives the subject line, the purpose sentence and the list of
requests. The addressee comes from the context, or failing that from the
stakeholder selected in the config.
"""

from __future__ import annotations

from grdocs.formatting import format_date, generate_outgoing_number, numbered
from grdocs.models import Addressee, GenerationContext, OfficialLetterConfig
from grdocs.schema import (
    EntryPoint,
    ExportFormat,
    TemplateSchema,
    TemplateSectionSchema,
    TemplateType,
)

DEFAULT_LETTER_TYPE = "clarification"

_SUBJECTS = {
    "clarification": "Request for clarification regarding the draft regulation in {area} (“{title}”)",
    "position": "On the position of {company} regarding the draft regulation in {area} (“{title}”)",
    "proposal": "Proposals of {company} on the draft regulation in {area} (“{title}”)",
}

_PURPOSES = {
    "clarification": "we would like to request clarification on a number of its provisions",
    "position": "we consider it necessary to set out our company's position on this matter",
    "proposal": "we would like to submit our proposals on this matter",
}

_REQUESTS = {
    "clarification": (
        "Provide official clarification of how the proposed rules will apply in {area}.",
        "Consider amending the draft to reflect the position of market participants.",
        "Arrange a working meeting with industry representatives to discuss the key "
        "provisions of the initiative.",
    ),
    "position": (
        "Take the position of {company} into account when finalising the draft.",
        "Include representatives of {company} in the working group on the initiative.",
        "Inform us of the outcome of the review of this letter.",
    ),
    "proposal": (
        "Consider the proposals of {company} on amending the draft regulation in {area}.",
        "Arrange a working meeting with industry representatives to discuss the proposals.",
        "Provide a reasoned response on each of the proposals.",
    ),
}


def _letter_type(ctx: GenerationContext) -> str:
    letter_type = ctx.config_as(OfficialLetterConfig).letter_type
    return letter_type if letter_type in _SUBJECTS else DEFAULT_LETTER_TYPE


def resolve_addressee(ctx: GenerationContext) -> Addressee | None:
    """The context's addressee, else the stakeholder selected in the config."""
    if ctx.addressee:
        return ctx.addressee

    selected = ctx.config_as(OfficialLetterConfig).selected_stakeholder_id
    if not selected:
        return None
    for stakeholder in ctx.stakeholders:
        if stakeholder.id == selected:
            return Addressee.from_stakeholder(stakeholder)
    return None


def _letterhead(ctx: GenerationContext) -> str:
    number = generate_outgoing_number(ctx.company, ctx.reference_year)
    return f"{ctx.company.name}\n\nRef. No. {number}\nDate: {format_date(ctx.current_date)}"


def _addressee_block(ctx: GenerationContext) -> str:
    addressee = resolve_addressee(ctx)
    if not addressee:
        return "To:\n[Addressee not specified]"

    lines = ["To:", addressee.title, addressee.name, addressee.organization]
    if addressee.address:
        lines.append(addressee.address)
    return "\n".join(line for line in lines if line)


def _greeting(ctx: GenerationContext) -> str:
    addressee = resolve_addressee(ctx)
    if not addressee or not addressee.name:
        return "Dear colleague,"
    return f"Dear {addressee.name},"


def _theme(ctx: GenerationContext) -> str:
    initiative = ctx.initiative
    if not initiative:
        return "Subject: [to be specified]"

    subject = _SUBJECTS[_letter_type(ctx)].format(
        company=ctx.company.name,
        area=initiative.area("regulation"),
        title=initiative.title,
    )
    return f"Subject: {subject}"


def _body(ctx: GenerationContext) -> str:
    initiative = ctx.initiative
    if not initiative:
        return "The body of the letter will be drafted once an initiative has been selected."

    company = ctx.company.name
    area = initiative.area("this field")
    source = initiative.source or "the authorised body"
    purpose = _PURPOSES[_letter_type(ctx)]

    text = (
        f"{company} closely follows the development of regulation in {area}. "
        f"In connection with the review of the initiative “{initiative.title}” "
        f"prepared by {source}, {purpose}."
    )
    if initiative.summary:
        text += f"\n\n{initiative.summary}"
    text += (
        f"\n\nWe believe the proposed changes may have a significant effect on market "
        f"participants. {company} supports a balanced approach to regulation that takes "
        f"into account the interests of all parties concerned, and is ready to take an "
        f"active part in the discussion of this matter."
    )
    return text


def _requests(ctx: GenerationContext) -> str:
    initiative = ctx.initiative
    area = initiative.area("this field") if initiative else "this field"
    items = [
        item.format(company=ctx.company.name, area=area)
        for item in _REQUESTS[_letter_type(ctx)]
    ]
    return numbered(items)


def _attachments(ctx: GenerationContext) -> str:
    initiative = ctx.initiative
    parts: list[str] = []

    if initiative:
        parts.append(f"Analytical brief on the initiative “{initiative.title}”")
        if initiative.full_text_links:
            parts.append("Copy of the draft regulatory act")

    if not parts:
        return "No attachments."
    return numbered(parts)


def _signature(ctx: GenerationContext) -> str:
    title = ctx.company.exec_title or "Chief Executive Officer"
    name = ctx.company.exec_name or ctx.current_user.name
    return f"Sincerely,\n\n{title}\n{name}"


OFFICIAL_LETTER = TemplateSchema(
    id=TemplateType.OFFICIAL_LETTER,
    name="Official letter",
    description=(
        "Official letter to a government body or other addressee "
        "concerning regulatory changes"
    ),
    icon="Mail",
    requires_addressee=True,
    requires_initiative=True,
    requires_period=False,
    export_formats=frozenset({ExportFormat.PDF}),
    available_from=frozenset({EntryPoint.INITIATIVE, EntryPoint.DOCUMENT}),
    sections=(
        TemplateSectionSchema("letterhead", "Letterhead", True, _letterhead),
        TemplateSectionSchema("addressee_block", "Addressee", True, _addressee_block),
        TemplateSectionSchema("greeting", "Greeting", True, _greeting),
        TemplateSectionSchema("theme", "Subject", True, _theme),
        TemplateSectionSchema("body", "Body", True, _body),
        TemplateSectionSchema("requests", "We kindly ask you to:", True, _requests),
        TemplateSectionSchema("attachments", "Attachments", False, _attachments),
        TemplateSectionSchema("signature", "Signature", True, _signature),
    ),
)
