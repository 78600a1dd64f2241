"""
Context Validator
=================
Caller-side precondition check of a GenerationContext against a
template's `requires_*` flags and its template options.

The engine itself never enforces these: generators degrade to
placeholder text instead. Callers that need a hard precondition use
`ContextValidator.require`, or inspect the report and apply policy.

Outputs:
  - Errors   -- a declared requirement is missing and policy blocks it.
  - Warnings -- the document will contain placeholders.
  - Info     -- the document will contain "unavailable" sentences.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum

from grdocs._icons import ICON_BLOCK, ICON_OK, SEVERITY_ICONS
from grdocs.formatting import non_blank
from grdocs.models import GenerationContext, LegislativeAmendmentConfig
from grdocs.policy_engine import GenerationPolicy
from grdocs.schema import TemplateSchema, TemplateType
from grdocs.templates.official_letter import resolve_addressee


# ---------------------------------------------------------------------------
# Models
# ---------------------------------------------------------------------------

class Severity(str, Enum):
    ERROR = "ERROR"
    WARNING = "WARNING"
    INFO = "INFO"


class MissingRequiredContextError(ValueError):
    """A context lacks data that a template declares as required."""

    def __init__(self, template_id: str, missing: list[str]) -> None:
        self.template_id = template_id
        self.missing = missing
        super().__init__(
            f"Template '{template_id}' requires: " + ", ".join(missing)
        )


@dataclass
class Finding:
    severity: Severity
    code: str
    message: str
    field: str | None = None

    @property
    def icon(self) -> str:
        return SEVERITY_ICONS.get(self.severity.value, "[?]")

    def to_dict(self) -> dict[str, str]:
        d = {"severity": self.severity.value, "code": self.code, "message": self.message}
        if self.field:
            d["field"] = self.field
        return d

    def __str__(self) -> str:
        loc = f" [{self.field}]" if self.field else ""
        return f"{self.icon} {self.severity.value}{loc}: {self.message}"


@dataclass
class ContextReport:
    template_id: str
    findings: list[Finding] = field(default_factory=list)

    @property
    def errors(self) -> list[Finding]:
        return [f for f in self.findings if f.severity == Severity.ERROR]

    @property
    def warnings(self) -> list[Finding]:
        return [f for f in self.findings if f.severity == Severity.WARNING]

    @property
    def infos(self) -> list[Finding]:
        return [f for f in self.findings if f.severity == Severity.INFO]

    @property
    def is_blocked(self) -> bool:
        return len(self.errors) > 0

    def summary(self) -> str:
        lines = [
            f"=== CONTEXT CHECK: {self.template_id} ===",
            f"Errors: {len(self.errors)} | Warnings: {len(self.warnings)} | Info: {len(self.infos)}",
            "",
        ]
        if self.is_blocked:
            lines.append(f"{ICON_BLOCK} GENERATION BLOCKED -- resolve errors or use --force.\n")
        elif not self.findings:
            lines.append(f"{ICON_OK} Context satisfies every template requirement.")

        for f in self.findings:
            lines.append(str(f))

        return "\n".join(lines)


# ---------------------------------------------------------------------------
# Validator
# ---------------------------------------------------------------------------

_POLICY_SEVERITY = {
    "block": Severity.ERROR,
    "warn": Severity.WARNING,
    "silent": Severity.INFO,
}


class ContextValidator:
    """Checks a context against a schema, grading gaps by policy."""

    def __init__(self, policy: GenerationPolicy | None = None) -> None:
        self.policy = policy or GenerationPolicy()

    def missing_requirements(
        self, schema: TemplateSchema, context: GenerationContext
    ) -> list[str]:
        """Names of the `requires_*` inputs the context does not provide."""
        missing = []
        if schema.requires_initiative and context.initiative is None:
            missing.append("initiative")
        if schema.requires_addressee and self._addressee(schema, context) is None:
            missing.append("addressee")
        if schema.requires_period and not non_blank(context.period):
            missing.append("period")
        return missing

    def require(self, schema: TemplateSchema, context: GenerationContext) -> None:
        """Raise MissingRequiredContextError if a declared requirement is missing."""
        missing = self.missing_requirements(schema, context)
        if missing:
            raise MissingRequiredContextError(schema.id.value, missing)

    def validate(self, schema: TemplateSchema, context: GenerationContext) -> ContextReport:
        report = ContextReport(template_id=schema.id.value)

        self._check_requirements(schema, context, report)
        self._check_config(schema, context, report)
        self._check_domain_data(schema, context, report)

        return report

    # --- Checks ---

    @staticmethod
    def _addressee(schema: TemplateSchema, context: GenerationContext):
        if schema.id == TemplateType.OFFICIAL_LETTER:
            return resolve_addressee(context)
        return context.addressee

    def _graded(self, policy_key: str) -> Severity:
        return _POLICY_SEVERITY[self.policy.severity(policy_key)]

    def _check_requirements(
        self, schema: TemplateSchema, context: GenerationContext, report: ContextReport
    ) -> None:
        messages = {
            "initiative": (
                "CTX-INIT-001",
                "missing_initiative_severity",
                "Template requires an initiative; initiative-specific sections will be placeholders.",
            ),
            "addressee": (
                "CTX-ADDR-001",
                "missing_addressee_severity",
                "Template requires an addressee; the addressee block will be a placeholder.",
            ),
            "period": (
                "CTX-PER-001",
                "missing_period_severity",
                "Template requires a reporting period; a generic period label will be used.",
            ),
        }
        for name in self.missing_requirements(schema, context):
            code, policy_key, message = messages[name]
            report.findings.append(Finding(
                severity=self._graded(policy_key),
                code=code,
                message=message,
                field=name,
            ))

    def _check_config(
        self, schema: TemplateSchema, context: GenerationContext, report: ContextReport
    ) -> None:
        if schema.id != TemplateType.LEGISLATIVE_AMENDMENT:
            return

        config = context.config_as(LegislativeAmendmentConfig)
        for name, label in (("target_act", "target act"), ("change_goal", "goal of the change")):
            if not non_blank(getattr(config, name)):
                report.findings.append(Finding(
                    severity=self._graded("missing_config_severity"),
                    code="CTX-CFG-001",
                    message=f"No {label} given; a bracketed placeholder will be used.",
                    field=f"config.{name}",
                ))

    def _check_domain_data(
        self, schema: TemplateSchema, context: GenerationContext, report: ContextReport
    ) -> None:
        severity = self._graded("empty_data_severity")
        uses_portfolio = schema.id in (TemplateType.GR_REPORT, TemplateType.PRESENTATION)

        if not context.stakeholders:
            report.findings.append(Finding(
                severity=severity,
                code="CTX-DATA-001",
                message="No stakeholders in context; stakeholder sections will say so.",
                field="stakeholders",
            ))
        if uses_portfolio and not context.all_initiatives:
            report.findings.append(Finding(
                severity=severity,
                code="CTX-DATA-002",
                message="No monitored initiatives in context; KPI sections will be empty.",
                field="all_initiatives",
            ))
