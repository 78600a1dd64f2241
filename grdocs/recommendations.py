"""
Recommendation Rules
====================
Action items for an initiative, chosen from a fixed library by an
explicit rule table: each rule names a risk level, an optional set of
status fragments, and the library entries it contributes.

Every result holds between three and six distinct entries.
"""

from __future__ import annotations

from dataclasses import dataclass

from grdocs.formatting import RISK_HIGH, RISK_LOW, RISK_MEDIUM, format_risk_level


# Ordered: the order is also the fill order for the three-item floor.
LIBRARY: dict[str, str] = {
    "official_appeal": "Prepare an official appeal to the responsible ministry",
    "regulator_meeting": "Arrange a meeting with representatives of the regulator",
    "impact_note": "Prepare an analytical note assessing the impact on the industry",
    "industry_associations": "Hold consultations with industry associations",
    "working_group": "Set up a working group with the key stakeholders",
    "alternative_wording": "Draft an alternative wording of the regulatory act",
    "economic_rationale": "Prepare an economic rationale for the proposed changes",
    "international_monitoring": "Monitor international regulatory practice",
    "public_discussion": "Initiate a public discussion on an industry platform",
    "ria_position": "Submit the company's position within the regulatory impact assessment procedure",
    "leadership_briefing": "Prepare a risk briefing presentation for senior management",
    "parliamentary_hearings": "Secure company participation in parliamentary hearings",
}

MIN_RECOMMENDATIONS = 3
MAX_RECOMMENDATIONS = 6

_DRAFTING = ("development", "drafting", "разработ")
_REVIEW = ("review", "consideration", "рассмотр")
_ADOPTED = ("adopted", "in force", "enacted", "принят", "действ")


@dataclass(frozen=True)
class RecommendationRule:
    risk: str
    entries: tuple[str, ...]
    status_fragments: tuple[str, ...] = ()

    def applies(self, risk: str, status: str) -> bool:
        if risk != self.risk:
            return False
        if not self.status_fragments:
            return True
        return any(fragment in status for fragment in self.status_fragments)


RULES: tuple[RecommendationRule, ...] = (
    RecommendationRule(
        RISK_HIGH,
        ("official_appeal", "regulator_meeting", "working_group", "alternative_wording"),
    ),
    RecommendationRule(
        RISK_HIGH,
        ("ria_position", "parliamentary_hearings"),
        status_fragments=_DRAFTING + _REVIEW,
    ),
    RecommendationRule(
        RISK_MEDIUM,
        ("impact_note", "industry_associations", "economic_rationale"),
    ),
    RecommendationRule(RISK_MEDIUM, ("ria_position",), status_fragments=_DRAFTING),
    RecommendationRule(RISK_MEDIUM, ("international_monitoring",), status_fragments=_ADOPTED),
    RecommendationRule(
        RISK_LOW,
        ("impact_note", "international_monitoring", "leadership_briefing"),
    ),
)


def select_entries(
    risk: str | None, status: str | None, rules: tuple[RecommendationRule, ...] = RULES
) -> list[str]:
    """Library keys selected for the given risk and status, floor applied."""
    risk_label = format_risk_level(risk)
    status_lower = (status or "").lower()

    keys: list[str] = []
    for rule in rules:
        if rule.applies(risk_label, status_lower):
            for key in rule.entries:
                if key not in keys:
                    keys.append(key)

    for key in LIBRARY:
        if len(keys) >= MIN_RECOMMENDATIONS:
            break
        if key not in keys:
            keys.append(key)

    return keys[:MAX_RECOMMENDATIONS]


def get_recommendations(risk: str | None, status: str | None) -> list[str]:
    """Return 3-6 distinct action items for an initiative."""
    return [LIBRARY[key] for key in select_entries(risk, status)]
