"""
Formatting & Normalization
==========================
Pure helpers shared by every section generator.

None of these raise on malformed domain data: an unparseable date is
returned as given, an unknown risk or stance falls back to a default
label. Partially populated records still produce readable prose.
"""

from __future__ import annotations

import re
from datetime import date, datetime

from grdocs.models import Company
from grdocs.schema import TemplateType, to_template_type


RISK_HIGH = "High"
RISK_MEDIUM = "Medium"
RISK_LOW = "Low"
RISK_LEVELS = (RISK_HIGH, RISK_MEDIUM, RISK_LOW)

STANCE_SUPPORTS = "supports"
STANCE_NEUTRAL = "neutral"
STANCE_OPPOSES = "opposes"
STANCE_UNKNOWN = "unknown"
STANCES = (STANCE_SUPPORTS, STANCE_NEUTRAL, STANCE_OPPOSES, STANCE_UNKNOWN)

CURRENCY = "som"

# Checked in order; first match wins. English terms match whole words,
# Russian entries are stems and match anywhere.
_RISK_VOCABULARY: tuple[tuple[str, re.Pattern[str]], ...] = (
    (RISK_HIGH, re.compile(r"\b(?:high|critical)\b|высок|критич")),
    (RISK_MEDIUM, re.compile(r"\b(?:medium|moderate)\b|средн|умерен")),
    (RISK_LOW, re.compile(r"\b(?:low|minor)\b|низк")),
)

# Negated support reads as opposition and must be checked before "support".
_STANCE_VOCABULARY: tuple[tuple[str, re.Pattern[str]], ...] = (
    (
        STANCE_OPPOSES,
        re.compile(
            r"(?:\bnot|n't|\bnever)\s+(?:in\s+)?(?:support|favou?r)"
            r"|\bun(?:support|favou?r)|\bне\s*поддерж"
        ),
    ),
    (STANCE_SUPPORTS, re.compile(r"support|favou?r|поддерж")),
    (STANCE_NEUTRAL, re.compile(r"neutral|нейтрал")),
    (STANCE_OPPOSES, re.compile(r"oppos|against|оппозиц|против")),
)

EXPORT_LABELS: dict[TemplateType, str] = {
    TemplateType.ANALYTICAL_NOTE: "AnalyticalNote",
    TemplateType.LEGISLATIVE_AMENDMENT: "LegislativeAmendmentProposal",
    TemplateType.OFFICIAL_LETTER: "OfficialLetter",
    TemplateType.GR_REPORT: "GRReport",
    TemplateType.PRESENTATION: "Presentation",
}

_ISO_PREFIX = re.compile(r"^\s*(\d{4})-(\d{2})-(\d{2})")


# ---------------------------------------------------------------------------
# Dates
# ---------------------------------------------------------------------------

def parse_date(value: str | date | datetime | None) -> date | None:
    """Parse an ISO-like date (with or without a time part); None if unparseable."""
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if not isinstance(value, str):
        return None

    match = _ISO_PREFIX.match(value)
    if not match:
        return None
    try:
        return date(int(match.group(1)), int(match.group(2)), int(match.group(3)))
    except ValueError:
        return None


def format_date(value: str | date | datetime | None) -> str:
    """Format a date as DD.MM.YYYY, returning unparseable input unchanged."""
    parsed = parse_date(value)
    if parsed is None:
        return "" if value is None else str(value)
    return parsed.strftime("%d.%m.%Y")


_MONTHS = (
    "January", "February", "March", "April", "May", "June",
    "July", "August", "September", "October", "November", "December",
)
_MONTH_PERIOD = re.compile(r"^(\d{4})-(\d{2})$")
_QUARTER_PERIOD = re.compile(r"^Q([1-4])-(\d{4})$", re.IGNORECASE)


def format_period(period: str | None, default: str = "the reporting period") -> str:
    """
    Human label for a reporting period.

    '2026-02' -> 'February 2026', 'Q1-2026' -> 'Q1 2026'; any other
    non-empty value is returned unchanged.
    """
    if period is None or not str(period).strip():
        return default
    period = str(period).strip()

    month = _MONTH_PERIOD.match(period)
    if month and 1 <= int(month.group(2)) <= 12:
        return f"{_MONTHS[int(month.group(2)) - 1]} {month.group(1)}"

    quarter = _QUARTER_PERIOD.match(period)
    if quarter:
        return f"Q{quarter.group(1)} {quarter.group(2)}"

    return period


def date_sort_key(value: str | None) -> date:
    """Sort key for "most recent first" orderings; unparseable dates sort last."""
    return parse_date(value) or date.min


# ---------------------------------------------------------------------------
# Risk & Stance
# ---------------------------------------------------------------------------

def _match_vocabulary(
    value: object, vocabulary: tuple[tuple[str, re.Pattern[str]], ...], default: str
) -> str:
    if not isinstance(value, str):
        return default
    lower = value.lower()
    for label, pattern in vocabulary:
        if pattern.search(lower):
            return label
    return default


def format_risk_level(risk: str | None) -> str:
    """Canonicalize any risk wording to High / Medium / Low (default Medium)."""
    return _match_vocabulary(risk, _RISK_VOCABULARY, RISK_MEDIUM)


def is_high_risk(risk: str | None) -> bool:
    return format_risk_level(risk) == RISK_HIGH


def format_stance(position: str | None) -> str:
    """Map a stakeholder position to supports / neutral / opposes / unknown."""
    return _match_vocabulary(position, _STANCE_VOCABULARY, STANCE_UNKNOWN)


# ---------------------------------------------------------------------------
# Money
# ---------------------------------------------------------------------------

def _format_amount(value: float) -> str:
    for threshold, unit in ((1_000_000_000, " billion"), (1_000_000, " million"), (1_000, " thousand")):
        if abs(value) >= threshold:
            scaled = value / threshold
            if float(scaled).is_integer():
                return f"{int(scaled)}{unit}"
            return f"{scaled:.1f}{unit}"
    if float(value).is_integer():
        return str(int(value))
    return str(value)


def format_currency_range(min_value: float, max_value: float) -> str:
    """E.g. format_currency_range(15_000_000, 45_000_000) -> 'from 15 million to 45 million som'."""
    return f"from {_format_amount(min_value)} to {_format_amount(max_value)} {CURRENCY}"


# ---------------------------------------------------------------------------
# Numbers & Filenames
# ---------------------------------------------------------------------------

def generate_outgoing_number(company: Company, year: int | None = None) -> str:
    """
    Outgoing letter number: "<ABBR>-<counter>/<year>".

    The abbreviation is the upper-cased first letter of each word of the
    company name; the counter defaults to 1. When `year` is not given the
    current calendar year is read from the clock.
    """
    abbreviation = "".join(word[0].upper() for word in company.name.split())
    counter = company.outgoing_letter_number_counter
    if counter is None:
        counter = 1
    if year is None:
        year = date.today().year
    return f"{abbreviation}-{counter}/{year}"


def generate_export_filename(
    template_id: TemplateType | str,
    company_name: str,
    date_value: str,
    fmt: str,
) -> str:
    """
    E.g. 'AnalyticalNote_NorthTelecomLLC_18022026.pdf'.

    Raises UnknownTemplateError for an unregistered template id.
    """
    label = EXPORT_LABELS[to_template_type(template_id)]
    company = re.sub(r"\s+", "", company_name)
    stamp = re.sub(r"[.\-/\s]", "", format_date(date_value))
    extension = fmt.lstrip(".").lower()
    return f"{label}_{company}_{stamp}.{extension}"


# ---------------------------------------------------------------------------
# Text helpers
# ---------------------------------------------------------------------------

def numbered(items, start: int = 1, suffix: str = "") -> str:
    """Render items as a '1. item' list, one per line."""
    return "\n".join(f"{i}. {item}{suffix}" for i, item in enumerate(items, start))


def non_blank(value: str | None) -> str | None:
    """Treat empty and whitespace-only strings as missing."""
    if value is None or not str(value).strip():
        return None
    return str(value).strip()
