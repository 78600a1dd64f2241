"""Tests for the formatting utilities (dates, risk, money, numbering, filenames)."""

from datetime import date

import pytest

from grdocs.formatting import (
    date_sort_key,
    format_currency_range,
    format_date,
    format_period,
    format_risk_level,
    format_stance,
    generate_export_filename,
    generate_outgoing_number,
    is_high_risk,
    non_blank,
    numbered,
    parse_date,
)
from grdocs.models import Company
from grdocs.schema import UnknownTemplateError


class TestDates:
    def test_format_iso_date(self):
        assert format_date("2026-03-15") == "15.03.2026"

    def test_format_datetime_string(self):
        assert format_date("2026-02-10T09:30:00Z") == "10.02.2026"

    def test_format_date_object(self):
        assert format_date(date(2026, 1, 5)) == "05.01.2026"

    def test_unparseable_returned_unchanged(self):
        assert format_date("next spring") == "next spring"

    def test_none_is_empty(self):
        assert format_date(None) == ""

    def test_invalid_calendar_date(self):
        assert parse_date("2026-02-30") is None

    def test_sort_key_puts_unparseable_last(self):
        values = ["2026-01-01", "", "2026-02-01"]
        ordered = sorted(values, key=date_sort_key, reverse=True)
        assert ordered == ["2026-02-01", "2026-01-01", ""]


class TestPeriods:
    def test_month(self):
        assert format_period("2026-02") == "February 2026"

    def test_quarter(self):
        assert format_period("Q1-2026") == "Q1 2026"

    def test_other_value_unchanged(self):
        assert format_period("H1 2026") == "H1 2026"

    def test_empty_uses_default(self):
        assert format_period(None) == "the reporting period"
        assert format_period("  ") == "the reporting period"


class TestRiskAndStance:
    @pytest.mark.parametrize("raw,expected", [
        ("high", "High"),
        ("Critical", "High"),
        ("высокий", "High"),
        ("medium", "Medium"),
        ("low", "Low"),
        ("низкий", "Low"),
        ("minor", "Low"),
        ("Moderate risk", "Medium"),
        ("", "Medium"),
        (None, "Medium"),
    ])
    def test_risk_level(self, raw, expected):
        assert format_risk_level(raw) == expected

    @pytest.mark.parametrize("raw", [
        "below threshold",
        "follow-up needed",
        "allowable",
        "highly unlikely",
    ])
    def test_english_terms_match_whole_words(self, raw):
        assert format_risk_level(raw) == "Medium"

    def test_is_high_risk(self):
        assert is_high_risk("HIGH")
        assert not is_high_risk("medium")

    @pytest.mark.parametrize("raw,expected", [
        ("supports", "supports"),
        ("in favor", "supports"),
        ("neutral", "neutral"),
        ("opposes", "opposes"),
        ("против", "opposes"),
        ("does not support", "opposes"),
        ("doesn't support the draft", "opposes"),
        ("unsupportive", "opposes"),
        ("not in favour", "opposes"),
        ("не поддерживает", "opposes"),
        ("поддерживает", "supports"),
        ("undecided", "unknown"),
        (None, "unknown"),
    ])
    def test_stance(self, raw, expected):
        assert format_stance(raw) == expected


class TestMoney:
    def test_millions(self):
        assert format_currency_range(15_000_000, 45_000_000) == "from 15 million to 45 million som"

    def test_fractional_millions(self):
        assert format_currency_range(15_000_000, 42_500_000) == "from 15 million to 42.5 million som"

    def test_mixed_scales(self):
        assert format_currency_range(500, 2_000_000_000) == "from 500 to 2 billion som"

    def test_thousands(self):
        assert format_currency_range(1_500, 30_000) == "from 1.5 thousand to 30 thousand som"

    def test_zero_range(self):
        assert format_currency_range(0, 0) == "from 0 to 0 som"

    def test_min_rendered_before_max(self):
        text = format_currency_range(2_000_000, 7_000_000)
        assert text.index("2 million") < text.index("7 million")


class TestOutgoingNumber:
    def test_counter_and_year(self):
        company = Company(id="c", name="North Telecom LLC", outgoing_letter_number_counter=101)
        assert generate_outgoing_number(company, 2026) == "NTL-101/2026"

    def test_counter_defaults_to_one(self):
        company = Company(id="c", name="alatoo mining")
        assert generate_outgoing_number(company, 2025) == "AM-1/2025"

    def test_year_defaults_to_clock(self):
        company = Company(id="c", name="Acme")
        assert generate_outgoing_number(company).endswith(f"/{date.today().year}")


class TestExportFilename:
    def test_pdf(self):
        name = generate_export_filename("analytical_note", "North Telecom LLC", "2026-02-18", "pdf")
        assert name == "AnalyticalNote_NorthTelecomLLC_18022026.pdf"

    def test_pptx(self):
        name = generate_export_filename("presentation", "Alatoo Mining", "2026-03-01", "pptx")
        assert name == "Presentation_AlatooMining_01032026.pptx"

    def test_labels(self):
        assert generate_export_filename("gr_report", "X", "2026-01-01", "pdf").startswith("GRReport_")
        assert generate_export_filename(
            "legislative_amendment", "X", "2026-01-01", "pdf"
        ).startswith("LegislativeAmendmentProposal_")

    def test_unknown_template(self):
        with pytest.raises(UnknownTemplateError):
            generate_export_filename("memo", "X", "2026-01-01", "pdf")


class TestTextHelpers:
    def test_numbered(self):
        assert numbered(["a", "b"], suffix=".") == "1. a.\n2. b."

    def test_non_blank(self):
        assert non_blank("  ") is None
        assert non_blank(" x ") == "x"
