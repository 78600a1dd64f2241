"""Tests for the recommendation rule table."""

import pytest

from grdocs.recommendations import (
    LIBRARY,
    MAX_RECOMMENDATIONS,
    MIN_RECOMMENDATIONS,
    get_recommendations,
    select_entries,
)


class TestRecommendationCount:
    @pytest.mark.parametrize("risk", ["high", "medium", "low", "unknown", None])
    @pytest.mark.parametrize("status", ["drafting", "under review", "adopted", "", None])
    def test_between_three_and_six_distinct(self, risk, status):
        items = get_recommendations(risk, status)
        assert MIN_RECOMMENDATIONS <= len(items) <= MAX_RECOMMENDATIONS
        assert len(set(items)) == len(items)
        assert all(item in LIBRARY.values() for item in items)


class TestRules:
    def test_high_risk_under_review(self):
        keys = select_entries("high", "under review")
        assert keys == [
            "official_appeal",
            "regulator_meeting",
            "working_group",
            "alternative_wording",
            "ria_position",
            "parliamentary_hearings",
        ]

    def test_high_risk_adopted(self):
        keys = select_entries("high", "adopted")
        assert len(keys) == 4
        assert "ria_position" not in keys

    def test_medium_risk_adopted_adds_monitoring(self):
        keys = select_entries("medium", "adopted")
        assert keys[-1] == "international_monitoring"
        assert len(keys) == 4

    def test_medium_risk_drafting_adds_ria(self):
        assert "ria_position" in select_entries("medium", "in drafting")

    def test_low_risk(self):
        assert select_entries("low", "drafting") == [
            "impact_note",
            "international_monitoring",
            "leadership_briefing",
        ]

    def test_russian_wording(self):
        assert select_entries("высокий", "на рассмотрении") == select_entries("high", "under review")

    def test_deterministic(self):
        assert get_recommendations("high", "drafting") == get_recommendations("high", "drafting")
