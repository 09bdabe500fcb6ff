"""
Unit tests for the milestone countdown and zodiac lookup.
"""

from datetime import datetime

import pytest
from domain.services.milestones import ANNIVERSARY_LABEL, LOADING_LABEL, next_milestone
from domain.services.zodiac import zodiac_sign
from domain.value_objects.time_models import Milestone


class TestNextMilestone:
    """Tests for next_milestone."""

    def test_first_milestone_from_day_zero(self):
        result = next_milestone("2024-01-01", datetime(2024, 1, 1, 18, 0))

        assert result == Milestone(days_left=100, label="Milestone 100 days", target_date="2024-04-10")

    def test_picks_first_milestone_after_days_passed(self):
        """484 days in, the next milestone is 730."""
        result = next_milestone("2023-02-14", datetime(2024, 6, 12, 15, 30))

        assert result.label == "Milestone 730 days"
        assert result.target_date == "2025-02-13"
        assert result.days_left == 246

    def test_milestone_reached_today_moves_to_next(self):
        """On day 100 itself the 100-day milestone is no longer "next"."""
        result = next_milestone("2024-01-01", datetime(2024, 4, 10))

        assert result.label == "Milestone 200 days"
        assert result.days_left == 100

    def test_anniversary_after_all_milestones(self):
        result = next_milestone("2010-03-01", datetime(2024, 6, 12))

        assert result.label == ANNIVERSARY_LABEL
        assert result.target_date == "2025-03-01"
        assert result.days_left == 262

    def test_anniversary_today_rolls_to_next_year(self):
        result = next_milestone("2010-06-12", datetime(2024, 6, 12, 8, 0))

        assert result.target_date == "2025-06-12"
        assert result.days_left == 365

    @pytest.mark.parametrize("start", ["2024-01-01", "2020-02-29", "2016-06-11", "2010-06-13"])
    def test_target_is_always_after_today(self, start):
        today = datetime(2024, 6, 12)
        result = next_milestone(start, today)

        assert result.days_left >= 0
        assert result.target_date > today.date().isoformat()

    @pytest.mark.parametrize("start", ["", "garbage", None])
    def test_invalid_start_is_loading(self, start):
        assert next_milestone(start, datetime(2024, 6, 12)) == Milestone(0, LOADING_LABEL, "")


class TestZodiacSign:
    """Tests for zodiac_sign."""

    @pytest.mark.parametrize(
        "dob,sign",
        [
            ("1998-06-13", "Gemini"),
            ("1999-11-02", "Scorpio"),
            ("2000-01-19", "Capricorn"),
            ("2000-01-20", "Aquarius"),
            ("2000-12-25", "Capricorn"),
            ("2000-03-21", "Aries"),
        ],
    )
    def test_sign_boundaries(self, dob, sign):
        assert zodiac_sign(dob) == sign

    @pytest.mark.parametrize("dob", ["", None, "31/12/2000"])
    def test_unusable_dob(self, dob):
        assert zodiac_sign(dob) == ""
