"""
Tests for the aggregation engine.

Scenarios:
  A) weekly average and trend over fixed records and a fixed "today"
  B) half split: each half averaged over its own days only
  C) streak walks back from today and stops at the first gap
  D) extremes over the whole history, ties to the earlier record
  E) empty input → neutral results everywhere
"""
from __future__ import annotations

from datetime import date

import pytest

from diary_insight.services.aggregation import (
    Trend,
    current_streak,
    find_extremes,
    first_record_by_date,
    half_delta,
    points_for_window,
    summarize_window,
    trend_label,
    weekly_summary,
)
from diary_insight.services.dates import custom_window, month_window, trailing_window
from diary_insight.services.scoring import score_from_rating

TODAY = date(2024, 5, 2)


# ---------------------------------------------------------------------------
# Points
# ---------------------------------------------------------------------------

class TestPoints:
    def test_one_point_per_day_with_nulls(self, rec):
        points = points_for_window([rec("2024-05-01", 8)], trailing_window(TODAY, 7))
        assert [p.date for p in points][0] == "2024-04-26"
        assert [p.label for p in points][-1] == "5/2"
        assert [p.score for p in points] == [None] * 5 + [78, None]
        assert points[5].rating == 8

    def test_first_record_of_the_day_wins(self, rec):
        records = [rec("2024-05-01", 9), rec("2024-05-01", 1)]
        points = points_for_window(records, custom_window(date(2024, 5, 1), date(2024, 5, 1)))
        assert points[0].rating == 9
        assert first_record_by_date(records)["2024-05-01"] is records[0]

    def test_out_of_range_rating_clamped(self, rec):
        points = points_for_window([rec("2024-05-02", 42)], trailing_window(TODAY, 1))
        assert points[0].rating == 10
        assert points[0].score == 100

    def test_records_outside_window_ignored(self, rec):
        summary = weekly_summary([rec("2024-04-01", 10)], TODAY)
        assert summary.days_with_entry == 0
        assert summary.average is None


# ---------------------------------------------------------------------------
# Window statistics
# ---------------------------------------------------------------------------

class TestWindowSummary:
    def test_two_day_scenario_weekly(self, rec):
        records = [rec("2024-05-01", 8), rec("2024-05-02", 2)]
        summary = weekly_summary(records, TODAY)
        assert summary.days_with_entry == 2
        assert summary.average == round((score_from_rating(8) + score_from_rating(2)) / 2)
        assert summary.average == 44
        # Both days fall in the second half of the 7-day list.
        assert summary.delta == 0
        assert summary.trend == Trend.STABLE

    def test_two_day_scenario_custom_window_declines(self, rec):
        records = [rec("2024-05-01", 8), rec("2024-05-02", 2)]
        summary = summarize_window(records, custom_window(date(2024, 5, 2), date(2024, 5, 1)))
        assert summary.start == "2024-05-01"
        assert summary.average == 44
        assert summary.delta == -67
        assert summary.trend == Trend.DECLINING

    def test_improving_week(self, rec):
        records = [rec("2024-04-26", 3), rec("2024-04-27", 3), rec("2024-04-30", 8), rec("2024-05-02", 8)]
        summary = weekly_summary(records, TODAY)
        assert summary.delta == 78 - 22
        assert summary.trend == Trend.IMPROVING

    def test_halves_use_their_own_days_only(self, rec):
        # First half: one day at 22. Second half: days at 78 and 100.
        records = [rec("2024-04-26", 3), rec("2024-04-29", 8), rec("2024-05-02", 10)]
        points = points_for_window(records, trailing_window(TODAY, 7))
        assert half_delta(points) == round((78 + 100) / 2 - 22)

    def test_month_window(self, rec):
        records = [rec("2024-02-01", 10), rec("2024-02-29", 1), rec("2024-03-01", 10)]
        summary = summarize_window(records, month_window(2024, 2))
        assert len(summary.points) == 29
        assert summary.days_with_entry == 2
        assert summary.average == 50
        assert summary.trend == Trend.DECLINING

    def test_average_always_in_range(self, rec):
        records = [rec(f"2024-05-0{d}", m) for d, m in [(1, -5), (2, 50)]]
        summary = summarize_window(records, custom_window(date(2024, 5, 1), date(2024, 5, 2)))
        assert 0 <= summary.average <= 100

    def test_empty_records_are_neutral(self):
        summary = weekly_summary([], TODAY)
        assert summary.days_with_entry == 0
        assert summary.average is None
        assert summary.delta == 0
        assert summary.trend == Trend.STABLE
        assert len(summary.points) == 7


class TestTrendLabel:
    @pytest.mark.parametrize("delta, label", [
        (6, Trend.IMPROVING),
        (5, Trend.STABLE),
        (0, Trend.STABLE),
        (-5, Trend.STABLE),
        (-6, Trend.DECLINING),
    ])
    def test_fixed_thresholds(self, delta, label):
        assert trend_label(delta) == label


# ---------------------------------------------------------------------------
# Streak
# ---------------------------------------------------------------------------

class TestStreak:
    DAYS = ["2024-05-02", "2024-05-01", "2024-04-30", "2024-04-29"]

    def test_four_consecutive_days(self, rec):
        assert current_streak([rec(d) for d in self.DAYS], TODAY) == 4

    def test_gap_yesterday_caps_at_one(self, rec):
        days = [d for d in self.DAYS if d != "2024-05-01"]
        assert current_streak([rec(d) for d in days], TODAY) == 1

    def test_gap_two_days_back(self, rec):
        days = [d for d in self.DAYS if d != "2024-04-30"]
        assert current_streak([rec(d) for d in days], TODAY) == 2

    def test_no_record_today_is_zero(self, rec):
        assert current_streak([rec("2024-05-01")], TODAY) == 0

    def test_ignores_window_limits_and_duplicates(self, rec):
        days = [f"2024-04-{d:02d}" for d in range(1, 31)] + ["2024-05-01", "2024-05-02", "2024-05-02"]
        assert current_streak([rec(d) for d in days], TODAY) == 32

    def test_empty(self):
        assert current_streak([], TODAY) == 0

    def test_reaches_first_day_of_calendar(self, rec):
        records = [rec("0001-01-01"), rec("0001-01-02")]
        assert current_streak(records, date(1, 1, 2)) == 2

    def test_weekly_summary_at_first_day_of_calendar(self, rec):
        s = weekly_summary([rec("0001-01-01", 8)], date.min)
        assert [p.score for p in s.points] == [78]
        assert s.trend == Trend.STABLE


# ---------------------------------------------------------------------------
# Extremes
# ---------------------------------------------------------------------------

class TestExtremes:
    def test_best_and_worst_ties_go_first(self, rec):
        records = [
            rec("2024-05-01", 5, entry_id=1),
            rec("2024-05-02", 9, entry_id=2),
            rec("2024-05-03", 9, entry_id=3),
            rec("2024-05-04", 2, entry_id=4),
            rec("2024-05-05", 2, entry_id=5),
        ]
        result = find_extremes(records)
        assert result.best.entry_id == 2
        assert result.best.score == 89
        assert result.worst.entry_id == 4
        assert result.worst.date == "2024-05-04"

    def test_single_record_is_both(self, rec):
        result = find_extremes([rec("2024-05-01", 6, entry_id=7)])
        assert result.best.entry_id == result.worst.entry_id == 7

    def test_empty_is_none(self):
        result = find_extremes([])
        assert result.best is None
        assert result.worst is None
