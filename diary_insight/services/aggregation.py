"""
Aggregation engine — windowed scores, trend, streak and extremum days.

Definitions
-----------
Day value : the primary rating of the FIRST record seen for that date, in
            the order the caller supplied the records. Later same-day
            records still appear in listings and digests, they just do not
            feed the day's score.
Average   : rounded mean of the non-null day scores in the window; None
            when no day in the window has a record.
Delta     : the window's days are split at floor(n / 2). Each half is
            averaged over its own non-null scores only, and
            delta = round(second - first) when both halves have data,
            otherwise 0.
Trend     : delta > 5 → "improving", delta < -5 → "declining",
            anything else → "stable".
Streak    : consecutive days with a record, walking back from `today`
            over the whole record set. The first gap ends it.
Extremes  : strict max / strict min primary rating over the whole record
            set, ties going to the earlier record.

Every function is total: empty input produces the neutral result.

Public API
----------
points_for_window(records, window)     -> list[DayPoint]
summarize_window(records, window)      -> WindowSummary
weekly_summary(records, today)         -> WindowSummary   (trailing 7 days)
current_streak(records, today)         -> int
find_extremes(records)                 -> Extremes
"""
from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import date
from typing import Iterable, Optional, Sequence

from diary_insight.services.dates import DateWindow, add_days, date_key, day_label, trailing_window
from diary_insight.services.records import Record, primary_rating
from diary_insight.services.scoring import score_from_rating

logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# Trend constants
# ---------------------------------------------------------------------------

class Trend:
    IMPROVING = "improving"
    DECLINING = "declining"
    STABLE    = "stable"


_TREND_THRESHOLD = 5
WEEK_DAYS = 7


# ---------------------------------------------------------------------------
# Result types (plain dataclasses: no ORM, no Pydantic)
# ---------------------------------------------------------------------------

@dataclass
class DayPoint:
    date: str
    label: str
    rating: Optional[int]    # primary 1–10 rating, None when no record
    score: Optional[int]     # 0–100, None when no record


@dataclass
class WindowSummary:
    start: str
    end: str
    kind: str
    points: list[DayPoint]
    days_with_entry: int
    average: Optional[int]
    delta: int
    trend: str


@dataclass
class ExtremeDay:
    date: str
    rating: int
    score: int
    entry_id: Optional[int]


@dataclass
class Extremes:
    best: Optional[ExtremeDay]     # None when the record set is empty
    worst: Optional[ExtremeDay]


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------

def first_record_by_date(records: Iterable[Record]) -> dict[str, Record]:
    """Map each date key to the first record seen for it."""
    by_date: dict[str, Record] = {}
    for record in records:
        if record.date not in by_date:
            by_date[record.date] = record
    return by_date


def _mean(values: Sequence[int]) -> Optional[float]:
    if not values:
        return None
    return sum(values) / len(values)


def _scores(points: Iterable[DayPoint]) -> list[int]:
    return [p.score for p in points if p.score is not None]


def trend_label(delta: int) -> str:
    if delta > _TREND_THRESHOLD:
        return Trend.IMPROVING
    if delta < -_TREND_THRESHOLD:
        return Trend.DECLINING
    return Trend.STABLE


# ---------------------------------------------------------------------------
# Public: per-day points and window statistics
# ---------------------------------------------------------------------------

def points_for_window(records: Iterable[Record], window: DateWindow) -> list[DayPoint]:
    """One point per calendar day of the window, oldest first."""
    by_date = first_record_by_date(records)
    points: list[DayPoint] = []
    for day in window.days():
        key = date_key(day)
        record = by_date.get(key)
        rating = primary_rating(record) if record is not None else None
        points.append(DayPoint(
            date=key,
            label=day_label(day),
            rating=rating,
            score=score_from_rating(rating) if rating is not None else None,
        ))
    return points


def window_average(points: Sequence[DayPoint]) -> Optional[int]:
    avg = _mean(_scores(points))
    return int(round(avg)) if avg is not None else None


def half_delta(points: Sequence[DayPoint]) -> int:
    half = len(points) // 2
    first_avg = _mean(_scores(points[:half]))
    second_avg = _mean(_scores(points[half:]))
    if first_avg is None or second_avg is None:
        return 0
    return int(round(second_avg - first_avg))


def summarize_window(records: Iterable[Record], window: DateWindow) -> WindowSummary:
    points = points_for_window(records, window)
    delta = half_delta(points)
    summary = WindowSummary(
        start=window.start_key,
        end=window.end_key,
        kind=window.kind,
        points=points,
        days_with_entry=len(_scores(points)),
        average=window_average(points),
        delta=delta,
        trend=trend_label(delta),
    )
    logger.debug(
        "window %s..%s: %d/%d days, avg=%s delta=%d",
        summary.start, summary.end, summary.days_with_entry, len(points),
        summary.average, summary.delta,
    )
    return summary


def weekly_summary(records: Iterable[Record], today: date) -> WindowSummary:
    return summarize_window(records, trailing_window(today, WEEK_DAYS))


# ---------------------------------------------------------------------------
# Public: whole-history measures
# ---------------------------------------------------------------------------

def current_streak(records: Iterable[Record], today: date) -> int:
    """Consecutive recorded days ending today. No record today → 0."""
    present = {r.date for r in records}
    streak = 0
    day = today
    while date_key(day) in present:
        streak += 1
        if day == date.min:
            break
        day = add_days(day, -1)
    return streak


def _extreme_day(record: Record, rating: int) -> ExtremeDay:
    return ExtremeDay(
        date=record.date,
        rating=rating,
        score=score_from_rating(rating),
        entry_id=record.entry_id,
    )


def find_extremes(records: Iterable[Record]) -> Extremes:
    best: Optional[tuple[Record, int]] = None
    worst: Optional[tuple[Record, int]] = None
    for record in records:
        rating = primary_rating(record)
        if best is None or rating > best[1]:
            best = (record, rating)
        if worst is None or rating < worst[1]:
            worst = (record, rating)
    return Extremes(
        best=_extreme_day(*best) if best else None,
        worst=_extreme_day(*worst) if worst else None,
    )
