"""
Calendar projector — month grid with heat tiers.

The grid starts with blank cells up to the weekday of day 1 (relative to
`first_weekday`, Python numbering: Monday == 0, Sunday == 6), followed by
one cell per calendar day.

Unlike the window points, a calendar cell averages EVERY record of its
date. The average stays on the 1–10 rating scale:

    average >= 7      → "strong"
    4 <= average < 7  → "moderate"
    average < 4       → "low"
    no record         → "none"

`is_future` compares date keys as strings; the key format is sortable.
"""
from __future__ import annotations

import calendar
from collections import defaultdict
from dataclasses import dataclass
from datetime import date
from typing import Iterable, Optional

from diary_insight.services.dates import date_key, month_window
from diary_insight.services.records import Record, primary_rating


class HeatTier:
    STRONG   = "strong"
    MODERATE = "moderate"
    LOW      = "low"
    NONE     = "none"


_STRONG_FROM = 7
_MODERATE_FROM = 4


@dataclass
class CalendarCell:
    date: Optional[str]          # None for leading blanks
    day_number: Optional[int]
    has_entry: bool
    average_score: Optional[float]
    heat_tier: str
    is_future: bool

    @property
    def is_blank(self) -> bool:
        return self.date is None


@dataclass
class CalendarMonth:
    year: int
    month: int
    leading_blanks: int
    days_in_month: int
    cells: list[CalendarCell]


def heat_tier(average: Optional[float]) -> str:
    if average is None:
        return HeatTier.NONE
    if average >= _STRONG_FROM:
        return HeatTier.STRONG
    if average >= _MODERATE_FROM:
        return HeatTier.MODERATE
    return HeatTier.LOW


def leading_blank_count(year: int, month: int, first_weekday: int = calendar.SUNDAY) -> int:
    return (date(year, month, 1).weekday() - first_weekday) % 7


def _blank_cell() -> CalendarCell:
    return CalendarCell(
        date=None,
        day_number=None,
        has_entry=False,
        average_score=None,
        heat_tier=HeatTier.NONE,
        is_future=False,
    )


def project_month(
    records: Iterable[Record],
    year: int,
    month: int,
    today: date,
    first_weekday: int = calendar.SUNDAY,
) -> CalendarMonth:
    window = month_window(year, month)

    ratings_by_date: dict[str, list[int]] = defaultdict(list)
    for record in records:
        if window.contains(record.date):
            ratings_by_date[record.date].append(primary_rating(record))

    blanks = leading_blank_count(year, month, first_weekday)
    cells = [_blank_cell() for _ in range(blanks)]

    today_key = date_key(today)
    for day in window.days():
        key = date_key(day)
        ratings = ratings_by_date.get(key, [])
        average = sum(ratings) / len(ratings) if ratings else None
        cells.append(CalendarCell(
            date=key,
            day_number=day.day,
            has_entry=bool(ratings),
            average_score=round(average, 1) if average is not None else None,
            heat_tier=heat_tier(average),
            is_future=key > today_key,
        ))

    return CalendarMonth(
        year=year,
        month=month,
        leading_blanks=blanks,
        days_in_month=len(cells) - blanks,
        cells=cells,
    )
