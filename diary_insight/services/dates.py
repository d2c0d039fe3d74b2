"""
Date keys and windows.

Keys are `YYYY-MM-DD` built from the date's own calendar fields (never a
UTC conversion), zero-padded so that lexicographic order equals
chronological order. Calendar projection and window filtering rely on that.

Windows are inclusive on both ends. "Today" is always a parameter.
"""
from __future__ import annotations

import calendar
from dataclasses import dataclass
from datetime import date, timedelta
from typing import Optional

WINDOW_TRAILING = "trailing"
WINDOW_MONTH = "month"
WINDOW_CUSTOM = "custom"


def date_key(day: date) -> str:
    return f"{day.year:04d}-{day.month:02d}-{day.day:02d}"


def parse_date_key(key: object) -> Optional[date]:
    """Parse a `YYYY-MM-DD` key. Anything else yields None."""
    if isinstance(key, date):
        return key
    if not isinstance(key, str):
        return None
    try:
        return date.fromisoformat(key.strip())
    except ValueError:
        return None


def add_days(day: date, n: int) -> date:
    """Offset by `n` days, pinned to `date.min` / `date.max` at the ends of the calendar."""
    try:
        return day + timedelta(days=n)
    except OverflowError:
        return date.min if n < 0 else date.max


def day_label(day: date) -> str:
    """Short "M/D" label, no zero padding."""
    return f"{day.month}/{day.day}"


@dataclass(frozen=True)
class DateWindow:
    start: date
    end: date
    kind: str = WINDOW_CUSTOM

    @property
    def start_key(self) -> str:
        return date_key(self.start)

    @property
    def end_key(self) -> str:
        return date_key(self.end)

    def days(self) -> list[date]:
        """Every calendar day in the window, oldest first."""
        span = (self.end - self.start).days
        return [add_days(self.start, i) for i in range(span + 1)]

    def contains(self, key: str) -> bool:
        return self.start_key <= key <= self.end_key


def trailing_window(anchor: date, days: int = 7) -> DateWindow:
    """`days` calendar days ending on `anchor` (7 → anchor and the 6 before it)."""
    span = max(int(days), 1)
    return DateWindow(start=add_days(anchor, -(span - 1)), end=anchor, kind=WINDOW_TRAILING)


def month_window(year: int, month: int) -> DateWindow:
    last = calendar.monthrange(year, month)[1]
    return DateWindow(start=date(year, month, 1), end=date(year, month, last), kind=WINDOW_MONTH)


def custom_window(a: date, b: date) -> DateWindow:
    """Explicit range; reversed input is reordered, never rejected."""
    return DateWindow(start=min(a, b), end=max(a, b), kind=WINDOW_CUSTOM)
