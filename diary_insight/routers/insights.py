"""
Insights router — read-only analytics over an owner's records.

GET /insights/weekly      — trailing 7-day summary ending today
GET /insights/range       — custom start/end summary (reversed input is swapped)
GET /insights/month       — calendar-month summary
GET /insights/streak      — consecutive recorded days ending today
GET /insights/extremes    — best and worst day over the whole history
GET /insights/calendar    — month grid with heat tiers
GET /insights/export      — full JSON export with weekly stats
"""
from __future__ import annotations

from dataclasses import asdict
from datetime import date
from typing import Annotated

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from diary_insight.core.config import settings
from diary_insight.core.errors import RangeTooLargeError
from diary_insight.db.base import get_db
from diary_insight.routers.deps import local_now, resolve_owner, resolve_today
from diary_insight.schemas.common import ErrorResponse
from diary_insight.schemas.entry import EntryKindIn
from diary_insight.schemas.insights import (
    CalendarCellResponse,
    CalendarResponse,
    DayPointResponse,
    ExportResponse,
    ExtremeDayResponse,
    ExtremesResponse,
    StreakResponse,
    WindowSummaryResponse,
)
from diary_insight.services import store
from diary_insight.services.aggregation import (
    ExtremeDay,
    WindowSummary,
    current_streak,
    find_extremes,
    summarize_window,
    weekly_summary,
)
from diary_insight.services.calendar_view import project_month
from diary_insight.services.dates import custom_window, date_key, month_window
from diary_insight.services.export import export_payload

router = APIRouter(prefix="/insights", tags=["insights"])

KindQuery = Annotated[EntryKindIn, Query(description='"journal" (mood) or "child" (progress).')]
YearQuery = Annotated[int, Query(ge=1, le=9999)]
MonthQuery = Annotated[int, Query(ge=1, le=12)]


# ---------------------------------------------------------------------------
# Serialization helpers
# ---------------------------------------------------------------------------

def _summary_to_response(s: WindowSummary) -> WindowSummaryResponse:
    return WindowSummaryResponse(
        start=s.start,
        end=s.end,
        kind=s.kind,
        days_with_entry=s.days_with_entry,
        average=s.average,
        delta=s.delta,
        trend=s.trend,
        points=[DayPointResponse(**asdict(p)) for p in s.points],
    )


def _extreme_to_response(d: ExtremeDay | None) -> ExtremeDayResponse | None:
    return ExtremeDayResponse(**asdict(d)) if d is not None else None


# ---------------------------------------------------------------------------
# Window summaries
# ---------------------------------------------------------------------------

@router.get(
    "/weekly",
    response_model=WindowSummaryResponse,
    summary="Trailing 7-day summary",
)
def weekly(
    owner_key: str = Depends(resolve_owner),
    kind: KindQuery = EntryKindIn.journal,
    today: date = Depends(resolve_today),
    db: Session = Depends(get_db),
):
    """
    Per-day points, average score, half-over-half delta and trend for the
    7 days ending on `today`.

    ### Trend
    | delta | trend |
    |---|---|
    | > 5 | `improving` |
    | < -5 | `declining` |
    | otherwise | `stable` |
    """
    records = store.load_records(db, owner_key, kind.value)
    return _summary_to_response(weekly_summary(records, today))


@router.get(
    "/range",
    response_model=WindowSummaryResponse,
    summary="Custom date-range summary",
    responses={422: {"model": ErrorResponse, "description": "Range too long (`RANGE_TOO_LARGE`)."}},
)
def date_range(
    start: Annotated[date, Query(description="Inclusive start (swapped with end if later).")],
    end: Annotated[date, Query(description="Inclusive end.")],
    owner_key: str = Depends(resolve_owner),
    kind: KindQuery = EntryKindIn.journal,
    db: Session = Depends(get_db),
):
    """Inclusive `start`..`end`, reordered when reversed. Spans longer than
    `MAX_RANGE_DAYS` are rejected with `RANGE_TOO_LARGE`."""
    window = custom_window(start, end)
    span = (window.end - window.start).days + 1
    if span > settings.MAX_RANGE_DAYS:
        raise RangeTooLargeError(max_days=settings.MAX_RANGE_DAYS, received=span)
    records = store.load_records(db, owner_key, kind.value)
    return _summary_to_response(summarize_window(records, window))


@router.get(
    "/month",
    response_model=WindowSummaryResponse,
    summary="Calendar-month summary",
)
def month(
    year: YearQuery,
    month: MonthQuery,
    owner_key: str = Depends(resolve_owner),
    kind: KindQuery = EntryKindIn.journal,
    db: Session = Depends(get_db),
):
    records = store.load_records(db, owner_key, kind.value)
    return _summary_to_response(summarize_window(records, month_window(year, month)))


# ---------------------------------------------------------------------------
# Whole-history measures
# ---------------------------------------------------------------------------

@router.get(
    "/streak",
    response_model=StreakResponse,
    summary="Consecutive recorded days ending today",
)
def streak(
    owner_key: str = Depends(resolve_owner),
    kind: KindQuery = EntryKindIn.journal,
    today: date = Depends(resolve_today),
    db: Session = Depends(get_db),
):
    """A single missing day ends the streak; no record today means 0."""
    records = store.load_records(db, owner_key, kind.value)
    return StreakResponse(
        owner_key=owner_key,
        today=date_key(today),
        streak=current_streak(records, today),
    )


@router.get(
    "/extremes",
    response_model=ExtremesResponse,
    summary="Best and worst recorded day",
)
def extremes(
    owner_key: str = Depends(resolve_owner),
    kind: KindQuery = EntryKindIn.journal,
    db: Session = Depends(get_db),
):
    """Ties go to the earlier record. Both are null when there is no history."""
    records = store.load_records(db, owner_key, kind.value)
    result = find_extremes(records)
    return ExtremesResponse(
        owner_key=owner_key,
        best=_extreme_to_response(result.best),
        worst=_extreme_to_response(result.worst),
    )


# ---------------------------------------------------------------------------
# Calendar
# ---------------------------------------------------------------------------

@router.get(
    "/calendar",
    response_model=CalendarResponse,
    summary="Month grid with heat tiers",
)
def calendar_grid(
    year: YearQuery,
    month: MonthQuery,
    owner_key: str = Depends(resolve_owner),
    kind: KindQuery = EntryKindIn.journal,
    today: date = Depends(resolve_today),
    db: Session = Depends(get_db),
):
    """
    Leading blank cells up to the first weekday (per `WEEK_STARTS_ON`),
    then one cell per day with presence, mean rating, heat tier and a
    future flag.
    """
    records = store.load_records(db, owner_key, kind.value)
    grid = project_month(records, year, month, today, first_weekday=settings.first_weekday)
    return CalendarResponse(
        year=grid.year,
        month=grid.month,
        leading_blanks=grid.leading_blanks,
        days_in_month=grid.days_in_month,
        cells=[CalendarCellResponse(**asdict(c)) for c in grid.cells],
    )


# ---------------------------------------------------------------------------
# Export
# ---------------------------------------------------------------------------

@router.get(
    "/export",
    response_model=ExportResponse,
    summary="Export history with weekly stats",
)
def export(
    owner_key: str = Depends(resolve_owner),
    kind: KindQuery = EntryKindIn.journal,
    today: date = Depends(resolve_today),
    db: Session = Depends(get_db),
):
    records = store.load_records(db, owner_key, kind.value)
    return ExportResponse(payload=export_payload(records, owner_key, local_now(), today=today))
