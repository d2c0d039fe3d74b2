"""
Insight response schemas.

GET /insights/weekly | /range | /month  → WindowSummaryResponse
GET /insights/streak                    → StreakResponse
GET /insights/extremes                  → ExtremesResponse
GET /insights/calendar                  → CalendarResponse
"""
from typing import Any, Optional
from pydantic import BaseModel, Field


class DayPointResponse(BaseModel):
    date: str
    label: str = Field(description='"M/D" display label.')
    rating: Optional[int] = Field(default=None, description="Primary 1–10 rating of the day's first record.")
    score: Optional[int] = Field(default=None, description="0–100 score; null when the day has no record.")


class WindowSummaryResponse(BaseModel):
    start: str
    end: str
    kind: str = Field(description='"trailing" | "month" | "custom"')
    days_with_entry: int
    average: Optional[int] = Field(default=None, description="Rounded mean score; null when no data.")
    delta: int = Field(description="Second-half minus first-half average, 0 without data in both halves.")
    trend: str = Field(description='"improving" | "declining" | "stable"')
    points: list[DayPointResponse]


class StreakResponse(BaseModel):
    owner_key: str
    today: str
    streak: int


class ExtremeDayResponse(BaseModel):
    date: str
    rating: int
    score: int
    entry_id: Optional[int] = None


class ExtremesResponse(BaseModel):
    owner_key: str
    best: Optional[ExtremeDayResponse] = None
    worst: Optional[ExtremeDayResponse] = None


class CalendarCellResponse(BaseModel):
    date: Optional[str] = None
    day_number: Optional[int] = None
    has_entry: bool
    average_score: Optional[float] = Field(
        default=None, description="Mean primary rating (1–10) of all records that day."
    )
    heat_tier: str = Field(description='"strong" | "moderate" | "low" | "none"')
    is_future: bool


class CalendarResponse(BaseModel):
    year: int
    month: int
    leading_blanks: int
    days_in_month: int
    cells: list[CalendarCellResponse]


class ExportResponse(BaseModel):
    payload: dict[str, Any]
