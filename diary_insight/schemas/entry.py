"""
Diary entry request / response schemas.

POST   /entries          → EntryCreate  → EntryResponse
GET    /entries          →                EntryListResponse
PATCH  /entries/{id}     → EntryUpdate  → EntryResponse

Ratings outside 1–10 are clamped, never rejected.
"""
from __future__ import annotations

import enum
from datetime import date
from typing import Annotated, Any, Optional

from pydantic import AfterValidator, BaseModel, ConfigDict, Field, field_validator, model_validator

from diary_insight.services.records import owner_seed
from diary_insight.services.scoring import NEUTRAL_RATING, clamp_rating


class EntryKindIn(str, enum.Enum):
    journal = "journal"
    child = "child"


class AdherenceStatusIn(str, enum.Enum):
    taken = "taken"
    missed = "missed"
    partial = "partial"
    not_applicable = "not_applicable"


OwnerKey = Annotated[Optional[str], Field(
    max_length=128,
    validate_default=True,
    description='Opaque identity of the author. Empty or missing means "guest".',
    examples=["u_3f9a"],
), AfterValidator(owner_seed)]

Rating = Annotated[Optional[int], Field(
    description="1–10 rating. Out-of-range values are clamped.",
)]


class _RatingsMixin(BaseModel):
    mood: Rating = None
    energy: Rating = None
    relation: Rating = None
    achievement: Rating = None
    progress: Rating = None

    @field_validator("mood", "energy", "relation", "achievement", "progress", mode="before")
    @classmethod
    def clamp(cls, v: Any) -> Optional[int]:
        return None if v is None else clamp_rating(v)

    def ratings(self) -> dict[str, Optional[int]]:
        return {
            "mood": self.mood,
            "energy": self.energy,
            "relation": self.relation,
            "achievement": self.achievement,
            "progress": self.progress,
        }


class EntryCreate(_RatingsMixin):
    """A new diary record. `text` may be left empty for child records that
    fill situation / intervention / outcome instead."""
    model_config = ConfigDict(use_enum_values=True)

    owner_key: OwnerKey = None
    kind: EntryKindIn = EntryKindIn.journal
    day: Optional[date] = Field(
        default=None,
        description="ISO date of the record. Defaults to today in the configured zone.",
        examples=["2026-10-19"],
    )
    tags: list[str] = Field(default_factory=list, description="Emotion tags; duplicates collapse.")
    text: str = Field(default="", max_length=20_000)
    situation: Optional[str] = Field(default=None, max_length=5_000)
    intervention: Optional[str] = Field(default=None, max_length=5_000)
    outcome: Optional[str] = Field(default=None, max_length=5_000)
    adherence_status: Optional[AdherenceStatusIn] = None
    adherence_note: Optional[str] = Field(default=None, max_length=2_000)

    @model_validator(mode="after")
    def default_primary_rating(self) -> "EntryCreate":
        if self.kind == EntryKindIn.child.value:
            if self.progress is None:
                self.progress = NEUTRAL_RATING
        elif self.mood is None:
            self.mood = NEUTRAL_RATING
        return self


class EntryUpdate(_RatingsMixin):
    """Partial update; only fields present in the request body change."""
    model_config = ConfigDict(use_enum_values=True)

    owner_key: OwnerKey = None
    day: Optional[date] = None
    tags: Optional[list[str]] = None
    text: Optional[str] = Field(default=None, max_length=20_000)
    adherence_status: Optional[AdherenceStatusIn] = None
    adherence_note: Optional[str] = Field(default=None, max_length=2_000)

    @field_validator("day")
    @classmethod
    def day_not_null(cls, v: Optional[date]) -> date:
        if v is None:
            raise ValueError("day cannot be null; omit it to keep the stored date")
        return v


class EntryResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    owner_key: str
    kind: str
    day: str
    mood: Optional[int] = None
    energy: Optional[int] = None
    relation: Optional[int] = None
    achievement: Optional[int] = None
    progress: Optional[int] = None
    tags: list[str] = Field(default_factory=list)
    text: str
    adherence_status: Optional[str] = None
    adherence_note: Optional[str] = None
    rating_label: str = Field(description='"good" | "okay" | "hard" for the primary rating.')
    created_at: str
    updated_at: Optional[str] = None


class EntryListResponse(BaseModel):
    total: int
    items: list[EntryResponse]
