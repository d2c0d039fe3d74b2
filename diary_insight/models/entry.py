"""
DiaryEntry — one dated, multi-dimensional record written by an owner.

Several rows may share (owner_key, day). Listings return all of them; the
analytics engine takes the first one (lowest id) as the day's value.

tags: JSON-encoded list stored as Text (no external deps).
"""
from datetime import datetime, date
from sqlalchemy import Integer, String, Text, DateTime, Date, Enum, func
from sqlalchemy.orm import Mapped, mapped_column
import enum

from diary_insight.db.base import Base


class EntryKind(str, enum.Enum):
    journal = "journal"
    child = "child"


class AdherenceStatus(str, enum.Enum):
    taken = "taken"
    missed = "missed"
    partial = "partial"
    not_applicable = "not_applicable"


class DiaryEntry(Base):
    __tablename__ = "diary_entries"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, index=True)
    owner_key: Mapped[str] = mapped_column(String(128), nullable=False, index=True)
    kind: Mapped[str] = mapped_column(
        Enum(EntryKind, name="entry_kind_enum"), nullable=False, default=EntryKind.journal
    )
    day: Mapped[date] = mapped_column(Date, nullable=False, index=True)

    # 1–10 ratings. Journal rows use the first four, child rows use progress.
    mood: Mapped[int | None] = mapped_column(Integer, nullable=True)
    energy: Mapped[int | None] = mapped_column(Integer, nullable=True)
    relation: Mapped[int | None] = mapped_column(Integer, nullable=True)
    achievement: Mapped[int | None] = mapped_column(Integer, nullable=True)
    progress: Mapped[int | None] = mapped_column(Integer, nullable=True)

    tags: Mapped[str | None] = mapped_column(Text, nullable=True)
    text: Mapped[str] = mapped_column(Text, nullable=False, default="")

    adherence_status: Mapped[str | None] = mapped_column(
        Enum(AdherenceStatus, name="adherence_status_enum"), nullable=True
    )
    adherence_note: Mapped[str | None] = mapped_column(Text, nullable=True)

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), server_default=func.now(), nullable=False
    )
    updated_at: Mapped[datetime | None] = mapped_column(
        DateTime(timezone=True), onupdate=func.now(), nullable=True
    )
