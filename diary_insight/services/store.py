"""
Record store and prompt-budget counter, backed by SQLAlchemy.

This is the persistence the analytics engine treats as an external
collaborator: routers fetch a consistent snapshot here, convert it to
immutable Records and hand those to the pure services.

Rules:
- Commits happen only in the public write functions, through _commit(),
  which rolls the session back when the commit fails.
- Snapshots are ordered by id ascending (arrival order) so that
  "first record of the day" is well defined.

Public API
----------
create_entry(db, ...)                              -> DiaryEntry
get_entry(db, entry_id, owner_key)                 -> DiaryEntry
update_entry(db, entry, changes)                   -> DiaryEntry
delete_entry(db, entry)                            -> None
list_entries(db, owner_key, ...)                   -> tuple[int, list[DiaryEntry]]
load_records(db, owner_key, kind)                  -> list[Record]
read_prompt_count(db, owner_key, day)              -> int
save_prompt_count(db, owner_key, day, used)        -> None
"""
from __future__ import annotations

import json
import logging
from datetime import date
from typing import Any, Iterable, Optional

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from diary_insight.core.errors import EntryNotFoundError, EntryOwnershipError
from diary_insight.models.entry import AdherenceStatus, DiaryEntry, EntryKind
from diary_insight.models.prompt_budget import PromptBudgetCounter
from diary_insight.services.dates import date_key
from diary_insight.services.records import (
    CHILD_DIMENSIONS,
    JOURNAL_DIMENSIONS,
    Record,
    make_record,
    normalize_tags,
)

logger = logging.getLogger(__name__)

RATING_COLUMNS = JOURNAL_DIMENSIONS + CHILD_DIMENSIONS


# ---------------------------------------------------------------------------
# Tiny utilities
# ---------------------------------------------------------------------------

def enum_value(v) -> str:
    """Return bare string value from a str-enum or plain str."""
    return v.value if hasattr(v, "value") else str(v)


def _jdump(items: Iterable[str]) -> str:
    return json.dumps(sorted(normalize_tags(items)), ensure_ascii=False)


def _jload(text: Optional[str]) -> list[str]:
    if not text:
        return []
    try:
        result = json.loads(text)
        return result if isinstance(result, list) else []
    except (ValueError, TypeError):
        return []


def _adherence(value: Optional[str]) -> Optional[AdherenceStatus]:
    return AdherenceStatus(enum_value(value)) if value else None


def _commit(db: Session) -> None:
    try:
        db.commit()
    except SQLAlchemyError:
        db.rollback()
        raise


def entry_tags(entry: DiaryEntry) -> list[str]:
    return _jload(entry.tags)


def compose_child_text(
    situation: Optional[str],
    intervention: Optional[str],
    outcome: Optional[str],
) -> str:
    parts = [
        ("Situation", situation),
        ("Intervention", intervention),
        ("Outcome", outcome),
    ]
    return "\n".join(f"{label}: {value.strip()}" for label, value in parts if value and value.strip())


# ---------------------------------------------------------------------------
# Conversion: ORM row → engine Record
# ---------------------------------------------------------------------------

def to_record(entry: DiaryEntry) -> Record:
    kind = enum_value(entry.kind)
    names = CHILD_DIMENSIONS if kind == EntryKind.child.value else JOURNAL_DIMENSIONS
    dimensions = {n: getattr(entry, n) for n in names if getattr(entry, n) is not None}

    auxiliary: Optional[dict[str, Any]] = None
    if entry.adherence_status is not None or entry.adherence_note:
        auxiliary = {
            "status": enum_value(entry.adherence_status) if entry.adherence_status is not None else None,
            "note": entry.adherence_note,
        }

    return make_record(
        owner_key=entry.owner_key,
        date=date_key(entry.day),
        dimensions=dimensions,
        tags=entry_tags(entry),
        free_text=entry.text,
        auxiliary=auxiliary,
        kind=kind,
        entry_id=entry.id,
    )


# ---------------------------------------------------------------------------
# Entries: writes
# ---------------------------------------------------------------------------

def create_entry(
    db: Session,
    owner_key: str,
    day: date,
    kind: str = EntryKind.journal.value,
    ratings: Optional[dict[str, Optional[int]]] = None,
    tags: Optional[Iterable[str]] = None,
    text: str = "",
    adherence_status: Optional[str] = None,
    adherence_note: Optional[str] = None,
) -> DiaryEntry:
    ratings = ratings or {}
    entry = DiaryEntry(
        owner_key=owner_key,
        kind=EntryKind(kind),
        day=day,
        tags=_jdump(tags or []),
        text=text or "",
        adherence_status=_adherence(adherence_status),
        adherence_note=adherence_note,
        **{col: ratings.get(col) for col in RATING_COLUMNS},
    )
    db.add(entry)
    _commit(db)
    db.refresh(entry)
    logger.info("entry %s created (owner=%s kind=%s day=%s)", entry.id, owner_key, kind, day)
    return entry


def update_entry(db: Session, entry: DiaryEntry, changes: dict[str, Any]) -> DiaryEntry:
    """Apply a partial update in place. Unknown keys are ignored."""
    for field_name, value in changes.items():
        if field_name == "adherence_status":
            entry.adherence_status = _adherence(value)
        elif field_name == "tags":
            entry.tags = _jdump(value or [])
        elif field_name == "text":
            entry.text = value or ""
        elif field_name == "day":
            if value is not None:
                entry.day = value
        elif field_name in RATING_COLUMNS or field_name == "adherence_note":
            setattr(entry, field_name, value)
    _commit(db)
    db.refresh(entry)
    logger.info("entry %s updated (%s)", entry.id, ", ".join(sorted(changes)) or "no fields")
    return entry


def delete_entry(db: Session, entry: DiaryEntry) -> None:
    entry_id = entry.id
    db.delete(entry)
    _commit(db)
    logger.info("entry %s deleted", entry_id)


# ---------------------------------------------------------------------------
# Entries: reads
# ---------------------------------------------------------------------------

def get_entry(db: Session, entry_id: int, owner_key: str) -> DiaryEntry:
    entry = db.get(DiaryEntry, entry_id)
    if entry is None:
        raise EntryNotFoundError(entry_id)
    if entry.owner_key != owner_key:
        raise EntryOwnershipError(entry_id)
    return entry


def list_entries(
    db: Session,
    owner_key: str,
    kind: Optional[str] = None,
    start: Optional[date] = None,
    end: Optional[date] = None,
    limit: int = 50,
    offset: int = 0,
) -> tuple[int, list[DiaryEntry]]:
    """Return (total, page) ordered newest day first, newest row first within a day."""
    q = db.query(DiaryEntry).filter(DiaryEntry.owner_key == owner_key)
    if kind:
        q = q.filter(DiaryEntry.kind == EntryKind(kind))
    if start and end and start > end:
        start, end = end, start
    if start:
        q = q.filter(DiaryEntry.day >= start)
    if end:
        q = q.filter(DiaryEntry.day <= end)
    total = q.count()
    items = (
        q.order_by(DiaryEntry.day.desc(), DiaryEntry.id.desc())
        .offset(offset)
        .limit(limit)
        .all()
    )
    return total, items


def load_records(
    db: Session,
    owner_key: str,
    kind: str = EntryKind.journal.value,
) -> list[Record]:
    """Full history of one owner and kind as engine Records, in arrival order."""
    rows = (
        db.query(DiaryEntry)
        .filter(DiaryEntry.owner_key == owner_key, DiaryEntry.kind == EntryKind(kind))
        .order_by(DiaryEntry.id.asc())
        .all()
    )
    return [to_record(r) for r in rows]


# ---------------------------------------------------------------------------
# Prompt-budget counter
# ---------------------------------------------------------------------------

def read_prompt_count(db: Session, owner_key: str, day: date) -> int:
    row = (
        db.query(PromptBudgetCounter.used)
        .filter(PromptBudgetCounter.owner_key == owner_key, PromptBudgetCounter.day == day)
        .first()
    )
    return row.used if row is not None else 0


def save_prompt_count(db: Session, owner_key: str, day: date, used: int) -> None:
    """Upsert the count. Last write wins."""
    existing = (
        db.query(PromptBudgetCounter)
        .filter(PromptBudgetCounter.owner_key == owner_key, PromptBudgetCounter.day == day)
        .first()
    )
    if existing is not None:
        existing.used = used
    else:
        db.add(PromptBudgetCounter(owner_key=owner_key, day=day, used=used))
    _commit(db)
