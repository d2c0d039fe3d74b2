"""
Record snapshot consumed by the analytics engine.

A Record is an immutable copy of one stored entry taken at computation
time. The engine only ever reads Records; it never sees ORM rows and never
writes back. `date` is the canonical `YYYY-MM-DD` key (see services/dates.py)
so window filtering is a plain string comparison.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Iterable, Optional

from diary_insight.services.scoring import clamp_rating, composite_rating

# Ordered dimension names per record kind; the first is the primary one.
JOURNAL_DIMENSIONS = ("mood", "energy", "relation", "achievement")
CHILD_DIMENSIONS = ("progress",)

PRIMARY_DIMENSION = {
    "journal": "mood",
    "child": "progress",
}

# Owner key used when a request carries no identity.
GUEST_SEED = "guest"


@dataclass(frozen=True)
class Record:
    owner_key: str
    date: str
    dimensions: dict[str, Any] = field(default_factory=dict)
    tags: frozenset[str] = frozenset()
    free_text: str = ""
    auxiliary: Optional[dict[str, Any]] = None
    kind: str = "journal"
    entry_id: Optional[int] = None

    @property
    def primary_dimension(self) -> str:
        return PRIMARY_DIMENSION.get(self.kind, "mood")


def owner_seed(owner_key: Optional[str]) -> str:
    """Stripped owner key, or the guest seed when there is none."""
    return (owner_key or "").strip() or GUEST_SEED


def normalize_tags(tags: Optional[Iterable[str]]) -> frozenset[str]:
    """Collapse whitespace inside labels (line breaks included), drop blanks and duplicates."""
    if not tags:
        return frozenset()
    labels = (" ".join(t.split()) for t in tags if isinstance(t, str))
    return frozenset(label for label in labels if label)


def make_record(
    owner_key: str,
    date: str,
    dimensions: Optional[dict[str, Any]] = None,
    tags: Optional[Iterable[str]] = None,
    free_text: str = "",
    auxiliary: Optional[dict[str, Any]] = None,
    kind: str = "journal",
    entry_id: Optional[int] = None,
) -> Record:
    return Record(
        owner_key=owner_key or "",
        date=date,
        dimensions=dict(dimensions or {}),
        tags=normalize_tags(tags),
        free_text=free_text or "",
        auxiliary=dict(auxiliary) if auxiliary else None,
        kind=kind,
        entry_id=entry_id,
    )


def primary_rating(record: Record) -> int:
    """The record's primary 1–10 rating, clamped. Missing values read as neutral."""
    return clamp_rating(record.dimensions.get(record.primary_dimension))


def ordered_dimensions(record: Record) -> list[tuple[str, int]]:
    """(name, clamped rating) pairs: known names in their fixed order, extras sorted."""
    known = JOURNAL_DIMENSIONS + CHILD_DIMENSIONS
    names = [n for n in known if record.dimensions.get(n) is not None]
    names += sorted(n for n in record.dimensions if n not in known and record.dimensions[n] is not None)
    return [(n, clamp_rating(record.dimensions[n])) for n in names]


def composite_of(record: Record) -> int:
    """Composite 1–10 rating over every dimension the record carries."""
    return composite_rating(v for _, v in ordered_dimensions(record))
