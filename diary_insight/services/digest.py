"""
Digest composer — the plain-text block handed to the conversational assistant.

One line per record in the window, oldest first (records sharing a date
keep their arrival order):

    2024-05-01 | mood 8/10, energy 6/10 | tags: calm, tired | text: ...

Optional segments, controlled by DigestFlags:
  include_composite → "| composite 7/10" after the dimensions
  include_adherence → "| adherence: <status> (note: <note>)" at the end

Every user-supplied value (text, tags, adherence) is flattened: each run of
line breaks, as `str.splitlines` sees them, becomes a single space, and the
segment separator "|" is replaced by "/". One record is always exactly one
line with exactly the segments above. An empty window gives "".
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable

from diary_insight.services.dates import DateWindow
from diary_insight.services.records import Record, composite_of, ordered_dimensions
from diary_insight.services.scoring import MAX_RATING

NO_VALUE_MARKER = "(none)"

_ANALYSIS_INSTRUCTIONS = (
    "Read the diary entries below and summarize briefly:\n"
    "1) how the emotional state moved over the period\n"
    "2) what seemed to trigger stress\n"
    "3) three concrete things to practice next week"
)

# Phrases that route a conversation to crisis resources instead of the
# assistant. Matched case-insensitively as substrings.
RISK_KEYWORDS: tuple[str, ...] = (
    "자살",
    "자해",
    "죽고싶",
    "죽고 싶",
    "극단적 선택",
    "해치고 싶",
    "suicide",
    "kill myself",
    "self-harm",
    "hurt myself",
    "end my life",
    "want to die",
)


@dataclass(frozen=True)
class DigestFlags:
    include_adherence: bool = False
    include_composite: bool = False


def flatten_text(text: str) -> str:
    return " ".join(line.strip() for line in (text or "").splitlines() if line.strip())


def _segment(value: object) -> str:
    """Flattened value that cannot open a new line or a new segment."""
    return flatten_text(str(value or "")).replace("|", "/")


def _render_adherence(record: Record) -> str:
    aux = record.auxiliary or {}
    status = _segment(aux.get("status")) or NO_VALUE_MARKER
    note = _segment(aux.get("note"))
    if note:
        return f"adherence: {status} (note: {note})"
    return f"adherence: {status}"


def render_record_line(record: Record, flags: DigestFlags) -> str:
    dims = ordered_dimensions(record)
    segments = [_segment(record.date)]
    segments.append(
        ", ".join(f"{_segment(name)} {value}/{MAX_RATING}" for name, value in dims) or NO_VALUE_MARKER
    )
    if flags.include_composite:
        segments.append(f"composite {composite_of(record)}/{MAX_RATING}")
    tags = ", ".join(sorted(_segment(t) for t in record.tags)) if record.tags else NO_VALUE_MARKER
    segments.append(f"tags: {tags}")
    segments.append(f"text: {_segment(record.free_text)}")
    if flags.include_adherence:
        segments.append(_render_adherence(record))
    return " | ".join(segments)


def compose_digest(
    records: Iterable[Record],
    window: DateWindow,
    flags: DigestFlags | None = None,
) -> str:
    flags = flags or DigestFlags()
    in_window = sorted(
        (r for r in records if window.contains(r.date)),
        key=lambda r: r.date,
    )
    return "\n".join(render_record_line(r, flags) for r in in_window)


def compose_analysis_request(digest: str) -> str:
    """Instruction header + digest. Empty digest → "" so callers can skip the call."""
    if not digest.strip():
        return ""
    return f"{_ANALYSIS_INSTRUCTIONS}\n\n{digest}"


def contains_risk_signal(text: str) -> bool:
    lowered = (text or "").lower()
    return any(k in lowered for k in RISK_KEYWORDS)
