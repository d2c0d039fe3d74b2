"""
Export payload — JSON-safe snapshot of an owner's history plus the weekly
summary, for download or hand-off to tooling.
"""
from __future__ import annotations

from dataclasses import asdict
from datetime import date, datetime
from typing import Any, Optional, Sequence

from diary_insight.services.aggregation import weekly_summary
from diary_insight.services.records import Record, primary_rating
from diary_insight.services.scoring import rating_label


def export_payload(
    records: Sequence[Record],
    owner_key: str,
    now: datetime,
    today: Optional[date] = None,
) -> dict[str, Any]:
    """`now` stamps the payload; the weekly window ends on `today` (default `now.date()`)."""
    weekly = weekly_summary(records, today or now.date())
    return {
        "generatedAt": now.isoformat(),
        "ownerKey": owner_key,
        "entryCount": len(records),
        "weekly": {
            "averageScore": weekly.average,
            "trend": weekly.trend,
            "delta": weekly.delta,
            "points": [asdict(p) for p in weekly.points],
        },
        "entries": [
            {
                "id": r.entry_id,
                "date": r.date,
                "kind": r.kind,
                "rating": primary_rating(r),
                "ratingLabel": rating_label(primary_rating(r)),
                "tags": sorted(r.tags),
                "text": r.free_text,
            }
            for r in records
        ],
    }
