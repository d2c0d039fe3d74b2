"""
Tests for the export payload.
"""
import json
from datetime import date, datetime, timezone

from diary_insight.services.export import export_payload


def test_payload_shape(rec):
    records = [
        rec("2024-05-01", 8, entry_id=1, tags=["calm"], free_text="good"),
        rec("2024-05-02", 2, entry_id=2, free_text="rough"),
    ]
    now = datetime(2024, 5, 2, 21, 0, tzinfo=timezone.utc)
    payload = export_payload(records, "u1", now)

    assert payload["generatedAt"] == now.isoformat()
    assert payload["ownerKey"] == "u1"
    assert payload["entryCount"] == 2
    assert payload["weekly"]["averageScore"] == 44
    assert payload["weekly"]["trend"] == "stable"
    assert len(payload["weekly"]["points"]) == 7
    assert payload["entries"][0] == {
        "id": 1,
        "date": "2024-05-01",
        "kind": "journal",
        "rating": 8,
        "ratingLabel": "good",
        "tags": ["calm"],
        "text": "good",
    }
    assert payload["entries"][1]["ratingLabel"] == "hard"
    json.dumps(payload)


def test_empty_history(rec):
    payload = export_payload([], "", datetime(2024, 1, 1, tzinfo=timezone.utc))
    assert payload["entryCount"] == 0
    assert payload["entries"] == []
    assert payload["weekly"]["averageScore"] is None


def test_weekly_window_follows_today_override(rec):
    records = [rec("2024-04-10", 9, entry_id=1)]
    now = datetime(2024, 5, 2, 21, 0, tzinfo=timezone.utc)
    payload = export_payload(records, "u1", now, today=date(2024, 4, 12))
    assert payload["generatedAt"] == now.isoformat()
    assert payload["weekly"]["points"][-1]["date"] == "2024-04-12"
    assert payload["weekly"]["averageScore"] == 89
