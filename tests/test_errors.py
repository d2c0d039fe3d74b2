"""
Tests for error handling: structured error responses, HTTP status codes,
and the custom exception classes.
"""
from datetime import date

import pytest

from diary_insight.core.errors import (
    DiaryInsightException,
    EntryNotFoundError,
    EntryOwnershipError,
    PromptBudgetExhaustedError,
    RangeTooLargeError,
)


# ---------------------------------------------------------------------------
# Unit tests on exception classes
# ---------------------------------------------------------------------------

class TestExceptionClasses:
    def test_entry_not_found_error(self):
        err = EntryNotFoundError(entry_id=42)
        assert err.http_status == 404
        assert err.code == "ENTRY_NOT_FOUND"
        assert "42" in err.message
        assert err.to_dict()["details"]["entry_id"] == 42

    def test_entry_ownership_error(self):
        err = EntryOwnershipError(entry_id=7)
        assert err.http_status == 403
        assert err.code == "ENTRY_OWNER_MISMATCH"

    def test_prompt_budget_exhausted_error(self):
        err = PromptBudgetExhaustedError(day=date(2024, 5, 2), ceiling=3)
        assert err.http_status == 409
        assert err.code == "PROMPT_BUDGET_EXHAUSTED"
        assert "2024-05-02" in err.message
        d = err.to_dict()
        assert d["details"] == {"day": "2024-05-02", "ceiling": 3}

    def test_range_too_large_error(self):
        err = RangeTooLargeError(max_days=366, received=400)
        assert err.http_status == 422
        assert err.code == "RANGE_TOO_LARGE"
        assert err.to_dict()["details"] == {"max_days": 366, "received": 400}

    def test_to_dict_without_details(self):
        d = DiaryInsightException("boom").to_dict()
        assert d == {"code": "INTERNAL_ERROR", "message": "boom"}


# ---------------------------------------------------------------------------
# Integration tests on HTTP error responses
# ---------------------------------------------------------------------------

class TestValidationErrors:
    def test_owner_key_too_long(self, client):
        r = client.post("/entries", json={"owner_key": "x" * 129, "mood": 5})
        assert r.status_code == 422
        body = r.json()
        assert body["code"] == "VALIDATION_ERROR"
        assert isinstance(body["details"]["errors"], list)
        fields = [e["field"] for e in body["details"]["errors"]]
        assert any("owner_key" in f for f in fields)

    def test_owner_key_query_too_long(self, client):
        r = client.get("/insights/weekly", params={"owner_key": "x" * 129})
        assert r.status_code == 422
        assert r.json()["code"] == "VALIDATION_ERROR"

    def test_invalid_day_format(self, client):
        r = client.post("/entries", json={"owner_key": "err-u", "day": "not-a-date"})
        assert r.status_code == 422
        assert r.json()["code"] == "VALIDATION_ERROR"

    @pytest.mark.parametrize("kind", ["diary", "", "Journal"])
    def test_invalid_kind(self, client, kind):
        r = client.post("/entries", json={"owner_key": "err-u", "kind": kind})
        assert r.status_code == 422
        fields = [e["field"] for e in r.json()["details"]["errors"]]
        assert any("kind" in f for f in fields)

    def test_invalid_month_query(self, client):
        r = client.get("/insights/calendar", params={"owner_key": "err-u", "year": 2024, "month": 13})
        assert r.status_code == 422
        assert r.json()["code"] == "VALIDATION_ERROR"


class TestNotFoundErrors:
    def test_unknown_entry(self, client):
        r = client.get("/entries/999999", params={"owner_key": "err-u"})
        assert r.status_code == 404
        body = r.json()
        assert body["code"] == "ENTRY_NOT_FOUND"
        assert body["details"]["entry_id"] == 999999


class TestPatchErrors:
    def test_patch_null_day_rejected(self, client):
        created = client.post("/entries", json={"owner_key": "err-null-day", "day": "2024-05-01"}).json()
        r = client.patch(f"/entries/{created['id']}", json={"owner_key": "err-null-day", "day": None})
        assert r.status_code == 422
        fields = [e["field"] for e in r.json()["details"]["errors"]]
        assert any("day" in f for f in fields)
        # the stored row is untouched and the session still works
        r = client.get(f"/entries/{created['id']}", params={"owner_key": "err-null-day"})
        assert r.status_code == 200
        assert r.json()["day"] == "2024-05-01"


class TestRangeErrors:
    def test_range_longer_than_limit(self, client):
        r = client.get(
            "/insights/range",
            params={"owner_key": "err-range", "start": "0001-01-01", "end": "9999-12-31"},
        )
        assert r.status_code == 422
        body = r.json()
        assert body["code"] == "RANGE_TOO_LARGE"
        assert body["details"]["max_days"] == 366

    def test_range_at_limit_is_accepted(self, client):
        r = client.get(
            "/insights/range",
            params={"owner_key": "err-range", "start": "2024-01-01", "end": "2024-12-31"},
        )
        assert r.status_code == 200
        assert len(r.json()["points"]) == 366
