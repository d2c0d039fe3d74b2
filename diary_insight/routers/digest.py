"""
Digest router.

POST /digest — plain-text digest of a window, ready for the assistant
"""
from __future__ import annotations

from datetime import date

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from diary_insight.core.config import settings
from diary_insight.db.base import get_db
from diary_insight.routers.deps import resolve_today
from diary_insight.schemas.digest import DigestRequest, DigestResponse
from diary_insight.services import store
from diary_insight.services.dates import custom_window, trailing_window
from diary_insight.services.digest import (
    DigestFlags,
    compose_analysis_request,
    compose_digest,
    contains_risk_signal,
)

router = APIRouter(tags=["digest"])


@router.post(
    "/digest",
    response_model=DigestResponse,
    summary="Compose the text digest of a window",
)
def digest(
    payload: DigestRequest,
    today: date = Depends(resolve_today),
    db: Session = Depends(get_db),
):
    """
    Window: `start`..`end` when either is given (a missing bound copies the
    other), otherwise the trailing 7 days ending `today`.

    The service never calls the assistant. `analysis_request` is the exact
    text a caller would send, and `risk_signal` tells it to show crisis
    resources instead.
    """
    if payload.start or payload.end:
        window = custom_window(payload.start or payload.end, payload.end or payload.start)
    else:
        window = trailing_window(today, 7)

    include_adherence = (
        settings.INCLUDE_ADHERENCE_DEFAULT
        if payload.include_adherence is None
        else payload.include_adherence
    )
    flags = DigestFlags(
        include_adherence=include_adherence,
        include_composite=payload.include_composite,
    )

    records = store.load_records(db, payload.owner_key, payload.kind.value)
    text = compose_digest(records, window, flags)
    in_window = [r for r in records if window.contains(r.date)]
    return DigestResponse(
        start=window.start_key,
        end=window.end_key,
        line_count=len(in_window),
        digest=text,
        analysis_request=compose_analysis_request(text),
        risk_signal=any(contains_risk_signal(r.free_text) for r in in_window),
    )
