"""
Request-scoped helpers shared by routers.

The engine never reads a clock. Each request resolves "today" once, here,
in the configured local zone, and passes it down. The same goes for the
owner: an empty or missing `owner_key` means the shared guest identity.
"""
from datetime import date, datetime
from typing import Optional
from zoneinfo import ZoneInfo

from fastapi import Query

from diary_insight.core.config import settings
from diary_insight.services.records import owner_seed


def local_now() -> datetime:
    return datetime.now(tz=ZoneInfo(settings.APP_TIMEZONE))


def resolve_today(
    today: Optional[date] = Query(
        default=None,
        description="Override for the local calendar date used as 'today'. Defaults to now in APP_TIMEZONE.",
        examples=["2026-10-19"],
    ),
) -> date:
    return today or local_now().date()


def resolve_owner(
    owner_key: Optional[str] = Query(
        default=None,
        max_length=128,
        description='Opaque owner key; omit or leave empty for "guest".',
    ),
) -> str:
    return owner_seed(owner_key)
