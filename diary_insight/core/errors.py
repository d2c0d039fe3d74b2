"""
Custom exception hierarchy for the Diary Insight API.

Rule: every HTTP error has a machine-readable `code` string so clients
can branch on it without parsing English messages.

The analytics engine itself never raises for bad data; these exceptions
belong to the service shell (record store and prompt-budget endpoints).
"""
from __future__ import annotations

import logging
from datetime import date
from typing import Any

from fastapi import Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette import status

logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# Exception classes
# ---------------------------------------------------------------------------

class DiaryInsightException(Exception):
    """Base class for all application-level errors."""
    http_status: int = status.HTTP_500_INTERNAL_SERVER_ERROR
    code: str = "INTERNAL_ERROR"

    def __init__(self, message: str, details: dict[str, Any] | None = None):
        self.message = message
        self.details = details or {}
        super().__init__(message)

    def to_dict(self) -> dict:
        payload: dict[str, Any] = {"code": self.code, "message": self.message}
        if self.details:
            payload["details"] = self.details
        return payload


class EntryNotFoundError(DiaryInsightException):
    http_status = status.HTTP_404_NOT_FOUND
    code = "ENTRY_NOT_FOUND"

    def __init__(self, entry_id: int):
        super().__init__(
            message=f"Entry {entry_id} does not exist.",
            details={"entry_id": entry_id},
        )


class EntryOwnershipError(DiaryInsightException):
    http_status = status.HTTP_403_FORBIDDEN
    code = "ENTRY_OWNER_MISMATCH"

    def __init__(self, entry_id: int):
        super().__init__(
            message=f"Entry {entry_id} belongs to a different owner.",
            details={"entry_id": entry_id},
        )


class RangeTooLargeError(DiaryInsightException):
    http_status = status.HTTP_422_UNPROCESSABLE_ENTITY
    code = "RANGE_TOO_LARGE"

    def __init__(self, max_days: int, received: int):
        super().__init__(
            message=f"Date range exceeds the maximum of {max_days} days. Received {received}.",
            details={"max_days": max_days, "received": received},
        )


class PromptBudgetExhaustedError(DiaryInsightException):
    http_status = status.HTTP_409_CONFLICT
    code = "PROMPT_BUDGET_EXHAUSTED"

    def __init__(self, day: date, ceiling: int):
        super().__init__(
            message=f"Prompt budget for {day} is used up ({ceiling} of {ceiling}).",
            details={"day": str(day), "ceiling": ceiling},
        )


# ---------------------------------------------------------------------------
# FastAPI exception handlers
# ---------------------------------------------------------------------------

async def diary_exception_handler(request: Request, exc: DiaryInsightException) -> JSONResponse:
    return JSONResponse(
        status_code=exc.http_status,
        content=exc.to_dict(),
    )


async def validation_exception_handler(
    request: Request, exc: RequestValidationError
) -> JSONResponse:
    """Return structured 422 with machine-readable field errors."""
    field_errors = []
    for error in exc.errors():
        field_errors.append({
            "field": ".".join(str(loc) for loc in error["loc"] if loc != "body"),
            "message": error["msg"],
            "type": error["type"],
        })
    return JSONResponse(
        status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
        content={
            "code": "VALIDATION_ERROR",
            "message": "Request validation failed.",
            "details": {"errors": field_errors},
        },
    )


async def unhandled_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.exception("Unhandled error on %s %s", request.method, request.url.path)
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={
            "code": "INTERNAL_ERROR",
            "message": "An unexpected error occurred.",
        },
    )
