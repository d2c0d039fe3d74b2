"""
Guidance router — daily template and the writing-prompt budget.

GET  /guidance/today          — deterministic advice/mission for (day, owner)
GET  /guidance/prompt-budget  — how many prompts remain today
POST /guidance/prompt         — hand out one prompt and count it
"""
from __future__ import annotations

from datetime import date
from functools import partial

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from diary_insight.core.errors import PromptBudgetExhaustedError
from diary_insight.db.base import get_db
from diary_insight.routers.deps import resolve_owner, resolve_today
from diary_insight.schemas.common import ErrorResponse
from diary_insight.schemas.guidance import (
    GuidanceResponse,
    PromptBudgetResponse,
    PromptRequest,
    PromptResponse,
)
from diary_insight.services import store
from diary_insight.services.dates import date_key
from diary_insight.services.guidance import (
    PromptBudget,
    pick_prompt,
    prompt_budget,
    select_guidance,
)

router = APIRouter(prefix="/guidance", tags=["guidance"])


def _budget_to_response(day: date, b: PromptBudget) -> PromptBudgetResponse:
    return PromptBudgetResponse(
        day=date_key(day),
        used=b.used,
        remaining=b.remaining,
        ceiling=b.ceiling,
        can_inject=b.can_inject,
    )


@router.get(
    "/today",
    response_model=GuidanceResponse,
    summary="Today's advice and mission",
)
def today_guidance(
    owner_key: str = Depends(resolve_owner),
    today: date = Depends(resolve_today),
):
    """
    Same owner and day always get the same template, on any device, with
    nothing stored. Guests share the "guest" seed.
    """
    template = select_guidance(today, owner_key)
    return GuidanceResponse(
        day=date_key(today),
        owner_key=owner_key,
        id=template.id,
        tone=template.tone,
        advice=template.advice,
        mission=template.mission,
        prompt=template.prompt,
    )


@router.get(
    "/prompt-budget",
    response_model=PromptBudgetResponse,
    summary="Remaining writing prompts for the day",
)
def get_prompt_budget(
    owner_key: str = Depends(resolve_owner),
    today: date = Depends(resolve_today),
    db: Session = Depends(get_db),
):
    budget = prompt_budget(owner_key, today, partial(store.read_prompt_count, db))
    return _budget_to_response(today, budget)


@router.post(
    "/prompt",
    response_model=PromptResponse,
    summary="Take one writing prompt",
    responses={
        200: {"description": "Prompt handed out; the day's counter was incremented."},
        409: {"model": ErrorResponse, "description": "Daily ceiling reached (`PROMPT_BUDGET_EXHAUSTED`)."},
    },
)
def take_prompt(
    payload: PromptRequest,
    today: date = Depends(resolve_today),
    db: Session = Depends(get_db),
):
    """
    Returns a prompt not already present in `buffer` when one exists, and
    persists the incremented count. Concurrent calls are last-write-wins.
    """
    day = payload.day or today
    budget = prompt_budget(payload.owner_key, day, partial(store.read_prompt_count, db))
    if not budget.can_inject:
        raise PromptBudgetExhaustedError(day=day, ceiling=budget.ceiling)

    prompt = pick_prompt(payload.buffer)
    store.save_prompt_count(db, payload.owner_key, day, budget.next_count)
    after = PromptBudget(used=budget.next_count, ceiling=budget.ceiling)
    return PromptResponse(prompt=prompt, budget=_budget_to_response(day, after))
