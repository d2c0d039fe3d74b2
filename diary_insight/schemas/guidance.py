"""
Guidance and prompt-budget schemas.

GET  /guidance/today           → GuidanceResponse
GET  /guidance/prompt-budget   → PromptBudgetResponse
POST /guidance/prompt          → PromptRequest → PromptResponse
"""
from datetime import date
from typing import Optional
from pydantic import BaseModel, Field

from diary_insight.schemas.entry import OwnerKey


class GuidanceResponse(BaseModel):
    day: str
    owner_key: str = Field(description='Seed owner key; "guest" when none was given.')
    id: str
    tone: str
    advice: str
    mission: str
    prompt: str


class PromptBudgetResponse(BaseModel):
    day: str
    used: int
    remaining: int
    ceiling: int
    can_inject: bool


class PromptRequest(BaseModel):
    owner_key: OwnerKey = None
    day: Optional[date] = None
    buffer: str = Field(
        default="",
        max_length=20_000,
        description="Current free-text buffer; prompts already in it are avoided.",
    )


class PromptResponse(BaseModel):
    prompt: str
    budget: PromptBudgetResponse
