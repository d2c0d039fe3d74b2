"""
Daily guidance and the writing-prompt budget.

Guidance
--------
select_guidance(day, owner_key) picks one GuidanceTemplate from the fixed
catalog with the deterministic selector, seeded by (date key, owner key).
An empty owner key seeds as "guest". No selection is ever stored; the same
owner sees the same template all day on every device.

Prompt budget
-------------
A writing prompt may be injected into the free-text buffer at most
PROMPT_CEILING times per owner per day. The count lives in an external
counter; this module reads it through a callable, decides eligibility and
reports the next count. The caller persists it.

Prompt choice
-------------
pick_prompt() prefers a prompt that is not already in the buffer. Only
when every prompt is already present does it fall back to a uniform
random pick over the whole list. This is content variety, not a score, so
true randomness is fine here.
"""
from __future__ import annotations

import random
from dataclasses import dataclass
from datetime import date
from typing import Callable, Optional, Sequence

from diary_insight.services.dates import date_key
from diary_insight.services.records import owner_seed
from diary_insight.services.selector import pick_deterministic

PROMPT_CEILING = 3


@dataclass(frozen=True)
class GuidanceTemplate:
    id: str
    tone: str
    advice: str
    mission: str
    prompt: str


GUIDANCE_CATALOG: tuple[GuidanceTemplate, ...] = (
    GuidanceTemplate(
        id="slow-morning",
        tone="calm",
        advice="Let the day start slower than usual. Nothing urgent needs you in the first hour.",
        mission="Drink one glass of water before looking at your phone.",
        prompt="What did the first quiet moment of today feel like?",
    ),
    GuidanceTemplate(
        id="small-win",
        tone="bright",
        advice="A small finished thing beats a large started one.",
        mission="Finish one task you have been putting off for under ten minutes.",
        prompt="Which small thing did you finish today, and how did it feel afterwards?",
    ),
    GuidanceTemplate(
        id="reach-out",
        tone="warm",
        advice="Someone would be glad to hear from you today.",
        mission="Send a short message to a person you have not talked to this week.",
        prompt="Who did you feel closest to today, and why?",
    ),
    GuidanceTemplate(
        id="name-it",
        tone="reflective",
        advice="Feelings get lighter once they have a name.",
        mission="Write down three words for how you feel right now.",
        prompt="If today's main feeling had a name, what would it be?",
    ),
    GuidanceTemplate(
        id="body-check",
        tone="grounded",
        advice="Your body keeps score of the day before your mind does.",
        mission="Take a five-minute walk without headphones.",
        prompt="Where in your body did you notice tension today?",
    ),
    GuidanceTemplate(
        id="one-boundary",
        tone="steady",
        advice="It is fine to say no to one thing today.",
        mission="Decline or postpone one request that drains you.",
        prompt="What did you say yes to today that you wish you had declined?",
    ),
    GuidanceTemplate(
        id="kind-voice",
        tone="gentle",
        advice="Talk to yourself the way you would talk to a friend.",
        mission="Replace one self-critical thought with a kinder sentence.",
        prompt="What would you tell a friend who had the day you had?",
    ),
    GuidanceTemplate(
        id="try-new",
        tone="bold",
        advice="A little novelty resets a stale week.",
        mission="Take a different route, dish or playlist than usual.",
        prompt="What was one new thing you noticed today?",
    ),
)

WRITING_PROMPTS: tuple[str, ...] = tuple(t.prompt for t in GUIDANCE_CATALOG)

_rng = random.Random()


# ---------------------------------------------------------------------------
# Guidance
# ---------------------------------------------------------------------------

def select_guidance(
    day: date,
    owner_key: Optional[str],
    catalog: Sequence[GuidanceTemplate] = GUIDANCE_CATALOG,
) -> GuidanceTemplate:
    return pick_deterministic([date_key(day), owner_seed(owner_key)], catalog)


# ---------------------------------------------------------------------------
# Prompt budget
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class PromptBudget:
    used: int
    ceiling: int = PROMPT_CEILING

    @property
    def remaining(self) -> int:
        return max(self.ceiling - self.used, 0)

    @property
    def can_inject(self) -> bool:
        return self.used < self.ceiling

    @property
    def next_count(self) -> int:
        """Count to persist after one more injection (unchanged when exhausted)."""
        return self.used + 1 if self.can_inject else self.used


def evaluate_budget(used: object) -> PromptBudget:
    try:
        count = int(used)
    except (TypeError, ValueError):
        count = 0
    return PromptBudget(used=max(count, 0))


def prompt_budget(
    owner_key: Optional[str],
    day: date,
    read_count: Callable[[str, date], int],
) -> PromptBudget:
    """Read the stored count for (owner, day) and evaluate it."""
    return evaluate_budget(read_count(owner_seed(owner_key), day))


# ---------------------------------------------------------------------------
# Prompt choice
# ---------------------------------------------------------------------------

def pick_prompt(
    buffer: str,
    prompts: Sequence[str] = WRITING_PROMPTS,
    rng: Optional[random.Random] = None,
) -> Optional[str]:
    if not prompts:
        return None
    rng = rng or _rng
    text = buffer or ""
    fresh = [p for p in prompts if p not in text]
    return rng.choice(fresh or list(prompts))
