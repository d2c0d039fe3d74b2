"""
Scalar normalizer — 1–10 ratings to 0–100 scores.

Rounding is Python's built-in `round`, i.e. round-half-to-even, used
everywhere a score, average or delta is rounded:

    score_from_rating(1)  == 0
    score_from_rating(2)  == 11
    score_from_rating(6)  == 56
    score_from_rating(8)  == 78
    score_from_rating(10) == 100
    round((78 + 11) / 2)  == 44

Malformed ratings are clamped or read as neutral; nothing here raises.
"""
from __future__ import annotations

import math
from typing import Any, Iterable

MIN_RATING = 1
MAX_RATING = 10
NEUTRAL_RATING = 5

LABEL_GOOD = "good"
LABEL_OKAY = "okay"
LABEL_HARD = "hard"


def clamp_rating(value: Any) -> int:
    """Coerce to an integer in [1, 10]. Non-numeric input becomes NEUTRAL_RATING."""
    if isinstance(value, int):
        return int(min(max(value, MIN_RATING), MAX_RATING))
    if isinstance(value, str):
        value = value.strip()
    try:
        number = float(value)
    except (TypeError, ValueError, OverflowError):
        return NEUTRAL_RATING
    if math.isnan(number):
        return NEUTRAL_RATING
    number = min(max(number, MIN_RATING), MAX_RATING)
    return int(round(number))


def score_from_rating(value: Any) -> int:
    rating = clamp_rating(value)
    return int(round((rating - MIN_RATING) / (MAX_RATING - MIN_RATING) * 100))


def composite_rating(values: Iterable[Any]) -> int:
    """Rounded mean of the clamped ratings; an empty list gives the midpoint."""
    ratings = [clamp_rating(v) for v in values]
    if not ratings:
        return NEUTRAL_RATING
    return int(round(sum(ratings) / len(ratings)))


def rating_label(value: Any) -> str:
    rating = clamp_rating(value)
    if rating >= 8:
        return LABEL_GOOD
    if rating >= 5:
        return LABEL_OKAY
    return LABEL_HARD
