"""
Deterministic selector.

Picks one item from a fixed candidate list per seed, with no stored state
and no randomness. The hash is a 31-multiplier polynomial over the UTF-8
bytes of the seed, wrapped to 32 bits, so any language that walks the same
bytes reproduces the same value.

Not for anything security sensitive. True randomness (the prompt fallback
in services/guidance.py) is kept separate on purpose.
"""
from __future__ import annotations

from typing import Optional, Sequence, TypeVar

T = TypeVar("T")

SEED_DELIMITER = "|"
_MASK_32 = 0xFFFFFFFF


def stable_hash(text: str) -> int:
    h = 0
    for byte in text.encode("utf-8"):
        h = (h * 31 + byte) & _MASK_32
    return h


def pick_deterministic(seed_parts: Sequence[str], candidates: Sequence[T]) -> Optional[T]:
    """Same seed and same candidate list → same item, forever. Empty list → None."""
    if not candidates:
        return None
    seed = SEED_DELIMITER.join(str(p) for p in seed_parts)
    return candidates[stable_hash(seed) % len(candidates)]
