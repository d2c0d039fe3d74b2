from .entry import DiaryEntry
from .prompt_budget import PromptBudgetCounter

__all__ = [
    "DiaryEntry",
    "PromptBudgetCounter",
]
