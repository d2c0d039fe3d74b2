"""
PromptBudgetCounter — how many writing prompts were injected for an owner
on a given day.

The engine decides eligibility from `used`; this table only remembers the
number. Writes are last-write-wins: a lost increment costs one extra prompt.
"""
from datetime import datetime, date
from sqlalchemy import Integer, String, DateTime, Date, func, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column

from diary_insight.db.base import Base


class PromptBudgetCounter(Base):
    __tablename__ = "prompt_budget_counters"
    __table_args__ = (
        UniqueConstraint("owner_key", "day", name="uq_prompt_budget_owner_day"),
    )

    id: Mapped[int] = mapped_column(Integer, primary_key=True, index=True)
    owner_key: Mapped[str] = mapped_column(String(128), nullable=False, index=True)
    day: Mapped[date] = mapped_column(Date, nullable=False)
    used: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), server_default=func.now(), onupdate=func.now(), nullable=False
    )
