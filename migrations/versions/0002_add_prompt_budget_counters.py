"""add prompt_budget_counters table

Revision ID: 0002
Revises: 0001
Create Date: 2026-10-19

One row per (owner_key, day) holding how many writing prompts were
injected that day. Unique constraint backs the upsert in the store.
"""
from alembic import op
import sqlalchemy as sa

revision = "0002"
down_revision = "0001"
branch_labels = None
depends_on = None


def upgrade() -> None:
    op.create_table(
        "prompt_budget_counters",
        sa.Column("id", sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column("owner_key", sa.String(128), nullable=False),
        sa.Column("day", sa.Date(), nullable=False),
        sa.Column("used", sa.Integer(), nullable=False, server_default="0"),
        sa.Column(
            "updated_at",
            sa.DateTime(timezone=True),
            server_default=sa.func.now(),
            nullable=False,
        ),
    )
    op.create_index("ix_prompt_budget_owner_key", "prompt_budget_counters", ["owner_key"])
    op.create_unique_constraint(
        "uq_prompt_budget_owner_day",
        "prompt_budget_counters",
        ["owner_key", "day"],
    )


def downgrade() -> None:
    op.drop_constraint("uq_prompt_budget_owner_day", "prompt_budget_counters", type_="unique")
    op.drop_index("ix_prompt_budget_owner_key", table_name="prompt_budget_counters")
    op.drop_table("prompt_budget_counters")
