"""add diary_entries table

Revision ID: 0001
Revises:
Create Date: 2026-10-19 00:00:00.000000

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa

revision: str = "0001"
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    # --- ENUM types ---
    entry_kind_enum = sa.Enum("journal", "child", name="entry_kind_enum")
    entry_kind_enum.create(op.get_bind(), checkfirst=True)

    adherence_status_enum = sa.Enum(
        "taken", "missed", "partial", "not_applicable", name="adherence_status_enum"
    )
    adherence_status_enum.create(op.get_bind(), checkfirst=True)

    # --- diary_entries ---
    op.create_table(
        "diary_entries",
        sa.Column("id", sa.Integer(), nullable=False),
        sa.Column("owner_key", sa.String(128), nullable=False),
        sa.Column("kind", sa.Enum(
            "journal", "child", name="entry_kind_enum", create_type=False,
        ), nullable=False),
        sa.Column("day", sa.Date(), nullable=False),
        sa.Column("mood", sa.Integer(), nullable=True),
        sa.Column("energy", sa.Integer(), nullable=True),
        sa.Column("relation", sa.Integer(), nullable=True),
        sa.Column("achievement", sa.Integer(), nullable=True),
        sa.Column("progress", sa.Integer(), nullable=True),
        sa.Column("tags", sa.Text(), nullable=True),
        sa.Column("text", sa.Text(), nullable=False),
        sa.Column("adherence_status", sa.Enum(
            "taken", "missed", "partial", "not_applicable",
            name="adherence_status_enum", create_type=False,
        ), nullable=True),
        sa.Column("adherence_note", sa.Text(), nullable=True),
        sa.Column("created_at", sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
        sa.Column("updated_at", sa.DateTime(timezone=True), nullable=True),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index("ix_diary_entries_id", "diary_entries", ["id"])
    op.create_index("ix_diary_entries_owner_key", "diary_entries", ["owner_key"])
    op.create_index("ix_diary_entries_day", "diary_entries", ["day"])


def downgrade() -> None:
    op.drop_index("ix_diary_entries_day", table_name="diary_entries")
    op.drop_index("ix_diary_entries_owner_key", table_name="diary_entries")
    op.drop_index("ix_diary_entries_id", table_name="diary_entries")
    op.drop_table("diary_entries")

    op.execute("DROP TYPE IF EXISTS adherence_status_enum")
    op.execute("DROP TYPE IF EXISTS entry_kind_enum")
