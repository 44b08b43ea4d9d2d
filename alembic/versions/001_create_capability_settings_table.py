"""Create capability_settings table.

Revision ID: 001_capability_settings
Revises:
Create Date: 2026-10-16
"""

from collections.abc import Sequence

import sqlalchemy as sa

from alembic import op

revision: str = "001_capability_settings"
down_revision: str | None = None
branch_labels: str | Sequence[str] | None = None
depends_on: str | Sequence[str] | None = None


def upgrade() -> None:
    op.create_table(
        "capability_settings",
        sa.Column("capability", sa.Text(), primary_key=True),
        sa.Column("provider", sa.Text(), nullable=False),
        sa.Column("model", sa.Text(), nullable=False),
        sa.Column("whisper_model", sa.Text(), nullable=True),
        sa.Column("ollama_endpoint", sa.Text(), nullable=True),
        sa.Column(
            "updated_at",
            sa.DateTime(timezone=True),
            nullable=False,
            server_default=sa.text("CURRENT_TIMESTAMP"),
        ),
        sa.CheckConstraint(
            "capability IN ('summary','transcription')",
            name="ck_capability_settings_capability",
        ),
    )


def downgrade() -> None:
    op.drop_table("capability_settings")
