"""initial exercises, sheets and workouts tables

Revision ID: 0001_initial_wellum
Revises: 
Create Date: 2026-10-19 10:00:00.000000
"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa

# revision identifiers, used by Alembic.
revision: str = "0001_initial_wellum"
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    op.create_table(
        "exercises",
        sa.Column("id", sa.Integer, primary_key=True),
        sa.Column("name", sa.String(length=255), nullable=False),
        sa.Column("description", sa.Text, nullable=False),
        sa.Column("image_url", sa.String(length=1024), nullable=False),
        sa.Column("video_url", sa.String(length=1024), nullable=True),
        sa.Column("group", sa.String(length=128), nullable=False),
        sa.Column("created_at", sa.DateTime, nullable=False),
    )
    op.create_index("ix_exercises_id", "exercises", ["id"])
    op.create_index("ix_exercises_name", "exercises", ["name"])

    op.create_table(
        "sheets",
        sa.Column("id", sa.Integer, primary_key=True),
        sa.Column("user_id", sa.String(length=255), nullable=False),
        sa.Column("name", sa.String(length=255), nullable=False),
        sa.Column("exercises", sa.JSON, nullable=False),
        sa.Column("created_at", sa.DateTime, nullable=False),
    )
    op.create_index("ix_sheets_id", "sheets", ["id"])
    op.create_index("ix_sheets_user_id", "sheets", ["user_id"])

    op.create_table(
        "workouts",
        sa.Column("id", sa.Integer, primary_key=True),
        sa.Column("user_id", sa.String(length=255), nullable=False),
        sa.Column("sheet_id", sa.Integer, nullable=False),
        sa.Column("completed_at", sa.DateTime, nullable=False),
        sa.Column("total_seconds", sa.Integer, nullable=False),
        sa.Column("exercises", sa.JSON, nullable=False),
    )
    op.create_index("ix_workouts_id", "workouts", ["id"])
    op.create_index("ix_workouts_user_id", "workouts", ["user_id"])
    op.create_index("ix_workouts_sheet_id", "workouts", ["sheet_id"])
    op.create_index("ix_workouts_completed_at", "workouts", ["completed_at"])


def downgrade() -> None:
    op.drop_table("workouts")
    op.drop_table("sheets")
    op.drop_table("exercises")
