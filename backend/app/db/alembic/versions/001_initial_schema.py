"""Initial schema

Revision ID: 001
Revises:
Create Date: 2026-10-19

Creates:
- profile (quiet hours)
- scheduled_plan
- notification
"""

from collections.abc import Sequence

import sqlalchemy as sa
from alembic import op
from sqlalchemy.dialects import postgresql

# revision identifiers, used by Alembic.
revision: str = "001"
down_revision: str | None = None
branch_labels: str | Sequence[str] | None = None
depends_on: str | Sequence[str] | None = None

JSON = sa.JSON().with_variant(postgresql.JSONB(), "postgresql")


def upgrade() -> None:
    """Create all tables."""
    # profile table
    op.create_table(
        "profile",
        sa.Column("user_id", sa.Uuid(), primary_key=True),
        sa.Column("display_name", sa.Text(), nullable=True),
        sa.Column("notification_quiet_start", sa.Text(), nullable=True),
        sa.Column("notification_quiet_end", sa.Text(), nullable=True),
        sa.Column("created_at", sa.DateTime(), server_default=sa.func.now(), nullable=False),
    )

    # scheduled_plan table
    op.create_table(
        "scheduled_plan",
        sa.Column("id", sa.Uuid(), primary_key=True),
        sa.Column("user_id", sa.Uuid(), nullable=False),
        sa.Column("restaurant_id", sa.Text(), nullable=False),
        sa.Column("restaurant_name", sa.Text(), nullable=False),
        sa.Column("restaurant_address", sa.Text(), nullable=True),
        sa.Column("restaurant_lat", sa.Float(), nullable=True),
        sa.Column("restaurant_lng", sa.Float(), nullable=True),
        sa.Column("restaurant_hours", JSON, nullable=True),
        sa.Column("activity_id", sa.Text(), nullable=False),
        sa.Column("activity_name", sa.Text(), nullable=False),
        sa.Column("activity_address", sa.Text(), nullable=True),
        sa.Column("activity_lat", sa.Float(), nullable=True),
        sa.Column("activity_lng", sa.Float(), nullable=True),
        sa.Column("activity_hours", JSON, nullable=True),
        sa.Column("scheduled_date", sa.Date(), nullable=False),
        sa.Column("scheduled_time", sa.Time(), nullable=False),
        sa.Column("availability_status", sa.Text(), nullable=True),
        sa.Column("conflict_warnings", JSON, nullable=True),
        sa.Column("weather_forecast", JSON, nullable=True),
        sa.Column("confirmation_numbers", JSON, nullable=True),
        sa.Column("status", sa.Text(), nullable=False),
        sa.Column("rating", sa.Integer(), nullable=True),
        sa.Column("search_mode", sa.Text(), nullable=False),
        sa.Column("created_at", sa.DateTime(), server_default=sa.func.now(), nullable=False),
        sa.Column("updated_at", sa.DateTime(), nullable=True),
        sa.Column("completed_at", sa.DateTime(), nullable=True),
    )
    op.create_index(
        "idx_scheduled_plan_user_date", "scheduled_plan", ["user_id", "scheduled_date"]
    )

    # notification table
    op.create_table(
        "notification",
        sa.Column("id", sa.Uuid(), primary_key=True),
        sa.Column("user_id", sa.Uuid(), nullable=False),
        sa.Column("scheduled_plan_id", sa.Uuid(), nullable=False),
        sa.Column("notification_type", sa.Text(), nullable=False),
        sa.Column("title", sa.Text(), nullable=False),
        sa.Column("message", sa.Text(), nullable=False),
        sa.Column("scheduled_for", sa.DateTime(), nullable=False),
        sa.Column("sent_at", sa.DateTime(), nullable=True),
        sa.Column("read_at", sa.DateTime(), nullable=True),
        sa.Column("delivery_method", sa.Text(), nullable=False),
        sa.Column("created_at", sa.DateTime(), server_default=sa.func.now(), nullable=False),
        sa.ForeignKeyConstraint(["scheduled_plan_id"], ["scheduled_plan.id"], ondelete="CASCADE"),
    )
    op.create_index("idx_notification_due", "notification", ["sent_at", "scheduled_for"])
    op.create_index("idx_notification_plan", "notification", ["scheduled_plan_id"])
    op.create_index("idx_notification_user", "notification", ["user_id", "scheduled_for"])


def downgrade() -> None:
    """Drop all tables."""
    op.drop_table("notification")
    op.drop_table("scheduled_plan")
    op.drop_table("profile")
