"""Initial schema

Revision ID: 001
Revises:
Create Date: 2025-11-05

Creates:
- trips
- itinerary_items
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


def upgrade() -> None:
    """Create trip and itinerary tables."""
    # trips table
    op.create_table(
        "trips",
        sa.Column("id", sa.Text(), primary_key=True),
        sa.Column("user_id", sa.Text(), nullable=False),
        sa.Column("title", sa.Text(), nullable=False),
        sa.Column("start_date", sa.Date(), nullable=False),
        sa.Column("end_date", sa.Date(), nullable=False),
        sa.Column("cover_image", sa.Text(), nullable=True),
        sa.Column("notes", sa.Text(), nullable=True),
        sa.Column("created_at", sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
        sa.CheckConstraint("start_date <= end_date", name="ck_trips_date_range"),
    )
    op.create_index("idx_trips_user", "trips", ["user_id"])

    # itinerary_items table
    op.create_table(
        "itinerary_items",
        sa.Column("id", sa.Text(), primary_key=True),
        sa.Column("trip_id", sa.Text(), nullable=False),
        sa.Column("date", sa.Date(), nullable=False),
        sa.Column("time", sa.Text(), nullable=True),
        sa.Column("type", sa.Text(), nullable=False),
        sa.Column("title", sa.Text(), nullable=False, server_default=""),
        sa.Column("location", sa.Text(), nullable=True),
        sa.Column("notes", sa.Text(), nullable=True),
        sa.Column("cost", sa.Numeric(12, 2), nullable=True),
        sa.Column("currency", sa.Text(), nullable=True),
        sa.Column("is_booked", sa.Boolean(), nullable=True),
        sa.Column(
            "details",
            sa.JSON().with_variant(postgresql.JSONB(), "postgresql"),
            nullable=False,
            server_default=sa.text("'{}'"),
        ),
        sa.Column("created_at", sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
        sa.ForeignKeyConstraint(["trip_id"], ["trips.id"], ondelete="CASCADE"),
    )
    op.create_index("idx_items_trip_date_time", "itinerary_items", ["trip_id", "date", "time"])


def downgrade() -> None:
    """Drop trip and itinerary tables."""
    op.drop_index("idx_items_trip_date_time", table_name="itinerary_items")
    op.drop_table("itinerary_items")
    op.drop_index("idx_trips_user", table_name="trips")
    op.drop_table("trips")
