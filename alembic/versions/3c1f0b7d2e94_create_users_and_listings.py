"""Create users and listings

Revision ID: 3c1f0b7d2e94
Revises:
Create Date: 2026-10-19 10:02:11.418236

"""

from typing import Sequence, Union

import sqlalchemy as sa
from alembic import op
from sqlalchemy.dialects import postgresql


# revision identifiers, used by Alembic.
revision: str = "3c1f0b7d2e94"
down_revision: Union[str, Sequence[str], None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    """Upgrade schema."""
    op.create_table(
        "users",
        sa.Column("id", postgresql.UUID(as_uuid=True), primary_key=True),
        sa.Column("email", sa.String(length=255), nullable=False, unique=True),
        sa.Column("password_hash", sa.String(length=255), nullable=False),
        sa.Column("first_name", sa.String(length=100), nullable=False),
        sa.Column("last_name", sa.String(length=100), nullable=False),
        sa.Column("role", sa.String(length=20), nullable=False, server_default="student"),
        sa.Column(
            "created_at",
            sa.DateTime(timezone=True),
            nullable=False,
            server_default=sa.func.now(),
        ),
    )

    op.create_table(
        "listings",
        sa.Column("id", postgresql.UUID(as_uuid=True), primary_key=True),
        sa.Column(
            "seller_id",
            postgresql.UUID(as_uuid=True),
            sa.ForeignKey("users.id"),
            nullable=False,
        ),
        sa.Column("book_title", sa.String(length=255), nullable=False),
        sa.Column("author", sa.String(length=255), nullable=False),
        sa.Column("publish_year", sa.SmallInteger(), nullable=False),
        sa.Column("program_name", sa.String(length=100), nullable=False),
        sa.Column("program_year", sa.SmallInteger(), nullable=False),
        sa.Column("price", sa.Numeric(precision=10, scale=2), nullable=False),
        sa.Column("condition_type", sa.String(length=20), nullable=False),
        sa.Column("comments", sa.Text(), nullable=True),
        sa.Column("image1_path", sa.String(length=255), nullable=True),
        sa.Column("image2_path", sa.String(length=255), nullable=True),
        sa.Column("image3_path", sa.String(length=255), nullable=True),
        sa.Column("status", sa.String(length=20), nullable=False, server_default="active"),
        sa.Column(
            "created_at",
            sa.DateTime(timezone=True),
            nullable=False,
            server_default=sa.func.now(),
        ),
        sa.CheckConstraint("price >= 0", name="ck_listings_price_non_negative"),
        sa.CheckConstraint(
            "publish_year BETWEEN 1900 AND 2026", name="ck_listings_publish_year_range"
        ),
        sa.CheckConstraint("program_year BETWEEN 1 AND 4", name="ck_listings_program_year_range"),
        sa.CheckConstraint("status IN ('active', 'removed')", name="ck_listings_status"),
    )
    op.create_index("ix_listings_status_created_at", "listings", ["status", "created_at"])
    op.create_index("ix_listings_program_name", "listings", ["program_name"])


def downgrade() -> None:
    """Downgrade schema."""
    op.drop_index("ix_listings_program_name", table_name="listings")
    op.drop_index("ix_listings_status_created_at", table_name="listings")
    op.drop_table("listings")
    op.drop_table("users")
