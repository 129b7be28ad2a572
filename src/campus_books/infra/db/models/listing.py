from __future__ import annotations

import uuid
from datetime import datetime
from decimal import Decimal

from sqlalchemy import (
    CheckConstraint,
    DateTime,
    ForeignKey,
    Index,
    Numeric,
    SmallInteger,
    String,
    Text,
    func,
)
from sqlalchemy.dialects.postgresql import UUID
from sqlalchemy.orm import Mapped, mapped_column, relationship

from campus_books.infra.db.models.base import Base
from campus_books.infra.db.models.user import UserRow


class ListingRow(Base):
    __tablename__ = "listings"
    __table_args__ = (
        CheckConstraint("price >= 0", name="ck_listings_price_non_negative"),
        CheckConstraint(
            "publish_year BETWEEN 1900 AND 2026", name="ck_listings_publish_year_range"
        ),
        CheckConstraint("program_year BETWEEN 1 AND 4", name="ck_listings_program_year_range"),
        CheckConstraint("status IN ('active', 'removed')", name="ck_listings_status"),
        # Browsing: WHERE status = 'active' ORDER BY created_at DESC
        Index("ix_listings_status_created_at", "status", "created_at"),
        Index("ix_listings_program_name", "program_name"),
    )

    id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True),
        primary_key=True,
        default=uuid.uuid4,
    )
    seller_id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True),
        ForeignKey("users.id"),
        nullable=False,
    )

    book_title: Mapped[str] = mapped_column(String(255), nullable=False)
    author: Mapped[str] = mapped_column(String(255), nullable=False)
    publish_year: Mapped[int] = mapped_column(SmallInteger, nullable=False)
    program_name: Mapped[str] = mapped_column(String(100), nullable=False)
    program_year: Mapped[int] = mapped_column(SmallInteger, nullable=False)
    price: Mapped[Decimal] = mapped_column(
        Numeric(precision=10, scale=2), nullable=False
    )  # 99,999,999.99
    condition_type: Mapped[str] = mapped_column(String(20), nullable=False)
    comments: Mapped[str | None] = mapped_column(Text, nullable=True)

    image1_path: Mapped[str | None] = mapped_column(String(255), nullable=True)
    image2_path: Mapped[str | None] = mapped_column(String(255), nullable=True)
    image3_path: Mapped[str | None] = mapped_column(String(255), nullable=True)

    status: Mapped[str] = mapped_column(String(20), nullable=False, default="active")

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        server_default=func.now(),
    )

    seller: Mapped[UserRow] = relationship(UserRow, lazy="joined")

    @property
    def image_paths(self) -> tuple[str, ...]:
        paths = (self.image1_path, self.image2_path, self.image3_path)
        return tuple(path for path in paths if path)
