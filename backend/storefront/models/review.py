"""Review: one per (product, customer); owned by both parents via FK cascade."""
from __future__ import annotations

from datetime import datetime

from sqlalchemy import (
    Boolean,
    CheckConstraint,
    DateTime,
    ForeignKey,
    Integer,
    Text,
    UniqueConstraint,
)
from sqlalchemy.orm import Mapped, mapped_column

from storefront.db.session import Base
from storefront.models.base import BigIntId, IntegerPrimaryKeyMixin, TimestampMixin

REVIEW_PAIR_CONSTRAINT = "uq_reviews_product_customer"
RATING_RANGE_CONSTRAINT = "ck_reviews_rating_range"
MIN_RATING = 1
MAX_RATING = 5


class Review(Base, IntegerPrimaryKeyMixin, TimestampMixin):
    __tablename__ = "reviews"
    __table_args__ = (
        UniqueConstraint("product_id", "customer_id", name=REVIEW_PAIR_CONSTRAINT),
        CheckConstraint(
            f"rating BETWEEN {MIN_RATING} AND {MAX_RATING}",
            name=RATING_RANGE_CONSTRAINT,
        ),
    )

    product_id: Mapped[int] = mapped_column(
        BigIntId,
        ForeignKey("products.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    customer_id: Mapped[int] = mapped_column(
        BigIntId,
        ForeignKey("customers.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    rating: Mapped[int] = mapped_column(Integer, nullable=False)
    comment: Mapped[str | None] = mapped_column(Text, nullable=True)
    is_verified_purchase: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    reviewed_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False)
