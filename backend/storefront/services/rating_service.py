"""Read-side rating aggregates; recomputed from storage on every call, never cached."""
from __future__ import annotations

from typing import NamedTuple

from sqlalchemy.orm import Session

from storefront.repositories import review_repo


class RatingSummary(NamedTuple):
    product_id: int
    average_rating: float | None
    review_count: int


def rating_summary(db: Session, product_id: int) -> RatingSummary:
    average, count = review_repo.get_rating_summary(db, product_id)
    return RatingSummary(product_id, average, count)


def average_rating(db: Session, product_id: int) -> float | None:
    """Mean rating, or None when the product has no reviews (not 0)."""
    return rating_summary(db, product_id).average_rating


def review_count(db: Session, product_id: int) -> int:
    return rating_summary(db, product_id).review_count
