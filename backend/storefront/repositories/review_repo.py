"""Review repository: pair lookup, per-parent listings and the rating aggregate."""
from __future__ import annotations

from typing import Any, Mapping

from sqlalchemy import select, text
from sqlalchemy.orm import Session

from storefront.models import Review
from storefront.repositories.base import delete_row, get_by_id, insert_row, update_row
from storefront.repositories.queries import SQL_PRODUCT_RATING_SUMMARY


def get_review_by_id(db: Session, review_id: int) -> Review | None:
    return get_by_id(db, Review, review_id)


def find_review_by_pair(db: Session, product_id: int, customer_id: int) -> Review | None:
    """The single review a customer left on a product, if any."""
    result = db.execute(
        select(Review).where(
            Review.product_id == product_id,
            Review.customer_id == customer_id,
        )
    )
    return result.scalar_one_or_none()


def find_reviews_by_product_id(db: Session, product_id: int) -> list[Review]:
    stmt = select(Review).where(Review.product_id == product_id).order_by(Review.id)
    return list(db.execute(stmt).scalars().all())


def find_reviews_by_customer_id(db: Session, customer_id: int) -> list[Review]:
    stmt = select(Review).where(Review.customer_id == customer_id).order_by(Review.id)
    return list(db.execute(stmt).scalars().all())


def insert_review(db: Session, attributes: Mapping[str, Any]) -> Review:
    """Raises IntegrityError when the (product_id, customer_id) pair already exists."""
    return insert_row(db, Review(**attributes))


def update_review(db: Session, review: Review, attributes: Mapping[str, Any]) -> Review:
    return update_row(db, review, attributes)


def delete_review(db: Session, review: Review) -> None:
    delete_row(db, review)


def get_rating_summary(db: Session, product_id: int) -> tuple[float | None, int]:
    """
    Mean rating and review count for one product, recomputed on every call.
    Mean is None when the product has no reviews.
    """
    row = db.execute(text(SQL_PRODUCT_RATING_SUMMARY), {"product_id": product_id}).one()
    average = float(row[0]) if row[0] is not None else None
    return average, int(row[1] or 0)
