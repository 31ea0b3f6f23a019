"""
Review operations. upsert_review keeps exactly one review per (product, customer):
find by the full pair, update in place or insert, and turn a lost insert race
into an update. The unique index on the pair is the backstop.
"""
from __future__ import annotations

import logging
from datetime import datetime, timezone
from typing import Any

from sqlalchemy import func
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from storefront.core.errors import ConstraintViolation, NotFoundError, ReferentialError, ValidationError
from storefront.models import Review
from storefront.models.review import (
    MAX_RATING,
    MIN_RATING,
    RATING_RANGE_CONSTRAINT,
    REVIEW_PAIR_CONSTRAINT,
)
from storefront.repositories import customer_repo, product_repo, review_repo

logger = logging.getLogger(__name__)


def validate_rating(rating: Any) -> int:
    if isinstance(rating, bool) or not isinstance(rating, int):
        raise ValidationError(f"rating must be an integer, got {rating!r}", field="rating")
    if not MIN_RATING <= rating <= MAX_RATING:
        raise ValidationError(
            f"rating must be between {MIN_RATING} and {MAX_RATING}, got {rating}",
            field="rating",
            constraint=RATING_RANGE_CONSTRAINT,
        )
    return rating


def _require_parents(db: Session, product_id: int, customer_id: int) -> None:
    if product_repo.get_product_by_id(db, product_id) is None:
        raise ReferentialError(
            f"product {product_id} does not exist",
            field="product_id",
            constraint="reviews.product_id",
        )
    if customer_repo.get_customer_by_id(db, customer_id) is None:
        raise ReferentialError(
            f"customer {customer_id} does not exist",
            field="customer_id",
            constraint="reviews.customer_id",
        )


def upsert_review(
    db: Session,
    product_id: int,
    customer_id: int,
    rating: int,
    comment: str | None = None,
    reviewed_at: datetime | None = None,
    is_verified_purchase: bool | None = None,
) -> Review:
    """
    Create or replace the review customer_id left on product_id.

    rating, comment and reviewed_at (default: now, UTC) are overwritten on every call.
    is_verified_purchase=None keeps the stored flag (False for a new review).
    Raises ValidationError for a bad rating and ReferentialError for a missing parent.
    """
    validate_rating(rating)
    if comment is not None and not isinstance(comment, str):
        raise ValidationError("comment must be a string", field="comment")
    _require_parents(db, product_id, customer_id)

    changes: dict[str, Any] = {
        "rating": rating,
        "comment": comment,
        "reviewed_at": reviewed_at or datetime.now(timezone.utc),
    }
    if is_verified_purchase is not None:
        changes["is_verified_purchase"] = bool(is_verified_purchase)

    existing = review_repo.find_review_by_pair(db, product_id, customer_id)
    if existing is not None:
        review_repo.update_review(db, existing, {**changes, "updated_at": func.now()})
        logger.debug("Updated review %s (product=%s customer=%s)", existing.id, product_id, customer_id)
        return existing

    try:
        review = review_repo.insert_review(
            db,
            {"product_id": product_id, "customer_id": customer_id, **changes},
        )
    except IntegrityError as exc:
        existing = review_repo.find_review_by_pair(db, product_id, customer_id)
        if existing is None:
            raise ConstraintViolation(
                f"could not store review for product {product_id} by customer {customer_id}",
                constraint=REVIEW_PAIR_CONSTRAINT,
            ) from exc
        logger.info(
            "Review for product=%s customer=%s inserted concurrently; updating instead",
            product_id,
            customer_id,
        )
        review_repo.update_review(db, existing, {**changes, "updated_at": func.now()})
        return existing

    logger.info("Created review %s (product=%s customer=%s)", review.id, product_id, customer_id)
    return review


def get_review(db: Session, review_id: int) -> Review:
    review = review_repo.get_review_by_id(db, review_id)
    if review is None:
        raise NotFoundError(f"review {review_id} not found", field="review_id")
    return review


def delete_review(db: Session, review_id: int) -> None:
    review = get_review(db, review_id)
    review_repo.delete_review(db, review)
    logger.info("Deleted review %s", review_id)


def list_product_reviews(db: Session, product_id: int) -> list[Review]:
    if product_repo.get_product_by_id(db, product_id) is None:
        raise NotFoundError(f"product {product_id} not found", field="product_id")
    return review_repo.find_reviews_by_product_id(db, product_id)


def list_customer_reviews(db: Session, customer_id: int) -> list[Review]:
    if customer_repo.get_customer_by_id(db, customer_id) is None:
        raise NotFoundError(f"customer {customer_id} not found", field="customer_id")
    return review_repo.find_reviews_by_customer_id(db, customer_id)
