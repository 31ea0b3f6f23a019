"""Thin API layer: review upsert, lookup and delete."""
from __future__ import annotations

from fastapi import APIRouter

from storefront.db.session import get_db
from storefront.schemas import ReviewOut, ReviewUpsert
from storefront.services import review_service

router = APIRouter(prefix="/reviews", tags=["reviews"])


@router.put("", response_model=ReviewOut)
def upsert_review(body: ReviewUpsert):
    """Create or replace the review a customer left on a product."""
    with get_db() as db:
        review = review_service.upsert_review(
            db,
            body.product_id,
            body.customer_id,
            body.rating,
            comment=body.comment,
            reviewed_at=body.reviewed_at,
            is_verified_purchase=body.is_verified_purchase,
        )
        return ReviewOut.model_validate(review)


@router.get("/{review_id}", response_model=ReviewOut)
def get_review(review_id: int):
    with get_db() as db:
        return ReviewOut.model_validate(review_service.get_review(db, review_id))


@router.delete("/{review_id}")
def delete_review(review_id: int):
    with get_db() as db:
        review_service.delete_review(db, review_id)
    return {"status": "ok", "review_id": review_id}
