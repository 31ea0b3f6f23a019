"""Thin API layer: products, their reviews and rating summary."""
from __future__ import annotations

from decimal import Decimal

from fastapi import APIRouter, Query

from storefront.db.session import get_db
from storefront.schemas import ProductCreate, ProductOut, ProductUpdate, RatingSummaryOut, ReviewOut
from storefront.services import catalog_service, rating_service, review_service

router = APIRouter(prefix="/products", tags=["products"])


@router.post("", status_code=201, response_model=ProductOut)
def create_product(body: ProductCreate):
    """Create a product; 422 if the category does not exist."""
    with get_db() as db:
        return ProductOut.model_validate(catalog_service.create_product(db, body))


@router.get("", response_model=list[ProductOut])
def list_products(
    category_id: int | None = Query(None),
    is_active: bool | None = Query(None),
    min_price: Decimal | None = Query(None, ge=0),
    max_price: Decimal | None = Query(None, ge=0),
    q: str | None = Query(None, description="Substring of the product name"),
    limit: int = Query(100, ge=1, le=1000),
):
    with get_db() as db:
        products = catalog_service.list_products(
            db,
            category_id=category_id,
            is_active=is_active,
            min_price=min_price,
            max_price=max_price,
            name_contains=q,
            limit=limit,
        )
        return [ProductOut.model_validate(p) for p in products]


@router.get("/{product_id}", response_model=ProductOut)
def get_product(product_id: int):
    with get_db() as db:
        return ProductOut.model_validate(catalog_service.get_product(db, product_id))


@router.patch("/{product_id}", response_model=ProductOut)
def update_product(product_id: int, body: ProductUpdate):
    with get_db() as db:
        return ProductOut.model_validate(catalog_service.update_product(db, product_id, body))


@router.delete("/{product_id}")
def delete_product(product_id: int):
    with get_db() as db:
        catalog_service.delete_product(db, product_id)
    return {"status": "ok", "product_id": product_id}


@router.get("/{product_id}/reviews", response_model=list[ReviewOut])
def product_reviews(product_id: int):
    with get_db() as db:
        return [ReviewOut.model_validate(r) for r in review_service.list_product_reviews(db, product_id)]


@router.get("/{product_id}/rating", response_model=RatingSummaryOut)
def product_rating(product_id: int):
    """Average rating (null with no reviews) and review count, computed on request."""
    with get_db() as db:
        catalog_service.get_product(db, product_id)
        summary = rating_service.rating_summary(db, product_id)
    return RatingSummaryOut(**summary._asdict())
