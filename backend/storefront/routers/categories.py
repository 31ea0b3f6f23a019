"""Thin API layer: categories."""
from __future__ import annotations

from fastapi import APIRouter

from storefront.db.session import get_db
from storefront.schemas import CategoryCreate, CategoryOut, CategoryUpdate, ProductOut
from storefront.services import catalog_service

router = APIRouter(prefix="/categories", tags=["categories"])


@router.post("", status_code=201, response_model=CategoryOut)
def create_category(body: CategoryCreate):
    with get_db() as db:
        return CategoryOut.model_validate(catalog_service.create_category(db, body))


@router.get("", response_model=list[CategoryOut])
def list_categories():
    with get_db() as db:
        return [CategoryOut.model_validate(c) for c in catalog_service.list_categories(db)]


@router.get("/{category_id}", response_model=CategoryOut)
def get_category(category_id: int):
    with get_db() as db:
        return CategoryOut.model_validate(catalog_service.get_category(db, category_id))


@router.patch("/{category_id}", response_model=CategoryOut)
def update_category(category_id: int, body: CategoryUpdate):
    with get_db() as db:
        return CategoryOut.model_validate(catalog_service.update_category(db, category_id, body))


@router.delete("/{category_id}")
def delete_category(category_id: int):
    """Delete the category, its products and their reviews."""
    with get_db() as db:
        catalog_service.delete_category(db, category_id)
    return {"status": "ok", "category_id": category_id}


@router.get("/{category_id}/products", response_model=list[ProductOut])
def category_products(category_id: int):
    with get_db() as db:
        catalog_service.get_category(db, category_id)
        products = catalog_service.list_products(db, category_id=category_id)
        return [ProductOut.model_validate(p) for p in products]
