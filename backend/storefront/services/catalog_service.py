"""
Catalog operations: categories and products.
Products must point at an existing category; deleting a category removes its products.
"""
from __future__ import annotations

import logging
from typing import Any

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from storefront.core.errors import ConstraintViolation, NotFoundError, ReferentialError
from storefront.models import Category, Product
from storefront.repositories import category_repo, product_repo
from storefront.schemas import (
    CategoryCreate,
    CategoryUpdate,
    ProductCreate,
    ProductUpdate,
    validate_payload,
)

logger = logging.getLogger(__name__)

CATEGORY_NAME_CONSTRAINT = "categories.name"


# ---------------------------------------------------------------------------
# Categories
# ---------------------------------------------------------------------------


def create_category(db: Session, data: CategoryCreate | dict[str, Any]) -> Category:
    payload = validate_payload(CategoryCreate, data)
    try:
        category = category_repo.insert_category(db, payload.model_dump())
    except IntegrityError as exc:
        raise ConstraintViolation(
            f"category {payload.name!r} already exists",
            field="name",
            constraint=CATEGORY_NAME_CONSTRAINT,
        ) from exc
    logger.info("Created category %s %r", category.id, category.name)
    return category


def get_category(db: Session, category_id: int) -> Category:
    category = category_repo.get_category_by_id(db, category_id)
    if category is None:
        raise NotFoundError(f"category {category_id} not found", field="category_id")
    return category


def list_categories(db: Session) -> list[Category]:
    return category_repo.find_categories(db)


def get_or_create_category(db: Session, name: str, description: str | None = None) -> Category:
    category = category_repo.find_category_by_name(db, name)
    if category is not None:
        return category
    return create_category(db, {"name": name, "description": description})


def update_category(db: Session, category_id: int, data: CategoryUpdate | dict[str, Any]) -> Category:
    payload = validate_payload(CategoryUpdate, data)
    category = get_category(db, category_id)
    changes = payload.model_dump(exclude_unset=True)
    try:
        category_repo.update_category(db, category, changes)
    except IntegrityError as exc:
        raise ConstraintViolation(
            f"category {changes.get('name')!r} already exists",
            field="name",
            constraint=CATEGORY_NAME_CONSTRAINT,
        ) from exc
    return category


def delete_category(db: Session, category_id: int) -> None:
    """Delete the category together with its products and their reviews."""
    category = get_category(db, category_id)
    category_repo.delete_category(db, category)
    logger.info("Deleted category %s", category_id)


# ---------------------------------------------------------------------------
# Products
# ---------------------------------------------------------------------------


def _require_category(db: Session, category_id: int) -> None:
    if category_repo.get_category_by_id(db, category_id) is None:
        raise ReferentialError(
            f"category {category_id} does not exist",
            field="category_id",
            constraint="products.category_id",
        )


def _insert_product(db: Session, payload: ProductCreate) -> Product:
    _require_category(db, payload.category_id)
    try:
        return product_repo.insert_product(db, payload.model_dump())
    except IntegrityError as exc:
        # Category removed between the check and the insert
        raise ReferentialError(
            f"category {payload.category_id} does not exist",
            field="category_id",
            constraint="products.category_id",
        ) from exc


def create_product(db: Session, data: ProductCreate | dict[str, Any]) -> Product:
    payload = validate_payload(ProductCreate, data)
    product = _insert_product(db, payload)
    logger.info("Created product %s %r", product.id, product.name)
    return product


def get_product(db: Session, product_id: int) -> Product:
    product = product_repo.get_product_by_id(db, product_id)
    if product is None:
        raise NotFoundError(f"product {product_id} not found", field="product_id")
    return product


def list_products(db: Session, **filters: Any) -> list[Product]:
    """Filters: category_id, is_active, min_price, max_price, name_contains, limit."""
    return product_repo.find_products(db, **filters)


def update_product(db: Session, product_id: int, data: ProductUpdate | dict[str, Any]) -> Product:
    payload = validate_payload(ProductUpdate, data)
    product = get_product(db, product_id)
    changes = payload.model_dump(exclude_unset=True)
    if "category_id" in changes:
        _require_category(db, changes["category_id"])
    product_repo.update_product(db, product, changes)
    logger.debug("Updated product %s fields=%s", product_id, sorted(changes))
    return product


def delete_product(db: Session, product_id: int) -> None:
    """Delete the product; its reviews go with it."""
    product = get_product(db, product_id)
    product_repo.delete_product(db, product)
    logger.info("Deleted product %s", product_id)


def upsert_product_by_name(
    db: Session,
    data: ProductCreate | dict[str, Any],
) -> tuple[Product, bool]:
    """Update-or-create keyed on product name. Returns (product, created)."""
    payload = validate_payload(ProductCreate, data)
    existing = product_repo.find_product_by_name(db, payload.name)
    if existing is None:
        product = _insert_product(db, payload)
        logger.info("Created product %s %r", product.id, product.name)
        return product, True
    _require_category(db, payload.category_id)
    product_repo.update_product(db, existing, payload.model_dump(exclude_unset=True))
    logger.info("Updated product %s %r", existing.id, existing.name)
    return existing, False
