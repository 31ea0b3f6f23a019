"""Product repository: filtered listing plus raw writes."""
from __future__ import annotations

from decimal import Decimal
from typing import Any, Mapping

from sqlalchemy import and_, select
from sqlalchemy.orm import Session

from storefront.models import Product
from storefront.repositories.base import delete_row, get_by_id, insert_row, update_row


def get_product_by_id(db: Session, product_id: int) -> Product | None:
    return get_by_id(db, Product, product_id)


def find_product_by_name(db: Session, name: str) -> Product | None:
    """First product with exactly this name (names are not unique)."""
    result = db.execute(select(Product).where(Product.name == name).order_by(Product.id).limit(1))
    return result.scalar_one_or_none()


def find_products(
    db: Session,
    category_id: int | None = None,
    is_active: bool | None = None,
    min_price: Decimal | None = None,
    max_price: Decimal | None = None,
    name_contains: str | None = None,
    limit: int | None = None,
) -> list[Product]:
    stmt = select(Product)

    filters = []
    if category_id is not None:
        filters.append(Product.category_id == category_id)
    if is_active is not None:
        filters.append(Product.is_active == is_active)
    if min_price is not None:
        filters.append(Product.price >= min_price)
    if max_price is not None:
        filters.append(Product.price <= max_price)
    if name_contains:
        filters.append(Product.name.ilike(f"%{name_contains}%"))

    if filters:
        stmt = stmt.where(and_(*filters))
    stmt = stmt.order_by(Product.id)
    if limit is not None:
        stmt = stmt.limit(limit)
    return list(db.execute(stmt).scalars().all())


def insert_product(db: Session, attributes: Mapping[str, Any]) -> Product:
    """Raises IntegrityError if category_id does not resolve."""
    return insert_row(db, Product(**attributes))


def update_product(db: Session, product: Product, attributes: Mapping[str, Any]) -> Product:
    return update_row(db, product, attributes)


def delete_product(db: Session, product: Product) -> None:
    """Deletes the product; CASCADE removes its reviews."""
    delete_row(db, product)
