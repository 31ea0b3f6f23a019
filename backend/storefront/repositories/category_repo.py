"""Category repository."""
from __future__ import annotations

from typing import Any, Mapping

from sqlalchemy import select
from sqlalchemy.orm import Session

from storefront.models import Category
from storefront.repositories.base import delete_row, get_by_id, insert_row, update_row


def get_category_by_id(db: Session, category_id: int) -> Category | None:
    return get_by_id(db, Category, category_id)


def find_category_by_name(db: Session, name: str) -> Category | None:
    result = db.execute(select(Category).where(Category.name == name))
    return result.scalar_one_or_none()


def find_categories(db: Session) -> list[Category]:
    return list(db.execute(select(Category).order_by(Category.id)).scalars().all())


def insert_category(db: Session, attributes: Mapping[str, Any]) -> Category:
    return insert_row(db, Category(**attributes))


def update_category(db: Session, category: Category, attributes: Mapping[str, Any]) -> Category:
    return update_row(db, category, attributes)


def delete_category(db: Session, category: Category) -> None:
    """Deletes the category; CASCADE removes its products and, through them, their reviews."""
    delete_row(db, category)
