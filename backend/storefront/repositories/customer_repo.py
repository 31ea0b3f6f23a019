"""Customer repository: lookups by id and email plus raw writes."""
from __future__ import annotations

from typing import Any, Mapping

from sqlalchemy import select
from sqlalchemy.orm import Session

from storefront.models import Customer
from storefront.repositories.base import delete_row, get_by_id, insert_row, update_row


def get_customer_by_id(db: Session, customer_id: int) -> Customer | None:
    return get_by_id(db, Customer, customer_id)


def find_customer_by_email(db: Session, email: str) -> Customer | None:
    result = db.execute(select(Customer).where(Customer.email == email))
    return result.scalar_one_or_none()


def find_customers(
    db: Session,
    is_premium: bool | None = None,
    limit: int | None = None,
) -> list[Customer]:
    stmt = select(Customer).order_by(Customer.id)
    if is_premium is not None:
        stmt = stmt.where(Customer.is_premium == is_premium)
    if limit is not None:
        stmt = stmt.limit(limit)
    return list(db.execute(stmt).scalars().all())


def insert_customer(db: Session, attributes: Mapping[str, Any]) -> Customer:
    """Raises IntegrityError on a duplicate email."""
    return insert_row(db, Customer(**attributes))


def update_customer(db: Session, customer: Customer, attributes: Mapping[str, Any]) -> Customer:
    return update_row(db, customer, attributes)


def delete_customer(db: Session, customer: Customer) -> None:
    """Deletes the customer; CASCADE removes their reviews."""
    delete_row(db, customer)
