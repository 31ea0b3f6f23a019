"""
Customer operations: validated CRUD, email uniqueness and update-or-create by email.
All functions flush but never commit; the caller owns the transaction.
"""
from __future__ import annotations

import logging
from typing import Any

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from storefront.core.errors import ConstraintViolation, NotFoundError
from storefront.models import Customer
from storefront.repositories import customer_repo
from storefront.schemas import CustomerCreate, CustomerUpdate, validate_payload

logger = logging.getLogger(__name__)

EMAIL_CONSTRAINT = "customers.email"


def _duplicate_email(email: str) -> ConstraintViolation:
    return ConstraintViolation(
        f"email {email!r} is already registered",
        field="email",
        constraint=EMAIL_CONSTRAINT,
    )


def create_customer(db: Session, data: CustomerCreate | dict[str, Any]) -> Customer:
    """Insert a new customer; a taken email raises ConstraintViolation."""
    payload = validate_payload(CustomerCreate, data)
    try:
        customer = customer_repo.insert_customer(db, payload.model_dump())
    except IntegrityError as exc:
        raise _duplicate_email(payload.email) from exc
    logger.info("Created customer %s <%s>", customer.id, customer.email)
    return customer


def get_customer(db: Session, customer_id: int) -> Customer:
    customer = customer_repo.get_customer_by_id(db, customer_id)
    if customer is None:
        raise NotFoundError(f"customer {customer_id} not found", field="customer_id")
    return customer


def list_customers(db: Session, is_premium: bool | None = None, limit: int | None = None) -> list[Customer]:
    return customer_repo.find_customers(db, is_premium=is_premium, limit=limit)


def update_customer(db: Session, customer_id: int, data: CustomerUpdate | dict[str, Any]) -> Customer:
    """Merge only the fields present in data."""
    payload = validate_payload(CustomerUpdate, data)
    customer = get_customer(db, customer_id)
    changes = payload.model_dump(exclude_unset=True)
    try:
        customer_repo.update_customer(db, customer, changes)
    except IntegrityError as exc:
        raise _duplicate_email(changes.get("email", "")) from exc
    logger.debug("Updated customer %s fields=%s", customer_id, sorted(changes))
    return customer


def delete_customer(db: Session, customer_id: int) -> None:
    """Delete the customer; their reviews go with them."""
    customer = get_customer(db, customer_id)
    customer_repo.delete_customer(db, customer)
    logger.info("Deleted customer %s", customer_id)


def upsert_customer_by_email(
    db: Session,
    data: CustomerCreate | dict[str, Any],
) -> tuple[Customer, bool]:
    """
    Update-or-create keyed on email. Returns (customer, created).
    A concurrent insert of the same email is reconciled into an update.
    """
    payload = validate_payload(CustomerCreate, data)
    existing = customer_repo.find_customer_by_email(db, payload.email)
    if existing is not None:
        customer_repo.update_customer(db, existing, payload.model_dump(exclude_unset=True))
        return existing, False
    try:
        customer = customer_repo.insert_customer(db, payload.model_dump())
    except IntegrityError as exc:
        existing = customer_repo.find_customer_by_email(db, payload.email)
        if existing is None:
            raise _duplicate_email(payload.email) from exc
        logger.info("Customer <%s> created concurrently; updating instead", payload.email)
        customer_repo.update_customer(db, existing, payload.model_dump(exclude_unset=True))
        return existing, False
    logger.info("Created customer %s <%s>", customer.id, customer.email)
    return customer, True
