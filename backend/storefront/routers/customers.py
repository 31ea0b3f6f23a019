"""Thin API layer: customers and their reviews."""
from __future__ import annotations

from fastapi import APIRouter, Query, Response

from storefront.db.session import get_db
from storefront.schemas import CustomerCreate, CustomerOut, CustomerUpdate, ReviewOut
from storefront.services import customer_service, review_service

router = APIRouter(prefix="/customers", tags=["customers"])


@router.post("", status_code=201, response_model=CustomerOut)
def create_customer(body: CustomerCreate):
    """Register a customer; 409 if the email is taken."""
    with get_db() as db:
        return CustomerOut.model_validate(customer_service.create_customer(db, body))


@router.put("", response_model=CustomerOut)
def upsert_customer(body: CustomerCreate, response: Response):
    """Update-or-create keyed on email; 201 when a new customer was created."""
    with get_db() as db:
        customer, created = customer_service.upsert_customer_by_email(db, body)
        response.status_code = 201 if created else 200
        return CustomerOut.model_validate(customer)


@router.get("", response_model=list[CustomerOut])
def list_customers(
    is_premium: bool | None = Query(None),
    limit: int = Query(100, ge=1, le=1000),
):
    with get_db() as db:
        customers = customer_service.list_customers(db, is_premium=is_premium, limit=limit)
        return [CustomerOut.model_validate(c) for c in customers]


@router.get("/{customer_id}", response_model=CustomerOut)
def get_customer(customer_id: int):
    with get_db() as db:
        return CustomerOut.model_validate(customer_service.get_customer(db, customer_id))


@router.patch("/{customer_id}", response_model=CustomerOut)
def update_customer(customer_id: int, body: CustomerUpdate):
    with get_db() as db:
        return CustomerOut.model_validate(customer_service.update_customer(db, customer_id, body))


@router.delete("/{customer_id}")
def delete_customer(customer_id: int):
    """Delete the customer and every review they wrote."""
    with get_db() as db:
        customer_service.delete_customer(db, customer_id)
    return {"status": "ok", "customer_id": customer_id}


@router.get("/{customer_id}/reviews", response_model=list[ReviewOut])
def customer_reviews(customer_id: int):
    with get_db() as db:
        return [ReviewOut.model_validate(r) for r in review_service.list_customer_reviews(db, customer_id)]
