"""Display helpers for scripts and logs; entities stay plain data holders."""
from __future__ import annotations

import json
from decimal import Decimal

from storefront.models import Customer, Product, Review


def _money(value: Decimal | float | None) -> str | None:
    if value is None:
        return None
    return f"{Decimal(str(value)):.2f}"


def format_product(product: Product) -> str:
    """Compact JSON: id, name and price as a 2-decimal string."""
    return json.dumps(
        {"id": product.id, "name": product.name, "price": _money(product.price)},
        ensure_ascii=False,
    )


def format_customer_line(customer: Customer) -> str:
    return f"{customer.id}. {customer.first_name}, {customer.last_name} - {customer.email}"


def format_review(review: Review) -> str:
    return json.dumps(
        {
            "id": review.id,
            "product_id": review.product_id,
            "customer_id": review.customer_id,
            "rating": review.rating,
            "comment": review.comment,
            "is_verified_purchase": review.is_verified_purchase,
            "reviewed_at": review.reviewed_at.isoformat() if review.reviewed_at else None,
        },
        ensure_ascii=False,
    )


def format_rating(average: float | None, count: int) -> str:
    if average is None:
        return f"no ratings yet ({count} reviews)"
    return f"{average:.2f} / 5 from {count} review{'s' if count != 1 else ''}"
