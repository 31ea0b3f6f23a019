#!/usr/bin/env python3
"""
End-to-end check of the storefront data layer against a real database.

Run from the backend directory:
  python scripts/run_migrations.py
  python scripts/test_db_pipeline.py

Creates its own uniquely named rows and deletes them at the end
(category delete cascades to products and reviews).
"""
from __future__ import annotations

import os
import sys
import uuid
from datetime import datetime, timezone
from decimal import Decimal

# Ensure backend is on path so storefront is importable (whether run as script or from repo root)
_script_dir = os.path.dirname(os.path.abspath(__file__))
_backend = os.path.dirname(_script_dir)
if _backend not in sys.path:
    sys.path.insert(0, _backend)

from sqlalchemy import func, select
from sqlalchemy.exc import OperationalError

from storefront.core.errors import ConstraintViolation, ValidationError
from storefront.db.session import get_db
from storefront.models import Product, Review
from storefront.services import catalog_service, customer_service, rating_service, review_service

TEST_PREFIX = "test-e2e-"


def _check_db() -> None:
    """Fail fast with a clear message if the database is not reachable."""
    try:
        with get_db() as db:
            db.execute(select(1))
    except OperationalError as e:
        print(
            "[FAIL] Cannot connect to the database.\n"
            "  1. Set DATABASE_URL in backend/.env.\n"
            "  2. Run migrations: python scripts/run_migrations.py\n"
            "  3. Run this script again.",
            file=sys.stderr,
        )
        raise SystemExit(1) from e


def _run() -> None:
    _check_db()
    uid = str(uuid.uuid4())[:8]
    t1 = datetime(2025, 9, 24, 12, 0, tzinfo=timezone.utc)

    # --- a) Category, product, two customers ---
    with get_db() as db:
        category = catalog_service.create_category(db, {"name": f"{TEST_PREFIX}category-{uid}"})
        product = catalog_service.create_product(
            db,
            {
                "name": f"{TEST_PREFIX}phone-{uid}",
                "description": "E2E test product",
                "price": Decimal("999.99"),
                "stock": 5,
                "category_id": category.id,
            },
        )
        alice = customer_service.create_customer(
            db, {"first_name": "Alice", "last_name": "Test", "email": f"{TEST_PREFIX}alice-{uid}@example.com"}
        )
        bob = customer_service.create_customer(
            db, {"first_name": "Bob", "last_name": "Test", "email": f"{TEST_PREFIX}bob-{uid}@example.com"}
        )
        category_id, product_id = category.id, product.id
        alice_id, bob_id = alice.id, bob.id

    # --- b) Duplicate email is rejected ---
    try:
        with get_db() as db:
            customer_service.create_customer(
                db, {"first_name": "Alice", "last_name": "Again", "email": f"{TEST_PREFIX}alice-{uid}@example.com"}
            )
    except ConstraintViolation:
        print("[PASS] Duplicate email rejected")
    else:
        raise AssertionError("Expected ConstraintViolation for duplicate email")

    # --- c) No reviews yet: average is None, count 0 ---
    with get_db() as db:
        assert rating_service.average_rating(db, product_id) is None
        assert rating_service.review_count(db, product_id) == 0
    print("[PASS] Average rating is None without reviews")

    # --- d) Upsert twice for the same pair: one row, latest values ---
    with get_db() as db:
        review_service.upsert_review(db, product_id, alice_id, 5, "great", reviewed_at=t1)
    with get_db() as db:
        review_service.upsert_review(db, product_id, alice_id, 4, "good", reviewed_at=t1)
    with get_db() as db:
        rows = db.execute(
            select(Review).where(Review.product_id == product_id, Review.customer_id == alice_id)
        ).scalars().all()
        assert len(rows) == 1, f"Expected one review for the pair; got {len(rows)}"
        assert rows[0].rating == 4 and rows[0].comment == "good"
    print("[PASS] Upsert keeps one review per (product, customer)")

    # --- e) Rating bound ---
    with get_db() as db:
        try:
            review_service.upsert_review(db, product_id, bob_id, 6, "too much")
        except ValidationError:
            print("[PASS] Rating 6 rejected")
        else:
            raise AssertionError("Expected ValidationError for rating 6")

    # --- f) Average over two reviews ---
    with get_db() as db:
        review_service.upsert_review(db, product_id, bob_id, 3, "ok")
    with get_db() as db:
        avg = rating_service.average_rating(db, product_id)
        assert avg == 3.5, f"Expected 3.5; got {avg}"
        assert rating_service.review_count(db, product_id) == 2
    print("[PASS] Average rating 3.5 over two reviews")

    # --- g) Deleting a customer removes their reviews ---
    with get_db() as db:
        customer_service.delete_customer(db, bob_id)
    with get_db() as db:
        assert rating_service.review_count(db, product_id) == 1
    print("[PASS] Customer delete cascaded to reviews")

    # --- h) Deleting the category removes products and their reviews ---
    with get_db() as db:
        catalog_service.delete_category(db, category_id)
    with get_db() as db:
        product_count = db.execute(
            select(func.count()).select_from(Product).where(Product.category_id == category_id)
        ).scalar()
        review_left = db.execute(
            select(func.count()).select_from(Review).where(Review.product_id == product_id)
        ).scalar()
        customer_service.delete_customer(db, alice_id)
    assert product_count == 0, f"Expected 0 products after category delete; got {product_count}"
    assert review_left == 0, f"Expected 0 reviews after category delete; got {review_left}"
    print("[PASS] Category delete cascaded to products and reviews")

    print("\nAll assertions passed.")


def main() -> int:
    try:
        _run()
        return 0
    except Exception as e:
        print(f"\n[FAIL] {e}", file=sys.stderr)
        raise


if __name__ == "__main__":
    sys.exit(main())
