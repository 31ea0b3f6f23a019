#!/usr/bin/env python3
"""
Seed sample customers, products and reviews, then print what is stored.
Safe to run repeatedly: every row is updated-or-created.

From backend/:
  python scripts/seed.py all
  python scripts/seed.py reviews --init-schema   # local SQLite: create tables first
"""
from __future__ import annotations

import argparse
import os
import sys

_script_dir = os.path.dirname(os.path.abspath(__file__))
_backend = os.path.dirname(_script_dir)
if _backend not in sys.path:
    sys.path.insert(0, _backend)

from sqlalchemy.orm import Session

from storefront.core.config import get_settings
from storefront.core.errors import StorefrontError
from storefront.core.logging import configure_logging
from storefront.db.session import get_db, get_engine, init_schema
from storefront.formatting import format_customer_line, format_product, format_rating, format_review
from storefront.repositories import find_reviews_by_product_id
from storefront.seed import seed_customers, seed_products, seed_reviews
from storefront.services import catalog_service, customer_service, rating_service


def _print_customers(db: Session) -> None:
    listing = customer_service.list_customers(db)
    for customer in listing:
        print(format_customer_line(customer))
    print(f"\nTotal customers: {len(listing)}")


def _print_products(db: Session) -> None:
    listing = catalog_service.list_products(db)
    for product in listing:
        print(format_product(product))
    print(f"\nTotal products: {len(listing)}")


def _print_reviews(db: Session) -> None:
    for product in catalog_service.list_products(db):
        reviews = find_reviews_by_product_id(db, product.id)
        if not reviews:
            continue
        print(f"Reviews for {product.name}:")
        for review in reviews:
            print(f"- {format_review(review)}")
        summary = rating_service.rating_summary(db, product.id)
        print(f"Average rating for {product.name}: {format_rating(summary.average_rating, summary.review_count)}\n")


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(description="Seed the storefront database with sample data.")
    parser.add_argument("what", choices=["customers", "products", "reviews", "all"], default="all", nargs="?")
    parser.add_argument("--init-schema", action="store_true", help="create tables from model metadata first")
    args = parser.parse_args(argv)

    configure_logging(get_settings().log_level)
    if args.init_schema:
        init_schema(get_engine())

    with get_db() as db:
        if args.what in ("customers", "all"):
            seed_customers(db)
            _print_customers(db)
        if args.what in ("products", "all"):
            seed_products(db)
            _print_products(db)
        if args.what in ("reviews", "all"):
            seed_reviews(db)
            _print_reviews(db)
    return 0


if __name__ == "__main__":
    try:
        sys.exit(main())
    except StorefrontError as e:
        print(f"FAIL: {e}", file=sys.stderr)
        sys.exit(1)
