"""
Sample catalog, customers and reviews. Every seeding step is an update-or-create,
so running it again leaves the same rows behind.
"""
from __future__ import annotations

import logging
from decimal import Decimal

from sqlalchemy.orm import Session

from storefront.core.errors import NotFoundError
from storefront.models import Category, Customer, Product, Review
from storefront.repositories import customer_repo, product_repo
from storefront.services import catalog_service, customer_service, review_service

logger = logging.getLogger(__name__)

SAMPLE_CATEGORIES = [
    {"name": "Smartphones", "description": "Phones and accessories"},
    {"name": "Laptops", "description": "Portable computers"},
    {"name": "Audio", "description": "Headphones and speakers"},
]

SAMPLE_CUSTOMERS = [
    {"first_name": "John", "last_name": "Doe", "email": "jdoe@hotmail.com"},
    {"first_name": "Jane", "last_name": "Smith", "email": "jsmith@hotmail.com"},
    {"first_name": "Martin", "last_name": "Varela", "email": "mvarelochoa@hotmail.com", "is_premium": True},
]

# category is resolved by name at seed time
SAMPLE_PRODUCTS = [
    {
        "name": "iPhone 15",
        "description": "The latest iPhone with advanced features.",
        "image_url": "https://example.com/images/iphone15.jpg",
        "price": Decimal("999.99"),
        "weight": Decimal("0.174"),
        "stock": 50,
        "is_active": True,
        "category": "Smartphones",
    },
    {
        "name": "Samsung Galaxy S23",
        "description": "High-end smartphone with an AMOLED display.",
        "image_url": "https://example.com/images/galaxy_s23.jpg",
        "price": Decimal("899.99"),
        "weight": Decimal("0.168"),
        "stock": 30,
        "is_active": True,
        "category": "Smartphones",
    },
    {
        "name": "Dell XPS 13",
        "description": "Ultralight laptop with exceptional performance.",
        "image_url": "https://example.com/images/dell_xps13.jpg",
        "price": Decimal("1199.99"),
        "weight": Decimal("1.2"),
        "stock": 20,
        "is_active": True,
        "category": "Laptops",
    },
    {
        "name": "Sony WH-1000XM4",
        "description": "Wireless headphones with industry-leading noise cancelling.",
        "image_url": "https://example.com/images/sony_wh1000xm4.jpg",
        "price": Decimal("349.99"),
        "weight": Decimal("0.254"),
        "stock": 100,
        "is_active": True,
        "category": "Audio",
    },
]

# (product name, customer email, rating, comment)
SAMPLE_REVIEWS = [
    ("iPhone 15", "jdoe@hotmail.com", 3, "The product is fine, but I expected more."),
    ("iPhone 15", "mvarelochoa@hotmail.com", 2, "Not happy with the product."),
    ("Samsung Galaxy S23", "jsmith@hotmail.com", 5, "Excellent product, very satisfied."),
    ("Sony WH-1000XM4", "jdoe@hotmail.com", 4, "Good product, I recommend it."),
]


def seed_categories(db: Session) -> list[Category]:
    return [
        catalog_service.get_or_create_category(db, c["name"], c.get("description"))
        for c in SAMPLE_CATEGORIES
    ]


def seed_customers(db: Session) -> list[Customer]:
    customers = []
    for info in SAMPLE_CUSTOMERS:
        customer, created = customer_service.upsert_customer_by_email(db, info)
        logger.info("%s customer %s", "Created" if created else "Updated", customer.email)
        customers.append(customer)
    return customers


def seed_products(db: Session) -> list[Product]:
    categories = {c.name: c for c in seed_categories(db)}
    products = []
    for info in SAMPLE_PRODUCTS:
        attributes = {k: v for k, v in info.items() if k != "category"}
        attributes["category_id"] = categories[info["category"]].id
        product, _ = catalog_service.upsert_product_by_name(db, attributes)
        products.append(product)
    return products


def seed_reviews(db: Session) -> list[Review]:
    """Needs seed_products and seed_customers first."""
    reviews = []
    for product_name, email, rating, comment in SAMPLE_REVIEWS:
        product = product_repo.find_product_by_name(db, product_name)
        if product is None:
            raise NotFoundError(f"product {product_name!r} not seeded", field="product_id")
        customer = customer_repo.find_customer_by_email(db, email)
        if customer is None:
            raise NotFoundError(f"customer {email!r} not seeded", field="customer_id")
        reviews.append(review_service.upsert_review(db, product.id, customer.id, rating, comment))
    return reviews


def seed_all(db: Session) -> dict[str, list]:
    customers = seed_customers(db)
    products = seed_products(db)
    reviews = seed_reviews(db)
    return {"customers": customers, "products": products, "reviews": reviews}
