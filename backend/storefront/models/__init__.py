"""SQLAlchemy models only; no business logic."""
from storefront.models.base import IntegerPrimaryKeyMixin, TimestampMixin
from storefront.models.category import Category
from storefront.models.customer import Customer
from storefront.models.product import Product
from storefront.models.review import Review

__all__ = [
    "Category",
    "Customer",
    "IntegerPrimaryKeyMixin",
    "Product",
    "Review",
    "TimestampMixin",
]
