from storefront.repositories.category_repo import find_category_by_name, get_category_by_id
from storefront.repositories.customer_repo import find_customer_by_email, get_customer_by_id
from storefront.repositories.product_repo import find_product_by_name, find_products, get_product_by_id
from storefront.repositories.review_repo import (
    find_review_by_pair,
    find_reviews_by_customer_id,
    find_reviews_by_product_id,
    get_rating_summary,
    get_review_by_id,
)

__all__ = [
    "find_category_by_name",
    "find_customer_by_email",
    "find_product_by_name",
    "find_products",
    "find_review_by_pair",
    "find_reviews_by_customer_id",
    "find_reviews_by_product_id",
    "get_category_by_id",
    "get_customer_by_id",
    "get_product_by_id",
    "get_rating_summary",
    "get_review_by_id",
]
