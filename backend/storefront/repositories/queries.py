"""
Exact SQL for read-side aggregates.
Portable across Postgres and SQLite; use with parameter binding.
"""

# ---------------------------------------------------------------------------
# Rating summary for one product: mean rating and review count.
#   AVG over zero rows is NULL, which callers surface as "no rating".
#   Postgres returns AVG(integer) as numeric; callers convert to float.
# ---------------------------------------------------------------------------
SQL_PRODUCT_RATING_SUMMARY = """
SELECT
    AVG(r.rating) AS average_rating,
    COUNT(r.id) AS review_count
FROM reviews r
WHERE r.product_id = :product_id;
"""
