import pytest
from fastapi.testclient import TestClient

from storefront.db import session as db_session


@pytest.fixture()
def client(session_factory, monkeypatch):
    monkeypatch.setattr(db_session, "_SessionLocal", session_factory)
    import main

    with TestClient(main.app) as test_client:
        yield test_client


@pytest.fixture()
def catalog(client):
    category = client.post("/categories", json={"name": "Smartphones"}).json()
    product = client.post(
        "/products",
        json={
            "name": "iPhone 15",
            "description": "Latest iPhone",
            "price": 999.99,
            "stock": 50,
            "category_id": category["id"],
        },
    ).json()
    john = client.post(
        "/customers",
        json={"first_name": "John", "last_name": "Doe", "email": "jdoe@hotmail.com"},
    ).json()
    jane = client.post(
        "/customers",
        json={"first_name": "Jane", "last_name": "Smith", "email": "jsmith@hotmail.com"},
    ).json()
    return {"category": category, "product": product, "john": john, "jane": jane}


def test_health(client):
    assert client.get("/health").json() == {"status": "ok"}


def test_create_and_get_customer(client):
    resp = client.post(
        "/customers",
        json={"first_name": "John", "last_name": "Doe", "email": "jdoe@hotmail.com"},
    )
    assert resp.status_code == 201
    customer = resp.json()
    assert customer["is_premium"] is False

    fetched = client.get(f"/customers/{customer['id']}")
    assert fetched.status_code == 200
    assert fetched.json()["email"] == "jdoe@hotmail.com"


def test_duplicate_email_returns_conflict(client, catalog):
    resp = client.post(
        "/customers",
        json={"first_name": "Johnny", "last_name": "Doe", "email": "jdoe@hotmail.com"},
    )
    assert resp.status_code == 409
    assert resp.json()["detail"]["kind"] == "constraint"
    assert resp.json()["detail"]["field"] == "email"


def test_put_customer_upserts_by_email(client, catalog):
    resp = client.put(
        "/customers",
        json={"first_name": "John", "last_name": "Doe", "email": "jdoe@hotmail.com", "is_premium": True},
    )
    assert resp.status_code == 200
    assert resp.json()["id"] == catalog["john"]["id"]
    assert resp.json()["is_premium"] is True

    created = client.put(
        "/customers",
        json={"first_name": "Martin", "last_name": "Varela", "email": "mvarelochoa@hotmail.com"},
    )
    assert created.status_code == 201


def test_product_price_is_fixed_point(client, catalog):
    product = client.get(f"/products/{catalog['product']['id']}").json()
    assert product["price"] == "999.99"


def test_product_with_missing_category(client):
    resp = client.post(
        "/products",
        json={"name": "Orphan", "description": "-", "price": 1, "category_id": 42},
    )
    assert resp.status_code == 422
    assert resp.json()["detail"]["kind"] == "referential"


def test_review_upsert_and_rating(client, catalog):
    product_id = catalog["product"]["id"]

    rating = client.get(f"/products/{product_id}/rating").json()
    assert rating == {"product_id": product_id, "average_rating": None, "review_count": 0}

    body = {"product_id": product_id, "customer_id": catalog["john"]["id"], "rating": 5, "comment": "great"}
    first = client.put("/reviews", json=body)
    second = client.put("/reviews", json={**body, "rating": 3, "comment": "meh"})
    assert first.status_code == second.status_code == 200
    assert first.json()["id"] == second.json()["id"]

    client.put(
        "/reviews",
        json={"product_id": product_id, "customer_id": catalog["jane"]["id"], "rating": 4},
    )

    reviews = client.get(f"/products/{product_id}/reviews").json()
    assert sorted(r["rating"] for r in reviews) == [3, 4]
    rating = client.get(f"/products/{product_id}/rating").json()
    assert rating["average_rating"] == 3.5
    assert rating["review_count"] == 2


def test_review_rating_out_of_range(client, catalog):
    resp = client.put(
        "/reviews",
        json={"product_id": catalog["product"]["id"], "customer_id": catalog["john"]["id"], "rating": 6},
    )
    assert resp.status_code == 422
    assert resp.json()["detail"] == {
        "kind": "validation",
        "message": "rating must be between 1 and 5, got 6",
        "field": "rating",
        "constraint": "ck_reviews_rating_range",
    }


def test_review_for_missing_customer(client, catalog):
    resp = client.put(
        "/reviews",
        json={"product_id": catalog["product"]["id"], "customer_id": 999, "rating": 4},
    )
    assert resp.status_code == 422
    assert resp.json()["detail"]["field"] == "customer_id"


def test_missing_rows_return_404(client):
    assert client.get("/products/1").status_code == 404
    assert client.get("/products/1/rating").status_code == 404
    resp = client.get("/reviews/1")
    assert resp.status_code == 404
    assert (resp.json()["detail"]["kind"], resp.json()["detail"]["field"]) == ("not_found", "review_id")
    assert client.delete("/customers/1").status_code == 404


def test_deleting_customer_cascades_over_http(client, catalog):
    product_id = catalog["product"]["id"]
    john_id = catalog["john"]["id"]
    client.put("/reviews", json={"product_id": product_id, "customer_id": john_id, "rating": 5})

    assert client.delete(f"/customers/{john_id}").status_code == 200
    assert client.get(f"/products/{product_id}/reviews").json() == []
    assert client.get(f"/customers/{john_id}/reviews").status_code == 404


def test_deleting_category_cascades_over_http(client, catalog):
    product_id = catalog["product"]["id"]
    client.put("/reviews", json={"product_id": product_id, "customer_id": catalog["jane"]["id"], "rating": 2})

    assert client.delete(f"/categories/{catalog['category']['id']}").status_code == 200
    assert client.get(f"/products/{product_id}").status_code == 404
    assert client.get(f"/customers/{catalog['jane']['id']}/reviews").json() == []


@pytest.mark.parametrize("rating", ["5", 4.0, True])
def test_review_rating_must_be_a_json_integer(client, catalog, rating):
    product_id = catalog["product"]["id"]
    resp = client.put(
        "/reviews",
        json={"product_id": product_id, "customer_id": catalog["john"]["id"], "rating": rating},
    )
    assert resp.status_code == 422
    assert client.get(f"/products/{product_id}/reviews").json() == []
