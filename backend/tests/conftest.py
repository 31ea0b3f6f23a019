import itertools
from decimal import Decimal

import pytest
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from storefront.db.session import create_db_engine, init_schema
from storefront.services import catalog_service, customer_service


@pytest.fixture()
def engine():
    engine = create_db_engine(
        "sqlite://",
        poolclass=StaticPool,
        connect_args={"check_same_thread": False},
    )
    init_schema(engine)
    yield engine
    engine.dispose()


@pytest.fixture()
def session_factory(engine):
    return sessionmaker(bind=engine, autoflush=False)


@pytest.fixture()
def db(session_factory):
    session = session_factory()
    yield session
    session.rollback()
    session.close()


@pytest.fixture()
def make_customer(db):
    counter = itertools.count(1)

    def _make(**overrides):
        n = next(counter)
        data = {
            "first_name": f"Customer{n}",
            "last_name": "Test",
            "email": f"customer{n}@example.com",
        }
        data.update(overrides)
        return customer_service.create_customer(db, data)

    return _make


@pytest.fixture()
def make_category(db):
    counter = itertools.count(1)

    def _make(**overrides):
        data = {"name": f"Category {next(counter)}"}
        data.update(overrides)
        return catalog_service.create_category(db, data)

    return _make


@pytest.fixture()
def make_product(db, make_category):
    counter = itertools.count(1)

    def _make(category=None, **overrides):
        category = category or make_category()
        data = {
            "name": f"Product {next(counter)}",
            "description": "Test product",
            "price": Decimal("10.00"),
            "stock": 3,
            "category_id": category.id,
        }
        data.update(overrides)
        return catalog_service.create_product(db, data)

    return _make


@pytest.fixture()
def customer(make_customer):
    return make_customer()


@pytest.fixture()
def product(make_product):
    return make_product()
