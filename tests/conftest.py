import os

# tani hash w testach, ustawione przed importem settings
os.environ.setdefault("BCRYPT_ROUNDS", "4")
os.environ.setdefault("JWT_SECRET", "test-secret")

from decimal import Decimal

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.pool import StaticPool

from storefront.data.database import Database
from storefront.data.models import ProductModel, UserModel
from storefront.main import create_app
from storefront.utils.security import hash_password

API = "/api"


@pytest.fixture
def database():
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    return Database(engine=engine)


@pytest.fixture
def app(database):
    return create_app(database=database, seed=False)


@pytest.fixture
def client(app):
    with TestClient(app) as c:
        yield c


@pytest.fixture
def make_client(app, client):
    """Dodatkowi klienci z osobnym cookie jarem, na tej samej bazie."""
    created = []

    def _make():
        c = TestClient(app)
        created.append(c)
        return c

    yield _make
    for c in created:
        c.close()


@pytest.fixture
def db(database, client):
    session = database.session()
    yield session
    session.close()


@pytest.fixture
def make_product(db):
    def _make(slug="eco-bottle", name=None, price="19.90", stock=20, category="Accessories", description=""):
        product = ProductModel(
            slug=slug,
            name=name or slug.replace("-", " ").title(),
            price=Decimal(price),
            category=category,
            img=f"/images/{slug}.jpg",
            description=description,
            stock=stock,
        )
        db.add(product)
        db.commit()
        return product

    return _make


@pytest.fixture
def register():
    def _register(c, email="alice@example.com", password="AlicePass123!", name="Alice"):
        resp = c.post(f"{API}/register", json={"name": name, "email": email, "password": password})
        assert resp.status_code == 201, resp.text
        return resp.json()["user"]

    return _register


@pytest.fixture
def admin_client(db, make_client):
    db.add(
        UserModel(
            email="admin@example.com",
            name="Super Admin",
            password=hash_password("AdminPass123!"),
            admin=True,
        )
    )
    db.commit()

    c = make_client()
    resp = c.post(f"{API}/login", json={"email": "admin@example.com", "password": "AdminPass123!"})
    assert resp.status_code == 200, resp.text
    return c


@pytest.fixture
def alice(client, register):
    """Zalogowany klient `client` jako alice."""
    return register(client)
