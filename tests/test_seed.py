from decimal import Decimal

from fastapi.testclient import TestClient
from sqlalchemy import func, select

from storefront.data.models import FaqModel, PortfolioModel, ProductModel, ReviewModel, UserModel
from storefront.data.seed import seed
from storefront.main import create_app
from tests.conftest import API


def _counts(db):
    db.expire_all()
    return {
        model.__tablename__: db.execute(select(func.count()).select_from(model)).scalar_one()
        for model in (UserModel, ProductModel, PortfolioModel, FaqModel, ReviewModel)
    }


def test_seed_is_idempotent(db):
    seed(db)
    first = _counts(db)
    seed(db)

    assert _counts(db) == first
    assert first == {"users": 4, "products": 10, "portfolio": 3, "faqs": 3, "reviews": 3}

    bottle = db.execute(select(ProductModel).where(ProductModel.slug == "eco-bottle")).scalar_one()
    assert bottle.price == Decimal("19.90")
    assert bottle.stock == 20


def test_seeded_data_is_served(client, db):
    seed(db)

    portfolio = client.get(f"{API}/portfolio").json()
    assert {p["slug"] for p in portfolio} == {"eco-store-landing", "catalog-grid", "checkout-flow"}
    assert set(portfolio[0]) == {"slug", "name", "imageUrl", "description", "tags"}

    assert len(client.get(f"{API}/faqs").json()) == 3
    assert [r["stars"] for r in client.get(f"{API}/reviews").json()] == [5, 5, 4]

    resp = client.post(f"{API}/login", json={"email": "admin@example.com", "password": "AdminPass123!"})
    assert resp.json()["user"]["admin"] is True


def test_failed_seed_does_not_block_startup(database, monkeypatch):
    def broken_seed(db):
        raise RuntimeError("seed exploded")

    monkeypatch.setattr("storefront.data.seed.seed", broken_seed)
    app = create_app(database=database, seed=True)

    with TestClient(app) as c:
        assert c.get(f"{API}/health").status_code == 200
        assert c.get(f"{API}/products").json() == []
