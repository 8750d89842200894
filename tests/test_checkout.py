from decimal import Decimal

import pytest
from sqlalchemy import func, select, update
from sqlalchemy.exc import OperationalError

from storefront.data.models import CART_ACTIVE, CART_CHECKED_OUT, CartModel, ProductModel, SaleItemModel, SaleModel
from storefront.repos.cart_repo import CartRepo
from storefront.repos.product_repo import ProductRepo
from tests.conftest import API


def _count(db, model):
    db.expire_all()
    return db.execute(select(func.count()).select_from(model)).scalar_one()


def _stock(db, product):
    db.expire_all()
    return db.get(ProductModel, product.id).stock


def test_checkout_end_to_end(client, db, register, make_product):
    bottle = make_product("eco-bottle", name="Eco Bottle", price="19.90", stock=20)
    register(client, "alice@example.com", "AlicePass123!")

    resp = client.post(f"{API}/login", json={"email": "alice@example.com", "password": "AlicePass123!"})
    assert resp.status_code == 200

    resp = client.post(f"{API}/cart/add", json={"productId": bottle.id, "qty": 2})
    assert resp.status_code == 200
    cart_id = resp.json()["id"]

    resp = client.post(f"{API}/checkout", json={"items": [{"slug": "eco-bottle", "qty": 2}]})
    assert resp.status_code == 200, resp.text
    body = resp.json()
    assert body["success"] is True
    order_id = body["orderId"]

    assert _stock(db, bottle) == 18
    sale = db.get(SaleModel, order_id)
    assert sale.total == Decimal("39.80")
    assert db.get(CartModel, cart_id).status == CART_CHECKED_OUT


def test_total_is_sum_of_price_times_qty(client, db, alice, make_product):
    make_product("eco-bottle", price="19.90", stock=20)
    make_product("led-bulb", price="3.90", stock=7)

    resp = client.post(
        f"{API}/checkout",
        json={"items": [{"slug": "eco-bottle", "qty": 1}, {"slug": "led-bulb", "qty": 3}]},
    )
    assert resp.status_code == 200

    sale = db.get(SaleModel, resp.json()["orderId"])
    assert sale.total == Decimal("31.60")
    assert sorted((i.qty, i.price) for i in sale.items) == [(1, Decimal("19.90")), (3, Decimal("3.90"))]


def test_price_snapshot_survives_catalog_price_change(client, admin_client, db, alice, make_product):
    bottle = make_product("eco-bottle", price="19.90", stock=20)

    resp = client.post(f"{API}/checkout", json={"items": [{"slug": "eco-bottle", "qty": 1}]})
    order_id = resp.json()["orderId"]

    resp = admin_client.patch(f"{API}/admin/products/{bottle.id}", json={"price": "99.00"})
    assert resp.status_code == 200

    db.expire_all()
    item = db.execute(select(SaleItemModel).where(SaleItemModel.sale_id == order_id)).scalar_one()
    assert item.price == Decimal("19.90")
    assert db.get(SaleModel, order_id).total == Decimal("19.90")


def test_unknown_slug_writes_nothing(client, db, alice, make_product):
    bottle = make_product("eco-bottle", stock=20)

    resp = client.post(
        f"{API}/checkout",
        json={"items": [{"slug": "eco-bottle", "qty": 1}, {"slug": "does-not-exist", "qty": 1}]},
    )
    assert resp.status_code == 400
    assert resp.json() == {"error": "Unknown product in cart"}

    assert _stock(db, bottle) == 20
    assert _count(db, SaleModel) == 0
    assert _count(db, SaleItemModel) == 0


def test_insufficient_stock_is_all_or_nothing(client, db, alice, make_product):
    bottle = make_product("eco-bottle", name="Eco Bottle", stock=20)
    bulb = make_product("led-bulb", name="LED Bulb", price="3.90", stock=2)

    resp = client.post(
        f"{API}/checkout",
        json={"items": [{"slug": "eco-bottle", "qty": 1}, {"slug": "led-bulb", "qty": 5}]},
    )
    assert resp.status_code == 400
    assert resp.json() == {"error": "Insufficient stock for LED Bulb"}

    assert _stock(db, bottle) == 20
    assert _stock(db, bulb) == 2
    assert _count(db, SaleModel) == 0


def test_empty_items_rejected(client, alice):
    assert client.post(f"{API}/checkout", json={"items": []}).status_code == 400
    assert client.post(f"{API}/checkout", json={}).json() == {"error": "Empty cart"}


def test_checkout_requires_login(client, make_product):
    make_product("eco-bottle")
    resp = client.post(f"{API}/checkout", json={"items": [{"slug": "eco-bottle", "qty": 1}]})
    assert resp.status_code == 401


@pytest.mark.parametrize("qty", [0, -4, "abc", None])
def test_invalid_qty_defaults_to_one(client, db, alice, make_product, qty):
    bottle = make_product("eco-bottle", stock=20)

    resp = client.post(f"{API}/checkout", json={"items": [{"slug": "eco-bottle", "qty": qty}]})
    assert resp.status_code == 200
    assert _stock(db, bottle) == 19


def test_duplicate_lines_cannot_oversell(client, db, alice, make_product):
    bulb = make_product("led-bulb", price="3.90", stock=3)

    # kazda linia osobno miesci sie w stocku, razem juz nie
    resp = client.post(
        f"{API}/checkout",
        json={"items": [{"slug": "led-bulb", "qty": 2}, {"slug": "led-bulb", "qty": 2}]},
    )
    assert resp.status_code == 400
    assert _stock(db, bulb) == 3
    assert _count(db, SaleModel) == 0


def test_checkout_closes_cart_and_next_access_opens_new_one(client, db, alice, make_product):
    bottle = make_product("eco-bottle", stock=20)
    first = client.post(f"{API}/cart/add", json={"productId": bottle.id, "qty": 1}).json()

    client.post(f"{API}/checkout", json={"items": [{"slug": "eco-bottle", "qty": 1}]})

    second = client.get(f"{API}/cart").json()
    assert second["id"] != first["id"]
    assert second["status"] == CART_ACTIVE
    assert second["items"] == []

    db.expire_all()
    active = db.execute(
        select(func.count()).select_from(CartModel).where(CartModel.user_id == alice["id"], CartModel.status == CART_ACTIVE)
    ).scalar_one()
    assert active == 1


def test_two_checkouts_keep_one_active_cart(client, db, alice, make_product):
    make_product("eco-bottle", stock=20)
    for _ in range(2):
        client.get(f"{API}/cart")
        resp = client.post(f"{API}/checkout", json={"items": [{"slug": "eco-bottle", "qty": 1}]})
        assert resp.status_code == 200

    db.expire_all()
    statuses = db.execute(select(CartModel.status).where(CartModel.user_id == alice["id"])).scalars().all()
    assert sorted(statuses) == [CART_CHECKED_OUT, CART_CHECKED_OUT]


def test_persistence_failure_rolls_back_everything(client, db, alice, make_product, monkeypatch):
    bottle = make_product("eco-bottle", stock=20)

    def boom(self, user_id):
        raise OperationalError("UPDATE carts", {}, Exception("connection lost"))

    monkeypatch.setattr(CartRepo, "close_active_carts", boom)

    resp = client.post(f"{API}/checkout", json={"items": [{"slug": "eco-bottle", "qty": 2}]})
    assert resp.status_code == 500
    assert resp.json() == {"error": "Checkout failed"}

    assert _stock(db, bottle) == 20
    assert _count(db, SaleModel) == 0
    assert _count(db, SaleItemModel) == 0


def test_conditional_decrement_refuses_to_go_negative(db, make_product):
    bulb = make_product("led-bulb", stock=2)
    repo = ProductRepo(db)

    assert repo.decrement_stock(bulb.id, 3) == 0
    assert repo.decrement_stock(bulb.id, 2) == 1
    db.commit()
    assert _stock(db, bulb) == 0


def test_stock_drained_after_validation_aborts_checkout(client, db, alice, make_product, monkeypatch):
    bottle = make_product("eco-bottle", name="Eco Bottle", stock=5)
    original = ProductRepo.decrement_stock

    def racing_decrement(self, product_id, qty):
        # inny checkout wykupil wszystko miedzy sprawdzeniem a dekrementacja
        self.db.execute(update(ProductModel).where(ProductModel.id == product_id).values(stock=0))
        return original(self, product_id, qty)

    monkeypatch.setattr(ProductRepo, "decrement_stock", racing_decrement)

    resp = client.post(f"{API}/checkout", json={"items": [{"slug": "eco-bottle", "qty": 2}]})
    assert resp.status_code == 400
    assert resp.json() == {"error": "Insufficient stock for Eco Bottle"}
    assert _count(db, SaleModel) == 0
    assert _count(db, SaleItemModel) == 0
