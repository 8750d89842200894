from sqlalchemy import func, select

from storefront.data.models import CartItemModel
from tests.conftest import API


def test_cart_requires_login(client):
    assert client.get(f"{API}/cart").status_code == 401
    assert client.post(f"{API}/cart/add", json={"productId": 1}).status_code == 401


def test_get_creates_empty_active_cart_once(client, alice):
    first = client.get(f"{API}/cart").json()
    second = client.get(f"{API}/cart").json()

    assert first["id"] == second["id"]
    assert first["status"] == "ACTIVE"
    assert first["userId"] == alice["id"]
    assert first["items"] == []


def test_adding_same_product_twice_sums_quantity(client, db, alice, make_product):
    bottle = make_product("eco-bottle")

    client.post(f"{API}/cart/add", json={"productId": bottle.id, "qty": 2})
    cart = client.post(f"{API}/cart/add", json={"productId": bottle.id, "qty": 3}).json()

    assert len(cart["items"]) == 1
    assert cart["items"][0]["qty"] == 5
    assert cart["items"][0]["product"]["slug"] == "eco-bottle"

    rows = db.execute(select(func.count()).select_from(CartItemModel)).scalar_one()
    assert rows == 1


def test_add_defaults_and_floors_quantity(client, alice, make_product):
    bottle = make_product("eco-bottle")

    cart = client.post(f"{API}/cart/add", json={"productId": bottle.id}).json()
    assert cart["items"][0]["qty"] == 1

    cart = client.post(f"{API}/cart/add", json={"productId": bottle.id, "qty": "nope"}).json()
    assert cart["items"][0]["qty"] == 2


def test_add_requires_known_product(client, alice):
    resp = client.post(f"{API}/cart/add", json={"qty": 1})
    assert resp.status_code == 400
    assert "productId" in resp.json()["error"]

    assert client.post(f"{API}/cart/add", json={"productId": 999}).status_code == 404


def test_set_qty_overwrites_with_floor_of_one(client, alice, make_product):
    bottle = make_product("eco-bottle")
    client.post(f"{API}/cart/add", json={"productId": bottle.id, "qty": 4})

    cart = client.patch(f"{API}/cart/qty", json={"productId": bottle.id, "qty": 7}).json()
    assert cart["items"][0]["qty"] == 7

    cart = client.patch(f"{API}/cart/qty", json={"productId": bottle.id, "qty": 0}).json()
    assert cart["items"][0]["qty"] == 1


def test_set_qty_on_missing_line(client, alice, make_product):
    bottle = make_product("eco-bottle")
    resp = client.patch(f"{API}/cart/qty", json={"productId": bottle.id, "qty": 2})
    assert resp.status_code == 404


def test_remove_and_clear(client, alice, make_product):
    bottle = make_product("eco-bottle")
    bulb = make_product("led-bulb", price="3.90")
    client.post(f"{API}/cart/add", json={"productId": bottle.id})
    client.post(f"{API}/cart/add", json={"productId": bulb.id})

    cart = client.delete(f"{API}/cart/item/{bottle.id}").json()
    assert [i["productId"] for i in cart["items"]] == [bulb.id]

    assert client.delete(f"{API}/cart/item/{bottle.id}").status_code == 404

    cart = client.delete(f"{API}/cart/clear").json()
    assert cart["items"] == []
    assert cart["status"] == "ACTIVE"


def test_merge_adds_guest_quantities(client, alice, make_product):
    bottle = make_product("eco-bottle")
    bulb = make_product("led-bulb", price="3.90")
    client.post(f"{API}/cart/add", json={"productId": bottle.id, "qty": 3})

    cart = client.post(
        f"{API}/cart/merge",
        json=[{"productId": bottle.id, "qty": 2}, {"productId": bulb.id, "qty": 1}],
    ).json()

    by_product = {i["productId"]: i["qty"] for i in cart["items"]}
    assert by_product == {bottle.id: 5, bulb.id: 1}


def test_merge_collapses_duplicates_and_skips_unknown(client, alice, make_product):
    bottle = make_product("eco-bottle")

    cart = client.post(
        f"{API}/cart/merge",
        json=[{"productId": bottle.id, "qty": 1}, {"productId": bottle.id, "qty": 2}, {"productId": 4242, "qty": 1}],
    ).json()

    assert len(cart["items"]) == 1
    assert cart["items"][0]["qty"] == 3


def test_carts_are_per_user(client, make_client, register, make_product):
    bottle = make_product("eco-bottle")
    register(client, "alice@example.com")
    client.post(f"{API}/cart/add", json={"productId": bottle.id, "qty": 2})

    mark = make_client()
    register(mark, "mark@example.com", "MarkPass123!", "Mark")
    assert mark.get(f"{API}/cart").json()["items"] == []
