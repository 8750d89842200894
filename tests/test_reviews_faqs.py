import pytest
from sqlalchemy import func, select

from storefront.data.models import FaqModel, ReviewModel
from tests.conftest import API


def _reviews(db):
    db.expire_all()
    return db.execute(select(func.count()).select_from(ReviewModel)).scalar_one()


def test_public_review_is_created_unpublished(client, admin_client, db):
    resp = client.post(f"{API}/reviews", json={"name": "Bob", "text": "Nice shop", "stars": 4})
    assert resp.status_code == 201
    review = resp.json()
    assert review["published"] is False
    assert review["userId"] is None

    assert client.get(f"{API}/reviews").json() == []
    assert [r["id"] for r in admin_client.get(f"{API}/reviews").json()] == [review["id"]]

    resp = admin_client.patch(f"{API}/reviews/{review['id']}", json={"published": True})
    assert resp.status_code == 200
    assert [r["id"] for r in client.get(f"{API}/reviews").json()] == [review["id"]]


@pytest.mark.parametrize("stars", [0, 6, -1])
def test_stars_out_of_range_on_submit(client, db, stars):
    resp = client.post(f"{API}/reviews", json={"name": "Bob", "text": "meh", "stars": stars})
    assert resp.status_code == 400
    assert _reviews(db) == 0


@pytest.mark.parametrize("stars", [0, 6])
def test_stars_out_of_range_on_admin_edit(admin_client, db, stars):
    review = admin_client.post(f"{API}/reviews", json={"name": "Bob", "text": "ok", "stars": 3}).json()

    resp = admin_client.patch(f"{API}/reviews/{review['id']}", json={"stars": stars, "text": "changed"})
    assert resp.status_code == 400

    db.expire_all()
    stored = db.get(ReviewModel, review["id"])
    assert stored.stars == 3
    assert stored.text == "ok"


def test_reviews_ordered_by_stars_then_newest(client, db):
    db.add_all(
        [
            ReviewModel(name="a", text="three", stars=3, published=True),
            ReviewModel(name="b", text="five", stars=5, published=True),
            ReviewModel(name="c", text="hidden", stars=5, published=False),
        ]
    )
    db.commit()

    assert [r["text"] for r in client.get(f"{API}/reviews").json()] == ["five", "three"]


def test_signed_in_review_is_linked_and_unique_per_product(client, alice, make_product):
    bottle = make_product("eco-bottle")

    resp = client.post(f"{API}/reviews", json={"text": "Love it", "stars": 5, "productId": bottle.id})
    assert resp.status_code == 201
    assert resp.json()["userId"] == alice["id"]
    assert resp.json()["productId"] == bottle.id

    again = client.post(f"{API}/reviews", json={"text": "Still love it", "stars": 5, "productId": bottle.id})
    assert again.status_code == 409


def test_review_for_unknown_product(client):
    resp = client.post(f"{API}/reviews", json={"text": "?", "stars": 5, "productId": 999})
    assert resp.status_code == 404


def test_review_moderation_is_admin_only(client, alice, db):
    db.add(ReviewModel(name="a", text="t", stars=4, published=False))
    db.commit()
    review_id = db.execute(select(ReviewModel.id)).scalar_one()

    assert client.patch(f"{API}/reviews/{review_id}", json={"published": True}).status_code == 403
    assert client.delete(f"{API}/reviews/{review_id}").status_code == 403


def test_admin_deletes_review(admin_client, db):
    review = admin_client.post(f"{API}/reviews", json={"text": "bye", "stars": 2}).json()
    assert admin_client.delete(f"{API}/reviews/{review['id']}").json() == {"ok": True}
    assert admin_client.delete(f"{API}/reviews/{review['id']}").status_code == 404
    assert _reviews(db) == 0


def test_faq_crud(client, admin_client, db):
    resp = admin_client.post(f"{API}/faqs", json={"question": "Returns?", "answer": "30 days", "ordering": 2})
    assert resp.status_code == 201
    second = resp.json()
    assert second["published"] is True

    first = admin_client.post(f"{API}/faqs", json={"question": "Shipping?", "answer": "Yes", "ordering": 1}).json()
    hidden = admin_client.post(
        f"{API}/faqs", json={"question": "Draft", "answer": "soon", "published": False}
    ).json()

    assert [f["id"] for f in client.get(f"{API}/faqs").json()] == [first["id"], second["id"]]
    assert hidden["id"] in [f["id"] for f in admin_client.get(f"{API}/faqs").json()]

    resp = admin_client.patch(f"{API}/faqs/{second['id']}", json={"ordering": 0})
    assert resp.json()["ordering"] == 0
    assert [f["id"] for f in client.get(f"{API}/faqs").json()] == [second["id"], first["id"]]

    assert admin_client.delete(f"{API}/faqs/{first['id']}").json() == {"ok": True}
    assert admin_client.patch(f"{API}/faqs/{first['id']}", json={"answer": "x"}).status_code == 404

    db.expire_all()
    assert db.execute(select(func.count()).select_from(FaqModel)).scalar_one() == 2


def test_faq_validation_and_guard(client, admin_client):
    assert admin_client.post(f"{API}/faqs", json={"question": "No answer"}).status_code == 400
    assert client.post(f"{API}/faqs", json={"question": "q", "answer": "a"}).status_code == 401
