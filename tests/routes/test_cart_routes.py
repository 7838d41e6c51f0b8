"""Tests for the cart blueprint."""
from __future__ import annotations

import pytest

from hackura.db.engine import reset_for_tests
from hackura.db.repositories import ebooks_repo
from hackura.services import cart_service
from hackura.startup import create_app


@pytest.fixture
def app(monkeypatch):
    reset_for_tests(drop=True)
    monkeypatch.setenv("HACKURA_DATABASE_URL", ":memory:")
    app = create_app({"TESTING": True, "SECRET_KEY": "cart-routes-test"})
    yield app
    reset_for_tests(drop=True)


@pytest.fixture
def client(app):
    return app.test_client()


@pytest.fixture
def ebook(app):
    return ebooks_repo.create_ebook("Dune", "Frank Herbert", 45.0)


def test_add_redirects_to_cart_and_flashes(client, ebook):
    resp = client.post(f"/cart/add/{ebook.id}")

    assert resp.status_code == 302
    assert resp.headers["Location"].endswith("/cart/")

    page = client.get("/cart/").get_data(as_text=True)
    assert "Dune" in page
    assert "was added to your cart." in page
    assert "GH₵45.00" in page
    assert 'data-cart-count>1<' in page


def test_add_honours_same_site_next_only(client, ebook):
    resp = client.post(f"/cart/add/{ebook.id}", data={"next": f"/ebook/{ebook.id}?"})
    assert resp.headers["Location"].endswith(f"/ebook/{ebook.id}")

    resp = client.post(f"/cart/add/{ebook.id}", data={"next": "https://evil.example/phish"})
    assert resp.headers["Location"].endswith("/cart/")


def test_add_json_reports_quantity_and_count(client, ebook):
    resp = client.post(f"/cart/add/{ebook.id}", json={"quantity": 3})

    assert resp.status_code == 200
    assert resp.get_json() == {"status": "ok", "quantity": 3, "count": 3}
    assert client.get("/cart/count.json").get_json() == {"count": 3}


def test_add_unknown_ebook_is_not_found(client):
    assert client.post("/cart/add/999").status_code == 404
    resp = client.post("/cart/add/abc", json={})
    assert resp.status_code == 404
    assert resp.get_json() == {"error": "ebook_missing"}


def test_update_and_remove_lines(client, ebook):
    client.post(f"/cart/add/{ebook.id}")

    resp = client.post(f"/cart/update/{ebook.id}", json={"quantity": 4})
    assert resp.get_json()["quantity"] == 4

    resp = client.post(f"/cart/remove/{ebook.id}", json={})
    assert resp.get_json() == {"status": "ok", "removed": True, "count": 0}


def test_update_to_zero_removes_line(client, ebook):
    client.post(f"/cart/add/{ebook.id}")
    resp = client.post(f"/cart/update/{ebook.id}", data={"quantity": "0"})
    assert resp.status_code == 302
    with client.session_transaction() as sess:
        assert sess.get(cart_service.SESSION_CART_KEY) == {}


def test_clear_empties_cart(client, ebook):
    client.post(f"/cart/add/{ebook.id}")
    resp = client.post("/cart/clear", follow_redirects=True)

    body = resp.get_data(as_text=True)
    assert "Your cart is empty." in body
    assert "data-cart-count" not in body


@pytest.mark.parametrize("body", [[1, 2], "3", 7])
def test_non_object_json_body_uses_default_quantity(client, ebook, body):
    resp = client.post(f"/cart/add/{ebook.id}", json=body)
    assert resp.status_code == 200
    assert resp.get_json()["quantity"] == 1

    resp = client.post(f"/cart/update/{ebook.id}", json=body)
    assert resp.status_code == 200
    assert resp.get_json()["quantity"] == 1
