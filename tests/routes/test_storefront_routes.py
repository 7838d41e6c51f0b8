"""Tests for the public storefront pages."""
from __future__ import annotations

import pytest
from sqlalchemy.exc import OperationalError

from hackura.db.engine import reset_for_tests
from hackura.db.repositories import ebooks_repo, messages_repo
from hackura.routes import health
from hackura.startup import create_app


@pytest.fixture
def app(monkeypatch):
    reset_for_tests(drop=True)
    monkeypatch.setenv("HACKURA_DATABASE_URL", ":memory:")
    monkeypatch.setenv("SUPABASE_URL", "https://proj.supabase.co")
    monkeypatch.delenv("HACKURA_COVERS_BUCKET", raising=False)
    monkeypatch.delenv("APP_TITLE", raising=False)
    app = create_app({"TESTING": True, "SECRET_KEY": "storefront-test"})
    yield app
    reset_for_tests(drop=True)


@pytest.fixture
def client(app):
    return app.test_client()


def test_index_lists_featured_ebooks(client):
    ebooks_repo.create_ebook("Dune", "Frank Herbert", 45.0)

    resp = client.get("/")

    assert resp.status_code == 200
    body = resp.get_data(as_text=True)
    assert "<title>Hackura</title>" in body
    assert "Dune" in body
    assert "GH₵45.00" in body


def test_index_without_ebooks_shows_empty_state(client):
    resp = client.get("/")
    assert resp.status_code == 200
    assert "No eBooks are available yet" in resp.get_data(as_text=True)


def test_ebooks_listing_filters_by_search(client):
    ebooks_repo.create_ebook("Dune", "Frank Herbert", 45.0)
    ebooks_repo.create_ebook("Emma", "Jane Austen", 9.0)

    resp = client.get("/ebooks?q=austen&sort=price_asc")

    body = resp.get_data(as_text=True)
    assert resp.status_code == 200
    assert "Emma" in body
    assert "Dune" not in body


def test_detail_page_renders_cover_and_related(client):
    main = ebooks_repo.create_ebook("Dune", "Frank Herbert", 45.0, "Spice.", cover_image_id="cover-1.png")
    ebooks_repo.create_ebook("Emma", "Jane Austen", 9.0)

    resp = client.get(f"/ebook/{main.id}")

    body = resp.get_data(as_text=True)
    assert resp.status_code == 200
    assert "<title>Dune | Hackura</title>" in body
    assert "by Frank Herbert" in body
    assert "https://proj.supabase.co/storage/v1/object/public/ebook-covers/cover-1.png" in body
    assert "You Might Also Like" in body
    assert "Emma" in body
    assert f'data-share-url="http://localhost/ebook/{main.id}"' in body
    assert "Add to Cart" in body


def test_detail_page_without_cover_shows_placeholder_and_no_related(client):
    only = ebooks_repo.create_ebook("Dune", "Frank Herbert", 45.0)

    body = client.get(f"/ebook/{only.id}").get_data(as_text=True)

    assert "No Image" in body
    assert "You Might Also Like" not in body


@pytest.mark.parametrize("path", ["/ebook/abc", "/ebook/0", "/ebook/999", "/ebook/%C2%B2"])
def test_detail_page_not_found(client, path):
    resp = client.get(path)
    assert resp.status_code == 404
    assert "Page not found" in resp.get_data(as_text=True)


def test_share_json_payload(client):
    ebook = ebooks_repo.create_ebook("Dune", "Frank Herbert", 45.0, "Spice.")

    resp = client.get(f"/ebook/{ebook.id}/share.json")

    assert resp.status_code == 200
    assert resp.get_json() == {
        "title": "Dune",
        "text": "Spice.",
        "url": f"http://localhost/ebook/{ebook.id}",
    }


def test_contact_form_stores_message(client):
    resp = client.post(
        "/contact",
        data={"name": "Ama", "email": "ama@example.com", "message": "Do you have audiobooks?"},
        follow_redirects=True,
    )

    assert resp.status_code == 200
    assert "Your message has been sent" in resp.get_data(as_text=True)
    stored = messages_repo.list_messages()
    assert [m.email for m in stored] == ["ama@example.com"]


def test_contact_form_rejects_invalid_email(client):
    resp = client.post("/contact", data={"name": "Ama", "email": "nope", "message": "Hi"})

    body = resp.get_data(as_text=True)
    assert resp.status_code == 400
    assert "Enter a valid email address." in body
    assert "toast--destructive" in body
    assert messages_repo.list_messages() == []


def test_healthz_reports_database_ok(client):
    resp = client.get("/healthz")
    assert resp.status_code == 200
    assert resp.get_json() == {"status": "ok", "db": True, "version": "0.4.0"}


def test_healthz_degraded_when_database_fails(client, monkeypatch):
    def broken_session():
        raise OperationalError("SELECT 1", {}, Exception("db gone"))

    monkeypatch.setattr(health, "app_session", broken_session)

    resp = client.get("/healthz")

    assert resp.status_code == 500
    assert resp.get_json()["status"] == "degraded"
    assert resp.get_json()["db"] is False


def test_cart_add_with_unicode_digit_id_is_not_found(client):
    assert client.post("/cart/add/%C2%B2").status_code == 404


def test_unknown_route_uses_not_found_page(client):
    resp = client.get("/does-not-exist")
    assert resp.status_code == 404
    assert "Page not found" in resp.get_data(as_text=True)
