"""Tests for ebooks_repo helpers using in-memory SQLite."""
from __future__ import annotations

import pytest
from sqlalchemy import inspect

from hackura.db import app_session, get_engine
from hackura.db.engine import init_engine_once, reset_for_tests
from hackura.db.models import Ebook
from hackura.db.repositories import ebooks_repo


@pytest.fixture(autouse=True)
def in_memory_db(monkeypatch):
    reset_for_tests(drop=True)
    monkeypatch.setenv("HACKURA_DATABASE_URL", ":memory:")
    init_engine_once()
    yield
    reset_for_tests(drop=True)


def _seed():
    a = ebooks_repo.create_ebook("Dune", "Frank Herbert", 45.0, "Spice.")
    b = ebooks_repo.create_ebook("Anansi Tales", "Kofi Asare", 12.5, "Spider stories.")
    c = ebooks_repo.create_ebook("Clean Data", "Efua Asante", 99.99, "Pipelines.", cover_image_id="cover-1.png")
    return a, b, c


def test_cover_column_keeps_hosted_name():
    columns = {col["name"] for col in inspect(get_engine()).get_columns("ebooks")}
    assert "coverImageId" in columns
    assert "cover_image_id" not in columns


def test_create_and_get_ebook_round_trips_fields():
    created = ebooks_repo.create_ebook("Dune", "Frank Herbert", 45.0, "Spice.", cover_image_id="cover-9.jpg")
    assert created.id is not None

    fetched = ebooks_repo.get_ebook(created.id)
    assert fetched is not None
    assert fetched.title == "Dune"
    assert fetched.cover_image_id == "cover-9.jpg"
    assert fetched.as_dict()["coverImageId"] == "cover-9.jpg"
    assert ebooks_repo.get_ebook(created.id + 100) is None


def test_search_matches_title_and_author_case_insensitively():
    _seed()
    assert [e.title for e in ebooks_repo.list_ebooks(search="dune")] == ["Dune"]
    assert [e.title for e in ebooks_repo.list_ebooks(search="ASANTE")] == ["Clean Data"]
    assert ebooks_repo.count_ebooks("a") == 3
    assert ebooks_repo.count_ebooks("zzz") == 0


def test_sort_options_order_results():
    _seed()
    by_price = [e.title for e in ebooks_repo.list_ebooks(sort="price_asc")]
    assert by_price == ["Anansi Tales", "Dune", "Clean Data"]
    by_price_desc = [e.title for e in ebooks_repo.list_ebooks(sort="price_desc")]
    assert by_price_desc == ["Clean Data", "Dune", "Anansi Tales"]
    by_title = [e.title for e in ebooks_repo.list_ebooks(sort="title")]
    assert by_title == ["Anansi Tales", "Clean Data", "Dune"]
    # Unknown sort keys fall back to newest first.
    newest = [e.title for e in ebooks_repo.list_ebooks(sort="bogus")]
    assert newest[0] == "Clean Data"


def test_limit_and_offset_page_through_results():
    _seed()
    page = ebooks_repo.list_ebooks(sort="title", limit=2, offset=1)
    assert [e.title for e in page] == ["Clean Data", "Dune"]


def test_list_related_excludes_current_and_orders_by_id():
    a, b, c = _seed()
    related = ebooks_repo.list_related(b.id, limit=4)
    assert [e.id for e in related] == [a.id, c.id]
    assert len(ebooks_repo.list_related(a.id, limit=1)) == 1


def test_get_ebooks_returns_mapping_by_id():
    a, _b, c = _seed()
    found = ebooks_repo.get_ebooks([a.id, c.id, 999])
    assert set(found) == {a.id, c.id}
    assert ebooks_repo.get_ebooks([]) == {}


def test_update_ebook_applies_fields_and_rejects_unknown_names():
    a, _b, _c = _seed()
    updated = ebooks_repo.update_ebook(a.id, title="Dune Messiah", price=50.0)
    assert updated is not None
    assert updated.title == "Dune Messiah"
    assert ebooks_repo.get_ebook(a.id).price == 50.0

    with pytest.raises(ValueError):
        ebooks_repo.update_ebook(a.id, id=5)
    assert ebooks_repo.update_ebook(999, title="x") is None


def test_delete_ebook_returns_boolean_result():
    a, _b, _c = _seed()
    assert ebooks_repo.delete_ebook(a.id) is True
    assert ebooks_repo.delete_ebook(a.id) is False
    with app_session() as session:
        assert session.query(Ebook).count() == 2
