from __future__ import annotations

import pytest

from entrypoint import seed_catalog
from hackura.db.engine import init_engine_once, reset_for_tests
from hackura.db.repositories import ebooks_repo


@pytest.fixture(autouse=True)
def in_memory_db(monkeypatch):
    reset_for_tests(drop=True)
    monkeypatch.setenv("HACKURA_DATABASE_URL", ":memory:")
    init_engine_once()
    yield
    reset_for_tests(drop=True)


def test_seed_is_idempotent():
    first = seed_catalog.seed_catalog()
    assert first == {"existing": 0, "created": len(seed_catalog.SAMPLE_EBOOKS), "skipped": False}

    second = seed_catalog.seed_catalog()
    assert second["skipped"] is True
    assert ebooks_repo.count_ebooks() == len(seed_catalog.SAMPLE_EBOOKS)


def test_force_only_adds_missing_titles():
    ebooks_repo.create_ebook("Harmattan Nights", "Someone Else", 1.0)

    assert seed_catalog.seed_catalog()["skipped"] is True
    summary = seed_catalog.seed_catalog(force=True)

    assert summary["created"] == len(seed_catalog.SAMPLE_EBOOKS) - 1
    assert ebooks_repo.count_ebooks() == len(seed_catalog.SAMPLE_EBOOKS)
