#!/usr/bin/env python3
"""Seed the catalog with a handful of sample ebooks.

Behavior
--------
Idempotent. When the ``ebooks`` table already holds rows nothing is written,
unless ``--force`` is given, in which case any sample title that is not yet
present is added. Existing rows are never modified or deleted.

Environment Variables
---------------------
HACKURA_DATABASE_URL -> target database (see ``hackura.config``)

Exit Codes
----------
0 success (including "already seeded")
3 seed failed
"""
from __future__ import annotations

import argparse
import os
import sys
from typing import Any, Dict, List

BASE_DIR = os.path.abspath(os.path.join(os.path.dirname(__file__), ".."))
if BASE_DIR not in sys.path:
    sys.path.insert(0, BASE_DIR)

SAMPLE_EBOOKS: List[Dict[str, Any]] = [
    {
        "title": "The Quiet Compiler",
        "author": "Ama Owusu",
        "price": 49.99,
        "description": "A short novel about a programmer who discovers her build system has opinions.",
    },
    {
        "title": "Harmattan Nights",
        "author": "Kwame Mensah",
        "price": 35.0,
        "description": "Stories from the dry season, told over twelve evenings in Tamale.",
    },
    {
        "title": "Practical Data Pipelines",
        "author": "Efua Asante",
        "price": 120.5,
        "description": "Building batch and streaming pipelines that keep working after the demo.",
    },
    {
        "title": "Gold Coast Chronicles",
        "author": "Yaw Boateng",
        "price": 75.0,
        "description": "A narrative history of trade, kingdoms and coastal forts.",
    },
    {
        "title": "Kente Patterns",
        "author": "Abena Darko",
        "price": 0.0,
        "description": "A free illustrated guide to the weaving patterns and what they mean.",
    },
]


def seed_catalog(force: bool = False) -> Dict[str, Any]:
    """Insert sample ebooks; return a concise summary dict.

    Keys: existing (#rows before), created (#rows inserted), skipped (bool).
    """
    from hackura.db import init_engine_once
    from hackura.db.repositories import ebooks_repo

    init_engine_once()
    existing = ebooks_repo.count_ebooks()
    if existing and not force:
        return {"existing": existing, "created": 0, "skipped": True}
    present = {e.title.lower() for e in ebooks_repo.list_ebooks()}
    created = 0
    for sample in SAMPLE_EBOOKS:
        if sample["title"].lower() in present:
            continue
        ebooks_repo.create_ebook(**sample)
        created += 1
    return {"existing": existing, "created": created, "skipped": False}


def _parse_args(argv: List[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Seed the Hackura catalog with sample ebooks.")
    parser.add_argument(
        "--force",
        action="store_true",
        help="add missing sample titles even when the catalog is not empty",
    )
    return parser.parse_args(argv)


def main(argv: List[str] | None = None) -> int:  # pragma: no cover (utility script)
    args = _parse_args(argv)
    try:
        summary = seed_catalog(force=args.force)
    except Exception as exc:
        print(f"[SEED] ERROR {exc}", file=sys.stderr)
        return 3
    if summary["skipped"]:
        print(f"[SEED] ok catalog already has {summary['existing']} ebooks; use --force to add samples")
    else:
        print(f"[SEED] ok created={summary['created']} existing={summary['existing']}")
    return 0


if __name__ == "__main__":  # pragma: no cover
    sys.exit(main())
