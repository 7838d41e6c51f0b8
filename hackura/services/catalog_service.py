"""Storefront catalog service: listing, detail and related-ebook lookups."""
from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Any, Dict, List, Optional

from sqlalchemy.exc import SQLAlchemyError

from hackura.db.models import Ebook
from hackura.db.repositories import ebooks_repo
from hackura.services import storage_service
from hackura.utils.logging import get_logger

LOG = get_logger("hackura.catalog")

PAGE_SIZE = 12
FEATURED_LIMIT = 8
RELATED_LIMIT = 4


class EbookNotFoundError(LookupError):
    """Raised when an ebook id is malformed or unknown."""


@dataclass
class EbookCard:
    id: int
    title: str
    author: str
    price: float
    description: str
    cover_image_id: Optional[str]
    cover_url: Optional[str]


def to_card(ebook: Ebook) -> EbookCard:
    return EbookCard(
        id=ebook.id,
        title=ebook.title or "",
        author=ebook.author or "",
        price=float(ebook.price or 0),
        description=ebook.description or "",
        cover_image_id=ebook.cover_image_id,
        cover_url=storage_service.get_public_url(ebook.cover_image_id),
    )


def parse_ebook_id(raw: Any) -> int:
    """Parse a route id; anything that is not a positive integer is "not found"."""
    if isinstance(raw, bool):
        raise EbookNotFoundError("ebook_missing")
    if isinstance(raw, int):
        value = raw
    else:
        text = str(raw or "").strip()
        if not (text.isascii() and text.isdigit()):
            raise EbookNotFoundError("ebook_missing")
        value = int(text)
    if value <= 0:
        raise EbookNotFoundError("ebook_missing")
    return value


def _normalize_sort(sort: Optional[str]) -> str:
    key = (sort or "").strip().lower()
    return key if key in ebooks_repo.SORT_OPTIONS else ebooks_repo.DEFAULT_SORT


def browse(search: Optional[str] = None, sort: Optional[str] = None, page: Any = 1) -> Dict[str, Any]:
    term = (search or "").strip()
    sort_key = _normalize_sort(sort)
    try:
        page_num = max(1, int(page))
    except (TypeError, ValueError):
        page_num = 1
    total = ebooks_repo.count_ebooks(term)
    pages = max(1, math.ceil(total / PAGE_SIZE))
    page_num = min(page_num, pages)
    rows = ebooks_repo.list_ebooks(
        search=term,
        sort=sort_key,
        limit=PAGE_SIZE,
        offset=(page_num - 1) * PAGE_SIZE,
    )
    return {
        "ebooks": [to_card(r) for r in rows],
        "page": page_num,
        "pages": pages,
        "total": total,
        "search": term,
        "sort": sort_key,
    }


def featured(limit: int = FEATURED_LIMIT) -> List[EbookCard]:
    return [to_card(r) for r in ebooks_repo.list_ebooks(limit=limit)]


def get_ebook(ebook_id: Any) -> Ebook:
    ebook = ebooks_repo.get_ebook(parse_ebook_id(ebook_id))
    if ebook is None:
        raise EbookNotFoundError("ebook_missing")
    return ebook


def related_ebooks(ebook_id: int, limit: int = RELATED_LIMIT) -> List[EbookCard]:
    """Other ebooks for the "You Might Also Like" strip.

    A failed lookup is logged and produces an empty list; the detail page
    still renders.
    """
    try:
        rows = ebooks_repo.list_related(ebook_id, limit=limit)
    except SQLAlchemyError as exc:
        LOG.error("Error fetching related ebooks for id=%s: %s", ebook_id, exc)
        return []
    return [to_card(r) for r in rows]


def get_ebook_detail(ebook_id: Any) -> Dict[str, Any]:
    ebook = get_ebook(ebook_id)
    return {
        "ebook": to_card(ebook),
        "cover_url": storage_service.get_public_url(ebook.cover_image_id),
        "related": related_ebooks(ebook.id),
    }


def share_payload(ebook: Any, url: str) -> Dict[str, str]:
    """Data handed to the Web Share API (clipboard fallback uses ``url``)."""
    return {
        "title": getattr(ebook, "title", "") or "",
        "text": getattr(ebook, "description", "") or "",
        "url": url,
    }


__all__ = [
    "PAGE_SIZE",
    "RELATED_LIMIT",
    "EbookNotFoundError",
    "EbookCard",
    "to_card",
    "parse_ebook_id",
    "browse",
    "featured",
    "get_ebook",
    "related_ebooks",
    "get_ebook_detail",
    "share_payload",
]
