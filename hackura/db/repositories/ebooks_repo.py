"""Repository helpers for ebook records."""
from __future__ import annotations

from typing import Any, Dict, Iterable, List, Optional

from sqlalchemy import func, or_

from hackura.db import app_session
from hackura.db.models import Ebook

SORT_OPTIONS = {
    "newest": (Ebook.created_at.desc(), Ebook.id.desc()),
    "price_asc": (Ebook.price.asc(), Ebook.id.asc()),
    "price_desc": (Ebook.price.desc(), Ebook.id.desc()),
    "title": (func.lower(Ebook.title).asc(), Ebook.id.asc()),
}
DEFAULT_SORT = "newest"
UPDATABLE_FIELDS = ("title", "author", "price", "description", "cover_image_id")


def _apply_search(query, search: Optional[str]):
    term = (search or "").strip()
    if not term:
        return query
    pattern = f"%{term.lower()}%"
    return query.filter(
        or_(
            func.lower(Ebook.title).like(pattern),
            func.lower(Ebook.author).like(pattern),
        )
    )


def list_ebooks(
    search: Optional[str] = None,
    sort: str = DEFAULT_SORT,
    limit: Optional[int] = None,
    offset: int = 0,
) -> List[Ebook]:
    order_by = SORT_OPTIONS.get(sort) or SORT_OPTIONS[DEFAULT_SORT]
    with app_session() as session:
        query = _apply_search(session.query(Ebook), search).order_by(*order_by)
        if offset:
            query = query.offset(offset)
        if limit is not None:
            query = query.limit(limit)
        return query.all()


def count_ebooks(search: Optional[str] = None) -> int:
    with app_session() as session:
        return _apply_search(session.query(Ebook), search).count()


def get_ebook(ebook_id: int) -> Optional[Ebook]:
    with app_session() as session:
        return session.query(Ebook).filter(Ebook.id == ebook_id).one_or_none()


def get_ebooks(ebook_ids: Iterable[int]) -> Dict[int, Ebook]:
    ids = {int(i) for i in ebook_ids}
    if not ids:
        return {}
    with app_session() as session:
        rows = session.query(Ebook).filter(Ebook.id.in_(ids)).all()
        return {row.id: row for row in rows}


def list_related(exclude_id: int, limit: int = 4) -> List[Ebook]:
    with app_session() as session:
        return (
            session.query(Ebook)
            .filter(Ebook.id != exclude_id)
            .order_by(Ebook.id.asc())
            .limit(limit)
            .all()
        )


def create_ebook(
    title: str,
    author: str,
    price: float,
    description: str = "",
    cover_image_id: Optional[str] = None,
) -> Ebook:
    ebook = Ebook(
        title=title,
        author=author,
        price=price,
        description=description,
        cover_image_id=cover_image_id,
    )
    with app_session() as session:
        session.add(ebook)
    return ebook


def update_ebook(ebook_id: int, **fields: Any) -> Optional[Ebook]:
    unknown = set(fields) - set(UPDATABLE_FIELDS)
    if unknown:
        raise ValueError(f"unknown ebook fields: {sorted(unknown)}")
    with app_session() as session:
        ebook = session.query(Ebook).filter(Ebook.id == ebook_id).one_or_none()
        if not ebook:
            return None
        for name, value in fields.items():
            setattr(ebook, name, value)
        return ebook


def delete_ebook(ebook_id: int) -> bool:
    with app_session() as session:
        ebook = session.query(Ebook).filter(Ebook.id == ebook_id).one_or_none()
        if not ebook:
            return False
        session.delete(ebook)
        return True


__all__ = [
    "SORT_OPTIONS",
    "DEFAULT_SORT",
    "list_ebooks",
    "count_ebooks",
    "get_ebook",
    "get_ebooks",
    "list_related",
    "create_ebook",
    "update_ebook",
    "delete_ebook",
]
