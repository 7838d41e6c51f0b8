"""Admin ebook CRUD orchestration."""
from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, Mapping, Optional

from werkzeug.datastructures import FileStorage

from hackura.db.models import Ebook
from hackura.db.repositories import ebooks_repo
from hackura.services import storage_service
from hackura.services.catalog_service import EbookNotFoundError, parse_ebook_id
from hackura.utils.logging import get_logger

LOG = get_logger("hackura.admin_ebooks")

MAX_TITLE_LENGTH = 255
MAX_AUTHOR_LENGTH = 255


class EbookValidationError(ValueError):
    """Raised when submitted ebook fields fail validation."""


class CoverUploadError(RuntimeError):
    """Raised when a cover image could not be stored."""


@dataclass
class EbookForm:
    title: str
    author: str
    price: float
    description: str

    def as_fields(self) -> Dict[str, Any]:
        return {
            "title": self.title,
            "author": self.author,
            "price": self.price,
            "description": self.description,
        }


def _parse_price(raw: Any) -> float:
    # Unparsable input counts as 0, the same as an empty number field.
    try:
        value = float(str(raw).strip())
    except (TypeError, ValueError):
        return 0.0
    if value != value or value in (float("inf"), float("-inf")):
        return 0.0
    return round(value, 2)


def parse_form(form: Mapping[str, Any]) -> EbookForm:
    title = str(form.get("title") or "").strip()
    author = str(form.get("author") or "").strip()
    description = str(form.get("description") or "").strip()
    price = _parse_price(form.get("price"))
    if not title:
        raise EbookValidationError("title_required")
    if len(title) > MAX_TITLE_LENGTH:
        raise EbookValidationError("title_too_long")
    if len(author) > MAX_AUTHOR_LENGTH:
        raise EbookValidationError("author_too_long")
    if price < 0:
        raise EbookValidationError("invalid_price")
    return EbookForm(title=title, author=author, price=price, description=description)


def list_for_admin() -> Dict[str, Any]:
    rows = ebooks_repo.list_ebooks()
    summary = {
        "total": len(rows),
        "with_cover": sum(1 for r in rows if r.cover_image_id),
    }
    return {"ebooks": rows, "summary": summary}


def load_for_edit(ebook_id: Any) -> Dict[str, Any]:
    ebook = ebooks_repo.get_ebook(parse_ebook_id(ebook_id))
    if ebook is None:
        raise EbookNotFoundError("ebook_missing")
    return {"ebook": ebook, "cover_url": storage_service.get_public_url(ebook.cover_image_id)}


def update_ebook(ebook_id: Any, form: Mapping[str, Any]) -> Ebook:
    """Apply edited fields; the stored cover id is never taken from the form."""
    target = parse_ebook_id(ebook_id)
    parsed = parse_form(form)
    ebook = ebooks_repo.update_ebook(target, **parsed.as_fields())
    if ebook is None:
        raise EbookNotFoundError("ebook_missing")
    LOG.info("Updated ebook id=%s title=%s price=%s", ebook.id, ebook.title, ebook.price)
    return ebook


def create_ebook(form: Mapping[str, Any], cover: Optional[FileStorage] = None) -> Ebook:
    parsed = parse_form(form)
    cover_id = None
    if cover is not None and cover.filename:
        cover_id = _upload_or_raise(cover)
    ebook = ebooks_repo.create_ebook(cover_image_id=cover_id, **parsed.as_fields())
    LOG.info("Created ebook id=%s title=%s", ebook.id, ebook.title)
    return ebook


def _upload_or_raise(cover: FileStorage) -> str:
    ok, result = storage_service.upload_cover(cover)
    if not ok:
        raise CoverUploadError(str(result.get("error") or "upload_failed"))
    return str(result["object_id"])


def replace_cover(ebook_id: Any, cover: Optional[FileStorage]) -> Ebook:
    target = parse_ebook_id(ebook_id)
    current = ebooks_repo.get_ebook(target)
    if current is None:
        raise EbookNotFoundError("ebook_missing")
    previous = current.cover_image_id
    new_id = _upload_or_raise(cover)  # type: ignore[arg-type]
    ebook = ebooks_repo.update_ebook(target, cover_image_id=new_id)
    if ebook is None:
        storage_service.delete_object(new_id)
        raise EbookNotFoundError("ebook_missing")
    if previous and previous != new_id:
        ok, info = storage_service.delete_object(previous)
        if not ok:
            LOG.warning("Old cover not removed ebook_id=%s object=%s info=%s", target, previous, info)
    LOG.info("Replaced cover ebook_id=%s object=%s", target, new_id)
    return ebook


def delete_ebook(ebook_id: Any) -> Dict[str, Any]:
    target = parse_ebook_id(ebook_id)
    ebook = ebooks_repo.get_ebook(target)
    if ebook is None:
        raise EbookNotFoundError("ebook_missing")
    cover_id = ebook.cover_image_id
    ebooks_repo.delete_ebook(target)
    cover_removed = False
    if cover_id:
        cover_removed, info = storage_service.delete_object(cover_id)
        if not cover_removed:
            LOG.warning("Cover not removed for deleted ebook id=%s info=%s", target, info)
    LOG.info("Deleted ebook id=%s title=%s", target, ebook.title)
    return {"id": target, "title": ebook.title, "cover_removed": cover_removed}


__all__ = [
    "EbookValidationError",
    "CoverUploadError",
    "EbookForm",
    "parse_form",
    "list_for_admin",
    "load_for_edit",
    "update_ebook",
    "create_ebook",
    "replace_cover",
    "delete_ebook",
]
