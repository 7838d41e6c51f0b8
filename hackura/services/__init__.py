"""Service exports."""

from . import storage_service
from .catalog_service import (
    EbookNotFoundError,
    browse,
    featured,
    get_ebook_detail,
    parse_ebook_id,
    share_payload,
)
from .admin_ebooks_service import (
    EbookValidationError,
    CoverUploadError,
)
from .messages_service import (
    MessageValidationError,
    MessageNotFoundError,
)
from . import catalog_service, cart_service, admin_ebooks_service, messages_service

__all__ = [
    "storage_service",
    "catalog_service",
    "cart_service",
    "admin_ebooks_service",
    "messages_service",
    "EbookNotFoundError",
    "EbookValidationError",
    "CoverUploadError",
    "MessageValidationError",
    "MessageNotFoundError",
    "browse",
    "featured",
    "get_ebook_detail",
    "parse_ebook_id",
    "share_payload",
]
