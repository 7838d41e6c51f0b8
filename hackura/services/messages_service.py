"""Contact form submissions and the admin inbox."""
from __future__ import annotations

import re
from typing import Any, Dict

from hackura.db.models import ContactMessage
from hackura.db.repositories import messages_repo
from hackura.utils.identity import normalize_email
from hackura.utils.logging import get_logger

LOG = get_logger("hackura.messages")

MAX_MESSAGE_LENGTH = 5000
MAX_NAME_LENGTH = 255
_EMAIL_RE = re.compile(r"^[^@\s]+@[^@\s]+\.[^@\s]+$")


class MessageValidationError(ValueError):
    """Raised when a contact form submission is invalid."""


class MessageNotFoundError(LookupError):
    """Raised when a message id cannot be located."""


def submit_message(name: Any, email: Any, message: Any) -> ContactMessage:
    clean_name = str(name or "").strip()
    if not clean_name:
        raise MessageValidationError("name_required")
    if len(clean_name) > MAX_NAME_LENGTH:
        raise MessageValidationError("name_too_long")
    clean_email = normalize_email(email)
    if not clean_email or not _EMAIL_RE.match(clean_email):
        raise MessageValidationError("email_invalid")
    body = str(message or "").strip()
    if not body:
        raise MessageValidationError("message_required")
    if len(body) > MAX_MESSAGE_LENGTH:
        raise MessageValidationError("message_too_long")
    record = messages_repo.create_message(clean_name, clean_email, body)
    LOG.info("Contact message stored id=%s email=%s", record.id, clean_email)
    return record


def list_messages() -> Dict[str, Any]:
    rows = messages_repo.list_messages()
    return {
        "messages": rows,
        "summary": {"total": len(rows), "unread": sum(1 for r in rows if not r.is_read)},
    }


def mark_read(message_id: int, is_read: bool = True) -> ContactMessage:
    record = messages_repo.mark_read(message_id, is_read)
    if record is None:
        raise MessageNotFoundError("message_missing")
    return record


def delete_message(message_id: int) -> None:
    if not messages_repo.delete_message(message_id):
        raise MessageNotFoundError("message_missing")
    LOG.info("Contact message deleted id=%s", message_id)


def unread_count() -> int:
    return messages_repo.count_unread()


__all__ = [
    "MessageValidationError",
    "MessageNotFoundError",
    "submit_message",
    "list_messages",
    "mark_read",
    "delete_message",
    "unread_count",
]
