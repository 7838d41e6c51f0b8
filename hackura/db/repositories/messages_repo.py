"""Repository helpers for contact messages."""
from __future__ import annotations

from typing import List, Optional

from hackura.db import app_session
from hackura.db.models import ContactMessage


def create_message(name: str, email: str, message: str) -> ContactMessage:
    record = ContactMessage(name=name, email=email, message=message, is_read=False)
    with app_session() as session:
        session.add(record)
    return record


def list_messages() -> List[ContactMessage]:
    with app_session() as session:
        return (
            session.query(ContactMessage)
            .order_by(ContactMessage.created_at.desc(), ContactMessage.id.desc())
            .all()
        )


def get_message(message_id: int) -> Optional[ContactMessage]:
    with app_session() as session:
        return session.query(ContactMessage).filter(ContactMessage.id == message_id).one_or_none()


def mark_read(message_id: int, is_read: bool = True) -> Optional[ContactMessage]:
    with app_session() as session:
        record = session.query(ContactMessage).filter(ContactMessage.id == message_id).one_or_none()
        if not record:
            return None
        record.is_read = is_read
        return record


def delete_message(message_id: int) -> bool:
    with app_session() as session:
        record = session.query(ContactMessage).filter(ContactMessage.id == message_id).one_or_none()
        if not record:
            return False
        session.delete(record)
        return True


def count_unread() -> int:
    with app_session() as session:
        return session.query(ContactMessage).filter(ContactMessage.is_read.is_(False)).count()


__all__ = [
    "create_message",
    "list_messages",
    "get_message",
    "mark_read",
    "delete_message",
    "count_unread",
]
