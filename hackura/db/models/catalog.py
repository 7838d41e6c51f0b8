"""ORM models for the Hackura catalog (ebooks + contact messages)."""
from __future__ import annotations

import datetime

from sqlalchemy import (
    Boolean,
    Column,
    DateTime,
    Float,
    Index,
    Integer,
    String,
    Text,
)
from sqlalchemy.orm import declarative_base

Base = declarative_base()


def _utcnow() -> datetime.datetime:
    return datetime.datetime.now(datetime.timezone.utc).replace(tzinfo=None)


class Ebook(Base):
    """Ebook product row.

    Mirrors the hosted ``ebooks`` table; the cover column keeps its
    camel-case name (``coverImageId``) and holds the storage object key.
    """

    __tablename__ = "ebooks"

    id = Column(Integer, primary_key=True, autoincrement=True)
    title = Column(String(255), nullable=False, default="")
    author = Column(String(255), nullable=False, default="")
    price = Column(Float, nullable=False, default=0.0)
    description = Column(Text, nullable=False, default="")
    cover_image_id = Column("coverImageId", String(512), nullable=True)
    created_at = Column(DateTime, default=_utcnow, nullable=False)

    __table_args__ = (
        Index("ix_ebooks_title", "title"),
        Index("ix_ebooks_author", "author"),
    )

    def as_dict(self) -> dict:
        return {
            "id": self.id,
            "title": self.title,
            "author": self.author,
            "price": float(self.price or 0),
            "description": self.description or "",
            "coverImageId": self.cover_image_id,
            "created_at": self.created_at.isoformat() if self.created_at else None,
        }

    def __repr__(self) -> str:  # pragma: no cover
        return f"<Ebook id={self.id} title={self.title!r}>"


class ContactMessage(Base):
    """Visitor message submitted through the contact form."""

    __tablename__ = "messages"

    id = Column(Integer, primary_key=True, autoincrement=True)
    name = Column(String(255), nullable=False)
    email = Column(String(255), nullable=False, index=True)
    message = Column(Text, nullable=False)
    is_read = Column(Boolean, nullable=False, default=False)
    created_at = Column(DateTime, default=_utcnow, nullable=False)

    def as_dict(self) -> dict:
        return {
            "id": self.id,
            "name": self.name,
            "email": self.email,
            "message": self.message,
            "is_read": bool(self.is_read),
            "created_at": self.created_at.isoformat() if self.created_at else None,
        }

    def __repr__(self) -> str:  # pragma: no cover
        return f"<ContactMessage id={self.id} email={self.email}>"


__all__ = ["Base", "Ebook", "ContactMessage"]
