"""ORM models aggregate exports."""
from .catalog import (  # noqa: F401
	Base,
	Ebook,
	ContactMessage,
)

__all__ = [
	"Base",
	"Ebook",
	"ContactMessage",
]
