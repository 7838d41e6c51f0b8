"""Repository modules, one per table."""
from . import ebooks_repo, messages_repo

__all__ = ["ebooks_repo", "messages_repo"]
