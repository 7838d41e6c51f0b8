"""Application startup entry points."""
from .wiring import create_app, init_app

__all__ = ["create_app", "init_app"]
