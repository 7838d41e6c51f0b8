"""Route registration.

Called from startup to register every blueprint and the shared error pages.
"""
from __future__ import annotations

from typing import Any

from flask import render_template

from .admin import register_admin_blueprint
from .cart import register_cart_blueprint
from .health import register_health
from .storefront import register_storefront_blueprint


def _not_found(_exc):
    return render_template("404.html"), 404


def register_error_pages(app: Any) -> None:
    if getattr(app, "_hackura_error_pages", False):
        return
    app.register_error_handler(404, _not_found)
    setattr(app, "_hackura_error_pages", True)


def register_all(app: Any) -> None:
    register_storefront_blueprint(app)
    register_cart_blueprint(app)
    register_admin_blueprint(app)
    register_health(app)
    register_error_pages(app)


__all__ = ["register_all"]
