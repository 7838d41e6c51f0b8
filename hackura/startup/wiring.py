"""Application initialization / wiring.

Orchestrates: Flask app construction, config, Flask-Babel, DB init, Jinja
filters and globals, route registration.
"""
from __future__ import annotations

from typing import Any, Dict, Mapping, Optional

from flask import Flask, request
from flask_babel import lazy_gettext as _l

from hackura import config as app_config
from hackura.db import init_engine_once
from hackura.i18n import configure_translations
from hackura.routes import register_all as register_routes
from hackura.services import cart_service
from hackura.utils.currency import register_currency_filters
from hackura.utils.identity import is_admin_user
from hackura.utils.logging import get_logger

LOG = get_logger("hackura.startup")

NAV_LINKS = (
    {"endpoint": "storefront.index", "label": _l("Home"), "icon": "home"},
    {"endpoint": "storefront.ebooks", "label": _l("eBooks"), "icon": "book-open"},
    {"endpoint": "storefront.contact", "label": _l("Contact"), "icon": "mail"},
)
ADMIN_NAV_LINKS = (
    {"endpoint": "admin.ebooks", "label": _l("eBooks"), "icon": "package"},
    {"endpoint": "admin.messages", "label": _l("Messages"), "icon": "message-square"},
)


def _template_globals() -> Dict[str, Any]:
    # Cart lookups only need the session; skip them for static files.
    count = 0
    if request.endpoint and request.endpoint != "static":
        count = cart_service.cart_count()
    return {
        "app_title": app_config.app_title(),
        "app_description": app_config.APP_DESCRIPTION,
        "currency_symbol": app_config.currency_symbol(),
        "nav_links": NAV_LINKS,
        "admin_nav_links": ADMIN_NAV_LINKS,
        "cart_count": count,
        "is_admin": is_admin_user(),
    }


def _apply_config(app: Flask, overrides: Optional[Mapping[str, Any]]) -> None:
    app.config.setdefault("SECRET_KEY", app_config.secret_key())
    app.config.setdefault("SESSION_COOKIE_HTTPONLY", True)
    app.config.setdefault("SESSION_COOKIE_SAMESITE", "Lax")
    app.config.setdefault("MAX_CONTENT_LENGTH", 8 * 1024 * 1024)
    if overrides:
        app.config.update(overrides)


def init_app(app: Any) -> None:
    LOG.debug("init_app starting")
    configure_translations(app)
    init_engine_once()
    LOG.debug("DB engine initialized")
    register_routes(app)
    register_currency_filters(app)
    if not getattr(app, "_hackura_context", False):
        app.context_processor(_template_globals)
        setattr(app, "_hackura_context", True)
    LOG.info("App startup wiring complete %s", app_config.summarize_runtime_config())


def create_app(overrides: Optional[Mapping[str, Any]] = None) -> Flask:
    """Build the storefront Flask application."""
    app = Flask("hackura")
    _apply_config(app, overrides)
    init_app(app)
    return app


__all__ = ["init_app", "create_app", "NAV_LINKS", "ADMIN_NAV_LINKS"]
