"""Identity & permission helpers for the admin area."""
from __future__ import annotations

import hmac
from typing import Any, Optional

from flask import session
from werkzeug.security import check_password_hash

from hackura import config as app_config

SESSION_ADMIN_KEY = "is_admin"


def normalize_email(raw: Any) -> Optional[str]:
    if not isinstance(raw, str):
        return None
    cleaned = raw.strip().lower()
    return cleaned or None


def is_admin_user() -> bool:
    return bool(session.get(SESSION_ADMIN_KEY, False))


class PermissionError(Exception):
    pass


def ensure_admin() -> None:
    if not is_admin_user():
        raise PermissionError("Admin privileges required")


def verify_admin_password(candidate: Any) -> bool:
    """Check a submitted password against the configured admin secret.

    Returns False when no secret is configured (admin login disabled).
    """
    if not isinstance(candidate, str) or not candidate:
        return False
    hashed = app_config.admin_password_hash()
    if hashed:
        try:
            return check_password_hash(hashed, candidate)
        except ValueError:
            return False
    plain = app_config.admin_password()
    if plain:
        return hmac.compare_digest(plain.encode("utf-8"), candidate.encode("utf-8"))
    return False


def login_admin() -> None:
    session[SESSION_ADMIN_KEY] = True
    session.modified = True


def logout_admin() -> None:
    session.pop(SESSION_ADMIN_KEY, None)


__all__ = [
    "SESSION_ADMIN_KEY",
    "normalize_email",
    "is_admin_user",
    "ensure_admin",
    "verify_admin_password",
    "login_admin",
    "logout_admin",
    "PermissionError",
]
