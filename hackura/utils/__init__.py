"""Utility helpers.

Single import surface for identity and formatting helpers.
"""
from .identity import (
    normalize_email,
    is_admin_user,
    ensure_admin,
    verify_admin_password,
    login_admin,
    logout_admin,
    PermissionError,
)
from .currency import format_price

__all__ = [
    "normalize_email",
    "is_admin_user",
    "ensure_admin",
    "verify_admin_password",
    "login_admin",
    "logout_admin",
    "PermissionError",
    "format_price",
]
