"""Application configuration accessors.

Centralizes environment variable parsing & defaults. Each setting is read
on demand so tests can monkeypatch the environment without reloading.
"""
from __future__ import annotations

import os
import secrets
from functools import lru_cache

APP_NAME = "hackura"
APP_VERSION = "0.4.0"
APP_DESCRIPTION = "The future of eBook reading and discovery."

DEFAULT_DATABASE_URL = "sqlite:///hackura.db"
DEFAULT_LOG_LEVEL = "INFO"
DEFAULT_COVERS_BUCKET = "ebook-covers"
DEFAULT_APP_TITLE = "Hackura"
DEFAULT_CURRENCY_SYMBOL = "GH₵"
_TRUE = {"1", "true", "yes", "on"}

# Generated once per process when HACKURA_SECRET_KEY is unset (dev only).
_FALLBACK_SECRET = secrets.token_hex(32)


def _raw_env(name: str, default: str | None = None) -> str | None:
    val = os.getenv(name)
    return val if val is not None else default


def _clean_env(name: str) -> str | None:
    value = os.getenv(name)
    if value is None:
        return None
    value = value.strip()
    return value or None


def env_bool(name: str, default: bool = False) -> bool:
    raw = _raw_env(name, str(default).lower())
    if raw is None:
        return default
    return raw.lower() in _TRUE


def get_database_url() -> str:
    """SQLAlchemy URL for the catalog database.

    Environment Variable: HACKURA_DATABASE_URL
    Accepts a full URL (``postgresql+psycopg2://...``) or a bare sqlite path;
    ``:memory:`` is mapped to an in-memory sqlite database.
    """
    raw = _clean_env("HACKURA_DATABASE_URL") or DEFAULT_DATABASE_URL
    if "://" in raw:
        return raw
    if raw == ":memory:":
        return "sqlite:///:memory:"
    return f"sqlite:///{raw}"


def log_level_name() -> str:
    return _raw_env("HACKURA_LOG_LEVEL", DEFAULT_LOG_LEVEL).upper()  # type: ignore[union-attr]


def secret_key() -> str:
    return _clean_env("HACKURA_SECRET_KEY") or _FALLBACK_SECRET


@lru_cache(maxsize=1)
def metadata() -> dict:
    return {
        "name": APP_NAME,
        "version": APP_VERSION,
        "description": APP_DESCRIPTION,
    }


def summarize_runtime_config() -> dict:
    return {
        "database_url": _redact_url(get_database_url()),
        "log_level": log_level_name(),
        "storage_url": supabase_url(),
        "covers_bucket": covers_bucket(),
        "admin_enabled": admin_login_enabled(),
    }


def _redact_url(url: str) -> str:
    if "@" not in url or "://" not in url:
        return url
    scheme, rest = url.split("://", 1)
    return f"{scheme}://***@{rest.split('@', 1)[1]}"


def app_title() -> str:
    """Site title shown in the header and <title>."""
    return _clean_env("APP_TITLE") or DEFAULT_APP_TITLE


__all__ = [
    "APP_NAME",
    "APP_VERSION",
    "APP_DESCRIPTION",
    "env_bool",
    "get_database_url",
    "log_level_name",
    "secret_key",
    "metadata",
    "summarize_runtime_config",
    "app_title",
]


def supabase_url() -> str | None:
    """Base URL of the hosted backend, without trailing slash (SUPABASE_URL)."""
    value = _clean_env("SUPABASE_URL")
    if value is None:
        return None
    return value.rstrip("/")

__all__.append("supabase_url")


def supabase_api_key() -> str | None:
    """API key for storage writes.

    Environment Variables: SUPABASE_SERVICE_KEY, then SUPABASE_ANON_KEY.
    """
    return _clean_env("SUPABASE_SERVICE_KEY") or _clean_env("SUPABASE_ANON_KEY")

__all__.append("supabase_api_key")


def covers_bucket() -> str:
    return _clean_env("HACKURA_COVERS_BUCKET") or DEFAULT_COVERS_BUCKET

__all__.append("covers_bucket")


def currency_symbol() -> str:
    return _clean_env("HACKURA_CURRENCY_SYMBOL") or DEFAULT_CURRENCY_SYMBOL

__all__.append("currency_symbol")


def admin_password_hash() -> str | None:
    """Werkzeug password hash for the admin login (HACKURA_ADMIN_PASSWORD_HASH)."""
    return _clean_env("HACKURA_ADMIN_PASSWORD_HASH")

__all__.append("admin_password_hash")


def admin_password() -> str | None:
    """Plain admin password (HACKURA_ADMIN_PASSWORD); the hash variant wins when both are set."""
    return _raw_env("HACKURA_ADMIN_PASSWORD") or None

__all__.append("admin_password")


def admin_login_enabled() -> bool:
    return bool(admin_password_hash() or admin_password())

__all__.append("admin_login_enabled")
