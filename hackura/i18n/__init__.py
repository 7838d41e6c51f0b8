"""Flask-Babel setup and translation directory handling."""
from __future__ import annotations

from pathlib import Path
from typing import Iterable, List, Optional, Sequence

from flask import request, session
from flask_babel import Babel

from hackura.utils.logging import get_logger

LOG = get_logger("hackura.i18n")

SESSION_LOCALE_KEY = "preferred_locale"
SUPPORTED_LANGUAGES = ("en",)
DEFAULT_LOCALE = "en"

_PACKAGE_ROOT = Path(__file__).resolve().parents[1]
_DEFAULT_TRANSLATION_ROOTS: Sequence[Path] = (
    _PACKAGE_ROOT / "translations",
)


def normalize_language_choice(raw: Optional[str]) -> Optional[str]:
    if not isinstance(raw, str):
        return None
    code = raw.strip().replace("-", "_").lower().split("_")[0]
    return code if code in SUPPORTED_LANGUAGES else None


def select_locale() -> str:
    preferred = normalize_language_choice(session.get(SESSION_LOCALE_KEY))
    if preferred:
        return preferred
    best = request.accept_languages.best_match(SUPPORTED_LANGUAGES)
    return best or DEFAULT_LOCALE


def _normalize_paths(paths: Iterable[Path | str]) -> List[str]:
    seen: List[str] = []
    for candidate in paths:
        path = Path(candidate).resolve()
        if not path.is_dir():
            LOG.debug("Translation directory missing; skipping: %s", path)
            continue
        as_str = str(path)
        if as_str not in seen:
            seen.append(as_str)
    return seen


def configure_translations(app, extra_roots: Iterable[Path | str] | None = None) -> None:
    """Initialise Flask-Babel once, with our translation roots searched first.

    Flask-Babel reads its directory list at init time, so the merged list is
    written to the config before `Babel(app)` runs.
    """
    if "babel" in app.extensions:
        return
    candidates: List[Path | str] = list(_DEFAULT_TRANSLATION_ROOTS)
    if extra_roots:
        candidates.extend(extra_roots)
    desired = _normalize_paths(candidates)
    existing = [d for d in str(app.config.get("BABEL_TRANSLATION_DIRECTORIES") or "").split(";") if d]
    merged: List[str] = []
    for directory in desired + existing:
        if directory not in merged:
            merged.append(directory)
    if merged:
        app.config["BABEL_TRANSLATION_DIRECTORIES"] = ";".join(merged)
    app.config.setdefault("BABEL_DEFAULT_LOCALE", DEFAULT_LOCALE)
    Babel(app, locale_selector=select_locale)
    LOG.info("Flask-Babel configured with %s custom translation directories", len(desired))


__all__ = [
    "SESSION_LOCALE_KEY",
    "SUPPORTED_LANGUAGES",
    "normalize_language_choice",
    "select_locale",
    "configure_translations",
]
