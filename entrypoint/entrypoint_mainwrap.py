#!/usr/bin/env python3
"""Hackura WSGI wrapper.

Responsibilities:
    1. Run the catalog seed (idempotent, best-effort) when HACKURA_SEED_ON_START is set.
    2. Build the storefront via `hackura.startup.create_app`.
    3. Expose the Flask `application` for development (``app.run``) or production WSGI servers.
"""

from __future__ import annotations

import os
import sys
import traceback


BASE_DIR = os.path.abspath(os.path.join(os.path.dirname(__file__), ".."))
if BASE_DIR not in sys.path:
    sys.path.insert(0, BASE_DIR)


_APP_SINGLETON = None  # module-level cache


def _seed_enabled() -> bool:
    return os.getenv("HACKURA_SEED_ON_START", "").strip().lower() in {"1", "true", "yes", "on"}


def main():  # pragma: no cover - thin wrapper
    """Create and return the Flask application (idempotent)."""
    global _APP_SINGLETON
    if _APP_SINGLETON is not None:
        return _APP_SINGLETON
    try:
        from hackura.startup import create_app
        app = create_app()
    except Exception:
        print("[MAINWRAP] FATAL: unable to build the Hackura application.")
        traceback.print_exc()
        raise SystemExit(2)
    if _seed_enabled():
        try:
            from entrypoint import seed_catalog
            seed_catalog.seed_catalog()
        except Exception as exc:
            print(f"[MAINWRAP] WARNING: catalog seed failed: {exc}")
    _APP_SINGLETON = app
    return app


# Expose WSGI application object for gunicorn: "gunicorn entrypoint.entrypoint_mainwrap:application"
application = main()
app = application


if __name__ == "__main__":  # Development server only (Flask built-in)
    host = os.getenv("HACKURA_HOST", "0.0.0.0")
    port_raw = os.getenv("HACKURA_PORT") or os.getenv("PORT") or "9002"
    try:
        port = int(port_raw)
    except ValueError:
        print(f"[MAINWRAP] Invalid port value '{port_raw}', falling back to 9002")
        port = 9002
    debug_raw = os.getenv("HACKURA_DEBUG", "")
    debug = debug_raw.lower() in {"1", "true", "yes", "on"}
    application.run(host=host, port=port, debug=debug)
