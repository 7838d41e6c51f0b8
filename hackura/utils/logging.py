"""Application logging helpers.

One handler lives on the project logger (``config.APP_NAME``); module loggers
such as ``hackura.cart`` are its children and propagate into it, so the level
from `hackura.config.log_level_name()` is set in a single place.
"""
from __future__ import annotations

import logging
import threading
from typing import Optional

from hackura import config as app_config

ROOT_LOGGER_NAME = app_config.APP_NAME
LOG_FORMAT = f"[{app_config.APP_NAME}] %(asctime)s %(levelname)s %(name)s %(message)s"

_LOCK = threading.Lock()
_ROOT: Optional[logging.Logger] = None


def _root_logger() -> logging.Logger:
    global _ROOT
    if _ROOT is not None:
        return _ROOT
    with _LOCK:
        if _ROOT is None:
            logger = logging.getLogger(ROOT_LOGGER_NAME)
            logger.setLevel(getattr(logging, app_config.log_level_name(), logging.INFO))
            if not any(isinstance(h, logging.StreamHandler) for h in logger.handlers):
                handler = logging.StreamHandler()
                handler.setFormatter(logging.Formatter(LOG_FORMAT))
                logger.addHandler(handler)
            logger.propagate = False
            _ROOT = logger
    return _ROOT


def get_logger(name: str = ROOT_LOGGER_NAME) -> logging.Logger:
    """Return the project logger or one of its children.

    Names outside the project namespace are nested under it
    (``"seed"`` becomes ``"hackura.seed"``).
    """
    root = _root_logger()
    if name == ROOT_LOGGER_NAME:
        return root
    if not name.startswith(f"{ROOT_LOGGER_NAME}."):
        name = f"{ROOT_LOGGER_NAME}.{name}"
    return logging.getLogger(name)


__all__ = ["ROOT_LOGGER_NAME", "get_logger"]
