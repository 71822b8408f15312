"""Centralized logging helpers for WarScan.

All modules log through ``logging.getLogger(__name__)``; this module owns the
root handler setup and the structured ``extra`` payloads attached to debug
records.
"""

from __future__ import annotations

import logging
import os
import sys
from typing import Any, Dict, Optional

from constants import Constants

_HANDLER_NAME = "warscan-console"


def _resolve_level(default: str = "INFO") -> int:
    """Return the numeric level named by the environment, or the default."""
    name = os.environ.get(Constants.ENV_LOG_LEVEL, default).strip().upper()
    level = getattr(logging, name, None)
    if not isinstance(level, int):
        return getattr(logging, default)
    return level


def configure_logging() -> None:
    """Install the console handler on the root logger.

    The handler writes to stderr so that the report on stdout stays clean.
    Repeated calls only refresh the level.
    """
    root = logging.getLogger()
    level = _resolve_level()
    existing = [h for h in root.handlers if h.get_name() == _HANDLER_NAME]
    if not existing:
        handler = logging.StreamHandler(sys.stderr)
        handler.set_name(_HANDLER_NAME)
        handler.setFormatter(logging.Formatter(Constants.LOG_FORMAT))
        root.addHandler(handler)
    root.setLevel(level)


def add_file_handler(path: str) -> logging.Handler:
    """Attach a file handler with timestamps to the root logger."""
    file_handler = logging.FileHandler(path, encoding="utf-8")
    file_handler.setFormatter(logging.Formatter(Constants.LOG_FILE_FORMAT))
    logging.getLogger().addHandler(file_handler)
    return file_handler


def is_debug_enabled(logger: Optional[logging.Logger] = None) -> bool:
    """Return True when debug records would be emitted for the logger."""
    target = logger or logging.getLogger()
    return target.isEnabledFor(logging.DEBUG)


def extra_context(**fields: Any) -> Dict[str, Any]:
    """Build the ``extra`` mapping for a structured log record.

    ``None`` values are dropped so formatters never see placeholder keys.
    """
    return {key: value for key, value in fields.items() if value is not None}
