"""Logging setup for the browser process.

The TUI owns stdout, so log records only go to a file, and only when one was
requested with ``--log-file`` or ``FXBROWSER_LOG``.
"""

from __future__ import annotations

import logging
import os
from pathlib import Path

from platformdirs import user_log_dir

from .config import APP_NAME

LOG_ENV_VAR = "FXBROWSER_LOG"
LOG_FILENAME = f"{APP_NAME}.log"
DEFAULT_LOG_PATH = Path(user_log_dir(APP_NAME, appauthor=False)) / LOG_FILENAME
LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"
PACKAGE_LOGGER = "fxbrowser"


def log_path(override: Path | None = None) -> Path | None:
    """Return the requested log file, or ``None`` when logging stays off."""
    if override is not None:
        return override
    env_value = os.environ.get(LOG_ENV_VAR, "").strip()
    if env_value:
        return Path(env_value).expanduser()
    return None


def configure_logging(override: Path | None = None, level: int = logging.DEBUG) -> Path | None:
    """Attach a file handler to the package logger and return its path."""
    target = log_path(override)
    if target is None:
        return None
    target.parent.mkdir(parents=True, exist_ok=True)
    handler = logging.FileHandler(target, encoding="utf-8")
    handler.setFormatter(logging.Formatter(LOG_FORMAT))
    package_logger = logging.getLogger(PACKAGE_LOGGER)
    package_logger.addHandler(handler)
    package_logger.setLevel(level)
    return target


__all__ = [
    "DEFAULT_LOG_PATH",
    "LOG_ENV_VAR",
    "LOG_FORMAT",
    "configure_logging",
    "log_path",
]
