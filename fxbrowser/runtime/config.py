"""TOML config loading and extension-to-application lookup.

The config lives in the platform config directory unless ``--config`` or
``FXBROWSER_CONFIG`` points elsewhere. A missing file means defaults; a file
that cannot be parsed or holds wrongly typed values raises ``ConfigError``.
"""

from __future__ import annotations

import logging
import os
import tomllib
from dataclasses import dataclass, field
from pathlib import Path

from platformdirs import user_config_dir

from ..columns import COLUMNS, DEFAULT_COLUMN_NAMES
from ..errors import ConfigError

APP_NAME = "fxbrowser"
CONFIG_FILENAME = "config.toml"
CONFIG_ENV_VAR = "FXBROWSER_CONFIG"
DEFAULT_CONFIG_PATH = Path(user_config_dir(APP_NAME, appauthor=False)) / CONFIG_FILENAME

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class BrowserConfig:
    """Validated config values."""

    default_app: str | None = None
    apps: dict[str, tuple[str, ...]] = field(default_factory=dict)
    columns: tuple[str, ...] = DEFAULT_COLUMN_NAMES
    show_dotfiles: bool = True
    theme: str | None = None

    def app_for(self, extension: str) -> str | None:
        """Return the app configured for ``extension``, else the default app."""
        lowered = extension.lower()
        for app, extensions in self.apps.items():
            if lowered in extensions:
                return app
        return self.default_app


def config_path(override: Path | None = None) -> Path:
    """Return the config file location, honoring explicit and env overrides."""
    if override is not None:
        return override
    env_value = os.environ.get(CONFIG_ENV_VAR, "").strip()
    if env_value:
        return Path(env_value).expanduser()
    return DEFAULT_CONFIG_PATH


def _optional_str(path: Path, data: dict[str, object], key: str) -> str | None:
    value = data.get(key)
    if value is None:
        return None
    if not isinstance(value, str):
        raise ConfigError(path, f"'{key}' must be a string")
    stripped = value.strip()
    return stripped if stripped else None


def _parse_apps(path: Path, value: object) -> dict[str, tuple[str, ...]]:
    if value is None:
        return {}
    if not isinstance(value, dict):
        raise ConfigError(path, "'apps' must be a table of app = [extensions]")
    apps: dict[str, tuple[str, ...]] = {}
    for app, extensions in value.items():
        if not isinstance(extensions, list) or not all(isinstance(ext, str) for ext in extensions):
            raise ConfigError(path, f"extensions for app '{app}' must be a list of strings")
        apps[str(app)] = tuple(ext.strip().lstrip(".").lower() for ext in extensions)
    return apps


def _parse_columns(path: Path, value: object) -> tuple[str, ...]:
    if value is None:
        return DEFAULT_COLUMN_NAMES
    if not isinstance(value, list) or not all(isinstance(name, str) for name in value):
        raise ConfigError(path, "'columns' must be a list of strings")
    names = tuple(name.strip().lower() for name in value)
    unknown = [name for name in names if name not in COLUMNS]
    if unknown:
        raise ConfigError(path, f"unknown column(s): {', '.join(unknown)}")
    if not names:
        raise ConfigError(path, "'columns' must not be empty")
    return names


def parse_config(data: dict[str, object], path: Path) -> BrowserConfig:
    """Validate decoded TOML ``data`` read from ``path``."""
    show_dotfiles = data.get("show_dotfiles", True)
    if not isinstance(show_dotfiles, bool):
        raise ConfigError(path, "'show_dotfiles' must be a boolean")
    return BrowserConfig(
        default_app=_optional_str(path, data, "default"),
        apps=_parse_apps(path, data.get("apps")),
        columns=_parse_columns(path, data.get("columns")),
        show_dotfiles=show_dotfiles,
        theme=_optional_str(path, data, "theme"),
    )


def load_config(path: Path | None = None) -> BrowserConfig:
    """Load and validate the config file, returning defaults when it is absent."""
    resolved = config_path(path)
    try:
        raw = resolved.read_text(encoding="utf-8")
    except FileNotFoundError:
        logger.debug("no config at %s, using defaults", resolved)
        return BrowserConfig()
    except OSError as exc:
        raise ConfigError(resolved, str(exc)) from exc
    try:
        data = tomllib.loads(raw)
    except tomllib.TOMLDecodeError as exc:
        raise ConfigError(resolved, str(exc)) from exc
    config = parse_config(data, resolved)
    logger.info("loaded config from %s", resolved)
    return config


__all__ = [
    "APP_NAME",
    "CONFIG_ENV_VAR",
    "CONFIG_FILENAME",
    "DEFAULT_CONFIG_PATH",
    "BrowserConfig",
    "config_path",
    "load_config",
    "parse_config",
]
