"""Command-line front door for fxbrowser.

Parses CLI options, loads config, and resolves the starting directory.
Then dispatches into the interactive browser runtime.
"""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path

from .entries import expand_user_path
from .errors import ConfigError, DirectoryReadError, PathError
from .runtime import run_browser
from .runtime.config import DEFAULT_CONFIG_PATH, load_config
from .runtime.log import DEFAULT_LOG_PATH, configure_logging
from .ui_theme import available_theme_names

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="fxbrowser",
        description="Browse a directory in a keyboard-driven terminal file browser.",
    )
    parser.add_argument("path", nargs="?", default=None, help="Directory to open. Defaults to current directory.")
    parser.add_argument(
        "--theme",
        default=None,
        help=f"UI theme name ({', '.join(available_theme_names())}).",
    )
    parser.add_argument("--no-color", action="store_true", help="Disable color output.")
    parser.add_argument(
        "--config",
        type=Path,
        default=None,
        help=f"Config file (default: {DEFAULT_CONFIG_PATH}).",
    )
    parser.add_argument(
        "--log-file",
        type=Path,
        nargs="?",
        const=DEFAULT_LOG_PATH,
        default=None,
        help=f"Write a debug log (default location: {DEFAULT_LOG_PATH}).",
    )
    return parser


def resolve_start_path(raw_path: str | None, default_path: Path) -> Path:
    """Resolve the positional path argument, raising ``PathError`` when unusable."""
    if raw_path is None:
        return default_path.resolve()
    return expand_user_path(raw_path, Path.cwd())


def main(argv: list[str] | None = None, default_path: Path | None = None) -> None:
    """Parse CLI arguments and launch the browser.

    Startup failures (bad config, bad path, unreadable directory, no tty)
    exit with a message and a non-zero status.
    """
    args = build_parser().parse_args(argv)
    try:
        configure_logging(args.log_file)
    except OSError as exc:
        raise SystemExit(f"Unable to open log file: {exc}") from exc

    try:
        config = load_config(args.config)
    except ConfigError as exc:
        raise SystemExit(str(exc)) from exc

    if default_path is None:
        default_path = Path.cwd()
    try:
        start_path = resolve_start_path(args.path, default_path)
    except PathError as exc:
        raise SystemExit(f"Invalid arguments! '{exc.raw_path}' is not a valid path!") from exc

    if not sys.stdin.isatty() or not sys.stdout.isatty():
        raise SystemExit("fxbrowser needs an interactive terminal.")

    logger.info("starting in %s", start_path)
    try:
        run_browser(start_path, config, theme_name=args.theme, no_color=args.no_color)
    except DirectoryReadError as exc:
        raise SystemExit(str(exc)) from exc


if __name__ == "__main__":
    main()
