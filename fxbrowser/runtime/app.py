"""Bootstrap for the interactive browser session."""

from __future__ import annotations

import shutil
import sys
from pathlib import Path

from ..engine import NavigationEngine
from ..launcher import open_with_app
from ..ui_theme import resolve_theme
from ..viewport import visible_rows_for_height
from .config import BrowserConfig
from .loop import run_main_loop
from .terminal import TerminalController


def build_engine(start_path: Path, config: BrowserConfig, terminal: TerminalController) -> NavigationEngine:
    """Create the engine with file opening routed through a suspended TUI."""

    def open_file(app: str, target: Path) -> None:
        open_with_app(app, target, terminal.disable_tui_mode, terminal.enable_tui_mode)

    term = shutil.get_terminal_size((80, 24))
    engine = NavigationEngine(
        start_path,
        config,
        visible_rows_for_height(term.lines),
        open_file_fn=open_file,
    )
    engine.load()
    return engine


def run_browser(
    start_path: Path,
    config: BrowserConfig,
    *,
    theme_name: str | None = None,
    no_color: bool = False,
) -> None:
    """Run the interactive browser on ``start_path`` until the user quits.

    The starting directory is read before the terminal switches modes, so a
    ``DirectoryReadError`` reaches the caller with the terminal untouched.
    """
    stdin_fd = sys.stdin.fileno()
    terminal = TerminalController(stdin_fd, sys.stdout.fileno())
    engine = build_engine(start_path, config, terminal)
    theme = resolve_theme(theme_name or config.theme, no_color=no_color)
    run_main_loop(engine, terminal, stdin_fd, theme)
