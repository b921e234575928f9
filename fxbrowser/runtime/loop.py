"""Main interactive event loop for the terminal UI.

Each iteration re-checks the terminal size, redraws when something changed,
and feeds at most one decoded key through the translator into the engine.
"""

from __future__ import annotations

import logging
import shutil
from collections.abc import Callable

from ..engine import NavigationEngine
from ..input import KeyTranslator, read_key
from ..render import render_frame
from ..ui_theme import UITheme
from .terminal import TerminalController

# Poll interval that lets terminal resizes redraw without a keypress.
KEY_POLL_MS = 200

logger = logging.getLogger(__name__)


def run_main_loop(
    engine: NavigationEngine,
    terminal: TerminalController,
    stdin_fd: int,
    theme: UITheme,
    *,
    translator: KeyTranslator | None = None,
    read_key_fn: Callable[..., str] = read_key,
) -> None:
    """Run the browser until a quit event arrives."""
    translator = translator if translator is not None else KeyTranslator()
    last_size: tuple[int, int] | None = None
    dirty = True
    with terminal.raw_mode():
        while True:
            term = shutil.get_terminal_size((80, 24))
            size = (term.columns, term.lines)
            if size != last_size:
                last_size = size
                engine.resize(term.lines)
                dirty = True
            if dirty:
                render_frame(engine.describe(), term.columns, term.lines, theme)
                dirty = False

            key = read_key_fn(stdin_fd, timeout_ms=KEY_POLL_MS)
            if not key:
                continue
            event = translator.translate(key, engine.mode)
            if event is None:
                continue
            logger.debug("key %r -> %s", key, event.action.name)
            if engine.handle(event):
                break
            dirty = True
