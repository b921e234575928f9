"""External process helpers for opening entries and running exec prompts.

Both helpers block until the child exits and raise ``ExecError`` instead of
letting launch failures escape, so callers can show a status message.
"""

from __future__ import annotations

import logging
import shlex
import subprocess
from collections.abc import Callable
from pathlib import Path

from .errors import ExecError

logger = logging.getLogger(__name__)


def _split_command(command_line: str) -> list[str]:
    try:
        args = shlex.split(command_line)
    except ValueError as exc:
        raise ExecError(command_line, str(exc)) from exc
    if not args:
        raise ExecError(command_line, "empty command")
    return args


def open_with_app(
    app: str,
    target: Path,
    disable_tui_mode: Callable[[], None],
    enable_tui_mode: Callable[[], None],
) -> None:
    """Run ``app target`` in the foreground while the TUI is suspended."""
    cmd = _split_command(app)
    logger.info("opening %s with %s", target, app)
    disable_tui_mode()
    try:
        completed = subprocess.run([*cmd, str(target)], cwd=target.parent, check=False)
    except OSError as exc:
        raise ExecError(app, str(exc)) from exc
    finally:
        enable_tui_mode()
    if completed.returncode != 0:
        raise ExecError(app, f"exit status {completed.returncode}", returncode=completed.returncode)


def run_command(command_line: str, cwd: Path) -> str:
    """Run an exec-prompt command in ``cwd`` and return its standard output.

    A non-zero exit raises ``ExecError`` carrying the command's stderr.
    """
    args = _split_command(command_line)
    logger.info("exec %r in %s", command_line, cwd)
    try:
        completed = subprocess.run(
            args,
            cwd=cwd,
            stdin=subprocess.DEVNULL,
            capture_output=True,
            text=True,
            errors="replace",
            check=False,
        )
    except OSError as exc:
        raise ExecError(command_line, str(exc)) from exc
    if completed.returncode != 0:
        raise ExecError(
            command_line,
            f"exit status {completed.returncode}",
            returncode=completed.returncode,
            output=completed.stderr,
        )
    return completed.stdout


__all__ = ["open_with_app", "run_command"]
