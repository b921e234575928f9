"""Raw-mode and alternate-screen switching for the browser session.

Leaving TUI mode always shows the cursor again and puts back the tty
attributes captured when the controller was created.
"""

from __future__ import annotations

import contextlib
import os
import termios
import tty

# Alternate screen on, cursor hidden, cursor home, clear.
ENTER_TUI = b"\x1b[?1049h\x1b[?25l\x1b[H\x1b[2J"
# Attributes reset, cursor shown, main screen back.
LEAVE_TUI = b"\x1b[0m\x1b[?25h\x1b[?1049l"


class TerminalController:
    """Switch one stdin/stdout pair between cooked and full-screen raw mode."""

    def __init__(self, stdin_fd: int, stdout_fd: int) -> None:
        self.stdin_fd = stdin_fd
        self.stdout_fd = stdout_fd
        self._saved_tty_state = termios.tcgetattr(stdin_fd)
        self.active = False

    def enable_tui_mode(self) -> None:
        tty.setraw(self.stdin_fd, termios.TCSAFLUSH)
        os.write(self.stdout_fd, ENTER_TUI)
        self.active = True

    def disable_tui_mode(self) -> None:
        """Return the terminal to the state it had before ``enable_tui_mode``.

        Also used to hand the terminal to a foreground child process.
        """
        os.write(self.stdout_fd, LEAVE_TUI)
        termios.tcsetattr(self.stdin_fd, termios.TCSAFLUSH, self._saved_tty_state)
        self.active = False

    @contextlib.contextmanager
    def raw_mode(self):
        """Run the enclosed block in TUI mode, restoring the terminal on any exit."""
        try:
            self.enable_tui_mode()
            yield self
        finally:
            self.disable_tui_mode()


__all__ = ["ENTER_TUI", "LEAVE_TUI", "TerminalController"]
