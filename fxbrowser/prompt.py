"""Single-line prompt editor with per-kind command history.

A prompt is opened by a command key (search, goto, exec), edited in place and
then either committed with Enter or discarded with Escape. Committed text is
appended to the history of that prompt kind for the rest of the process.
"""

from __future__ import annotations

from enum import Enum


class PromptKind(Enum):
    """Commands that read their argument through the prompt."""

    SEARCH = "search"
    GOTO = "goto"
    EXEC = "exec"

    @property
    def title(self) -> str:
        return self.value


class PromptHistory:
    """Append-only committed inputs keyed by prompt kind."""

    def __init__(self) -> None:
        self._entries: dict[PromptKind, list[str]] = {}

    def entries(self, kind: PromptKind) -> list[str]:
        return self._entries.setdefault(kind, [])

    def append(self, kind: PromptKind, text: str) -> None:
        self.entries(kind).append(text)

    def __len__(self) -> int:
        return sum(len(items) for items in self._entries.values())


class PromptEditor:
    """Editable buffer, buffer cursor, and history position for one open prompt.

    ``history_index`` counts steps back from the newest history entry; ``0``
    means the buffer holds fresh, uncommitted input.
    """

    def __init__(self, kind: PromptKind, history: PromptHistory) -> None:
        self.kind = kind
        self.history = history
        self.buffer = ""
        self.cursor = 0
        self.history_index = 0

    @property
    def title(self) -> str:
        return self.kind.title

    def insert(self, text: str) -> None:
        if not text:
            return
        self.buffer = self.buffer[: self.cursor] + text + self.buffer[self.cursor :]
        self.cursor += len(text)

    def delete_before(self) -> None:
        """Backspace: remove the character left of the cursor."""
        if not self.buffer or self.cursor <= 0:
            return
        self.buffer = self.buffer[: self.cursor - 1] + self.buffer[self.cursor :]
        self.cursor -= 1

    def delete_at(self) -> None:
        """Forward delete: remove the character under the cursor."""
        if self.cursor >= len(self.buffer):
            return
        self.buffer = self.buffer[: self.cursor] + self.buffer[self.cursor + 1 :]

    def move_left(self) -> None:
        self.cursor = max(0, self.cursor - 1)

    def move_right(self) -> None:
        self.cursor = min(len(self.buffer), self.cursor + 1)

    def move_home(self) -> None:
        self.cursor = 0

    def move_end(self) -> None:
        self.cursor = len(self.buffer)

    def _load_history_entry(self) -> None:
        entries = self.history.entries(self.kind)
        self.buffer = entries[len(entries) - self.history_index]
        self.cursor = len(self.buffer)

    def history_prev(self) -> None:
        """Step to the next older history entry, newest first."""
        entries = self.history.entries(self.kind)
        if not entries or self.history_index >= len(entries):
            return
        self.history_index += 1
        self._load_history_entry()

    def history_next(self) -> None:
        """Step toward newer entries; past the newest, return to an empty buffer."""
        if self.history_index > 1:
            self.history_index -= 1
            self._load_history_entry()
        elif self.history_index == 1:
            self.history_index = 0
            self.buffer = ""
            self.cursor = 0

    def commit(self) -> str:
        """Record the buffer in history (when non-empty) and return it."""
        text = self.buffer
        if text:
            self.history.append(self.kind, text)
        return text

    def cancel(self) -> None:
        """Abandon the prompt; history is left untouched."""
        self.buffer = ""
        self.cursor = 0
        self.history_index = 0


__all__ = ["PromptEditor", "PromptHistory", "PromptKind"]
