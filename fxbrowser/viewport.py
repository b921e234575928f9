"""Cursor and scroll-offset bookkeeping for the entry list viewport.

The viewport shows ``visible_rows`` entries starting at ``offset``. Moving the
cursor keeps ``padding`` rows of context above and below it, except near the
end of the list where the offset stops advancing so the last entry settles on
the bottom row instead of leaving blank rows under it.

All operations are no-ops on an empty list; selection jumps are also no-ops
when nothing is selected.
"""

from __future__ import annotations

from collections.abc import Iterable

# Rows used by everything but the entry list: blank, header, blank, column
# header, column rule, blank, status and the free bottom terminal row.
MARGIN = 8
# Context rows kept around the cursor while scrolling.
PADDING = 2


def visible_rows_for_height(term_lines: int, margin: int = MARGIN) -> int:
    """Return entry-list capacity for a terminal ``term_lines`` rows tall."""
    return max(1, term_lines - margin)


class ViewportController:
    """Own ``cursor`` and ``offset`` for an entry list of ``length`` items."""

    def __init__(self, visible_rows: int, padding: int = PADDING, length: int = 0) -> None:
        self.visible_rows = max(1, visible_rows)
        self.padding = max(0, padding)
        self.length = max(0, length)
        self.cursor = 0
        self.offset = 0

    @property
    def effective_padding(self) -> int:
        """Padding clamped so leading and trailing context fit in the viewport."""
        return max(0, min(self.padding, (self.visible_rows - 1) // 2))

    @property
    def position(self) -> tuple[int, int]:
        return self.cursor, self.offset

    def current_index(self) -> int | None:
        if self.length == 0:
            return None
        return self.cursor

    def visible_range(self) -> range:
        """Return entry indices rendered in the viewport."""
        end = min(self.length, self.offset + self.visible_rows)
        return range(self.offset, max(self.offset, end))

    def reset(self, length: int) -> None:
        """Bind to a freshly listed entry list and scroll back to the top."""
        self.length = max(0, length)
        self.cursor = 0
        self.offset = 0

    def refresh(self, length: int) -> None:
        """Bind to a re-read of the same directory, keeping the position if possible."""
        self.length = max(0, length)
        if self.length == 0:
            self.cursor = 0
            self.offset = 0
            return
        self.cursor = min(self.cursor, self.length - 1)
        self.offset = min(self.offset, self.cursor)
        self._keep_cursor_visible()

    def resize(self, visible_rows: int) -> None:
        """Apply a new capacity after a terminal resize."""
        self.visible_rows = max(1, visible_rows)
        self._keep_cursor_visible()

    def _keep_cursor_visible(self) -> None:
        if self.cursor < self.offset:
            self.offset = self.cursor
        elif self.cursor >= self.offset + self.visible_rows:
            self.offset = self.cursor - self.visible_rows + 1
        self.offset = max(0, self.offset)

    def move_down(self) -> tuple[int, int]:
        if self.length == 0 or self.cursor >= self.length - 1:
            return self.position
        padding = self.effective_padding
        self.cursor += 1
        if (
            self.cursor >= self.offset + self.visible_rows - padding
            and self.length - self.cursor > padding
        ):
            self.offset += 1
        self._keep_cursor_visible()
        return self.position

    def move_up(self) -> tuple[int, int]:
        if self.length == 0 or self.cursor <= 0:
            return self.position
        padding = self.effective_padding
        self.cursor -= 1
        if self.offset > 0 and self.cursor - self.offset < padding:
            self.offset -= 1
        self._keep_cursor_visible()
        return self.position

    def jump_to_top(self) -> tuple[int, int]:
        if self.length == 0:
            return self.position
        self.cursor = 0
        self.offset = 0
        return self.position

    def jump_to_bottom(self) -> tuple[int, int]:
        """Put the cursor on the last entry with the list tail pinned to the bottom row."""
        if self.length == 0:
            return self.position
        self.cursor = self.length - 1
        self.offset = max(0, self.length - self.visible_rows)
        return self.position

    def jump_to_selection(self, selection: Iterable[int], direction: int) -> tuple[int, int]:
        """Jump to the nearest selected index after (``direction > 0``) or before the cursor.

        Wraps around to the first (or last) selected index when none lies in
        the requested direction.
        """
        indices = sorted(index for index in selection if 0 <= index < self.length)
        if self.length == 0 or not indices or direction == 0:
            return self.position
        if direction > 0:
            target = next((index for index in indices if index > self.cursor), indices[0])
        else:
            target = next((index for index in reversed(indices) if index < self.cursor), indices[-1])
        self._reveal(target)
        return self.position

    def jump_to_first_selected(self, selection: Iterable[int]) -> tuple[int, int]:
        indices = [index for index in selection if 0 <= index < self.length]
        if self.length == 0 or not indices:
            return self.position
        self._reveal(min(indices))
        return self.position

    def _reveal(self, target: int) -> None:
        """Move the cursor to ``target`` and scroll it into view.

        Targets within the first screen scroll back to the top. Targets below
        the viewport end up ``padding`` rows above the bottom edge, or snap the
        list tail to the bottom row when they are within ``padding`` of the
        end. Targets above the viewport keep ``padding`` rows above them.
        """
        self.cursor = target
        padding = self.effective_padding
        context = self.visible_rows - 1 - padding
        if self.cursor < context:
            self.offset = 0
        elif self.cursor - self.offset > context:
            if self.length - self.cursor <= padding:
                self.offset = max(0, self.length - self.visible_rows)
            else:
                self.offset = self.cursor - context
        elif self.cursor < self.offset:
            self.offset = max(0, self.cursor - padding)


__all__ = [
    "MARGIN",
    "PADDING",
    "ViewportController",
    "visible_rows_for_height",
]
