"""Display-width helpers for composing terminal rows.

Escape sequences are kept verbatim and count as zero columns; tabs expand to
the next 8-column stop and East Asian wide characters take two columns.
"""

from __future__ import annotations

import re
import unicodedata

ANSI_ESCAPE_RE = re.compile(r"\x1b\[[0-9;?]*[ -/]*[@-~]")
TAB_STOP = 8
_TOKEN_RE = re.compile(rf"({ANSI_ESCAPE_RE.pattern})|(.)", re.DOTALL)


def char_display_width(ch: str, col: int) -> int:
    """Return terminal column width for one character at visual column ``col``."""
    if ch == "\t":
        return TAB_STOP - (col % TAB_STOP)
    if unicodedata.combining(ch):
        return 0
    if unicodedata.east_asian_width(ch) in {"W", "F"}:
        return 2
    return 1


def display_width(text: str) -> int:
    """Return the number of terminal columns ``text`` occupies."""
    plain = ANSI_ESCAPE_RE.sub("", text)
    col = 0
    for ch in plain:
        col += char_display_width(ch, col)
    return col


def clip_ansi_line(text: str, max_cols: int) -> str:
    """Trim a styled line to at most ``max_cols`` display columns.

    Escape sequences up to the first character that no longer fits are kept,
    so a trailing reset survives clipping.
    """
    if max_cols <= 0:
        return ""
    pieces: list[str] = []
    col = 0
    for match in _TOKEN_RE.finditer(text):
        escape, ch = match.groups()
        if escape is not None:
            pieces.append(escape)
            continue
        width = char_display_width(ch, col)
        if col + width > max_cols:
            break
        pieces.append(" " * width if ch == "\t" else ch)
        col += width
    return "".join(pieces)


def fit_cell(text: str, width: int, max_text_cols: int | None = None) -> str:
    """Clip ``text`` to ``max_text_cols`` columns, then pad it to ``width``.

    ``max_text_cols`` defaults to ``width - 2`` so adjacent cells keep a gap.
    Control characters (e.g. newlines in odd file names) are shown as ``?``.
    """
    if max_text_cols is None:
        max_text_cols = max(0, width - 2)
    printable = "".join(ch if ch.isprintable() else "?" for ch in text)
    clipped = clip_ansi_line(printable, max_text_cols)
    return clipped + " " * max(0, width - display_width(clipped))


__all__ = [
    "ANSI_ESCAPE_RE",
    "TAB_STOP",
    "char_display_width",
    "clip_ansi_line",
    "display_width",
    "fit_cell",
]
