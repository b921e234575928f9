"""Rendering of engine frames into full-screen ANSI output.

Row layout, top to bottom: blank, header (path or prompt), blank, column
titles, column rule, the visible entries, blank, status. The final terminal
row stays empty, which together accounts for ``viewport.MARGIN``.
"""

from __future__ import annotations

import os
import sys

from ..columns import cell_text
from ..engine import RenderFrame, VisibleRow
from ..ui_theme import UITheme
from .ansi import clip_ansi_line, display_width, fit_cell

INDENT = "   "
CURSOR_MARKER = " > "
HEADER_ROW = 1
ENTRY_FIRST_ROW = 5
OUTPUT_HINT = "q: close output"


def _styled(text: str, style: str, theme: UITheme) -> str:
    if not style:
        return text
    return f"{style}{text}{theme.reset}"


def format_entry_row(row: VisibleRow, frame: RenderFrame, theme: UITheme) -> str:
    marker = _styled(CURSOR_MARKER, theme.cursor_marker, theme) if row.is_cursor else INDENT
    style = theme.entry_style(row.entry.kind, row.is_selected)
    cells = [
        _styled(fit_cell(cell_text(column, row.entry), column.width), style, theme)
        for column in frame.columns
    ]
    return marker + "".join(cells)


def format_status_row(frame: RenderFrame, theme: UITheme) -> str:
    line = INDENT + _styled(frame.status_line, theme.status, theme)
    if frame.message is not None:
        line += INDENT + _styled(frame.message.text, theme.message_style(frame.message.level), theme)
    return line


def build_frame_lines(frame: RenderFrame, width: int, height: int, theme: UITheme) -> list[str]:
    """Compose the rows for ``frame``; the list is ``height - 1`` rows long."""
    row_count = max(1, height - 1)
    if frame.output_lines is not None:
        body = [clip_ansi_line(line, width) for line in frame.output_lines[: max(0, row_count - 1)]]
        body.extend([""] * (row_count - 1 - len(body)))
        body.append(_styled(OUTPUT_HINT, theme.status, theme))
        return body[:row_count]

    header_style = theme.header if frame.prompt_cursor is None else theme.prompt
    total_width = sum(column.width for column in frame.columns)
    titles = "".join(fit_cell(column.title, column.width) for column in frame.columns)
    lines = [
        "",
        INDENT + _styled(frame.header_line, header_style, theme),
        "",
        INDENT + _styled(titles, theme.column_header, theme),
        INDENT + _styled("-" * total_width, theme.divider, theme),
    ]
    lines.extend(format_entry_row(row, frame, theme) for row in frame.rows)
    entry_rows = max(1, row_count - ENTRY_FIRST_ROW - 2)
    lines.extend([""] * (ENTRY_FIRST_ROW + entry_rows - len(lines)))
    lines.append("")
    lines.append(format_status_row(frame, theme))
    return [clip_ansi_line(line, width) for line in lines[:row_count]]


def prompt_cursor_column(frame: RenderFrame) -> int | None:
    """Return the 1-based screen column of the prompt text cursor, if prompting."""
    if frame.prompt_cursor is None:
        return None
    return len(INDENT) + display_width(frame.header_line[: frame.prompt_cursor]) + 1


def render_frame(frame: RenderFrame, width: int, height: int, theme: UITheme) -> None:
    """Write one complete frame to stdout."""
    out: list[str] = ["\033[?25l"]
    for row_idx, line in enumerate(build_frame_lines(frame, width, height, theme)):
        out.append(f"\033[{row_idx + 1};1H{line}{theme.reset}\033[K")
    out.append("\033[J")
    column = prompt_cursor_column(frame)
    if column is not None and frame.output_lines is None:
        out.append(f"\033[{HEADER_ROW + 1};{min(column, max(1, width))}H\033[?25h")
    os.write(sys.stdout.fileno(), "".join(out).encode("utf-8", errors="replace"))


__all__ = [
    "build_frame_lines",
    "format_entry_row",
    "format_status_row",
    "prompt_cursor_column",
    "render_frame",
]
