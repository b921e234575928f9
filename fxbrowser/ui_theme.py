"""UI theme definitions and selection helpers.

Themes are ANSI palettes for the browser chrome and entry rows. Selected
entries are drawn in black on the colour of their kind.
"""

from __future__ import annotations

from dataclasses import dataclass

from .entries import EntryKind
from .messages import ERROR, WARN


@dataclass(frozen=True)
class UITheme:
    """Semantic ANSI palette used by the renderer."""

    name: str
    reset: str
    divider: str
    header: str
    prompt: str
    column_header: str
    cursor_marker: str
    entry_dir: str
    entry_symlink: str
    entry_file: str
    selected_dir: str
    selected_symlink: str
    selected_file: str
    status: str
    message_info: str
    message_warn: str
    message_error: str

    def entry_style(self, kind: EntryKind, selected: bool) -> str:
        if kind is EntryKind.DIRECTORY:
            return self.selected_dir if selected else self.entry_dir
        if kind is EntryKind.SYMLINK:
            return self.selected_symlink if selected else self.entry_symlink
        return self.selected_file if selected else self.entry_file

    def message_style(self, level: str) -> str:
        if level == ERROR:
            return self.message_error
        if level == WARN:
            return self.message_warn
        return self.message_info


DEFAULT_THEME = UITheme(
    name="default",
    reset="\033[0m",
    divider="\033[38;5;240m",
    header="\033[1m",
    prompt="\033[1;38;5;81m",
    column_header="\033[2m",
    cursor_marker="\033[1;38;5;44m",
    entry_dir="\033[34m",
    entry_symlink="\033[35m",
    entry_file="\033[37m",
    selected_dir="\033[30;44m",
    selected_symlink="\033[30;45m",
    selected_file="\033[30;47m",
    status="\033[38;5;250m",
    message_info="\033[37m",
    message_warn="\033[33m",
    message_error="\033[31m",
)

OCEAN_THEME = UITheme(
    name="ocean",
    reset="\033[0m",
    divider="\033[2;38;5;31m",
    header="\033[1;38;5;153m",
    prompt="\033[1;38;5;45m",
    column_header="\033[2;38;5;110m",
    cursor_marker="\033[38;5;39m",
    entry_dir="\033[1;38;5;45m",
    entry_symlink="\033[38;5;141m",
    entry_file="\033[38;5;252m",
    selected_dir="\033[30;48;5;45m",
    selected_symlink="\033[30;48;5;141m",
    selected_file="\033[30;48;5;252m",
    status="\033[38;5;110m",
    message_info="\033[38;5;153m",
    message_warn="\033[38;5;215m",
    message_error="\033[38;5;203m",
)

PLAIN_THEME = UITheme(
    name="plain",
    reset="",
    divider="",
    header="",
    prompt="",
    column_header="",
    cursor_marker="",
    entry_dir="",
    entry_symlink="",
    entry_file="",
    selected_dir="\033[7m",
    selected_symlink="\033[7m",
    selected_file="\033[7m",
    status="",
    message_info="",
    message_warn="",
    message_error="",
)

_THEMES: dict[str, UITheme] = {
    DEFAULT_THEME.name: DEFAULT_THEME,
    OCEAN_THEME.name: OCEAN_THEME,
}


def available_theme_names() -> tuple[str, ...]:
    """Return selectable non-plain theme names."""
    return tuple(sorted(_THEMES.keys()))


def normalize_theme_name(name: str | None) -> str:
    """Return a valid theme name, falling back to default."""
    if not name:
        return DEFAULT_THEME.name
    candidate = str(name).strip().lower()
    if candidate in _THEMES:
        return candidate
    return DEFAULT_THEME.name


def resolve_theme(name: str | None, *, no_color: bool = False) -> UITheme:
    """Return concrete theme for requested name and color mode."""
    if no_color:
        return PLAIN_THEME
    return _THEMES[normalize_theme_name(name)]


__all__ = [
    "UITheme",
    "DEFAULT_THEME",
    "OCEAN_THEME",
    "PLAIN_THEME",
    "available_theme_names",
    "normalize_theme_name",
    "resolve_theme",
]
