"""Entry-list columns and their cell text."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime

from .entries import Entry, EntryKind

CREATED_FORMAT = "%d.%m.%Y %I:%M %p"
_SIZE_UNITS = ("B", "KB", "MB", "GB", "TB")


@dataclass(frozen=True)
class Column:
    name: str
    title: str
    width: int


NAME = Column("name", "Name", 40)
TYPE = Column("type", "Type", 10)
SIZE = Column("size", "Size", 12)
CREATED = Column("created", "Created", 22)

COLUMNS: dict[str, Column] = {column.name: column for column in (NAME, TYPE, SIZE, CREATED)}
DEFAULT_COLUMN_NAMES: tuple[str, ...] = ("name", "type", "size", "created")


def columns_for_names(names: tuple[str, ...] | list[str]) -> list[Column]:
    """Map configured column names to columns; unknown names raise ``KeyError``."""
    return [COLUMNS[name] for name in names]


def format_size(size: int | None) -> str:
    if size is None:
        return ""
    value = float(size)
    for unit in _SIZE_UNITS:
        if value < 1024 or unit == _SIZE_UNITS[-1]:
            if unit == "B":
                return f"{int(value)} B"
            return f"{value:.1f} {unit}"
        value /= 1024
    return f"{size} B"


def format_created(created: datetime | None) -> str:
    if created is None:
        return ""
    return created.strftime(CREATED_FORMAT)


def cell_text(column: Column, entry: Entry) -> str:
    if column is NAME:
        return entry.name
    if column is TYPE:
        return entry.kind.value
    if column is SIZE:
        return format_size(entry.size) if entry.kind is EntryKind.FILE else ""
    if column is CREATED:
        return format_created(entry.created)
    return ""


__all__ = [
    "Column",
    "COLUMNS",
    "CREATED",
    "DEFAULT_COLUMN_NAMES",
    "NAME",
    "SIZE",
    "TYPE",
    "cell_text",
    "columns_for_names",
    "format_created",
    "format_size",
]
