"""Domain datatypes for one listed directory entry."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from enum import Enum


class EntryKind(Enum):
    """Entry classification, declared in display-group order."""

    DIRECTORY = "dir"
    SYMLINK = "symlink"
    FILE = "file"


@dataclass(frozen=True)
class Entry:
    """Directory child observed during one listing snapshot."""

    name: str
    kind: EntryKind
    created: datetime | None = None
    size: int | None = None

    @property
    def is_dir(self) -> bool:
        return self.kind is EntryKind.DIRECTORY

    @property
    def is_file(self) -> bool:
        return self.kind is EntryKind.FILE

    @property
    def is_symlink(self) -> bool:
        return self.kind is EntryKind.SYMLINK

    @property
    def extension(self) -> str:
        """Return text after the last dot, or the whole name when there is none."""
        return self.name.rsplit(".", 1)[-1]


KIND_GROUP_ORDER: tuple[EntryKind, ...] = (
    EntryKind.DIRECTORY,
    EntryKind.SYMLINK,
    EntryKind.FILE,
)


__all__ = [
    "Entry",
    "EntryKind",
    "KIND_GROUP_ORDER",
]
