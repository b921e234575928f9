"""Filesystem listing and classification for the browser entry list."""

from __future__ import annotations

import logging
import os
from collections.abc import Iterable
from datetime import datetime
from pathlib import Path

from ..errors import DirectoryReadError, PathError
from .types import KIND_GROUP_ORDER, Entry, EntryKind

logger = logging.getLogger(__name__)


def _classify(child: os.DirEntry[str]) -> EntryKind:
    """Classify without following symlinks; unreadable entries count as files."""
    try:
        if child.is_symlink():
            return EntryKind.SYMLINK
        if child.is_dir(follow_symlinks=False):
            return EntryKind.DIRECTORY
    except OSError:
        pass
    return EntryKind.FILE


def _entry_from_dir_entry(child: os.DirEntry[str]) -> Entry:
    kind = _classify(child)
    created: datetime | None = None
    size: int | None = None
    try:
        stat = child.stat(follow_symlinks=False)
    except OSError:
        stat = None
    if stat is not None:
        birthtime = getattr(stat, "st_birthtime", None)
        if birthtime is not None:
            created = datetime.fromtimestamp(birthtime)
        if kind is EntryKind.FILE:
            size = int(stat.st_size)
    return Entry(name=child.name, kind=kind, created=created, size=size)


def group_entries(entries: Iterable[Entry]) -> list[Entry]:
    """Group entries directory, symlink, file while keeping listing order per group.

    Names are deliberately not sorted inside a group.
    """
    groups: dict[EntryKind, list[Entry]] = {kind: [] for kind in KIND_GROUP_ORDER}
    for entry in entries:
        groups[entry.kind].append(entry)
    ordered: list[Entry] = []
    for kind in KIND_GROUP_ORDER:
        ordered.extend(groups[kind])
    return ordered


def list_directory(directory: Path, show_hidden: bool = True) -> list[Entry]:
    """Return the grouped entry list for ``directory``.

    Raises ``DirectoryReadError`` when the directory cannot be scanned. Names
    that are not valid UTF-8 arrive surrogate-escaped from ``os.scandir``.
    """
    raw: list[Entry] = []
    try:
        with os.scandir(directory) as children:
            for child in children:
                if not show_hidden and child.name.startswith("."):
                    continue
                raw.append(_entry_from_dir_entry(child))
    except OSError as exc:
        logger.warning("listing %s failed: %s", directory, exc)
        raise DirectoryReadError(directory, exc.strerror or str(exc)) from exc
    logger.debug("listed %d entries in %s", len(raw), directory)
    return group_entries(raw)


def expand_user_path(raw_path: str, base: Path) -> Path:
    """Resolve user input to an existing directory.

    ``~`` is expanded and relative input is taken relative to ``base``.
    Raises ``PathError`` when the result is not a directory.
    """
    stripped = raw_path.strip()
    if not stripped:
        raise PathError(raw_path, "empty")
    try:
        candidate = Path(stripped).expanduser()
    except RuntimeError as exc:
        raise PathError(raw_path, "not expandable") from exc
    if not candidate.is_absolute():
        candidate = base / candidate
    try:
        resolved = candidate.resolve(strict=True)
    except (OSError, RuntimeError) as exc:
        raise PathError(raw_path, "not a valid path") from exc
    if not resolved.is_dir():
        raise PathError(raw_path, "not a directory")
    return resolved


def home_directory() -> Path | None:
    """Return the user's home directory, or ``None`` when it cannot be determined."""
    try:
        return Path.home()
    except RuntimeError:
        return None


__all__ = [
    "group_entries",
    "list_directory",
    "expand_user_path",
    "home_directory",
]
