"""Entry-list model: datatypes plus the filesystem listing contract."""

from .fs import expand_user_path, group_entries, home_directory, list_directory
from .types import KIND_GROUP_ORDER, Entry, EntryKind

__all__ = [
    "Entry",
    "EntryKind",
    "KIND_GROUP_ORDER",
    "expand_user_path",
    "group_entries",
    "home_directory",
    "list_directory",
]
