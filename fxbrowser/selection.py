"""Multi-entry selection over the current entry list."""

from __future__ import annotations

from collections.abc import Iterable, Iterator


class SelectionSet:
    """Set of indices into an entry list of known length.

    Indices outside ``[0, length)`` are never stored. Replacing the entry
    list goes through ``reset`` which empties the set.
    """

    def __init__(self, length: int = 0) -> None:
        self.length = max(0, length)
        self._indices: set[int] = set()

    def __contains__(self, index: object) -> bool:
        return index in self._indices

    def __len__(self) -> int:
        return len(self._indices)

    def __iter__(self) -> Iterator[int]:
        return iter(self.sorted_indices())

    def __bool__(self) -> bool:
        return bool(self._indices)

    def contains(self, index: int) -> bool:
        return index in self._indices

    def reset(self, length: int) -> None:
        """Bind to a new entry list and drop every stale index."""
        self.length = max(0, length)
        self._indices.clear()

    def toggle(self, index: int) -> None:
        if not 0 <= index < self.length:
            return
        if index in self._indices:
            self._indices.remove(index)
        else:
            self._indices.add(index)

    def select_all(self) -> None:
        self._indices = set(range(self.length))

    def clear(self) -> None:
        self._indices.clear()

    def replace(self, indices: Iterable[int]) -> None:
        """Make the selection exactly ``indices`` (out-of-range values dropped)."""
        self._indices = {index for index in indices if 0 <= index < self.length}

    def sorted_indices(self) -> list[int]:
        return sorted(self._indices)


def selection_message(count: int) -> str | None:
    """Return status text for ``count`` selected entries, ``None`` when empty."""
    if count <= 0:
        return None
    if count == 1:
        return "1 entry selected"
    return f"{count} entries selected"


__all__ = ["SelectionSet", "selection_message"]
