"""Key-to-event binding tables."""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass

from ..events import InputEvent


@dataclass(frozen=True)
class KeyBinding:
    """Mapping from one or more key tokens to a single input event."""

    combos: tuple[str, ...]
    event: InputEvent


class KeyBindingRegistry:
    """Small key lookup table with optional key normalization strategy."""

    def __init__(self, normalize: Callable[[str], str] | None = None) -> None:
        self._normalize = normalize if normalize is not None else self._identity
        self._events: dict[str, InputEvent] = {}

    @staticmethod
    def _identity(key: str) -> str:
        return key

    def register_binding(self, binding: KeyBinding) -> KeyBindingRegistry:
        """Register one binding, overwriting earlier bindings for the same combos."""
        for combo in binding.combos:
            self._events[self._normalize(combo)] = binding.event
        return self

    def register_bindings(self, *bindings: KeyBinding) -> KeyBindingRegistry:
        for binding in bindings:
            self.register_binding(binding)
        return self

    def resolve(self, key: str) -> InputEvent | None:
        """Return the event bound to ``key``, or ``None`` when unbound."""
        return self._events.get(self._normalize(key))


__all__ = ["KeyBinding", "KeyBindingRegistry"]
