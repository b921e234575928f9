"""Per-mode key maps that turn key tokens into engine events."""

from __future__ import annotations

from ..events import Action, InputEvent
from ..prompt import PromptKind
from .key_registry import KeyBinding, KeyBindingRegistry

# Keys that complete a ``g`` prefix.
G_PREFIX = "g"
G_PREFIX_EVENTS: dict[str, InputEvent] = {
    "g": InputEvent(Action.JUMP_TOP),
    "e": InputEvent(Action.JUMP_BOTTOM),
}

NORMAL_BINDINGS: tuple[KeyBinding, ...] = (
    KeyBinding(("q", "CTRL_C"), InputEvent(Action.QUIT)),
    KeyBinding(("j", "DOWN"), InputEvent(Action.MOVE_DOWN)),
    KeyBinding(("k", "UP"), InputEvent(Action.MOVE_UP)),
    KeyBinding(("h", "LEFT"), InputEvent(Action.GO_PARENT)),
    KeyBinding(("l", "RIGHT"), InputEvent(Action.GO_CHILD)),
    KeyBinding(("G", "END"), InputEvent(Action.JUMP_BOTTOM)),
    KeyBinding(("HOME",), InputEvent(Action.JUMP_TOP)),
    KeyBinding(("n",), InputEvent(Action.JUMP_NEXT_SELECTED)),
    KeyBinding(("N",), InputEvent(Action.JUMP_PREV_SELECTED)),
    KeyBinding(("~",), InputEvent(Action.GO_HOME)),
    KeyBinding((".",), InputEvent(Action.TOGGLE_DOTFILES)),
    KeyBinding(("x",), InputEvent(Action.TOGGLE_SELECTION)),
    KeyBinding(("%",), InputEvent(Action.SELECT_ALL)),
    KeyBinding(("X",), InputEvent(Action.CLEAR_SELECTION)),
    KeyBinding(("/",), InputEvent(Action.OPEN_PROMPT, prompt=PromptKind.SEARCH)),
    KeyBinding(("t",), InputEvent(Action.OPEN_PROMPT, prompt=PromptKind.GOTO)),
    KeyBinding(("!",), InputEvent(Action.OPEN_PROMPT, prompt=PromptKind.EXEC)),
    KeyBinding(("r",), InputEvent(Action.REFRESH)),
    KeyBinding(("ENTER",), InputEvent(Action.OPEN_ENTRY)),
)

PROMPT_BINDINGS: tuple[KeyBinding, ...] = (
    KeyBinding(("ESC", "CTRL_C"), InputEvent(Action.PROMPT_CANCEL)),
    KeyBinding(("ENTER",), InputEvent(Action.PROMPT_COMMIT)),
    KeyBinding(("BACKSPACE",), InputEvent(Action.PROMPT_DELETE_BEFORE)),
    KeyBinding(("DELETE",), InputEvent(Action.PROMPT_DELETE_AT)),
    KeyBinding(("LEFT",), InputEvent(Action.PROMPT_LEFT)),
    KeyBinding(("RIGHT",), InputEvent(Action.PROMPT_RIGHT)),
    KeyBinding(("HOME", "CTRL_A"), InputEvent(Action.PROMPT_HOME)),
    KeyBinding(("END", "CTRL_E"), InputEvent(Action.PROMPT_END)),
    KeyBinding(("UP",), InputEvent(Action.PROMPT_HISTORY_PREV)),
    KeyBinding(("DOWN",), InputEvent(Action.PROMPT_HISTORY_NEXT)),
)

OUTPUT_BINDINGS: tuple[KeyBinding, ...] = (
    KeyBinding(("q", "ESC", "ENTER"), InputEvent(Action.CLOSE_OUTPUT)),
    KeyBinding(("CTRL_C",), InputEvent(Action.QUIT)),
)


class KeyTranslator:
    """Translate key tokens for the engine mode, tracking the pending ``g`` prefix."""

    def __init__(self) -> None:
        self.pending_prefix = ""
        self._registries: dict[str, KeyBindingRegistry] = {
            "normal": KeyBindingRegistry().register_bindings(*NORMAL_BINDINGS),
            "prompt": KeyBindingRegistry().register_bindings(*PROMPT_BINDINGS),
            "output": KeyBindingRegistry().register_bindings(*OUTPUT_BINDINGS),
        }

    def translate(self, key: str, mode: str) -> InputEvent | None:
        """Return the event for ``key`` in ``mode``; ``None`` when nothing should happen."""
        if not key:
            return None
        if mode == "normal":
            return self._translate_normal(key)
        self.pending_prefix = ""
        event = self._registries[mode].resolve(key)
        if event is not None:
            return event
        if mode == "prompt" and len(key) == 1 and key.isprintable():
            return InputEvent(Action.PROMPT_INSERT, text=key)
        return None

    def _translate_normal(self, key: str) -> InputEvent | None:
        if self.pending_prefix == G_PREFIX:
            self.pending_prefix = ""
            return G_PREFIX_EVENTS.get(key)
        if key == G_PREFIX:
            self.pending_prefix = G_PREFIX
            return None
        return self._registries["normal"].resolve(key)


__all__ = [
    "G_PREFIX",
    "NORMAL_BINDINGS",
    "OUTPUT_BINDINGS",
    "PROMPT_BINDINGS",
    "KeyTranslator",
]
