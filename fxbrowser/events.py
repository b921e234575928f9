"""Abstract input events consumed by the navigation engine.

Key decoding lives in :mod:`fxbrowser.input`; the engine only sees these.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum, auto

from .prompt import PromptKind


class Action(Enum):
    MOVE_UP = auto()
    MOVE_DOWN = auto()
    JUMP_TOP = auto()
    JUMP_BOTTOM = auto()
    JUMP_NEXT_SELECTED = auto()
    JUMP_PREV_SELECTED = auto()
    GO_PARENT = auto()
    GO_CHILD = auto()
    GO_HOME = auto()
    GOTO_PATH = auto()
    TOGGLE_DOTFILES = auto()
    REFRESH = auto()
    TOGGLE_SELECTION = auto()
    SELECT_ALL = auto()
    CLEAR_SELECTION = auto()
    OPEN_PROMPT = auto()
    PROMPT_INSERT = auto()
    PROMPT_DELETE_BEFORE = auto()
    PROMPT_DELETE_AT = auto()
    PROMPT_LEFT = auto()
    PROMPT_RIGHT = auto()
    PROMPT_HOME = auto()
    PROMPT_END = auto()
    PROMPT_HISTORY_PREV = auto()
    PROMPT_HISTORY_NEXT = auto()
    PROMPT_COMMIT = auto()
    PROMPT_CANCEL = auto()
    OPEN_ENTRY = auto()
    CLOSE_OUTPUT = auto()
    QUIT = auto()


@dataclass(frozen=True)
class InputEvent:
    """One decoded user intent.

    ``text`` carries inserted characters for ``PROMPT_INSERT`` and the target
    for ``GOTO_PATH``; ``prompt`` names the prompt for ``OPEN_PROMPT``.
    """

    action: Action
    text: str = ""
    prompt: PromptKind | None = None


__all__ = ["Action", "InputEvent"]
