"""Navigation engine: owns all browser state and applies input events.

The engine is the only writer of the entry list, selection, viewport and
prompt. Collaborators that touch the outside world (directory listing,
process launching) are injected so tests can drive the engine without a
terminal or real child processes.
"""

from __future__ import annotations

import logging
import re
from collections.abc import Callable
from dataclasses import dataclass
from pathlib import Path
from typing import assert_never

from .columns import Column, columns_for_names
from .entries import Entry, expand_user_path, home_directory, list_directory
from .errors import DirectoryReadError, ExecError, PathError, PatternError
from .events import Action, InputEvent
from .launcher import open_with_app, run_command
from .messages import StatusMessage
from .prompt import PromptEditor, PromptHistory, PromptKind
from .runtime.config import BrowserConfig
from .selection import SelectionSet, selection_message
from .viewport import PADDING, ViewportController, visible_rows_for_height

logger = logging.getLogger(__name__)

_PROMPT_ACTIONS = frozenset(
    {
        Action.PROMPT_INSERT,
        Action.PROMPT_DELETE_BEFORE,
        Action.PROMPT_DELETE_AT,
        Action.PROMPT_LEFT,
        Action.PROMPT_RIGHT,
        Action.PROMPT_HOME,
        Action.PROMPT_END,
        Action.PROMPT_HISTORY_PREV,
        Action.PROMPT_HISTORY_NEXT,
        Action.PROMPT_COMMIT,
        Action.PROMPT_CANCEL,
    }
)
_OUTPUT_ACTIONS = frozenset({Action.CLOSE_OUTPUT, Action.QUIT})


@dataclass(frozen=True)
class VisibleRow:
    """One rendered entry row."""

    index: int
    entry: Entry
    is_cursor: bool
    is_selected: bool


@dataclass(frozen=True)
class RenderFrame:
    """Everything the renderer needs to draw one screen."""

    header_line: str
    prompt_cursor: int | None
    columns: tuple[Column, ...]
    rows: tuple[VisibleRow, ...]
    status_line: str
    message: StatusMessage | None
    output_lines: tuple[str, ...] | None = None


def compile_search_pattern(pattern: str) -> re.Pattern[str]:
    """Compile a search prompt, raising ``PatternError`` when it is not a valid regex."""
    try:
        return re.compile(pattern)
    except re.error as exc:
        raise PatternError(pattern, str(exc)) from exc


class NavigationEngine:
    """Browser state plus the handlers for every ``Action``."""

    def __init__(
        self,
        path: Path,
        config: BrowserConfig | None = None,
        visible_rows: int = 16,
        *,
        padding: int = PADDING,
        list_directory_fn: Callable[[Path, bool], list[Entry]] = list_directory,
        run_command_fn: Callable[[str, Path], str] = run_command,
        open_file_fn: Callable[[str, Path], None] | None = None,
        home_directory_fn: Callable[[], Path | None] = home_directory,
    ) -> None:
        self.config = config if config is not None else BrowserConfig()
        self.path = path
        self.show_dotfiles = self.config.show_dotfiles
        self.columns: tuple[Column, ...] = tuple(columns_for_names(self.config.columns))
        self.entries: list[Entry] = []
        self.selection = SelectionSet()
        self.viewport = ViewportController(visible_rows, padding=padding)
        self.history = PromptHistory()
        self.prompt: PromptEditor | None = None
        self.message: StatusMessage | None = None
        self.output: str | None = None
        self._list_directory = list_directory_fn
        self._run_command = run_command_fn
        self._open_file = open_file_fn if open_file_fn is not None else _open_without_tui
        self._home_directory = home_directory_fn
        self._handlers: dict[Action, Callable[[InputEvent], bool | None]] = {
            Action.MOVE_UP: lambda _event: self.move_up(),
            Action.MOVE_DOWN: lambda _event: self.move_down(),
            Action.JUMP_TOP: lambda _event: self.jump_to_top(),
            Action.JUMP_BOTTOM: lambda _event: self.jump_to_bottom(),
            Action.JUMP_NEXT_SELECTED: lambda _event: self.jump_to_selection(1),
            Action.JUMP_PREV_SELECTED: lambda _event: self.jump_to_selection(-1),
            Action.GO_PARENT: lambda _event: self.go_parent(),
            Action.GO_CHILD: lambda _event: self.go_child(),
            Action.GO_HOME: lambda _event: self.go_home(),
            Action.GOTO_PATH: lambda event: self.goto(event.text),
            Action.TOGGLE_DOTFILES: lambda _event: self.toggle_dotfiles(),
            Action.REFRESH: lambda _event: self.refresh(),
            Action.TOGGLE_SELECTION: lambda _event: self.toggle_selection(),
            Action.SELECT_ALL: lambda _event: self.select_all(),
            Action.CLEAR_SELECTION: lambda _event: self.clear_selection(),
            Action.OPEN_PROMPT: self._open_prompt_event,
            Action.PROMPT_INSERT: lambda event: self._edit_prompt(lambda p: p.insert(event.text)),
            Action.PROMPT_DELETE_BEFORE: lambda _event: self._edit_prompt(PromptEditor.delete_before),
            Action.PROMPT_DELETE_AT: lambda _event: self._edit_prompt(PromptEditor.delete_at),
            Action.PROMPT_LEFT: lambda _event: self._edit_prompt(PromptEditor.move_left),
            Action.PROMPT_RIGHT: lambda _event: self._edit_prompt(PromptEditor.move_right),
            Action.PROMPT_HOME: lambda _event: self._edit_prompt(PromptEditor.move_home),
            Action.PROMPT_END: lambda _event: self._edit_prompt(PromptEditor.move_end),
            Action.PROMPT_HISTORY_PREV: lambda _event: self._edit_prompt(PromptEditor.history_prev),
            Action.PROMPT_HISTORY_NEXT: lambda _event: self._edit_prompt(PromptEditor.history_next),
            Action.PROMPT_COMMIT: lambda _event: self.commit_prompt(),
            Action.PROMPT_CANCEL: lambda _event: self.cancel_prompt(),
            Action.OPEN_ENTRY: lambda _event: self.open_current_entry(),
            Action.CLOSE_OUTPUT: lambda _event: self.close_output(),
            Action.QUIT: lambda _event: True,
        }

    # -- state queries -----------------------------------------------------

    @property
    def mode(self) -> str:
        if self.output is not None:
            return "output"
        if self.prompt is not None:
            return "prompt"
        return "normal"

    def current_entry(self) -> Entry | None:
        index = self.viewport.current_index()
        if index is None:
            return None
        return self.entries[index]

    # -- event dispatch ----------------------------------------------------

    def handle(self, event: InputEvent) -> bool:
        """Apply ``event`` and return ``True`` when the browser should quit.

        Events that do not belong to the current mode are ignored: only prompt
        editing reaches an open prompt, and only dismiss/quit reach the exec
        output view.
        """
        mode = self.mode
        if mode == "output" and event.action not in _OUTPUT_ACTIONS:
            return False
        if mode == "prompt" and event.action not in _PROMPT_ACTIONS:
            return False
        if mode == "normal" and event.action in _PROMPT_ACTIONS:
            return False
        handler = self._handlers.get(event.action)
        if handler is None:
            return False
        return bool(handler(event))

    def resize(self, term_lines: int) -> None:
        self.viewport.resize(visible_rows_for_height(term_lines))

    # -- directory changes -------------------------------------------------

    def load(self) -> None:
        """Read the starting directory; failures propagate to the caller."""
        entries = self._list_directory(self.path, self.show_dotfiles)
        self._replace_entries(entries, preserve_position=False)

    def _replace_entries(self, entries: list[Entry], *, preserve_position: bool) -> None:
        self.entries = entries
        self.selection.reset(len(entries))
        if preserve_position:
            self.viewport.refresh(len(entries))
        else:
            self.viewport.reset(len(entries))

    def _read_into(self, target: Path, *, preserve_position: bool = False) -> bool:
        """List ``target`` and swap it in, keeping prior state when listing fails."""
        try:
            entries = self._list_directory(target, self.show_dotfiles)
        except DirectoryReadError as exc:
            logger.warning("cannot enter %s: %s", target, exc.reason)
            self.message = StatusMessage.error(str(exc))
            return False
        if target != self.path:
            logger.info("changed directory to %s", target)
        self.path = target
        self._replace_entries(entries, preserve_position=preserve_position)
        self.message = None
        return True

    def go_parent(self) -> None:
        parent = self.path.parent
        if parent == self.path:
            return
        self._read_into(parent)

    def go_child(self) -> None:
        """Enter the directory under the cursor; non-directories are opened."""
        entry = self.current_entry()
        if entry is None:
            return
        target = self.path / entry.name
        if entry.is_dir or (entry.is_symlink and target.is_dir()):
            self._read_into(target)
            return
        self._open_entry_file(entry)

    def go_home(self) -> None:
        home = self._home_directory()
        if home is None:
            self.message = StatusMessage.error("Unable to determine home directory!")
            return
        self._read_into(home)

    def goto(self, raw_path: str) -> None:
        if not raw_path:
            return
        try:
            target = expand_user_path(raw_path, self.path)
        except PathError as exc:
            logger.info("goto rejected: %s", exc)
            self.message = StatusMessage.error("Invalid path!")
            return
        self._read_into(target)

    def toggle_dotfiles(self) -> None:
        self.show_dotfiles = not self.show_dotfiles
        if not self._read_into(self.path):
            self.show_dotfiles = not self.show_dotfiles

    def refresh(self) -> None:
        self._read_into(self.path, preserve_position=True)

    # -- cursor movement ---------------------------------------------------

    def move_up(self) -> None:
        self.viewport.move_up()

    def move_down(self) -> None:
        self.viewport.move_down()

    def jump_to_top(self) -> None:
        self.viewport.jump_to_top()

    def jump_to_bottom(self) -> None:
        self.viewport.jump_to_bottom()

    def jump_to_selection(self, direction: int) -> None:
        self.viewport.jump_to_selection(self.selection, direction)

    # -- selection ---------------------------------------------------------

    def _selection_changed(self) -> None:
        text = selection_message(len(self.selection))
        self.message = StatusMessage.info(text) if text is not None else None

    def toggle_selection(self) -> None:
        index = self.viewport.current_index()
        if index is None:
            return
        self.selection.toggle(index)
        self._selection_changed()

    def select_all(self) -> None:
        if not self.entries:
            return
        self.selection.select_all()
        self._selection_changed()

    def clear_selection(self) -> None:
        self.selection.clear()
        self._selection_changed()

    def search(self, pattern: str) -> None:
        """Select every entry whose name matches ``pattern`` and jump to the first."""
        if not pattern:
            return
        try:
            regex = compile_search_pattern(pattern)
        except PatternError as exc:
            logger.info("%s", exc)
            self.message = StatusMessage.error("Invalid search pattern!")
            return
        matches = [index for index, entry in enumerate(self.entries) if regex.search(entry.name)]
        self.selection.replace(matches)
        if not matches:
            self.message = StatusMessage.warn("No matching entries")
            return
        self.viewport.jump_to_first_selected(self.selection)
        self._selection_changed()

    # -- prompt ------------------------------------------------------------

    def open_prompt(self, kind: PromptKind) -> None:
        if self.prompt is not None:
            return
        self.prompt = PromptEditor(kind, self.history)

    def _open_prompt_event(self, event: InputEvent) -> None:
        if event.prompt is not None:
            self.open_prompt(event.prompt)

    def _edit_prompt(self, edit: Callable[[PromptEditor], None]) -> None:
        if self.prompt is not None:
            edit(self.prompt)

    def cancel_prompt(self) -> None:
        if self.prompt is None:
            return
        self.prompt.cancel()
        self.prompt = None

    def commit_prompt(self) -> None:
        """Close the prompt, record its text, and run the matching command."""
        prompt = self.prompt
        if prompt is None:
            return
        text = prompt.commit()
        self.prompt = None
        if not text:
            return
        logger.debug("%s prompt committed: %r", prompt.kind.value, text)
        kind = prompt.kind
        if kind is PromptKind.SEARCH:
            self.search(text)
        elif kind is PromptKind.GOTO:
            self.goto(text)
        elif kind is PromptKind.EXEC:
            self.execute(text)
        else:
            assert_never(kind)

    # -- external processes ------------------------------------------------

    def execute(self, command_line: str) -> None:
        """Run ``command_line`` in the current directory and show what it printed."""
        try:
            output = self._run_command(command_line, self.path)
        except ExecError as exc:
            logger.warning("%s", exc)
            self.message = StatusMessage.error(f"Failed to execute! Reason: {exc.reason}")
            if exc.output:
                self.output = exc.output
            return
        if output:
            self.output = output
            return
        self.refresh()
        self.message = StatusMessage.info("Command finished without output")

    def close_output(self) -> None:
        if self.output is None:
            return
        self.output = None
        self.refresh()

    def open_current_entry(self) -> None:
        entry = self.current_entry()
        if entry is None:
            return
        if entry.is_dir or (entry.is_symlink and (self.path / entry.name).is_dir()):
            self.message = StatusMessage.warn("Entry is not a file!")
            return
        self._open_entry_file(entry)

    def _open_entry_file(self, entry: Entry) -> None:
        app = self.config.app_for(entry.extension)
        if app is None:
            self.message = StatusMessage.warn("No app for given file extension specified!")
            return
        try:
            self._open_file(app, self.path / entry.name)
        except ExecError as exc:
            logger.warning("%s", exc)
            self.message = StatusMessage.error("Unable to open file!")

    # -- render description ------------------------------------------------

    def header_line(self) -> tuple[str, int | None]:
        """Return header text and, while prompting, the text cursor column in it."""
        if self.prompt is None:
            return str(self.path), None
        prefix = f"{self.prompt.title}:"
        return prefix + self.prompt.buffer, len(prefix) + self.prompt.cursor

    def status_line(self) -> str:
        length = len(self.entries)
        digits = len(str(length))
        position = 0 if length == 0 else self.viewport.cursor + 1
        return f"{position:0>{digits}}/{length}   {len(self.selection)} sel"

    def describe(self) -> RenderFrame:
        header, prompt_cursor = self.header_line()
        cursor = self.viewport.current_index()
        rows = tuple(
            VisibleRow(
                index=index,
                entry=self.entries[index],
                is_cursor=self.prompt is None and index == cursor,
                is_selected=index in self.selection,
            )
            for index in self.viewport.visible_range()
        )
        output_lines = None if self.output is None else tuple(self.output.splitlines())
        return RenderFrame(
            header_line=header,
            prompt_cursor=prompt_cursor,
            columns=self.columns,
            rows=rows,
            status_line=self.status_line(),
            message=self.message,
            output_lines=output_lines,
        )


def _open_without_tui(app: str, target: Path) -> None:
    open_with_app(app, target, lambda: None, lambda: None)


__all__ = [
    "NavigationEngine",
    "RenderFrame",
    "VisibleRow",
    "compile_search_pattern",
]
