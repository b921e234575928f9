"""Navigation engine behavior driven through abstract input events.

Directory listing and process launching are replaced with in-memory fakes so
these tests never touch a terminal or spawn children (except where a real
temporary directory is needed for goto path resolution).
"""

from __future__ import annotations

import tempfile
import unittest
from pathlib import Path
from unittest import mock

from fxbrowser.engine import NavigationEngine, compile_search_pattern
from fxbrowser.entries import Entry, EntryKind
from fxbrowser.errors import DirectoryReadError, ExecError, PatternError
from fxbrowser.events import Action, InputEvent
from fxbrowser.messages import ERROR, INFO, WARN, StatusMessage
from fxbrowser.prompt import PromptKind
from fxbrowser.runtime.config import BrowserConfig

ROOT = Path("/work")


def _dir(name: str) -> Entry:
    return Entry(name, EntryKind.DIRECTORY)


def _file(name: str) -> Entry:
    return Entry(name, EntryKind.FILE, size=1)


class FakeFilesystem:
    """Maps directories to listings and records every listing call."""

    def __init__(self, tree: dict[Path, list[Entry]]) -> None:
        self.tree = tree
        self.calls: list[tuple[Path, bool]] = []

    def __call__(self, directory: Path, show_hidden: bool) -> list[Entry]:
        self.calls.append((directory, show_hidden))
        if directory not in self.tree:
            raise DirectoryReadError(directory, "Permission denied")
        entries = self.tree[directory]
        if not show_hidden:
            entries = [entry for entry in entries if not entry.name.startswith(".")]
        return list(entries)


def _engine(
    tree: dict[Path, list[Entry]] | None = None,
    *,
    visible_rows: int = 16,
    padding: int = 2,
    config: BrowserConfig | None = None,
    run_command_fn=None,
    open_file_fn=None,
    home: Path | None = ROOT,
) -> tuple[NavigationEngine, FakeFilesystem]:
    if tree is None:
        tree = {
            ROOT: [_dir("dirA"), _file("file1.txt"), _file("file2.md")],
            ROOT / "dirA": [_file("inner.txt")],
            Path("/"): [_dir("work")],
        }
    fs = FakeFilesystem(tree)
    engine = NavigationEngine(
        ROOT,
        config,
        visible_rows,
        padding=padding,
        list_directory_fn=fs,
        run_command_fn=run_command_fn or mock.Mock(return_value=""),
        open_file_fn=open_file_fn or mock.Mock(),
        home_directory_fn=lambda: home,
    )
    engine.load()
    return engine, fs


def _type(engine: NavigationEngine, kind: PromptKind, text: str) -> None:
    engine.handle(InputEvent(Action.OPEN_PROMPT, prompt=kind))
    for ch in text:
        engine.handle(InputEvent(Action.PROMPT_INSERT, text=ch))
    engine.handle(InputEvent(Action.PROMPT_COMMIT))


def _names(engine: NavigationEngine) -> list[str]:
    return [entry.name for entry in engine.entries]


class MovementTests(unittest.TestCase):
    def test_scenario_small_viewport_reveals_last_entry(self) -> None:
        tree = {ROOT: [_dir("dirA"), _dir("dirB"), _file("file1.txt"), _file("file2.md")]}
        engine, _fs = _engine(tree, visible_rows=2, padding=0)

        for _ in range(3):
            engine.handle(InputEvent(Action.MOVE_DOWN))

        frame = engine.describe()
        self.assertEqual(engine.viewport.cursor, 3)
        self.assertGreaterEqual(engine.viewport.offset, 1)
        self.assertIn("file2.md", [row.entry.name for row in frame.rows])

    def test_jump_bottom_and_top(self) -> None:
        engine, _fs = _engine()

        engine.handle(InputEvent(Action.JUMP_BOTTOM))
        self.assertEqual(engine.current_entry().name, "file2.md")
        engine.handle(InputEvent(Action.JUMP_TOP))
        self.assertEqual(engine.viewport.position, (0, 0))

    def test_resize_recomputes_capacity(self) -> None:
        engine, _fs = _engine()

        engine.resize(12)

        self.assertEqual(engine.viewport.visible_rows, 4)


class DirectoryChangeTests(unittest.TestCase):
    def test_entering_directory_resets_state(self) -> None:
        engine, _fs = _engine()
        engine.handle(InputEvent(Action.MOVE_DOWN))
        engine.handle(InputEvent(Action.TOGGLE_SELECTION))
        engine.handle(InputEvent(Action.JUMP_TOP))

        engine.handle(InputEvent(Action.GO_CHILD))

        self.assertEqual(engine.path, ROOT / "dirA")
        self.assertEqual(_names(engine), ["inner.txt"])
        self.assertEqual(len(engine.selection), 0)
        self.assertEqual(engine.viewport.position, (0, 0))
        self.assertIsNone(engine.message)

    def test_go_parent_lists_parent(self) -> None:
        engine, _fs = _engine()

        engine.handle(InputEvent(Action.GO_PARENT))

        self.assertEqual(engine.path, Path("/"))
        self.assertEqual(_names(engine), ["work"])

    def test_go_parent_at_root_is_noop(self) -> None:
        engine, fs = _engine()
        engine.handle(InputEvent(Action.GO_PARENT))
        calls = len(fs.calls)

        engine.handle(InputEvent(Action.GO_PARENT))

        self.assertEqual(len(fs.calls), calls)

    def test_unreadable_directory_keeps_previous_state(self) -> None:
        tree = {ROOT: [_dir("locked"), _file("a.txt")]}
        engine, _fs = _engine(tree)
        engine.handle(InputEvent(Action.SELECT_ALL))

        engine.handle(InputEvent(Action.GO_CHILD))

        self.assertEqual(engine.path, ROOT)
        self.assertEqual(len(engine.selection), 2)
        self.assertEqual(engine.message.level, ERROR)
        self.assertIn("Permission denied", engine.message.text)

    def test_go_home(self) -> None:
        engine, _fs = _engine(home=ROOT / "dirA")

        engine.handle(InputEvent(Action.GO_HOME))

        self.assertEqual(engine.path, ROOT / "dirA")

    def test_go_home_without_home_directory_reports_error(self) -> None:
        engine, _fs = _engine(home=None)

        engine.handle(InputEvent(Action.GO_HOME))

        self.assertEqual(engine.path, ROOT)
        self.assertEqual(engine.message.text, "Unable to determine home directory!")

    def test_toggle_dotfiles_relists_current_directory(self) -> None:
        tree = {ROOT: [_file(".hidden"), _file("shown")]}
        engine, fs = _engine(tree)
        self.assertEqual(_names(engine), [".hidden", "shown"])

        engine.handle(InputEvent(Action.TOGGLE_DOTFILES))

        self.assertFalse(engine.show_dotfiles)
        self.assertEqual(_names(engine), ["shown"])
        self.assertEqual(fs.calls[-1], (ROOT, False))

    def test_dotfiles_setting_reverts_when_relist_fails(self) -> None:
        engine, fs = _engine()
        del fs.tree[ROOT]

        engine.handle(InputEvent(Action.TOGGLE_DOTFILES))

        self.assertTrue(engine.show_dotfiles)
        self.assertEqual(engine.message.level, ERROR)

    def test_refresh_preserves_position_and_clears_selection(self) -> None:
        tree = {ROOT: [_file(f"f{i}") for i in range(40)]}
        engine, fs = _engine(tree, visible_rows=10)
        for _ in range(20):
            engine.handle(InputEvent(Action.MOVE_DOWN))
        engine.handle(InputEvent(Action.TOGGLE_SELECTION))
        before = engine.viewport.position

        engine.handle(InputEvent(Action.REFRESH))

        self.assertEqual(engine.viewport.position, before)
        self.assertEqual(len(engine.selection), 0)
        self.assertIsNone(engine.message)

        fs.tree[ROOT] = [_file("only")]
        engine.handle(InputEvent(Action.REFRESH))
        self.assertEqual(engine.viewport.position, (0, 0))

    def test_goto_resolves_relative_to_current_directory(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            base = Path(tmp).resolve()
            (base / "sub").mkdir()
            tree = {base: [_dir("sub")], base / "sub": [_file("x")]}
            fs = FakeFilesystem(tree)
            engine = NavigationEngine(base, list_directory_fn=fs, home_directory_fn=lambda: base)
            engine.load()

            _type(engine, PromptKind.GOTO, "sub")

        self.assertEqual(engine.path, base / "sub")
        self.assertEqual(_names(engine), ["x"])
        self.assertEqual(engine.history.entries(PromptKind.GOTO), ["sub"])

    def test_goto_invalid_path_reports_error(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            base = Path(tmp).resolve()
            fs = FakeFilesystem({base: [_file("x")]})
            engine = NavigationEngine(base, list_directory_fn=fs, home_directory_fn=lambda: base)
            engine.load()

            engine.handle(InputEvent(Action.OPEN_PROMPT, prompt=PromptKind.GOTO))
            engine.handle(InputEvent(Action.PROMPT_INSERT, text="does-not-exist"))
            engine.handle(InputEvent(Action.PROMPT_COMMIT))

        self.assertEqual(engine.path, base)
        self.assertEqual(engine.message.text, "Invalid path!")
        self.assertEqual(engine.mode, "normal")


class SelectionAndSearchTests(unittest.TestCase):
    def test_search_selects_matches_and_jumps_to_first(self) -> None:
        engine, _fs = _engine()

        _type(engine, PromptKind.SEARCH, "^file")

        self.assertEqual(engine.selection.sorted_indices(), [1, 2])
        self.assertEqual(engine.viewport.cursor, 1)
        self.assertEqual(engine.message.text, "2 entries selected")

    def test_invalid_pattern_leaves_selection_unchanged(self) -> None:
        engine, _fs = _engine()
        engine.handle(InputEvent(Action.TOGGLE_SELECTION))

        _type(engine, PromptKind.SEARCH, "(")

        self.assertEqual(engine.selection.sorted_indices(), [0])
        self.assertEqual(engine.message.level, ERROR)
        self.assertEqual(engine.message.text, "Invalid search pattern!")

    def test_search_without_matches_clears_selection_and_warns(self) -> None:
        engine, _fs = _engine()
        engine.handle(InputEvent(Action.SELECT_ALL))

        engine.search("nothing-matches")

        self.assertEqual(len(engine.selection), 0)
        self.assertEqual(engine.message.level, WARN)

    def test_toggle_select_all_and_clear_report_counts(self) -> None:
        engine, _fs = _engine()

        engine.handle(InputEvent(Action.TOGGLE_SELECTION))
        self.assertEqual(engine.message.text, "1 entry selected")
        engine.handle(InputEvent(Action.SELECT_ALL))
        self.assertEqual(engine.message.text, "3 entries selected")
        engine.handle(InputEvent(Action.CLEAR_SELECTION))
        self.assertIsNone(engine.message)

    def test_next_and_prev_selected_jumps(self) -> None:
        engine, _fs = _engine()
        engine.search("txt|md")

        engine.handle(InputEvent(Action.JUMP_NEXT_SELECTED))
        self.assertEqual(engine.viewport.cursor, 2)
        engine.handle(InputEvent(Action.JUMP_NEXT_SELECTED))
        self.assertEqual(engine.viewport.cursor, 1)
        engine.handle(InputEvent(Action.JUMP_PREV_SELECTED))
        self.assertEqual(engine.viewport.cursor, 2)

    def test_compile_search_pattern_raises_pattern_error(self) -> None:
        with self.assertRaises(PatternError) as ctx:
            compile_search_pattern("[a-")
        self.assertEqual(ctx.exception.pattern, "[a-")


class PromptModeTests(unittest.TestCase):
    def test_prompt_mode_ignores_navigation_events(self) -> None:
        engine, _fs = _engine()
        engine.handle(InputEvent(Action.OPEN_PROMPT, prompt=PromptKind.SEARCH))

        engine.handle(InputEvent(Action.MOVE_DOWN))
        quit_requested = engine.handle(InputEvent(Action.QUIT))

        self.assertFalse(quit_requested)
        self.assertEqual(engine.mode, "prompt")
        self.assertEqual(engine.viewport.cursor, 0)

    def test_normal_mode_ignores_prompt_editing(self) -> None:
        engine, _fs = _engine()

        engine.handle(InputEvent(Action.PROMPT_INSERT, text="x"))
        engine.handle(InputEvent(Action.PROMPT_COMMIT))

        self.assertIsNone(engine.prompt)
        self.assertEqual(len(engine.history), 0)

    def test_cancel_discards_prompt_without_history(self) -> None:
        engine, _fs = _engine()
        engine.handle(InputEvent(Action.OPEN_PROMPT, prompt=PromptKind.EXEC))
        engine.handle(InputEvent(Action.PROMPT_INSERT, text="ls"))

        engine.handle(InputEvent(Action.PROMPT_CANCEL))

        self.assertEqual(engine.mode, "normal")
        self.assertEqual(len(engine.history), 0)

    def test_empty_commit_closes_prompt_and_does_nothing(self) -> None:
        engine, fs = _engine()
        calls = len(fs.calls)

        _type(engine, PromptKind.GOTO, "")

        self.assertEqual(engine.mode, "normal")
        self.assertEqual(len(fs.calls), calls)
        self.assertEqual(len(engine.history), 0)

    def test_history_recalls_previous_search(self) -> None:
        engine, _fs = _engine()
        _type(engine, PromptKind.SEARCH, "md$")

        engine.handle(InputEvent(Action.OPEN_PROMPT, prompt=PromptKind.SEARCH))
        engine.handle(InputEvent(Action.PROMPT_HISTORY_PREV))

        self.assertEqual(engine.prompt.buffer, "md$")

    def test_header_shows_prompt_and_cursor_column(self) -> None:
        engine, _fs = _engine()
        self.assertEqual(engine.header_line(), (str(ROOT), None))

        engine.handle(InputEvent(Action.OPEN_PROMPT, prompt=PromptKind.SEARCH))
        engine.handle(InputEvent(Action.PROMPT_INSERT, text="ab"))
        engine.handle(InputEvent(Action.PROMPT_LEFT))

        self.assertEqual(engine.header_line(), ("search:ab", len("search:") + 1))
        self.assertFalse(any(row.is_cursor for row in engine.describe().rows))

    def test_quit_in_normal_mode(self) -> None:
        engine, _fs = _engine()
        self.assertTrue(engine.handle(InputEvent(Action.QUIT)))


class ExecTests(unittest.TestCase):
    def test_output_is_shown_until_closed_then_refreshes(self) -> None:
        run = mock.Mock(return_value="line one\nline two\n")
        engine, fs = _engine(run_command_fn=run)

        _type(engine, PromptKind.EXEC, "ls -1")

        run.assert_called_once_with("ls -1", ROOT)
        self.assertEqual(engine.mode, "output")
        self.assertEqual(engine.describe().output_lines, ("line one", "line two"))

        engine.handle(InputEvent(Action.MOVE_DOWN))
        self.assertEqual(engine.mode, "output")

        calls = len(fs.calls)
        engine.handle(InputEvent(Action.CLOSE_OUTPUT))
        self.assertEqual(engine.mode, "normal")
        self.assertEqual(len(fs.calls), calls + 1)

    def test_silent_command_refreshes_and_reports(self) -> None:
        engine, fs = _engine()
        calls = len(fs.calls)

        engine.execute("touch new.txt")

        self.assertEqual(len(fs.calls), calls + 1)
        self.assertEqual(engine.message, StatusMessage("Command finished without output", INFO))
        self.assertEqual(engine.mode, "normal")

    def test_failed_command_reports_reason_and_shows_stderr(self) -> None:
        run = mock.Mock(side_effect=ExecError("false", "exit status 1", returncode=1, output="boom\n"))
        engine, _fs = _engine(run_command_fn=run)

        engine.execute("false")

        self.assertEqual(engine.message.text, "Failed to execute! Reason: exit status 1")
        self.assertEqual(engine.output, "boom\n")

    def test_failed_launch_without_output_stays_in_normal_mode(self) -> None:
        run = mock.Mock(side_effect=ExecError("nope", "No such file or directory"))
        engine, _fs = _engine(run_command_fn=run)

        engine.execute("nope")

        self.assertEqual(engine.mode, "normal")
        self.assertEqual(engine.message.level, ERROR)


class OpenEntryTests(unittest.TestCase):
    def test_open_file_uses_extension_app(self) -> None:
        opener = mock.Mock()
        config = BrowserConfig(default_app="less", apps={"vim": ("txt",)})
        engine, _fs = _engine(config=config, open_file_fn=opener)
        engine.handle(InputEvent(Action.MOVE_DOWN))

        engine.handle(InputEvent(Action.OPEN_ENTRY))

        opener.assert_called_once_with("vim", ROOT / "file1.txt")

    def test_open_file_falls_back_to_default_app(self) -> None:
        opener = mock.Mock()
        config = BrowserConfig(default_app="less", apps={"vim": ("txt",)})
        engine, _fs = _engine(config=config, open_file_fn=opener)
        engine.handle(InputEvent(Action.JUMP_BOTTOM))

        engine.handle(InputEvent(Action.GO_CHILD))

        opener.assert_called_once_with("less", ROOT / "file2.md")

    def test_open_without_app_warns(self) -> None:
        opener = mock.Mock()
        engine, _fs = _engine(open_file_fn=opener)
        engine.handle(InputEvent(Action.MOVE_DOWN))

        engine.handle(InputEvent(Action.OPEN_ENTRY))

        opener.assert_not_called()
        self.assertEqual(engine.message.text, "No app for given file extension specified!")

    def test_open_failure_becomes_status_message(self) -> None:
        opener = mock.Mock(side_effect=ExecError("vim", "exit status 1", returncode=1))
        engine, _fs = _engine(config=BrowserConfig(default_app="vim"), open_file_fn=opener)
        engine.handle(InputEvent(Action.MOVE_DOWN))

        engine.handle(InputEvent(Action.OPEN_ENTRY))

        self.assertEqual(engine.message.text, "Unable to open file!")
        self.assertEqual(engine.path, ROOT)

    def test_open_entry_on_directory_warns(self) -> None:
        engine, _fs = _engine(config=BrowserConfig(default_app="vim"))

        engine.handle(InputEvent(Action.OPEN_ENTRY))

        self.assertEqual(engine.message.text, "Entry is not a file!")


class DescribeTests(unittest.TestCase):
    def test_status_line_pads_position(self) -> None:
        tree = {ROOT: [_file(f"f{i}") for i in range(12)]}
        engine, _fs = _engine(tree)
        engine.handle(InputEvent(Action.TOGGLE_SELECTION))

        self.assertEqual(engine.status_line(), "01/12   1 sel")

    def test_status_line_for_empty_directory(self) -> None:
        engine, _fs = _engine({ROOT: []})

        self.assertEqual(engine.status_line(), "0/0   0 sel")
        self.assertEqual(engine.describe().rows, ())

    def test_frame_marks_cursor_and_selection(self) -> None:
        engine, _fs = _engine()
        engine.handle(InputEvent(Action.MOVE_DOWN))
        engine.handle(InputEvent(Action.TOGGLE_SELECTION))

        rows = engine.describe().rows

        self.assertEqual([row.is_cursor for row in rows], [False, True, False])
        self.assertEqual([row.is_selected for row in rows], [False, True, False])


if __name__ == "__main__":
    unittest.main()
