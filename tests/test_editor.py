"""Tests for the line editor.

The editor is the input state machine: it turns key events into an
in-progress line, keeps history, completes names on Tab, and submits
lines to the shell on Enter.  A ``RecordingSink`` stands in for the
terminal so every write can be inspected.
"""

from unittest.mock import patch

from py_term.bootloader import Bootloader
from py_term.editor import ERASE_ONE, Key, KeyEvent, LineEditor, RecordingSink
from py_term.shell import Shell

PROMPT = "\r $ "


def _editor() -> tuple[Shell, LineEditor, RecordingSink]:
    """Boot a machine and attach an editor with a recording sink."""
    shell = Shell(machine=Bootloader().boot())
    sink = RecordingSink()
    return shell, LineEditor(shell, sink), sink


def _submit(editor: LineEditor, line: str) -> None:
    """Type *line* and press Enter."""
    editor.feed(line)
    editor.handle_key(KeyEvent(Key.ENTER))


class TestTyping:
    """Verify printable keys and backspace."""

    def test_printable_keys_append_and_echo(self) -> None:
        """Each character is added to the line and echoed."""
        _shell, editor, sink = _editor()
        editor.feed("ls")
        assert editor.line == "ls"
        assert sink.ops == [("write", "l"), ("write", "s")]

    def test_modified_keys_are_ignored(self) -> None:
        """Ctrl and Alt chords are not typed."""
        _shell, editor, sink = _editor()
        editor.handle_key(KeyEvent("c", ctrl=True))
        editor.handle_key(KeyEvent("x", alt=True))
        assert editor.line == ""
        assert sink.ops == []

    def test_named_keys_are_ignored(self) -> None:
        """Multi-character key names that mean nothing here do nothing."""
        _shell, editor, sink = _editor()
        editor.handle_key(KeyEvent("Shift"))
        editor.handle_key(KeyEvent("ArrowLeft"))
        assert editor.line == ""
        assert sink.ops == []

    def test_backspace_drops_last_character(self) -> None:
        """Backspace removes one character and erases it on screen."""
        _shell, editor, sink = _editor()
        editor.feed("ab")
        sink.drain()
        editor.handle_key(KeyEvent(Key.BACKSPACE))
        assert editor.line == "a"
        assert sink.ops == [("write", ERASE_ONE)]

    def test_backspace_on_empty_line(self) -> None:
        """Backspace with nothing typed does nothing."""
        _shell, editor, sink = _editor()
        editor.handle_key(KeyEvent(Key.BACKSPACE))
        assert sink.ops == []


class TestSubmit:
    """Verify Enter."""

    def test_output_is_printed_then_prompt(self) -> None:
        """The result is written line by line, followed by a new prompt."""
        _shell, editor, sink = _editor()
        editor.feed("pwd")
        sink.drain()
        editor.handle_key(KeyEvent(Key.ENTER))
        assert sink.ops == [("writeln", ""), ("writeln", "/home/user"), ("write", PROMPT)]
        assert editor.line == ""

    def test_screen_after_command(self) -> None:
        """The rendered screen looks like a terminal session."""
        _shell, editor, sink = _editor()
        editor.print_prompt()
        _submit(editor, "pwd")
        assert sink.screen() == " $ pwd\n/home/user\n $ "

    def test_history_stores_trimmed_lines(self) -> None:
        """Submitted lines are trimmed before they are remembered."""
        _shell, editor, _sink = _editor()
        _submit(editor, "  ls  ")
        assert editor.history == ["ls"]
        assert editor.history_index == -1

    def test_blank_line_is_not_remembered(self) -> None:
        """Empty and whitespace-only lines skip history and the shell."""
        shell, editor, sink = _editor()
        with patch.object(shell, "execute") as execute:
            _submit(editor, "   ")
            editor.handle_key(KeyEvent(Key.ENTER))
        execute.assert_not_called()
        assert editor.history == []
        assert sink.ops[-1] == ("write", PROMPT)

    def test_output_lines_are_trimmed(self) -> None:
        """Each printed line is stripped of surrounding whitespace."""
        shell, editor, sink = _editor()
        editor.feed("x")
        sink.drain()
        with patch.object(shell, "execute", return_value="  a  \n b"):
            editor.handle_key(KeyEvent(Key.ENTER))
        assert ("writeln", "a") in sink.ops
        assert ("writeln", "b") in sink.ops

    def test_clear_clears_instead_of_printing(self) -> None:
        """The clear sentinel becomes a clear action, never text."""
        _shell, editor, sink = _editor()
        editor.feed("clear")
        sink.drain()
        editor.handle_key(KeyEvent(Key.ENTER))
        assert ("clear", "") in sink.ops
        assert all(Shell.CLEAR_SENTINEL not in text for _op, text in sink.ops)
        assert all(text != "clear" for op, text in sink.ops if op == "writeln")

    def test_shell_crash_prints_generic_error(self) -> None:
        """An exception escaping the shell is caught by the editor."""
        shell, editor, sink = _editor()
        editor.feed("pwd")
        with patch.object(shell, "execute", side_effect=RuntimeError("boom")):
            editor.handle_key(KeyEvent(Key.ENTER))
        assert ("writeln", "\rError executing command") in sink.ops
        assert sink.ops[-1] == ("write", PROMPT)
        assert editor.line == ""

    def test_commands_change_shared_state(self) -> None:
        """Lines submitted through the editor act on the machine."""
        shell, editor, _sink = _editor()
        _submit(editor, "cd documents")
        assert shell.machine.filesystem.current_path == "/home/user/documents"


class TestHistory:
    """Verify ArrowUp / ArrowDown."""

    def test_walk_back_and_forward(self) -> None:
        """Up walks from newest to oldest; Down walks back again."""
        _shell, editor, _sink = _editor()
        for command in ["pwd", "ls", "echo hi"]:
            _submit(editor, command)

        editor.handle_key(KeyEvent(Key.ARROW_UP))
        assert editor.line == "echo hi"
        editor.handle_key(KeyEvent(Key.ARROW_UP))
        assert editor.line == "ls"
        editor.handle_key(KeyEvent(Key.ARROW_UP))
        assert editor.line == "pwd"
        editor.handle_key(KeyEvent(Key.ARROW_DOWN))
        assert editor.line == "ls"

    def test_up_stops_at_oldest(self) -> None:
        """Up past the oldest entry keeps showing it."""
        _shell, editor, _sink = _editor()
        _submit(editor, "pwd")
        editor.handle_key(KeyEvent(Key.ARROW_UP))
        editor.handle_key(KeyEvent(Key.ARROW_UP))
        assert editor.line == "pwd"
        assert editor.history_index == 0

    def test_up_with_no_history(self) -> None:
        """Up does nothing before anything was submitted."""
        _shell, editor, sink = _editor()
        editor.handle_key(KeyEvent(Key.ARROW_UP))
        assert editor.history_index == -1
        assert sink.ops == []

    def test_down_past_newest_empties_line(self) -> None:
        """Down from the newest entry returns to an empty line."""
        _shell, editor, _sink = _editor()
        _submit(editor, "pwd")
        editor.handle_key(KeyEvent(Key.ARROW_UP))
        editor.handle_key(KeyEvent(Key.ARROW_DOWN))
        assert editor.line == ""
        assert editor.history_index == -1

    def test_down_when_not_browsing(self) -> None:
        """Down without browsing keeps the typed line."""
        _shell, editor, _sink = _editor()
        _submit(editor, "pwd")
        editor.feed("ec")
        editor.handle_key(KeyEvent(Key.ARROW_DOWN))
        assert editor.line == "ec"

    def test_recalled_line_replaces_display(self) -> None:
        """The typed text is erased before the history entry is shown."""
        _shell, editor, sink = _editor()
        editor.print_prompt()
        _submit(editor, "pwd")
        _submit(editor, "ls")
        editor.feed("xyz")
        editor.handle_key(KeyEvent(Key.ARROW_UP))
        editor.handle_key(KeyEvent(Key.ARROW_UP))
        assert sink.screen().split("\n")[-1] == " $ pwd"

    def test_enter_resets_cursor(self) -> None:
        """Submitting ends history browsing."""
        _shell, editor, _sink = _editor()
        _submit(editor, "pwd")
        editor.handle_key(KeyEvent(Key.ARROW_UP))
        editor.handle_key(KeyEvent(Key.ENTER))
        assert editor.history == ["pwd", "pwd"]
        assert editor.history_index == -1


class TestTabCompletion:
    """Verify Tab."""

    def test_tab_suppresses_default(self) -> None:
        """Tab asks the surface to swallow the key."""
        _shell, editor, _sink = _editor()
        assert editor.handle_key(KeyEvent(Key.TAB)) is True
        assert editor.handle_key(KeyEvent("a")) is False

    def test_single_match_completes(self) -> None:
        """A unique prefix is completed in place."""
        _shell, editor, sink = _editor()
        editor.feed("cd pro")
        sink.drain()
        editor.handle_key(KeyEvent(Key.TAB))
        assert editor.line == "cd projects"
        assert sink.ops == [("write", "jects")]

    def test_multiple_matches_are_listed(self) -> None:
        """Several matches are printed and the line is redrawn."""
        _shell, editor, sink = _editor()
        editor.feed("cd d")
        sink.drain()
        editor.handle_key(KeyEvent(Key.TAB))
        assert editor.line == "cd d"
        assert sink.ops == [
            ("writeln", ""),
            ("writeln", "documents"),
            ("writeln", "downloads"),
            ("write", PROMPT),
            ("write", "cd d"),
        ]

    def test_no_match_does_nothing(self) -> None:
        """An unmatched prefix leaves everything alone."""
        _shell, editor, sink = _editor()
        editor.feed("cd zz")
        sink.drain()
        editor.handle_key(KeyEvent(Key.TAB))
        assert editor.line == "cd zz"
        assert sink.ops == []

    def test_completion_follows_current_directory(self) -> None:
        """Candidates come from wherever the shell currently is."""
        _shell, editor, _sink = _editor()
        _submit(editor, "cd documents")
        editor.feed("touch res")
        editor.handle_key(KeyEvent(Key.TAB))
        assert editor.line == "touch resume.pdf"
