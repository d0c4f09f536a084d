"""Line editor — turns raw key events into submitted command lines.

The editor sits between a terminal surface and the shell.  The surface
hands it one key event at a time; the editor keeps the line being
typed, the command history and a history cursor, echoes what the user
types, and on Enter submits the line to the shell and prints the result.

Editing is append-only: there is no mid-line cursor.  The keys that do
something special are:

- **Enter** — submit the line (non-empty lines go into history).
- **Backspace** — drop the last character.
- **ArrowUp / ArrowDown** — walk back and forth through history.
- **Tab** — complete the last word from the current directory.

Every other single, unmodified character is typed literally.

History cursor: ``-1`` means "not browsing", ``0`` is the most recent
entry, and larger values go further back.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import StrEnum
from typing import TYPE_CHECKING, Protocol

from py_term.completer import Completer

if TYPE_CHECKING:
    from py_term.shell import Shell

# Move back, overwrite with a space, move back again.
ERASE_ONE = "\b \b"

_NOT_BROWSING = -1


class Key(StrEnum):
    """Keys with special meaning to the editor."""

    ENTER = "Enter"
    BACKSPACE = "Backspace"
    ARROW_UP = "ArrowUp"
    ARROW_DOWN = "ArrowDown"
    TAB = "Tab"


@dataclass(frozen=True)
class KeyEvent:
    """A single keystroke from the terminal surface.

    Attributes:
        key: Either a ``Key`` name or the literal character typed.
        ctrl: Whether Ctrl was held.
        alt: Whether Alt was held.

    """

    key: str
    ctrl: bool = False
    alt: bool = False

    @property
    def is_printable(self) -> bool:
        """Return True for a single character typed without Ctrl/Alt."""
        return len(self.key) == 1 and not self.ctrl and not self.alt


class TerminalSink(Protocol):
    """What the editor needs from the terminal surface."""

    def write(self, text: str) -> None:
        """Write *text* without a newline."""
        ...

    def writeln(self, text: str) -> None:
        """Write *text* and advance to the next line."""
        ...

    def clear(self) -> None:
        """Erase the visible output."""
        ...


class RecordingSink:
    """A sink that records every operation instead of drawing it.

    Operations are ``(op, text)`` tuples where *op* is ``"write"``,
    ``"writeln"`` or ``"clear"``.  Used by the web front end, which
    replays them in the browser, and by tests.
    """

    def __init__(self) -> None:
        """Create an empty recording."""
        self._ops: list[tuple[str, str]] = []

    @property
    def ops(self) -> list[tuple[str, str]]:
        """Return the recorded operations in order."""
        return list(self._ops)

    def write(self, text: str) -> None:
        """Record a raw write."""
        self._ops.append(("write", text))

    def writeln(self, text: str) -> None:
        """Record a line write."""
        self._ops.append(("writeln", text))

    def clear(self) -> None:
        """Record a clear."""
        self._ops.append(("clear", ""))

    def drain(self) -> list[tuple[str, str]]:
        """Return the recorded operations and forget them."""
        ops, self._ops = self._ops, []
        return ops

    def screen(self) -> str:
        """Render the recording as plain text, applying erases and clears."""
        chars: list[str] = []
        for op, text in self._ops:
            if op == "clear":
                chars.clear()
                continue
            for char in text + ("\n" if op == "writeln" else ""):
                if char == "\b":
                    if chars and chars[-1] != "\n":
                        chars.pop()
                elif char == "\r":
                    while chars and chars[-1] != "\n":
                        chars.pop()
                else:
                    chars.append(char)
        return "".join(chars)


class LineEditor:
    """Input state machine for one terminal session."""

    def __init__(self, shell: Shell, sink: TerminalSink) -> None:
        """Create an editor that submits to *shell* and draws on *sink*.

        Args:
            shell: Receives each submitted line.
            sink: The terminal surface to echo and print on.

        """
        self._shell = shell
        self._sink = sink
        self._completer = Completer(shell.machine.filesystem)
        self._prompt = shell.machine.prompt
        self._line = ""
        self._history: list[str] = []
        self._history_index = _NOT_BROWSING

    @property
    def line(self) -> str:
        """Return the line currently being typed."""
        return self._line

    @property
    def history(self) -> list[str]:
        """Return submitted lines, oldest first."""
        return list(self._history)

    @property
    def history_index(self) -> int:
        """Return the history cursor (``-1`` when not browsing)."""
        return self._history_index

    def print_prompt(self) -> None:
        """Return to the start of the line and draw the prompt."""
        self._sink.write("\r" + self._prompt)

    def handle_key(self, event: KeyEvent) -> bool:
        """Process one key event.

        Returns:
            True if the surface should suppress the key's default
            behaviour (Tab, which would otherwise move focus).

        """
        match event.key:
            case Key.ENTER:
                self._submit()
            case Key.BACKSPACE:
                self._backspace()
            case Key.ARROW_UP:
                self._history_back()
            case Key.ARROW_DOWN:
                self._history_forward()
            case Key.TAB:
                self._complete()
                return True
            case _ if event.is_printable:
                self._line += event.key
                self._sink.write(event.key)
        return False

    def feed(self, text: str) -> None:
        """Type every character of *text* as an unmodified key."""
        for char in text:
            self.handle_key(KeyEvent(char))

    # -- transitions -----------------------------------------------------

    def _submit(self) -> None:
        self._sink.writeln("")
        command = self._line.strip()
        if command:
            self._history.append(command)
            self._history_index = _NOT_BROWSING
            try:
                output = self._shell.execute(command)
                if output == self._shell.CLEAR_SENTINEL:
                    self._sink.clear()
                else:
                    for out_line in output.split("\n"):
                        self._sink.writeln(out_line.strip())
            except Exception:  # noqa: BLE001
                self._sink.writeln("\rError executing command")
        self._line = ""
        self.print_prompt()

    def _backspace(self) -> None:
        if self._line:
            self._line = self._line[:-1]
            self._sink.write(ERASE_ONE)

    def _history_back(self) -> None:
        if not self._history or self._history_index >= len(self._history) - 1:
            return
        self._history_index += 1
        self._replace_line(self._history[len(self._history) - 1 - self._history_index])

    def _history_forward(self) -> None:
        if self._history_index <= _NOT_BROWSING:
            return
        self._history_index -= 1
        if self._history_index >= 0:
            self._replace_line(self._history[len(self._history) - 1 - self._history_index])
        else:
            self._replace_line("")

    def _replace_line(self, text: str) -> None:
        """Erase the displayed line and show *text* in its place."""
        if self._line:
            self._sink.write(ERASE_ONE * len(self._line))
        self._line = text
        if text:
            self._sink.write(text)

    def _complete(self) -> None:
        prefix = Completer.prefix_of(self._line)
        matches = self._completer.completions(prefix)
        if len(matches) == 1:
            suffix = matches[0][len(prefix) :]
            self._line += suffix
            self._sink.write(suffix)
        elif len(matches) > 1:
            self._sink.writeln("")
            for match in matches:
                self._sink.writeln(match)
            self.print_prompt()
            self._sink.write(self._line)
