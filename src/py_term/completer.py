"""Tab completer for the simulated shell.

The completer separates **what to complete** (pure logic, fully
testable) from **how to wire it** (the line editor's Tab key, or
readline in the console REPL).

Completion is deliberately simple: the last word on the line is a
prefix, and the candidates are the current directory's entries that
start with it, in listing order.
"""

from __future__ import annotations

import readline
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from py_term.fs import FileSystem


class Completer:
    """Complete names from the current directory's listing."""

    def __init__(self, filesystem: FileSystem) -> None:
        """Create a completer over a filesystem.

        Args:
            filesystem: Its current directory supplies the candidates.

        """
        self._fs = filesystem

    @staticmethod
    def prefix_of(line: str) -> str:
        """Return the word being completed: the last space-separated token.

        The line is trimmed first, so ``"cd "`` completes ``cd`` itself.
        """
        return line.strip().split(" ")[-1]

    def completions(self, prefix: str) -> list[str]:
        """Return current-directory entries starting with *prefix*."""
        return [name for name in self._fs.list_dir() if name.startswith(prefix)]

    def complete(self, text: str, state: int) -> str | None:
        """Readline callback — return the *state*-th candidate for *text*.

        Args:
            text: The partial word being completed.
            state: Index into the candidate list (0, 1, 2, …).

        Returns:
            The candidate at *state*, or ``None`` when exhausted.

        """
        candidates = self.completions(text)
        if state < len(candidates):
            return candidates[state]
        return None

    def install(self) -> None:
        """Wire this completer into readline."""
        readline.set_completer(self.complete)
        readline.set_completer_delims(" \t")
        readline.parse_and_bind("tab: complete")
