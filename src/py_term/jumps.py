"""Jump registry — named shortcuts to directories.

A jump is a name bound to an absolute path, so ``jump to web`` can
replace a long ``cd /home/user/projects/site/frontend``.  The registry
sits on top of the filesystem: new jumps default to the current path,
and jumping "in place" moves the filesystem's current path.

Design choices:
    - **Plain dict** — insertion order gives ``jump list`` a stable
      order for free.
    - **Targets must be directories** — a jump is only ever created for
      a path the filesystem knows, so jumping in place can never leave
      the current path dangling.
    - **Overwrite silently** — re-adding a name rebinds it.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from py_term.errors import NotFoundError
from py_term.fs import paths

if TYPE_CHECKING:
    from py_term.fs import FileSystem
    from py_term.logging import Logger

_LOG_SOURCE = "jump"


class JumpRegistry:
    """Map jump names to absolute directory paths."""

    def __init__(
        self,
        filesystem: FileSystem,
        initial: dict[str, str] | None = None,
        *,
        logger: Logger | None = None,
    ) -> None:
        """Create a registry bound to a filesystem.

        Args:
            filesystem: The tree jumps point into.
            initial: Starting jumps (copied, not referenced).
            logger: Where changes are recorded, if anywhere.

        """
        self._fs = filesystem
        self._jumps: dict[str, str] = dict(initial) if initial else {}
        self._logger = logger

    def add(self, name: str, path: str | None = None) -> str:
        """Bind *name* to *path*, or to the current path when omitted.

        A relative *path* is resolved against the current path.

        Raises:
            NotFoundError: If *path* is not an existing directory.

        """
        target = self._fs.current_path if path is None else paths.join(self._fs.current_path, path)
        if not self._fs.is_directory(target):
            msg = "Directory not found"
            raise NotFoundError(msg)
        self._jumps[name] = target
        self._log(f"Added jump {name} -> {target}")
        return f"Added jump '{name}' pointing to '{target}'"

    def resolve(self, name: str) -> str:
        """Return the path bound to *name*.

        Raises:
            NotFoundError: If no such jump exists.

        """
        try:
            return self._jumps[name]
        except KeyError:
            msg = f"No jump found for '{name}'"
            raise NotFoundError(msg) from None

    def remove(self, name: str) -> str:
        """Delete one jump.

        Raises:
            NotFoundError: If no such jump exists.

        """
        self.resolve(name)
        del self._jumps[name]
        self._log(f"Removed jump {name}")
        return f"Removed jump '{name}'."

    def remove_all(self) -> str:
        """Delete every jump."""
        self._jumps.clear()
        self._log("Removed all jumps")
        return "Removed all jumps."

    def list(self) -> list[tuple[str, str]]:
        """Return ``(name, path)`` pairs in the order they were added."""
        return list(self._jumps.items())

    def goto(self, name: str, *, in_place: bool) -> str:
        """Follow a jump.

        Args:
            name: The jump to follow.
            in_place: Move the shell's current path there.  Otherwise
                the path is handed off to an external editor and the
                current path stays where it is.

        Raises:
            NotFoundError: If no such jump exists.

        """
        target = self.resolve(name)
        if not in_place:
            return f"Opening {target} in VS Code..."
        self._fs.change_directory(target)
        return f"Changed directory to {target}"

    def __len__(self) -> int:
        """Return the number of jumps."""
        return len(self._jumps)

    def __contains__(self, name: object) -> bool:
        """Return True if *name* is a registered jump."""
        return name in self._jumps

    def _log(self, message: str) -> None:
        if self._logger is not None:
            self._logger.info(message, source=_LOG_SOURCE)
