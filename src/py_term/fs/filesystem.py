"""In-memory filesystem modelled as a flat map of path → child names.

There are no inodes and no node objects.  The whole tree is one dict::

    {
        "/": ["home"],
        "/home": ["user"],
        "/home/user": ["documents", "notes.txt"],
        "/home/user/documents": [],
    }

A child name is a *directory* exactly when ``parent/name`` is itself a
key; otherwise it is a leaf ("file").  Files carry no content.

Three invariants hold after every operation:

- **Well-formed keys** — every key is ``/`` or ``/a/b`` with no empty
  segments and no trailing slash.
- **Listed keys** — if ``/a/b`` is a key then ``/a`` is a key and ``b``
  appears in its listing.
- **Valid cwd** — the current path is always a key.

Mutating operations validate everything first and only then touch the
dict, so a failed call never leaves a half-applied change behind.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from py_term.errors import (
    AlreadyExistsError,
    AtRootError,
    InvalidArgumentError,
    InvalidPathError,
    NotFoundError,
    ReservedNameError,
)
from py_term.fs import paths
from py_term.logging import LogLevel

if TYPE_CHECKING:
    from py_term.logging import Logger

# Names that would shadow the structure's own keywords.
RESERVED_DIRECTORY_NAME = "files"
RESERVED_FILE_NAME = "directories"

_LOG_SOURCE = "fs"


class FileSystem:
    """The single simulated directory tree plus the current working path."""

    def __init__(
        self,
        directories: dict[str, list[str]] | None = None,
        current_path: str = paths.ROOT,
        *,
        logger: Logger | None = None,
    ) -> None:
        """Create a filesystem, optionally seeded with an existing tree.

        Args:
            directories: Path → child-name listing.  Copied, not
                referenced.  Defaults to an empty root.
            current_path: Where the shell starts.
            logger: Where mutations are recorded, if anywhere.

        """
        tree = directories if directories is not None else {paths.ROOT: []}
        self._tree: dict[str, list[str]] = {path: list(names) for path, names in tree.items()}
        self._tree.setdefault(paths.ROOT, [])
        self._current = current_path
        self._logger = logger

    @property
    def current_path(self) -> str:
        """Return the absolute path the shell is currently in."""
        return self._current

    def is_directory(self, path: str) -> bool:
        """Return True if *path* is a directory (a key of the tree)."""
        return path in self._tree

    def list_dir(self, path: str | None = None) -> list[str]:
        """Return the child names of *path* (default: the current path).

        Unknown paths and files have no recorded children, so they list
        as empty.
        """
        target = self._current if path is None else path
        return list(self._tree.get(target, []))

    def make_directory(self, name: str) -> str:
        """Create a directory and link it into its parent's listing.

        Args:
            name: A plain name (created in the current directory), or a
                relative/absolute path whose parent already exists.

        Returns:
            The absolute path of the new directory.

        Raises:
            InvalidArgumentError: If *name* is empty.
            ReservedNameError: If the final segment is ``files``.
            InvalidPathError: If *name* contains ``.`` or ``..`` segments.
            AlreadyExistsError: If the path, or a file of that name,
                already exists.
            NotFoundError: If the parent directory does not exist.

        """
        if not name.strip():
            msg = "No directory name provided."
            raise InvalidArgumentError(msg)
        if paths.basename(name) == RESERVED_DIRECTORY_NAME:
            msg = f"'{RESERVED_DIRECTORY_NAME}' cannot be used as a directory name."
            raise ReservedNameError(msg)
        if any(part in (".", "..") for part in paths.split(name)):
            msg = f"Invalid directory name: '{name}'"
            raise InvalidPathError(msg)

        path = paths.join(self._current, name)
        if path in self._tree:
            msg = f"Directory '{name}' already exists."
            raise AlreadyExistsError(msg)

        parent = paths.parent_of(path)
        child = paths.basename(path)
        if parent not in self._tree:
            msg = f"Parent directory not found: {parent}"
            raise NotFoundError(msg)
        if child in self._tree[parent]:
            msg = f"'{name}' already exists."
            raise AlreadyExistsError(msg)

        # Both halves together, after every check has passed.
        self._tree[path] = []
        self._tree[parent].append(child)
        self._log(f"Created directory {path}")
        return path

    def touch_file(self, name: str) -> str:
        """Add a file entry to the current directory's listing.

        Files are leaves: no tree key is created for them.

        Returns:
            The absolute path of the new file.

        Raises:
            InvalidArgumentError: If *name* is empty.
            ReservedNameError: If *name* is ``directories``.
            InvalidPathError: If *name* contains a ``/``.
            AlreadyExistsError: If *name* is already listed here.

        """
        if not name.strip():
            msg = "No file name provided."
            raise InvalidArgumentError(msg)
        if name == RESERVED_FILE_NAME:
            msg = f"'{RESERVED_FILE_NAME}' cannot be used as a file name."
            raise ReservedNameError(msg)
        if paths.SEPARATOR in name:
            msg = f"Invalid file name: '{name}'"
            raise InvalidPathError(msg)

        listing = self._tree[self._current]
        if name in listing:
            msg = f"File '{name}' already exists."
            raise AlreadyExistsError(msg)

        listing.append(name)
        path = paths.join(self._current, name)
        self._log(f"Created file {path}")
        return path

    def change_directory(self, target: str) -> str:
        """Move the current path.

        ``..`` goes up one level.  Anything else is walked one segment
        at a time, from the root when *target* is absolute and from the
        current path otherwise.  The current path only changes once the
        whole walk has succeeded.

        Returns:
            The new current path.

        Raises:
            InvalidArgumentError: If *target* is empty.
            AtRootError: On ``..`` at the root.
            NotFoundError: If any segment is not a directory.

        """
        if not target.strip():
            msg = "No argument given to cd"
            raise InvalidArgumentError(msg)

        if target == "..":
            if self._current == paths.ROOT:
                msg = "Already at the root directory."
                raise AtRootError(msg)
            self._current = paths.parent_of(self._current)
            self._log(f"Changed directory to {self._current}", level=LogLevel.DEBUG)
            return self._current

        walked = paths.ROOT if target.startswith(paths.SEPARATOR) else self._current
        for part in paths.split(target):
            walked = paths.join(walked, part)
            if walked not in self._tree:
                msg = "Directory not found"
                raise NotFoundError(msg)

        self._current = walked
        self._log(f"Changed directory to {walked}", level=LogLevel.DEBUG)
        return walked

    def validate(self) -> None:
        """Check every structural invariant over the whole tree.

        Raises:
            InvalidPathError: Naming the first violation found.

        """
        for path in self._tree:
            if not paths.is_well_formed(path):
                msg = f"Malformed path: '{path}'"
                raise InvalidPathError(msg)
            if path == paths.ROOT:
                continue
            parent = paths.parent_of(path)
            if parent not in self._tree:
                msg = f"Parent directory not found: {parent}"
                raise InvalidPathError(msg)
            if paths.basename(path) not in self._tree[parent]:
                msg = f"'{path}' is not listed in '{parent}'"
                raise InvalidPathError(msg)
        if self._current not in self._tree:
            msg = f"Current path is not a directory: '{self._current}'"
            raise InvalidPathError(msg)

    def to_dict(self) -> dict[str, Any]:
        """Return a snapshot of the tree and the current path."""
        return {
            "directories": {path: list(names) for path, names in self._tree.items()},
            "current_path": self._current,
        }

    def _log(self, message: str, *, level: LogLevel = LogLevel.INFO) -> None:
        if self._logger is not None:
            self._logger.log(level, message, source=_LOG_SOURCE)
