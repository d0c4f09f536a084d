"""Tests for the jump registry.

Jumps are named shortcuts to directories, layered over the filesystem.
"""

import pytest

from py_term.bootloader import DEFAULT_CURRENT_PATH, DEFAULT_DIRECTORIES, DEFAULT_JUMPS
from py_term.errors import NotFoundError
from py_term.fs import FileSystem
from py_term.jumps import JumpRegistry
from py_term.logging import Logger

PROJECTS = "/home/user/projects"
PROJECT2 = "/home/user/projects/project2"


def _registry() -> tuple[FileSystem, JumpRegistry]:
    """Create a default filesystem and a registry with the default jumps."""
    fs = FileSystem(DEFAULT_DIRECTORIES, DEFAULT_CURRENT_PATH)
    return fs, JumpRegistry(fs, DEFAULT_JUMPS)


class TestAdd:
    """Verify adding jumps."""

    def test_defaults_to_current_path(self) -> None:
        """Without a path, the jump points at the current directory."""
        fs, jumps = _registry()
        fs.change_directory(PROJECTS)
        assert jumps.add("foo") == f"Added jump 'foo' pointing to '{PROJECTS}'"
        assert jumps.resolve("foo") == PROJECTS

    def test_explicit_relative_path(self) -> None:
        """A relative path is resolved against the current directory."""
        _fs, jumps = _registry()
        jumps.add("docs", "documents")
        assert jumps.resolve("docs") == "/home/user/documents"

    def test_explicit_absolute_path(self) -> None:
        """An absolute path is used as given."""
        _fs, jumps = _registry()
        jumps.add("dl", "/home/user/downloads/")
        assert jumps.resolve("dl") == "/home/user/downloads"

    def test_missing_directory_rejected(self) -> None:
        """A jump must point at an existing directory."""
        _fs, jumps = _registry()
        with pytest.raises(NotFoundError):
            jumps.add("bad", "/nope")
        assert "bad" not in jumps

    def test_overwrite_is_silent(self) -> None:
        """Re-adding a name rebinds it."""
        _fs, jumps = _registry()
        jumps.add("p2", "/home")
        assert jumps.resolve("p2") == "/home"
        assert len(jumps) == 1

    def test_seed_is_copied(self) -> None:
        """Adding a jump must not touch the seed dict."""
        _fs, jumps = _registry()
        jumps.add("extra")
        assert "extra" not in DEFAULT_JUMPS


class TestResolveAndRemove:
    """Verify lookups and removal."""

    def test_resolve_seed(self) -> None:
        """The seeded jump should resolve."""
        _fs, jumps = _registry()
        assert jumps.resolve("p2") == PROJECT2

    def test_resolve_missing(self) -> None:
        """Unknown names should fail with a readable message."""
        _fs, jumps = _registry()
        with pytest.raises(NotFoundError, match="No jump found for 'nope'"):
            jumps.resolve("nope")

    def test_remove(self) -> None:
        """Removing a jump should make it unresolvable."""
        _fs, jumps = _registry()
        assert jumps.remove("p2") == "Removed jump 'p2'."
        assert "p2" not in jumps

    def test_remove_missing(self) -> None:
        """Removing an unknown jump should fail."""
        _fs, jumps = _registry()
        with pytest.raises(NotFoundError):
            jumps.remove("nope")

    def test_remove_all(self) -> None:
        """Remove all should empty the registry."""
        _fs, jumps = _registry()
        jumps.add("a")
        assert jumps.remove_all() == "Removed all jumps."
        assert jumps.list() == []


class TestList:
    """Verify listing order."""

    def test_insertion_order(self) -> None:
        """Jumps are listed in the order they were added."""
        _fs, jumps = _registry()
        jumps.add("b", "/home")
        jumps.add("a", "/")
        assert jumps.list() == [("p2", PROJECT2), ("b", "/home"), ("a", "/")]


class TestGoto:
    """Verify following jumps."""

    def test_in_place_changes_directory(self) -> None:
        """Jumping in place moves the current path."""
        fs, jumps = _registry()
        assert jumps.goto("p2", in_place=True) == f"Changed directory to {PROJECT2}"
        assert fs.current_path == PROJECT2

    def test_external_leaves_current_path(self) -> None:
        """Opening externally must not move the current path."""
        fs, jumps = _registry()
        assert jumps.goto("p2", in_place=False) == f"Opening {PROJECT2} in VS Code..."
        assert fs.current_path == DEFAULT_CURRENT_PATH

    def test_missing_jump(self) -> None:
        """Following an unknown jump fails and leaves state alone."""
        fs, jumps = _registry()
        with pytest.raises(NotFoundError):
            jumps.goto("nope", in_place=True)
        assert fs.current_path == DEFAULT_CURRENT_PATH


class TestLogging:
    """Verify changes are recorded."""

    def test_add_and_remove_are_logged(self) -> None:
        """Add and remove should each leave a jump entry."""
        logger = Logger()
        fs = FileSystem(DEFAULT_DIRECTORIES, DEFAULT_CURRENT_PATH)
        jumps = JumpRegistry(fs, logger=logger)
        jumps.add("home")
        jumps.remove("home")
        messages = [e.message for e in logger.filter(source="jump")]
        assert messages == ["Added jump home -> /home/user", "Removed jump home"]
