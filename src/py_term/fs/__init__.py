"""Filesystem subsystem — path helpers and the simulated directory tree.

Re-exports public symbols so callers can write::

    from py_term.fs import FileSystem
"""

from py_term.fs.filesystem import RESERVED_DIRECTORY_NAME, RESERVED_FILE_NAME, FileSystem

__all__ = [
    "RESERVED_DIRECTORY_NAME",
    "RESERVED_FILE_NAME",
    "FileSystem",
]
