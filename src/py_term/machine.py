"""The machine — the state every shell session works against.

A ``Machine`` owns one filesystem, one jump registry and one logger.
It is passed explicitly to the shell instead of living in module-level
globals, so every test (or every web app) gets its own independent
world.  The bootloader is the normal way to build one.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from py_term.fs import FileSystem
    from py_term.jumps import JumpRegistry
    from py_term.logging import Logger


@dataclass
class Machine:
    """A booted simulated system.

    Attributes:
        filesystem: The shared directory tree and current path.
        jumps: Named shortcuts into the filesystem.
        logger: Audit trail of what happened on this machine.
        version: The version string reported by ``version``.
        prompt: The text shown before each input line.

    """

    filesystem: FileSystem
    jumps: JumpRegistry
    logger: Logger
    version: str
    prompt: str
