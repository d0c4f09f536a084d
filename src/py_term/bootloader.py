"""Bootloader — builds a running machine from a system image.

The system image is the whole configuration of a machine: the version
string, the prompt, the starting directory tree, where the shell starts,
and which jumps exist out of the box.  With no image file the bootloader
uses the built-in defaults; with one it reads JSON like::

    {
        "version": "CLI Tool Demo v1.0.0",
        "prompt": " $ ",
        "directories": {"/": ["srv"], "/srv": []},
        "current_path": "/srv",
        "jumps": {"srv": "/srv"}
    }

Missing keys fall back to the defaults.  The image is checked before
anything boots: a tree that breaks the filesystem invariants, a start
path that is not a directory, or a jump into nowhere all stop the boot.
"""

from __future__ import annotations

import json
from dataclasses import dataclass, field
from enum import StrEnum
from typing import TYPE_CHECKING, Any

from py_term.errors import InvalidPathError
from py_term.fs import FileSystem
from py_term.jumps import JumpRegistry
from py_term.logging import Logger
from py_term.machine import Machine

if TYPE_CHECKING:
    from pathlib import Path

DEFAULT_VERSION = "CLI Tool Demo v1.0.0"
DEFAULT_PROMPT = " $ "
DEFAULT_CURRENT_PATH = "/home/user"

DEFAULT_DIRECTORIES: dict[str, list[str]] = {
    "/": ["home"],
    "/home": ["user"],
    "/home/user": ["documents", "projects", "downloads"],
    "/home/user/documents": ["resume.pdf", "notes.txt"],
    "/home/user/projects": ["project1", "project2"],
    "/home/user/projects/project1": ["index.js", "README.md"],
    "/home/user/projects/project2": ["app.py", "requirements.txt"],
    "/home/user/downloads": ["movie.mp4", "song.mp3"],
}

DEFAULT_JUMPS: dict[str, str] = {
    "p2": "/home/user/projects/project2",
}


class BootStage(StrEnum):
    """Where the boot chain currently is."""

    IMAGE = "image"
    FILESYSTEM = "filesystem"
    JUMPS = "jumps"
    READY = "ready"


@dataclass(frozen=True)
class SystemImage:
    """The configuration a machine is booted from."""

    version: str = DEFAULT_VERSION
    prompt: str = DEFAULT_PROMPT
    directories: dict[str, list[str]] = field(
        default_factory=lambda: {path: list(names) for path, names in DEFAULT_DIRECTORIES.items()}
    )
    current_path: str = DEFAULT_CURRENT_PATH
    jumps: dict[str, str] = field(default_factory=lambda: dict(DEFAULT_JUMPS))

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> SystemImage:
        """Build an image from parsed JSON, defaulting any missing keys.

        Raises:
            TypeError: If a directory listing is not a list.

        """
        default = cls()
        directories = data.get("directories", default.directories)
        for path, names in directories.items():
            if not isinstance(names, list):
                msg = f"listing for '{path}' must be a list"
                raise TypeError(msg)
        return cls(
            version=str(data.get("version", default.version)),
            prompt=str(data.get("prompt", default.prompt)),
            directories={
                str(path): [str(name) for name in names]
                for path, names in directories.items()
            },
            current_path=str(data.get("current_path", default.current_path)),
            jumps={
                str(name): str(path) for name, path in data.get("jumps", default.jumps).items()
            },
        )


class BootError(RuntimeError):
    """Raise when the boot chain cannot continue.

    Examples: unreadable image file, malformed JSON, an inconsistent tree.
    """


class Bootloader:
    """Turn a system image into a running ``Machine``.

    Usage::

        bootloader = Bootloader()
        machine = bootloader.boot()

    """

    def __init__(
        self,
        *,
        image_path: Path | None = None,
        image: SystemImage | None = None,
    ) -> None:
        """Create a bootloader.

        Args:
            image_path: JSON image file to read at boot.
            image: An image already in memory.  Ignored when
                *image_path* is given.

        """
        self._image_path = image_path
        self._image = image
        self._stage = BootStage.IMAGE
        self._boot_log: list[str] = []

    @property
    def stage(self) -> BootStage:
        """Return the current boot stage."""
        return self._stage

    @property
    def boot_log(self) -> list[str]:
        """Return the accumulated boot messages."""
        return list(self._boot_log)

    def boot(self) -> Machine:
        """Run the boot chain and return a ready machine.

        Raises:
            BootError: If the image cannot be loaded or is inconsistent.

        """
        self._stage = BootStage.IMAGE
        image = self._load_image()
        self._boot_log.append(f"[BOOT] Loading system image ({image.version}) ... OK")

        self._stage = BootStage.FILESYSTEM
        logger = Logger()
        filesystem = FileSystem(image.directories, image.current_path, logger=logger)
        try:
            filesystem.validate()
        except InvalidPathError as e:
            msg = f"Invalid filesystem in image: {e}"
            raise BootError(msg) from e
        self._boot_log.append(f"[BOOT] Filesystem: {len(image.directories)} directories ... OK")

        self._stage = BootStage.JUMPS
        for name, path in image.jumps.items():
            if not filesystem.is_directory(path):
                msg = f"Jump '{name}' points to a missing directory: {path}"
                raise BootError(msg)
        jumps = JumpRegistry(filesystem, image.jumps, logger=logger)
        self._boot_log.append(f"[BOOT] Jumps: {len(jumps)} registered ... OK")

        self._stage = BootStage.READY
        for line in self._boot_log:
            logger.info(line, source="boot")
        return Machine(
            filesystem=filesystem,
            jumps=jumps,
            logger=logger,
            version=image.version,
            prompt=image.prompt,
        )

    def _load_image(self) -> SystemImage:
        """Read the image file, or fall back to the in-memory/default image.

        Raises:
            BootError: If the file cannot be read or parsed.

        """
        if self._image_path is not None:
            try:
                data = json.loads(self._image_path.read_text())
            except (OSError, json.JSONDecodeError) as e:
                msg = f"Cannot load system image: {e}"
                raise BootError(msg) from e
            if not isinstance(data, dict):
                msg = "Cannot load system image: top level must be an object"
                raise BootError(msg)
            try:
                return SystemImage.from_dict(data)
            except (AttributeError, TypeError) as e:
                msg = f"Cannot load system image: {e}"
                raise BootError(msg) from e
        return self._image if self._image is not None else SystemImage()
