"""The shell — command interpreter for the simulated system.

The shell reads one command line, splits it into a command name and
arguments, finds the command (by canonical name or alias), runs its
handler against the machine's filesystem and jump registry, and returns
the output as a string.

Design choices:
    - **Returns strings, not prints.**  The shell is fully testable and
      the caller decides how to display output.  Even failures come back
      as text: ``execute`` never raises.
    - **One static command table.**  Each entry carries its description
      and aliases, so ``help`` is generated from the table and cannot
      drift out of date.  Names and aliases are merged into a single
      lookup index when the shell is built; a collision is an error at
      construction time, not a surprise at dispatch time.
    - **Errors are text at the source.**  Handlers catch ``ShellError``
      and return its message.  The catch-all around each handler call is
      a safety net for bugs, not the normal error channel.
    - **A sentinel for clear.**  ``clear`` has no text to print, so it
      returns ``CLEAR_SENTINEL``, which the caller turns into a clear
      action.  It contains NUL characters, which whitespace-split input
      can never produce.
"""

from __future__ import annotations

import asyncio
import inspect
from collections.abc import Awaitable, Callable, Iterable
from dataclasses import dataclass
from typing import TYPE_CHECKING, TypeAlias

from py_term.errors import (
    InvalidArgumentError,
    ShellError,
    UnknownCommandError,
    UnknownSubcommandError,
)
from py_term.fs import paths
from py_term.logging import LogLevel
from py_term.suggest import closest

if TYPE_CHECKING:
    from py_term.machine import Machine

# A command handler takes the argument list and returns output, possibly
# after awaiting something.
_Handler: TypeAlias = "Callable[[list[str]], str | Awaitable[str]]"

_LOG_SOURCE = "shell"
_HELP_NAME_WIDTH = 10


@dataclass(frozen=True)
class Command:
    """One entry in the command table."""

    name: str
    description: str
    handler: _Handler
    aliases: tuple[str, ...] = ()


def build_index(commands: Iterable[Command]) -> dict[str, Command]:
    """Merge canonical names and aliases into one case-insensitive index.

    Raises:
        ValueError: If two commands share a name or alias.

    """
    index: dict[str, Command] = {}
    for command in commands:
        for key in (command.name, *command.aliases):
            lowered = key.lower()
            if lowered in index:
                msg = f"Duplicate command name or alias: '{lowered}'"
                raise ValueError(msg)
            index[lowered] = command
    return index


async def _await(awaitable: Awaitable[str]) -> str:
    return await awaitable


class Shell:
    """Command interpreter bound to one machine."""

    CLEAR_SENTINEL = "\x00__CLEAR__\x00"

    def __init__(self, *, machine: Machine) -> None:
        """Create a shell and build its command table.

        Args:
            machine: The booted machine whose state commands act on.

        Raises:
            ValueError: If the command table has a name/alias collision.

        """
        self._machine = machine
        self._fs = machine.filesystem
        self._jumps = machine.jumps
        self._logger = machine.logger

        table = [
            Command("help", "Show this help message", self._cmd_help),
            Command("clear", "Clear the terminal", self._cmd_clear),
            Command("echo", "Echo back the arguments", self._cmd_echo),
            Command("version", "Show CLI tool version", self._cmd_version, aliases=("v",)),
            Command("ls", "List files in the current directory", self._cmd_ls),
            Command("pwd", "Show the current working directory", self._cmd_pwd),
            Command("mkdir", "Create a new directory", self._cmd_mkdir),
            Command("cd", "Change the current working directory", self._cmd_cd),
            Command("touch", "Create a new file", self._cmd_touch),
            Command("jump", "Use the jump cli tool", self._cmd_jump),
            Command("log", "Show the session log", self._cmd_log),
        ]
        self._index = build_index(table)
        self._commands: dict[str, Command] = {command.name: command for command in table}

        # Subcommands of `jump`.
        self._jump_commands: dict[str, Callable[[list[str]], str]] = {
            "add": self._jump_add,
            "to": self._jump_to,
            "list": self._jump_list,
            "rm": self._jump_rm,
        }

    @property
    def machine(self) -> Machine:
        """Return the machine this shell operates on."""
        return self._machine

    @property
    def command_names(self) -> list[str]:
        """Return canonical command names in table order."""
        return list(self._commands)

    @property
    def commands(self) -> list[Command]:
        """Return the command table in order."""
        return list(self._commands.values())

    def execute(self, line: str) -> str:
        """Parse and run one command line.

        Args:
            line: The raw input (e.g. ``"mkdir notes"``).

        Returns:
            The command output, ``CLEAR_SENTINEL``, or an error message.
            Empty input produces ``""``.

        """
        parts = line.strip().split()
        if not parts:
            return ""

        name, args = parts[0], parts[1:]
        command = self._index.get(name.lower())
        if command is None:
            self._logger.warning(f"Unknown command: {name}", source=_LOG_SOURCE)
            return str(UnknownCommandError(name, closest(name, self._commands)))

        self._logger.info(f"Executing: {' '.join(parts)}", source=_LOG_SOURCE)
        try:
            result = command.handler(args)
            if inspect.isawaitable(result):
                result = asyncio.run(_await(result))
        except Exception as e:  # noqa: BLE001
            self._logger.error(f"{command.name} failed: {e}", source=_LOG_SOURCE)
            return f"Error executing command: {e}"
        return result

    # -- Command handlers ------------------------------------------------

    def _cmd_help(self, _args: list[str]) -> str:
        """List every command with its description and aliases."""
        lines = ["Available commands:"]
        for command in self._commands.values():
            alias_text = f" (aliases: {', '.join(command.aliases)})" if command.aliases else ""
            lines.append(
                f"{command.name:<{_HELP_NAME_WIDTH}} - {command.description}{alias_text}"
            )
        return "\n".join(lines)

    def _cmd_clear(self, _args: list[str]) -> str:
        return self.CLEAR_SENTINEL

    def _cmd_echo(self, args: list[str]) -> str:
        return " ".join(args) or "No input provided."

    def _cmd_version(self, _args: list[str]) -> str:
        return self._machine.version

    def _cmd_ls(self, args: list[str]) -> str:
        """List the current directory, or the directory given."""
        if args:
            target = paths.resolve(self._fs.current_path, args[0])
            if not self._fs.is_directory(target):
                return "Directory not found"
            return "\n".join(self._fs.list_dir(target))
        return "\n".join(self._fs.list_dir())

    def _cmd_pwd(self, _args: list[str]) -> str:
        return self._fs.current_path

    def _cmd_mkdir(self, args: list[str]) -> str:
        """Create a directory."""
        if not args:
            return "No directory name provided."
        try:
            self._fs.make_directory(args[0])
        except ShellError as e:
            return str(e)
        return f"Directory '{args[0]}' created successfully."

    def _cmd_touch(self, args: list[str]) -> str:
        """Create an empty file in the current directory."""
        if not args:
            return "No file name provided."
        try:
            self._fs.touch_file(args[0])
        except ShellError as e:
            return str(e)
        return f"File '{args[0]}' created successfully."

    def _cmd_cd(self, args: list[str]) -> str:
        """Change directory and report where we ended up."""
        if not args:
            return "No argument given to cd"
        try:
            return self._fs.change_directory(args[0])
        except ShellError as e:
            return str(e)

    def _cmd_jump(self, args: list[str]) -> str:
        """Dispatch ``jump <add|to|list|rm>``."""
        if not args:
            return "Usage: jump <add|to|list|rm>"
        try:
            handler = self._jump_subcommand(args[0])
            return handler(args[1:])
        except ShellError as e:
            return str(e)

    def _cmd_log(self, args: list[str]) -> str:
        """Show log entries, optionally only those at or above a level."""
        min_level: LogLevel | None = None
        if args:
            try:
                min_level = LogLevel[args[0].upper()]
            except KeyError:
                return "Usage: log [debug|info|warning|error]"
        entries = self._logger.filter(min_level=min_level)
        return "\n".join(str(entry) for entry in entries) if entries else "No log entries."

    # -- jump subcommands ------------------------------------------------

    def _jump_subcommand(self, name: str) -> Callable[[list[str]], str]:
        try:
            return self._jump_commands[name]
        except KeyError:
            msg = f"Unknown jump subcommand: {name}"
            raise UnknownSubcommandError(msg) from None

    def _jump_add(self, args: list[str]) -> str:
        """``jump add <name> [-p <path>]``."""
        usage = "Usage: jump add <name> [-p <path>]"
        if not args or args[0].startswith("-"):
            raise InvalidArgumentError(usage)
        # A trailing `-p` with no value means the current path.
        path: str | None = None
        if "-p" in args:
            flag = args.index("-p")
            if flag + 1 < len(args):
                path = args[flag + 1]
        return self._jumps.add(args[0], path)

    def _jump_to(self, args: list[str]) -> str:
        """``jump to <name> [-i]``."""
        if not args:
            msg = "Usage: jump to <name> [-i]"
            raise InvalidArgumentError(msg)
        return self._jumps.goto(args[0], in_place="-i" in args[1:])

    def _jump_list(self, _args: list[str]) -> str:
        jumps = self._jumps.list()
        if not jumps:
            return "No jumps have been added. Use 'jump add <name>' to add one."
        return "\n".join(f"{name} -> {path}" for name, path in jumps)

    def _jump_rm(self, args: list[str]) -> str:
        """``jump rm <name>`` or ``jump rm --all``."""
        if "--all" in args:
            return self._jumps.remove_all()
        if not args:
            msg = "Usage: jump rm <name> or jump rm --all"
            raise InvalidArgumentError(msg)
        return self._jumps.remove(args[0])
