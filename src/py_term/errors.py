"""Error taxonomy for the simulated shell.

Every failure a command can hit is one of these exceptions.  The stores
(filesystem, jump registry) raise them; the shell's command handlers
catch ``ShellError`` and turn it into the line the user sees.  Nothing
here is fatal — the worst outcome is a printed error and unchanged state.
"""


class ShellError(Exception):
    """Base class for every expected, user-facing command failure.

    ``str(error)`` is the exact text shown to the user.
    """


class NotFoundError(ShellError):
    """A path or jump name does not exist."""


class AlreadyExistsError(ShellError):
    """A directory or file name collides with an existing entry."""


class ReservedNameError(ShellError):
    """A name would shadow the tree's internal structural keywords."""


class AtRootError(ShellError):
    """``cd ..`` was requested while already at ``/``."""


class InvalidPathError(ShellError):
    """A path is malformed, or has no parent (the root)."""


class InvalidArgumentError(ShellError):
    """A required argument is missing or unusable."""


class UnknownSubcommandError(ShellError):
    """A command with subcommands was given one it does not know."""


class UnknownCommandError(ShellError):
    """No command or alias matches the first word of the line.

    Attributes:
        command: The word the user typed.
        suggestion: The closest canonical command name, if any is close
            enough to be worth offering.

    """

    def __init__(self, command: str, suggestion: str | None = None) -> None:
        """Build the three-line "not found" message."""
        self.command = command
        self.suggestion = suggestion
        lines = [f"Command not found: {command}"]
        if suggestion is not None:
            lines.append(f"Did you mean '{suggestion}'?")
        lines.append("Type 'help' to see available commands.")
        super().__init__("\n".join(lines))
