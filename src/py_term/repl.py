"""Interactive REPL (Read-Eval-Print Loop) for the console.

The REPL boots a machine via the bootloader, creates a shell, and
enters the classic loop:

    1. **Read** — display a prompt and read a line (readline gives us
       history and Tab completion for free).
    2. **Eval** — pass the line to ``shell.execute()``.
    3. **Print** — display the result, or clear the screen.
    4. **Loop** — until Ctrl+D or Ctrl+C.

The helpers (``build_prompt``, ``format_boot_log``, ``render_output``)
are pure and testable.  ``run()`` is the I/O entrypoint.
"""

from __future__ import annotations

import sys
from typing import TYPE_CHECKING

from py_term.bootloader import BootError, Bootloader
from py_term.completer import Completer
from py_term.machine import Machine
from py_term.shell import Shell

if TYPE_CHECKING:
    from pathlib import Path

_BANNER_WIDTH = 38

# Erase the screen and home the cursor.
_ANSI_CLEAR = "\033[2J\033[H"


def format_boot_log(boot_log: list[str]) -> str:
    """Format the boot log into a displayable banner string."""
    border = "=" * _BANNER_WIDTH
    header = f"\n  {border}\n              PyTerm\n     A simulated command shell\n  {border}\n\n"
    body = "\n".join(f"  {msg}" for msg in boot_log)
    footer = "\nReady. Type 'help' for commands, Ctrl+D to quit.\n"
    return header + body + footer


def build_prompt(machine: Machine) -> str:
    """Build the prompt, showing the current path before the machine's prompt.

    Returns:
        A prompt string like ``/home/user $ ``.

    """
    return f"{machine.filesystem.current_path}{machine.prompt}"


def render_output(result: str) -> str:
    """Turn a shell result into what the console should print."""
    if result == Shell.CLEAR_SENTINEL:
        return _ANSI_CLEAR
    return "\n".join(line.strip() for line in result.split("\n"))


def run(image_path: Path | None = None) -> None:
    """Boot a machine and run the interactive REPL.

    This is the ``py-term`` console entry point.

    Args:
        image_path: JSON system image to boot from (built-in default
            when omitted).

    """
    bootloader = Bootloader(image_path=image_path)
    try:
        machine = bootloader.boot()
    except BootError as e:
        print(f"Boot failed: {e}", file=sys.stderr)  # noqa: T201
        raise SystemExit(1) from e

    shell = Shell(machine=machine)
    Completer(machine.filesystem).install()

    print(format_boot_log(bootloader.boot_log))  # noqa: T201

    try:
        while True:
            try:
                command = input(build_prompt(machine))
            except EOFError:
                # Ctrl+D
                print()  # noqa: T201
                break

            result = shell.execute(command)
            if result == Shell.CLEAR_SENTINEL:
                print(render_output(result), end="")  # noqa: T201
            elif result:
                print(render_output(result))  # noqa: T201

    except KeyboardInterrupt:
        # Ctrl+C
        print("\nInterrupted.")  # noqa: T201
