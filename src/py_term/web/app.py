"""Flask application factory for the PyTerm web UI.

The ``create_app`` function boots a machine, creates a shell and a line
editor, and returns a Flask app with four endpoints:

- ``GET /`` — render the terminal HTML page with the boot log.
- ``POST /api/execute`` — execute a whole command line and return JSON.
- ``POST /api/key`` — feed one key event to the line editor and return
  the terminal operations it produced.
- ``GET /api/status`` — return the current path and registered jumps.

The machine is one shared world: every browser sees the same tree and
the same jumps.  The line being typed and its history are not shared.
Each browser session gets its own line editor, keyed by an id kept in
Flask's signed session cookie.  Loading the page starts a fresh editor
and forgets the old one.  The dev server handles requests on several
threads, so a single lock serialises every request that touches state.
"""

from __future__ import annotations

import secrets
import threading
import uuid
from typing import TYPE_CHECKING

from flask import Flask, Response, jsonify, render_template, request, session

from py_term.bootloader import Bootloader
from py_term.editor import KeyEvent, LineEditor, RecordingSink
from py_term.shell import Shell

if TYPE_CHECKING:
    from pathlib import Path

_HTTP_BAD_REQUEST = 400
_SESSION_KEY = "terminal"

# Oldest editors are dropped beyond this many open sessions.
MAX_TERMINALS = 64


def create_app(image_path: Path | None = None) -> Flask:
    """Create and configure the Flask application.

    Args:
        image_path: JSON system image to boot from (built-in default
            when omitted).

    Returns:
        A configured Flask application ready to serve.

    """
    bootloader = Bootloader(image_path=image_path)
    machine = bootloader.boot()
    shell = Shell(machine=machine)
    terminals: dict[str, tuple[LineEditor, RecordingSink]] = {}
    lock = threading.Lock()

    boot_log = "\n".join(bootloader.boot_log)

    app = Flask(__name__)
    app.secret_key = secrets.token_hex(16)

    def open_terminal() -> tuple[LineEditor, RecordingSink]:
        """Start a fresh editor for this browser, replacing any previous one.

        Must be called with *lock* held.
        """
        old = session.get(_SESSION_KEY)
        if old is not None:
            terminals.pop(old, None)
        while len(terminals) >= MAX_TERMINALS:
            del terminals[next(iter(terminals))]
        terminal_id = uuid.uuid4().hex
        sink = RecordingSink()
        terminals[terminal_id] = (LineEditor(shell, sink), sink)
        session[_SESSION_KEY] = terminal_id
        return terminals[terminal_id]

    def current_terminal() -> tuple[LineEditor, RecordingSink]:
        """Return this browser's editor, opening one if it has none yet.

        Must be called with *lock* held.
        """
        terminal = terminals.get(session.get(_SESSION_KEY, ""))
        return terminal if terminal is not None else open_terminal()

    @app.route("/")
    def index() -> str:  # pyright: ignore[reportUnusedFunction]
        """Render the terminal HTML page with a fresh line editor."""
        with lock:
            open_terminal()
        return render_template("index.html", boot_log=boot_log, prompt=machine.prompt)

    @app.route("/api/execute", methods=["POST"])
    def execute() -> tuple[Response, int] | Response:  # pyright: ignore[reportUnusedFunction]
        """Execute a command line and return JSON output.

        Expects JSON body: ``{"command": "..."}``

        Returns:
            JSON with ``output`` and ``clear`` fields.

        """
        data = request.get_json(silent=True)
        if not isinstance(data, dict) or "command" not in data:
            return jsonify({"error": "Missing 'command' field"}), _HTTP_BAD_REQUEST

        with lock:
            result = shell.execute(str(data["command"]))

        if result == Shell.CLEAR_SENTINEL:
            return jsonify({"output": "", "clear": True})
        return jsonify({"output": result, "clear": False})

    @app.route("/api/key", methods=["POST"])
    def key() -> tuple[Response, int] | Response:  # pyright: ignore[reportUnusedFunction]
        """Feed one key event to the line editor.

        Expects JSON body: ``{"key": "a", "ctrl": false, "alt": false}``

        Returns:
            JSON with ``ops`` (``[op, text]`` pairs to replay on the
            terminal) and ``prevent_default``.

        """
        data = request.get_json(silent=True)
        if not isinstance(data, dict) or not isinstance(data.get("key"), str):
            return jsonify({"error": "Missing 'key' field"}), _HTTP_BAD_REQUEST

        event = KeyEvent(
            key=data["key"],
            ctrl=bool(data.get("ctrl", False)),
            alt=bool(data.get("alt", False)),
        )
        with lock:
            editor, sink = current_terminal()
            prevent_default = editor.handle_key(event)
            ops = sink.drain()
        return jsonify({"ops": [list(op) for op in ops], "prevent_default": prevent_default})

    @app.route("/api/status")
    def status() -> Response:  # pyright: ignore[reportUnusedFunction]
        """Return the current path and the registered jumps."""
        with lock:
            cwd = machine.filesystem.current_path
            jumps = dict(machine.jumps.list())
        return jsonify({"cwd": cwd, "jumps": jumps})

    return app


def main() -> None:
    """Run the web UI development server.

    This is the ``py-term-web`` console entry point.
    """
    app = create_app()
    app.run(debug=True, port=8080)
