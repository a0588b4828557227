"""Flask application factory for the web terminal.

The ``create_app`` function builds a session, a shell and a terminal,
and returns a Flask app whose endpoints drive that terminal:

- ``GET /``: render the terminal HTML page.
- ``POST /api/execute``: submit a command line.
- ``POST /api/complete``: tab-complete the input buffer.
- ``POST /api/key``: handle Up, Down, Ctrl+C and Ctrl+L.
- ``GET /api/status``: report the prompt and whether a command is running.

Every response that changes the screen carries the whole scrollback,
rendered to HTML, so the page never has to patch lines itself.
"""

from __future__ import annotations

import asyncio
from typing import Any

from flask import Flask, Response, jsonify, render_template, request

from nexus_shell.admin_api import AdminApiClient
from nexus_shell.auth import AuthProvider, RemoteAuth
from nexus_shell.config import TerminalConfig
from nexus_shell.render import to_html
from nexus_shell.session import Session
from nexus_shell.shell import Shell
from nexus_shell.terminal import Terminal

_HTTP_BAD_REQUEST = 400
_HTTP_CONFLICT = 409


def _screen(terminal: Terminal) -> dict[str, Any]:
    """Return the JSON view of the terminal's visible state."""
    return {
        "lines": [
            {"kind": str(line.kind), "text": line.text, "html": to_html(line.text)}
            for line in terminal.scrollback
        ],
        "input": terminal.input,
        "prompt": terminal.prompt,
    }


def create_app(
    config: TerminalConfig | None = None,
    *,
    auth: AuthProvider | None = None,
    api: AdminApiClient | None = None,
) -> Flask:
    """Create and configure the Flask application.

    Args:
        config: Terminal settings; read from ``NEXUS_*`` variables when
            omitted.
        auth: Admin check; defaults to asking the admin service.
        api: Admin REST client; built from *config* when omitted.

    Returns:
        A configured Flask application ready to serve.

    """
    config = config or TerminalConfig.load()
    if auth is None:
        auth = RemoteAuth(config.api_base_url, timeout=config.request_timeout)
    session = Session(config, auth=auth, api=api)
    terminal = Terminal(session, Shell(session))

    app = Flask(__name__)
    app.config["TERMINAL"] = terminal

    @app.route("/")
    def index() -> str:  # pyright: ignore[reportUnusedFunction]
        """Render the terminal HTML page."""
        return render_template(
            "index.html",
            lines=[(str(line.kind), to_html(line.text)) for line in terminal.scrollback],
            prompt=terminal.prompt,
        )

    @app.route("/api/execute", methods=["POST"])
    def execute() -> tuple[Response, int] | Response:  # pyright: ignore[reportUnusedFunction]
        """Submit a command line and return the new screen.

        Expects JSON body: ``{"command": "..."}``

        Returns:
            JSON with ``lines``, ``input``, ``prompt`` and ``accepted``.

        """
        data = request.get_json(silent=True)
        if data is None or "command" not in data:
            return jsonify({"error": "Missing 'command' field"}), _HTTP_BAD_REQUEST

        command: str = str(data["command"])
        accepted = asyncio.run(terminal.submit(command))
        if not accepted:
            return jsonify({**_screen(terminal), "accepted": False}), _HTTP_CONFLICT
        return jsonify({**_screen(terminal), "accepted": True})

    @app.route("/api/complete", methods=["POST"])
    def complete() -> tuple[Response, int] | Response:  # pyright: ignore[reportUnusedFunction]
        """Tab-complete the input buffer.

        Expects JSON body: ``{"input": "..."}``
        """
        data = request.get_json(silent=True)
        if data is None or "input" not in data:
            return jsonify({"error": "Missing 'input' field"}), _HTTP_BAD_REQUEST

        terminal.input = str(data["input"])
        matches = terminal.complete()
        return jsonify({**_screen(terminal), "matches": matches})

    @app.route("/api/key", methods=["POST"])
    def key() -> tuple[Response, int] | Response:  # pyright: ignore[reportUnusedFunction]
        """Handle a control key.

        Expects JSON body: ``{"key": "ArrowUp" | "ArrowDown" | "ctrl+c" |
        "ctrl+l", "input": "..."}``
        """
        data = request.get_json(silent=True)
        if data is None or "key" not in data:
            return jsonify({"error": "Missing 'key' field"}), _HTTP_BAD_REQUEST

        if "input" in data:
            terminal.input = str(data["input"])
        match data["key"]:
            case "ArrowUp":
                terminal.recall_previous()
            case "ArrowDown":
                terminal.recall_next()
            case "ctrl+c":
                terminal.interrupt()
            case "ctrl+l":
                terminal.clear_screen()
            case other:
                return jsonify({"error": f"Unknown key '{other}'"}), _HTTP_BAD_REQUEST
        return jsonify(_screen(terminal))

    @app.route("/api/status")
    def status() -> Response:  # pyright: ignore[reportUnusedFunction]
        """Return terminal status for polling.

        Returns:
            JSON with ``processing``, ``prompt``, ``cwd`` and ``user``.

        """
        return jsonify(
            {
                "processing": terminal.processing,
                "prompt": terminal.prompt,
                "cwd": session.cwd,
                "user": session.user,
            }
        )

    return app


def main() -> None:
    """Run the web UI development server.

    This is the ``nexus-shell-web`` console entry point.
    """
    app = create_app()
    app.run(debug=True, port=8080)
