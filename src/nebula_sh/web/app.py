"""Flask application factory for the nebula-sh web terminal.

The ``create_app`` function creates a session and returns a Flask app
with three endpoints:

- ``GET /`` — render the terminal HTML page.
- ``POST /api/execute`` — run a command and return its output as JSON.
- ``GET /api/status`` — return whether the session is still running.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from flask import Flask, Response, jsonify, render_template, request

from nebula_sh.repl import LogCursor, render_entries
from nebula_sh.session import create_session

if TYPE_CHECKING:
    from nebula_sh.config import ShellConfig

_HTTP_BAD_REQUEST = 400


def create_app(config: ShellConfig | None = None) -> Flask:
    """Create and configure the Flask application.

    Create a session and wire up routes.  One app serves one session.

    Returns:
        A configured Flask application ready to serve.

    """
    session = create_session(config=config)
    cursor = LogCursor(session)

    app = Flask(__name__)

    @app.route("/")
    def index() -> str:  # pyright: ignore[reportUnusedFunction]
        """Render the terminal HTML page."""
        return render_template(
            "index.html",
            hostname=session.config.hostname,
            prompt=session.prompt(),
        )

    @app.route("/api/execute", methods=["POST"])
    def execute() -> tuple[Response, int] | Response:  # pyright: ignore[reportUnusedFunction]
        """Run a command and return JSON output.

        Expects JSON body: ``{"command": "..."}``

        Returns:
            JSON with ``output``, ``prompt``, ``status``, ``cleared`` and
            ``halted`` fields.

        """
        data = request.get_json(silent=True)
        if data is None or "command" not in data:
            return jsonify({"error": "Missing 'command' field"}), _HTTP_BAD_REQUEST

        if not session.running:
            return jsonify({"output": "Session ended.", "halted": True})

        command: str = data["command"]
        status = session.run_command(command)
        entries, cleared = cursor.drain()

        return jsonify(
            {
                "output": render_entries(entries),
                "prompt": session.prompt(),
                "status": str(status),
                "cleared": cleared,
                "halted": not session.running,
            }
        )

    @app.route("/api/status")
    def status() -> Response:  # pyright: ignore[reportUnusedFunction]
        """Return session status for polling.

        Returns:
            JSON with ``running``, ``user`` and ``cwd`` fields.

        """
        return jsonify(
            {
                "running": session.running,
                "user": session.current_user.name,
                "cwd": session.current_working_directory.path,
            }
        )

    return app


def main() -> None:
    """Run the web terminal development server.

    This is the ``nebula-sh-web`` console entry point.
    """
    app = create_app()
    app.run(debug=True, port=8080)
