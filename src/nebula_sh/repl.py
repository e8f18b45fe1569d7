"""Interactive REPL (Read-Eval-Print Loop) for nebula-sh.

The REPL is the line-based terminal interface.  It creates a session
and enters the classic loop:

    1. **Read** — display the prompt and read user input.
    2. **Eval** — pass the line to ``session.run_command()``.
    3. **Print** — display whatever the command logged.
    4. **Loop** — repeat until the session stops running.

The session never prints; it logs.  The REPL remembers how much of the
log it has shown and prints only the new entries after each command.

The helper functions (``format_banner``, ``render_entries``) are pure
and testable.  The ``run()`` function is the I/O entrypoint.
"""

from __future__ import annotations

import argparse
import readline
from pathlib import Path
from typing import TYPE_CHECKING

from nebula_sh.completer import Completer
from nebula_sh.config import ConfigError, load_config
from nebula_sh.logging import LogLevel
from nebula_sh.session import Session, create_session

if TYPE_CHECKING:
    from nebula_sh.logging import LogEntry

_BANNER_WIDTH = 38

_COLORS = {
    LogLevel.DEBUG: "\x1b[32m",
    LogLevel.INFO: "\x1b[34m",
    LogLevel.WARNING: "\x1b[33m",
    LogLevel.ERROR: "\x1b[31m",
}
_RESET = "\x1b[0m"


def format_banner(hostname: str) -> str:
    """Return the banner shown when the REPL starts."""
    border = "=" * _BANNER_WIDTH
    return (
        f"\n  {border}\n            {hostname}\n     A simulated single-user computer\n"
        f"  {border}\n\nType 'help' for commands, 'exit' to quit.\n"
    )


def render_entries(
    entries: list[LogEntry],
    *,
    min_level: LogLevel = LogLevel.LOG,
    color: bool = False,
) -> str:
    """Render log entries as terminal text, one per line.

    Args:
        entries: The entries to render.
        min_level: Entries below this level are skipped.
        color: Wrap levelled entries in ANSI colors.

    """
    lines: list[str] = []
    for entry in entries:
        if entry.level < min_level:
            continue
        text = str(entry)
        if color and entry.level in _COLORS:
            text = f"{_COLORS[entry.level]}{text}{_RESET}"
        lines.append(text)
    return "\n".join(lines)


class LogCursor:
    """Tracks which log entries a front end has already shown."""

    def __init__(self, session: Session) -> None:
        """Start at the current end of the session's log."""
        self._session = session
        self._seen = len(session.logger)
        self._clears = session.logger.clears

    def drain(self) -> tuple[list[LogEntry], bool]:
        """Return new entries, and whether the log was cleared meanwhile."""
        logger = self._session.logger
        cleared = logger.clears != self._clears
        if cleared:
            self._clears = logger.clears
            self._seen = 0
        entries = logger.since(self._seen)
        self._seen = len(logger)
        return entries, cleared


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="nebula-sh", description="A simulated terminal.")
    parser.add_argument("--config", type=Path, help="JSON config file")
    parser.add_argument("--debug", action="store_true", help="Show debug log entries")
    return parser


def run(argv: list[str] | None = None) -> None:
    """Create a session and run the interactive REPL.

    This is the ``nebula-sh`` console entry point.  It handles:
    - Config loading.
    - Tab completion via readline.
    - The read-eval-print loop.
    - Graceful handling of Ctrl+C and Ctrl+D.
    """
    options = _build_parser().parse_args(argv)
    try:
        config = load_config(options.config) if options.config else None
    except ConfigError as e:
        raise SystemExit(str(e)) from e
    session = create_session(config=config)
    min_level = LogLevel.DEBUG if options.debug else LogLevel.LOG

    # Wire up tab completion via readline.
    completer = Completer(session)
    readline.set_completer(completer.complete)
    readline.set_completer_delims(" \t")
    readline.parse_and_bind("tab: complete")

    print(format_banner(session.config.hostname))  # noqa: T201
    cursor = LogCursor(session)

    try:
        while session.running:
            try:
                line = input(session.prompt())
            except EOFError:
                # Ctrl+D — graceful exit
                print()  # noqa: T201
                break

            session.run_command(line)
            entries, cleared = cursor.drain()
            if cleared:
                print("\x1b[2J\x1b[H", end="")  # noqa: T201
            output = render_entries(entries, min_level=min_level, color=True)
            if output:
                print(output)  # noqa: T201

    except KeyboardInterrupt:
        # Ctrl+C — graceful exit
        print("\nInterrupted.")  # noqa: T201

    finally:
        print("Goodbye.")  # noqa: T201
