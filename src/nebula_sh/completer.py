"""Context-aware tab completer for the nebula-sh REPL.

The completer separates **what to complete** (pure logic, fully
testable) from **how to wire it** (readline integration in the REPL).

The ``complete(text, state)`` method is the readline callback.  It
delegates to ``completions(text, line)`` which analyses the input
context and returns a list of candidate strings.
"""

from __future__ import annotations

import readline
from typing import TYPE_CHECKING

from nebula_sh.fs.nodes import Directory

if TYPE_CHECKING:
    from nebula_sh.session import Session

# Commands whose first argument is a command name or a user name.
_COMMAND_ARGUMENT: frozenset[str] = frozenset(["help"])
_USER_ARGUMENT: frozenset[str] = frozenset(["su"])


class Completer:
    """Context-aware tab completer for a session."""

    def __init__(self, session: Session) -> None:
        """Create a completer attached to a session.

        Args:
            session: The session whose commands, users and filesystem
                     are used to generate completion candidates.

        """
        self._session = session

    def complete(self, text: str, state: int) -> str | None:
        """Readline callback — return the *state*-th candidate for *text*.

        Args:
            text: The partial word being completed.
            state: Index into the candidate list (0, 1, 2, …).

        Returns:
            The candidate at *state*, or ``None`` when exhausted.

        """
        line = readline.get_line_buffer()
        candidates = self.completions(text, line)
        if state < len(candidates):
            return candidates[state]
        return None

    def completions(self, text: str, line: str) -> list[str]:
        """Return completion candidates based on context.

        Args:
            text: The partial word under the cursor.
            line: The full input line so far.

        Returns:
            Sorted list of matching candidates.

        """
        words = line.lstrip().split()

        # No words yet, or still typing the first word → command completion
        if not words or (len(words) == 1 and not line.endswith(" ")):
            return self._complete_commands(text)

        return self._complete_argument(words[0], text)

    # -- private completers ------------------------------------------------

    def _complete_argument(self, cmd: str, text: str) -> list[str]:
        """Dispatch argument completion based on the command and context."""
        if text.startswith("-"):
            return self._complete_flags(cmd, text)
        if cmd in _COMMAND_ARGUMENT:
            return self._complete_commands(text)
        if cmd in _USER_ARGUMENT:
            return sorted(
                user.name
                for user in self._session.users.list_users()
                if user.name.startswith(text)
            )
        return self._complete_paths(text)

    def _complete_commands(self, text: str) -> list[str]:
        """Complete command names from the registry."""
        return sorted(name for name in self._session.registry.names if name.startswith(text))

    def _complete_flags(self, cmd: str, text: str) -> list[str]:
        """Complete ``--flag`` spellings for the command being typed."""
        command = self._session.registry.get(cmd)
        if command is None:
            return []
        spellings = [
            f"-{name}" if len(name) == 1 else f"--{name}"
            for flag in command.flags
            for name in flag.names
        ]
        return sorted(s for s in spellings if s.startswith(text))

    def _complete_paths(self, text: str) -> list[str]:
        """Complete filesystem paths, absolute or relative.

        Split the partial path into a directory and a name prefix, look
        the directory up from the working directory, and filter its
        entries by prefix.  Directories get a trailing ``/`` suffix.
        """
        last_slash = text.rfind("/")
        directory_text = text[: last_slash + 1]
        prefix = text[last_slash + 1 :]

        directory = self._session.filesystem.find_directory(
            directory_text or ".", self._session.current_working_directory
        )
        if directory is None:
            return []

        candidates: list[str] = []
        for entry in directory.contents:
            if entry.name.startswith(prefix):
                full = directory_text + entry.name
                if isinstance(entry, Directory):
                    full += "/"
                candidates.append(full)
        return sorted(candidates)
