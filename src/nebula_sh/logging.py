"""Reporting sink — the log buffer every layer writes to.

The core never prints.  The filesystem, the command driver and the
built-in commands all report through a ``Logger``, and the front ends
(REPL, web terminal) decide how to render what was logged:

- **LogLevel** — severity levels ordered for filtering (DEBUG < ERROR).
  ``LOG`` is plain command output with no severity decoration.
- **LogEntry** — a single structured record (level, message, source).
- **Logger** — an append-only buffer with filtering, draining and clearing.

Design choices:
    - **IntEnum for levels** so they compare naturally with ``<``.
    - **Frozen dataclass for entries** — log records should be immutable.
    - **Index-based draining** — a front end remembers how many entries
      it has already shown and asks for everything ``since`` that point.
"""

from dataclasses import dataclass
from enum import IntEnum


class LogLevel(IntEnum):
    """Severity levels for log entries."""

    DEBUG = 0
    LOG = 1
    INFO = 2
    WARNING = 3
    ERROR = 4


@dataclass(frozen=True)
class LogEntry:
    """A single structured log record.

    Attributes:
        level: The severity of this event.
        message: A human-readable description of what happened.
        source: The subsystem that generated the event (e.g. "driver").

    """

    level: LogLevel
    message: str
    source: str

    def __str__(self) -> str:
        """Format as ``[LEVEL] message``, or the bare message for output."""
        if self.level is LogLevel.LOG:
            return self.message
        return f"[{self.level.name}] {self.message}"


class Logger:
    """Append-only log buffer with filtering.

    The in-memory equivalent of a terminal's scrollback: commands append
    to it, the front end reads from it.
    """

    def __init__(self) -> None:
        """Create an empty logger."""
        self._entries: list[LogEntry] = []
        self._clears = 0

    @property
    def entries(self) -> list[LogEntry]:
        """Return all log entries in chronological order."""
        return list(self._entries)

    def __len__(self) -> int:
        """Return the number of entries logged so far."""
        return len(self._entries)

    def log(self, level: LogLevel, message: str, *, source: str) -> None:
        """Append a new entry to the log.

        Args:
            level: Severity of the event.
            message: Human-readable event description.
            source: Subsystem that generated the event.

        """
        self._entries.append(LogEntry(level=level, message=message, source=source))

    def filter(
        self,
        *,
        min_level: LogLevel | None = None,
        source: str | None = None,
    ) -> list[LogEntry]:
        """Return entries matching the given criteria.

        Args:
            min_level: If set, only return entries at or above this level.
            source: If set, only return entries from this source.

        Returns:
            A filtered list of log entries.

        """
        result = self._entries
        if min_level is not None:
            result = [e for e in result if e.level >= min_level]
        if source is not None:
            result = [e for e in result if e.source == source]
        return result if result is not self._entries else list(result)

    def since(self, index: int) -> list[LogEntry]:
        """Return the entries logged after the first *index* entries."""
        return self._entries[index:]

    @property
    def clears(self) -> int:
        """Return how many times the log has been cleared."""
        return self._clears

    def clear(self) -> None:
        """Remove all log entries."""
        self._entries.clear()
        self._clears += 1
