"""Command descriptors — the static description of one shell command.

A ``Command`` bundles everything the driver needs to run a command
without knowing anything about what it does:

- **name** and **description** (for lookup and ``help``).
- **arguments** — ordered positional specs.
- **flags** — named options, each with a primary name and aliases.
- **privilege** — the lowest privilege allowed to run it.
- **handler** — the function that does the work.

Every argument and flag carries an explicit ``ArgType``.  The driver
coerces raw tokens against it once, so a handler always receives
values of the declared type.
"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass, field
from enum import StrEnum
from typing import TYPE_CHECKING, TypeAlias

from nebula_sh.logging import LogLevel
from nebula_sh.privileges import Privilege

if TYPE_CHECKING:
    from nebula_sh.fs.nodes import Directory
    from nebula_sh.session import Session

Value: TypeAlias = bool | int | float | str


class ArgType(StrEnum):
    """The primitive type of an argument or flag value."""

    BOOLEAN = "boolean"
    STRING = "string"
    NUMBER = "number"

    def accepts(self, value: object) -> bool:
        """Return True if *value* already has this type."""
        match self:
            case ArgType.BOOLEAN:
                return isinstance(value, bool)
            case ArgType.NUMBER:
                return isinstance(value, int | float) and not isinstance(value, bool)
            case ArgType.STRING:
                return isinstance(value, str)


@dataclass(frozen=True)
class CommandArgument:
    """A positional argument.

    A required argument with no default aborts dispatch when omitted.
    """

    name: str
    description: str = ""
    type: ArgType = ArgType.STRING
    default: Value | None = None
    required: bool = False

    def __post_init__(self) -> None:
        """Reject a default that does not match the declared type."""
        if self.default is not None and not self.type.accepts(self.default):
            msg = f'Default for argument "{self.name}" is not a {self.type}'
            raise ValueError(msg)


@dataclass(frozen=True)
class CommandFlag:
    """A named option such as ``--recursive`` / ``-r``.

    ``names[0]`` is the primary name; the rest are aliases.  Whatever
    alias the user types, the value lands under the primary name.
    """

    names: tuple[str, ...]
    description: str = ""
    type: ArgType = ArgType.BOOLEAN
    default: Value = False

    def __post_init__(self) -> None:
        """Reject an empty name list or a mistyped default."""
        if not self.names:
            msg = "A flag needs at least one name"
            raise ValueError(msg)
        if not self.type.accepts(self.default):
            msg = f'Default for flag "{self.primary}" is not a {self.type}'
            raise ValueError(msg)

    @property
    def primary(self) -> str:
        """Return the primary name."""
        return self.names[0]


@dataclass
class CommandOptions:
    """Everything a handler is given when its command runs."""

    args: list[Value | None]
    flags: dict[str, Value]
    current_working_directory: Directory
    session: Session
    privilege: Privilege
    command_name: str = ""

    def log(self, message: str, level: LogLevel = LogLevel.LOG) -> None:
        """Report *message* through the session's logger."""
        self.session.logger.log(level, message, source=self.command_name)


Handler: TypeAlias = Callable[[CommandOptions], None]


@dataclass(frozen=True)
class Command:
    """Static metadata and handler for one command."""

    name: str
    description: str
    handler: Handler = field(compare=False)
    arguments: tuple[CommandArgument, ...] = ()
    flags: tuple[CommandFlag, ...] = ()
    privilege: Privilege = Privilege.USER

    def default_flags(self) -> dict[str, Value]:
        """Return every flag's default value, keyed by primary name."""
        return {flag.primary: flag.default for flag in self.flags}

    def find_flag(self, name: str) -> CommandFlag | None:
        """Return the flag that *name* is the primary name or an alias of."""
        for flag in self.flags:
            if name in flag.names:
                return flag
        return None

    def usage(self) -> str:
        """Return a one-line usage string like ``rm <path> [--recursive]``."""
        words = [self.name]
        for argument in self.arguments:
            words.append(f"<{argument.name}>" if argument.required else f"[{argument.name}]")
        words.extend(f"[--{flag.primary}]" for flag in self.flags)
        return " ".join(words)

    def help_text(self) -> str:
        """Return the full help text shown by ``help <command>``."""
        lines = [f"{self.name} - {self.description}", f"  Usage: {self.usage()}"]
        if self.arguments:
            lines.append("  Arguments:")
            for argument in self.arguments:
                default = "" if argument.default is None else f" (default: {argument.default!r})"
                lines.append(f"    {argument.name}: {argument.description}{default}")
        if self.flags:
            lines.append("  Flags:")
            for flag in self.flags:
                names = ", ".join(_flag_spelling(name) for name in flag.names)
                lines.append(f"    {names}: {flag.description}")
        if self.privilege is not Privilege.USER:
            lines.append(f"  Requires: {self.privilege.name.capitalize()}")
        return "\n".join(lines)


def _flag_spelling(name: str) -> str:
    """Return ``-r`` for one-letter names and ``--recursive`` otherwise."""
    return f"-{name}" if len(name) == 1 else f"--{name}"
