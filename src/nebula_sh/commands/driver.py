"""The command driver — from a raw command line to a handler call.

``run_command_string`` is the whole pipeline:

1. **Quotes** — ``"..."`` and ``'...'`` runs are unwrapped, and the
   spaces inside them are swapped for a placeholder so the next step
   cannot split them.
2. **Tokenize** — split on spaces, drop empty tokens, restore
   placeholders.  A quote character left over at this point had no
   partner and is rejected.
3. **Lookup** — the first token names the command.
4. **Classify** — tokens matching ``-f``, ``--flag``, ``--flag=value``
   or ``--flag:value`` are flags, everything else is positional.
5. **Coerce** — raw text becomes the declared type of the argument or
   flag it binds to.
6. **Aliases** — every alias folds into the flag's primary name; the
   last occurrence wins.
7. **Defaults** — absent flags and arguments take their defaults; a
   required argument without one aborts.
8. **Privilege** — the session must hold at least the command's level.
9. **Invoke** — any exception from the handler is reported, never
   propagated.

Nothing here raises to the caller.  Every failure is reported to the
session's logger and summarised in the returned ``DispatchStatus``.
"""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from enum import StrEnum
from typing import TYPE_CHECKING

from nebula_sh.commands.command import ArgType, Command, CommandOptions, Value
from nebula_sh.logging import LogLevel
from nebula_sh.privileges import check_privilege

if TYPE_CHECKING:
    from nebula_sh.commands.registry import CommandRegistry
    from nebula_sh.session import Session

_SOURCE = "driver"

# Match 1: the flag name.  Match 2: the value, if any.
_FLAG_PATTERN = re.compile(r"^--?([A-Za-z0-9-]+)(?:[=:](.*))?$")

# The closing quote must be the same character as the opening one.
_QUOTE_PATTERN = re.compile(r"\"([^\"]*)\"|'([^']*)'")

_NUMBER_PATTERN = re.compile(r"^[+-]?(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?$")

# Characters hidden inside quoted runs until tokenizing is done.
_PLACEHOLDERS = {" ": "\x00", '"': "\x01", "'": "\x02"}

_QUOTES = ('"', "'")


class DispatchStatus(StrEnum):
    """How far a command line got through the pipeline."""

    EMPTY = "empty"
    NOT_FOUND = "not_found"
    INVALID = "invalid"
    DENIED = "denied"
    FAILED = "failed"
    OK = "ok"

    @property
    def invoked(self) -> bool:
        """Return True if the handler was called."""
        return self in (DispatchStatus.OK, DispatchStatus.FAILED)


class DispatchError(Exception):
    """Raised while binding a command line that cannot be run.

    Carries the level it should be reported at.
    """

    def __init__(self, message: str, level: LogLevel = LogLevel.ERROR) -> None:
        """Create the error with its report level."""
        super().__init__(message)
        self.level = level


@dataclass
class ParsedLine:
    """A tokenized command line, before any binding to a command."""

    name: str
    args: list[str] = field(default_factory=list)  # pyright: ignore[reportUnknownVariableType]
    flags: list[tuple[str, str | None]] = field(default_factory=list)  # pyright: ignore[reportUnknownVariableType]


def protect_quotes(line: str) -> str:
    """Unwrap quoted runs, hiding their spaces and quote characters."""

    def _protect(match: re.Match[str]) -> str:
        inner = match.group(1) if match.group(1) is not None else match.group(2)
        for character, placeholder in _PLACEHOLDERS.items():
            inner = inner.replace(character, placeholder)
        return inner

    return _QUOTE_PATTERN.sub(_protect, line)


def tokenize(line: str) -> list[str]:
    """Split *line* into tokens, keeping quoted runs together.

    Examples::

        tokenize('mkdir "my folder"')  → ["mkdir", "my folder"]
        tokenize("cd 'a b' -r")        → ["cd", "a b", "-r"]

    Raises:
        DispatchError: If a quote character has no matching partner.

    """
    tokens = [token for token in protect_quotes(line).split(" ") if token]
    restored: list[str] = []
    for token in tokens:
        if any(quote in token for quote in _QUOTES):
            msg = f"Quotes are not supported in values: {token}"
            raise DispatchError(msg, LogLevel.WARNING)
        text = token
        for character, placeholder in _PLACEHOLDERS.items():
            text = text.replace(placeholder, character)
        restored.append(text)
    return restored


def parse_line(line: str) -> ParsedLine | None:
    """Tokenize *line* and sort its tokens into flags and positionals.

    Returns:
        The parsed line, or None if there are no tokens.

    Raises:
        DispatchError: If a quote character has no matching partner.

    """
    tokens = tokenize(line)
    if not tokens:
        return None
    parsed = ParsedLine(name=tokens[0])
    for token in tokens[1:]:
        match = _FLAG_PATTERN.match(token)
        if match is None:
            parsed.args.append(token)
        else:
            parsed.flags.append((match.group(1), match.group(2)))
    return parsed


def parse_value(raw: str) -> Value:
    """Infer a value's type from its text.

    ``"true"`` / ``"false"`` become booleans, decimal numbers become
    ``int`` or ``float``, anything else stays a string.
    """
    if raw == "true":
        return True
    if raw == "false":
        return False
    number = _parse_number(raw)
    return raw if number is None else number


def coerce(raw: str, arg_type: ArgType, label: str) -> Value:
    """Convert *raw* to *arg_type*.

    Raises:
        DispatchError: If *raw* is not a valid value of that type.

    """
    match arg_type:
        case ArgType.STRING:
            return raw
        case ArgType.BOOLEAN:
            if raw in ("true", "false"):
                return raw == "true"
        case ArgType.NUMBER:
            number = _parse_number(raw)
            if number is not None:
                return number
    msg = f'Invalid value for {label}: "{raw}" is not a {arg_type}'
    raise DispatchError(msg)


def _parse_number(raw: str) -> int | float | None:
    if _NUMBER_PATTERN.match(raw) is None:
        return None
    if any(character in raw for character in ".eE"):
        return float(raw)
    return int(raw)


class CommandDriver:
    """Parses command lines and runs them against a registry."""

    def __init__(self, registry: CommandRegistry) -> None:
        """Create a driver that looks commands up in *registry*."""
        self._registry = registry

    @property
    def registry(self) -> CommandRegistry:
        """Return the registry commands are looked up in."""
        return self._registry

    def run_command_string(self, line: str, session: Session) -> DispatchStatus:
        """Parse and run one command line.

        Args:
            line: The raw text the user typed.
            session: The session to run it in.

        Returns:
            Where the line stopped in the pipeline.

        """
        logger = session.logger
        try:
            parsed = parse_line(line)
        except DispatchError as e:
            logger.log(e.level, str(e), source=_SOURCE)
            return DispatchStatus.INVALID
        if parsed is None:
            return DispatchStatus.EMPTY

        command = self._registry.get(parsed.name)
        if command is None:
            logger.log(LogLevel.ERROR, f'Command "{parsed.name}" not found', source=_SOURCE)
            return DispatchStatus.NOT_FOUND

        try:
            args = self._bind_arguments(command, parsed.args)
            flags = self._bind_flags(command, parsed.flags, session)
        except DispatchError as e:
            logger.log(e.level, str(e), source=_SOURCE)
            return DispatchStatus.INVALID

        return self.run_command(command, session, args=args, flags=flags)

    def run_command(
        self,
        command: Command | str,
        session: Session,
        *,
        args: list[Value | None] | None = None,
        flags: dict[str, Value] | None = None,
    ) -> DispatchStatus:
        """Run an already-parsed command: privilege check, then the handler.

        Flags not given fall back to their defaults.  Arguments are passed
        through as they are.
        """
        logger = session.logger
        if isinstance(command, str):
            found = self._registry.get(command)
            if found is None:
                logger.log(LogLevel.ERROR, f'Command "{command}" not found', source=_SOURCE)
                return DispatchStatus.NOT_FOUND
            command = found

        if not check_privilege(session.current_privilege, command.privilege):
            logger.log(
                LogLevel.ERROR,
                f'Insufficient privileges to run command "{command.name}"',
                source=_SOURCE,
            )
            return DispatchStatus.DENIED

        options = CommandOptions(
            args=list(args) if args is not None else [],
            flags={**command.default_flags(), **(flags or {})},
            current_working_directory=session.current_working_directory,
            session=session,
            privilege=session.current_privilege,
            command_name=command.name,
        )
        logger.log(
            LogLevel.DEBUG,
            f"Running {command.name} args={options.args!r} flags={options.flags!r}",
            source=_SOURCE,
        )

        try:
            command.handler(options)
        except Exception as e:  # noqa: BLE001
            logger.log(LogLevel.ERROR, f"{type(e).__name__}: {e}", source=_SOURCE)
            return DispatchStatus.FAILED
        return DispatchStatus.OK

    @staticmethod
    def _bind_arguments(command: Command, raw_args: list[str]) -> list[Value | None]:
        """Coerce positionals and fill in defaults for the missing ones."""
        args: list[Value | None] = []
        for index, spec in enumerate(command.arguments):
            if index < len(raw_args):
                args.append(coerce(raw_args[index], spec.type, f'argument "{spec.name}"'))
            elif spec.required and spec.default is None:
                msg = f'Argument "{spec.name}" is required'
                raise DispatchError(msg)
            else:
                args.append(spec.default)
        # Extra positionals are passed through with inferred types.
        args.extend(parse_value(raw) for raw in raw_args[len(command.arguments) :])
        return args

    @staticmethod
    def _bind_flags(
        command: Command,
        raw_flags: list[tuple[str, str | None]],
        session: Session,
    ) -> dict[str, Value]:
        """Fold aliases into primary names and coerce the values."""
        flags = command.default_flags()
        for name, raw in raw_flags:
            spec = command.find_flag(name)
            if spec is None:
                session.logger.log(
                    LogLevel.WARNING,
                    f'Unknown flag "{name}" for command "{command.name}"',
                    source=_SOURCE,
                )
                continue
            if not raw:
                if spec.type is not ArgType.BOOLEAN:
                    msg = f'Flag "{name}" expects a {spec.type} value'
                    raise DispatchError(msg)
                flags[spec.primary] = True
            else:
                flags[spec.primary] = coerce(raw, spec.type, f'flag "{name}"')
        return flags
