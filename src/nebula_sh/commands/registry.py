"""Command registry — the set of commands a session knows about.

Registration order is kept: ``help --all`` lists commands in the order
they were registered, and when two commands share a name the first one
wins lookup.  A strict registry refuses the second registration instead.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from collections.abc import Iterable, Iterator

    from nebula_sh.commands.command import Command


class CommandRegistry:
    """An ordered collection of commands keyed by name."""

    def __init__(self, commands: Iterable[Command] = (), *, strict: bool = False) -> None:
        """Create a registry, optionally pre-populated.

        Args:
            commands: Commands to register, in order.
            strict: If True, registering a name twice raises.

        """
        self._commands: list[Command] = []
        self._strict = strict
        for command in commands:
            self.register(command)

    def register(self, command: Command) -> None:
        """Add *command* to the registry.

        Raises:
            ValueError: If the registry is strict and the name is taken.

        """
        if self._strict and self.get(command.name) is not None:
            msg = f'Command "{command.name}" is already registered'
            raise ValueError(msg)
        self._commands.append(command)

    def get(self, name: str) -> Command | None:
        """Return the first command registered under *name*."""
        for command in self._commands:
            if command.name == name:
                return command
        return None

    @property
    def names(self) -> list[str]:
        """Return the distinct command names in registration order."""
        return list(dict.fromkeys(command.name for command in self._commands))

    def __iter__(self) -> Iterator[Command]:
        """Iterate over commands in registration order."""
        return iter(list(self._commands))

    def __len__(self) -> int:
        """Return the number of registered commands."""
        return len(self._commands)

    def __contains__(self, name: object) -> bool:
        """Return True if a command called *name* is registered."""
        return isinstance(name, str) and self.get(name) is not None
