"""The session — one user at one terminal.

A ``Session`` is the state every command runs against:

- **current_working_directory** — where relative paths start.
- **current_user** / **current_privilege** — who is typing, and what
  they may run.  Setting the user sets the privilege with it.
- **history** — every line that reached a handler, oldest first.
- **registry**, **driver**, **filesystem**, **logger**, **users** — the
  collaborators, owned by the session so that two sessions never share
  state by accident.

Front ends call ``run_command`` with whatever the user typed and read
the results back out of ``logger``.

``create_session`` is the factory: it builds the registry from a list
of commands (the built-ins by default) so tests can make as many
isolated sessions as they like.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from nebula_sh.commands.builtins import DEFAULT_COMMANDS
from nebula_sh.commands.driver import CommandDriver, DispatchStatus
from nebula_sh.commands.registry import CommandRegistry
from nebula_sh.config import ShellConfig
from nebula_sh.fs.filesystem import Filesystem
from nebula_sh.logging import Logger
from nebula_sh.users import User, UserManager

if TYPE_CHECKING:
    from collections.abc import Iterable

    from nebula_sh.commands.command import Command
    from nebula_sh.fs.nodes import Directory
    from nebula_sh.privileges import Privilege


class Session:
    """Mutable per-user state that drives command dispatch."""

    def __init__(
        self,
        *,
        registry: CommandRegistry,
        config: ShellConfig | None = None,
        logger: Logger | None = None,
    ) -> None:
        """Create a session at the root of an empty filesystem.

        Args:
            registry: The commands this session can run.
            config: Session settings; defaults apply when omitted.
            logger: Where everything is reported.  A fresh logger is
                created when omitted.

        """
        self._config = config if config is not None else ShellConfig()
        self._logger = logger if logger is not None else Logger()
        self._registry = registry
        self._driver = CommandDriver(registry)
        self._filesystem = Filesystem(logger=self._logger)
        self._users = UserManager()
        self._history: list[str] = []
        self.running = True
        self.current_working_directory: Directory = self._filesystem.root
        self._current_user = self._default_user()
        self.current_privilege: Privilege = self._current_user.privilege

    # -- collaborators ------------------------------------------------------

    @property
    def config(self) -> ShellConfig:
        """Return the settings this session was built with."""
        return self._config

    @property
    def logger(self) -> Logger:
        """Return the reporting sink."""
        return self._logger

    @property
    def registry(self) -> CommandRegistry:
        """Return the command registry."""
        return self._registry

    @property
    def driver(self) -> CommandDriver:
        """Return the command driver."""
        return self._driver

    @property
    def filesystem(self) -> Filesystem:
        """Return the filesystem."""
        return self._filesystem

    @property
    def users(self) -> UserManager:
        """Return the user registry."""
        return self._users

    # -- user ---------------------------------------------------------------

    @property
    def current_user(self) -> User:
        """Return the user the session is running as."""
        return self._current_user

    @current_user.setter
    def current_user(self, user: User) -> None:
        """Switch user; the privilege follows the user."""
        self._current_user = user
        self.current_privilege = user.privilege

    def get_user(self, name: str) -> User | None:
        """Look up a user by name."""
        return self._users.get_user(name)

    def _default_user(self) -> User:
        """Return the configured starting user, creating it if needed."""
        user = self._users.get_user(self._config.default_user)
        if user is None:
            user = self._users.create_user(
                self._config.default_user, self._config.default_privilege
            )
        return user

    # -- commands -----------------------------------------------------------

    @property
    def history(self) -> list[str]:
        """Return the command history, oldest first."""
        return list(self._history)

    def clear_history(self) -> None:
        """Forget every recorded command."""
        self._history.clear()

    def run_command(self, line: str) -> DispatchStatus:
        """Run one line of input.

        Blank lines do nothing.  A line is added to the history when its
        handler ran, whether or not the handler reported an error.

        Returns:
            Where the line stopped in the dispatch pipeline.

        """
        if not line.strip():
            return DispatchStatus.EMPTY
        status = self._driver.run_command_string(line, self)
        if status.invoked:
            self._record(line)
        return status

    def _record(self, line: str) -> None:
        self._history.append(line)
        limit = self._config.history_limit
        if limit and len(self._history) > limit:
            del self._history[: len(self._history) - limit]

    def prompt(self) -> str:
        """Return the prompt, e.g. ``nebula-sh root:/docs$ ``."""
        return (
            f"{self._config.hostname} {self._current_user.name}:"
            f"{self.current_working_directory.path}$ "
        )

    def reset(self) -> None:
        """Discard everything and start again from an empty root.

        The tree, history, users and log are all cleared, and the
        session is back in the root directory as the default user.
        """
        self._filesystem.reset()
        self.current_working_directory = self._filesystem.root
        self._history.clear()
        self._users.reset()
        self.current_user = self._default_user()
        self._logger.clear()
        self.running = True


def create_session(
    commands: Iterable[Command] | None = None,
    *,
    config: ShellConfig | None = None,
    logger: Logger | None = None,
) -> Session:
    """Build an isolated session with its own registry.

    Args:
        commands: Commands to register, in order.  The built-in set is
            used when omitted.
        config: Session settings.
        logger: Reporting sink to share with the caller.

    Raises:
        ValueError: If the config asks for a strict registry and two
            commands share a name.

    """
    config = config if config is not None else ShellConfig()
    registry = CommandRegistry(
        DEFAULT_COMMANDS if commands is None else commands,
        strict=config.strict_registry,
    )
    return Session(registry=registry, config=config, logger=logger)
