"""Users — who is sitting at the terminal.

**User** — a name plus a privilege level.  The privilege is what the
command driver actually checks; the name is for humans and prompts.

**UserManager** — a registry of users keyed by name.  Think of
``/etc/passwd``.  The manager always holds a ``root`` user with
``Privilege.ROOT``.
"""

from dataclasses import dataclass

from nebula_sh.privileges import Privilege

ROOT_USERNAME = "root"


@dataclass(frozen=True)
class User:
    """An identity in the system.

    Frozen dataclass gives us immutability and ``__eq__`` / ``__hash__``
    for free.
    """

    name: str
    privilege: Privilege = Privilege.USER

    def __repr__(self) -> str:
        """Return a readable representation."""
        return f"User(name={self.name!r}, privilege={self.privilege.name})"


class UserManager:
    """Registry of users, in creation order.

    Auto-creates root on initialisation.
    """

    def __init__(self) -> None:
        """Create a manager with only the root user."""
        self._users: dict[str, User] = {}
        self.reset()

    def reset(self) -> None:
        """Forget every user except root."""
        self._users = {ROOT_USERNAME: User(name=ROOT_USERNAME, privilege=Privilege.ROOT)}

    def create_user(self, name: str, privilege: Privilege = Privilege.USER) -> User:
        """Create a new user.

        Args:
            name: The user name.
            privilege: The privilege level the user runs with.

        Returns:
            The newly created user.

        Raises:
            ValueError: If the name is already taken.

        """
        if name in self._users:
            msg = f'User "{name}" already exists'
            raise ValueError(msg)
        user = User(name=name, privilege=privilege)
        self._users[name] = user
        return user

    def get_user(self, name: str) -> User | None:
        """Look up a user by name.

        Returns:
            The user, or None if not found.

        """
        return self._users.get(name)

    def list_users(self) -> list[User]:
        """Return all registered users."""
        return list(self._users.values())
