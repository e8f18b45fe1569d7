"""Tests for the user commands — whoami, listusers, useradd, su.

A fresh session runs as ``root``.  ``useradd`` needs Admin or higher,
and nobody can create a user more privileged than themselves.
"""

from nebula_sh.commands.driver import DispatchStatus
from nebula_sh.logging import LogLevel
from nebula_sh.privileges import Privilege
from nebula_sh.session import Session, create_session


def _session(*lines: str) -> Session:
    """Create a session, run *lines*, and clear the log."""
    session = create_session()
    for line in lines:
        session.run_command(line)
    session.logger.clear()
    return session


def _messages(session: Session, level: LogLevel) -> list[str]:
    """Return the messages logged at *level*."""
    return [entry.message for entry in session.logger.entries if entry.level is level]


class TestWhoami:
    """Verify the current user is reported."""

    def test_root_by_default(self) -> None:
        """A fresh session should run as root."""
        session = _session()
        session.run_command("whoami")
        assert _messages(session, LogLevel.LOG) == ["root"]


class TestUseradd:
    """Verify user creation."""

    def test_add_default_privilege(self) -> None:
        """A new user should get User privilege by default."""
        session = _session()
        session.run_command("useradd alice")
        alice = session.get_user("alice")
        assert alice is not None
        assert alice.privilege is Privilege.USER
        assert _messages(session, LogLevel.INFO) == ['Added user "alice"']

    def test_add_with_privilege(self) -> None:
        """The privilege name should be case-insensitive."""
        session = _session()
        session.run_command("useradd bob admin")
        bob = session.get_user("bob")
        assert bob is not None
        assert bob.privilege is Privilege.ADMIN

    def test_invalid_privilege(self) -> None:
        """An unknown privilege name should be reported."""
        session = _session()
        session.run_command("useradd carol wizard")
        assert session.get_user("carol") is None
        assert _messages(session, LogLevel.ERROR) == [
            'Invalid privileges "wizard" (valid: User, Admin, Root)'
        ]

    def test_duplicate_user(self) -> None:
        """Adding an existing name should be reported."""
        session = _session("useradd alice")
        session.run_command("useradd alice")
        assert _messages(session, LogLevel.ERROR) == ['User "alice" already exists']

    def test_user_cannot_run_useradd(self) -> None:
        """A plain user should be denied useradd."""
        session = _session("useradd alice", "su alice")
        assert session.run_command("useradd mallory") is DispatchStatus.DENIED
        assert session.get_user("mallory") is None

    def test_admin_cannot_create_root(self) -> None:
        """An admin should not be able to hand out Root."""
        session = _session("useradd bob admin", "su bob")
        session.run_command("useradd eve root")
        assert session.get_user("eve") is None
        assert len(_messages(session, LogLevel.ERROR)) == 1

    def test_admin_can_create_admin(self) -> None:
        """An admin may create another admin."""
        session = _session("useradd bob admin", "su bob")
        session.run_command("useradd dave admin")
        assert session.get_user("dave") is not None


class TestListusers:
    """Verify the user listing."""

    def test_lists_with_privileges(self) -> None:
        """Every user should be listed with their privilege, in order."""
        session = _session("useradd alice", "useradd bob admin")
        session.run_command("listusers")
        assert _messages(session, LogLevel.LOG) == [
            "root (Root)",
            "alice (User)",
            "bob (Admin)",
        ]


class TestSu:
    """Verify switching users."""

    def test_switch_changes_user_and_privilege(self) -> None:
        """su should switch the user and their privilege together."""
        session = _session("useradd alice")
        session.run_command("su alice")
        assert session.current_user.name == "alice"
        assert session.current_privilege is Privilege.USER

    def test_su_without_argument_returns_to_root(self) -> None:
        """su with no name should switch back to root."""
        session = _session("useradd alice", "su alice")
        session.run_command("su")
        assert session.current_user.name == "root"
        assert session.current_privilege is Privilege.ROOT

    def test_unknown_user(self) -> None:
        """su to a missing user should report and not switch."""
        session = _session()
        session.run_command("su ghost")
        assert session.current_user.name == "root"
        assert _messages(session, LogLevel.ERROR) == ['User "ghost" not found']

    def test_prompt_follows_user(self) -> None:
        """The prompt should show the current user."""
        session = _session("useradd alice", "su alice")
        assert session.prompt() == "nebula-sh alice:/$ "
