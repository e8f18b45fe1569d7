"""Tests for users, the user manager and privilege levels."""

import pytest

from nebula_sh.privileges import Privilege, check_privilege, parse_privilege
from nebula_sh.users import ROOT_USERNAME, User, UserManager


class TestPrivilege:
    """Verify privilege comparison and parsing."""

    def test_ordering(self) -> None:
        """USER < ADMIN < ROOT."""
        assert Privilege.USER < Privilege.ADMIN < Privilege.ROOT

    def test_check_privilege(self) -> None:
        """Holding a level at or above the requirement should pass."""
        assert check_privilege(Privilege.ADMIN, Privilege.ADMIN)
        assert check_privilege(Privilege.ROOT, Privilege.ADMIN)
        assert not check_privilege(Privilege.USER, Privilege.ADMIN)

    def test_parse_is_case_insensitive(self) -> None:
        """Privilege names should parse in any case."""
        assert parse_privilege("Admin") is Privilege.ADMIN
        assert parse_privilege("root") is Privilege.ROOT

    def test_parse_unknown(self) -> None:
        """An unknown name should raise with the valid choices."""
        with pytest.raises(ValueError, match=r"valid: User, Admin, Root"):
            parse_privilege("wizard")


class TestUser:
    """Verify the user record."""

    def test_default_privilege(self) -> None:
        """A user should default to USER privilege."""
        assert User(name="alice").privilege is Privilege.USER

    def test_repr(self) -> None:
        """repr should show the privilege by name."""
        assert repr(User(name="bob", privilege=Privilege.ADMIN)) == (
            "User(name='bob', privilege=ADMIN)"
        )


class TestUserManager:
    """Verify the user registry."""

    def test_root_exists(self) -> None:
        """A new manager should contain root with ROOT privilege."""
        root = UserManager().get_user(ROOT_USERNAME)
        assert root is not None
        assert root.privilege is Privilege.ROOT

    def test_create_and_list(self) -> None:
        """Created users should be listed after root, in order."""
        manager = UserManager()
        manager.create_user("alice")
        manager.create_user("bob", Privilege.ADMIN)
        assert [u.name for u in manager.list_users()] == ["root", "alice", "bob"]

    def test_duplicate_raises(self) -> None:
        """Creating an existing name should raise."""
        manager = UserManager()
        with pytest.raises(ValueError, match="already exists"):
            manager.create_user("root")

    def test_reset_keeps_only_root(self) -> None:
        """reset should forget everyone but root."""
        manager = UserManager()
        manager.create_user("alice")
        manager.reset()
        assert [u.name for u in manager.list_users()] == ["root"]
