"""Privilege levels — the ordered scale commands are gated on.

Every command declares the lowest privilege allowed to run it, and
every user carries a privilege.  The check is a plain comparison.
"""

from enum import IntEnum


class Privilege(IntEnum):
    """Privilege levels, lowest first.

    IntEnum so that ``current >= required`` is the whole check.
    """

    USER = 0
    ADMIN = 1
    ROOT = 2


def check_privilege(privilege: Privilege, required: Privilege) -> bool:
    """Return True if *privilege* is at least *required*."""
    return privilege >= required


def parse_privilege(name: str) -> Privilege:
    """Look up a privilege by name, case-insensitively.

    Raises:
        ValueError: If *name* is not a privilege level.

    """
    try:
        return Privilege[name.upper()]
    except KeyError:
        valid = ", ".join(p.name.capitalize() for p in Privilege)
        msg = f'Invalid privileges "{name}" (valid: {valid})'
        raise ValueError(msg) from None
