"""Built-in commands registered in every default session.

Re-exports the individual descriptors so tests and embedders can build
registries from a subset::

    from nebula_sh.commands.builtins import LS, MKDIR
"""

from nebula_sh.commands.builtins.files import (
    CAT,
    CD,
    FILE_COMMANDS,
    LS,
    MKDIR,
    PWD,
    RM,
    TOUCH,
    WRITE,
)
from nebula_sh.commands.builtins.shell import CLEAR, EXIT, HELP, HISTORY, SHELL_COMMANDS
from nebula_sh.commands.builtins.users import LISTUSERS, SU, USER_COMMANDS, USERADD, WHOAMI

DEFAULT_COMMANDS = FILE_COMMANDS + USER_COMMANDS + SHELL_COMMANDS

__all__ = [
    "CAT",
    "CD",
    "CLEAR",
    "DEFAULT_COMMANDS",
    "EXIT",
    "HELP",
    "HISTORY",
    "LISTUSERS",
    "LS",
    "MKDIR",
    "PWD",
    "RM",
    "SU",
    "TOUCH",
    "USERADD",
    "WHOAMI",
    "WRITE",
]
