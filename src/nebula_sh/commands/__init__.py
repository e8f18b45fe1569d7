"""Command subsystem — descriptors, the registry, and the driver.

Re-exports public symbols so callers can write::

    from nebula_sh.commands import Command, CommandDriver, CommandRegistry
"""

from nebula_sh.commands.command import (
    ArgType,
    Command,
    CommandArgument,
    CommandFlag,
    CommandOptions,
    Handler,
    Value,
)
from nebula_sh.commands.driver import (
    CommandDriver,
    DispatchError,
    DispatchStatus,
    parse_line,
    parse_value,
    tokenize,
)
from nebula_sh.commands.registry import CommandRegistry

__all__ = [
    "ArgType",
    "Command",
    "CommandArgument",
    "CommandDriver",
    "CommandFlag",
    "CommandOptions",
    "CommandRegistry",
    "DispatchError",
    "DispatchStatus",
    "Handler",
    "Value",
    "parse_line",
    "parse_value",
    "tokenize",
]
