"""Shell commands — help, history, clear, exit."""

from __future__ import annotations

from nebula_sh.commands.command import Command, CommandArgument, CommandFlag, CommandOptions
from nebula_sh.logging import LogLevel


def _help(options: CommandOptions) -> None:
    registry = options.session.registry

    if options.flags["all"]:
        for command in registry:
            options.log(command.help_text() + "\n", LogLevel.INFO)
        return

    name = str(options.args[0])
    if name:
        command = registry.get(name)
        if command is None:
            options.log(f"Command not found: {name}", LogLevel.ERROR)
        else:
            options.log(command.help_text(), LogLevel.INFO)
        return

    options.log(
        f"{options.session.config.hostname} is a simulated terminal. "
        "Type 'help -a' to see every command, or 'help <command>' for one.",
        LogLevel.INFO,
    )
    options.log("Commands: " + ", ".join(registry.names), LogLevel.INFO)


def _history(options: CommandOptions) -> None:
    if options.flags["clear"]:
        options.session.clear_history()
        options.log("History cleared")
        return
    for number, line in enumerate(options.session.history, start=1):
        options.log(f"{number} {line}")


def _clear(options: CommandOptions) -> None:
    options.session.logger.clear()


def _exit(options: CommandOptions) -> None:
    options.session.running = False


HELP = Command(
    name="help",
    description="Show help for a command",
    handler=_help,
    arguments=(
        CommandArgument(name="command", description="The command to show help for", default=""),
    ),
    flags=(CommandFlag(names=("all", "A", "a"), description="Show help for all commands"),),
)

HISTORY = Command(
    name="history",
    description="Show the command history",
    handler=_history,
    flags=(
        CommandFlag(
            names=("clear", "c", "C"),
            description="Clear the history without showing it",
        ),
    ),
)

CLEAR = Command(name="clear", description="Clear the console", handler=_clear)

EXIT = Command(name="exit", description="Exit the terminal", handler=_exit)

SHELL_COMMANDS = (HELP, HISTORY, CLEAR, EXIT)
