"""User commands — whoami, listusers, useradd, su."""

from __future__ import annotations

from nebula_sh.commands.command import Command, CommandArgument, CommandOptions
from nebula_sh.logging import LogLevel
from nebula_sh.privileges import Privilege, check_privilege, parse_privilege


def _whoami(options: CommandOptions) -> None:
    options.log(options.session.current_user.name)


def _listusers(options: CommandOptions) -> None:
    for user in options.session.users.list_users():
        options.log(f"{user.name} ({user.privilege.name.capitalize()})")


def _useradd(options: CommandOptions) -> None:
    name = str(options.args[0])
    try:
        privilege = parse_privilege(str(options.args[1]))
    except ValueError as e:
        options.log(str(e), LogLevel.ERROR)
        return

    # Nobody can hand out more than they hold.
    if not check_privilege(options.privilege, privilege):
        options.log(
            f'Insufficient privileges to add user with privileges "{privilege.name.capitalize()}"',
            LogLevel.ERROR,
        )
        return

    try:
        options.session.users.create_user(name, privilege)
    except ValueError as e:
        options.log(str(e), LogLevel.ERROR)
        return
    options.log(f'Added user "{name}"', LogLevel.INFO)


def _su(options: CommandOptions) -> None:
    name = str(options.args[0])
    user = options.session.users.get_user(name)
    if user is None:
        options.log(f'User "{name}" not found', LogLevel.ERROR)
        return
    options.session.current_user = user


WHOAMI = Command(name="whoami", description="Print the current user", handler=_whoami)

LISTUSERS = Command(name="listusers", description="List all users", handler=_listusers)

USERADD = Command(
    name="useradd",
    description="Add a user to the system",
    handler=_useradd,
    arguments=(
        CommandArgument(name="name", description="The name of the user", required=True),
        CommandArgument(
            name="privileges",
            description="The privileges of the user ("
            + ", ".join(p.name.capitalize() for p in Privilege)
            + ")",
            default="User",
        ),
    ),
    privilege=Privilege.ADMIN,
)

SU = Command(
    name="su",
    description="Switch user",
    handler=_su,
    arguments=(CommandArgument(name="user", description="The user to switch to", default="root"),),
)

USER_COMMANDS = (WHOAMI, LISTUSERS, USERADD, SU)
