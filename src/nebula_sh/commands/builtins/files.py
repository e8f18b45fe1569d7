"""File commands — ls, cd, pwd, mkdir, touch, cat, write, rm.

Every handler goes through ``session.filesystem`` with the working
directory it was handed, so relative paths resolve from there and
absolute ones from the root.
"""

from __future__ import annotations

from nebula_sh.commands.command import Command, CommandArgument, CommandFlag, CommandOptions
from nebula_sh.fs.nodes import Directory, Node
from nebula_sh.logging import LogLevel

_BRANCH = "└─ "
_INDENT = "  "


def _path(options: CommandOptions, index: int = 0) -> str:
    """Return positional *index* as a path string."""
    return str(options.args[index])


def _ls(options: CommandOptions) -> None:
    filesystem = options.session.filesystem
    directory = filesystem.get_directory(_path(options), options.current_working_directory)
    if directory is None:
        return

    if options.flags["recursive"]:
        entries = list(filesystem.walk(directory))
    else:
        entries = [(0, child) for child in directory.contents]

    for depth, node in entries:
        prefix = _INDENT * depth + (_BRANCH if depth > 0 else "")
        options.log(prefix + node.name)


def _cd(options: CommandOptions) -> None:
    directory = options.session.filesystem.get_directory(
        _path(options), options.current_working_directory
    )
    if directory is not None:
        options.session.current_working_directory = directory


def _pwd(options: CommandOptions) -> None:
    options.log(options.current_working_directory.path)


def _name_is_free(options: CommandOptions, path: str) -> bool:
    """Report and return False if *path* already names an entry."""
    located = options.session.filesystem.get_parent(path, options.current_working_directory)
    if located is None:
        return False
    parent, name = located
    if parent.get_entry(name) is not None:
        options.log(f'"{path}" already exists', LogLevel.ERROR)
        return False
    return True


def _mkdir(options: CommandOptions) -> None:
    path = _path(options)
    if _name_is_free(options, path):
        options.session.filesystem.make_directory(path, options.current_working_directory)


def _touch(options: CommandOptions) -> None:
    path = _path(options)
    if _name_is_free(options, path):
        options.session.filesystem.make_file(path, options.current_working_directory)


def _cat(options: CommandOptions) -> None:
    file = options.session.filesystem.get_file(_path(options), options.current_working_directory)
    if file is not None:
        options.log(file.content)


def _write(options: CommandOptions) -> None:
    filesystem = options.session.filesystem
    cwd = options.current_working_directory
    path = _path(options)
    content = str(options.args[1])

    if filesystem.find_directory(path, cwd) is not None:
        options.log(f'"{path}" is a directory', LogLevel.ERROR)
        return

    file = filesystem.find_file(path, cwd)
    if file is None:
        filesystem.make_file(path, cwd, content=content)
    elif options.flags["append"]:
        file.content += content
    else:
        file.content = content


def _rm(options: CommandOptions) -> None:
    filesystem = options.session.filesystem
    cwd = options.current_working_directory
    path = _path(options)
    recursive = bool(options.flags["recursive"] or options.flags["rf"])
    force = bool(options.flags["force"] or options.flags["rf"])

    located = filesystem.find_parent(path, cwd)
    if located is None:
        if not force:
            options.log(f'Directory "{path}" not found', LogLevel.ERROR)
        return
    parent, name = located

    if parent.get_file_in_directory(name) is not None:
        filesystem.remove_file(path, cwd)
        return

    directory = parent.get_directory_in_directory(name)
    if directory is None:
        if not force:
            options.log(f'"{path}" not found', LogLevel.ERROR)
        return
    if directory.contents and not recursive:
        options.log(f'Directory "{path}" is not empty (use -r)', LogLevel.ERROR)
        return

    filesystem.remove_directory(path, cwd)
    if _is_within(options.session.current_working_directory, directory):
        options.session.current_working_directory = filesystem.root


def _is_within(node: Node, directory: Directory) -> bool:
    """Return True if *node* is *directory* or lies below it."""
    current: Node | None = node
    while current is not None:
        if current is directory:
            return True
        current = current.parent
    return False


_PATH_REQUIRED = CommandArgument(name="path", description="The path to operate on", required=True)

LS = Command(
    name="ls",
    description="List directory contents",
    handler=_ls,
    arguments=(CommandArgument(name="directory", description="The directory to list", default="."),),
    flags=(
        CommandFlag(
            names=("recursive", "recurse", "R", "r"),
            description="List subdirectories recursively",
        ),
    ),
)

CD = Command(
    name="cd",
    description="Change directory",
    handler=_cd,
    arguments=(CommandArgument(name="path", description="The path to change to", default="/"),),
)

PWD = Command(name="pwd", description="Print working directory", handler=_pwd)

MKDIR = Command(
    name="mkdir",
    description="Create a directory",
    handler=_mkdir,
    arguments=(_PATH_REQUIRED,),
)

TOUCH = Command(
    name="touch",
    description="Create an empty file",
    handler=_touch,
    arguments=(_PATH_REQUIRED,),
)

CAT = Command(
    name="cat",
    description="Print the contents of a file",
    handler=_cat,
    arguments=(_PATH_REQUIRED,),
)

WRITE = Command(
    name="write",
    description="Write text to a file, creating it if needed",
    handler=_write,
    arguments=(
        _PATH_REQUIRED,
        CommandArgument(name="content", description="The text to write", default=""),
    ),
    flags=(CommandFlag(names=("append", "a"), description="Append instead of replacing"),),
)

RM = Command(
    name="rm",
    description="Remove a file or directory",
    handler=_rm,
    arguments=(_PATH_REQUIRED,),
    flags=(
        CommandFlag(
            names=("recursive", "r", "R", "recurse"),
            description="Remove a directory and everything in it",
        ),
        CommandFlag(names=("force", "f"), description="Ignore paths that do not exist"),
        CommandFlag(names=("rf",), description="Recursive and forced"),
    ),
)

FILE_COMMANDS = (LS, CD, PWD, MKDIR, TOUCH, CAT, WRITE, RM)
