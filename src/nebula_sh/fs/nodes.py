"""Tree nodes — directories and files linked by parent references.

The filesystem is a plain tree of two node kinds:

- **Directory** — a name plus an ordered list of children.  Insertion
  order is kept because ``ls`` lists entries in the order they were made.
- **File** — a name plus string content.

Every node has a ``parent`` back-reference.  Ownership runs downward
only: a directory owns its ``contents`` list, and a child's ``parent``
is used for path derivation and ``..`` traversal, never to keep the
child alive.  Removing an entry from its parent's contents is the only
way a node leaves the tree.

All lookup and mutation methods take **normalized** token sequences
(see ``nebula_sh.fs.path``) and report failure by returning None.  The
one exception is an anchor mismatch — asking a non-root directory to
resolve an absolute path — which is a caller bug and raises
``PathAnchorError``.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TypeAlias

from nebula_sh.fs.path import PARENT_MARKER, ROOT, parts_to_path

# An anchor plus at least one segment naming the target.
_MIN_PARTS_WITH_NAME = 2


class PathAnchorError(ValueError):
    """Raised when an absolute path is resolved against a non-root directory."""


@dataclass(eq=False)
class File:
    """A file — a name and its text content."""

    name: str
    content: str = ""
    parent: Directory | None = field(default=None, repr=False)

    @property
    def size(self) -> int:
        """Return the length of the content."""
        return len(self.content)

    @property
    def stem(self) -> str:
        """Return the name up to the first dot (``"file"`` for ``file.txt``)."""
        return self.name.split(".", 1)[0]

    @property
    def extension(self) -> str:
        """Return the name after the first dot, or ``""`` when there is none."""
        _, _, extension = self.name.partition(".")
        return extension

    @property
    def path(self) -> str:
        """Return the absolute path of this file."""
        if self.parent is None:
            return self.name
        return _join(self.parent.path, self.name)


@dataclass(eq=False)
class Directory:
    """A directory — a named, ordered collection of child nodes.

    Equality is identity: two empty directories called ``docs`` are
    still different directories, and removal splices by reference.
    """

    name: str
    contents: list[Node] = field(default_factory=list)  # pyright: ignore[reportUnknownVariableType]
    parent: Directory | None = field(default=None, repr=False)
    is_root: bool = False

    @property
    def path(self) -> str:
        """Return the absolute path of this directory.

        The root renders as ``/``.  Any other directory renders as the
        names of its ancestors below the root, joined with ``/``.
        """
        if self.is_root:
            return ROOT
        names: list[str] = []
        node: Directory | None = self
        while node is not None and not node.is_root:
            names.append(node.name)
            node = node.parent
        joined = "/".join(reversed(names))
        return ROOT + joined if node is not None else joined

    # -- lookup -------------------------------------------------------------

    def get_directory(self, parts: list[str]) -> Directory | None:
        """Resolve *parts* to a directory, starting from this node.

        Raises:
            PathAnchorError: If *parts* is absolute and this is not the root.

        """
        if parts[0] == ROOT and not self.is_root:
            msg = f'Path "{parts_to_path(parts)}" must be relative (resolved from {self.path})'
            raise PathAnchorError(msg)

        if len(parts) == 1:
            return self

        current: Directory | None = self
        for part in parts[1:]:
            if current is None:
                return None
            if part == PARENT_MARKER:
                current = current.parent
            else:
                current = current.get_directory_in_directory(part)
        return current

    def get_parent_directory_of_path(self, parts: list[str]) -> Directory | None:
        """Resolve the directory that holds the last token of *parts*."""
        if len(parts) < _MIN_PARTS_WITH_NAME:
            return None
        return self.get_directory(parts[:-1])

    def get_file(self, parts: list[str]) -> File | None:
        """Resolve *parts* to a file, starting from this node."""
        parent = self.get_parent_directory_of_path(parts)
        if parent is None:
            return None
        return parent.get_file_in_directory(parts[-1])

    def get_directory_in_directory(self, name: str) -> Directory | None:
        """Return the first child directory called *name*."""
        for child in self.contents:
            if isinstance(child, Directory) and child.name == name:
                return child
        return None

    def get_file_in_directory(self, name: str) -> File | None:
        """Return the first child file called *name*."""
        for child in self.contents:
            if isinstance(child, File) and child.name == name:
                return child
        return None

    def get_entry(self, name: str) -> Node | None:
        """Return the first child of either kind called *name*."""
        for child in self.contents:
            if child.name == name:
                return child
        return None

    # -- mutation -----------------------------------------------------------

    def make_directory(self, parts: list[str]) -> Directory | None:
        """Create the directory named by the last token of *parts*.

        Missing intermediate directories are not created.

        Returns:
            The new directory, or None if the parent does not resolve or
            the path does not end in a name.

        """
        parent = self.get_parent_directory_of_path(parts)
        if parent is None or not _is_name(parts[-1]):
            return None
        directory = Directory(name=parts[-1], parent=parent)
        parent.contents.append(directory)
        return directory

    def make_file(self, parts: list[str], file: File) -> File | None:
        """Add *file* to the directory that *parts* resolves to.

        Unlike ``make_directory``, *parts* names the containing
        directory, not the file.
        """
        directory = self.get_directory(parts)
        if directory is None:
            return None
        file.parent = directory
        directory.contents.append(file)
        return file

    def remove_file(self, parts: list[str]) -> File | None:
        """Detach the file named by *parts* and return it."""
        parent = self.get_parent_directory_of_path(parts)
        if parent is None:
            return None
        file = parent.get_file_in_directory(parts[-1])
        if file is None:
            return None
        parent._detach(file)
        return file

    def remove_directory(self, parts: list[str]) -> Directory | None:
        """Detach the directory named by *parts* and return it.

        The directory's own contents are left as they are.
        """
        parent = self.get_parent_directory_of_path(parts)
        if parent is None:
            return None
        directory = parent.get_directory_in_directory(parts[-1])
        if directory is None:
            return None
        parent._detach(directory)
        return directory

    def _detach(self, node: Node) -> None:
        """Splice *node* out of the contents by identity."""
        for index, child in enumerate(self.contents):
            if child is node:
                del self.contents[index]
                node.parent = None
                return


Node: TypeAlias = Directory | File


def _is_name(token: str) -> bool:
    """Return True if *token* can name a new entry."""
    return token not in (ROOT, PARENT_MARKER)


def _join(directory_path: str, name: str) -> str:
    """Join a directory path and a child name."""
    if directory_path.endswith(ROOT):
        return directory_path + name
    return f"{directory_path}/{name}"
