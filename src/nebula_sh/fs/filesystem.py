"""The filesystem — a root directory plus path-string entry points.

``Directory`` methods work on normalized token sequences and must be
called on the right node (the root for absolute paths).  ``Filesystem``
is the layer commands actually use: it takes a raw path string and the
caller's working directory, normalizes the path, picks the node to
resolve from, and reports every failure to the logger.

Failures are **reported, not raised** — a mistyped path is ordinary
user input, so the methods log an error and return None.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from nebula_sh.fs.nodes import Directory, File, Node
from nebula_sh.fs.path import PARENT_MARKER, ROOT, get_path_parts, parts_to_path
from nebula_sh.logging import Logger, LogLevel

if TYPE_CHECKING:
    from collections.abc import Iterator

_SOURCE = "fs"


class Filesystem:
    """An in-memory tree rooted at ``/``."""

    def __init__(self, *, logger: Logger | None = None) -> None:
        """Create a filesystem with an empty root directory.

        Args:
            logger: Where resolution failures are reported.  A private
                logger is created when omitted.

        """
        self._logger = logger if logger is not None else Logger()
        self._root = Directory(name="", is_root=True)

    @property
    def root(self) -> Directory:
        """Return the root directory."""
        return self._root

    def reset(self) -> None:
        """Discard the whole tree and start again from an empty root."""
        self._root = Directory(name="", is_root=True)

    def origin(self, parts: list[str], cwd: Directory | None = None) -> Directory:
        """Return the directory that *parts* should be resolved from."""
        if parts[0] == ROOT or cwd is None:
            return self._root
        return cwd

    # -- lookup -------------------------------------------------------------

    def get_directory(self, path: str, cwd: Directory | None = None) -> Directory | None:
        """Resolve *path* to a directory, reporting when it does not exist."""
        parts = get_path_parts(path)
        directory = self.origin(parts, cwd).get_directory(parts)
        if directory is None:
            self._error(f'Directory "{path}" not found')
        return directory

    def get_file(self, path: str, cwd: Directory | None = None) -> File | None:
        """Resolve *path* to a file, reporting when it does not exist."""
        parts = get_path_parts(path)
        file = self.origin(parts, cwd).get_file(parts)
        if file is None:
            self._error(f'File "{path}" not found')
        return file

    def get_parent(self, path: str, cwd: Directory | None = None) -> tuple[Directory, str] | None:
        """Resolve the directory holding *path* and the final name in it."""
        located = self.find_parent(path, cwd)
        if located is None:
            self._error(f'Directory "{_container(get_path_parts(path))}" not found')
        return located

    def find_directory(self, path: str, cwd: Directory | None = None) -> Directory | None:
        """Resolve *path* to a directory without reporting anything."""
        parts = get_path_parts(path)
        return self.origin(parts, cwd).get_directory(parts)

    def find_file(self, path: str, cwd: Directory | None = None) -> File | None:
        """Resolve *path* to a file without reporting anything."""
        parts = get_path_parts(path)
        return self.origin(parts, cwd).get_file(parts)

    def find_parent(self, path: str, cwd: Directory | None = None) -> tuple[Directory, str] | None:
        """Like ``get_parent``, without reporting anything."""
        parts = get_path_parts(path)
        parent = self.origin(parts, cwd).get_parent_directory_of_path(parts)
        return None if parent is None else (parent, parts[-1])

    def exists(self, path: str, cwd: Directory | None = None) -> bool:
        """Return True if *path* names a file or directory (never reports)."""
        return self.find_directory(path, cwd) is not None or self.find_file(path, cwd) is not None

    # -- mutation -----------------------------------------------------------

    def make_directory(self, path: str, cwd: Directory | None = None) -> Directory | None:
        """Create a directory at *path*; its parent must already exist."""
        parts = get_path_parts(path)
        origin = self.origin(parts, cwd)
        if origin.get_parent_directory_of_path(parts) is None:
            self._error(f'Directory "{_container(parts)}" not found')
            return None
        directory = origin.make_directory(parts)
        if directory is None:
            self._error(f'Cannot create directory "{path}"')
        return directory

    def make_file(
        self,
        path: str,
        cwd: Directory | None = None,
        *,
        content: str = "",
    ) -> File | None:
        """Create a file at *path* inside an existing directory."""
        parts = get_path_parts(path)
        if len(parts) == 1 or parts[-1] in (ROOT, PARENT_MARKER):
            self._error(f'Cannot create file "{path}"')
            return None
        file = self.origin(parts, cwd).make_file(parts[:-1], File(name=parts[-1], content=content))
        if file is None:
            self._error(f'Directory "{_container(parts)}" not found')
        return file

    def remove_file(self, path: str, cwd: Directory | None = None) -> File | None:
        """Remove the file at *path*, reporting when there is none."""
        parts = get_path_parts(path)
        file = self.origin(parts, cwd).remove_file(parts)
        if file is None:
            self._error(f'File "{path}" not found')
        return file

    def remove_directory(self, path: str, cwd: Directory | None = None) -> Directory | None:
        """Remove the directory at *path* without touching its contents."""
        parts = get_path_parts(path)
        directory = self.origin(parts, cwd).remove_directory(parts)
        if directory is None:
            self._error(f'Directory "{path}" not found')
        return directory

    # -- traversal ----------------------------------------------------------

    @staticmethod
    def walk(directory: Directory, depth: int = 0) -> Iterator[tuple[int, Node]]:
        """Yield ``(depth, node)`` pairs depth-first in insertion order."""
        for child in directory.contents:
            yield depth, child
            if isinstance(child, Directory):
                yield from Filesystem.walk(child, depth + 1)

    def _error(self, message: str) -> None:
        self._logger.log(LogLevel.ERROR, message, source=_SOURCE)


def _container(parts: list[str]) -> str:
    """Render the directory part of *parts* for messages."""
    return parts_to_path(parts[:-1]) if len(parts) > 1 else parts_to_path(parts)
