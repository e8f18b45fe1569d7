"""Filesystem subsystem — path normalization, tree nodes, and the filesystem.

Re-exports public symbols so callers can write::

    from nebula_sh.fs import Directory, Filesystem, get_path_parts
"""

from nebula_sh.fs.filesystem import Filesystem
from nebula_sh.fs.nodes import Directory, File, Node, PathAnchorError
from nebula_sh.fs.path import get_path_parts, is_absolute, parts_to_path

__all__ = [
    "Directory",
    "File",
    "Filesystem",
    "Node",
    "PathAnchorError",
    "get_path_parts",
    "is_absolute",
    "parts_to_path",
]
