"""Tests for the Filesystem facade.

``Filesystem`` takes raw path strings and a working directory, picks
the node to resolve from, and reports failures to its logger instead
of raising.
"""

from nebula_sh.fs.filesystem import Filesystem
from nebula_sh.fs.nodes import Directory, File
from nebula_sh.logging import Logger, LogLevel


def _filesystem() -> tuple[Filesystem, Logger]:
    """Create a filesystem with its own logger."""
    logger = Logger()
    return Filesystem(logger=logger), logger


def _errors(logger: Logger) -> list[str]:
    """Return the messages of every ERROR entry."""
    return [entry.message for entry in logger.filter(min_level=LogLevel.ERROR)]


class TestOrigin:
    """Verify where resolution starts."""

    def test_absolute_uses_root(self) -> None:
        """Absolute paths should start at the root even with a cwd."""
        fs, _logger = _filesystem()
        docs = fs.make_directory("/docs")
        assert docs is not None
        assert fs.origin(["/", "x"], docs) is fs.root

    def test_relative_uses_cwd(self) -> None:
        """Relative paths should start at the working directory."""
        fs, _logger = _filesystem()
        docs = fs.make_directory("/docs")
        assert docs is not None
        assert fs.origin([".", "x"], docs) is docs

    def test_relative_without_cwd_uses_root(self) -> None:
        """With no working directory, relative paths start at the root."""
        fs, _logger = _filesystem()
        assert fs.origin([".", "x"]) is fs.root

    def test_absolute_path_from_nested_cwd(self) -> None:
        """An absolute lookup from a nested cwd should not raise."""
        fs, _logger = _filesystem()
        docs = fs.make_directory("/docs")
        assert fs.get_directory("/", docs) is fs.root


class TestLookup:
    """Verify reporting and quiet lookups."""

    def test_get_directory_relative(self) -> None:
        """A relative directory should resolve from the cwd."""
        fs, _logger = _filesystem()
        docs = fs.make_directory("/docs")
        sub = fs.make_directory("sub", docs)
        assert sub is not None
        assert sub.path == "/docs/sub"
        assert fs.get_directory("sub", docs) is sub
        assert fs.get_directory("..", sub) is docs

    def test_get_directory_missing_reports(self) -> None:
        """A missing directory should log exactly one error."""
        fs, logger = _filesystem()
        assert fs.get_directory("/nope") is None
        assert _errors(logger) == ['Directory "/nope" not found']
        assert logger.entries[0].source == "fs"

    def test_get_file_missing_reports(self) -> None:
        """A missing file should log an error naming the path."""
        fs, logger = _filesystem()
        assert fs.get_file("missing.txt") is None
        assert _errors(logger) == ['File "missing.txt" not found']

    def test_find_methods_are_quiet(self) -> None:
        """The find_* methods should never log."""
        fs, logger = _filesystem()
        assert fs.find_directory("/nope") is None
        assert fs.find_file("/nope") is None
        assert fs.find_parent("/a/b") is None
        assert len(logger) == 0

    def test_get_parent(self) -> None:
        """get_parent should return the container and the final name."""
        fs, _logger = _filesystem()
        docs = fs.make_directory("/docs")
        assert fs.get_parent("/docs/new.txt") == (docs, "new.txt")

    def test_get_parent_missing_reports(self) -> None:
        """A missing container should be reported by its own path."""
        fs, logger = _filesystem()
        assert fs.get_parent("/a/b") is None
        assert _errors(logger) == ['Directory "/a" not found']

    def test_exists(self) -> None:
        """exists should be true for files and directories."""
        fs, _logger = _filesystem()
        fs.make_directory("/docs")
        fs.make_file("/docs/a.txt")
        assert fs.exists("/docs")
        assert fs.exists("/docs/a.txt")
        assert not fs.exists("/docs/b.txt")


class TestMutation:
    """Verify creation and removal through path strings."""

    def test_make_directory_missing_parent_reports(self) -> None:
        """Creating below a missing directory should fail and report."""
        fs, logger = _filesystem()
        assert fs.make_directory("/a/b") is None
        assert _errors(logger) == ['Directory "/a" not found']

    def test_make_directory_bad_name_reports(self) -> None:
        """A path ending in '..' cannot be created."""
        fs, logger = _filesystem()
        assert fs.make_directory("..") is None
        assert len(_errors(logger)) == 1

    def test_make_file_with_content(self) -> None:
        """make_file should create a file with the given content."""
        fs, _logger = _filesystem()
        file = fs.make_file("/notes.txt", content="hi")
        assert isinstance(file, File)
        assert file.content == "hi"
        assert fs.get_file("/notes.txt") is file

    def test_make_file_at_root_path_reports(self) -> None:
        """'/' cannot name a file."""
        fs, logger = _filesystem()
        assert fs.make_file("/") is None
        assert _errors(logger) == ['Cannot create file "/"']

    def test_make_file_missing_directory_reports(self) -> None:
        """A file in a missing directory should fail and report."""
        fs, logger = _filesystem()
        assert fs.make_file("/nope/f.txt") is None
        assert _errors(logger) == ['Directory "/nope" not found']

    def test_remove_file(self) -> None:
        """remove_file should detach the file."""
        fs, _logger = _filesystem()
        fs.make_file("/f")
        assert fs.remove_file("/f") is not None
        assert fs.root.contents == []

    def test_remove_missing_directory_reports(self) -> None:
        """Removing a missing directory should report."""
        fs, logger = _filesystem()
        assert fs.remove_directory("/nope") is None
        assert _errors(logger) == ['Directory "/nope" not found']

    def test_reset(self) -> None:
        """reset should replace the tree with an empty root."""
        fs, _logger = _filesystem()
        old_root = fs.root
        fs.make_directory("/docs")
        fs.reset()
        assert fs.root is not old_root
        assert fs.root.contents == []
        assert fs.root.is_root


class TestWalk:
    """Verify depth-first traversal."""

    def test_walk_order_and_depth(self) -> None:
        """walk should yield children depth-first with their depth."""
        fs, _logger = _filesystem()
        fs.make_directory("/test")
        fs.make_file("/test/file.txt")
        fs.make_file("/top.txt")
        walked = [(depth, node.name) for depth, node in Filesystem.walk(fs.root)]
        assert walked == [(0, "test"), (1, "file.txt"), (0, "top.txt")]

    def test_walk_yields_nodes(self) -> None:
        """walk should yield the actual node objects."""
        fs, _logger = _filesystem()
        docs = fs.make_directory("/docs")
        nodes = [node for _depth, node in Filesystem.walk(fs.root)]
        assert nodes == [docs]
        assert isinstance(nodes[0], Directory)
