"""Tests for path normalization.

Every path string is turned into an anchored token list before the
tree sees it.  Index 0 is ``"/"`` (absolute) or ``"."`` (relative);
later ``"."`` tokens are parent markers that came from ``".."``.
"""

from nebula_sh.fs.path import get_path_parts, is_absolute, parts_to_path


class TestGetPathParts:
    """Verify the normalization steps and their order."""

    def test_absolute_path(self) -> None:
        """An absolute path should be anchored at the root."""
        assert get_path_parts("/folder/file.txt") == ["/", "folder", "file.txt"]

    def test_relative_path(self) -> None:
        """A relative path should be anchored at the working directory."""
        assert get_path_parts("folder/file.txt") == [".", "folder", "file.txt"]

    def test_single_parent(self) -> None:
        """A leading '..' should become a parent marker."""
        assert get_path_parts("../folder/file.txt") == [".", ".", "folder", "file.txt"]

    def test_double_parent(self) -> None:
        """Each '..' should become its own parent marker."""
        assert get_path_parts("../../folder/file.txt") == [
            ".",
            ".",
            ".",
            "folder",
            "file.txt",
        ]

    def test_root_alone(self) -> None:
        """The root path should normalize to the root anchor only."""
        assert get_path_parts("/") == ["/"]

    def test_dot_alone(self) -> None:
        """A lone '.' should normalize to the relative anchor only."""
        assert get_path_parts(".") == ["."]

    def test_empty_string(self) -> None:
        """An empty path should mean the working directory."""
        assert get_path_parts("") == ["."]

    def test_parent_alone(self) -> None:
        """A lone '..' should be the anchor plus one parent marker."""
        assert get_path_parts("..") == [".", "."]

    def test_leading_dot_slash_is_dropped(self) -> None:
        """A leading './' should not add a token."""
        assert get_path_parts("./docs") == [".", "docs"]

    def test_inner_current_segments_are_dropped(self) -> None:
        """A '.' after the first segment should be removed."""
        assert get_path_parts("a/./b") == [".", "a", "b"]

    def test_inner_parent_segment(self) -> None:
        """A '..' in the middle should become a parent marker in place."""
        assert get_path_parts("/a/../b") == ["/", "a", ".", "b"]

    def test_empty_segments_are_dropped(self) -> None:
        """Repeated and trailing slashes should not create tokens."""
        assert get_path_parts("//a///b/") == ["/", "a", "b"]

    def test_repeated_leading_dots_keep_second(self) -> None:
        """Only the first leading '.' is dropped before the parent pass."""
        assert get_path_parts("././a") == [".", ".", "a"]


class TestPartsToPath:
    """Verify rendering token lists back into strings."""

    def test_absolute(self) -> None:
        """An absolute token list should render with a leading slash."""
        assert parts_to_path(["/", "folder", "file.txt"]) == "/folder/file.txt"

    def test_root(self) -> None:
        """The root anchor alone should render as '/'."""
        assert parts_to_path(["/"]) == "/"

    def test_relative(self) -> None:
        """A relative token list should render without the anchor."""
        assert parts_to_path([".", "folder"]) == "folder"

    def test_current(self) -> None:
        """The relative anchor alone should render as '.'."""
        assert parts_to_path(["."]) == "."

    def test_parent_markers_render_as_dot_dot(self) -> None:
        """Parent markers should come back as '..'."""
        assert parts_to_path([".", ".", "folder"]) == "../folder"

    def test_round_trip(self) -> None:
        """Rendering then normalizing should give the same tokens."""
        parts = get_path_parts("../../a/b")
        assert get_path_parts(parts_to_path(parts)) == parts

    def test_does_not_mutate_input(self) -> None:
        """The token list passed in should be left unchanged."""
        parts = [".", ".", "a"]
        parts_to_path(parts)
        assert parts == [".", ".", "a"]


class TestIsAbsolute:
    """Verify absolute path detection."""

    def test_absolute(self) -> None:
        """A path starting with '/' should be absolute."""
        assert is_absolute("/a")

    def test_relative(self) -> None:
        """A path not starting with '/' should be relative."""
        assert not is_absolute("a/b")
