"""Path normalization — turning path strings into token sequences.

Every path the filesystem sees is first normalized into a list of
tokens.  Index 0 is the **anchor**:

- ``"/"`` — absolute, resolution starts at the tree root.
- ``"."`` — relative, resolution starts at the working directory.

Every later token is either a plain name (descend into that child) or
the literal ``"."``, the **parent marker** (ascend one level).  The
marker only ever comes from an original ``".."``; a ``"."`` that means
"here" is dropped during normalization.

Examples::

    get_path_parts("/folder/file.txt")      → ["/", "folder", "file.txt"]
    get_path_parts("folder/file.txt")       → [".", "folder", "file.txt"]
    get_path_parts("../folder/file.txt")    → [".", ".", "folder", "file.txt"]
    get_path_parts("../../folder/file.txt") → [".", ".", ".", "folder", "file.txt"]
"""

ROOT = "/"
CURRENT = "."
PARENT_MARKER = "."


def get_path_parts(path: str) -> list[str]:
    """Normalize *path* into an anchored token sequence.

    The rewriting steps run in a fixed order and resolution depends on
    the exact output, so quirks are kept: ``"././a"`` only drops the
    first ``"."`` and normalizes to ``[".", ".", "a"]``.

    Args:
        path: A slash-separated path, absolute or relative.

    Returns:
        The token list, anchor first.

    """
    parts = [part for part in path.split("/") if part]

    if len(parts) == 1 and parts[0] in (CURRENT, ROOT):
        return parts

    parts.insert(0, ROOT if is_absolute(path) else CURRENT)

    # A leading "./" is a no-op once the anchor is in place.
    if len(parts) > 1 and parts[1] == CURRENT:
        del parts[1]

    if len(parts) > 1 and parts[1] == "..":
        parts[1] = PARENT_MARKER

    i = 2
    while i < len(parts):
        if parts[i] == "..":
            parts[i] = PARENT_MARKER
        elif parts[i] == CURRENT:
            del parts[i]
            continue
        i += 1

    return parts


def parts_to_path(parts: list[str]) -> str:
    """Render a token sequence back into a human-readable path.

    Parent markers come back as ``".."``.  Used for messages only; the
    result normalizes to the same tokens.

    Examples::

        parts_to_path(["/", "folder", "file.txt"]) → "/folder/file.txt"
        parts_to_path([".", ".", "folder"])        → "../folder"
        parts_to_path(["."])                       → "."

    """
    if not parts:
        return CURRENT
    anchor, *segments = parts
    rendered = [".." if segment == PARENT_MARKER else segment for segment in segments]
    if anchor == ROOT:
        return ROOT + "/".join(rendered)
    return "/".join(rendered) or CURRENT


def is_absolute(path: str) -> bool:
    """Return True if *path* starts at the root."""
    return path.startswith(ROOT)
