# patchforge/utils/paths.py
import os
import posixpath
import re

_DRIVE_RE = re.compile(r"^[A-Za-z]:[\\/]")


def looks_like_path(line: str) -> bool:
    """
    Heuristic: does a stripped line of prose plausibly name a file?

    Anything with a separator or a dot qualifies ("src/app.py", "Makefile.am",
    "docs\\index.md"). Deliberately loose: a sentence ending in a period also
    passes, and bare names such as "Makefile" do not.
    """
    return "." in line or "/" in line or "\\" in line


def is_absolute_path(path: str) -> bool:
    """True for POSIX roots, Windows drive paths and backslash/UNC roots."""
    if not path:
        return False
    return os.path.isabs(path) or path.startswith(("/", "\\")) or bool(_DRIVE_RE.match(path))


def has_parent_traversal(path: str) -> bool:
    """True if any segment of `path` (either separator style) is `..`."""
    return any(part == ".." for part in re.split(r"[\\/]", path))


def normalize_rel_path(path: str) -> str:
    """Canonical forward-slash form used to count distinct files."""
    return posixpath.normpath(path.strip().replace("\\", "/"))
