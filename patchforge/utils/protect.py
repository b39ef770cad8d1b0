# patchforge/utils/protect.py
from typing import Iterable, List, Optional

import pathspec

from .paths import normalize_rel_path

DEFAULT_PROTECTED: List[str] = [".git/"]


def get_protected_spec(patterns: Optional[Iterable[str]] = None) -> pathspec.PathSpec:
    """
    Compile gitignore-style patterns naming paths no edit may touch.

    `None` means the defaults (the repository's `.git/` directory). Pass an
    explicit empty list to protect nothing. Blank lines and `#` comments are
    accepted, so the contents of an ignore file can be passed straight in.
    """
    lines = list(DEFAULT_PROTECTED if patterns is None else patterns)
    return pathspec.PathSpec.from_lines("gitwildmatch", lines)


def is_protected(path: str, spec: pathspec.PathSpec) -> bool:
    if not path or not path.strip():
        return False
    return spec.match_file(normalize_rel_path(path))
