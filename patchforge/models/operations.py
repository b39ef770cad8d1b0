from dataclasses import dataclass, field
from typing import List, Optional

# HunkLine.kind
CONTEXT = "context"
ADDED = "added"
REMOVED = "removed"

# DiffEntry.kind
ENTRY_ADDED = "added"
ENTRY_DELETED = "deleted"
ENTRY_RENAMED = "renamed"
ENTRY_CHANGED = "changed"
ENTRY_UNSUPPORTED = "unsupported"
ENTRY_MALFORMED = "malformed"


@dataclass
class HunkLine:
    kind: str
    content: str


@dataclass
class Hunk:
    """A contiguous change region anchored at `old_start` (1-based) in the original."""

    old_start: int
    old_count: int
    new_start: int
    new_count: int
    lines: List[HunkLine] = field(default_factory=list)


@dataclass
class DiffEntry:
    """One `diff --git` section: what happens to a single file."""

    kind: str
    path: str
    prior_path: Optional[str] = None
    hunks: List[Hunk] = field(default_factory=list)
    reason: Optional[str] = None  # why an entry is unsupported or malformed


@dataclass
class FileOperation:
    """A resolved filesystem change slated for commit."""

    kind: str  # "create", "modify", "delete", "rename"
    path: str
    prior_path: Optional[str] = None
    content: Optional[str] = None
    error: Optional[str] = None
