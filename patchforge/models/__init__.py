from .blocks import EditBlock, ValidationOutcome
from .operations import DiffEntry, FileOperation, Hunk, HunkLine
from .result import ApplyResult

__all__ = [
    "EditBlock",
    "ValidationOutcome",
    "ApplyResult",
    "DiffEntry",
    "FileOperation",
    "Hunk",
    "HunkLine",
]
