from .commit import (
    Workspace,
    apply_diff_entries,
    apply_edit_blocks,
    apply_git_diff,
    apply_search_replace_blocks,
)
from .core import PATCH_FORMATS, PatchFormat, apply_patch, get_patch_format
from .errors import (
    CommitError,
    PatchFailedError,
    PatchforgeError,
    PathViolation,
)
from .extract import (
    clean_diff_content,
    parse_git_diff,
    parse_search_replace_blocks,
    validate_block,
)
from .models import (
    ApplyResult,
    DiffEntry,
    EditBlock,
    FileOperation,
    Hunk,
    HunkLine,
    ValidationOutcome,
)

__all__ = [
    "apply_patch",
    "get_patch_format",
    "PatchFormat",
    "PATCH_FORMATS",
    "parse_search_replace_blocks",
    "validate_block",
    "apply_edit_blocks",
    "apply_search_replace_blocks",
    "clean_diff_content",
    "parse_git_diff",
    "apply_diff_entries",
    "apply_git_diff",
    "Workspace",
    "EditBlock",
    "ValidationOutcome",
    "ApplyResult",
    "DiffEntry",
    "FileOperation",
    "Hunk",
    "HunkLine",
    "PatchforgeError",
    "PatchFailedError",
    "CommitError",
    "PathViolation",
]
