from .core import Workspace
from .diff import apply_diff_entries, apply_git_diff, build_content_from_hunks
from .search_replace import apply_edit_blocks, apply_search_replace_blocks, replace_first

__all__ = [
    "Workspace",
    "apply_search_replace_blocks",
    "apply_edit_blocks",
    "replace_first",
    "apply_git_diff",
    "apply_diff_entries",
    "build_content_from_hunks",
]
