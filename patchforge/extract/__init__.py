from .diffs import clean_diff_content, parse_git_diff
from .search_replace import parse_search_replace_blocks
from .validate import validate_block

__all__ = [
    "parse_search_replace_blocks",
    "validate_block",
    "clean_diff_content",
    "parse_git_diff",
]
