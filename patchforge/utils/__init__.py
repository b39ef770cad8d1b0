# patchforge/utils/__init__.py
from .paths import has_parent_traversal, is_absolute_path, looks_like_path, normalize_rel_path
from .protect import get_protected_spec, is_protected
from .text import collapse_whitespace, narrow_to_tag

__all__ = [
    "looks_like_path",
    "is_absolute_path",
    "has_parent_traversal",
    "normalize_rel_path",
    "get_protected_spec",
    "is_protected",
    "collapse_whitespace",
    "narrow_to_tag",
]
