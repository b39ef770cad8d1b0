from typing import Optional

import pathspec

from ..models.blocks import EditBlock, ValidationOutcome
from ..utils.paths import has_parent_traversal, is_absolute_path
from ..utils.protect import get_protected_spec, is_protected


def validate_block(
    block: EditBlock, *, protected: Optional[pathspec.PathSpec] = None
) -> ValidationOutcome:
    """
    Structural checks on a single extracted block. Collects every problem
    rather than stopping at the first. Path checks run whether or not the file
    exists: `..` segments and absolute paths never get near the filesystem.
    """
    errors = []
    path = block.file_path or ""

    if not path.strip():
        errors.append("File path is empty or missing")

    if has_parent_traversal(path) or is_absolute_path(path.strip()):
        errors.append("File path contains invalid characters or is absolute")

    spec = protected if protected is not None else get_protected_spec()
    if is_protected(path, spec):
        errors.append("File path targets a protected location")

    if not block.is_new_file and block.search_content.strip() == "":
        # Mirrors the rule for edits to existing files. Cannot trigger while
        # is_new_file is derived from search_content, hand-built blocks included.
        errors.append("Search content is empty for existing file modification")

    if not block.language or not block.language.strip():
        errors.append("Programming language not specified in fenced block")

    return ValidationOutcome(valid=not errors, errors=errors)
