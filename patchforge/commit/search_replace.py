# patchforge/commit/search_replace.py
from __future__ import annotations

import logging
from typing import Iterable, List, Optional, Sequence

from .._logging import resolve_logger
from ..errors.patch import PatchFailedError
from ..extract.search_replace import parse_search_replace_blocks
from ..extract.validate import validate_block
from ..models.blocks import EditBlock
from ..models.result import ApplyResult
from ..utils.paths import normalize_rel_path
from ..utils.protect import get_protected_spec
from ..utils.text import collapse_whitespace
from .core import Workspace

__all__ = ["apply_search_replace_blocks", "apply_edit_blocks", "replace_first", "differs_only_by_whitespace"]

NOT_FOUND_ERROR = "The content in the SEARCH block did not exactly match any part of the file."
WHITESPACE_WARNING = (
    "A similar block of text was found, but it differs by whitespace "
    "(spaces, tabs, or newlines). The SEARCH block must be an exact match."
)


def replace_first(content: str, search: str, replace: str) -> str:
    """
    Replace only the first literal occurrence of `search`.

    Later occurrences stay untouched so that an ambiguous snippet never edits
    more than one place; the producer has to add context instead. Raises
    PatchFailedError when `search` does not occur at all. A match whose
    replacement equals the search text returns `content` unchanged.
    """
    if search not in content:
        raise PatchFailedError(NOT_FOUND_ERROR)
    return content.replace(search, replace, 1)


def differs_only_by_whitespace(content: str, search: str) -> bool:
    """True if `search` would match once every whitespace run is collapsed."""
    needle = collapse_whitespace(search)
    return bool(needle) and needle in collapse_whitespace(content)


def _apply_block(block: EditBlock, ws: Workspace) -> ApplyResult:
    """Apply one validated block. I/O errors propagate to the batch loop."""
    result = ApplyResult(dry_run=ws.dry_run)
    path = block.file_path

    if block.is_new_file:
        if ws.exists(path):
            result.message = "File already exists"
            result.errors.append("File already exists")
            return result
        ws.write(path, block.replace_content)
        result.success = True
        result.message = f"Created new file: {path}"
        result.files_processed = result.blocks_processed = 1
        return result

    if not ws.exists(path):
        result.message = "File not found"
        result.errors.append("The specified file does not exist.")
        return result

    current = ws.read(path)
    try:
        updated = replace_first(current, block.search_content, block.replace_content)
    except PatchFailedError as e:
        result.message = "Search content not found"
        result.errors.append(str(e))
        if differs_only_by_whitespace(current, block.search_content):
            result.warnings.append(WHITESPACE_WARNING)
        return result

    if updated != current:
        ws.write(path, updated)
        result.message = "Successfully modified file"
    else:
        result.message = "Replacement identical to search content; file unchanged"
    result.success = True
    result.files_processed = result.blocks_processed = 1
    return result


def _summarize(result: ApplyResult, applied: int) -> None:
    n_err = len(result.errors)
    if result.success:
        if n_err == 0:
            result.message = f"Successfully applied {applied} block(s) to {result.files_processed} file(s)."
        else:
            result.message = (
                f"Applied {applied} block(s) to {result.files_processed} file(s), "
                f"but {n_err} error(s) occurred."
            )
    elif n_err:
        result.message = f"Failed to apply any blocks. {n_err} error(s) occurred."
    else:
        result.message = "Failed to apply any blocks. No valid blocks were processed."
    if result.dry_run:
        result.message = "DRY RUN: " + result.message


def apply_edit_blocks(
    blocks: Sequence[EditBlock],
    root: str,
    *,
    dry_run: bool = False,
    protected: Optional[Iterable[str]] = None,
    logger: logging.Logger | None = None,
    log: bool = False,
) -> ApplyResult:
    """
    Apply extracted blocks to the tree under `root`, strictly in order.

    Each block is validated, then either creates a new file (never
    overwriting) or replaces the first exact occurrence of its SEARCH text.
    Blocks are independent: a failure is recorded as
    "Block N (path): reason" and the batch moves on. A later block on the
    same file sees the earlier block's edit.

    Aggregate `success` is True iff at least one block applied;
    `files_processed` counts distinct paths among successful blocks.
    """
    lg = resolve_logger(logger=logger, enabled=log, name=__name__)
    result = ApplyResult(dry_run=dry_run)

    if not blocks:
        result.message = "No valid SEARCH/REPLACE blocks found in the response."
        result.errors.append("Could not find any fenced code blocks with the SEARCH/REPLACE format.")
        return result

    spec = get_protected_spec(protected)
    ws = Workspace(root, dry_run=dry_run)
    touched: set[str] = set()
    applied = 0

    for block in blocks:
        label = block.label
        try:
            validation = validate_block(block, protected=spec)
            if not validation.valid:
                result.errors.append(f"{label}: Invalid format - {', '.join(validation.errors)}")
                lg.warning("%s rejected: %s", label, "; ".join(validation.errors))
                continue
            outcome = _apply_block(block, ws)
        except Exception as e:
            result.errors.append(f"{label}: {str(e) or type(e).__name__}")
            lg.error("%s failed unexpectedly: %s", label, e)
            continue

        result.warnings.extend(f"{label}: {w}" for w in outcome.warnings)
        if outcome.success:
            applied += 1
            touched.add(normalize_rel_path(block.file_path))
            lg.debug("%s: %s", label, outcome.message)
        else:
            reason = " ".join(outcome.errors) if outcome.errors else outcome.message
            result.errors.append(f"{label}: {reason}")
            lg.warning("%s: %s", label, reason)

    result.blocks_processed = applied
    result.files_processed = len(touched)
    result.success = applied > 0
    _summarize(result, applied)
    return result


def apply_search_replace_blocks(
    content: str,
    root: str,
    *,
    dry_run: bool = False,
    protected: Optional[Iterable[str]] = None,
    logger: logging.Logger | None = None,
    log: bool = False,
) -> ApplyResult:
    """Extract SEARCH/REPLACE blocks from `content` and apply them under `root`. Never raises."""
    lg = resolve_logger(logger=logger, enabled=log, name=__name__)
    try:
        blocks: List[EditBlock] = parse_search_replace_blocks(content, logger=lg)
        return apply_edit_blocks(blocks, root, dry_run=dry_run, protected=protected, logger=lg)
    except Exception as e:
        result = ApplyResult(dry_run=dry_run)
        result.message = f"Failed to process SEARCH/REPLACE blocks: {e}"
        result.errors.append(str(e))
        return result
