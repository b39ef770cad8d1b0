# patchforge/commit/diff.py
from __future__ import annotations

import logging
from typing import Iterable, List, Optional, Sequence

from .._logging import resolve_logger
from ..extract.diffs import clean_diff_content, parse_git_diff
from ..models.operations import (
    ADDED,
    CONTEXT,
    ENTRY_ADDED,
    ENTRY_CHANGED,
    ENTRY_DELETED,
    ENTRY_MALFORMED,
    ENTRY_RENAMED,
    REMOVED,
    DiffEntry,
    FileOperation,
    Hunk,
)
from ..models.result import ApplyResult
from ..utils.protect import get_protected_spec, is_protected
from .core import Workspace

__all__ = ["apply_git_diff", "apply_diff_entries", "build_content_from_hunks", "resolve_operations"]


def build_content_from_hunks(hunks: Sequence[Hunk], original: str) -> str:
    """
    Merge hunks into `original` by walking its lines in order.

    Lines before each hunk's `old_start` are copied verbatim; inside the hunk
    context lines are emitted (from the diff) and advance the cursor, removed
    lines only advance it, added lines are emitted. Whatever follows the last
    hunk is copied unchanged. Hunks are anchored by position, not searched
    for, and their context is not verified against the file.
    """
    if not hunks:
        return original
    original_lines = original.split("\n") if original else []
    out: List[str] = []
    idx = 0
    for hunk in hunks:
        anchor = hunk.old_start - 1
        while idx < anchor and idx < len(original_lines):
            out.append(original_lines[idx])
            idx += 1
        for line in hunk.lines:
            if line.kind == CONTEXT:
                out.append(line.content)
                idx += 1
            elif line.kind == ADDED:
                out.append(line.content)
            elif line.kind == REMOVED:
                idx += 1
    out.extend(original_lines[idx:])
    return "\n".join(out)


def _resolve_entry(entry: DiffEntry, ws: Workspace) -> FileOperation:
    if entry.kind == ENTRY_ADDED:
        op = FileOperation("create", entry.path)
        if ws.exists(entry.path):
            op.error = f"File already exists: {entry.path}"
        else:
            op.content = build_content_from_hunks(entry.hunks, "")
        return op

    if entry.kind == ENTRY_DELETED:
        op = FileOperation("delete", entry.path)
        if not ws.exists(entry.path):
            op.error = f"File does not exist: {entry.path}"
        return op

    if entry.kind == ENTRY_RENAMED:
        op = FileOperation("rename", entry.path, prior_path=entry.prior_path)
        if not ws.exists(entry.prior_path):
            op.error = f"Source file does not exist: {entry.prior_path}"
        elif ws.exists(entry.path):
            op.error = f"Destination file already exists: {entry.path}"
        elif entry.hunks:
            op.content = build_content_from_hunks(entry.hunks, ws.read(entry.prior_path))
        return op

    if entry.kind == ENTRY_CHANGED:
        op = FileOperation("modify", entry.path)
        if not ws.exists(entry.path):
            op.error = f"File does not exist: {entry.path}"
        else:
            op.content = build_content_from_hunks(entry.hunks, ws.read(entry.path))
        return op

    if entry.kind == ENTRY_MALFORMED:
        return FileOperation("modify", entry.path, error=f"Malformed diff: {entry.reason}")

    return FileOperation("modify", entry.path, error=f"Unsupported file type: {entry.reason or entry.kind}")


def resolve_operations(
    entries: Sequence[DiffEntry], ws: Workspace, *, protected=None
) -> List[FileOperation]:
    """
    First pass: turn every entry into a FileOperation without touching disk.
    Problems are captured on `op.error` so one bad entry never stops the rest.
    """
    spec = protected if protected is not None else get_protected_spec()
    ops: List[FileOperation] = []
    for entry in entries:
        guarded = [p for p in (entry.path, entry.prior_path) if p and is_protected(p, spec)]
        if guarded:
            ops.append(FileOperation("modify", entry.path, error=f"File path targets a protected location: {guarded[0]}"))
            continue
        try:
            ops.append(_resolve_entry(entry, ws))
        except Exception as e:
            ops.append(FileOperation("modify", entry.path, prior_path=entry.prior_path, error=str(e) or type(e).__name__))
    return ops


def _commit(op: FileOperation, ws: Workspace) -> None:
    if op.kind in ("create", "modify"):
        ws.write(op.path, op.content or "")
    elif op.kind == "delete":
        ws.delete(op.path)
    elif op.kind == "rename":
        if op.content is not None:
            ws.write(op.path, op.content)
            ws.delete(op.prior_path)
        else:
            ws.rename(op.prior_path, op.path)


def apply_diff_entries(
    entries: Sequence[DiffEntry],
    root: str,
    *,
    dry_run: bool = False,
    protected: Optional[Iterable[str]] = None,
    logger: logging.Logger | None = None,
    log: bool = False,
) -> ApplyResult:
    """
    Resolve all entries, then commit the error-free operations in diff order.

    There is no rollback across files: each committed operation stays even if
    a later one fails. `files_processed` (and `blocks_processed`) count the
    operations that were committed.
    """
    lg = resolve_logger(logger=logger, enabled=log, name=__name__)
    result = ApplyResult(dry_run=dry_run)

    if not entries:
        result.message = "No files found in diff"
        result.errors.append("Failed to parse diff or no files found")
        return result

    ws = Workspace(root, dry_run=dry_run)
    ops = resolve_operations(entries, ws, protected=get_protected_spec(protected))
    for op in ops:
        if op.error:
            result.errors.append(f"{op.path}: {op.error}")
            lg.warning("Skipping %s: %s", op.path, op.error)

    committed = 0
    for op in ops:
        if op.error:
            continue
        try:
            _commit(op, ws)
        except Exception as e:
            result.errors.append(f"{op.path}: {str(e) or type(e).__name__}")
            lg.error("Failed to %s %s: %s", op.kind, op.path, e)
            continue
        committed += 1
        lg.debug("Applied %s %s", op.kind, op.path)

    result.files_processed = result.blocks_processed = committed
    result.success = committed > 0
    if not result.errors:
        result.message = f"Successfully applied changes to {committed} file(s)"
    else:
        result.message = f"Applied changes to {committed} file(s) with {len(result.errors)} error(s)"
    if dry_run:
        result.message = "DRY RUN: " + result.message
    return result


def apply_git_diff(
    content: str,
    root: str,
    *,
    dry_run: bool = False,
    protected: Optional[Iterable[str]] = None,
    logger: logging.Logger | None = None,
    log: bool = False,
) -> ApplyResult:
    """Clean, parse and apply a git diff found in `content`. Never raises."""
    lg = resolve_logger(logger=logger, enabled=log, name=__name__)
    result = ApplyResult(dry_run=dry_run)
    try:
        cleaned = clean_diff_content(content)
        if not cleaned:
            result.message = "No valid git diff content found"
            result.errors.append("Empty or invalid diff content")
            return result
        entries = parse_git_diff(cleaned)
        lg.debug("Parsed %d diff entr(y/ies)", len(entries))
        return apply_diff_entries(entries, root, dry_run=dry_run, protected=protected, logger=lg)
    except Exception as e:
        result.message = f"Failed to apply diff: {e}"
        result.errors.append(str(e))
        return result
