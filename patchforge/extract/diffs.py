# patchforge/extract/diffs.py
from __future__ import annotations

from typing import List, Optional

from unidiff import PatchSet
from unidiff.errors import UnidiffParseError

from ..models.operations import (
    ADDED,
    CONTEXT,
    ENTRY_ADDED,
    ENTRY_CHANGED,
    ENTRY_DELETED,
    ENTRY_MALFORMED,
    ENTRY_RENAMED,
    ENTRY_UNSUPPORTED,
    REMOVED,
    DiffEntry,
    Hunk,
    HunkLine,
)

DIFF_HEADER = "diff --git"
DEV_NULL = "/dev/null"
BINARY_MARKERS = ("Binary files ", "GIT binary patch")
_BODY_PREFIXES = ("+", "-", " ", "\\", "@@")


def clean_diff_content(content: str) -> str:
    """
    Drop everything before the first `diff --git` line (prose, an opening
    ```diff fence). Returns "" when there is no such line. Trailing prose is
    left in place; the parser ignores it.
    """
    if not content or not isinstance(content, str):
        return ""
    lines = content.split("\n")
    for i, ln in enumerate(lines):
        if ln.startswith(DIFF_HEADER):
            return "\n".join(lines[i:]).strip()
    return ""


def _strip_prefix(path: Optional[str]) -> Optional[str]:
    """Repository-relative form of a unidiff file name; None for /dev/null."""
    if path is None:
        return None
    path = path.strip()
    if path == DEV_NULL:
        return None
    if path.startswith(("a/", "b/")):
        path = path[2:]
    return path


def _split_sections(text: str) -> List[List[str]]:
    """One list of lines (newlines kept) per `diff --git` section."""
    sections: List[List[str]] = []
    for line in text.splitlines(keepends=True):
        if line.startswith(DIFF_HEADER) or not sections:
            sections.append([])
        sections[-1].append(line)
    return sections


def _trim_section(section: List[str]) -> tuple[List[str], List[str]]:
    """
    Cut a section down to what unidiff should see.

    Blank lines in the header area are dropped. The hunk area runs from the
    first `@@` line up to the first line that cannot be hunk body, so a
    closing fence or trailing prose never reaches the parser. Returns the
    trimmed section and its hunk area.
    """
    start = next((i for i, ln in enumerate(section) if ln.startswith("@@")), len(section))
    end = start
    while end < len(section):
        ln = section[end]
        if ln.strip() and not ln.startswith(_BODY_PREFIXES):
            break
        end += 1
    header = [ln for ln in section[:start] if ln.strip()]
    body = section[start:end]
    return header + body, body


def _count_body(body: List[str]) -> tuple[int, int, int]:
    """Added, removed and non-blank context lines written under the hunk headers."""
    added = removed = context = 0
    for ln in body:
        if ln.startswith("@@"):
            continue
        if ln.startswith("+"):
            added += 1
        elif ln.startswith("-"):
            removed += 1
        elif ln.startswith(" ") and ln[1:].strip():
            context += 1
    return added, removed, context


def _line_text(value: str) -> str:
    return value[:-1] if value.endswith("\n") else value


def _convert_hunk(h) -> Hunk:
    hunk = Hunk(
        old_start=h.source_start,
        old_count=h.source_length,
        new_start=h.target_start,
        new_count=h.target_length,
    )
    for line in h:
        if line.is_added:
            hunk.lines.append(HunkLine(ADDED, _line_text(line.value)))
        elif line.is_removed:
            hunk.lines.append(HunkLine(REMOVED, _line_text(line.value)))
        elif line.is_context:
            hunk.lines.append(HunkLine(CONTEXT, _line_text(line.value)))
        # `\ No newline` markers and trailing blank lines carry no content
    return hunk


def _parse_section(section: List[str]) -> Optional[DiffEntry]:
    """
    Build the DiffEntry for one `diff --git` section, or None if its header
    is not a git file header.

    A hunk whose body disagrees with its `@@` line counts makes the whole
    entry malformed rather than applying part of it.
    """
    header = PatchSet(section[:1])
    if not header:
        return None
    header_path = _strip_prefix(header[0].target_file) or _strip_prefix(header[0].source_file) or ""

    lines, body = _trim_section(section)
    try:
        files = PatchSet(lines)
    except UnidiffParseError as e:
        return DiffEntry(ENTRY_MALFORMED, header_path, reason=str(e))
    if not files:
        return None

    # A `---` line that disagrees with the git header makes unidiff open a
    # second file for the same section; the last one holds the hunks.
    patched = files[-1]
    hunks = [_convert_hunk(h) for h in patched]

    parsed = (
        sum(1 for h in hunks for ln in h.lines if ln.kind == ADDED),
        sum(1 for h in hunks for ln in h.lines if ln.kind == REMOVED),
        sum(1 for h in hunks for ln in h.lines if ln.kind == CONTEXT and ln.content.strip()),
    )
    written = _count_body(body)
    if any(w > p for w, p in zip(written, parsed)):
        return DiffEntry(
            ENTRY_MALFORMED,
            header_path,
            reason="hunk body has more lines than its @@ header declares",
        )

    old_path = _strip_prefix(patched.source_file)
    new_path = _strip_prefix(patched.target_file)

    if patched.is_binary_file or any(ln.startswith(BINARY_MARKERS) for ln in section):
        return DiffEntry(ENTRY_UNSUPPORTED, new_path or header_path, reason="binary")
    if any(f.is_added_file for f in files):
        return DiffEntry(ENTRY_ADDED, new_path or header_path, hunks=hunks)
    if any(f.is_removed_file for f in files):
        return DiffEntry(ENTRY_DELETED, old_path or header_path, hunks=hunks)
    if old_path and new_path and old_path != new_path:
        return DiffEntry(ENTRY_RENAMED, new_path, prior_path=old_path, hunks=hunks)
    return DiffEntry(ENTRY_CHANGED, new_path or header_path, hunks=hunks)


def parse_git_diff(content: str) -> List[DiffEntry]:
    """
    Parse a (possibly prose-wrapped) git diff into one DiffEntry per file,
    in the order the diff declares them.

    Each `diff --git` section goes through unidiff on its own, so one
    malformed file becomes an ENTRY_MALFORMED entry and the others still
    parse. Returns [] when nothing diff-shaped is found.
    """
    text = clean_diff_content(content)
    if not text:
        return []
    entries: List[DiffEntry] = []
    for section in _split_sections(text):
        entry = _parse_section(section)
        if entry is not None:
            entries.append(entry)
    return entries
