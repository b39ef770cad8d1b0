# patchforge/extract/search_replace.py
from __future__ import annotations

import logging
from typing import List, Optional

from .._logging import resolve_logger
from ..models.blocks import EditBlock
from ..utils.paths import looks_like_path
from ..utils.text import narrow_to_tag

FENCE = "```"
SEARCH_MARKER = "<<<<<<< SEARCH"
DIVIDER_MARKER = "======="
REPLACE_MARKER = ">>>>>>> REPLACE"
WRAPPER_TAG = "search_replace_blocks"


def _find_marker(lines: list[str], marker: str, start: int) -> int:
    """Index of the first line at or after `start` whose stripped text is `marker`, else -1."""
    for i in range(start, len(lines)):
        if lines[i].strip() == marker:
            return i
    return -1


def _path_before(lines: list[str], fence_idx: int) -> Optional[str]:
    """
    Look back from a fence opener to the nearest non-blank line and return it
    if it looks like a file path. Only that one line is considered.
    """
    for j in range(fence_idx - 1, -1, -1):
        prev = lines[j].strip()
        if prev:
            return prev if looks_like_path(prev) else None
    return None


def _split_pairs(body: list[str]) -> list[tuple[str, str]]:
    """
    Pull every complete SEARCH / divider / REPLACE triad out of a fence body.

    Markers are found in strict order, each scanning forward from the last, so
    marker text embedded mid-line is content. A line that is *exactly* a
    marker is always taken as one; the format has no escape for that.
    """
    pairs: list[tuple[str, str]] = []
    cursor = 0
    while cursor < len(body):
        s = _find_marker(body, SEARCH_MARKER, cursor)
        if s == -1:
            break
        d = _find_marker(body, DIVIDER_MARKER, s + 1)
        if d == -1:
            break
        e = _find_marker(body, REPLACE_MARKER, d + 1)
        if e == -1:
            break
        pairs.append(("\n".join(body[s + 1:d]), "\n".join(body[d + 1:e])))
        cursor = e + 1
    return pairs


def parse_search_replace_blocks(
    content: str,
    *,
    logger: logging.Logger | None = None,
    log: bool = False,
) -> List[EditBlock]:
    """
    Extract SEARCH/REPLACE edits from an LLM response.

    Accepted shapes (prose may surround or separate blocks):

        path/to/file.ext
        ```language
        <<<<<<< SEARCH
        old content (empty for a new file)
        =======
        new content
        >>>>>>> REPLACE
        ```

    or the path as the first line inside the fence:

        ```language
        path/to/file.ext
        <<<<<<< SEARCH
        ...

    If a `<search_replace_blocks>` ... `</search_replace_blocks>` region is
    present only its inside is scanned. A fence may hold several triads for
    the same file. Fences with no resolvable path or an incomplete triad are
    dropped (logged, never raised). Bodies are kept verbatim: no trimming, no
    dedent.
    """
    lg = resolve_logger(logger=logger, enabled=log, name=__name__)
    if not content or not isinstance(content, str):
        return []

    wrapped = narrow_to_tag(content, WRAPPER_TAG)
    if wrapped is not None:
        lg.debug("Narrowed input to <%s> region", WRAPPER_TAG)
        content = wrapped

    lines = content.split("\n")
    blocks: List[EditBlock] = []
    in_fence = False
    fence_no = 0
    language = ""
    outside_path: Optional[str] = None
    body: list[str] = []

    for i, line in enumerate(lines):
        if not line.startswith(FENCE):
            if in_fence:
                body.append(line)
            continue

        if not in_fence:
            in_fence = True
            fence_no += 1
            language = line[len(FENCE):].strip()
            # The last path line seen stays in force until another one appears,
            # so back-to-back fences under one path line all target that file.
            outside_path = _path_before(lines, i) or outside_path
            body = []
            continue

        # Closing fence.
        in_fence = False
        file_path = outside_path
        first = body[0].strip() if body else ""
        if first and not first.startswith(SEARCH_MARKER):
            file_path = first
            body = body[1:]

        if not file_path:
            lg.warning("Skipping fence %d: no file path found.", fence_no)
            continue

        pairs = _split_pairs(body)
        if not pairs:
            lg.debug("Skipping fence %d (%s): SEARCH/REPLACE markers incomplete.", fence_no, file_path)
            continue

        for search, replace in pairs:
            blocks.append(
                EditBlock(
                    language=language,
                    file_path=file_path,
                    search_content=search,
                    replace_content=replace,
                    ordinal=len(blocks) + 1,
                )
            )

    if in_fence:
        lg.debug("Input ended inside an unterminated fence; ignoring its content.")
    lg.debug("Extracted %d SEARCH/REPLACE block(s).", len(blocks))
    return blocks
