# patchforge/core.py
import logging
from dataclasses import dataclass
from typing import Any, Callable, Dict, Iterable, Optional, Sequence

from .commit.diff import apply_diff_entries, apply_git_diff
from .commit.search_replace import apply_edit_blocks, apply_search_replace_blocks
from .extract.diffs import parse_git_diff
from .extract.search_replace import parse_search_replace_blocks
from .models.result import ApplyResult


@dataclass(frozen=True)
class PatchFormat:
    """
    One wire format an LLM can be asked to answer in.

    `parse(text) -> operations` never touches disk; `apply(operations, root,
    **options) -> ApplyResult` does. `run(text, root, **options)` is the
    composed, never-raising entry point with the format's own diagnostics
    for unrecognisable input.
    """

    name: str
    parse: Callable[[str], Sequence[Any]]
    apply: Callable[..., ApplyResult]
    run: Callable[..., ApplyResult]


PATCH_FORMATS: Dict[str, PatchFormat] = {
    "search_replace": PatchFormat(
        "search_replace", parse_search_replace_blocks, apply_edit_blocks, apply_search_replace_blocks
    ),
    "git_diff": PatchFormat("git_diff", parse_git_diff, apply_diff_entries, apply_git_diff),
}


def get_patch_format(name: str) -> PatchFormat:
    try:
        return PATCH_FORMATS[name]
    except KeyError:
        known = ", ".join(sorted(PATCH_FORMATS))
        raise ValueError(f"Unknown patch format '{name}' (expected one of: {known})") from None


def apply_patch(
    content: str,
    root: str,
    *,
    fmt: str = "search_replace",
    dry_run: bool = False,
    protected: Optional[Iterable[str]] = None,
    logger: Optional[logging.Logger] = None,
    log: bool = False,
) -> ApplyResult:
    """
    Apply `content` under `root` using the caller-chosen format.

    The format is never guessed from the text: a response holding both a
    diff and SEARCH/REPLACE blocks is read only the way the caller asked.
    An unknown `fmt` raises ValueError; everything about the text itself is
    reported through the returned ApplyResult.
    """
    return get_patch_format(fmt).run(
        content, root, dry_run=dry_run, protected=protected, logger=logger, log=log
    )
