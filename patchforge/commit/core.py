# patchforge/commit/core.py
import logging
import os
from typing import Dict, Optional

from ..errors.commit import CommitError
from ..errors.path import PathViolation
from ..utils.paths import is_absolute_path

log = logging.getLogger(__name__)


def _normalized_path(base_real: str, rel_path: str) -> str:
    """
    Join and normalize a workspace-relative path while enforcing containment.
    Raises PathViolation if the path is absolute or resolves outside base_real
    (through `..` segments or a symlink).
    """
    if is_absolute_path(rel_path):
        raise PathViolation(f"Absolute path not allowed: '{rel_path}'")
    target_path = os.path.join(base_real, *rel_path.replace("\\", "/").split("/"))
    resolved = os.path.realpath(target_path)
    # commonpath, not a string prefix check: '/repo-evil' starts with '/repo'.
    if os.path.commonpath([base_real, resolved]) != base_real:
        raise PathViolation(f"Path traversal attempt detected for '{rel_path}'")
    return resolved


class Workspace:
    """
    File access for one apply call, rooted at `root`.

    Every path goes through containment checks. With `dry_run=True` writes,
    deletes and renames land in an in-memory overlay instead of on disk, and
    later reads see them, so sequential edits to one file behave the same as
    a real run.
    """

    def __init__(self, root: str, *, dry_run: bool = False):
        self.root = os.path.realpath(root)
        self.dry_run = dry_run
        # absolute path -> pending content; None marks a pending delete
        self._overlay: Dict[str, Optional[str]] = {}

    def resolve(self, rel_path: str) -> str:
        return _normalized_path(self.root, rel_path)

    def exists(self, rel_path: str) -> bool:
        full = self.resolve(rel_path)
        if full in self._overlay:
            return self._overlay[full] is not None
        return os.path.exists(full)

    def read(self, rel_path: str) -> str:
        full = self.resolve(rel_path)
        if full in self._overlay:
            pending = self._overlay[full]
            if pending is None:
                raise FileNotFoundError(f"File not found: '{rel_path}'")
            return pending
        # newline="" keeps CRLF bytes intact through read/replace/write.
        with open(full, "r", encoding="utf-8", newline="") as f:
            return f.read()

    def write(self, rel_path: str, content: str) -> None:
        full = self.resolve(rel_path)
        if self.dry_run:
            self._overlay[full] = content
            log.debug("DRY RUN: would write %s (%d chars)", rel_path, len(content))
            return
        os.makedirs(os.path.dirname(full), exist_ok=True)
        with open(full, "w", encoding="utf-8", newline="") as f:
            f.write(content)

    def delete(self, rel_path: str) -> None:
        full = self.resolve(rel_path)
        if not self.exists(rel_path):
            raise CommitError(f"File to delete not found: '{rel_path}'")
        if self.dry_run:
            self._overlay[full] = None
            log.debug("DRY RUN: would delete %s", rel_path)
            return
        os.remove(full)

    def rename(self, from_path: str, to_path: str) -> None:
        src = self.resolve(from_path)
        dest = self.resolve(to_path)
        if not self.exists(from_path):
            raise CommitError(f"File to rename not found: '{from_path}'")
        if self.dry_run:
            self._overlay[dest] = self.read(from_path)
            self._overlay[src] = None
            log.debug("DRY RUN: would rename %s to %s", from_path, to_path)
            return
        os.makedirs(os.path.dirname(dest), exist_ok=True)
        os.rename(src, dest)
