from .base import PatchforgeError
from .commit import CommitError
from .patch import PatchFailedError
from .path import PathViolation

__all__ = ["PatchforgeError", "PatchFailedError", "CommitError", "PathViolation"]
