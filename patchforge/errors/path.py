from .base import PatchforgeError


class PathViolation(PatchforgeError):
    """A path resolves outside the workspace root."""
