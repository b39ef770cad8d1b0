from .base import PatchforgeError


class CommitError(PatchforgeError):
    """A resolved change could not be written to the workspace."""
