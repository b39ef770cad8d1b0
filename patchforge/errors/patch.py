from .base import PatchforgeError


class PatchFailedError(PatchforgeError):
    """A single edit could not be applied to its target file."""
