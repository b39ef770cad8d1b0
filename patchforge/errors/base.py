class PatchforgeError(Exception):
    """Base class for every error raised inside patchforge."""
