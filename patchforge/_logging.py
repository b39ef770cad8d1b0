"""
Opt-in logging for patchforge.

Library code never configures handlers or prints. Every public entry point
takes ``logger=`` and ``log=`` and resolves them once:

    from patchforge._logging import resolve_logger

    def apply_search_replace_blocks(content, root, *, logger=None, log=False):
        lg = resolve_logger(logger=logger, enabled=log, name=__name__)
        lg.debug("extracting blocks")

Without either argument all calls land on a NoopLogger, so a batch of edits
is silent unless the caller asks for diagnostics.
"""
from __future__ import annotations

import logging


class NoopLogger:
    """Accepts the stdlib logger call surface and drops everything."""

    def debug(self, *args, **kwargs):  # type: ignore[no-untyped-def]
        pass

    info = warning = error = exception = critical = log = debug

    def isEnabledFor(self, level: int) -> bool:  # noqa: N802 - mirrors logging.Logger
        return False


def resolve_logger(
    logger: logging.Logger | None = None,
    *,
    enabled: bool = False,
    name: str | None = None,
    level: int = logging.INFO,
) -> logging.Logger | NoopLogger:
    """
    Pick the logger a patch run should write to.

    - An explicit ``logger`` wins (anything with ``.debug``/``.warning`` works).
    - ``enabled=True`` returns the named stdlib logger at ``level``; it
      propagates to the root so pytest's ``caplog`` sees the records.
    - Otherwise a NoopLogger.
    """
    if logger is not None:
        return logger
    if not enabled:
        return NoopLogger()
    lg = logging.getLogger(name or "patchforge")
    lg.setLevel(level)
    lg.propagate = True
    return lg
