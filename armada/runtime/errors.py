"""Exception policy for automated paths that must always produce a result."""

from __future__ import annotations

import logging

# Programming faults only; OS and interpreter-level errors still propagate.
RECOVERABLE_RUNTIME_ERRORS: tuple[type[Exception], ...] = (
    RuntimeError,
    LookupError,
    ValueError,
    TypeError,
    AttributeError,
)


def log_recoverable(
    logger: logging.Logger,
    message: str,
    *args: object,
    level: int = logging.WARNING,
) -> None:
    """Log ``message`` with the active traceback; call from inside ``except``."""
    logger.log(level, message, *args, exc_info=True)
