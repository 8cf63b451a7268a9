"""Correlation ID context management for run tracing.

Provides ContextVar-based storage for the correlation ID of the current
digest run. Every log entry emitted during the run carries it, so the
lines of one scheduled run can be told apart in a shared log.

Usage:
    from discuss_digest.observability.context import correlation_id_context

    with correlation_id_context() as run_id:
        result = await digest_run.run()
"""

import uuid
from contextvars import ContextVar
from contextlib import contextmanager
from typing import Optional, Generator

_correlation_id_var: ContextVar[Optional[str]] = ContextVar(
    "correlation_id", default=None
)


def new_run_id() -> str:
    """Short random identifier for one run."""
    return uuid.uuid4().hex[:12]


def set_correlation_id(corr_id: Optional[str] = None) -> str:
    """Set the correlation ID for the current context.

    Args:
        corr_id: Optional correlation ID. If None, generates one.

    Returns:
        The correlation ID that was set.
    """
    if corr_id is None:
        corr_id = new_run_id()

    _correlation_id_var.set(corr_id)
    return corr_id


def get_correlation_id() -> Optional[str]:
    """Get the current correlation ID, or None if not set."""
    return _correlation_id_var.get()


def clear_correlation_id() -> None:
    """Reset the correlation ID to unset."""
    _correlation_id_var.set(None)


@contextmanager
def correlation_id_context(
    corr_id: Optional[str] = None,
) -> Generator[str, None, None]:
    """Scoped correlation ID; the previous value is restored on exit.

    Args:
        corr_id: Optional correlation ID. If None, generates one.

    Yields:
        The correlation ID used inside the block.
    """
    if corr_id is None:
        corr_id = new_run_id()

    token = _correlation_id_var.set(corr_id)

    try:
        yield corr_id
    finally:
        _correlation_id_var.reset(token)
