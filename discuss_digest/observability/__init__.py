"""Observability module.

Provides:
- Correlation ID context management for run tracing
- Structured logging configuration with context propagation

Usage:
    from discuss_digest.observability import (
        configure_logging,
        correlation_id_context,
    )

    configure_logging(level="INFO")
    with correlation_id_context() as run_id:
        ...
"""

from discuss_digest.observability.context import (
    set_correlation_id,
    get_correlation_id,
    clear_correlation_id,
    correlation_id_context,
)
from discuss_digest.observability.logging import (
    configure_logging,
    add_correlation_id_processor,
    bind_context,
    clear_context,
)

__all__ = [
    # Context
    "set_correlation_id",
    "get_correlation_id",
    "clear_correlation_id",
    "correlation_id_context",
    # Logging
    "configure_logging",
    "add_correlation_id_processor",
    "bind_context",
    "clear_context",
]
