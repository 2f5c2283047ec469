"""Structured observability system using structlog.

Provides:
- Context-aware structured logging
- Automatic actor tracking for edits
- JSON output for production, pretty console for dev
- Timing of graph traversals

Nothing is configured on import: the embedding application owns the
process-wide logging setup. Call ``configure_logging()`` once at startup to
get this package's renderer chain (the test suite does so in conftest).

Usage:
    from textlineage.observ import configure_logging, get_logger

    configure_logging()
    logger = get_logger(__name__)
    logger.info("translation_added", culture="fr", translated_from="en")
"""

import sys
import logging
from typing import Optional
from contextlib import contextmanager
from contextvars import ContextVar
from time import perf_counter

import structlog
from structlog.typing import EventDict, WrappedLogger

from textlineage.config import get_settings


# Who is performing the current edit (an opaque user identifier)
actor_id_var: ContextVar[Optional[str]] = ContextVar("actor_id", default=None)


# ═════════════════════════════════════════════════════════════════════════════
# Structlog Configuration
# ═════════════════════════════════════════════════════════════════════════════

def add_context_fields(
    logger: WrappedLogger,
    method_name: str,
    event_dict: EventDict
) -> EventDict:
    """Add context variables to every log entry."""
    actor_id = actor_id_var.get()
    if actor_id:
        event_dict["actor_id"] = actor_id

    return event_dict


def configure_logging() -> None:
    """Configure structlog based on environment settings."""
    settings = get_settings()

    is_dev = settings.debug or settings.log_level.upper() == "DEBUG"

    logging.basicConfig(
        format="%(message)s",
        stream=sys.stdout,
        level=getattr(logging, settings.log_level.upper())
    )

    processors = [
        structlog.contextvars.merge_contextvars,
        add_context_fields,
        structlog.stdlib.add_log_level,
        structlog.stdlib.add_logger_name,
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
    ]

    if is_dev:
        processors.extend([
            structlog.dev.set_exc_info,
            structlog.dev.ConsoleRenderer(colors=True)
        ])
    else:
        processors.extend([
            structlog.processors.format_exc_info,
            structlog.processors.JSONRenderer()
        ])

    structlog.configure(
        processors=processors,
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )


# ═════════════════════════════════════════════════════════════════════════════
# Logger Factory
# ═════════════════════════════════════════════════════════════════════════════

def get_logger(name: str) -> structlog.stdlib.BoundLogger:
    """Get a structured logger for the given module.

    Args:
        name: Module name (typically __name__)

    Returns:
        Bound logger with automatic context

    Example:
        logger = get_logger(__name__)
        logger.info("original_updated", culture="en", is_material=True)
    """
    return structlog.get_logger(name)


# ═════════════════════════════════════════════════════════════════════════════
# Context Management
# ═════════════════════════════════════════════════════════════════════════════

def set_actor_id(actor_id: str) -> None:
    """Set the acting user for current context."""
    actor_id_var.set(actor_id)


def clear_context() -> None:
    """Clear all context variables."""
    actor_id_var.set(None)


@contextmanager
def acting_as(actor_id: str):
    """Attribute every event logged inside the block to ``actor_id``.

    The previous actor is restored on exit.
    """
    token = actor_id_var.set(actor_id)
    try:
        yield
    finally:
        actor_id_var.reset(token)


# ═════════════════════════════════════════════════════════════════════════════
# Performance Timing
# ═════════════════════════════════════════════════════════════════════════════

class timer:
    """Context manager for timing code blocks.

    Example:
        with timer(logger, "cascade_removal", culture="fr"):
            removed = self._remove_subtree(culture)
    """

    def __init__(
        self,
        logger: structlog.stdlib.BoundLogger,
        operation: str,
        **context
    ):
        self.logger = logger
        self.operation = operation
        self.context = context
        self.start_time: Optional[float] = None
        self.duration_ms: Optional[float] = None

    def __enter__(self):
        self.start_time = perf_counter()
        self.logger.debug(f"{self.operation}_started", **self.context)
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.duration_ms = round((perf_counter() - self.start_time) * 1000, 2)
        if exc_type is None:
            self.logger.debug(
                f"{self.operation}_completed",
                duration_ms=self.duration_ms,
                success=True,
                **self.context
            )
        else:
            self.logger.error(
                f"{self.operation}_failed",
                duration_ms=self.duration_ms,
                error=str(exc_val),
                error_type=exc_type.__name__,
                success=False,
                **self.context
            )
        return False  # Don't suppress exceptions
