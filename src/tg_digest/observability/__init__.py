"""Structured logging for digest runs."""

from tg_digest.observability.logging import (
    bind_task_context,
    clear_task_context,
    configure_logging,
)


__all__ = ["bind_task_context", "clear_task_context", "configure_logging"]
