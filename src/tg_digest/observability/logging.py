"""Structured logging setup for CLI runs."""

import logging
import sys
from typing import TextIO

import structlog


def _renderer(json_format: bool) -> structlog.types.Processor:
    if json_format:
        return structlog.processors.JSONRenderer(sort_keys=True)
    return structlog.dev.ConsoleRenderer(colors=True)


def configure_logging(
    level: int = logging.INFO,
    output: TextIO | None = None,
    json_format: bool = True,
) -> None:
    """Route structlog and stdlib logging to one stream.

    Every event carries the bound task context, its level and an ISO
    timestamp. JSON lines suit log collectors; the console renderer is
    meant for interactive runs.

    Args:
        level: Minimum level to emit.
        output: Target stream, stderr when omitted.
        json_format: Render JSON lines instead of console output.
    """
    stream = output if output is not None else sys.stderr

    structlog.configure(
        processors=[
            structlog.contextvars.merge_contextvars,
            structlog.processors.add_log_level,
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.processors.StackInfoRenderer(),
            structlog.processors.format_exc_info,
            _renderer(json_format),
        ],
        wrapper_class=structlog.make_filtering_bound_logger(level),
        context_class=dict,
        logger_factory=structlog.PrintLoggerFactory(file=stream),
        cache_logger_on_first_use=True,
    )

    logging.basicConfig(format="%(message)s", stream=stream, level=level)


def bind_task_context(task_id: str, **context: str) -> None:
    """Attach the task id, plus any extra fields, to every later event.

    Args:
        task_id: Task identifier.
        **context: Additional fields such as channel name or command.
    """
    structlog.contextvars.bind_contextvars(task_id=task_id, **context)


def clear_task_context() -> None:
    """Drop all task context bound for the current run."""
    structlog.contextvars.clear_contextvars()
