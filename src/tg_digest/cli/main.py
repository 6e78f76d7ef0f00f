"""CLI commands for the digest system."""

import logging
import sys
from collections.abc import Callable
from dataclasses import dataclass
from datetime import UTC, datetime, timedelta
from pathlib import Path
from typing import Any

import click
import structlog
from pydantic import ValidationError

from tg_digest import __version__
from tg_digest.assembler.models import CardIndices
from tg_digest.config.constants import (
    COMPONENT_CLI,
    DEFAULT_EDITOR_CHOICE_POST_ID,
    DEFAULT_LOOKBACK_DAYS,
    DEFAULT_TOP_COUNT,
)
from tg_digest.config.error_hints import format_validation_error
from tg_digest.config.loader import ConfigLoader, ConfigValidationError
from tg_digest.config.schemas import AppConfig
from tg_digest.config.task import (
    CardsCommand,
    DigestCommand,
    PostCommand,
    Task,
)
from tg_digest.errors import DigestError
from tg_digest.fetch.json_source import JsonPostSource
from tg_digest.observability.logging import (
    bind_task_context,
    clear_task_context,
    configure_logging,
)
from tg_digest.renderer.html_renderer import HtmlRenderer
from tg_digest.runner import TaskRunner
from tg_digest.settings import get_settings
from tg_digest.window.resolver import DateWindow, resolve_window


logger = structlog.get_logger()

DATE_FORMATS = ["%Y-%m-%d", "%Y-%m-%dT%H:%M:%S", "%Y-%m-%d %H:%M:%S"]


@dataclass
class TaskOptions:
    """Options shared by the rendering commands."""

    channel_name: str
    config_path: Path | None
    top_count: int
    mode: str
    editor_choice_post_id: int
    from_date: datetime | None
    to_date: datetime | None
    year: int | None
    month: int | None
    week: int | None
    json_logs: bool
    verbose: bool


def _as_utc(value: datetime) -> datetime:
    """Treat naive datetimes as UTC."""
    return value.replace(tzinfo=UTC) if value.tzinfo is None else value


def _resolve_task_window(options: TaskOptions, now: datetime) -> DateWindow:
    """Pick the request window from calendar or explicit date options.

    Args:
        options: Parsed CLI options.
        now: Current time, used when no end date is given.

    Returns:
        The request window.

    Raises:
        click.UsageError: If calendar and explicit dates are mixed.
        DateWindowError: If the calendar coordinates are invalid.
    """
    if options.year is not None:
        if options.from_date is not None or options.to_date is not None:
            raise click.UsageError(
                "--year/--month/--week cannot be combined with --from-date/--to-date"
            )
        return resolve_window(options.year, options.month, options.week)

    if options.month is not None or options.week is not None:
        raise click.UsageError("--month/--week require --year")

    to_date = _as_utc(options.to_date) if options.to_date else now
    from_date = (
        _as_utc(options.from_date)
        if options.from_date
        else to_date - timedelta(days=DEFAULT_LOOKBACK_DAYS)
    )
    return DateWindow.between(from_date, to_date)


def _setup_logging(options: TaskOptions) -> None:
    settings = get_settings()
    level = logging.DEBUG if options.verbose else settings.logging_level()
    configure_logging(level=level, json_format=options.json_logs or settings.json_logs)


def _load_configuration(
    config_path: Path, task_id: str, log: structlog.typing.FilteringBoundLogger
) -> AppConfig:
    """Load and validate configuration, exit on failure.

    Args:
        config_path: Path to the configuration file.
        task_id: Task identifier.
        log: Logger instance.

    Returns:
        Validated configuration.
    """
    loader = ConfigLoader(task_id=task_id)
    try:
        return loader.load(config_path)
    except ConfigValidationError as e:
        log.warning("config_load_failed", error=str(e))
        click.echo(f"Configuration validation failed: {e.file_path}", err=True)
        for error in e.errors:
            formatted = format_validation_error(
                location=error["loc"],
                message=error["msg"],
                error_type=error.get("type", "unknown"),
                include_hint=True,
            )
            click.echo(f"  - {formatted}", err=True)
        sys.exit(1)


def _execute(
    options: TaskOptions,
    command: DigestCommand | CardsCommand | PostCommand,
) -> None:
    """Build the task from options and run it.

    Args:
        options: Parsed CLI options.
        command: Command to run.
    """
    _setup_logging(options)
    log = logger.bind(component=COMPONENT_CLI, command=command.kind)

    try:
        now = datetime.now(UTC).replace(microsecond=0)
        task_window = _resolve_task_window(options, now)
        task = Task(
            command=command,
            channel_name=options.channel_name,
            top_count=options.top_count,
            mode=options.mode,
            editor_choice_post_id=options.editor_choice_post_id,
            from_date=task_window.from_ts,
            to_date=task_window.to_ts,
        )
    except DigestError as e:
        log.warning("task_rejected", **e.to_dict())
        click.echo(f"Error: {e.message}", err=True)
        sys.exit(1)
    except ValidationError as e:
        log.warning("task_rejected", error_count=e.error_count())
        for err in e.errors():
            click.echo(f"Error: {err['msg']}", err=True)
        sys.exit(1)

    bind_task_context(
        task.task_id, channel_name=task.channel_name, command=command.kind
    )
    try:
        config_path = options.config_path or get_settings().config_path
        config = _load_configuration(config_path, task.task_id, log)

        runner = TaskRunner(
            source=JsonPostSource(config.posts_dir),
            renderer=HtmlRenderer(
                output_dir=config.output_dir,
                templates_dir=config.input_dir,
                task_id=task.task_id,
            ),
        )
        try:
            result = runner.run(task)
        except DigestError as e:
            log.warning("task_failed", **e.to_dict())
            click.echo(f"Error: {e.message}", err=True)
            sys.exit(1)

        click.echo(f"Rendered {result.file.absolute_path}")
    finally:
        clear_task_context()


def task_options(func: Callable[..., Any]) -> Callable[..., Any]:
    """Attach the options shared by digest, cards and post commands."""
    decorators = [
        click.argument("channel_name"),
        click.option(
            "--config",
            "-c",
            "config_path",
            type=click.Path(path_type=Path, dir_okay=False),
            default=None,
            help="Path to configuration file (default: $TGDIGEST_CONFIG or cfg.yaml)",
        ),
        click.option(
            "--top-count",
            type=click.IntRange(min=1),
            default=DEFAULT_TOP_COUNT,
            show_default=True,
            help="Count of posts per metric",
        ),
        click.option(
            "--mode",
            "-m",
            required=True,
            help="Template folder name inside the templates directory",
        ),
        click.option(
            "--editor-choice-post-id",
            "-e",
            type=int,
            default=DEFAULT_EDITOR_CHOICE_POST_ID,
            show_default=True,
            help="Id of the post placed in the editor choice block",
        ),
        click.option(
            "--from-date",
            "-f",
            type=click.DateTime(formats=DATE_FORMATS),
            default=None,
            help="Window start (UTC when no offset is given)",
        ),
        click.option(
            "--to-date",
            "-t",
            type=click.DateTime(formats=DATE_FORMATS),
            default=None,
            help="Window end, exclusive (default: now)",
        ),
        click.option("--year", type=int, default=None, help="Calendar year window"),
        click.option("--month", type=int, default=None, help="Month of --year"),
        click.option("--week", type=int, default=None, help="Week of --month (1-5)"),
        click.option(
            "--json-logs/--no-json-logs",
            default=False,
            help="Output logs in JSON format",
        ),
        click.option("--verbose", "-v", is_flag=True, help="Enable verbose logging"),
    ]
    for decorator in reversed(decorators):
        func = decorator(func)
    return func


@click.group()
@click.version_option(version=__version__, prog_name="tgdigest")
def cli() -> None:
    """Create digest for your telegram channel."""


@cli.command()
@task_options
def digest(**kwargs: Any) -> None:
    """Generate the top posts digest page."""
    _execute(TaskOptions(**kwargs), DigestCommand())


@cli.command()
@task_options
@click.option("--replies", type=int, default=None, help="Rank of the replies card")
@click.option("--reactions", type=int, default=None, help="Rank of the reactions card")
@click.option("--forwards", type=int, default=None, help="Rank of the forwards card")
@click.option("--views", type=int, default=None, help="Rank of the views card")
def cards(
    replies: int | None,
    reactions: int | None,
    forwards: int | None,
    views: int | None,
    **kwargs: Any,
) -> None:
    """Generate cards from chosen digest posts, ranks 1 to TOP_COUNT."""
    indices = CardIndices(
        replies=replies, reactions=reactions, forwards=forwards, views=views
    )
    _execute(TaskOptions(**kwargs), CardsCommand(indices=indices))


@cli.command()
@task_options
def post(**kwargs: Any) -> None:
    """Generate the editor choice post page."""
    _execute(TaskOptions(**kwargs), PostCommand())


@cli.command()
@click.argument("year", type=int)
@click.argument("month", type=int, required=False)
@click.argument("week", type=int, required=False)
def window(year: int, month: int | None, week: int | None) -> None:
    """Print the UTC window for YEAR [MONTH [WEEK]]."""
    try:
        resolved = resolve_window(year, month, week)
    except DigestError as e:
        click.echo(f"Error: {e.message}", err=True)
        sys.exit(1)

    click.echo(f"from: {resolved.start.isoformat()} ({resolved.from_ts})")
    click.echo(f"to:   {resolved.end.isoformat()} ({resolved.to_ts})")


if __name__ == "__main__":
    cli()
