"""Task runner wiring the post source, ranker, assembler and renderer."""

from dataclasses import dataclass

import structlog

from tg_digest.assembler.context import (
    RenderingContext,
    build_cards_context,
    build_digest_context,
    build_post_context,
)
from tg_digest.config.task import CardsCommand, DigestCommand, PostCommand, Task
from tg_digest.fetch.protocols import PostSource
from tg_digest.ranker.digest import build_ranked_digest
from tg_digest.renderer.html_renderer import HtmlRenderer
from tg_digest.renderer.models import GeneratedFile


logger = structlog.get_logger()

DIGEST_TEMPLATE = "digest_template.html"
CARDS_TEMPLATE = "render_template.html"
POST_TEMPLATE = "post_template.html"


@dataclass(frozen=True)
class RunResult:
    """Outcome of a task run.

    Attributes:
        task_id: Task identifier.
        command: Command kind that ran.
        file: Rendered page.
        posts_count: Posts fetched for the window (1 for post pages).
        effective_k: Achieved top-N size, None for post pages.
    """

    task_id: str
    command: str
    file: GeneratedFile
    posts_count: int
    effective_k: int | None = None


class TaskRunner:
    """Runs digest, cards and post tasks.

    The post source and renderer are injected; the runner holds no other
    state, so one instance can serve many tasks.
    """

    def __init__(self, source: PostSource, renderer: HtmlRenderer) -> None:
        """Initialize the runner.

        Args:
            source: Provider of channel posts.
            renderer: Renderer for the resulting context.
        """
        self._source = source
        self._renderer = renderer

    def run(self, task: Task) -> RunResult:
        """Run a task end to end.

        Args:
            task: The request to fulfil.

        Returns:
            RunResult describing the rendered page.

        Raises:
            DigestError: If input validation, the source or rendering fails.
        """
        log = logger.bind(
            component="runner",
            task_id=task.task_id,
            command=task.command.kind,
            channel_name=task.channel_name,
        )
        log.info(
            "task_started",
            mode=task.mode,
            top_count=task.top_count,
            from_date=task.from_date,
            to_date=task.to_date,
        )

        if isinstance(task.command, PostCommand):
            post = self._source.get_post(task.channel_name, task.editor_choice_post_id)
            file_info = self._render(
                task, POST_TEMPLATE, build_post_context(post, task.channel_name)
            )
            result = RunResult(task.task_id, task.command.kind, file_info, 1)
            log.info("task_complete", file_path=file_info.path)
            return result

        posts = self._source.fetch_posts(
            task.channel_name, task.from_date, task.to_date
        )
        digest = build_ranked_digest(posts, task.top_count)

        context: RenderingContext
        if isinstance(task.command, CardsCommand):
            context = build_cards_context(
                digest,
                task.command.indices,
                task.editor_choice_post_id,
                task.channel_name,
            )
            template = CARDS_TEMPLATE
        elif isinstance(task.command, DigestCommand):
            context = build_digest_context(
                digest, task.editor_choice_post_id, task.channel_name
            )
            template = DIGEST_TEMPLATE
        else:
            raise TypeError(f"Unsupported command: {task.command!r}")

        file_info = self._render(task, template, context)
        log.info(
            "task_complete",
            file_path=file_info.path,
            posts_count=len(posts),
            effective_k=digest.effective_k,
        )
        return RunResult(
            task_id=task.task_id,
            command=task.command.kind,
            file=file_info,
            posts_count=len(posts),
            effective_k=digest.effective_k,
        )

    def _render(
        self, task: Task, template: str, context: RenderingContext
    ) -> GeneratedFile:
        return self._renderer.render_to_file(f"{task.mode}/{template}", context)
