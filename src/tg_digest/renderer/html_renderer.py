"""HTML renderer using Jinja2 templates."""

import time
from pathlib import Path

import structlog
from jinja2 import (
    BaseLoader,
    Environment,
    FileSystemLoader,
    PackageLoader,
    TemplateError,
    TemplateNotFound,
    select_autoescape,
)

from tg_digest.errors import RenderError
from tg_digest.renderer.filters import format_number
from tg_digest.renderer.io import AtomicWriter
from tg_digest.renderer.metrics import RendererMetrics
from tg_digest.renderer.models import GeneratedFile


logger = structlog.get_logger()

TEMPLATE_SUFFIX = "_template"


def output_name(template_name: str) -> str:
    """Derive the output file name for a template.

    ``watermark/digest_template.html`` becomes ``watermark_digest.html``.

    Args:
        template_name: Template path relative to the templates directory.

    Returns:
        Flat output file name.
    """
    return (
        template_name.replace(TEMPLATE_SUFFIX, "").replace("/", "_").replace("\\", "_")
    )


class HtmlRenderer:
    """Renders digest pages using Jinja2 templates.

    Templates are looked up as ``<mode>/<page>_template.html`` in the
    configured templates directory, or in the packaged ``default`` mode when
    no directory is given. Auto-escaping is enabled for HTML so that post
    text cannot inject markup.
    """

    def __init__(
        self,
        output_dir: Path,
        templates_dir: Path | None = None,
        task_id: str | None = None,
        metrics: RendererMetrics | None = None,
    ) -> None:
        """Initialize the HTML renderer.

        Args:
            output_dir: Output directory for rendered files.
            templates_dir: Directory holding ``<mode>/`` template folders.
            task_id: Optional task identifier for logging.
            metrics: Optional metrics instance.
        """
        self._output_dir = output_dir
        self._metrics = metrics or RendererMetrics.get_instance()
        self._log = logger.bind(component="renderer")
        if task_id:
            self._log = self._log.bind(task_id=task_id)
        self._writer = AtomicWriter(output_dir, task_id)

        loader: BaseLoader
        if templates_dir is not None:
            loader = FileSystemLoader(templates_dir)
        else:
            loader = PackageLoader("tg_digest.renderer", "templates")

        self._env = Environment(
            loader=loader,
            autoescape=select_autoescape(["html", "xml"]),
            trim_blocks=True,
            lstrip_blocks=True,
        )
        self._env.filters["format_number"] = format_number

        self._log.debug("templates_loaded", templates=self.template_names())

    @property
    def output_dir(self) -> Path:
        """Directory rendered files are written to."""
        return self._output_dir

    def template_names(self) -> list[str]:
        """List the available page templates."""
        return sorted(
            name
            for name in self._env.list_templates()
            if Path(name).stem.endswith(TEMPLATE_SUFFIX)
        )

    def render(self, template_name: str, context: dict[str, object]) -> str:
        """Render a template to a string.

        Args:
            template_name: Template path, e.g. ``default/digest_template.html``.
            context: Template context data.

        Returns:
            Rendered markup.

        Raises:
            RenderError: If the template is missing or fails to render.
        """
        start_time = time.perf_counter()
        try:
            template = self._env.get_template(template_name)
            content = template.render(**context)
        except TemplateNotFound as e:
            self._metrics.record_failure()
            raise RenderError(
                f"Template not found: {template_name}", template=template_name
            ) from e
        except (TemplateError, TypeError) as e:
            self._metrics.record_failure()
            self._log.warning("template_failed", template=template_name, error=str(e))
            raise RenderError(
                f"Failed to render {template_name}: {e}", template=template_name
            ) from e

        duration_ms = (time.perf_counter() - start_time) * 1000
        self._metrics.record_template_duration(template_name, duration_ms)
        self._log.debug(
            "template_rendered",
            template=template_name,
            chars=len(content),
            duration_ms=round(duration_ms, 2),
        )
        return content

    def render_to_file(
        self, template_name: str, context: dict[str, object]
    ) -> GeneratedFile:
        """Render a template and write it into the output directory.

        Args:
            template_name: Template path, e.g. ``default/digest_template.html``.
            context: Template context data.

        Returns:
            Information about the written file.

        Raises:
            RenderError: If the template is missing or fails to render,
                or the page cannot be written.
        """
        content = self.render(template_name, context)
        target = self._output_dir / output_name(template_name)
        try:
            file_info = self._writer.write(target, content)
        except OSError as e:
            self._metrics.record_failure()
            self._log.warning("write_failed", template=template_name, error=str(e))
            raise RenderError(
                f"Failed to write {target}: {e}", template=template_name
            ) from e

        self._metrics.record_bytes(file_info.bytes_written)
        self._metrics.record_file_generated()

        self._log.info(
            "file_rendered",
            template=template_name,
            file_path=file_info.path,
            bytes_written=file_info.bytes_written,
        )
        return file_info
