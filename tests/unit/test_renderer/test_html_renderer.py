"""Unit tests for the Jinja2 HTML renderer."""

from pathlib import Path

import pytest

from tg_digest.assembler.context import (
    build_cards_context,
    build_digest_context,
    build_post_context,
)
from tg_digest.assembler.models import CardIndices
from tg_digest.errors import DigestErrorClass, RenderError
from tg_digest.ranker.digest import build_ranked_digest
from tg_digest.ranker.metrics import RankerMetrics
from tg_digest.ranker.models import PostRecord, RankedDigest
from tg_digest.renderer.filters import THIN_SPACE
from tg_digest.renderer.html_renderer import HtmlRenderer
from tg_digest.renderer.metrics import RendererMetrics


@pytest.fixture
def digest() -> RankedDigest:
    """Two ranked posts with large view counts."""
    posts = [
        PostRecord(timestamp=100, id=10, replies=3, views=12500),
        PostRecord(timestamp=200, id=11, replies=1, forwards=2, views=1200),
    ]
    return build_ranked_digest(posts, 3, metrics=RankerMetrics())


@pytest.fixture
def renderer(tmp_path: Path) -> HtmlRenderer:
    """Renderer using the packaged templates."""
    return HtmlRenderer(output_dir=tmp_path / "out", metrics=RendererMetrics())


class TestPackagedTemplates:
    """Tests rendering the packaged default templates."""

    def test_template_names(self, renderer: HtmlRenderer) -> None:
        """Only page templates are listed, base layouts are not."""
        assert renderer.template_names() == [
            "default/digest_template.html",
            "default/post_template.html",
            "default/render_template.html",
        ]

    def test_digest_page(self, renderer: HtmlRenderer, digest: RankedDigest) -> None:
        """Blocks, formatted counts and the editor choice link are rendered."""
        context = build_digest_context(digest, 42, "ithueti")

        html = renderer.render("default/digest_template.html", context)

        assert "По комментариям" in html
        assert "По реакциям" not in html
        assert f"12{THIN_SPACE}500" in html
        assert "https://t.me/ithueti/42" in html

    def test_editor_choice_hidden_when_unset(
        self, renderer: HtmlRenderer, digest: RankedDigest
    ) -> None:
        """An editor choice id of -1 renders no editor choice block."""
        html = renderer.render(
            "default/digest_template.html", build_digest_context(digest, -1, "c")
        )

        assert "editor-choice" not in html

    def test_cards_page(self, renderer: HtmlRenderer, digest: RankedDigest) -> None:
        """Cards show their header and formatted count."""
        context = build_cards_context(digest, CardIndices(views=2), -1, "ithueti")

        html = renderer.render("default/render_template.html", context)

        assert "Лучший по просмотрам" in html
        assert f"1{THIN_SPACE}200" in html
        assert 'id="card-11"' in html

    def test_post_page_escapes_text(self, renderer: HtmlRenderer) -> None:
        """Post text is HTML-escaped."""
        post = PostRecord(timestamp=1, id=5, text="<script>alert(1)</script>")

        html = renderer.render(
            "default/post_template.html", build_post_context(post, "ithueti")
        )

        assert "<script>" not in html
        assert "&lt;script&gt;" in html


class TestRenderToFile:
    """Tests for render_to_file."""

    def test_writes_flattened_name(
        self, tmp_path: Path, renderer: HtmlRenderer, digest: RankedDigest
    ) -> None:
        """The page is written under the flattened template name."""
        info = renderer.render_to_file(
            "default/digest_template.html", build_digest_context(digest, -1, "c")
        )

        target = tmp_path / "out" / "default_digest.html"
        assert target.exists()
        assert info.path == "default_digest.html"
        assert info.bytes_written == len(target.read_bytes())

    def test_records_metrics(self, tmp_path: Path, digest: RankedDigest) -> None:
        """Bytes, files and durations are recorded."""
        metrics = RendererMetrics()
        renderer = HtmlRenderer(output_dir=tmp_path, metrics=metrics)

        info = renderer.render_to_file(
            "default/digest_template.html", build_digest_context(digest, -1, "c")
        )

        assert metrics.files_generated == 1
        assert metrics.render_bytes_total == info.bytes_written
        assert "default/digest_template.html" in metrics.template_durations


class TestCustomTemplates:
    """Tests with a user templates directory."""

    def test_mode_folder(self, tmp_path: Path, digest: RankedDigest) -> None:
        """Templates are looked up as <mode>/<page>_template.html."""
        mode_dir = tmp_path / "templates" / "watermark"
        mode_dir.mkdir(parents=True)
        (mode_dir / "digest_template.html").write_text(
            "{{ channel_name }}:{% for b in blocks %}{{ b.header }};{% endfor %}",
            encoding="utf-8",
        )
        renderer = HtmlRenderer(
            output_dir=tmp_path / "out",
            templates_dir=tmp_path / "templates",
            metrics=RendererMetrics(),
        )

        info = renderer.render_to_file(
            "watermark/digest_template.html", build_digest_context(digest, -1, "c")
        )

        assert info.path == "watermark_digest.html"
        content = (tmp_path / "out" / "watermark_digest.html").read_text("utf-8")
        assert content == "c:По комментариям;По репостам;По просмотрам;"


class TestRenderErrors:
    """Tests for render failures."""

    def test_missing_template(self, renderer: HtmlRenderer) -> None:
        """An unknown mode raises RenderError."""
        metrics = RendererMetrics()
        renderer = HtmlRenderer(output_dir=renderer.output_dir, metrics=metrics)

        with pytest.raises(RenderError, match="Template not found") as exc_info:
            renderer.render("nope/digest_template.html", {})

        assert exc_info.value.error_class == DigestErrorClass.RENDER
        assert exc_info.value.template == "nope/digest_template.html"
        assert metrics.render_failures_total == 1

    def test_filter_failure(self, tmp_path: Path) -> None:
        """A filter rejecting its input surfaces as RenderError."""
        (tmp_path / "bad").mkdir()
        (tmp_path / "bad" / "digest_template.html").write_text(
            "{{ value | format_number }}", encoding="utf-8"
        )
        renderer = HtmlRenderer(
            output_dir=tmp_path / "out",
            templates_dir=tmp_path,
            metrics=RendererMetrics(),
        )

        with pytest.raises(RenderError, match="Failed to render"):
            renderer.render("bad/digest_template.html", {"value": "many"})

    def test_nothing_written_on_failure(self, tmp_path: Path) -> None:
        """A failed render leaves the output directory untouched."""
        renderer = HtmlRenderer(output_dir=tmp_path / "out", metrics=RendererMetrics())

        with pytest.raises(RenderError):
            renderer.render_to_file("missing/digest_template.html", {})

        assert not (tmp_path / "out").exists()

    def test_write_failure(self, tmp_path: Path, digest: RankedDigest) -> None:
        """An unwritable destination surfaces as RenderError."""
        metrics = RendererMetrics()
        renderer = HtmlRenderer(output_dir=tmp_path, metrics=metrics)
        (tmp_path / "default_digest.html").mkdir()

        with pytest.raises(RenderError, match="Failed to write") as exc_info:
            renderer.render_to_file(
                "default/digest_template.html", build_digest_context(digest, -1, "c")
            )

        assert exc_info.value.template == "default/digest_template.html"
        assert metrics.render_failures_total == 1
        assert metrics.files_generated == 0
        assert not (tmp_path / "default_digest.html.tmp").exists()
