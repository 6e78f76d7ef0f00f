"""HTML renderer module."""

from tg_digest.renderer.filters import format_number
from tg_digest.renderer.html_renderer import HtmlRenderer, output_name
from tg_digest.renderer.io import AtomicWriter
from tg_digest.renderer.metrics import RendererMetrics
from tg_digest.renderer.models import GeneratedFile


__all__ = [
    "AtomicWriter",
    "GeneratedFile",
    "HtmlRenderer",
    "RendererMetrics",
    "format_number",
    "output_name",
]
