"""Counters for page rendering."""

from dataclasses import dataclass, field
from typing import ClassVar


@dataclass
class RendererMetrics:
    """Process-wide rendering counters.

    Attributes:
        render_bytes_total: Bytes of markup written.
        files_generated: Pages written.
        render_failures_total: Lookups or renders that raised.
        template_durations: Last render time per template, in ms.
    """

    render_bytes_total: int = 0
    files_generated: int = 0
    render_failures_total: int = 0
    template_durations: dict[str, float] = field(default_factory=dict)

    _instance: ClassVar["RendererMetrics | None"] = None

    @classmethod
    def get_instance(cls) -> "RendererMetrics":
        """Return the shared instance, creating it on first use."""
        if cls._instance is None:
            cls._instance = cls()
        return cls._instance

    @classmethod
    def reset(cls) -> None:
        """Forget the shared instance."""
        cls._instance = None

    def record_bytes(self, bytes_written: int) -> None:
        self.render_bytes_total += bytes_written

    def record_file_generated(self) -> None:
        self.files_generated += 1

    def record_failure(self) -> None:
        self.render_failures_total += 1

    def record_template_duration(self, template_name: str, duration_ms: float) -> None:
        self.template_durations[template_name] = duration_ms

    def to_dict(self) -> dict[str, object]:
        """Snapshot of all counters."""
        return {
            "render_bytes_total": self.render_bytes_total,
            "files_generated": self.files_generated,
            "render_failures_total": self.render_failures_total,
            "template_durations": dict(self.template_durations),
        }
