"""Metrics collection for the ranker module."""

from dataclasses import dataclass, field
from typing import ClassVar


@dataclass
class RankerMetrics:
    """Metrics for ranker operations.

    Attributes:
        posts_in: Number of posts in the last ranked input.
        digests_built: Number of ranked digests built.
        selection_duration_ms: Last selection duration per metric.
        posts_without_value: Posts lacking each metric in the last input.
    """

    posts_in: int = 0
    digests_built: int = 0
    selection_duration_ms: dict[str, float] = field(default_factory=dict)
    posts_without_value: dict[str, int] = field(default_factory=dict)

    _instance: ClassVar["RankerMetrics | None"] = None

    @classmethod
    def get_instance(cls) -> "RankerMetrics":
        """Get singleton metrics instance."""
        if cls._instance is None:
            cls._instance = cls()
        return cls._instance

    @classmethod
    def reset(cls) -> None:
        """Reset metrics (primarily for testing)."""
        cls._instance = None

    def record_posts_in(self, count: int) -> None:
        """Record input post count.

        Args:
            count: Number of input posts.
        """
        self.posts_in = count

    def record_selection(
        self, metric: str, duration_ms: float, without_value: int
    ) -> None:
        """Record one metric's selection.

        Args:
            metric: Metric name.
            duration_ms: Selection duration in milliseconds.
            without_value: Input posts with no value for the metric.
        """
        self.selection_duration_ms[metric] = duration_ms
        self.posts_without_value[metric] = without_value

    def record_digest_built(self) -> None:
        """Record a completed digest."""
        self.digests_built += 1

    def to_dict(self) -> dict[str, object]:
        """Convert metrics to dictionary.

        Returns:
            Dictionary of metric name to value.
        """
        return {
            "posts_in": self.posts_in,
            "digests_built": self.digests_built,
            "selection_duration_ms": dict(self.selection_duration_ms),
            "posts_without_value": dict(self.posts_without_value),
        }
