"""Engagement metrics a post can be ranked by."""

from enum import Enum
from typing import TYPE_CHECKING


if TYPE_CHECKING:
    from tg_digest.ranker.models import PostRecord


class Metric(str, Enum):
    """Ranking dimension.

    Members are declared in display order. Each value is also the name of
    the matching count field on ``PostRecord``.
    """

    REPLIES = "replies"
    REACTIONS = "reactions"
    FORWARDS = "forwards"
    VIEWS = "views"

    def value_of(self, post: "PostRecord") -> int | None:
        """Return the post's count for this metric.

        ``None`` means the metric is not observable for the post, which is
        distinct from an observed zero.

        Args:
            post: Post to read.

        Returns:
            The optional count.
        """
        count: int | None = getattr(post, self.value)
        return count

    @classmethod
    def display_order(cls) -> tuple["Metric", ...]:
        """Return all metrics in fixed display order."""
        return tuple(cls)

    @classmethod
    def from_index(cls, index: int) -> "Metric":
        """Map a 0-based display position to a metric.

        Args:
            index: Position in display order (0..3).

        Returns:
            The metric at that position.

        Raises:
            ValueError: If the index does not name a metric.
        """
        members = cls.display_order()
        if not 0 <= index < len(members):
            raise ValueError(f"No metric for index {index}")
        return members[index]
