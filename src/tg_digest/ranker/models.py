"""Data models for the post ranker."""

from datetime import UTC, datetime
from typing import Annotated

from pydantic import Field

from tg_digest.data_model.base import StrictBaseModel
from tg_digest.ranker.metric import Metric


Count = Annotated[int | None, Field(ge=0)]


class PostRecord(StrictBaseModel):
    """Minimal per-post data needed for ranking and display.

    Attributes:
        timestamp: Publication time, UTC seconds.
        id: Source message id, unique within one channel fetch.
        replies: Reply count, None when not observable.
        reactions: Reaction count, None when reactions are disabled.
        forwards: Forward count, None when not observable.
        views: View count, None when not observable.
        text: Message text, display only.
        media_ref: Reference to attached media, display only.
    """

    timestamp: int
    id: int
    replies: Count = None
    reactions: Count = None
    forwards: Count = None
    views: Count = None
    text: str | None = None
    media_ref: int | None = None

    @property
    def published_at(self) -> datetime:
        """Publication time as an aware UTC datetime."""
        return datetime.fromtimestamp(self.timestamp, tz=UTC)

    def count(self, metric: Metric) -> int | None:
        """Return the count for a metric.

        Args:
            metric: Metric to read.

        Returns:
            The optional count.
        """
        return metric.value_of(self)

    def to_json_dict(self) -> dict[str, object]:
        """Convert to a JSON-serialisable dictionary."""
        return self.model_dump(mode="json")


class RankedDigest(StrictBaseModel):
    """Top-K posts for each metric.

    Every ranking holds ``effective_k`` posts sorted by descending metric
    value, absent values last, ties broken by the most recent timestamp.

    Attributes:
        requested_k: The caller's requested top-N size.
        effective_k: ``min(requested_k, number of input posts)``.
        replies: Ranking by replies.
        reactions: Ranking by reactions.
        forwards: Ranking by forwards.
        views: Ranking by views.
    """

    requested_k: Annotated[int, Field(ge=0)]
    effective_k: Annotated[int, Field(ge=0)]
    replies: tuple[PostRecord, ...] = ()
    reactions: tuple[PostRecord, ...] = ()
    forwards: tuple[PostRecord, ...] = ()
    views: tuple[PostRecord, ...] = ()

    def ranking(self, metric: Metric) -> tuple[PostRecord, ...]:
        """Return the ranked posts for a metric.

        Args:
            metric: Metric to look up.

        Returns:
            Posts in rank order.
        """
        posts: tuple[PostRecord, ...] = getattr(self, metric.value)
        return posts
