"""Data models for rendering contexts."""

from collections.abc import Iterable, Iterator, Sequence

from pydantic import Field

from tg_digest.assembler.constants import (
    UNDEFINED_CARD_ID,
    UNDEFINED_HEADER,
    WARNING_ICON,
    icon_url,
)
from tg_digest.data_model.base import StrictBaseModel
from tg_digest.ranker.metric import Metric
from tg_digest.ranker.models import PostRecord


class Card(StrictBaseModel):
    """A single post's entry on a digest or cards page.

    Attributes:
        id: Post id, or -1 for the undefined card.
        count: The metric's count, None if the post lacks it.
        header: Header text.
        icon: Icon URL.
        filter: CSS filter class, empty for none.
    """

    id: int = UNDEFINED_CARD_ID
    count: int | None = None
    header: str = UNDEFINED_HEADER
    icon: str = Field(default_factory=lambda: icon_url(WARNING_ICON))
    filter: str = ""

    @classmethod
    def undefined(cls) -> "Card":
        """Sentinel card used when no post is selected."""
        return cls()

    @classmethod
    def create(
        cls, post: PostRecord | None, metric: Metric, **presentation: str
    ) -> "Card":
        """Build a card for a post.

        Args:
            post: Selected post, or None for the undefined card.
            metric: Metric whose count the card shows.
            **presentation: Optional header, icon and filter overrides.

        Returns:
            The card. Its count is None when the post lacks the metric.
        """
        if post is None:
            return cls(**presentation)
        return cls(id=post.id, count=metric.value_of(post), **presentation)

    @classmethod
    def create_many(cls, posts: Iterable[PostRecord], metric: Metric) -> list["Card"]:
        """Build cards for ranked posts, dropping posts that lack the metric.

        Args:
            posts: Posts in rank order.
            metric: Metric whose counts the cards show.

        Returns:
            Cards with a count, possibly empty.
        """
        cards = (cls.create(post, metric) for post in posts)
        return [card for card in cards if card.count is not None]


class Block(StrictBaseModel):
    """A metric's group of cards on the digest page.

    Attributes:
        header: Block header text.
        icon: Icon URL.
        filter: CSS filter class, empty for none.
        cards: Cards in rank order; never empty in an assembled context.
    """

    header: str = UNDEFINED_HEADER
    icon: str = Field(default_factory=lambda: icon_url(WARNING_ICON))
    filter: str = ""
    cards: list[Card] = Field(default_factory=list)


class CardIndices(StrictBaseModel):
    """User-chosen 1-based ranks, one per metric.

    None means no card is requested for that metric.
    """

    replies: int | None = None
    reactions: int | None = None
    forwards: int | None = None
    views: int | None = None

    @classmethod
    def from_sequence(cls, indices: Sequence[int | None]) -> "CardIndices":
        """Build from four indices in display order.

        Args:
            indices: Indices for replies, reactions, forwards and views.

        Returns:
            CardIndices instance.

        Raises:
            ValueError: If the sequence does not hold exactly four items.
        """
        metrics = Metric.display_order()
        if len(indices) != len(metrics):
            raise ValueError(f"Expected {len(metrics)} indices, got {len(indices)}")
        return cls(**{m.value: i for m, i in zip(metrics, indices, strict=True)})

    def for_metric(self, metric: Metric) -> int | None:
        """Return the requested rank for a metric."""
        index: int | None = getattr(self, metric.value)
        return index

    def by_metric(self) -> Iterator[tuple[Metric, int | None]]:
        """Iterate ``(metric, index)`` pairs in display order."""
        for metric in Metric.display_order():
            yield metric, self.for_metric(metric)
