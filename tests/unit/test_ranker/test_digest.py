"""Unit tests for ranked digest construction."""

import pytest
from pydantic import ValidationError

from tg_digest.ranker.digest import build_ranked_digest
from tg_digest.ranker.metric import Metric
from tg_digest.ranker.metrics import RankerMetrics
from tg_digest.ranker.models import PostRecord, RankedDigest


def _make_post(
    post_id: int,
    timestamp: int,
    replies: int | None = None,
    reactions: int | None = None,
    forwards: int | None = None,
    views: int | None = None,
) -> PostRecord:
    """Create a test PostRecord."""
    return PostRecord(
        timestamp=timestamp,
        id=post_id,
        replies=replies,
        reactions=reactions,
        forwards=forwards,
        views=views,
    )


@pytest.fixture
def posts() -> list[PostRecord]:
    """Four posts where reactions are disabled on two of them."""
    return [
        _make_post(1, 1000, replies=4, reactions=None, forwards=1, views=100),
        _make_post(2, 2000, replies=0, reactions=7, forwards=0, views=300),
        _make_post(3, 3000, replies=9, reactions=None, forwards=5, views=200),
        _make_post(4, 4000, replies=4, reactions=2, forwards=5, views=50),
    ]


class TestBuildRankedDigest:
    """Tests for build_ranked_digest."""

    def test_each_metric_ranked_independently(self, posts: list[PostRecord]) -> None:
        """Each metric orders the same posts by its own count."""
        digest = build_ranked_digest(posts, 3, metrics=RankerMetrics())

        assert [p.id for p in digest.replies] == [3, 4, 1]
        assert [p.id for p in digest.reactions] == [2, 4, 3]
        assert [p.id for p in digest.forwards] == [4, 3, 1]
        assert [p.id for p in digest.views] == [2, 3, 1]

    def test_effective_k_clamped(self, posts: list[PostRecord]) -> None:
        """effective_k is the smaller of requested_k and the post count."""
        digest = build_ranked_digest(posts, 10, metrics=RankerMetrics())

        assert digest.requested_k == 10
        assert digest.effective_k == 4
        for metric in Metric.display_order():
            assert len(digest.ranking(metric)) == 4

    def test_absent_metric_ranks_last(self, posts: list[PostRecord]) -> None:
        """Posts lacking a metric stay in the ranking, at the bottom."""
        digest = build_ranked_digest(posts, 4, metrics=RankerMetrics())

        assert [p.reactions for p in digest.reactions] == [7, 2, None, None]
        assert [p.id for p in digest.reactions[2:]] == [3, 1]

    def test_empty_input(self) -> None:
        """No posts yields empty rankings."""
        digest = build_ranked_digest([], 3, metrics=RankerMetrics())

        assert digest.effective_k == 0
        assert digest.replies == ()
        assert digest.views == ()

    def test_records_metrics(self, posts: list[PostRecord]) -> None:
        """Selection statistics are recorded per metric."""
        metrics = RankerMetrics()

        build_ranked_digest(posts, 2, metrics=metrics)

        assert metrics.posts_in == 4
        assert metrics.digests_built == 1
        assert metrics.posts_without_value["reactions"] == 2
        assert metrics.posts_without_value["views"] == 0
        assert set(metrics.selection_duration_ms) == {m.value for m in Metric}

    def test_uses_singleton_by_default(self, posts: list[PostRecord]) -> None:
        """Without an explicit instance the shared metrics are updated."""
        RankerMetrics.reset()
        try:
            build_ranked_digest(posts, 2)
            assert RankerMetrics.get_instance().digests_built == 1
        finally:
            RankerMetrics.reset()


class TestRankedDigest:
    """Tests for the RankedDigest model."""

    def test_negative_k_rejected(self) -> None:
        """Sizes cannot be negative."""
        with pytest.raises(ValidationError):
            RankedDigest(requested_k=-1, effective_k=0)

    def test_frozen(self) -> None:
        """Digests are immutable once built."""
        digest = RankedDigest(requested_k=1, effective_k=0)

        with pytest.raises(ValidationError):
            digest.effective_k = 1  # type: ignore[misc]
