"""Ranked digest construction."""

import time
from collections.abc import Sequence

import structlog

from tg_digest.ranker.metric import Metric
from tg_digest.ranker.metrics import RankerMetrics
from tg_digest.ranker.models import PostRecord, RankedDigest
from tg_digest.ranker.selector import select_top_k


logger = structlog.get_logger()


def build_ranked_digest(
    posts: Sequence[PostRecord],
    requested_k: int,
    metrics: RankerMetrics | None = None,
) -> RankedDigest:
    """Rank the same posts independently by every metric.

    All posts take part in every metric's selection; posts lacking a
    metric sort to the bottom of that metric's ranking instead of being
    filtered out. Callers drop ``None`` counts when assembling output.

    Args:
        posts: Posts already restricted to the requested window.
        requested_k: Requested top-N size.
        metrics: Optional metrics instance.

    Returns:
        RankedDigest with ``effective_k = min(requested_k, len(posts))``.
    """
    metrics = metrics or RankerMetrics.get_instance()
    log = logger.bind(component="ranker")
    log.info("ranking_started", posts_in=len(posts), requested_k=requested_k)
    metrics.record_posts_in(len(posts))

    rankings: dict[str, tuple[PostRecord, ...]] = {}
    for metric in Metric.display_order():
        start = time.perf_counter()
        ranked = select_top_k(posts, metric, requested_k)
        duration_ms = (time.perf_counter() - start) * 1000

        without_value = sum(1 for p in posts if metric.value_of(p) is None)
        metrics.record_selection(metric.value, duration_ms, without_value)
        rankings[metric.value] = tuple(ranked)

    digest = RankedDigest(
        requested_k=requested_k,
        effective_k=min(requested_k, len(posts)),
        **rankings,
    )
    metrics.record_digest_built()

    log.info(
        "ranking_complete",
        posts_in=len(posts),
        requested_k=requested_k,
        effective_k=digest.effective_k,
    )
    return digest
