"""Partial top-K selection of posts by a single metric.

Only the first ``k`` positions are ordered. The remainder is partitioned
with quickselect and left unsorted, so ranking ``n`` posts costs ``O(n)``
expected plus ``O(k log k)`` for the prefix.
"""

import heapq
import math
from collections.abc import Sequence
from operator import itemgetter

from tg_digest.ranker.metric import Metric
from tg_digest.ranker.models import PostRecord


# (absent, -value, -timestamp, -id); ascending order == rank order
RankKey = tuple[int, int, int, int]
_Entry = tuple[RankKey, PostRecord]

_by_key = itemgetter(0)


def rank_key(post: PostRecord, metric: Metric) -> RankKey:
    """Build the ascending sort key that yields rank order.

    Order:
    1. Posts with a value before posts without one
    2. Value descending
    3. Timestamp descending (most recent first)
    4. Post id descending

    Args:
        post: Post to key.
        metric: Metric being ranked.

    Returns:
        Tuple key; smaller keys rank higher.
    """
    value = metric.value_of(post)
    if value is None:
        return (1, 0, -post.timestamp, -post.id)
    return (0, -value, -post.timestamp, -post.id)


def _median_of_three(entries: list[_Entry], lo: int, hi: int) -> RankKey:
    """Pick a pivot key from the first, middle and last entry of a slice."""
    a = entries[lo][0]
    b = entries[(lo + hi - 1) // 2][0]
    c = entries[hi - 1][0]
    return sorted((a, b, c))[1]


def _partition_smallest(entries: list[_Entry], k: int) -> bool:
    """Move the ``k`` smallest entries to the front of ``entries``.

    Three-way partitioning keeps runs of equal keys together. The loop
    gives up after ``2 * log2(n)`` rounds.

    Args:
        entries: Entries to partition in place.
        k: Number of entries to bring to the front.

    Returns:
        True if the partition finished, False if the depth budget ran out.
    """
    lo, hi = 0, len(entries)
    budget = 2 * max(1, math.ceil(math.log2(len(entries) + 1)))

    while hi - lo > 1:
        if budget == 0:
            return False
        budget -= 1

        pivot = _median_of_three(entries, lo, hi)
        segment = entries[lo:hi]
        less = [e for e in segment if e[0] < pivot]
        equal = [e for e in segment if e[0] == pivot]
        greater = [e for e in segment if e[0] > pivot]
        entries[lo:hi] = less + equal + greater

        less_end = lo + len(less)
        equal_end = less_end + len(equal)
        if k < less_end:
            hi = less_end
        elif k <= equal_end:
            return True
        else:
            lo = equal_end

    return True


def select_top_k(
    posts: Sequence[PostRecord], metric: Metric, k: int
) -> list[PostRecord]:
    """Select the top ``k`` posts by a metric.

    ``k`` is clamped to ``len(posts)``; an empty input yields an empty
    list. The input sequence is not modified.

    Args:
        posts: Candidate posts.
        metric: Metric to rank by.
        k: Requested number of posts.

    Returns:
        Up to ``k`` posts in rank order.

    Raises:
        ValueError: If ``k`` is negative.
    """
    if k < 0:
        raise ValueError(f"k must be non-negative, got {k}")

    effective_k = min(k, len(posts))
    if effective_k == 0:
        return []

    entries: list[_Entry] = [(rank_key(p, metric), p) for p in posts]

    if effective_k < len(entries):
        if _partition_smallest(entries, effective_k):
            prefix = entries[:effective_k]
        else:
            prefix = heapq.nsmallest(effective_k, entries, key=_by_key)
    else:
        prefix = entries

    prefix.sort(key=_by_key)
    return [post for _, post in prefix]
