"""Post ranker module.

Ranks a channel's posts by four independent engagement metrics with
bounded partial selection, keeping absent counts distinct from zero.
"""

from tg_digest.ranker.digest import build_ranked_digest
from tg_digest.ranker.metric import Metric
from tg_digest.ranker.metrics import RankerMetrics
from tg_digest.ranker.models import PostRecord, RankedDigest
from tg_digest.ranker.selector import rank_key, select_top_k


__all__ = [
    "Metric",
    "PostRecord",
    "RankedDigest",
    "RankerMetrics",
    "build_ranked_digest",
    "rank_key",
    "select_top_k",
]
