"""Assemble ranked posts into template rendering contexts.

The same omit-if-absent rule applies at every level: a card whose post
lacks the metric is dropped, and a digest block left without cards is
dropped. Context keys (``blocks``, ``cards``, ``editor_choice_id``,
``channel_name``) and the nested field names are bound to the templates.
"""

import structlog

from tg_digest.assembler.constants import (
    BLOCK_HEADERS,
    CARD_HEADERS,
    METRIC_FILTERS,
    METRIC_ICONS,
    icon_url,
)
from tg_digest.assembler.models import Block, Card, CardIndices
from tg_digest.errors import CardIndexError, NothingSelectedError
from tg_digest.ranker.metric import Metric
from tg_digest.ranker.models import PostRecord, RankedDigest


logger = structlog.get_logger()

RenderingContext = dict[str, object]


def build_block(digest: RankedDigest, metric: Metric) -> Block:
    """Build a metric's digest block from its ranking.

    Args:
        digest: Ranked posts.
        metric: Metric of the block.

    Returns:
        Block whose cards may be empty.
    """
    return Block(
        header=BLOCK_HEADERS[metric],
        icon=icon_url(METRIC_ICONS[metric]),
        filter=METRIC_FILTERS[metric],
        cards=Card.create_many(digest.ranking(metric), metric),
    )


def build_digest_context(
    digest: RankedDigest, editor_choice_id: int, channel_name: str
) -> RenderingContext:
    """Build the digest page context.

    Blocks follow the fixed metric display order; blocks without any
    card are omitted.

    Args:
        digest: Ranked posts.
        editor_choice_id: Post id shown in the editor choice block.
        channel_name: Channel name (t.me/<channel_name>).

    Returns:
        Context with ``blocks``, ``editor_choice_id`` and ``channel_name``.
    """
    blocks = [build_block(digest, metric) for metric in Metric.display_order()]
    blocks = [block for block in blocks if block.cards]

    logger.debug(
        "digest_context_built",
        component="assembler",
        channel_name=channel_name,
        blocks_count=len(blocks),
        cards_count=sum(len(b.cards) for b in blocks),
    )

    return {
        "blocks": [block.model_dump() for block in blocks],
        "editor_choice_id": editor_choice_id,
        "channel_name": channel_name,
    }


def validate_card_indices(indices: CardIndices, upper: int) -> None:
    """Check that every requested rank lies in ``[1, upper]``.

    Args:
        indices: Requested ranks.
        upper: Largest valid rank.

    Raises:
        CardIndexError: For the first metric whose rank is out of range.
    """
    for metric, index in indices.by_metric():
        if index is not None and not 1 <= index <= upper:
            raise CardIndexError(metric, index, upper)


def build_cards_context(
    digest: RankedDigest,
    indices: CardIndices,
    editor_choice_id: int,
    channel_name: str,
) -> RenderingContext:
    """Build the "best of" cards context.

    Every index is validated before any card is built. A card is emitted
    only for metrics with an index whose selected post has that metric.

    Args:
        digest: Ranked posts.
        indices: 1-based ranks chosen per metric.
        editor_choice_id: Post id shown in the editor choice card.
        channel_name: Channel name (t.me/<channel_name>).

    Returns:
        Context with ``cards``, ``editor_choice_id`` and ``channel_name``.

    Raises:
        CardIndexError: If an index is outside ``[1, effective_k]``.
        NothingSelectedError: If no card survives.
    """
    validate_card_indices(indices, digest.effective_k)

    cards: list[Card] = []
    for metric, index in indices.by_metric():
        if index is None:
            continue
        card = Card.create(
            digest.ranking(metric)[index - 1],
            metric,
            header=CARD_HEADERS[metric],
            icon=icon_url(METRIC_ICONS[metric]),
            filter=METRIC_FILTERS[metric],
        )
        if card.count is not None:
            cards.append(card)

    if not cards:
        raise NothingSelectedError()

    logger.debug(
        "cards_context_built",
        component="assembler",
        channel_name=channel_name,
        cards_count=len(cards),
    )

    return {
        "cards": [card.model_dump() for card in cards],
        "editor_choice_id": editor_choice_id,
        "channel_name": channel_name,
    }


def build_post_context(post: PostRecord, channel_name: str) -> RenderingContext:
    """Build the single-post context used for the editor choice page.

    Args:
        post: The post to show.
        channel_name: Channel name (t.me/<channel_name>).

    Returns:
        Context with the post's fields and ``channel_name``.
    """
    return {
        "id": post.id,
        "date": post.timestamp,
        "message": post.text,
        "image": post.media_ref,
        "replies": post.replies,
        "reactions": post.reactions,
        "forwards": post.forwards,
        "views": post.views,
        "channel_name": channel_name,
    }
