"""Context assembler for digest, cards and post pages."""

from tg_digest.assembler.constants import icon_url
from tg_digest.assembler.context import (
    RenderingContext,
    build_block,
    build_cards_context,
    build_digest_context,
    build_post_context,
    validate_card_indices,
)
from tg_digest.assembler.models import Block, Card, CardIndices


__all__ = [
    "Block",
    "Card",
    "CardIndices",
    "RenderingContext",
    "build_block",
    "build_cards_context",
    "build_digest_context",
    "build_post_context",
    "icon_url",
    "validate_card_indices",
]
