"""Post sources feeding the digest engine."""

from tg_digest.fetch.json_source import MAX_POSTS_SCANNED, JsonPostSource
from tg_digest.fetch.protocols import PostSource


__all__ = ["MAX_POSTS_SCANNED", "JsonPostSource", "PostSource"]
