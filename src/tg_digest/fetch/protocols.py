"""Protocol interface for post sources."""

from typing import Protocol, runtime_checkable

from tg_digest.ranker.models import PostRecord


@runtime_checkable
class PostSource(Protocol):
    """Provides a channel's posts to the digest engine.

    Implementations own their client lifecycle; the engine only ever
    receives already-fetched records through this interface.
    """

    def fetch_posts(
        self, channel_name: str, from_ts: int, to_ts: int
    ) -> list[PostRecord]:
        """Return the channel's posts published in ``[from_ts, to_ts)``.

        Args:
            channel_name: Channel name (t.me/<channel_name>).
            from_ts: Inclusive window start, UTC seconds.
            to_ts: Exclusive window end, UTC seconds.

        Returns:
            Posts inside the window, in any order.

        Raises:
            ChannelNotFoundError: If the channel cannot be resolved.
        """
        ...

    def get_post(self, channel_name: str, post_id: int) -> PostRecord:
        """Return a single post by id.

        Args:
            channel_name: Channel name (t.me/<channel_name>).
            post_id: Post identifier.

        Returns:
            The post.

        Raises:
            ChannelNotFoundError: If the channel cannot be resolved.
            PostNotFoundError: If the post does not exist.
        """
        ...
