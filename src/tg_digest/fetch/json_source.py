"""Post source backed by exported channel JSON files."""

import re
from pathlib import Path
from typing import Final

import structlog
from pydantic import TypeAdapter, ValidationError

from tg_digest.errors import (
    ChannelNotFoundError,
    PostNotFoundError,
    SourceFormatError,
)
from tg_digest.ranker.models import PostRecord


logger = structlog.get_logger()

# Newest-first scan limit per fetch, matching the message history cap.
MAX_POSTS_SCANNED: Final[int] = 30000

CHANNEL_NAME_PATTERN: Final[re.Pattern[str]] = re.compile(r"^[A-Za-z0-9_]+$")

_posts_adapter: TypeAdapter[list[PostRecord]] = TypeAdapter(list[PostRecord])


class JsonPostSource:
    """Reads posts from ``<posts_dir>/<channel_name>.json``.

    Each file holds a JSON array of post objects with the ``PostRecord``
    fields. Parsed files are cached per instance.
    """

    def __init__(self, posts_dir: Path, max_scanned: int = MAX_POSTS_SCANNED) -> None:
        """Initialize the source.

        Args:
            posts_dir: Directory with exported channel files.
            max_scanned: Maximum number of posts scanned per fetch.
        """
        self._posts_dir = posts_dir
        self._max_scanned = max_scanned
        self._cache: dict[str, list[PostRecord]] = {}
        self._log = logger.bind(component="fetch", posts_dir=str(posts_dir))

    def _channel_path(self, channel_name: str) -> Path:
        if not CHANNEL_NAME_PATTERN.match(channel_name):
            raise ChannelNotFoundError(channel_name)
        return self._posts_dir / f"{channel_name}.json"

    def _load(self, channel_name: str) -> list[PostRecord]:
        """Load and validate a channel's export.

        Args:
            channel_name: Channel to load.

        Returns:
            All exported posts.

        Raises:
            ChannelNotFoundError: If there is no export for the channel.
            SourceFormatError: If the export cannot be read or is not a valid
                post list.
        """
        if channel_name in self._cache:
            return self._cache[channel_name]

        path = self._channel_path(channel_name)
        try:
            content = path.read_bytes()
        except FileNotFoundError as e:
            raise ChannelNotFoundError(channel_name) from e
        except OSError as e:
            raise SourceFormatError(
                f"Can't read post export for t.me/{channel_name}: {e}",
                {"channel_name": channel_name, "path": str(path)},
            ) from e

        try:
            posts = _posts_adapter.validate_json(content)
        except ValidationError as e:
            self._log.warning(
                "export_invalid",
                channel_name=channel_name,
                error_count=e.error_count(),
            )
            raise SourceFormatError(
                f"Invalid post export for t.me/{channel_name}: "
                f"{e.error_count()} errors",
                {"channel_name": channel_name, "path": str(path)},
            ) from e

        self._log.debug("export_loaded", channel_name=channel_name, posts=len(posts))
        self._cache[channel_name] = posts
        return posts

    def fetch_posts(
        self, channel_name: str, from_ts: int, to_ts: int
    ) -> list[PostRecord]:
        """Return the channel's posts published in ``[from_ts, to_ts)``.

        Posts are scanned newest first from ``to_ts`` backwards, at most
        ``max_scanned`` of them.

        Args:
            channel_name: Channel name (t.me/<channel_name>).
            from_ts: Inclusive window start, UTC seconds.
            to_ts: Exclusive window end, UTC seconds.

        Returns:
            Posts inside the window, newest first.
        """
        candidates = sorted(
            (p for p in self._load(channel_name) if p.timestamp < to_ts),
            key=lambda p: (p.timestamp, p.id),
            reverse=True,
        )
        scanned = candidates[: self._max_scanned]
        posts = [p for p in scanned if p.timestamp >= from_ts]

        self._log.info(
            "posts_fetched",
            channel_name=channel_name,
            from_ts=from_ts,
            to_ts=to_ts,
            posts_count=len(posts),
            truncated=len(candidates) > self._max_scanned,
        )
        return posts

    def get_post(self, channel_name: str, post_id: int) -> PostRecord:
        """Return a single post by id.

        Args:
            channel_name: Channel name (t.me/<channel_name>).
            post_id: Post identifier.

        Returns:
            The post.

        Raises:
            PostNotFoundError: If the post is not in the export.
        """
        for post in self._load(channel_name):
            if post.id == post_id:
                return post
        raise PostNotFoundError(channel_name, post_id)
