"""Unit tests for the JSON export post source."""

import json
from pathlib import Path

import pytest

from tg_digest.errors import (
    ChannelNotFoundError,
    DigestErrorClass,
    PostNotFoundError,
    SourceFormatError,
)
from tg_digest.fetch.json_source import JsonPostSource
from tg_digest.fetch.protocols import PostSource


def _write_export(
    posts_dir: Path, channel: str, posts: list[dict[str, object]]
) -> None:
    """Write a channel export file."""
    (posts_dir / f"{channel}.json").write_text(json.dumps(posts), encoding="utf-8")


@pytest.fixture
def posts_dir(tmp_path: Path) -> Path:
    """Directory with a five-post export for 'ithueti'."""
    _write_export(
        tmp_path,
        "ithueti",
        [
            {"timestamp": 100, "id": 1, "views": 10},
            {"timestamp": 300, "id": 3, "views": 30, "reactions": 2},
            {"timestamp": 200, "id": 2, "views": 20, "text": "hi"},
            {"timestamp": 400, "id": 4, "views": 40},
            {"timestamp": 500, "id": 5},
        ],
    )
    return tmp_path


class TestJsonPostSource:
    """Tests for JsonPostSource."""

    def test_satisfies_protocol(self, posts_dir: Path) -> None:
        """The source implements the PostSource protocol."""
        assert isinstance(JsonPostSource(posts_dir), PostSource)

    def test_fetch_window_newest_first(self, posts_dir: Path) -> None:
        """Only posts in [from_ts, to_ts) are returned, newest first."""
        posts = JsonPostSource(posts_dir).fetch_posts("ithueti", 200, 500)

        assert [p.id for p in posts] == [4, 3, 2]

    def test_optional_counts_preserved(self, posts_dir: Path) -> None:
        """Missing counts stay None."""
        posts = JsonPostSource(posts_dir).fetch_posts("ithueti", 0, 1000)

        by_id = {p.id: p for p in posts}
        assert by_id[5].views is None
        assert by_id[3].reactions == 2
        assert by_id[1].reactions is None

    def test_scan_limit(self, posts_dir: Path) -> None:
        """At most max_scanned posts before to_ts are considered."""
        source = JsonPostSource(posts_dir, max_scanned=2)

        posts = source.fetch_posts("ithueti", 0, 450)

        assert [p.id for p in posts] == [4, 3]

    def test_empty_window(self, posts_dir: Path) -> None:
        """A window with no posts yields an empty list."""
        assert JsonPostSource(posts_dir).fetch_posts("ithueti", 600, 700) == []

    def test_get_post(self, posts_dir: Path) -> None:
        """A post is found by id."""
        post = JsonPostSource(posts_dir).get_post("ithueti", 2)

        assert post.text == "hi"

    def test_get_post_missing(self, posts_dir: Path) -> None:
        """An unknown id raises PostNotFoundError."""
        with pytest.raises(PostNotFoundError, match="t.me/ithueti/99"):
            JsonPostSource(posts_dir).get_post("ithueti", 99)

    def test_unknown_channel(self, posts_dir: Path) -> None:
        """A channel without an export is not found."""
        with pytest.raises(ChannelNotFoundError) as exc_info:
            JsonPostSource(posts_dir).fetch_posts("nochannel", 0, 1)

        assert exc_info.value.error_class == DigestErrorClass.SOURCE
        assert str(exc_info.value) == "Can't find channel t.me/nochannel"

    @pytest.mark.parametrize("channel", ["../ithueti", "a/b", ""])
    def test_invalid_channel_name(self, posts_dir: Path, channel: str) -> None:
        """Names that are not channel usernames never touch the filesystem."""
        with pytest.raises(ChannelNotFoundError):
            JsonPostSource(posts_dir).fetch_posts(channel, 0, 1)

    def test_malformed_export(self, tmp_path: Path) -> None:
        """Invalid records raise SourceFormatError."""
        _write_export(tmp_path, "broken", [{"timestamp": "soon", "id": 1}])

        with pytest.raises(SourceFormatError, match="Invalid post export"):
            JsonPostSource(tmp_path).fetch_posts("broken", 0, 1)

    def test_export_cached(self, posts_dir: Path) -> None:
        """An export is parsed once per source instance."""
        source = JsonPostSource(posts_dir)
        source.fetch_posts("ithueti", 0, 1000)
        (posts_dir / "ithueti.json").unlink()

        assert len(source.fetch_posts("ithueti", 0, 1000)) == 5

    def test_unreadable_export(self, tmp_path: Path) -> None:
        """An export that cannot be read raises SourceFormatError."""
        (tmp_path / "ithueti.json").mkdir()

        with pytest.raises(
            SourceFormatError, match="Can't read post export"
        ) as exc_info:
            JsonPostSource(tmp_path).fetch_posts("ithueti", 0, 1)

        assert exc_info.value.error_class == DigestErrorClass.SOURCE
        assert exc_info.value.details["channel_name"] == "ithueti"
