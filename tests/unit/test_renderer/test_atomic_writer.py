"""Unit tests for atomic file writing."""

import hashlib
from pathlib import Path

import pytest

from tg_digest.renderer.io import AtomicWriter


class TestAtomicWriter:
    """Tests for AtomicWriter."""

    def test_write_creates_file(self, tmp_path: Path) -> None:
        """Content lands at the target path with no temp file left."""
        writer = AtomicWriter(tmp_path)
        target = tmp_path / "out" / "page.html"

        info = writer.write(target, "<p>привет</p>")

        assert target.read_text(encoding="utf-8") == "<p>привет</p>"
        assert not target.with_suffix(".html.tmp").exists()
        assert info.path == str(Path("out") / "page.html")
        assert info.absolute_path == str(target.resolve())

    def test_checksum_and_size(self, tmp_path: Path) -> None:
        """The result reports UTF-8 size and SHA-256."""
        content = "счётчик"
        encoded = content.encode("utf-8")

        info = AtomicWriter(tmp_path).write(tmp_path / "a.html", content)

        assert info.bytes_written == len(encoded)
        assert info.sha256 == hashlib.sha256(encoded).hexdigest()

    def test_overwrite(self, tmp_path: Path) -> None:
        """Writing again replaces the previous content."""
        writer = AtomicWriter(tmp_path)
        target = tmp_path / "a.html"

        writer.write(target, "old")
        writer.write(target, "new")

        assert target.read_text(encoding="utf-8") == "new"

    def test_path_outside_base_dir(self, tmp_path: Path) -> None:
        """Paths outside the base directory are reported as given."""
        writer = AtomicWriter(tmp_path / "base")
        target = tmp_path / "elsewhere.html"

        info = writer.write(target, "x")

        assert info.path == str(target)

    def test_failed_write_leaves_no_staging_file(self, tmp_path: Path) -> None:
        """A failed replace removes the .tmp file and re-raises."""
        target = tmp_path / "page.html"
        target.mkdir()

        with pytest.raises(OSError):
            AtomicWriter(tmp_path).write(target, "<p>x</p>")

        assert target.is_dir()
        assert sorted(p.name for p in tmp_path.iterdir()) == ["page.html"]
