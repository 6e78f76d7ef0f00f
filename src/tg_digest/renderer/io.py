"""Atomic page writes for the renderer."""

import hashlib
from pathlib import Path

import structlog

from tg_digest.renderer.models import GeneratedFile


logger = structlog.get_logger()


class AtomicWriter:
    """Writes pages via a sibling ``.tmp`` file and an atomic replace.

    A page picked up by the screenshot step is either the previous
    version or the new one in full.
    """

    def __init__(self, base_dir: Path, task_id: str | None = None) -> None:
        """Initialize the writer.

        Args:
            base_dir: Directory reported paths are made relative to.
            task_id: Optional task identifier for logging.
        """
        self._base_dir = base_dir
        self._log = logger.bind(component="atomic_writer")
        if task_id:
            self._log = self._log.bind(task_id=task_id)

    def write(self, path: Path, content: str) -> GeneratedFile:
        """Write a page, creating parent directories as needed.

        Args:
            path: Destination file.
            content: Page markup, stored as UTF-8.

        Returns:
            Size, checksum and location of the written page.

        Raises:
            OSError: If the page cannot be written; no staging file is left.
        """
        payload = content.encode("utf-8")
        digest = hashlib.sha256(payload).hexdigest()

        path.parent.mkdir(parents=True, exist_ok=True)
        staging = path.with_name(path.name + ".tmp")
        try:
            staging.write_bytes(payload)
            staging.replace(path)
        except OSError:
            staging.unlink(missing_ok=True)
            raise

        try:
            reported = str(path.relative_to(self._base_dir))
        except ValueError:
            reported = str(path)

        self._log.debug(
            "file_written", path=reported, bytes=len(payload), sha256=digest[:12]
        )
        return GeneratedFile(
            path=reported,
            absolute_path=str(path.resolve()),
            bytes_written=len(payload),
            sha256=digest,
        )
