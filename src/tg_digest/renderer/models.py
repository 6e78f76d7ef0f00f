"""Result types returned by the renderer."""

from dataclasses import dataclass


@dataclass(frozen=True)
class GeneratedFile:
    """A rendered page on disk.

    Attributes:
        path: Location relative to the output directory.
        absolute_path: Resolved location, printed by the CLI.
        bytes_written: Size of the UTF-8 markup.
        sha256: Hex digest of the markup.
    """

    path: str
    absolute_path: str
    bytes_written: int
    sha256: str
