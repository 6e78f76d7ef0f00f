"""Command line interface."""

from tg_digest.cli.main import cli


__all__ = ["cli"]
