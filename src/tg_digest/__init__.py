"""Top-K digest engine for Telegram channel posts."""

__version__ = "0.5.0"
