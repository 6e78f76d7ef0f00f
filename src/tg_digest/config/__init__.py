"""Configuration loading and task models."""

from tg_digest.config.error_hints import format_validation_error, get_error_hint
from tg_digest.config.loader import ConfigLoader, ConfigValidationError
from tg_digest.config.schemas import AppConfig
from tg_digest.config.task import (
    CardsCommand,
    Command,
    DigestCommand,
    PostCommand,
    Task,
)


__all__ = [
    "AppConfig",
    "CardsCommand",
    "Command",
    "ConfigLoader",
    "ConfigValidationError",
    "DigestCommand",
    "PostCommand",
    "Task",
    "format_validation_error",
    "get_error_hint",
]
