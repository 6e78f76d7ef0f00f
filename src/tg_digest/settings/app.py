"""Application settings powered by Pydantic BaseSettings."""

import logging
from pathlib import Path

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from tg_digest.config.constants import DEFAULT_CONFIG_PATH


class AppSettings(BaseSettings):
    """Centralized environment configuration."""

    model_config = SettingsConfigDict(
        env_prefix="", case_sensitive=False, env_file=".env", env_file_encoding="utf-8"
    )

    config_path: Path = Field(
        default=Path(DEFAULT_CONFIG_PATH), validation_alias="TGDIGEST_CONFIG"
    )
    json_logs: bool = Field(default=False, validation_alias="TGDIGEST_JSON_LOGS")
    log_level: str = Field(default="INFO", validation_alias="TGDIGEST_LOG_LEVEL")

    def logging_level(self) -> int:
        """Return the numeric logging level, INFO for unknown names."""
        level = logging.getLevelName(self.log_level.upper())
        return level if isinstance(level, int) else logging.INFO


def get_settings() -> AppSettings:
    """Get a settings instance."""
    return AppSettings()
