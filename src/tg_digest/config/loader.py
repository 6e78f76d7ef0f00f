"""Configuration loader with validation."""

import hashlib
import time
from pathlib import Path

import structlog
import yaml
from pydantic import ValidationError

from tg_digest.config.constants import COMPONENT_CONFIG
from tg_digest.config.schemas import AppConfig


logger = structlog.get_logger()


class ConfigValidationError(Exception):
    """Raised when configuration validation fails."""

    def __init__(self, errors: list[dict[str, str]], file_path: str) -> None:
        """Initialize the error.

        Args:
            errors: List of validation error details.
            file_path: Path to the file that failed validation.
        """
        self.errors = errors
        self.file_path = file_path
        super().__init__(f"Validation failed for {file_path}: {len(errors)} errors")


class ConfigLoader:
    """Loads and validates the application configuration file.

    The file may be YAML or JSON (parsed by PyYAML). Relative paths are
    resolved against the directory containing the file.
    """

    def __init__(self, task_id: str | None = None) -> None:
        """Initialize the loader.

        Args:
            task_id: Optional task identifier for logging.
        """
        self._log = logger.bind(component=COMPONENT_CONFIG)
        if task_id:
            self._log = self._log.bind(task_id=task_id)
        self._checksum: str | None = None
        self._validation_errors: list[dict[str, str]] = []
        self._validation_duration_ms: float = 0

    @property
    def checksum(self) -> str | None:
        """SHA-256 of the last loaded file."""
        return self._checksum

    @property
    def validation_errors(self) -> list[dict[str, str]]:
        """Get validation errors if any."""
        return self._validation_errors.copy()

    @property
    def validation_duration_ms(self) -> float:
        """Get validation duration in milliseconds."""
        return self._validation_duration_ms

    def load(self, config_path: Path) -> AppConfig:
        """Load and validate a configuration file.

        Args:
            config_path: Path to the YAML/JSON configuration.

        Returns:
            Validated configuration with absolute paths.

        Raises:
            ConfigValidationError: If the file is missing, unparsable or
                invalid.
        """
        start_time = time.perf_counter()
        self._validation_errors = []
        log = self._log.bind(file_path=str(config_path))
        log.info("loading_config_file")

        try:
            content_bytes = config_path.read_bytes()
        except FileNotFoundError:
            self._fail("file", f"File not found: {config_path}", "file_not_found")
            raise self._error(config_path) from None
        except OSError as e:
            self._fail("file", f"Cannot read {config_path}: {e}", "file_unreadable")
            raise self._error(config_path) from e

        self._checksum = hashlib.sha256(content_bytes).hexdigest()

        try:
            text = content_bytes.decode("utf-8")
        except UnicodeDecodeError as e:
            self._fail("file", f"Not UTF-8 encoded: {e}", "encoding_error")
            raise self._error(config_path) from e

        try:
            data = yaml.safe_load(text) or {}
        except yaml.YAMLError as e:
            self._fail("file", str(e), "yaml_parse_error")
            raise self._error(config_path) from e

        try:
            config = AppConfig.model_validate(data)
        except ValidationError as e:
            for err in e.errors():
                self._fail(
                    ".".join(str(loc) for loc in err["loc"]) or "config",
                    err["msg"],
                    err["type"],
                )
            raise self._error(config_path) from e

        config = config.resolved(config_path.resolve().parent)
        self._check_directories(config)
        if self._validation_errors:
            raise self._error(config_path)

        config.output_dir.mkdir(parents=True, exist_ok=True)
        self._validation_duration_ms = (time.perf_counter() - start_time) * 1000

        log.info(
            "config_loaded",
            file_sha256=self._checksum,
            input_dir=str(config.input_dir) if config.input_dir else None,
            output_dir=str(config.output_dir),
            posts_dir=str(config.posts_dir),
            config_validation_duration_ms=self._validation_duration_ms,
        )
        return config

    def _check_directories(self, config: AppConfig) -> None:
        """Record errors for input directories that do not exist."""
        required = {"input_dir": config.input_dir, "posts_dir": config.posts_dir}
        for field_name, path in required.items():
            if path is not None and not path.is_dir():
                self._fail(
                    field_name, f"Directory does not exist: {path}", "dir_not_found"
                )

    def _fail(self, location: str, message: str, error_type: str) -> None:
        self._validation_errors.append(
            {"loc": location, "msg": message, "type": error_type}
        )

    def _error(self, config_path: Path) -> ConfigValidationError:
        self._log.error(
            "config_validation_failed",
            file_path=str(config_path),
            validation_error_count=len(self._validation_errors),
            errors=self._validation_errors,
        )
        return ConfigValidationError(self.validation_errors, str(config_path))
