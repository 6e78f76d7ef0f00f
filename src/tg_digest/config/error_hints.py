"""Remediation hints shown next to configuration errors."""

from typing import Final


GENERIC_HINT: Final[str] = "See the example cfg.yaml for the expected layout."

# Keyed by pydantic error type or by the loader's own error types
ERROR_HINTS: Final[dict[str, str]] = {
    "missing": "Add this key to the config file.",
    "extra_forbidden": "Unknown key; remove it or fix its spelling.",
    "path_type": "Expected a filesystem path.",
    "model_type": "The config file must contain a mapping of keys to paths.",
    "model_attributes_type": "The config file must contain a mapping of keys to paths.",
    "file_not_found": "Pass --config or set TGDIGEST_CONFIG to an existing file.",
    "file_unreadable": "Check that the path is a readable file, not a directory.",
    "encoding_error": "Save the config file as UTF-8.",
    "dir_not_found": "Create the directory or point the key at an existing one.",
    "yaml_parse_error": "The file is neither valid YAML nor valid JSON.",
}

FIELD_HINTS: Final[dict[str, str]] = {
    "input_dir": "Directory with one sub-folder per --mode, e.g. 'templates'.",
    "output_dir": "Where rendered pages go; created if missing.",
    "posts_dir": "Directory holding '<channel_name>.json' post exports.",
}


def get_error_hint(error_type: str, field_name: str | None = None) -> str:
    """Pick the most specific hint for an error.

    Field hints win over error-type hints. Dotted locations are matched
    by their last component.
    """
    field = field_name.rsplit(".", 1)[-1] if field_name else None
    if field is not None and field in FIELD_HINTS:
        return FIELD_HINTS[field]
    return ERROR_HINTS.get(error_type, GENERIC_HINT)


def format_validation_error(
    location: str,
    message: str,
    error_type: str,
    *,
    include_hint: bool = True,
) -> str:
    """Render one ``{loc, msg, type}`` error for the terminal.

    Args:
        location: Dotted field location, or ``file`` for file-level errors.
        message: Validation message.
        error_type: Error type used to choose the hint.
        include_hint: Append an indented ``Hint:`` line.

    Returns:
        ``"<location>: <message>"``, optionally followed by the hint.
    """
    line = f"{location}: {message}"
    if not include_hint:
        return line
    return f"{line}\n    Hint: {get_error_hint(error_type, location)}"
