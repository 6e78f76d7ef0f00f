"""Constants for the configuration module."""

# Log component names
COMPONENT_CONFIG = "config"
COMPONENT_CLI = "cli"

DEFAULT_CONFIG_PATH = "cfg.yaml"
DEFAULT_TOP_COUNT = 3
DEFAULT_EDITOR_CHOICE_POST_ID = -1
DEFAULT_LOOKBACK_DAYS = 7
