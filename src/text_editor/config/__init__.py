"""Configuration package for text-editor."""

from .constants import DEFAULT_HISTORY_LIMIT
from .manager import (
    ConfigurationError,
    deep_merge,
    ensure_valid_roots,
    get_config_path,
    load_config,
    load_settings,
    merge_with_env,
    save_config,
    validate_config,
)
from .schema import EditorSettings

__all__ = [
    # Constants
    "DEFAULT_HISTORY_LIMIT",
    # Schema
    "EditorSettings",
    # Manager
    "ConfigurationError",
    "deep_merge",
    "ensure_valid_roots",
    "get_config_path",
    "load_config",
    "load_settings",
    "merge_with_env",
    "save_config",
    "validate_config",
]
