"""Configuration file manager for loading, saving, and merging editor settings."""

import json
import os
from pathlib import Path
from typing import Any

from dotenv import load_dotenv
from pydantic import ValidationError

from text_editor.exceptions import EditorError, RootValidationError

from .constants import (
    DEFAULT_CONFIG_PATH,
    ENV_ALLOWED_DIRS,
    ENV_DATA_DIR,
    ENV_HISTORY_LIMIT,
    ENV_LOG_LEVEL,
    ENV_SERIALIZE_EDITS,
)
from .schema import EditorSettings


class ConfigurationError(EditorError):
    """Raised when configuration operations fail."""

    pass


def get_config_path() -> Path:
    """Get the path to the configuration file.

    Returns:
        Path to ~/.text-editor/settings.json
    """
    return DEFAULT_CONFIG_PATH


def load_config(config_path: Path | None = None) -> EditorSettings:
    """Load configuration from JSON file.

    Args:
        config_path: Optional path to config file. Defaults to ~/.text-editor/settings.json

    Returns:
        EditorSettings instance loaded from file, or default settings if file doesn't exist

    Raises:
        ConfigurationError: If file exists but is invalid JSON or fails validation

    Example:
        >>> settings = load_config()
        >>> settings.history_limit
        10
    """
    if config_path is None:
        config_path = get_config_path()

    # Return defaults if file doesn't exist
    if not config_path.exists():
        return EditorSettings()

    try:
        with open(config_path) as f:
            data = json.load(f)

        return EditorSettings(**data)

    except json.JSONDecodeError as e:
        raise ConfigurationError(f"Invalid JSON in configuration file {config_path}: {e}") from e
    except ValidationError as e:
        raise ConfigurationError(f"Configuration validation failed for {config_path}:\n{e}") from e
    except Exception as e:
        raise ConfigurationError(f"Failed to load configuration from {config_path}: {e}") from e


def save_config(settings: EditorSettings, config_path: Path | None = None) -> None:
    """Save configuration to JSON file with minimal formatting.

    Sets restrictive permissions (0o600) on POSIX systems.

    Args:
        settings: EditorSettings instance to save
        config_path: Optional path to config file. Defaults to ~/.text-editor/settings.json

    Raises:
        ConfigurationError: If save operation fails
    """
    if config_path is None:
        config_path = get_config_path()

    config_path.parent.mkdir(parents=True, exist_ok=True)

    try:
        old_umask = os.umask(0o077) if os.name != "nt" else None
        try:
            with open(config_path, "w") as f:
                f.write(settings.model_dump_json_minimal())

            if os.name != "nt":
                os.chmod(config_path, 0o600)
        finally:
            if old_umask is not None:
                os.umask(old_umask)

    except Exception as e:
        raise ConfigurationError(f"Failed to save configuration to {config_path}: {e}") from e


def merge_with_env(settings: EditorSettings) -> dict[str, Any]:
    """Collect environment variable overrides for the settings file.

    Environment variables take precedence over file settings. A ``.env``
    file in the working directory is loaded first.

    Args:
        settings: EditorSettings instance from file

    Returns:
        Dictionary of overrides, suitable for ``deep_merge``

    Example:
        >>> settings = load_config()
        >>> overrides = merge_with_env(settings)
        >>> merged = EditorSettings(**deep_merge(settings.model_dump(), overrides))
    """
    load_dotenv()

    env_overrides: dict[str, Any] = {}

    if allowed := os.getenv(ENV_ALLOWED_DIRS):
        dirs = [d for d in allowed.split(os.pathsep) if d]
        env_overrides["allowed_directories"] = settings.allowed_directories + [
            d for d in dirs if d not in settings.allowed_directories
        ]

    if history_limit := os.getenv(ENV_HISTORY_LIMIT):
        try:
            env_overrides["history_limit"] = int(history_limit)
        except ValueError as e:
            raise ConfigurationError(
                f"{ENV_HISTORY_LIMIT} must be an integer, got {history_limit!r}"
            ) from e

    if serialize := os.getenv(ENV_SERIALIZE_EDITS):
        env_overrides["serialize_edits"] = serialize.lower() in ("1", "true", "yes")

    log_level = os.getenv(ENV_LOG_LEVEL) or os.getenv("LOG_LEVEL")
    if log_level:
        env_overrides["log_level"] = log_level

    if data_dir := os.getenv(ENV_DATA_DIR):
        env_overrides["data_dir"] = data_dir

    return env_overrides


def deep_merge(base: dict[str, Any], override: dict[str, Any]) -> dict[str, Any]:
    """Deep merge two dictionaries, with override taking precedence.

    Args:
        base: Base dictionary
        override: Override dictionary (takes precedence)

    Returns:
        Merged dictionary
    """
    result = base.copy()
    for key, value in override.items():
        if key in result and isinstance(result[key], dict) and isinstance(value, dict):
            result[key] = deep_merge(result[key], value)
        else:
            result[key] = value
    return result


def load_settings(
    config_path: Path | None = None, extra_directories: list[str] | None = None
) -> EditorSettings:
    """Load settings from file, environment and command-line roots.

    Precedence: settings file < environment < ``extra_directories`` (which are
    appended to the allowed directories).

    Args:
        config_path: Optional path to config file
        extra_directories: Allowed directories given on the command line

    Returns:
        Merged EditorSettings

    Raises:
        ConfigurationError: If the file, environment or merge result is invalid
    """
    settings = load_config(config_path)
    merged = deep_merge(settings.model_dump(), merge_with_env(settings))

    if extra_directories:
        merged["allowed_directories"] = list(merged.get("allowed_directories", [])) + [
            str(d) for d in extra_directories
        ]

    try:
        return EditorSettings(**merged)
    except ValidationError as e:
        raise ConfigurationError(f"Configuration validation failed:\n{e}") from e


def validate_config(settings: EditorSettings) -> list[str]:
    """Validate configuration for startup.

    Args:
        settings: EditorSettings to validate

    Returns:
        List of validation errors (empty if valid)
    """
    return settings.validate_allowed_directories()


def ensure_valid_roots(settings: EditorSettings) -> None:
    """Fail startup unless every allowed directory exists and is a directory.

    Args:
        settings: EditorSettings to validate

    Raises:
        RootValidationError: With every problem found
    """
    problems = validate_config(settings)
    if problems:
        raise RootValidationError(problems)
