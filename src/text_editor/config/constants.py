"""Configuration constants for text-editor.

This module provides a single source of truth for all default configuration values.
Separated from schema.py and manager.py to avoid circular imports.
"""

from pathlib import Path

# Default paths
DEFAULT_DATA_DIR = Path.home() / ".text-editor"
DEFAULT_CONFIG_PATH = DEFAULT_DATA_DIR / "settings.json"

# Editing defaults
DEFAULT_HISTORY_LIMIT = 10
DEFAULT_LOG_LEVEL = "info"

# Environment variables
ENV_ALLOWED_DIRS = "TEXT_EDITOR_ALLOWED_DIRS"
ENV_HISTORY_LIMIT = "TEXT_EDITOR_HISTORY_LIMIT"
ENV_SERIALIZE_EDITS = "TEXT_EDITOR_SERIALIZE_EDITS"
ENV_LOG_LEVEL = "TEXT_EDITOR_LOG_LEVEL"
ENV_DATA_DIR = "TEXT_EDITOR_DATA_DIR"
