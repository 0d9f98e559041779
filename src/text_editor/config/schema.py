"""Pydantic models for editor configuration schema."""

import json
import logging
from pathlib import Path
from typing import Any

from pydantic import BaseModel, Field, field_validator

from text_editor.config.constants import DEFAULT_DATA_DIR, DEFAULT_HISTORY_LIMIT, DEFAULT_LOG_LEVEL

VALID_LOG_LEVELS = {"trace", "debug", "info", "warning", "error", "critical"}


class EditorSettings(BaseModel):
    """Root configuration model for editor settings."""

    version: str = "1.0"
    allowed_directories: list[str] = Field(
        default_factory=list,
        description="Directories outside of which no operation may read or write.",
    )
    history_limit: int = Field(
        default=DEFAULT_HISTORY_LIMIT,
        ge=1,
        description="Maximum undo snapshots kept per file.",
    )
    serialize_edits: bool = Field(
        default=False,
        description="Serialize read-modify-write operations per file with a lock.",
    )
    strict_root_boundaries: bool = Field(
        default=True,
        description="Match allowed directories at path-segment boundaries only.",
    )
    log_level: str = DEFAULT_LOG_LEVEL
    data_dir: str = str(DEFAULT_DATA_DIR)

    @field_validator("allowed_directories")
    @classmethod
    def expand_allowed_directories(cls, v: list[str]) -> list[str]:
        """Expand ``~`` and make every allowed directory absolute."""
        return [str(Path(d).expanduser().absolute()) for d in v]

    @field_validator("data_dir")
    @classmethod
    def expand_data_dir(cls, v: str) -> str:
        """Expand user home directory in data_dir."""
        return str(Path(v).expanduser())

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        """Validate log level name."""
        if v.lower() not in VALID_LOG_LEVELS:
            raise ValueError(f"Invalid log level: {v}. Valid levels: {sorted(VALID_LOG_LEVELS)}")
        return v.lower()

    @property
    def numeric_log_level(self) -> int:
        """Log level as a ``logging`` constant (``trace`` maps to DEBUG)."""
        if self.log_level == "trace":
            return logging.DEBUG
        return getattr(logging, self.log_level.upper(), logging.INFO)

    @property
    def log_dir(self) -> Path:
        """Directory holding session log files."""
        return Path(self.data_dir) / "logs"

    def model_dump_json_pretty(self, **kwargs: Any) -> str:
        """Dump model to pretty-printed JSON string."""
        return self.model_dump_json(indent=2, exclude_none=False, **kwargs)

    def model_dump_json_minimal(self) -> str:
        """Dump model to JSON, omitting values left at their defaults.

        Returns:
            JSON string with minimal configuration
        """
        data = self.model_dump(exclude_defaults=True)
        data["version"] = self.version
        return json.dumps(data, indent=2)

    def validate_allowed_directories(self) -> list[str]:
        """Check every allowed directory exists and is a directory.

        Returns:
            List of validation errors (empty if all valid)
        """
        errors = []

        if not self.allowed_directories:
            errors.append(
                "No allowed directories configured. "
                "Pass --root DIR or set TEXT_EDITOR_ALLOWED_DIRS."
            )

        for directory in self.allowed_directories:
            path = Path(directory)
            if not path.exists():
                errors.append(f"Error accessing directory {directory}: does not exist")
            elif not path.is_dir():
                errors.append(f"Error: {directory} is not a directory")

        return errors
