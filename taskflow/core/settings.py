"""Process settings loaded from the environment.

Every field can be set through a ``TASKFLOW_*`` environment variable or a
``.env`` file in the working directory.
"""

import logging
from pathlib import Path
from typing import Optional

from pydantic import AliasChoices, Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

logger = logging.getLogger(__name__)

VALID_LOG_LEVELS = ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]


class TaskflowSettings(BaseSettings):
    """Settings for the hosting service."""

    workflow_config_path: Path = Field(
        default=Path("config.json"),
        validation_alias=AliasChoices("TASKFLOW_CONFIG", "workflow_config_path"),
        description="Path to the workflow configuration file (JSON or YAML)",
    )
    log_level: str = Field(
        default="INFO",
        validation_alias=AliasChoices("TASKFLOW_LOG_LEVEL", "log_level"),
    )
    default_provider: Optional[str] = Field(
        default=None,
        validation_alias=AliasChoices("TASKFLOW_DEFAULT_PROVIDER", "default_provider"),
        description="Overrides the default provider declared in the configuration",
    )
    todo_preview_count: int = Field(
        default=3,
        validation_alias=AliasChoices("TASKFLOW_TODO_PREVIEW", "todo_preview_count"),
        description="Number of pending todos listed in todo stats",
    )

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        """Validate log level."""
        if v.upper() not in VALID_LOG_LEVELS:
            raise ValueError(f"Log level must be one of: {VALID_LOG_LEVELS}")
        return v.upper()

    @field_validator("todo_preview_count")
    @classmethod
    def validate_preview_count(cls, v: int) -> int:
        if v <= 0:
            raise ValueError("Value must be positive")
        return v
