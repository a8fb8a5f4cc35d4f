"""Minimal user-facing configuration.

User config is stored in .codeoutline/config.yaml and only carries the options
users reasonably want to change. Everything else uses defaults.
"""

from pathlib import Path
from typing import Literal

import yaml
from pydantic import BaseModel, Field, ValidationError

LogLevel = Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]

DEFAULT_INCLUDE_REFERENCES = False
DEFAULT_LOG_LEVEL: LogLevel = "INFO"


class UserConfig(BaseModel):
    """User-facing configuration options."""

    include_references: bool = Field(
        default=DEFAULT_INCLUDE_REFERENCES,
        description="List @reference.* captures in the outline.",
    )
    log_level: LogLevel = Field(
        default=DEFAULT_LOG_LEVEL,
        description="Log level. DEBUG is very verbose.",
    )


def load_user_config(path: Path) -> UserConfig:
    """Load user config from YAML file, falling back to defaults if unreadable."""
    if not path.exists():
        return UserConfig()
    try:
        with path.open() as f:
            data = yaml.safe_load(f) or {}
        return UserConfig(**data)
    except (OSError, yaml.YAMLError, ValidationError, TypeError):
        return UserConfig()
