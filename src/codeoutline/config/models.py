"""Pydantic configuration models with env var support.

Configuration Hierarchy (highest to lowest precedence):
1. Direct kwargs to load_config()
2. Environment variables (CODEOUTLINE__SECTION__KEY)
3. Repo YAML (.codeoutline/config.yaml)
4. Global YAML (~/.config/codeoutline/config.yaml)
5. Built-in defaults (this file)

Environment Variable Format:
    CODEOUTLINE__<SECTION>__<KEY>=<VALUE>

Examples:
    CODEOUTLINE__LOGGING__LEVEL=DEBUG
    CODEOUTLINE__SYMBOLS__INCLUDE_REFERENCES=true
"""

from pathlib import Path
from typing import Literal

from pydantic import BaseModel, Field, field_validator

LogLevel = Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]


class LogOutputConfig(BaseModel):
    """Single logging output configuration."""

    format: Literal["json", "console"] = "console"
    destination: str = "stderr"  # stderr, stdout, or absolute file path
    level: LogLevel | None = None  # Inherits from parent if None

    @field_validator("destination")
    @classmethod
    def validate_destination(cls, v: str) -> str:
        if v in ("stderr", "stdout"):
            return v
        path = Path(v).expanduser()
        if not path.is_absolute():
            raise ValueError(f"File destination must be absolute path: {v}")
        return str(path)


class LoggingConfig(BaseModel):
    """Logging configuration.

    Env vars:
        CODEOUTLINE__LOGGING__LEVEL: Log level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
    """

    level: LogLevel = Field(
        default="INFO",
        description="Root log level. DEBUG logs every capture pass.",
    )
    outputs: list[LogOutputConfig] = Field(default_factory=lambda: [LogOutputConfig()])


class SymbolsConfig(BaseModel):
    """Symbol extraction configuration.

    Env vars:
        CODEOUTLINE__SYMBOLS__INCLUDE_REFERENCES: Emit @reference.* symbols too
    """

    include_references: bool = Field(
        default=False,
        description="Include symbols for @reference.* captures after definitions. "
        "Off by default: references are noisy in an outline.",
    )


class CodeOutlineConfig(BaseModel):
    """Root configuration for codeoutline.

    All settings can be configured via:
    1. Environment variables: CODEOUTLINE__SECTION__KEY
    2. YAML config files (repo or global)
    3. Direct kwargs to load_config()
    """

    logging: LoggingConfig = Field(default_factory=LoggingConfig)
    symbols: SymbolsConfig = Field(default_factory=SymbolsConfig)
