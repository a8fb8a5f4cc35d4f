"""Config module exports."""

from codeoutline.config.loader import CodeOutlineSettings, load_config
from codeoutline.config.models import (
    CodeOutlineConfig,
    LoggingConfig,
    LogOutputConfig,
    SymbolsConfig,
)

__all__ = [
    "load_config",
    "CodeOutlineConfig",
    "CodeOutlineSettings",
    "LoggingConfig",
    "LogOutputConfig",
    "SymbolsConfig",
]
