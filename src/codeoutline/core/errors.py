"""codeoutline error types with typed error codes.

Error code ranges:
- 2xxx: Config
- 3xxx: Query / grammar

The capture organizer itself never raises; these types cover configuration
loading and the tree-sitter provider layer.
"""

from dataclasses import dataclass, field
from enum import IntEnum
from typing import Any


class ErrorCode(IntEnum):
    """Typed error codes for programmatic handling."""

    # Config (2xxx)
    CONFIG_PARSE_ERROR = 2001
    CONFIG_INVALID_VALUE = 2002

    # Query (3xxx)
    GRAMMAR_NOT_AVAILABLE = 3001
    QUERY_COMPILE_ERROR = 3002


@dataclass(frozen=True, slots=True)
class CodeOutlineError(Exception):
    """Base error with structured context."""

    code: ErrorCode
    message: str
    retryable: bool = False
    details: dict[str, Any] = field(default_factory=dict)

    @property
    def error_name(self) -> str:
        """String identifier for logging (e.g., 'CONFIG_PARSE_ERROR')."""
        return self.code.name

    def to_dict(self) -> dict[str, Any]:
        return {
            "code": self.code.value,
            "error": self.error_name,
            "message": self.message,
            "retryable": self.retryable,
            "details": self.details,
        }

    def __str__(self) -> str:
        return f"[{self.code.value}] {self.error_name}: {self.message}"


class ConfigError(CodeOutlineError):
    """Configuration-related errors."""

    @classmethod
    def parse_error(cls, path: str, reason: str) -> "ConfigError":
        return cls(
            code=ErrorCode.CONFIG_PARSE_ERROR,
            message=f"Failed to parse config at {path}: {reason}",
            details={"path": path, "reason": reason},
        )

    @classmethod
    def invalid_value(cls, field: str, value: Any, reason: str) -> "ConfigError":
        return cls(
            code=ErrorCode.CONFIG_INVALID_VALUE,
            message=f"Invalid value for '{field}': {reason}",
            details={"field": field, "value": str(value), "reason": reason},
        )


class QueryError(CodeOutlineError):
    """Grammar loading and tags-query compilation errors."""

    @classmethod
    def grammar_not_available(cls, language: str) -> "QueryError":
        return cls(
            code=ErrorCode.GRAMMAR_NOT_AVAILABLE,
            message=f"Grammar not installed: {language}",
            details={"language": language, "module": f"tree_sitter_{language}"},
        )

    @classmethod
    def compile_error(cls, language: str, reason: str) -> "QueryError":
        return cls(
            code=ErrorCode.QUERY_COMPILE_ERROR,
            message=f"Failed to compile tags query for {language}: {reason}",
            details={"language": language, "reason": reason},
        )
