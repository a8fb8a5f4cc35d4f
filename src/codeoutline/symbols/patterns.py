"""Compiled strip-pattern cache."""

from __future__ import annotations

import re

import structlog

log = structlog.get_logger()


class PatternCache:
    """Raw pattern string -> compiled regex, shared across capture batches.

    Patterns that fail to compile are remembered as failures so the warning
    is logged once, and ``get_or_compile`` returns None for them.
    """

    def __init__(self) -> None:
        self._patterns: dict[str, re.Pattern[str] | None] = {}

    def __len__(self) -> int:
        return len(self._patterns)

    def __contains__(self, pattern: object) -> bool:
        return pattern in self._patterns

    def get_or_compile(self, pattern: str) -> re.Pattern[str] | None:
        if pattern in self._patterns:
            return self._patterns[pattern]

        compiled: re.Pattern[str] | None
        try:
            compiled = re.compile(pattern)
        except re.error as e:
            log.warning("pattern_cache.compile_failed", pattern=pattern, error=str(e))
            compiled = None
        self._patterns[pattern] = compiled
        return compiled

    def clear(self) -> None:
        self._patterns.clear()
