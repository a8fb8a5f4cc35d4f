"""Capture organizer: ordered captures in, ordered symbols out.

One left-to-right pass over a capture batch:

- ``@definition.*`` / ``@reference.*`` close the active container and open a
  new one.
- ``@name`` attaches to the active container when its node lies inside the
  container's head node; otherwise it becomes a standalone name.
- Any other capture attaches the same way or is kept as unclaimed.

Output order is valid definitions, then valid references (when enabled),
then standalone names, each in encounter order. A container without a name
is dropped without comment.

An organizer instance holds per-pass state and must not run two passes at
once; use one instance per concurrent caller.
"""

from __future__ import annotations

from collections.abc import Hashable, Iterable

import structlog

from codeoutline.config.models import SymbolsConfig
from codeoutline.core.logging import clear_batch_id, set_batch_id
from codeoutline.symbols.containers import Container
from codeoutline.symbols.gate import ScopeGate
from codeoutline.symbols.models import Capture, ContainerKind, Name, Symbol
from codeoutline.symbols.names import resolve_name
from codeoutline.symbols.patterns import PatternCache

log = structlog.get_logger()


class CaptureOrganizer:
    """Groups tags-query captures into containers and emits symbols."""

    def __init__(
        self,
        config: SymbolsConfig | None = None,
        patterns: PatternCache | None = None,
    ) -> None:
        self.config = config or SymbolsConfig()
        self.patterns = patterns if patterns is not None else PatternCache()
        self.name_cache: dict[Hashable, str] = {}
        self.definitions: list[Container] = []
        self.references: list[Container] = []
        self.names: list[Name] = []
        self.unclaimed: list[Capture] = []

    def clear(self) -> None:
        """Drop all per-batch state."""
        self.name_cache.clear()
        self.definitions = []
        self.references = []
        self.names = []
        self.unclaimed = []

    def destroy(self) -> None:
        """Tear down: forget compiled patterns as well as batch state."""
        self.patterns.clear()
        self.clear()

    def _finish(self, container: Container | None) -> None:
        if container is None:
            return
        if container.kind is ContainerKind.DEFINITION:
            self.definitions.append(container)
        else:
            self.references.append(container)

    def process(
        self,
        captures: Iterable[Capture],
        gate: ScopeGate,
        *,
        include_references: bool | None = None,
    ) -> list[Symbol]:
        """Organize one capture batch and return its symbols.

        Args:
            captures: Captures ordered so enclosing nodes come before their
                descendants.
            gate: Admission filter; reset before and after the pass.
            include_references: Overrides ``config.include_references``.
        """
        if include_references is None:
            include_references = self.config.include_references

        gate.reset()
        self.clear()
        set_batch_id()
        try:
            self._organize(captures, gate)
            symbols = self._emit(include_references)
            log.debug(
                "organizer.pass_complete",
                definitions=len(self.definitions),
                references=len(self.references),
                names=len(self.names),
                unclaimed=len(self.unclaimed),
                symbols=len(symbols),
            )
            return symbols
        finally:
            gate.reset()
            self.name_cache.clear()
            clear_batch_id()

    def _organize(self, captures: Iterable[Capture], gate: ScopeGate) -> None:
        active: Container | None = None
        for capture in captures:
            if not gate.store(capture):
                continue

            container = Container.for_capture(capture)
            if container is not None:
                self._finish(active)
                active = container
                continue

            if active is not None and active.attach(capture, self.name_cache, self.patterns):
                continue

            if capture.is_name:
                self.names.append(resolve_name(capture, self.name_cache, self.patterns))
            else:
                self.unclaimed.append(capture)
        self._finish(active)

    def _emit(self, include_references: bool) -> list[Symbol]:
        symbols: list[Symbol] = []
        groups = [self.definitions, self.references] if include_references else [self.definitions]
        for group in groups:
            for container in group:
                if not container.is_valid():
                    continue
                symbol = container.to_symbol()
                if symbol is not None:
                    symbols.append(symbol)

        symbols.extend(name.to_symbol() for name in self.names)
        return symbols
