"""Definition/reference containers.

A container starts at a ``@definition.*`` or ``@reference.*`` capture and
collects the captures that follow it, as long as their nodes lie inside the
head node's range.
"""

from __future__ import annotations

from collections.abc import Mapping
from types import MappingProxyType

import structlog

from codeoutline.symbols.models import Capture, ContainerKind, Name, Point, Symbol
from codeoutline.symbols.names import NameCache, resolve_name
from codeoutline.symbols.patterns import PatternCache

log = structlog.get_logger()


class Container:
    """One head capture plus the captures nested inside it."""

    def __init__(self, kind: ContainerKind, head: Capture) -> None:
        self.kind = kind
        self.head = head
        self._fields: dict[str, Capture] = {head.role: head}
        self.tag = head.role.split(".", 1)[1] if "." in head.role else head.role
        self.position = head.node.range.start
        self.name: Name | None = None

    @classmethod
    def for_capture(cls, head: Capture) -> Container | None:
        """Start a container for a head capture, or None for any other role."""
        if head.is_definition:
            return cls(ContainerKind.DEFINITION, head)
        if head.is_reference:
            return cls(ContainerKind.REFERENCE, head)
        return None

    @property
    def fields(self) -> Mapping[str, Capture]:
        return MappingProxyType(self._fields)

    def get_capture(self, role: str) -> Capture | None:
        return self._fields.get(role)

    def attach(self, capture: Capture, name_cache: NameCache, patterns: PatternCache) -> bool:
        """Store ``capture`` if its node lies within the head node.

        Returns False, leaving the container untouched, when it does not.
        """
        if not self.head.node.range.contains_range(capture.node.range):
            return False

        if capture.role in self._fields:
            log.warning(
                "container.duplicate_field",
                role=capture.role,
                head=self.head.role,
                row=self.position.row,
            )
        self._fields[capture.role] = capture
        if capture.is_name:
            self.name = resolve_name(capture, name_cache, patterns)
        return True

    def is_valid(self) -> bool:
        return self.name is not None and isinstance(self.position, Point)

    def to_symbol(self) -> Symbol | None:
        if self.name is None:
            return None
        return Symbol(
            name=self.name.text,
            position=self.position,
            tag=self.name.tag or self.tag,
            context=self.name.context,
        )

    def __repr__(self) -> str:
        name = self.name.text if self.name else None
        return f"Container(kind={self.kind.value}, tag={self.tag!r}, name={name!r})"
