"""Data model for capture organization.

Captures are the input: one tagged syntax node each, in query order.
Symbols are the output: named, positioned outline entries.
"""

from __future__ import annotations

from collections.abc import Hashable, Mapping
from dataclasses import dataclass, field
from enum import Enum
from types import MappingProxyType
from typing import Any, Protocol, runtime_checkable

# =============================================================================
# Positions
# =============================================================================


@dataclass(frozen=True, order=True, slots=True)
class Point:
    """A zero-based (row, column) position in a source buffer."""

    row: int
    column: int


@dataclass(frozen=True, slots=True)
class Range:
    """A half-open span between two points."""

    start: Point
    end: Point

    def contains_range(self, other: Range) -> bool:
        """True when ``other`` starts no earlier and ends no later than this range."""
        return self.start <= other.start and other.end <= self.end


# =============================================================================
# Syntax nodes
# =============================================================================


@runtime_checkable
class SyntaxNode(Protocol):
    """The slice of a syntax-tree node that capture organization needs.

    ``id`` must be stable for the lifetime of the tree: two handles reached
    through different relation paths compare equal by id when they denote the
    same node.
    """

    @property
    def id(self) -> Hashable: ...

    @property
    def type(self) -> str: ...

    @property
    def text(self) -> str: ...

    @property
    def range(self) -> Range: ...

    def relation(self, name: str) -> SyntaxNode | None:
        """Return the related node (``parent``, ``firstNamedChild``, ...) or None."""
        ...


# =============================================================================
# Directives
# =============================================================================

# Query #set! keys understood by the name resolver, mapped to Directives fields.
DIRECTIVE_KEYS: dict[str, str] = {
    "symbol.strip": "strip",
    "symbol.prepend": "prepend",
    "symbol.append": "append",
    "symbol.joiner": "joiner",
    "symbol.prependTextForNode": "prepend_text_for_node",
    "symbol.prependSymbolForNode": "prepend_symbol_for_node",
    "symbol.context": "context",
    "symbol.contextNode": "context_node",
    "symbol.tag": "tag",
}

ASSERTION_PREFIX = "test."


@dataclass(frozen=True, slots=True)
class Directives:
    """Name-synthesis rules attached to a capture.

    Attributes:
        strip: Regex; every match is removed from the node text.
        prepend: Literal put in front of the (stripped) text.
        append: Literal put after the (stripped) text.
        joiner: Literal between a composed prefix and the text. Defaults to "".
        prepend_text_for_node: Descriptor of a node whose raw text becomes the prefix.
        prepend_symbol_for_node: Descriptor of a node whose resolved name becomes
            the prefix. Tried before ``prepend_text_for_node``.
        context: Literal context annotation.
        context_node: Descriptor of a node whose raw text becomes the context.
            Ignored when ``context`` is set.
        tag: Overrides the owning container's structural tag.
    """

    strip: str | None = None
    prepend: str | None = None
    append: str | None = None
    joiner: str | None = None
    prepend_text_for_node: str | None = None
    prepend_symbol_for_node: str | None = None
    context: str | None = None
    context_node: str | None = None
    tag: str | None = None

    @classmethod
    def from_settings(cls, settings: Mapping[str, str | None] | None) -> Directives:
        """Build from raw ``#set!`` key/value pairs.

        Unknown keys are ignored. Empty or missing values count as absent.
        """
        if not settings:
            return EMPTY_DIRECTIVES
        values = {
            DIRECTIVE_KEYS[key]: value
            for key, value in settings.items()
            if key in DIRECTIVE_KEYS and value
        }
        return cls(**values) if values else EMPTY_DIRECTIVES


EMPTY_DIRECTIVES = Directives()


# =============================================================================
# Captures
# =============================================================================


@dataclass(frozen=True, slots=True)
class Capture:
    """One tagged node produced by a tags query.

    ``role`` is the capture name without the leading ``@``: ``definition.function``,
    ``reference.call``, ``name``, or any auxiliary tag. ``assertions`` holds the
    ``test.*`` settings a scope gate may evaluate.
    """

    role: str
    node: SyntaxNode
    directives: Directives = EMPTY_DIRECTIVES
    assertions: Mapping[str, str | None] = field(default_factory=lambda: MappingProxyType({}))

    @classmethod
    def from_settings(
        cls,
        role: str,
        node: SyntaxNode,
        settings: Mapping[str, str | None] | None = None,
    ) -> Capture:
        settings = settings or {}
        assertions = {k: v for k, v in settings.items() if k.startswith(ASSERTION_PREFIX)}
        return cls(
            role=role,
            node=node,
            directives=Directives.from_settings(settings),
            assertions=MappingProxyType(assertions),
        )

    @property
    def is_definition(self) -> bool:
        return self.role.startswith("definition.")

    @property
    def is_reference(self) -> bool:
        return self.role.startswith("reference.")

    @property
    def is_name(self) -> bool:
        return self.role == "name"


# =============================================================================
# Names and symbols
# =============================================================================


@dataclass(frozen=True, slots=True)
class Name:
    """A resolved ``@name`` capture."""

    text: str
    position: Point
    context: str | None = None
    tag: str | None = None

    def to_symbol(self) -> Symbol:
        return Symbol(name=self.text, position=self.position, tag=self.tag, context=self.context)


@dataclass(frozen=True, slots=True)
class Symbol:
    """A named, positioned outline entry."""

    name: str
    position: Point
    tag: str | None = None
    context: str | None = None

    def to_dict(self) -> dict[str, Any]:
        """Serialize, omitting tag and context when absent."""
        result: dict[str, Any] = {
            "name": self.name,
            "position": {"row": self.position.row, "column": self.position.column},
        }
        if self.tag:
            result["tag"] = self.tag
        if self.context:
            result["context"] = self.context
        return result


class ContainerKind(str, Enum):
    """Which output group a container lands in."""

    DEFINITION = "definition"
    REFERENCE = "reference"
