"""Scope gates: admission filters consulted once per capture.

``PredicateScopeGate`` understands the ``test.*`` settings tags queries use to
narrow a pattern beyond what the query language itself can express:

    (#set! test.onlyIfDescendantOfType function)
    (#set! test.onlyIfNotDescendantOfType "class_body object")
    (#set! test.onlyIfType identifier)
    (#set! test.onlyIfNotType property_identifier)
    (#set! test.final true)

``test.final`` finalizes the capture's source range: once such a capture is
admitted, later captures whose node spans the same range are rejected until
``reset()``, even when that extent belongs to a different node. Unknown
``test.*`` keys do not affect admission.
"""

from __future__ import annotations

from collections.abc import Callable
from typing import Protocol, runtime_checkable

from codeoutline.symbols.models import Capture, Range, SyntaxNode


@runtime_checkable
class ScopeGate(Protocol):
    """Admission filter for captures. Must tolerate repeated calls in one pass."""

    def store(self, capture: Capture) -> bool: ...

    def reset(self) -> None: ...


def _types(value: str | None) -> set[str]:
    return set(value.split()) if value else set()


def _ancestor_types(node: SyntaxNode) -> set[str]:
    found: set[str] = set()
    current = node.relation("parent")
    while current is not None:
        found.add(current.type)
        current = current.relation("parent")
    return found


def _only_if_descendant_of_type(node: SyntaxNode, value: str | None) -> bool:
    return bool(_ancestor_types(node) & _types(value))


def _only_if_not_descendant_of_type(node: SyntaxNode, value: str | None) -> bool:
    return not (_ancestor_types(node) & _types(value))


def _only_if_type(node: SyntaxNode, value: str | None) -> bool:
    return node.type in _types(value)


def _only_if_not_type(node: SyntaxNode, value: str | None) -> bool:
    return node.type not in _types(value)


_TESTS: dict[str, Callable[[SyntaxNode, str | None], bool]] = {
    "test.onlyIfDescendantOfType": _only_if_descendant_of_type,
    "test.onlyIfNotDescendantOfType": _only_if_not_descendant_of_type,
    "test.onlyIfType": _only_if_type,
    "test.onlyIfNotType": _only_if_not_type,
}


class PredicateScopeGate:
    """Evaluates ``test.*`` assertions and tracks ``test.final`` claims."""

    def __init__(self) -> None:
        self._final: set[Range] = set()

    def store(self, capture: Capture) -> bool:
        node = capture.node
        if node.range in self._final:
            return False

        for key, value in capture.assertions.items():
            test = _TESTS.get(key)
            if test is not None and not test(node, value):
                return False

        if "test.final" in capture.assertions:
            self._final.add(node.range)
        return True

    def reset(self) -> None:
        self._final.clear()
