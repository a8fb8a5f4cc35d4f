"""py-tree-sitter adapters: nodes, grammars, and tags queries.

Turns ``QueryCursor.matches()`` output into the ordered ``Capture`` batch the
organizer expects. ``#set!`` settings of each pattern become the capture's
directives (``symbol.*``) and scope-gate assertions (``test.*``).
"""

from __future__ import annotations

import importlib
from collections.abc import Callable
from typing import TYPE_CHECKING, Any

import tree_sitter
from tree_sitter import Query as _TSQuery
from tree_sitter import QueryCursor as _TSQueryCursor

from codeoutline.core.errors import QueryError
from codeoutline.symbols.models import Capture, Point, Range

if TYPE_CHECKING:
    from tree_sitter import Language, Node


def _first(nodes: list[Node]) -> Node | None:
    return nodes[0] if nodes else None


def _last(nodes: list[Node]) -> Node | None:
    return nodes[-1] if nodes else None


_RELATIONS: dict[str, Callable[[Node], Node | None]] = {
    "parent": lambda n: n.parent,
    "firstChild": lambda n: _first(n.children),
    "lastChild": lambda n: _last(n.children),
    "firstNamedChild": lambda n: _first(n.named_children),
    "lastNamedChild": lambda n: _last(n.named_children),
    "nextSibling": lambda n: n.next_sibling,
    "previousSibling": lambda n: n.prev_sibling,
    "nextNamedSibling": lambda n: n.next_named_sibling,
    "previousNamedSibling": lambda n: n.prev_named_sibling,
}
# snake_case spellings, matching py-tree-sitter attribute names
_RELATIONS.update(
    {
        "first_child": _RELATIONS["firstChild"],
        "last_child": _RELATIONS["lastChild"],
        "first_named_child": _RELATIONS["firstNamedChild"],
        "last_named_child": _RELATIONS["lastNamedChild"],
        "next_sibling": _RELATIONS["nextSibling"],
        "prev_sibling": _RELATIONS["previousSibling"],
        "next_named_sibling": _RELATIONS["nextNamedSibling"],
        "prev_named_sibling": _RELATIONS["previousNamedSibling"],
    }
)


class TreeSitterNode:
    """``SyntaxNode`` view of a ``tree_sitter.Node``."""

    __slots__ = ("_node",)

    def __init__(self, node: Node) -> None:
        self._node = node

    @property
    def id(self) -> int:
        return self._node.id

    @property
    def type(self) -> str:
        return self._node.type

    @property
    def text(self) -> str:
        raw = self._node.text
        return raw.decode("utf-8", errors="replace") if raw is not None else ""

    @property
    def range(self) -> Range:
        start_row, start_col = self._node.start_point
        end_row, end_col = self._node.end_point
        return Range(Point(start_row, start_col), Point(end_row, end_col))

    @property
    def ts_node(self) -> Node:
        return self._node

    def relation(self, name: str) -> TreeSitterNode | None:
        accessor = _RELATIONS.get(name)
        if accessor is None:
            return None
        other = accessor(self._node)
        return TreeSitterNode(other) if other is not None else None

    def __eq__(self, other: object) -> bool:
        return isinstance(other, TreeSitterNode) and other.id == self.id

    def __hash__(self) -> int:
        return hash(self.id)

    def __repr__(self) -> str:
        return f"TreeSitterNode(type={self.type!r}, range={self.range})"


def load_language(name: str, func_name: str = "language") -> Language:
    """Load the grammar shipped by the ``tree_sitter_<name>`` package.

    Raises:
        QueryError: If the grammar package is not installed.
    """
    try:
        module = importlib.import_module(f"tree_sitter_{name}")
    except ImportError as err:
        raise QueryError.grammar_not_available(name) from err
    return tree_sitter.Language(getattr(module, func_name)())


class TagsQuery:
    """A compiled tags query that yields organizer-ready captures."""

    def __init__(self, language: Language, source: str, *, language_name: str = "unknown") -> None:
        self.language_name = language_name
        self.source = source
        try:
            self._query = _TSQuery(language, source)
        except (ValueError, NameError, SyntaxError) as e:
            raise QueryError.compile_error(language_name, str(e)) from e

        self._settings: list[dict[str, str | None]] = [
            dict(self._query.pattern_settings(i)) for i in range(self._query.pattern_count)
        ]
        self._capture_order: dict[str, int] = {
            self._query.capture_name(i): i for i in range(self._query.capture_count)
        }

    def pattern_settings(self, pattern_index: int) -> dict[str, str | None]:
        return self._settings[pattern_index]

    def captures(
        self,
        root: Node,
        start_byte: int | None = None,
        end_byte: int | None = None,
    ) -> list[Capture]:
        """Run the query under ``root`` and return captures outer-before-inner.

        Ordering: start position, then longer nodes first, then pattern index,
        then capture order within the query.
        """
        cursor = _TSQueryCursor(self._query)
        if start_byte is not None or end_byte is not None:
            cursor.set_byte_range(
                start_byte if start_byte is not None else root.start_byte,
                end_byte if end_byte is not None else root.end_byte,
            )

        keyed: list[tuple[tuple[int, int, int, int], Capture]] = []
        matches: list[tuple[int, dict[str, list[Any]]]] = cursor.matches(root)
        for pattern_index, captures_dict in matches:
            settings = self._settings[pattern_index]
            for capture_name, nodes in captures_dict.items():
                order = self._capture_order.get(capture_name, 0)
                for node in nodes:
                    key = (node.start_byte, -node.end_byte, pattern_index, order)
                    capture = Capture.from_settings(capture_name, TreeSitterNode(node), settings)
                    keyed.append((key, capture))

        keyed.sort(key=lambda item: item[0])
        return [capture for _key, capture in keyed]
