"""Tests for the py-tree-sitter adapters."""

from __future__ import annotations

import pytest

pytest.importorskip("tree_sitter_javascript")

import tree_sitter  # noqa: E402

from codeoutline.provider.treesitter import TagsQuery, TreeSitterNode, load_language  # noqa: E402
from codeoutline.symbols.descriptors import resolve_node_descriptor  # noqa: E402
from codeoutline.symbols.models import Directives, Point, Range, SyntaxNode  # noqa: E402

SOURCE = b"function outer() {\n  function inner() {}\n}\n"


@pytest.fixture(scope="module")
def language() -> tree_sitter.Language:
    return load_language("javascript")


@pytest.fixture
def tree(language: tree_sitter.Language) -> tree_sitter.Tree:
    return tree_sitter.Parser(language).parse(SOURCE)


class TestTreeSitterNode:
    def test_satisfies_syntax_node_protocol(self, tree: tree_sitter.Tree) -> None:
        assert isinstance(TreeSitterNode(tree.root_node), SyntaxNode)

    def test_text_and_range(self, tree: tree_sitter.Tree) -> None:
        function = TreeSitterNode(tree.root_node).relation("firstNamedChild")

        assert function is not None
        assert function.type == "function_declaration"
        assert function.text.startswith("function outer()")
        assert function.range == Range(Point(0, 0), Point(2, 1))

    def test_relations_preserve_identity(self, tree: tree_sitter.Tree) -> None:
        root = TreeSitterNode(tree.root_node)
        name = resolve_node_descriptor(root, "firstNamedChild.firstNamedChild")

        assert name is not None
        assert name.text == "outer"
        assert resolve_node_descriptor(name, "parent.parent") == root
        assert resolve_node_descriptor(name, "parent.parent").id == root.id

    def test_snake_case_aliases(self, tree: tree_sitter.Tree) -> None:
        root = TreeSitterNode(tree.root_node)

        assert root.relation("first_named_child") == root.relation("firstNamedChild")

    def test_unknown_relation(self, tree: tree_sitter.Tree) -> None:
        root = TreeSitterNode(tree.root_node)

        assert root.relation("grandparent") is None
        assert root.relation("parent") is None


class TestTagsQuery:
    def test_captures_ordered_outer_before_inner(
        self, language: tree_sitter.Language, tree: tree_sitter.Tree
    ) -> None:
        # Given - the name pattern is listed before the definition pattern
        query = TagsQuery(
            language,
            """
            (function_declaration name: (identifier) @name)
            (function_declaration) @definition.function
            """,
        )

        # When
        captures = query.captures(tree.root_node)

        # Then
        assert [(c.role, c.node.text.split("(")[0]) for c in captures] == [
            ("definition.function", "function outer"),
            ("name", "outer"),
            ("definition.function", "function inner"),
            ("name", "inner"),
        ]

    def test_settings_split_into_directives_and_assertions(
        self, language: tree_sitter.Language, tree: tree_sitter.Tree
    ) -> None:
        query = TagsQuery(
            language,
            """
            (
              (function_declaration name: (identifier) @name)
              (#set! symbol.append "()")
              (#set! test.final "true")
            )
            """,
        )

        captures = query.captures(tree.root_node)

        assert captures
        assert captures[0].directives == Directives(append="()")
        assert dict(captures[0].assertions) == {"test.final": "true"}
        assert query.pattern_settings(0)["symbol.append"] == "()"
