"""Tree-sitter symbol provider."""

from codeoutline.provider.provider import (
    LanguageLayer,
    SymbolProvider,
    SymbolRequest,
    build_layer,
)
from codeoutline.provider.treesitter import TagsQuery, TreeSitterNode, load_language

__all__ = [
    "LanguageLayer",
    "SymbolProvider",
    "SymbolRequest",
    "TagsQuery",
    "TreeSitterNode",
    "build_layer",
    "load_language",
]
