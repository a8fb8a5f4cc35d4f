"""codeoutline: symbol outlines from tree-sitter tags-query captures."""

__version__ = "0.1.0"
