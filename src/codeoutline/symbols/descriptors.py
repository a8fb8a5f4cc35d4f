"""Node descriptors: dotted relation paths such as ``parent.parent.firstNamedChild``."""

from __future__ import annotations

from codeoutline.symbols.models import SyntaxNode


def resolve_node_descriptor(node: SyntaxNode, descriptor: str) -> SyntaxNode | None:
    """Follow each relation in ``descriptor`` starting at ``node``.

    Returns None as soon as a step is missing, including empty path segments.
    """
    result: SyntaxNode | None = node
    for part in descriptor.split("."):
        if result is None:
            return None
        result = result.relation(part) if part else None
    return result
