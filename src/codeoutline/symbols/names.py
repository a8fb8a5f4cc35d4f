"""Name synthesis for ``@name`` captures.

The displayed name starts from the node text and is shaped by the capture's
directives, in this order: strip, prepend, append, composed prefix. Every
resolved name is recorded in the batch's name cache under the node id, so a
later capture can borrow it through ``prepend_symbol_for_node``. That only
works when the referenced node was resolved first, which holds for queries
whose captures arrive outer-before-inner.
"""

from __future__ import annotations

from collections.abc import Hashable, MutableMapping

from codeoutline.symbols.descriptors import resolve_node_descriptor
from codeoutline.symbols.models import Capture, Directives, Name, SyntaxNode
from codeoutline.symbols.patterns import PatternCache

NameCache = MutableMapping[Hashable, str]


def resolve_name(capture: Capture, name_cache: NameCache, patterns: PatternCache) -> Name:
    """Resolve ``capture`` to a Name and record its text in ``name_cache``."""
    node = capture.node
    directives = capture.directives

    base = node.text
    if directives.strip:
        pattern = patterns.get_or_compile(directives.strip)
        if pattern is not None:
            base = pattern.sub("", base)

    if directives.prepend:
        base = f"{directives.prepend}{base}"
    if directives.append:
        base = f"{base}{directives.append}"

    prefix = _resolve_prefix(node, directives, name_cache)
    if prefix:
        joiner = directives.joiner or ""
        base = f"{prefix}{joiner}{base}"

    name_cache[node.id] = base
    return Name(
        text=base,
        position=node.range.start,
        context=_resolve_context(node, directives),
        tag=directives.tag,
    )


def _resolve_prefix(node: SyntaxNode, directives: Directives, name_cache: NameCache) -> str | None:
    # A symbol prefix needs the other node's name resolved earlier in this batch.
    if directives.prepend_symbol_for_node:
        other = resolve_node_descriptor(node, directives.prepend_symbol_for_node)
        if other is not None:
            symbol_name = name_cache.get(other.id)
            if symbol_name:
                return symbol_name

    # A text prefix works on any node, named symbol or not.
    if directives.prepend_text_for_node:
        other = resolve_node_descriptor(node, directives.prepend_text_for_node)
        if other is not None:
            return other.text

    return None


def _resolve_context(node: SyntaxNode, directives: Directives) -> str | None:
    if directives.context:
        return directives.context
    if directives.context_node:
        context_node = resolve_node_descriptor(node, directives.context_node)
        if context_node is not None:
            return context_node.text
    return None
