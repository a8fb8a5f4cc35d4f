"""Tree-sitter symbol provider.

Runs each language layer's tags query and feeds the captures through a
shared ``CaptureOrganizer``. The provider only answers per-file requests:
it cannot crawl a project.
"""

from __future__ import annotations

from collections.abc import Callable, Sequence
from dataclasses import dataclass
from pathlib import Path
from typing import TYPE_CHECKING, Literal

import structlog

from codeoutline.config.loader import load_config
from codeoutline.config.models import CodeOutlineConfig, SymbolsConfig
from codeoutline.provider.treesitter import TagsQuery, load_language
from codeoutline.symbols.gate import PredicateScopeGate
from codeoutline.symbols.models import Symbol
from codeoutline.symbols.organizer import CaptureOrganizer

if TYPE_CHECKING:
    import tree_sitter

log = structlog.get_logger()

RequestType = Literal["file", "project", "project-find"]

_PROJECT_REQUESTS = frozenset({"project", "project-find"})


@dataclass
class LanguageLayer:
    """One parsed language layer of a buffer and its tags query.

    ``start_byte``/``end_byte`` restrict the query to the layer's extent;
    None means the whole tree.
    """

    tree: tree_sitter.Tree
    tags_query: TagsQuery | None = None
    start_byte: int | None = None
    end_byte: int | None = None


@dataclass
class SymbolRequest:
    """A request for symbols.

    ``is_cancelled`` is polled once, right before extraction starts.
    """

    layers: Sequence[LanguageLayer]
    type: RequestType = "file"
    is_cancelled: Callable[[], bool] | None = None


def build_layer(source: bytes, language_name: str, query_source: str) -> LanguageLayer:
    """Parse ``source`` and compile ``query_source`` for one grammar."""
    import tree_sitter

    language = load_language(language_name)
    tree = tree_sitter.Parser(language).parse(source)
    return LanguageLayer(
        tree=tree,
        tags_query=TagsQuery(language, query_source, language_name=language_name),
    )


class SymbolProvider:
    """Provides file symbols from tree-sitter tags queries.

    With an explicit config the provider uses it as given. Without one it
    loads settings (YAML files and ``CODEOUTLINE__*`` env vars, rooted at
    ``repo_root``) at the start of every request, so changes apply to the
    next request without rebuilding the provider.
    """

    name = "Tree-sitter"
    is_exclusive = True

    def __init__(
        self,
        config: CodeOutlineConfig | SymbolsConfig | None = None,
        *,
        repo_root: Path | None = None,
    ) -> None:
        if isinstance(config, CodeOutlineConfig):
            config = config.symbols
        self.config = config
        self.repo_root = repo_root
        self.organizer = CaptureOrganizer(config)
        self.gate = PredicateScopeGate()

    def _symbols_config(self) -> SymbolsConfig:
        if self.config is not None:
            return self.config
        return load_config(self.repo_root).symbols

    def destroy(self) -> None:
        self.organizer.destroy()

    def can_provide_symbols(self, request: SymbolRequest) -> bool:
        if request.type in _PROJECT_REQUESTS:
            return False
        return any(layer.tags_query is not None for layer in request.layers)

    def get_symbols(self, request: SymbolRequest) -> list[Symbol] | None:
        """Return symbols for every layer with a tags query, in layer order.

        Returns None when the request was cancelled or no layer has a query.
        """
        if request.is_cancelled is not None and request.is_cancelled():
            log.debug("provider.cancelled")
            return None

        layers = [layer for layer in request.layers if layer.tags_query is not None]
        if not layers:
            return None

        include_references = self._symbols_config().include_references
        results: list[Symbol] = []
        for layer in layers:
            assert layer.tags_query is not None
            captures = layer.tags_query.captures(
                layer.tree.root_node, layer.start_byte, layer.end_byte
            )
            results.extend(
                self.organizer.process(captures, self.gate, include_references=include_references)
            )

        log.debug("provider.symbols", layers=len(layers), symbols=len(results))
        return results
