"""Capture organization and symbol-name synthesis."""

from codeoutline.symbols.containers import Container
from codeoutline.symbols.descriptors import resolve_node_descriptor
from codeoutline.symbols.gate import PredicateScopeGate, ScopeGate
from codeoutline.symbols.models import (
    Capture,
    ContainerKind,
    Directives,
    Name,
    Point,
    Range,
    Symbol,
    SyntaxNode,
)
from codeoutline.symbols.names import resolve_name
from codeoutline.symbols.organizer import CaptureOrganizer
from codeoutline.symbols.patterns import PatternCache

__all__ = [
    "Capture",
    "CaptureOrganizer",
    "Container",
    "ContainerKind",
    "Directives",
    "Name",
    "PatternCache",
    "Point",
    "PredicateScopeGate",
    "Range",
    "ScopeGate",
    "Symbol",
    "SyntaxNode",
    "resolve_name",
    "resolve_node_descriptor",
]
