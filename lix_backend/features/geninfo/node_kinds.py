"""
Known prompt-bearing node kinds and how to read text out of each.

Every kind maps to exactly one extraction strategy. A strategy either returns
a literal field, follows a producer edge, or combines several producers;
unknown class types contribute nothing.
"""

from __future__ import annotations

from collections.abc import Callable, Mapping
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Final

from ...shared import get_logger
from .graph_links import Edge, as_edge, classify_input, node_inputs, node_type

logger = get_logger(__name__)

# Keeps producer chains well inside the interpreter recursion limit.
DEFAULT_MAX_GRAPH_DEPTH: Final[int] = 200
MULTI_CONCAT_MAX_INPUTS: Final[int] = 10
MULTI_CONCAT_SEPARATOR: Final[str] = "\n\n"


class NodeKind(str, Enum):
    WILDCARD_PROCESSOR = "ImpactWildcardProcessor"
    LAZY_TEXT_ENCODE = "PCLazyTextEncode"
    PLAIN_TEXT_ENCODE = "CLIPTextEncode"
    FLUX_TEXT_ENCODE = "CLIPTextEncodeFlux"
    QWEN_EDIT_TEXT_ENCODE = "TextEncodeQwenImageEdit"
    PADDING_REMOVAL = "ChromaPaddingRemoval"
    MULTI_CONCAT = "ImpactConcatConditionings"
    STRING_CONCATENATE = "StringConcatenate"
    STRING_LITERAL = "String Literal"

    @classmethod
    def of(cls, node: Any) -> "NodeKind | None":
        try:
            return cls(node_type(node))
        except ValueError:
            return None


# Producers that mark an edge as carrying prompt text during the conditioning scan.
TEXT_ENCODING_KINDS: Final[frozenset[NodeKind]] = frozenset(
    {
        NodeKind.PLAIN_TEXT_ENCODE,
        NodeKind.FLUX_TEXT_ENCODE,
        NodeKind.STRING_CONCATENATE,
        NodeKind.STRING_LITERAL,
        NodeKind.MULTI_CONCAT,
        NodeKind.LAZY_TEXT_ENCODE,
        NodeKind.WILDCARD_PROCESSOR,
        NodeKind.QWEN_EDIT_TEXT_ENCODE,
    }
)

# Encoders scanned by title when no wiring identified a prompt.
FALLBACK_ENCODER_KINDS: Final[tuple[NodeKind, ...]] = (NodeKind.PLAIN_TEXT_ENCODE, NodeKind.FLUX_TEXT_ENCODE)


def _is_set(value: Any) -> bool:
    # Edges count as set even when the wired value turns out empty.
    return isinstance(value, (list, tuple)) or bool(value)


def _first_set(ins: Mapping[str, Any], *keys: str) -> Any:
    for key in keys:
        value = ins.get(key)
        if _is_set(value):
            return value
    return None


def _literal_text(value: Any) -> str:
    if value is None or isinstance(value, (list, tuple, dict)):
        return ""
    if isinstance(value, str):
        return value
    return str(value)


@dataclass
class Walk:
    """Traversal state shared by every step of one resolution."""

    visited: set[str] = field(default_factory=set)
    depth: int = 0

    def deeper(self) -> "Walk":
        # Same visited set, one level further down the producer chain.
        return Walk(self.visited, self.depth + 1)


class TextResolver:
    """
    Resolve the prompt text produced by a node, following producer edges.

    One `visited` set is shared by a whole resolution: every node contributes
    its text at most once, so cycles terminate and a producer wired into
    several inputs is only read the first time it is reached.
    """

    def __init__(self, nodes: Mapping[str, Any], max_depth: int = DEFAULT_MAX_GRAPH_DEPTH):
        self._nodes = nodes
        self._max_depth = max_depth

    def text_of(self, node_id: str | None, walk: Walk | None = None) -> str:
        if walk is None:
            walk = Walk()
        if not node_id or node_id in walk.visited:
            return ""
        if walk.depth >= self._max_depth:
            logger.warning("Producer chain deeper than %d nodes at node %s; text truncated", self._max_depth, node_id)
            return ""
        node = self._nodes.get(node_id)
        ins = node_inputs(node)
        if ins is None:
            return ""
        kind = NodeKind.of(node)
        strategy = _STRATEGIES.get(kind) if kind is not None else None
        if strategy is None:
            return ""
        walk.visited.add(node_id)
        return strategy(self, ins, walk.deeper())

    def value_text(self, value: Any, walk: Walk) -> str:
        resolved = classify_input(value)
        if isinstance(resolved, Edge):
            return self.text_of(resolved.node_id, walk)
        return _literal_text(resolved.value)

    def edge_text(self, value: Any, walk: Walk) -> str:
        edge = as_edge(value)
        if edge is None:
            return ""
        return self.text_of(edge.node_id, walk)


Strategy = Callable[[TextResolver, Mapping[str, Any], Walk], str]


def _field_reader(*keys: str) -> Strategy:
    def _read(resolver: TextResolver, ins: Mapping[str, Any], walk: Walk) -> str:
        return resolver.value_text(_first_set(ins, *keys), walk)

    return _read


def _padding_removal(resolver: TextResolver, ins: Mapping[str, Any], walk: Walk) -> str:
    return resolver.edge_text(ins.get("conditioning"), walk)


def _multi_concat(resolver: TextResolver, ins: Mapping[str, Any], walk: Walk) -> str:
    texts = []
    for i in range(1, MULTI_CONCAT_MAX_INPUTS + 1):
        text = resolver.edge_text(ins.get(f"conditioning{i}"), walk)
        if text:
            texts.append(text)
    return MULTI_CONCAT_SEPARATOR.join(texts)


def _string_concatenate(resolver: TextResolver, ins: Mapping[str, Any], walk: Walk) -> str:
    parts = [resolver.value_text(ins[key], walk) for key in ("string_a", "string_b") if _is_set(ins.get(key))]
    delimiter = ins.get("delimiter")
    return resolver.value_text(delimiter, walk).join(parts) if _is_set(delimiter) else "".join(parts)


def _string_literal(resolver: TextResolver, ins: Mapping[str, Any], walk: Walk) -> str:
    return resolver.value_text(ins.get("string"), walk)


_STRATEGIES: Final[dict[NodeKind, Strategy]] = {
    NodeKind.WILDCARD_PROCESSOR: _field_reader("populated_text", "wildcard_text"),
    NodeKind.LAZY_TEXT_ENCODE: _field_reader("text"),
    NodeKind.PLAIN_TEXT_ENCODE: _field_reader("text"),
    NodeKind.FLUX_TEXT_ENCODE: _field_reader("clip_l", "t5xxl"),
    NodeKind.QWEN_EDIT_TEXT_ENCODE: _field_reader("prompt"),
    NodeKind.PADDING_REMOVAL: _padding_removal,
    NodeKind.MULTI_CONCAT: _multi_concat,
    NodeKind.STRING_CONCATENATE: _string_concatenate,
    NodeKind.STRING_LITERAL: _string_literal,
}
