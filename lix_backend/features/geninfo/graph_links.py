"""Producer-edge / literal input values and small node accessors for prompt graphs."""

from __future__ import annotations

from collections.abc import Iterator, Mapping
from dataclasses import dataclass
from typing import Any, Union


@dataclass(frozen=True)
class Edge:
    """An input wired to output `slot` of node `node_id`."""

    node_id: str
    slot: int


@dataclass(frozen=True)
class Literal:
    """An input holding a plain widget value."""

    value: Any


InputValue = Union[Edge, Literal]


def _to_int(value: Any) -> int | None:
    if value is None or isinstance(value, bool):
        return None
    try:
        return int(value)
    except (TypeError, ValueError):
        return None


def _looks_like_node_id(value: Any) -> bool:
    if isinstance(value, bool):
        return False
    if isinstance(value, int):
        return True
    return isinstance(value, str) and bool(value.strip())


def as_edge(value: Any) -> Edge | None:
    if not isinstance(value, (list, tuple)) or len(value) != 2:
        return None
    a, b = value[0], value[1]
    slot = _to_int(b)
    if not _looks_like_node_id(a) or slot is None:
        return None
    return Edge(str(a).strip(), slot)


def classify_input(value: Any) -> InputValue:
    edge = as_edge(value)
    return edge if edge is not None else Literal(value)


def node_type(node: Any) -> str:
    if not isinstance(node, Mapping):
        return ""
    return str(node.get("class_type") or "")


def node_inputs(node: Any) -> dict[str, Any] | None:
    """The node's inputs mapping, or None for a malformed node."""
    if not isinstance(node, Mapping):
        return None
    ins = node.get("inputs")
    return ins if isinstance(ins, dict) else None


def node_title(node: Any) -> str:
    if not isinstance(node, Mapping):
        return ""
    meta = node.get("_meta")
    if not isinstance(meta, Mapping):
        return ""
    return str(meta.get("title") or "")


def iter_wellformed_nodes(nodes: Mapping[str, Any]) -> Iterator[tuple[str, Mapping[str, Any], dict[str, Any]]]:
    """Yield (node_id, node, inputs) in insertion order, skipping nodes without inputs."""
    for node_id, node in nodes.items():
        ins = node_inputs(node)
        if ins is None:
            continue
        yield node_id, node, ins
