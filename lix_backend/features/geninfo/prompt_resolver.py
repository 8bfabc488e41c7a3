"""
Recover the positive/negative prompt text from a ComfyUI API prompt graph.

Resolution runs as an ordered pipeline of stages sharing one per-call
`ResolutionState`. Each stage only runs while something is still missing:

1. channel match: nodes wired through well-known positive/negative inputs
2. conditioning scan: any edge fed by a text-encoding node, split by name
3. text resolution: recursive descent from the chosen node ids
4. title fallback: bare CLIPTextEncode nodes, split by title

Ties are broken by key insertion order of the decoded graph.
"""

from __future__ import annotations

from collections.abc import Callable, Mapping
from dataclasses import asdict, dataclass
from typing import Any, Final

from ...shared import get_logger
from .graph_links import as_edge, iter_wellformed_nodes, node_title
from .node_kinds import FALLBACK_ENCODER_KINDS, TEXT_ENCODING_KINDS, NodeKind, TextResolver, Walk, _is_set

logger = get_logger(__name__)

POSITIVE_INPUT_NAMES: Final[tuple[str, ...]] = ("positive", "conditioning_positive", "pos")
NEGATIVE_INPUT_NAMES: Final[tuple[str, ...]] = ("negative", "conditioning_negative", "nag_negative", "neg")
NEGATIVE_MARKERS: Final[tuple[str, ...]] = ("negative", "nag")


@dataclass
class PromptPair:
    positive: str = ""
    negative: str = ""

    def to_dict(self) -> dict[str, str]:
        return asdict(self)


@dataclass
class ResolutionState:
    positive_id: str | None = None
    negative_id: str | None = None
    positive: str = ""
    negative: str = ""

    def ids_complete(self) -> bool:
        return self.positive_id is not None and self.negative_id is not None

    def texts_complete(self) -> bool:
        return bool(self.positive) and bool(self.negative)

    def to_pair(self) -> PromptPair:
        return PromptPair(positive=self.positive, negative=self.negative)


Nodes = Mapping[str, Any]


@dataclass(frozen=True)
class ResolverStage:
    name: str
    precondition: Callable[[ResolutionState], bool]
    apply: Callable[[Nodes, ResolutionState, TextResolver], None]


def _looks_negative(*labels: str) -> bool:
    return any(marker in label.lower() for label in labels for marker in NEGATIVE_MARKERS)


def _first_edge_id(ins: Mapping[str, Any], names: tuple[str, ...]) -> str | None:
    for name in names:
        edge = as_edge(ins.get(name))
        if edge is not None:
            return edge.node_id
    return None


def _apply_channel_match(nodes: Nodes, state: ResolutionState, texts: TextResolver) -> None:
    candidates: list[tuple[int, str | None, str | None]] = []
    for _, _, ins in iter_wellformed_nodes(nodes):
        pos_id = _first_edge_id(ins, POSITIVE_INPUT_NAMES)
        neg_id = _first_edge_id(ins, NEGATIVE_INPUT_NAMES)
        if pos_id is None and neg_id is None:
            continue
        candidates.append(((pos_id is not None) + (neg_id is not None), pos_id, neg_id))

    # sorted() is stable, so equally ranked nodes keep graph order.
    for _, pos_id, neg_id in sorted(candidates, key=lambda c: c[0], reverse=True):
        if state.positive_id is None and pos_id is not None:
            state.positive_id = pos_id
        if state.negative_id is None and neg_id is not None:
            state.negative_id = neg_id
        if state.ids_complete():
            break


def _apply_conditioning_scan(nodes: Nodes, state: ResolutionState, texts: TextResolver) -> None:
    for _, _, ins in iter_wellformed_nodes(nodes):
        for key, value in ins.items():
            edge = as_edge(value)
            if edge is None:
                continue
            producer = nodes.get(edge.node_id)
            if NodeKind.of(producer) not in TEXT_ENCODING_KINDS:
                continue
            if _looks_negative(str(key), node_title(producer)):
                if state.negative_id is None:
                    state.negative_id = edge.node_id
            elif state.positive_id is None:
                state.positive_id = edge.node_id
        if state.ids_complete():
            return


def _resolve_side(texts: TextResolver, node_id: str | None, side: str) -> str:
    if node_id is None:
        return ""
    try:
        # One visited set per side.
        return texts.text_of(node_id, Walk())
    except Exception as exc:
        logger.warning("Failed to resolve %s prompt from node %s: %s", side, node_id, exc)
        return ""


def _apply_text_resolution(nodes: Nodes, state: ResolutionState, texts: TextResolver) -> None:
    state.positive = _resolve_side(texts, state.positive_id, "positive")
    state.negative = _resolve_side(texts, state.negative_id, "negative")


def _fallback_text(node_id: str, ins: Mapping[str, Any], kind: NodeKind, texts: TextResolver) -> str | None:
    if kind is NodeKind.PLAIN_TEXT_ENCODE and not _is_set(ins.get("text")):
        return None
    return texts.text_of(node_id, Walk())


def _apply_title_fallback(nodes: Nodes, state: ResolutionState, texts: TextResolver) -> None:
    for node_id, node, ins in iter_wellformed_nodes(nodes):
        kind = NodeKind.of(node)
        if kind not in FALLBACK_ENCODER_KINDS:
            continue
        text = _fallback_text(node_id, ins, kind, texts)
        if text is None:
            continue
        if _looks_negative(node_title(node)):
            if not state.negative:
                state.negative = text
        elif not state.positive and node_id not in (state.positive_id, state.negative_id):
            state.positive = text


def _has_chosen_node(state: ResolutionState) -> bool:
    return state.positive_id is not None or state.negative_id is not None


DEFAULT_STAGES: Final[tuple[ResolverStage, ...]] = (
    ResolverStage("channel_match", lambda s: not s.ids_complete(), _apply_channel_match),
    ResolverStage("conditioning_scan", lambda s: not s.ids_complete(), _apply_conditioning_scan),
    ResolverStage("text_resolution", _has_chosen_node, _apply_text_resolution),
    ResolverStage("title_fallback", lambda s: not s.texts_complete(), _apply_title_fallback),
)


def resolve_prompts(graph: Any, stages: tuple[ResolverStage, ...] = DEFAULT_STAGES) -> PromptPair:
    """
    Extract the positive and negative prompts from a decoded prompt graph.

    Never raises: a missing or malformed graph gives an empty pair, and a
    failure inside a stage keeps whatever earlier stages resolved.
    """
    state = ResolutionState()
    if not isinstance(graph, Mapping):
        return state.to_pair()

    try:
        nodes = {str(node_id): node for node_id, node in graph.items()}
        texts = TextResolver(nodes)
        for stage in stages:
            if stage.precondition(state):
                stage.apply(nodes, state, texts)
    except Exception as exc:
        logger.warning("Prompt extraction stopped early: %s", exc, exc_info=True)

    logger.debug("Resolved prompts from nodes pos=%s neg=%s", state.positive_id, state.negative_id)
    return state.to_pair()
