"""Prompt graph traversal."""

from .graph_links import Edge, Literal, as_edge, classify_input
from .node_kinds import NodeKind, TextResolver
from .prompt_resolver import DEFAULT_STAGES, PromptPair, ResolutionState, ResolverStage, resolve_prompts

__all__ = [
    "DEFAULT_STAGES",
    "Edge",
    "Literal",
    "NodeKind",
    "PromptPair",
    "ResolutionState",
    "ResolverStage",
    "TextResolver",
    "as_edge",
    "classify_input",
    "resolve_prompts",
]
