"""
Lenient decoding of the ComfyUI "prompt" metadata value.

Python's `json.dumps` writes float NaN as a bare `NaN`, which strict JSON
parsers reject. The repair pass rewrites those values to null so the decoded
graph never carries float("nan").
"""

from __future__ import annotations

import json
import re
from typing import Any

from ...shared import ErrorCode, Result, get_logger

logger = get_logger(__name__)

_NAN_VALUE_RE = re.compile(r":\s*NaN")


def clean_json_string(json_string: str | None) -> str | None:
    """Rewrite every `: NaN` value to `: null`; empty input gives None."""
    if not json_string:
        return None
    return _NAN_VALUE_RE.sub(": null", json_string)


def parse_prompt_graph(raw: str | None) -> Result[dict[str, Any]]:
    """
    Repair and decode a "prompt" metadata value into a graph mapping.

    Returns INVALID_JSON when the text is empty, not JSON after repair, or
    not a JSON object.
    """
    cleaned = clean_json_string(raw)
    if cleaned is None:
        return Result.Err(ErrorCode.INVALID_JSON, "Empty prompt metadata")
    try:
        graph = json.loads(cleaned)
    except json.JSONDecodeError as exc:
        logger.debug("Prompt metadata is not valid JSON: %s", exc)
        return Result.Err(ErrorCode.INVALID_JSON, f"Invalid prompt JSON at line {exc.lineno} column {exc.colno}")
    if not isinstance(graph, dict):
        return Result.Err(ErrorCode.INVALID_JSON, f"Prompt metadata is a {type(graph).__name__}, expected an object")
    return Result.Ok(graph)
