"""
Prompt extraction for image-loader nodes.

Bytes come from a fetcher (`fetch_image_bytes`), go through the PNG text
reader, the "prompt" entry is repaired and decoded, and the graph resolver
produces the positive/negative pair.
"""
from __future__ import annotations

import json
import logging
from typing import Protocol

from ...shared import ErrorCode, Result, get_logger, sanitize_error_message
from ..geninfo import PromptPair, resolve_prompts
from ..metadata import parse_prompt_graph, read_png_text
from .input_files import ImageFetchError

logger = get_logger(__name__)

PROMPT_METADATA_KEY = "prompt"


class ImageFetcher(Protocol):
    async def fetch_image_bytes(self, filename: str) -> bytes: ...


def extract_prompts_from_bytes(data: bytes | None) -> Result[PromptPair]:
    """Run the reader, JSON repair and resolver over raw PNG bytes."""
    if not data:
        return Result.Err(ErrorCode.INVALID_INPUT, "No image data")

    metadata = read_png_text(data)
    if metadata is None:
        return Result.Err(ErrorCode.UNSUPPORTED, "Not a readable PNG file")

    if logger.isEnabledFor(logging.DEBUG):
        logger.debug("Metadata: %s", json.dumps(metadata, indent=2, ensure_ascii=False))

    raw_prompt = metadata.get(PROMPT_METADATA_KEY)
    if not raw_prompt:
        return Result.Ok(PromptPair(), has_prompt=False, keys=sorted(metadata))

    graph_res = parse_prompt_graph(raw_prompt)
    if not graph_res.ok or graph_res.data is None:
        return Result.Err(graph_res.code, graph_res.error or "Invalid prompt metadata")

    prompts = resolve_prompts(graph_res.data)
    if prompts.positive:
        logger.debug("Positive prompt: %s", prompts.positive)
    if prompts.negative:
        logger.debug("Negative prompt: %s", prompts.negative)
    return Result.Ok(prompts, has_prompt=True, keys=sorted(metadata))


async def load_prompts(filename: str, fetcher: ImageFetcher) -> Result[PromptPair]:
    """
    Fetch `filename` through `fetcher` and extract its prompts.

    ImageFetchError keeps its own code (INVALID_INPUT, NOT_FOUND); any other
    fetch failure is reported as FETCH_FAILED.
    """
    if not filename:
        return Result.Err(ErrorCode.INVALID_INPUT, "Missing filename")
    try:
        data = await fetcher.fetch_image_bytes(filename)
    except ImageFetchError as exc:
        logger.debug("Cannot fetch %s: [%s] %s", filename, exc.code.value, exc)
        return Result.Err(exc.code, str(exc))
    except Exception as exc:
        logger.warning("Error fetching %s: %s", filename, exc)
        return Result.Err(ErrorCode.FETCH_FAILED, sanitize_error_message(exc, "Failed to fetch image"))
    return extract_prompts_from_bytes(data)
