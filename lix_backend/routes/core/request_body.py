"""
Bounded reading of uploaded image bodies.

Accepts either a raw request body or a multipart form with an "image" field.
Never raises to handlers (returns Result).
"""

from __future__ import annotations

from aiohttp import web

from ...shared import ErrorCode, Result

REQUEST_STREAM_CHUNK_BYTES = 64 * 1024
IMAGE_FIELD_NAME = "image"


async def _read_image_body(request: web.Request, *, max_bytes: int) -> Result[bytes]:
    length_error = _content_length_error(request, max_bytes)
    if length_error is not None:
        return length_error
    try:
        if request.content_type.startswith("multipart/"):
            return await _read_multipart_image(request, max_bytes)
        return await _read_stream_limited(request.content.iter_chunked(REQUEST_STREAM_CHUNK_BYTES), max_bytes)
    except Exception as exc:
        return Result.Err(ErrorCode.INVALID_INPUT, f"Failed to read request body: {exc}")


def _content_length_error(request: web.Request, limit: int) -> Result[bytes] | None:
    size = request.content_length
    if size is None or size <= limit:
        return None
    return Result.Err(ErrorCode.INVALID_INPUT, f"Image too large ({size} > {limit})", limit=limit, size=size)


async def _read_multipart_image(request: web.Request, limit: int) -> Result[bytes]:
    reader = await request.multipart()
    while True:
        field = await reader.next()
        if field is None:
            return Result.Err(ErrorCode.INVALID_INPUT, f"Expected '{IMAGE_FIELD_NAME}' field")
        if getattr(field, "name", None) != IMAGE_FIELD_NAME:
            continue
        return await _read_stream_limited(_iter_field_chunks(field), limit)


async def _iter_field_chunks(field):
    while True:
        chunk = await field.read_chunk(size=REQUEST_STREAM_CHUNK_BYTES)
        if not chunk:
            return
        yield chunk


async def _read_stream_limited(chunks, limit: int) -> Result[bytes]:
    buf = bytearray()
    async for chunk in chunks:
        if not chunk:
            continue
        buf.extend(chunk)
        if len(buf) > limit:
            return Result.Err(ErrorCode.INVALID_INPUT, f"Image too large (> {limit})", limit=limit, size=len(buf))
    if not buf:
        return Result.Err(ErrorCode.INVALID_INPUT, "Empty request body")
    return Result.Ok(bytes(buf))
