"""
Read the textual metadata chunks (tEXt / iTXt) of a PNG file.

ComfyUI stores its API graph under the "prompt" keyword and the editor
graph under "workflow". The reader returns every keyword it finds so callers
can pick what they need.
"""

from __future__ import annotations

import struct
from typing import Final

from ...shared import get_logger

logger = get_logger(__name__)

PNG_SIGNATURE: Final[bytes] = b"\x89PNG\r\n\x1a\n"

_TEXT_CHUNK_TYPES: Final[frozenset[bytes]] = frozenset({b"tEXt", b"iTXt"})
_END_CHUNK_TYPE: Final[bytes] = b"IEND"
_CHUNK_HEADER = struct.Struct(">I4s")
_CRC_SIZE: Final[int] = 4


class _TruncatedChunk(Exception):
    pass


def read_png_text(buffer: bytes | bytearray | memoryview | None) -> dict[str, str] | None:
    """
    Parse the text chunks of a PNG byte buffer.

    Returns a keyword -> text mapping (last occurrence of a keyword wins), or
    None when the buffer is not a PNG or a chunk runs past the end of the
    buffer. Never raises.
    """
    if buffer is None:
        return None
    data = bytes(buffer)
    if len(data) < len(PNG_SIGNATURE) or data[: len(PNG_SIGNATURE)] != PNG_SIGNATURE:
        logger.debug("Not a valid PNG file (signature mismatch)")
        return None

    try:
        return _read_chunks(data)
    except _TruncatedChunk as exc:
        logger.debug("Truncated PNG container: %s", exc)
        return None


def _read_chunks(data: bytes) -> dict[str, str]:
    metadata: dict[str, str] = {}
    offset = len(PNG_SIGNATURE)
    total = len(data)

    while offset < total:
        if offset + _CHUNK_HEADER.size > total:
            raise _TruncatedChunk(f"chunk header at offset {offset} exceeds buffer ({total} bytes)")
        length, chunk_type = _CHUNK_HEADER.unpack_from(data, offset)
        offset += _CHUNK_HEADER.size

        if chunk_type in _TEXT_CHUNK_TYPES:
            if offset + length > total:
                raise _TruncatedChunk(f"{chunk_type!r} payload of {length} bytes exceeds buffer")
            entry = _decode_text_chunk(chunk_type, data[offset : offset + length])
            if entry is not None:
                keyword, value = entry
                metadata[keyword] = value

        # Data and CRC are skipped for every chunk, text or not.
        offset += length + _CRC_SIZE
        if chunk_type == _END_CHUNK_TYPE:
            break

    return metadata


def _decode_text_chunk(chunk_type: bytes, payload: bytes) -> tuple[str, str] | None:
    text = payload.decode("utf-8", errors="replace")
    keyword, sep, value = text.partition("\0")
    if not sep:
        return None
    if chunk_type == b"iTXt":
        value = _strip_itxt_header(value)
    return keyword, value


def _strip_itxt_header(value: str) -> str:
    # iTXt: keyword\0 flag method lang\0 translated\0 text
    if len(value) < 2 or value[0] not in ("\0", "\x01"):
        return value
    if value[0] == "\x01":
        # Compressed payloads are left as-is.
        return value
    parts = value[2:].split("\0", 2)
    if len(parts) != 3:
        return value
    return parts[2]

