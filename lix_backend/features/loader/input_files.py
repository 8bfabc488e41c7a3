"""
Images in the host's input directory, addressed the way ComfyUI's image
picker names them: a bare file name plus an optional relative subfolder.
"""
from __future__ import annotations

import asyncio
from pathlib import Path

from ... import config
from ...shared import ErrorCode


class ImageFetchError(RuntimeError):
    """A named image could not be fetched; `code` is the ErrorCode to report."""

    def __init__(self, code: ErrorCode, message: str):
        super().__init__(message)
        self.code = code


def _relative_subfolder(subfolder: str | None) -> Path:
    raw = str(subfolder or "").strip()
    rel = Path(raw)
    if "\x00" in raw or rel.is_absolute() or rel.drive or ".." in rel.parts:
        raise ImageFetchError(ErrorCode.INVALID_INPUT, "Invalid subfolder")
    return rel


def resolve_input_file(filename: str | None, subfolder: str | None = None, root: Path | None = None) -> Path:
    """
    Path of `filename` inside the input directory.

    Raises ImageFetchError: INVALID_INPUT for names carrying directory parts
    or a subfolder escaping the root, NOT_FOUND when no such file exists.
    """
    raw = str(filename or "").strip()
    name = Path(raw).name
    if not name or name != raw or "\x00" in name:
        raise ImageFetchError(ErrorCode.INVALID_INPUT, "Invalid filename")

    base = (root or config.get_runtime_input_root()).resolve()
    candidate = base / _relative_subfolder(subfolder) / name
    try:
        resolved = candidate.resolve(strict=True)
    except (OSError, RuntimeError):
        raise ImageFetchError(ErrorCode.NOT_FOUND, f"File not found: {name}") from None
    if not resolved.is_relative_to(base) or not resolved.is_file():
        raise ImageFetchError(ErrorCode.NOT_FOUND, f"File not found: {name}")
    return resolved


def list_input_images(suffixes: tuple[str, ...], root: Path | None = None) -> list[str]:
    """Sorted names of the top-level input files ending in one of `suffixes`."""
    base = root or config.get_runtime_input_root()
    try:
        entries = list(base.iterdir())
    except OSError:
        return []
    return sorted(p.name for p in entries if p.is_file() and p.suffix.lower() in suffixes)


class InputDirectoryFetcher:
    """`fetch_image_bytes` over the input directory, for `load_prompts`."""

    def __init__(self, subfolder: str | None = None, root: Path | None = None):
        self.subfolder = subfolder
        self.root = root

    async def fetch_image_bytes(self, filename: str) -> bytes:
        path = resolve_input_file(filename, self.subfolder, self.root)
        return await asyncio.to_thread(path.read_bytes)
