"""
Configuration for LoadImageX, read from the environment at import time.

  LIX_INPUT_DIRECTORY   images served by GET /lix/prompts and listed by the loader nodes
  LIX_MAX_UPLOAD_MB     largest image body POST /lix/prompts accepts (1-1024, default 64)

LIX_DEBUG is read by the logger (lix_shared.log).
"""
from __future__ import annotations

import os
import sys
from pathlib import Path

from .shared import get_logger

logger = get_logger(__name__)


def _env_value(name: str) -> str | None:
    raw = os.getenv(name)
    if raw is None or not raw.strip():
        return None
    return raw.strip()


def _env_int(name: str, default: int, *, min_value: int, max_value: int) -> int:
    raw = _env_value(name)
    if raw is None:
        return default
    try:
        value = int(raw)
    except ValueError:
        logger.warning("%s=%r is not an integer, using %s", name, raw, default)
        return default
    clamped = min(max(value, min_value), max_value)
    if clamped != value:
        logger.warning("%s=%s outside [%s, %s], clamped to %s", name, value, min_value, max_value, clamped)
    return clamped


def _resolve_input_root() -> Path:
    env_path = _env_value("LIX_INPUT_DIRECTORY")
    if env_path:
        return Path(env_path).expanduser().resolve()

    # Use ComfyUI's folder_paths only when the host already loaded it.
    fp_mod = sys.modules.get("folder_paths")
    if fp_mod is not None and hasattr(fp_mod, "get_input_directory"):
        try:
            return Path(fp_mod.get_input_directory()).resolve()
        except (TypeError, OSError) as exc:
            logger.warning("folder_paths.get_input_directory() failed: %s, using fallback", exc)

    for parent in Path(__file__).resolve().parents:
        if (parent / "main.py").is_file() and (parent / "folder_paths.py").is_file():
            return parent / "input"
    return (Path.cwd() / "input").resolve()


MAX_UPLOAD_BYTES = _env_int("LIX_MAX_UPLOAD_MB", 64, min_value=1, max_value=1024) * 1024 * 1024


def get_runtime_input_root() -> Path:
    """Input directory, re-evaluated per call so a late-loaded folder_paths is honoured."""
    return _resolve_input_root()
