"""
LoadImageX loggers.

Every module logger lives under `loadimagex.`, writes one tagged line per
record through its own stream handler, and takes its level from LIX_DEBUG,
the single debug switch of the extension.
"""
import logging
import os
from typing import Final

DEBUG_ENV: Final[str] = "LIX_DEBUG"
LOGGER_ROOT: Final[str] = "loadimagex"

_LEVEL_TAGS: Final[dict[str, str]] = {
    "DEBUG": "🔍",
    "INFO": "ℹ️",
    "WARNING": "⚠️",
    "ERROR": "❌",
    "CRITICAL": "🔥",
}
_PACKAGE_ANCHORS: Final[tuple[str, ...]] = ("lix_backend", "lix_shared")


def debug_enabled() -> bool:
    """True when LIX_DEBUG asks for verbose extraction logs."""
    return os.environ.get(DEBUG_ENV, "").strip().lower() in {"1", "true", "yes", "on"}


class LevelTagFormatter(logging.Formatter):
    """`🖼️ LoadImageX [⚠️] features.loader.service: message`"""

    def __init__(self) -> None:
        super().__init__("🖼️ LoadImageX [%(level_tag)s] %(name)s: %(message)s")

    def format(self, record: logging.LogRecord) -> str:
        record.level_tag = _LEVEL_TAGS.get(record.levelname, "🖼️")
        return super().format(record)


def _short_name(module: str) -> str:
    # "<custom_nodes pkg>.lix_backend.features.x" and "lix_backend.features.x" share a name.
    parts = module.split(".")
    for anchor in _PACKAGE_ANCHORS:
        if anchor in parts:
            return ".".join(parts[parts.index(anchor) + 1:]) or anchor
    return "main" if module == "__main__" else module


def get_logger(name: str) -> logging.Logger:
    logger = logging.getLogger(f"{LOGGER_ROOT}.{_short_name(name)}")
    if not logger.handlers:
        handler = logging.StreamHandler()
        handler.setFormatter(LevelTagFormatter())
        logger.addHandler(handler)
        logger.setLevel(logging.DEBUG if debug_enabled() else logging.INFO)
        logger.propagate = False
    return logger
