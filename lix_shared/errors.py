"""
Error text that is safe to hand to HTTP clients: one line, bounded length,
and no filesystem locations.
"""
from __future__ import annotations

import os
import re
from typing import Final

MAX_DETAIL_CHARS: Final[int] = 200

_PATH_PATTERNS: Final[tuple[re.Pattern[str], ...]] = (
    re.compile(r"[A-Za-z]:\\\S+"),
    # Absolute POSIX paths, but not the path part of a URL.
    re.compile(r"(?<![\w:/?&=#%])/(?!/)[^\s#?]+"),
)


def sanitize_error_message(exc: object, fallback: str) -> str:
    """`fallback`, followed by the masked exception text when there is any."""
    fallback = fallback or "An error occurred"
    detail = "" if exc is None else str(exc)

    cwd = os.getcwd()
    if len(cwd) > 1:
        detail = detail.replace(cwd, "[cwd]")
    for pattern in _PATH_PATTERNS:
        detail = pattern.sub("[path]", detail)
    detail = " ".join(detail.split())

    return f"{fallback}: {detail[:MAX_DETAIL_CHARS]}" if detail else fallback
