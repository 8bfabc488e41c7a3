"""Shared utilities for LoadImageX."""
from .errors import sanitize_error_message
from .log import debug_enabled, get_logger
from .result import Result
from .types import ErrorCode

__all__ = [
    "ErrorCode",
    "Result",
    "debug_enabled",
    "get_logger",
    "sanitize_error_message",
]
