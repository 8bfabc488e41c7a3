"""
Shared error codes.
"""
from enum import Enum


class ErrorCode(str, Enum):
    """Standardized error codes (string enum)."""

    # Client / validation
    INVALID_INPUT = "INVALID_INPUT"
    INVALID_JSON = "INVALID_JSON"
    NOT_FOUND = "NOT_FOUND"

    # Format support
    UNSUPPORTED = "UNSUPPORTED"

    # Image fetch
    FETCH_FAILED = "FETCH_FAILED"
