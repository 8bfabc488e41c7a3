"""
Core utilities for route handlers.
"""
from .request_body import _read_image_body
from .response import _json_response

__all__ = ["_json_response", "_read_image_body"]
