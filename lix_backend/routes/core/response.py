"""
JSON envelope for route handlers.
"""
import math
from typing import Any

from aiohttp import web

from ...shared import Result


def _json_response(result: Result, status: int = 200) -> web.Response:
    """
    Serialize a Result as {ok, data, error, code, meta}.

    Validation failures still answer 200; `ok` and `code` carry the outcome.
    """
    envelope = {
        "ok": result.ok,
        "data": result.data,
        "error": result.error,
        "code": result.code,
        "meta": result.meta,
    }
    return web.json_response(_finite(envelope), status=status)


def _finite(value: Any) -> Any:
    # Strict JSON has no NaN or Infinity.
    if isinstance(value, float) and not math.isfinite(value):
        return None
    if isinstance(value, dict):
        return {key: _finite(item) for key, item in value.items()}
    if isinstance(value, (list, tuple)):
        return [_finite(item) for item in value]
    return value
