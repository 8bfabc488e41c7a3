"""Backend-facing alias for shared utilities.

ComfyUI can load custom nodes either as a pseudo-package via file paths under
`custom_nodes/`, or as top-level modules when running tests/scripts, so the
shared package is imported relative first and absolute second.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    import lix_shared as _root_shared
else:
    try:
        # When loaded by ComfyUI as a package (e.g. <extension>.lix_backend.*)
        from .. import lix_shared as _root_shared  # type: ignore
    except Exception:
        # When running tests or scripts that import `lix_backend.*` as a top-level module
        import lix_shared as _root_shared  # type: ignore

Result = _root_shared.Result
ErrorCode = _root_shared.ErrorCode
get_logger = _root_shared.get_logger
sanitize_error_message = _root_shared.sanitize_error_message

__all__ = [
    "Result",
    "ErrorCode",
    "get_logger",
    "sanitize_error_message",
]
