"""
LoadImageX - ComfyUI extension
"""

from .lix_backend.nodes import NODE_CLASS_MAPPINGS, NODE_DISPLAY_NAME_MAPPINGS

WEB_DIRECTORY = "./js"

# Register API routes
from .lix_backend.routes import register_all_routes  # noqa: E402

register_all_routes()

__all__ = ["NODE_CLASS_MAPPINGS", "NODE_DISPLAY_NAME_MAPPINGS", "WEB_DIRECTORY"]
