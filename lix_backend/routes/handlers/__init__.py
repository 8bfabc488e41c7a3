"""Route handler modules."""
from .prompts import register_prompt_routes

__all__ = ["register_prompt_routes"]
