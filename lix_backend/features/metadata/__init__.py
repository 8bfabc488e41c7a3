"""PNG text-chunk metadata reading."""

from .png_text import PNG_SIGNATURE, read_png_text
from .prompt_json import clean_json_string, parse_prompt_graph

__all__ = [
    "PNG_SIGNATURE",
    "clean_json_string",
    "parse_prompt_graph",
    "read_png_text",
]
