"""Prompt extraction for image-loader nodes."""

from .input_files import ImageFetchError, InputDirectoryFetcher, list_input_images, resolve_input_file
from .service import ImageFetcher, extract_prompts_from_bytes, load_prompts

__all__ = [
    "ImageFetchError",
    "ImageFetcher",
    "InputDirectoryFetcher",
    "extract_prompts_from_bytes",
    "list_input_images",
    "load_prompts",
    "resolve_input_file",
]
