"""
The two prompt-recovering image loaders.

Each node offers the input-directory image picker (with ComfyUI's upload
button) and two editable prompt widgets. The web extension in `js/` fills
the widgets from GET /lix/prompts whenever the picked image changes; on
execution the widget text flows out, and a widget left empty falls back to
the prompt recovered from the image metadata.
"""
from __future__ import annotations

from typing import Any, ClassVar

from .features.geninfo import PromptPair
from .features.loader import ImageFetchError, extract_prompts_from_bytes, list_input_images, resolve_input_file
from .shared import get_logger

logger = get_logger(__name__)


class LoadImageX:
    ACCEPTED_SUFFIXES: ClassVar[tuple[str, ...]] = (".png", ".jpg", ".jpeg", ".webp")

    RETURN_TYPES = ("STRING", "STRING")
    RETURN_NAMES = ("positive_prompt", "negative_prompt")
    FUNCTION = "load"
    CATEGORY = "image"

    @classmethod
    def INPUT_TYPES(cls) -> dict[str, Any]:
        return {
            "required": {
                "image": (list_input_images(cls.ACCEPTED_SUFFIXES), {"image_upload": True}),
                "positive_prompt": ("STRING", {"multiline": True, "default": ""}),
                "negative_prompt": ("STRING", {"multiline": True, "default": ""}),
            }
        }

    @classmethod
    def VALIDATE_INPUTS(cls, image: str, **_: Any) -> bool | str:
        if not str(image).lower().endswith(cls.ACCEPTED_SUFFIXES):
            return f"Unsupported file type: {image} (expected {', '.join(cls.ACCEPTED_SUFFIXES)})"
        try:
            resolve_input_file(image)
        except ImageFetchError as exc:
            return str(exc)
        return True

    @classmethod
    def IS_CHANGED(cls, image: str, **_: Any) -> str:
        # Re-run when the file is replaced under the same name.
        try:
            stat = resolve_input_file(image).stat()
        except (ImageFetchError, OSError):
            return ""
        return f"{stat.st_mtime_ns}:{stat.st_size}"

    def load(self, image: str, positive_prompt: str = "", negative_prompt: str = "") -> tuple[str, str]:
        if positive_prompt and negative_prompt:
            return positive_prompt, negative_prompt
        recovered = self._recover(image)
        return positive_prompt or recovered.positive, negative_prompt or recovered.negative

    @staticmethod
    def _recover(image: str) -> PromptPair:
        try:
            data = resolve_input_file(image).read_bytes()
        except (ImageFetchError, OSError) as exc:
            logger.warning("Cannot read %s: %s", image, exc)
            return PromptPair()
        res = extract_prompts_from_bytes(data)
        if not res.ok or res.data is None:
            logger.debug("No prompts in %s: [%s] %s", image, res.code, res.error)
            return PromptPair()
        return res.data


class OnlyLoadImagesWithMetadata(LoadImageX):
    """LoadImageX restricted to PNG files, the only format carrying ComfyUI text chunks."""

    ACCEPTED_SUFFIXES: ClassVar[tuple[str, ...]] = (".png",)


NODE_CLASS_MAPPINGS = {
    "LoadImageX": LoadImageX,
    "OnlyLoadImagesWithMetadata": OnlyLoadImagesWithMetadata,
}

NODE_DISPLAY_NAME_MAPPINGS = {
    "LoadImageX": "Load Image (with prompts)",
    "OnlyLoadImagesWithMetadata": "Load Image with Metadata (PNG only)",
}
