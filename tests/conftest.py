import io
import json
import struct
import sys
import zlib
from pathlib import Path

import pytest

REPO_ROOT = Path(__file__).resolve().parents[1]

if str(REPO_ROOT) not in sys.path:
    sys.path.insert(0, str(REPO_ROOT))

PNG_SIGNATURE = b"\x89PNG\r\n\x1a\n"


def _chunk(chunk_type: bytes, payload: bytes) -> bytes:
    crc = zlib.crc32(chunk_type + payload) & 0xFFFFFFFF
    return struct.pack(">I", len(payload)) + chunk_type + payload + struct.pack(">I", crc)


def _text_chunk(keyword: str, value: str, chunk_type: bytes = b"tEXt") -> bytes:
    return _chunk(chunk_type, keyword.encode("utf-8") + b"\x00" + value.encode("utf-8"))


def _build_png(*chunks: bytes, with_iend: bool = True) -> bytes:
    ihdr = _chunk(b"IHDR", struct.pack(">IIBBBBB", 1, 1, 8, 2, 0, 0, 0))
    data = PNG_SIGNATURE + ihdr + b"".join(chunks)
    if with_iend:
        data += _chunk(b"IEND", b"")
    return data


@pytest.fixture
def png_chunk():
    return _chunk


@pytest.fixture
def text_chunk():
    return _text_chunk


@pytest.fixture
def build_png():
    return _build_png


@pytest.fixture
def comfy_prompt_graph():
    # Checkpoint -> two CLIPTextEncode -> KSampler -> SaveImage
    return {
        "4": {"class_type": "CheckpointLoaderSimple", "inputs": {"ckpt_name": "sdxl.safetensors"}},
        "6": {
            "class_type": "CLIPTextEncode",
            "inputs": {"text": "a watercolor fox in the snow", "clip": ["4", 1]},
            "_meta": {"title": "CLIP Text Encode (Prompt)"},
        },
        "7": {
            "class_type": "CLIPTextEncode",
            "inputs": {"text": "blurry, lowres", "clip": ["4", 1]},
            "_meta": {"title": "CLIP Text Encode (Negative)"},
        },
        "5": {"class_type": "EmptyLatentImage", "inputs": {"width": 1024, "height": 1024, "batch_size": 1}},
        "3": {
            "class_type": "KSampler",
            "inputs": {
                "model": ["4", 0],
                "positive": ["6", 0],
                "negative": ["7", 0],
                "latent_image": ["5", 0],
                "seed": 42,
                "steps": 20,
                "cfg": 7.0,
                "sampler_name": "euler",
                "scheduler": "normal",
                "denoise": 1.0,
            },
        },
        "9": {"class_type": "SaveImage", "inputs": {"images": ["8", 0], "filename_prefix": "ComfyUI"}},
    }


@pytest.fixture
def pillow_png():
    """Encode a real 4x4 PNG with Pillow, storing `text` entries as tEXt (or iTXt)."""
    from PIL import Image
    from PIL.PngImagePlugin import PngInfo

    def _encode(text: dict[str, str], *, itxt: bool = False) -> bytes:
        info = PngInfo()
        for key, value in text.items():
            if itxt:
                info.add_itxt(key, value)
            else:
                info.add_text(key, value)
        buf = io.BytesIO()
        Image.new("RGB", (4, 4), color=(200, 30, 30)).save(buf, format="PNG", pnginfo=info)
        return buf.getvalue()

    return _encode


@pytest.fixture
def comfy_png(build_png, text_chunk, comfy_prompt_graph):
    workflow = {"nodes": [{"id": 3, "type": "KSampler"}], "links": []}
    return build_png(
        text_chunk("prompt", json.dumps(comfy_prompt_graph)),
        text_chunk("workflow", json.dumps(workflow)),
    )
