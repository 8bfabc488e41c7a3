import pytest

from lix_backend.features.geninfo import PromptPair
from lix_backend.features.loader import ImageFetchError, extract_prompts_from_bytes, load_prompts
from lix_backend.shared import ErrorCode


class _FakeFetcher:
    def __init__(self, data=None, exc=None):
        self.data = data
        self.exc = exc
        self.requested = []

    async def fetch_image_bytes(self, filename):
        self.requested.append(filename)
        if self.exc is not None:
            raise self.exc
        return self.data


def test_extract_prompts_from_png_bytes(comfy_png):
    res = extract_prompts_from_bytes(comfy_png)
    assert res.ok
    assert res.data == PromptPair("a watercolor fox in the snow", "blurry, lowres")
    assert res.meta["has_prompt"] is True
    assert res.meta["keys"] == ["prompt", "workflow"]


def test_extract_prompts_repairs_nan_values(build_png, text_chunk):
    raw = '{"1": {"class_type": "CLIPTextEncode", "inputs": {"text": "nan safe", "strength": NaN}}}'
    res = extract_prompts_from_bytes(build_png(text_chunk("prompt", raw)))
    assert res.ok
    assert res.data.positive == "nan safe"


def test_extract_prompts_without_prompt_key(build_png, text_chunk):
    res = extract_prompts_from_bytes(build_png(text_chunk("parameters", "a1111 style")))
    assert res.ok
    assert res.data == PromptPair()
    assert res.meta["has_prompt"] is False


def test_extract_prompts_not_a_png():
    res = extract_prompts_from_bytes(b"\xff\xd8\xff\xe0 jpeg data")
    assert not res.ok
    assert res.code == "UNSUPPORTED"


def test_extract_prompts_empty_input():
    assert extract_prompts_from_bytes(b"").code == "INVALID_INPUT"
    assert extract_prompts_from_bytes(None).code == "INVALID_INPUT"


def test_extract_prompts_invalid_json(build_png, text_chunk):
    res = extract_prompts_from_bytes(build_png(text_chunk("prompt", "{not json")))
    assert not res.ok
    assert res.code == "INVALID_JSON"


@pytest.mark.asyncio
async def test_load_prompts_fetches_named_image(comfy_png):
    fetcher = _FakeFetcher(data=comfy_png)
    res = await load_prompts("fox.png", fetcher)
    assert res.ok
    assert res.data.negative == "blurry, lowres"
    assert fetcher.requested == ["fox.png"]


@pytest.mark.asyncio
async def test_load_prompts_keeps_fetch_error_code():
    fetcher = _FakeFetcher(exc=ImageFetchError(ErrorCode.NOT_FOUND, "File not found: gone.png"))
    res = await load_prompts("gone.png", fetcher)
    assert res.code == "NOT_FOUND"
    assert res.error == "File not found: gone.png"


@pytest.mark.asyncio
async def test_load_prompts_other_failures_are_fetch_failed():
    fetcher = _FakeFetcher(exc=OSError("connection refused to /srv/comfy/input/x.png"))
    res = await load_prompts("x.png", fetcher)
    assert not res.ok
    assert res.code == "FETCH_FAILED"
    assert "connection refused" in res.error
    assert "/srv/comfy" not in res.error


@pytest.mark.asyncio
async def test_load_prompts_requires_filename():
    fetcher = _FakeFetcher()
    res = await load_prompts("", fetcher)
    assert res.code == "INVALID_INPUT"
    assert fetcher.requested == []
