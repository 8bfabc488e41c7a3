"""
Prompt extraction endpoints.

  POST /lix/prompts                                   raw PNG body or multipart "image"
  GET  /lix/prompts?filename=<name>&subfolder=<sub>   file from the input directory

Both return a `Result` envelope whose data is {"positive": ..., "negative": ...}.
The loader nodes' web extension calls the GET form whenever the picked image changes.
"""
from __future__ import annotations

from aiohttp import web

from ... import config
from ...features.geninfo import PromptPair
from ...features.loader import InputDirectoryFetcher, extract_prompts_from_bytes, load_prompts
from ..core import _json_response, _read_image_body


def register_prompt_routes(routes: web.RouteTableDef) -> None:
    @routes.post("/lix/prompts")
    async def extract_prompts(request: web.Request) -> web.Response:
        body = await _read_image_body(request, max_bytes=config.MAX_UPLOAD_BYTES)
        if not body.ok or body.data is None:
            return _json_response(body)
        res = extract_prompts_from_bytes(body.data)
        return _json_response(res.map(PromptPair.to_dict))

    @routes.get("/lix/prompts")
    async def prompts_for_input_file(request: web.Request) -> web.Response:
        fetcher = InputDirectoryFetcher(subfolder=request.query.get("subfolder"))
        res = await load_prompts(request.query.get("filename", ""), fetcher)
        return _json_response(res.map(PromptPair.to_dict))
