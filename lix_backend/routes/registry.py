"""
Route registration.
Registers the LoadImageX handlers with ComfyUI's PromptServer or a plain aiohttp app.
"""

from __future__ import annotations

from collections.abc import Awaitable, Callable
from typing import ClassVar, Protocol, cast

from aiohttp import web

from ..shared import get_logger
from .handlers import register_prompt_routes

API_PREFIX = "/lix/"
_APP_KEY_MIDDLEWARES_INSTALLED: web.AppKey[bool] = web.AppKey("_lix_middlewares_installed", bool)
_APP_KEY_ROUTES_REGISTERED: web.AppKey[bool] = web.AppKey("_lix_routes_registered", bool)


class _PromptServerInstance(Protocol):
    routes: web.RouteTableDef


class _PromptServer(Protocol):
    instance: ClassVar[_PromptServerInstance]


class _PromptServerInstanceStub:
    routes: web.RouteTableDef = web.RouteTableDef()


class _PromptServerStub:
    instance: ClassVar[_PromptServerInstanceStub] = _PromptServerInstanceStub()


def _get_prompt_server() -> type[_PromptServer]:
    # Never `import server` here: outside ComfyUI that pulls in the whole app.
    import sys

    server_mod = sys.modules.get("server")
    if server_mod is None or not hasattr(server_mod, "PromptServer"):
        return cast(type[_PromptServer], _PromptServerStub)
    return cast(type[_PromptServer], server_mod.PromptServer)


logger = get_logger(__name__)
_ROUTES_REGISTERED = False


@web.middleware
async def security_headers_middleware(
    request: web.Request,
    handler: Callable[[web.Request], Awaitable[web.StreamResponse]],
) -> web.StreamResponse:
    """Apply no-store / nosniff headers to LoadImageX API responses only."""
    response = await handler(request)
    if not (request.path or "").startswith(API_PREFIX):
        return response
    response.headers.setdefault("X-Content-Type-Options", "nosniff")
    response.headers.setdefault("Cache-Control", "no-store, no-cache, must-revalidate")
    return response


def register_all_routes() -> web.RouteTableDef:
    """Register every handler on the PromptServer route table (once)."""
    global _ROUTES_REGISTERED
    routes = _get_prompt_server().instance.routes
    if _ROUTES_REGISTERED:
        logger.debug("register_all_routes() skipped: already registered")
        return routes

    register_prompt_routes(routes)
    logger.debug("Routes registered: POST %sprompts, GET %sprompts", API_PREFIX, API_PREFIX)

    _ROUTES_REGISTERED = True
    return routes


def register_routes(app: web.Application) -> None:
    """
    Register routes onto an aiohttp application.

    Used for tests and standalone servers; inside ComfyUI the PromptServer
    route table is populated by `register_all_routes()`.
    """
    if app.get(_APP_KEY_ROUTES_REGISTERED):
        logger.debug("register_routes(app) skipped: routes already registered on this app")
        return

    if not app.get(_APP_KEY_MIDDLEWARES_INSTALLED):
        app.middlewares.insert(0, security_headers_middleware)
        app[_APP_KEY_MIDDLEWARES_INSTALLED] = True

    routes = web.RouteTableDef()
    register_prompt_routes(routes)
    app.add_routes(routes)
    app[_APP_KEY_ROUTES_REGISTERED] = True
