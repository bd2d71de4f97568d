"""
Route registration.
Builds the aiohttp application with every route handler and the services dict.
"""

from __future__ import annotations

from aiohttp import web

from lumen_backend.deps import build_services

from .core import SERVICES_KEY, request_context_middleware
from .handlers import register_download_routes, register_library_routes, register_server_info_routes


def register_all_routes(routes: web.RouteTableDef) -> web.RouteTableDef:
    register_server_info_routes(routes)
    register_library_routes(routes)
    register_download_routes(routes)
    return routes


def create_app(services: dict) -> web.Application:
    """
    Build the application around an already-built services dict.

    Handlers read services from `app[SERVICES_KEY]`; nothing is looked up
    from module globals.
    """
    app = web.Application(middlewares=[request_context_middleware])
    app[SERVICES_KEY] = services
    app.add_routes(register_all_routes(web.RouteTableDef()))
    return app


async def init_app(media_location: str | None = None, device_dir: str | None = None) -> web.Application:
    """Build services and the application (for `web.run_app`)."""
    services_res = await build_services(media_location=media_location, device_dir=device_dir)
    if not services_res.ok or services_res.data is None:
        raise RuntimeError(f"Service initialization failed: {services_res.error}")
    return create_app(services_res.data)
