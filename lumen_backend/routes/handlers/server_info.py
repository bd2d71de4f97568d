"""
Server info endpoints.
"""
from aiohttp import web

from ..core import _client_error, _json_response, _require_service


def register_server_info_routes(routes: web.RouteTableDef) -> None:
    """Register disk usage and hardware codec routes."""

    @routes.get("/api/server-info")
    async def get_server_info(request: web.Request) -> web.Response:
        svc = _require_service(request, "server_info")
        if not svc.ok:
            return _json_response(svc)
        result = await svc.data.get_info()
        if not result.ok:
            return _json_response(_client_error(result, "Disk usage unavailable"))
        return _json_response(result)

    @routes.get("/api/server-info/codecs")
    async def get_server_codecs(request: web.Request) -> web.Response:
        svc = _require_service(request, "server_info")
        if not svc.ok:
            return _json_response(svc)
        result = await svc.data.get_codecs()
        if not result.ok:
            return _json_response(_client_error(result, "Codec discovery failed"))
        return _json_response(result)
