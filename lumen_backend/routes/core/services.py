"""
Access to the services dict attached to the aiohttp application.
"""
from typing import Any

from aiohttp import web

from lumen_backend.shared import ErrorCode, Result

SERVICES_KEY: web.AppKey[dict] = web.AppKey("lumen_services", dict)


def _require_service(request: web.Request, name: str) -> Result[Any]:
    services = request.app.get(SERVICES_KEY) or {}
    service = services.get(name)
    if service is None:
        return Result.Err(ErrorCode.SERVICE_UNAVAILABLE, f"Service '{name}' is not available")
    return Result.Ok(service)
