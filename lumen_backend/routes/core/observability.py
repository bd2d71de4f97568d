"""
Request-id correlation middleware.
"""
import time
from uuid import uuid4

from aiohttp import web

from lumen_backend.shared import get_logger, request_id_var

logger = get_logger(__name__)


def _get_request_id(request: web.Request) -> str:
    rid = (request.headers.get("X-Request-ID") or "").strip()[:128]
    return rid or uuid4().hex


@web.middleware
async def request_context_middleware(request: web.Request, handler):
    """Attach a request id to log records and the response."""
    rid = _get_request_id(request)
    request["lumen_request_id"] = rid
    token = request_id_var.set(rid)
    start = time.perf_counter()
    status = 500
    try:
        response = await handler(request)
        status = response.status
        response.headers["X-Request-ID"] = rid
        return response
    except web.HTTPException as exc:
        status = exc.status
        exc.headers["X-Request-ID"] = rid
        raise
    finally:
        duration_ms = (time.perf_counter() - start) * 1000.0
        logger.debug("%s %s -> %s (%.1f ms)", request.method, request.path, status, duration_ms)
        request_id_var.reset(token)
