"""
Response utilities for route handlers.
"""

import math

from aiohttp import web

from lumen_backend.shared import Result, sanitize_error_message


def _json_response(result: Result, status: int | None = None) -> web.Response:
    """
    Convert Result to JSON response.

    Args:
        result: Result object
        status: HTTP status code (optional, defaults to 200)

    Returns:
        aiohttp web.Response
    """
    # Business / filesystem errors return HTTP 200 with {ok:false,...}.
    # Explicit status codes are reserved for genuine server bugs.
    if status is None:
        status = 200

    payload = _sanitize_json_payload(
        {
            "ok": result.ok,
            "data": result.data,
            "error": result.error,
            "code": result.code,
            "meta": result.meta,
        }
    )
    return web.json_response(payload, status=status)


def _sanitize_json_payload(value):
    """
    Normalize payload values so they are always valid strict JSON.
    - Converts NaN/Infinity floats to None.
    - Recurses through dict/list/tuple containers.
    """
    if isinstance(value, float):
        return value if math.isfinite(value) else None
    if isinstance(value, dict):
        return {k: _sanitize_json_payload(v) for k, v in value.items()}
    if isinstance(value, (list, tuple)):
        return [_sanitize_json_payload(v) for v in value]
    return value


def _client_error(result: Result, fallback: str) -> Result:
    """Copy of an error Result that is safe to send to clients (paths masked, meta dropped)."""
    return Result.Err(result.code, sanitize_error_message(result.error, fallback))
