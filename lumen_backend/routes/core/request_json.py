"""
Safe JSON request parsing with size limits.

Never raises to handlers (returns Result).
"""

from __future__ import annotations

import json
from typing import Any

from aiohttp import web

from lumen_backend.shared import ErrorCode, Result

DEFAULT_MAX_JSON_BYTES = 1024 * 1024
REQUEST_STREAM_CHUNK_BYTES = 64 * 1024


async def _read_json(request: web.Request, *, max_bytes: int = DEFAULT_MAX_JSON_BYTES) -> Result[dict]:
    """
    Read and decode a JSON object body with a strict max size.

    Returns:
        Result.Ok(dict) or Result.Err(INVALID_INPUT, ...)
    """
    if request.content_length is not None and request.content_length > max_bytes:
        return Result.Err(ErrorCode.INVALID_INPUT, f"JSON body too large ({request.content_length} > {max_bytes})")

    buf = bytearray()
    async for chunk in request.content.iter_chunked(REQUEST_STREAM_CHUNK_BYTES):
        buf.extend(chunk)
        if len(buf) > max_bytes:
            return Result.Err(ErrorCode.INVALID_INPUT, f"JSON body too large (> {max_bytes})")

    try:
        parsed: Any = json.loads(buf.decode("utf-8")) if buf else {}
    except (UnicodeDecodeError, json.JSONDecodeError) as exc:
        return Result.Err(ErrorCode.INVALID_INPUT, f"Invalid JSON body: {exc}")
    if not isinstance(parsed, dict):
        return Result.Err(ErrorCode.INVALID_INPUT, "JSON body must be an object")
    return Result.Ok(parsed)
