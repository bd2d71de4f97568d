"""
Library scan endpoint.
"""
from typing import Any

from aiohttp import web

from lumen_backend.shared import ErrorCode, Result
from lumen_backend.utils import parse_bool

from ..core import _client_error, _json_response, _read_json, _require_service

_MAX_IMPORT_PATHS = 64
_MAX_EXCLUSION_PATTERNS = 256


def _string_list(value: Any, field: str, limit: int) -> Result[list[str]]:
    if value is None:
        return Result.Ok([])
    if not isinstance(value, list) or not all(isinstance(v, str) for v in value):
        return Result.Err(ErrorCode.INVALID_INPUT, f"'{field}' must be a list of strings")
    cleaned = [v.strip() for v in value if v.strip()]
    if len(cleaned) > limit:
        return Result.Err(ErrorCode.INVALID_INPUT, f"'{field}' exceeds limit ({limit})")
    return Result.Ok(cleaned)


def register_library_routes(routes: web.RouteTableDef) -> None:
    """Register library scan routes."""

    @routes.post("/api/library/scan")
    async def scan_library(request: web.Request) -> web.Response:
        svc = _require_service(request, "library")
        if not svc.ok:
            return _json_response(svc)

        body_res = await _read_json(request)
        if not body_res.ok:
            return _json_response(body_res)
        body = body_res.data or {}

        paths_res = _string_list(body.get("import_paths"), "import_paths", _MAX_IMPORT_PATHS)
        if not paths_res.ok:
            return _json_response(paths_res)
        if not paths_res.data:
            return _json_response(Result.Err(ErrorCode.INVALID_INPUT, "No import paths provided"))
        patterns_res = _string_list(body.get("exclusion_patterns"), "exclusion_patterns", _MAX_EXCLUSION_PATTERNS)
        if not patterns_res.ok:
            return _json_response(patterns_res)

        result = await svc.data.scan(
            paths_res.data,
            exclusion_patterns=patterns_res.data,
            include_hidden=parse_bool(body.get("include_hidden"), False),
        )
        if not result.ok:
            return _json_response(_client_error(result, "Library scan failed"))
        return _json_response(Result.Ok(result.data.to_dict()))
