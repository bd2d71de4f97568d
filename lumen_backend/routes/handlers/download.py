"""
Archive download endpoint (multi-asset zip).
"""
import asyncio

from aiohttp import web

from lumen_backend.config import ZIP_CHUNK_BYTES
from lumen_backend.shared import ErrorCode, Result, get_logger

from ..core import _client_error, _json_response, _read_json, _require_service

logger = get_logger(__name__)


def register_download_routes(routes: web.RouteTableDef) -> None:
    """Register archive download routes."""

    @routes.post("/api/download/archive")
    async def download_archive(request: web.Request) -> web.StreamResponse:
        svc = _require_service(request, "download")
        if not svc.ok:
            return _json_response(svc)

        body_res = await _read_json(request)
        if not body_res.ok:
            return _json_response(body_res)
        paths = (body_res.data or {}).get("paths")
        if not isinstance(paths, list) or not all(isinstance(p, str) for p in paths):
            return _json_response(Result.Err(ErrorCode.INVALID_INPUT, "'paths' must be a list of strings"))

        archive_res = await svc.data.build_archive(paths)
        if not archive_res.ok or archive_res.data is None:
            return _json_response(_client_error(archive_res, "Cannot build archive"))

        archive = archive_res.data
        try:
            response = web.StreamResponse(
                headers={
                    "Content-Type": archive.type or "application/zip",
                    "Content-Disposition": 'attachment; filename="lumen-download.zip"',
                    "X-Archive-Count": str(archive_res.meta.get("count", 0)),
                }
            )
            if archive.length is not None:
                response.content_length = archive.length
            await response.prepare(request)
            while True:
                chunk = await asyncio.to_thread(archive.stream.read, ZIP_CHUNK_BYTES)
                if not chunk:
                    break
                await response.write(chunk)
            await response.write_eof()
            logger.debug(
                "Streamed archive: %s entries, %s skipped, %s bytes",
                archive_res.meta.get("count", 0),
                len(archive_res.meta.get("skipped") or []),
                archive.length,
            )
            return response
        finally:
            archive.close()
