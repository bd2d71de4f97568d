import io
import json
import zipfile
from pathlib import Path

import pytest
from aiohttp.test_utils import TestClient, TestServer

from lumen_backend.routes import create_app


@pytest.mark.asyncio
async def test_download_archive_streams_zip(services, media_root: Path) -> None:
    (media_root / "2024").mkdir()
    a = media_root / "2024" / "a.jpg"
    b = media_root / "b.mp4"
    a.write_bytes(b"image")
    b.write_bytes(b"video")

    client = TestClient(TestServer(create_app(services)))
    await client.start_server()
    try:
        resp = await client.post("/api/download/archive", data=json.dumps({"paths": [str(a), str(b)]}))
        assert resp.status == 200
        assert resp.headers["Content-Type"] == "application/zip"
        assert "lumen-download.zip" in resp.headers["Content-Disposition"]
        assert resp.headers["X-Archive-Count"] == "2"
        payload = await resp.read()
        with zipfile.ZipFile(io.BytesIO(payload)) as zf:
            assert sorted(zf.namelist()) == ["a.jpg", "b.mp4"]
            assert zf.read("b.mp4") == b"video"
    finally:
        await client.close()


@pytest.mark.asyncio
async def test_download_archive_errors_are_json(services, tmp_path: Path) -> None:
    outside = tmp_path / "outside.jpg"
    outside.write_bytes(b"x")

    client = TestClient(TestServer(create_app(services)))
    await client.start_server()
    try:
        resp = await client.post("/api/download/archive", data=json.dumps({"paths": [str(outside)]}))
        body = await resp.json()
        assert body["ok"] is False
        assert body["code"] == "NOT_FOUND"
        assert str(tmp_path) not in json.dumps(body)

        resp = await client.post("/api/download/archive", data=json.dumps({"paths": "nope"}))
        body = await resp.json()
        assert body["code"] == "INVALID_INPUT"
    finally:
        await client.close()
