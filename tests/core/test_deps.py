from pathlib import Path

import pytest

from lumen_backend import deps as deps_mod
from lumen_backend.features.download import DownloadService
from lumen_backend.features.library import LibraryService
from lumen_backend.features.server_info import ServerInfoService
from lumen_backend.shared import ErrorCode, Result


def test_build_services_dict_contains_core_keys(storage_mock, codec_mock):
    out = deps_mod._build_services_dict(storage_mock, codec_mock, "/media", ["/library"])

    assert out["storage"] is storage_mock
    assert out["codecs"] is codec_mock
    assert out["media_location"] == "/media"
    assert isinstance(out["server_info"], ServerInfoService)
    assert isinstance(out["library"], LibraryService)
    assert isinstance(out["download"], DownloadService)
    assert out["server_info"].storage is storage_mock
    assert out["library"].allowed_roots == ["/library"]


@pytest.mark.asyncio
async def test_build_services_with_doubles(storage_mock, codec_mock):
    storage_mock.mkdir.return_value = Result.Ok(None)
    codec_mock.find_codecs.return_value = Result.Ok([])

    out = await deps_mod.build_services(media_location="/media", storage=storage_mock, codecs=codec_mock)
    assert out.ok is True
    storage_mock.mkdir.assert_awaited_once_with("/media")
    codec_mock.find_codecs.assert_awaited_once_with()


@pytest.mark.asyncio
async def test_build_services_media_location_failure(storage_mock, codec_mock):
    storage_mock.mkdir.return_value = Result.Err(ErrorCode.PERMISSION_DENIED, "Failed to create folder: denied")

    out = await deps_mod.build_services(media_location="/media", storage=storage_mock, codecs=codec_mock)
    assert out.ok is False
    assert out.code == "PERMISSION_DENIED"
    codec_mock.find_codecs.assert_not_awaited()


@pytest.mark.asyncio
async def test_build_services_codec_failure_is_not_fatal(storage_mock, codec_mock):
    storage_mock.mkdir.return_value = Result.Ok(None)
    codec_mock.find_codecs.return_value = Result.Err(ErrorCode.PERMISSION_DENIED, "denied")

    out = await deps_mod.build_services(media_location="/media", storage=storage_mock, codecs=codec_mock)
    assert out.ok is True


@pytest.mark.asyncio
async def test_build_services_creates_media_location(tmp_path: Path):
    location = tmp_path / "media" / "upload"
    out = await deps_mod.build_services(media_location=str(location), device_dir=str(tmp_path / "no-dri"))
    assert out.ok, out.error
    assert location.is_dir()
    assert out.data["codecs"].device_dir == str(tmp_path / "no-dri")


@pytest.mark.asyncio
async def test_build_services_library_roots_default_to_media_location(storage_mock, codec_mock, monkeypatch):
    storage_mock.mkdir.return_value = Result.Ok(None)
    codec_mock.find_codecs.return_value = Result.Ok([])
    monkeypatch.setattr(deps_mod, "LIBRARY_ROOTS", [])

    out = await deps_mod.build_services(media_location="/media", storage=storage_mock, codecs=codec_mock)
    assert out.data["library"].allowed_roots == ["/media"]

    monkeypatch.setattr(deps_mod, "LIBRARY_ROOTS", ["/mnt/photos"])
    out = await deps_mod.build_services(media_location="/media", storage=storage_mock, codecs=codec_mock)
    assert out.data["library"].allowed_roots == ["/mnt/photos"]
