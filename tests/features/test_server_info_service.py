import pytest

from lumen_backend.adapters.storage import DiskUsage
from lumen_backend.features.server_info import ServerInfoService
from lumen_backend.shared import ErrorCode, Result

GIB = 1024 ** 3


@pytest.mark.asyncio
async def test_get_info_reports_usage(storage_mock, codec_mock) -> None:
    storage_mock.check_disk_usage.return_value = Result.Ok(
        DiskUsage(available=50 * GIB, free=60 * GIB, total=200 * GIB)
    )
    svc = ServerInfoService(storage_mock, codec_mock, "/media")

    res = await svc.get_info()
    assert res.ok, res.error
    storage_mock.check_disk_usage.assert_awaited_once_with("/media")
    assert res.data == {
        "disk_available": "50.0 GiB",
        "disk_size": "200.0 GiB",
        "disk_use": "140.0 GiB",
        "disk_available_raw": 50 * GIB,
        "disk_size_raw": 200 * GIB,
        "disk_use_raw": 140 * GIB,
        "disk_use_percentage": 70.0,
    }


@pytest.mark.asyncio
async def test_get_info_rounds_percentage(storage_mock, codec_mock) -> None:
    storage_mock.check_disk_usage.return_value = Result.Ok(DiskUsage(available=2, free=2, total=3))
    res = await ServerInfoService(storage_mock, codec_mock, "/media").get_info()
    assert res.data["disk_use_percentage"] == 33.33


@pytest.mark.asyncio
async def test_get_info_zero_sized_volume(storage_mock, codec_mock) -> None:
    storage_mock.check_disk_usage.return_value = Result.Ok(DiskUsage(available=0, free=0, total=0))
    res = await ServerInfoService(storage_mock, codec_mock, "/media").get_info()
    assert res.data["disk_use_percentage"] == 0.0


@pytest.mark.asyncio
async def test_get_info_propagates_storage_error(storage_mock, codec_mock) -> None:
    storage_mock.check_disk_usage.return_value = Result.Err(ErrorCode.NOT_FOUND, "Failed to check disk usage")
    res = await ServerInfoService(storage_mock, codec_mock, "/media").get_info()
    assert res.ok is False
    assert res.code == "NOT_FOUND"


@pytest.mark.asyncio
async def test_get_codecs(storage_mock, codec_mock) -> None:
    codec_mock.find_codecs.return_value = Result.Ok(["card0", "renderD128"])
    res = await ServerInfoService(storage_mock, codec_mock, "/media").get_codecs()
    codec_mock.find_codecs.assert_awaited_once_with()
    assert res.data == {"codecs": ["card0", "renderD128"], "hardware_acceleration": True}


@pytest.mark.asyncio
async def test_get_codecs_missing_device_dir_is_empty(storage_mock, codec_mock) -> None:
    codec_mock.find_codecs.return_value = Result.Err(ErrorCode.NOT_FOUND, "Failed to read codec device directory")
    res = await ServerInfoService(storage_mock, codec_mock, "/media").get_codecs()
    assert res.ok is True
    assert res.data == {"codecs": [], "hardware_acceleration": False}
    assert res.meta.get("device_dir_missing") is True


@pytest.mark.asyncio
async def test_get_codecs_permission_error(storage_mock, codec_mock) -> None:
    codec_mock.find_codecs.return_value = Result.Err(ErrorCode.PERMISSION_DENIED, "Failed: Permission denied")
    res = await ServerInfoService(storage_mock, codec_mock, "/media").get_codecs()
    assert res.ok is False
    assert res.code == "PERMISSION_DENIED"
