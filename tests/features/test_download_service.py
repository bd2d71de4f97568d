import zipfile
from pathlib import Path

import pytest

from lumen_backend.adapters.storage import FilesystemStorageRepository
from lumen_backend.features.download import DownloadService
from lumen_backend.features.download.service import unique_archive_name
from lumen_backend.shared import ErrorCode, Result


def test_unique_archive_name_suffixes_duplicates() -> None:
    used: set[str] = set()
    assert unique_archive_name("a.jpg", used) == "a.jpg"
    assert unique_archive_name("/other/A.JPG", used) == "A (2).JPG"
    assert unique_archive_name("a.jpg", used) == "a (3).jpg"
    assert unique_archive_name("", used) == "file"


@pytest.mark.asyncio
async def test_build_archive_zips_files_under_root(media_root: Path) -> None:
    (media_root / "x").mkdir()
    (media_root / "y").mkdir()
    a = media_root / "x" / "a.jpg"
    b = media_root / "y" / "a.jpg"
    a.write_bytes(b"first")
    b.write_bytes(b"second")

    svc = DownloadService(FilesystemStorageRepository(), [str(media_root)])
    res = await svc.build_archive([str(a), str(b), str(media_root / "missing.jpg")])
    assert res.ok, res.error
    archive = res.data
    try:
        assert res.meta["count"] == 2
        assert res.meta["skipped"] == [str(media_root / "missing.jpg")]
        with zipfile.ZipFile(archive.stream) as zf:
            assert zf.namelist() == ["a.jpg", "a (2).jpg"]
            assert zf.read("a (2).jpg") == b"second"
    finally:
        archive.close()


@pytest.mark.asyncio
async def test_build_archive_refuses_paths_outside_roots(media_root: Path, tmp_path: Path) -> None:
    outside = tmp_path / "secret.jpg"
    outside.write_bytes(b"s")

    svc = DownloadService(FilesystemStorageRepository(), [str(media_root)])
    res = await svc.build_archive([str(outside), str(media_root / ".." / "secret.jpg")])
    assert res.ok is False
    assert res.code == "NOT_FOUND"
    assert len(res.meta["skipped"]) == 2


@pytest.mark.asyncio
async def test_build_archive_validates_input(storage_mock) -> None:
    svc = DownloadService(storage_mock, ["/media"], max_items=2)

    empty = await svc.build_archive(["", "  "])
    assert empty.code == "INVALID_INPUT"

    too_many = await svc.build_archive(["/media/a", "/media/b", "/media/c"])
    assert too_many.code == "INVALID_INPUT"
    storage_mock.create_zip_stream.assert_not_awaited()


@pytest.mark.asyncio
async def test_build_archive_zip_stream_failure(storage_mock, media_root: Path) -> None:
    storage_mock.create_zip_stream.return_value = Result.Err(ErrorCode.DISK_FULL, "Failed to create zip stream")
    svc = DownloadService(storage_mock, [str(media_root)])
    res = await svc.build_archive([str(media_root / "a.jpg")])
    assert res.code == "DISK_FULL"
    storage_mock.stat.assert_not_awaited()
