import errno
from pathlib import Path

import pytest

from lumen_backend.adapters.codec import DeviceCodecRepository
from lumen_backend.adapters.codec import device as device_mod
from lumen_backend.adapters.codec.device import is_codec_device


@pytest.mark.asyncio
async def test_find_codecs_lists_render_and_card_nodes(tmp_path: Path) -> None:
    for name in ("renderD129", "card0", "renderD128", "by-path", "controlD64", "card", "renderD128.bak"):
        (tmp_path / name).touch()

    res = await DeviceCodecRepository(str(tmp_path)).find_codecs()
    assert res.ok, res.error
    assert res.data == ["card0", "renderD128", "renderD129"]


@pytest.mark.asyncio
async def test_find_codecs_empty_directory(tmp_path: Path) -> None:
    res = await DeviceCodecRepository(str(tmp_path)).find_codecs()
    assert res.ok is True
    assert res.data == []


@pytest.mark.asyncio
async def test_find_codecs_missing_directory(tmp_path: Path) -> None:
    res = await DeviceCodecRepository(str(tmp_path / "dri")).find_codecs()
    assert res.ok is False
    assert res.code == "NOT_FOUND"
    assert res.meta["path"] == str(tmp_path / "dri")


@pytest.mark.asyncio
async def test_find_codecs_permission_denied(tmp_path: Path, monkeypatch) -> None:
    def _deny(path):
        raise PermissionError(errno.EACCES, "Permission denied", path)

    monkeypatch.setattr(device_mod.os, "listdir", _deny)
    res = await DeviceCodecRepository(str(tmp_path)).find_codecs()
    assert res.code == "PERMISSION_DENIED"


def test_default_device_dir(monkeypatch) -> None:
    monkeypatch.setattr(device_mod, "DEVICE_DIR", "/dev/dri")
    assert DeviceCodecRepository().device_dir == "/dev/dri"


def test_is_codec_device() -> None:
    assert is_codec_device("renderD128")
    assert is_codec_device("card1")
    assert not is_codec_device("by-path")
    assert not is_codec_device("")
