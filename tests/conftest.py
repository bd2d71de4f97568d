import sys

import pytest
import pytest_asyncio

from .repo_root import REPO_ROOT

if str(REPO_ROOT) not in sys.path:
    sys.path.insert(0, str(REPO_ROOT))

from .repositories.codec_mock import new_codec_repository_mock  # noqa: E402
from .repositories.storage_mock import new_storage_repository_mock  # noqa: E402


@pytest.fixture
def storage_mock():
    return new_storage_repository_mock()


@pytest.fixture
def codec_mock():
    return new_codec_repository_mock()


@pytest.fixture
def media_root(tmp_path):
    root = (tmp_path / "upload").resolve()
    root.mkdir()
    return root


@pytest_asyncio.fixture
async def services(media_root, tmp_path):
    from lumen_backend.deps import build_services

    device_dir = tmp_path / "dri"
    device_dir.mkdir()
    (device_dir / "renderD128").touch()

    svc_res = await build_services(
        media_location=str(media_root),
        device_dir=str(device_dir),
        library_roots=[str(tmp_path / "library")],
    )
    assert svc_res.ok, svc_res.error
    yield svc_res.data
