"""
Dependency wiring - builds adapters and services.
Simple, debug-friendly constructor injection without framework magic.
"""
from collections.abc import Sequence

from .adapters.codec import CodecRepository, DeviceCodecRepository
from .adapters.storage import FilesystemStorageRepository, StorageRepository
from .config import DEVICE_DIR, LIBRARY_ROOTS, MEDIA_LOCATION, MOVE_COPY_ON_CROSS_DEVICE
from .features.download import DownloadService
from .features.library import LibraryService
from .features.server_info import ServerInfoService
from .shared import Result, get_logger, log_success

logger = get_logger(__name__)


def _build_services_dict(
    storage: StorageRepository,
    codecs: CodecRepository,
    media_location: str,
    library_roots: Sequence[str],
) -> dict:
    return {
        "storage": storage,
        "codecs": codecs,
        "server_info": ServerInfoService(storage, codecs, media_location),
        "library": LibraryService(storage, library_roots),
        "download": DownloadService(storage, [media_location]),
        "media_location": media_location,
    }


async def _log_codec_availability(codecs: CodecRepository) -> None:
    found = await codecs.find_codecs()
    if found.ok and found.data:
        log_success(logger, f"Hardware codecs available: {', '.join(found.data)}")
    elif found.ok:
        logger.info("No hardware codec devices found - transcoding will use software encoders")
    else:
        logger.warning("Hardware codec discovery failed: %s", found.error)


async def build_services(
    media_location: str | None = None,
    device_dir: str | None = None,
    storage: StorageRepository | None = None,
    codecs: CodecRepository | None = None,
    library_roots: Sequence[str] | None = None,
) -> Result[dict]:
    """
    Build all services.

    Args:
        media_location: Media root (defaults to LUMEN_MEDIA_LOCATION)
        device_dir: Codec device directory (defaults to LUMEN_DEVICE_DIR)
        storage: Pre-built storage adapter (tests pass doubles here)
        codecs: Pre-built codec adapter
        library_roots: Folders library scans may crawl (defaults to
            LUMEN_LIBRARY_ROOTS, else the media location)

    Returns:
        Result with a dict of services keyed by name
    """
    location = media_location if media_location is not None else MEDIA_LOCATION
    storage = storage or FilesystemStorageRepository(copy_on_cross_device=MOVE_COPY_ON_CROSS_DEVICE)
    codecs = codecs or DeviceCodecRepository(device_dir or DEVICE_DIR)

    logger.info(f"Preparing media location: {location}")
    mkdir_res = await storage.mkdir(location)
    if not mkdir_res.ok:
        logger.error("Cannot create media location: %s", mkdir_res.error)
        return Result.Err(mkdir_res.code, f"Failed to prepare media location: {mkdir_res.error}")

    await _log_codec_availability(codecs)

    roots = list(library_roots or LIBRARY_ROOTS or [location])
    services = _build_services_dict(storage, codecs, location, roots)
    log_success(logger, "All services initialized")
    return Result.Ok(services)
