"""
Configuration for the Lumen media server backend.
"""
import logging
import os
from pathlib import Path

from .utils import env_bool

logger = logging.getLogger(__name__)


def _env_raw(*names: str, default: str | None = None) -> str | None:
    for name in names:
        if not name:
            continue
        val = os.getenv(name)
        if val is not None and str(val).strip() != "":
            return str(val).strip()
    return default


def _env_int(default: int, *names: str, min_value: int | None = None, max_value: int | None = None) -> int:
    raw = _env_raw(*names)
    if raw is None:
        return default
    try:
        value = int(raw)
    except (TypeError, ValueError):
        logger.warning("Invalid integer for %s=%r, using default=%s", names[0] if names else "<unknown>", raw, default)
        return default
    if min_value is not None and value < min_value:
        logger.warning("Value too small for %s=%s, clamped to %s", names[0] if names else "<unknown>", value, min_value)
        value = min_value
    if max_value is not None and value > max_value:
        logger.warning("Value too large for %s=%s, clamped to %s", names[0] if names else "<unknown>", value, max_value)
        value = max_value
    return value


def _env_bool(default: bool, *names: str) -> bool:
    for name in names:
        if name and name in os.environ:
            return env_bool(name, default)
    return default


def _resolve_media_location() -> Path:
    env_path = _env_raw("LUMEN_MEDIA_LOCATION", "UPLOAD_LOCATION")
    if env_path:
        try:
            return Path(env_path).expanduser().resolve()
        except (OSError, RuntimeError):
            logger.warning("Failed to resolve LUMEN_MEDIA_LOCATION: %s, using fallback", env_path)
    return (Path.cwd() / "upload").resolve()


# Root folder of uploaded media, thumbnails and encoded videos.
# Not created at import time; build_services() makes it on startup.
MEDIA_LOCATION = str(_resolve_media_location())

# Folders library scans may crawl (os.pathsep separated). Empty: media location only.
LIBRARY_ROOTS = [p.strip() for p in (_env_raw("LUMEN_LIBRARY_ROOTS") or "").split(os.pathsep) if p.strip()]

# Device directory enumerated for hardware video codecs (VA-API / QSV render nodes)
DEVICE_DIR = str(_env_raw("LUMEN_DEVICE_DIR", default="/dev/dri") or "/dev/dri")

# Crawl walker pool (each crawl submits one walk per base path)
FS_WALK_MAX_WORKERS = _env_int(4, "LUMEN_FS_WALK_MAX_WORKERS", min_value=1, max_value=64)

# Zip stream tuning
ZIP_CHUNK_BYTES = _env_int(1024 * 1024, "LUMEN_ZIP_CHUNK_BYTES", min_value=16 * 1024, max_value=64 * 1024 * 1024)
# Archives up to this size stay in memory before spilling to a temporary file.
ZIP_SPOOL_BYTES = _env_int(64 * 1024 * 1024, "LUMEN_ZIP_SPOOL_BYTES", min_value=0, max_value=4 * 1024 * 1024 * 1024)
ARCHIVE_MAX_ITEMS = _env_int(1000, "LUMEN_ARCHIVE_MAX_ITEMS", min_value=1, max_value=100_000)


# HTTP server
HOST = str(_env_raw("LUMEN_HOST", default="127.0.0.1") or "127.0.0.1")
PORT = _env_int(2283, "LUMEN_PORT", min_value=1, max_value=65535)

# Fall back to copy + delete when a move crosses filesystems (EXDEV)
MOVE_COPY_ON_CROSS_DEVICE = _env_bool(True, "LUMEN_MOVE_COPY_ON_CROSS_DEVICE")
