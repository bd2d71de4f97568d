"""
Shared types, enums, and constants.
"""
import os
from enum import Enum
from typing import Final, Literal

# File type classifications
FileKind = Literal["image", "video", "unknown"]


# Error codes
class ErrorCode(str, Enum):
    """Standardized error codes (string enum)."""

    # Client / validation
    INVALID_INPUT = "INVALID_INPUT"

    # Filesystem
    NOT_FOUND = "NOT_FOUND"
    PERMISSION_DENIED = "PERMISSION_DENIED"
    DISK_FULL = "DISK_FULL"
    DIRECTORY_NOT_EMPTY = "DIRECTORY_NOT_EMPTY"
    CROSS_DEVICE = "CROSS_DEVICE"
    IO_ERROR = "IO_ERROR"

    # Service availability
    SERVICE_UNAVAILABLE = "SERVICE_UNAVAILABLE"


# MIME types of every supported media extension. The crawl allowlist is
# derived from this table.
MIME_TYPES: Final[dict[str, str]] = {
    # images
    ".3fr": "image/x-hasselblad-3fr",
    ".arw": "image/x-sony-arw",
    ".avif": "image/avif",
    ".bmp": "image/bmp",
    ".cr2": "image/x-canon-cr2",
    ".cr3": "image/x-canon-cr3",
    ".dng": "image/x-adobe-dng",
    ".gif": "image/gif",
    ".heic": "image/heic",
    ".heif": "image/heif",
    ".jpeg": "image/jpeg",
    ".jpg": "image/jpeg",
    ".jxl": "image/jxl",
    ".nef": "image/x-nikon-nef",
    ".orf": "image/x-olympus-orf",
    ".png": "image/png",
    ".raf": "image/x-fuji-raf",
    ".raw": "image/x-panasonic-raw",
    ".rw2": "image/x-panasonic-rw2",
    ".tif": "image/tiff",
    ".tiff": "image/tiff",
    ".webp": "image/webp",
    # videos
    ".3gp": "video/3gpp",
    ".avi": "video/x-msvideo",
    ".flv": "video/x-flv",
    ".m2ts": "video/mp2t",
    ".mkv": "video/x-matroska",
    ".mov": "video/quicktime",
    ".mp4": "video/mp4",
    ".mpg": "video/mpeg",
    ".mts": "video/mp2t",
    ".webm": "video/webm",
    ".wmv": "video/x-ms-wmv",
}

# File extensions by type
EXTENSIONS: Final[dict[FileKind, frozenset[str]]] = {
    "image": frozenset(ext for ext, mime in MIME_TYPES.items() if mime.startswith("image/")),
    "video": frozenset(ext for ext, mime in MIME_TYPES.items() if mime.startswith("video/")),
    "unknown": frozenset(),
}

SUPPORTED_EXTENSIONS: Final[frozenset[str]] = frozenset(MIME_TYPES)


def classify_file(filename: str) -> FileKind:
    """
    Classify file by extension.

    Args:
        filename: File name or path

    Returns:
        File kind (image, video, unknown)
    """
    ext = os.path.splitext(filename)[1].lower()

    for kind, exts in EXTENSIONS.items():
        if ext in exts:
            return kind

    return "unknown"


def guess_mime_type(filename: str) -> str | None:
    """Return the MIME type for a supported media file, or None."""
    return MIME_TYPES.get(os.path.splitext(filename)[1].lower())
