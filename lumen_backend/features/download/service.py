"""
Download service - bundle several assets into one zip stream.
"""
from __future__ import annotations

import os
import uuid
from pathlib import Path
from typing import Sequence

from ...adapters.storage import StorageRepository, ZipStream
from ...config import ARCHIVE_MAX_ITEMS
from ...path_utils import is_within_root
from ...shared import ErrorCode, Result, get_logger

logger = get_logger(__name__)

_ZIP_NAME_MAX_LEN = 255


def unique_archive_name(filename: str, used_names: set[str]) -> str:
    """
    Flat entry name for `filename`, suffixed " (2)", " (3)", ... when taken.
    The returned name is added to `used_names`.
    """
    base = os.path.basename(str(filename or "").replace("\\", "/")) or "file"
    stem, suffix = os.path.splitext(base)
    candidate = base[:_ZIP_NAME_MAX_LEN]
    n = 2
    # Case-insensitive so archives extract cleanly on Windows/macOS.
    lowered = {name.lower() for name in used_names}
    while candidate.lower() in lowered:
        candidate = f"{stem} ({n}){suffix}"[:_ZIP_NAME_MAX_LEN]
        n += 1
        if n > 10_000:
            candidate = f"{uuid.uuid4().hex[:12]}{suffix}"[:_ZIP_NAME_MAX_LEN]
            break
    used_names.add(candidate)
    return candidate


class DownloadService:
    """
    Builds zip streams of files that live under the allowed roots.

    The returned stream is finalized and rewound; the caller owns it and
    must close it.
    """

    def __init__(self, storage: StorageRepository, allowed_roots: Sequence[str], max_items: int = ARCHIVE_MAX_ITEMS):
        self.storage = storage
        self.allowed_roots = [Path(r) for r in allowed_roots]
        self.max_items = max(1, int(max_items))

    def _is_allowed(self, path: str) -> bool:
        candidate = Path(path)
        return any(is_within_root(candidate, root) for root in self.allowed_roots)

    async def build_archive(self, paths: Sequence[str]) -> Result[ZipStream]:
        """
        Args:
            paths: Absolute file paths to include

        Returns:
            Result with the finalized ZipStream; meta carries `count` and
            `skipped` (paths that were missing or outside the allowed roots)
        """
        items = [str(p) for p in paths or [] if str(p or "").strip()]
        if not items:
            return Result.Err(ErrorCode.INVALID_INPUT, "No files provided")
        if len(items) > self.max_items:
            return Result.Err(ErrorCode.INVALID_INPUT, f"Archive size exceeds limit ({self.max_items})")

        zip_res = await self.storage.create_zip_stream()
        if not zip_res.ok or zip_res.data is None:
            return Result.Err(zip_res.code, zip_res.error or "Cannot create zip stream")
        archive = zip_res.data

        used_names: set[str] = set()
        skipped: list[str] = []
        count = 0
        for path in items:
            if not self._is_allowed(path):
                logger.warning("Refusing to archive path outside media roots")
                skipped.append(path)
                continue
            stat_res = await self.storage.stat(path)
            if not stat_res.ok or stat_res.data is None:
                skipped.append(path)
                continue
            archive.add_file(path, unique_archive_name(os.path.basename(path), used_names))
            count += 1

        if count == 0:
            archive.close()
            return Result.Err(ErrorCode.NOT_FOUND, "None of the requested files are available", skipped=skipped)

        await archive.finalize()
        return Result.Ok(archive, count=count, skipped=skipped)
