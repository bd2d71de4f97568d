"""
Zip archive stream used for multi-asset downloads.

Entries are queued by `add_file` and written on `finalize`, which runs on a
worker thread, closes the archive and rewinds the stream for reading.
"""

from __future__ import annotations

import asyncio
import os
import stat
import tempfile
import time
import zipfile
from typing import BinaryIO

from ...config import ZIP_CHUNK_BYTES, ZIP_SPOOL_BYTES
from ...shared import get_logger

logger = get_logger(__name__)

ZIP_CONTENT_TYPE = "application/zip"
_ZIP_NAME_MAX_LEN = 255


class ZipArchiveStream:
    """
    Single-owner zip stream backed by a spooled temporary file.

    Media is already compressed, so entries are stored rather than deflated.
    Files that cannot be read at finalize time are skipped and listed in
    `skipped`.
    """

    type: str | None = ZIP_CONTENT_TYPE

    def __init__(
        self,
        chunk_bytes: int = ZIP_CHUNK_BYTES,
        spool_bytes: int = ZIP_SPOOL_BYTES,
        compression: int = zipfile.ZIP_STORED,
    ) -> None:
        self.stream: BinaryIO = tempfile.SpooledTemporaryFile(max_size=spool_bytes, mode="w+b")  # type: ignore[assignment]
        self.length: int | None = None
        self.skipped: list[str] = []
        self._chunk_bytes = max(16 * 1024, int(chunk_bytes))
        self._compression = compression
        self._pending: list[tuple[str, str]] = []
        self._finalized = False

    @property
    def finalized(self) -> bool:
        return self._finalized

    @property
    def entry_count(self) -> int:
        return len(self._pending)

    def add_file(self, input_path: str, filename: str) -> None:
        """Queue `input_path` to be stored in the archive as `filename`."""
        if self._finalized:
            raise RuntimeError("Cannot add files to a finalized zip stream")
        arcname = _clean_arcname(filename) or _clean_arcname(os.path.basename(input_path))
        if not arcname:
            raise ValueError("Zip entry name is empty")
        self._pending.append((str(input_path), arcname))

    async def finalize(self) -> None:
        """Write queued entries and close the archive. Calling twice is a no-op."""
        if self._finalized:
            return
        self._finalized = True
        await asyncio.to_thread(self._write_archive)

    def close(self) -> None:
        self.stream.close()

    def _write_archive(self) -> None:
        with zipfile.ZipFile(self.stream, "w", compression=self._compression, allowZip64=True) as zf:
            for path, arcname in self._pending:
                try:
                    self._add_file_open_handle(zf, path, arcname)
                except OSError as exc:
                    logger.warning("Skipping unreadable zip entry %s: %s", arcname, exc)
                    self.skipped.append(path)
        self.stream.flush()
        self.length = self.stream.tell()
        self.stream.seek(0)
        logger.debug(
            "Zip stream finalized: %d entries, %d skipped, %d bytes",
            len(self._pending) - len(self.skipped),
            len(self.skipped),
            self.length,
        )

    def _add_file_open_handle(self, zf: zipfile.ZipFile, path: str, arcname: str) -> None:
        """
        Open the file once and stream its bytes into the entry, so a rename
        between queueing and finalize cannot swap in a different file.
        """
        with open(path, "rb") as f:
            st = os.fstat(f.fileno())
            if not stat.S_ISREG(st.st_mode):
                raise IsADirectoryError(f"Not a regular file: {path}")
            dt = time.localtime(st.st_mtime)
            # Zip timestamps cannot predate 1980.
            date_time = max((1980, 1, 1, 0, 0, 0), tuple(dt[:6]))
            info = zipfile.ZipInfo(arcname, date_time=date_time)
            info.compress_type = self._compression
            info.file_size = st.st_size
            with zf.open(info, "w", force_zip64=st.st_size >= 0xFFFFFFFF) as dest:
                while True:
                    chunk = f.read(self._chunk_bytes)
                    if not chunk:
                        break
                    dest.write(chunk)


def _clean_arcname(name: str) -> str:
    cleaned = str(name or "").replace("\x00", "").replace("\r", "").replace("\n", "")
    cleaned = cleaned.replace("\\", "/").lstrip("/")
    parts = [p for p in cleaned.split("/") if p not in ("", ".", "..")]
    return "/".join(parts)[:_ZIP_NAME_MAX_LEN]
