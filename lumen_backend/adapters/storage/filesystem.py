"""
Local filesystem storage adapter.

Never raises for filesystem failures - always returns Result with the error
classified into NOT_FOUND / PERMISSION_DENIED / DISK_FULL / DIRECTORY_NOT_EMPTY /
CROSS_DEVICE / IO_ERROR. Blocking calls run on worker threads.
"""
from __future__ import annotations

import asyncio
import errno
import mimetypes
import os
import shutil
import uuid
from datetime import datetime, timezone

from ...shared import ErrorCode, Result, get_logger, guess_mime_type
from .base import CrawlOptions, DiskUsage, FileStats, ReadStream, ZipStream
from .crawler import FileSystemCrawler
from .errors import os_error_result
from .zip_stream import ZipArchiveStream

logger = get_logger(__name__)


class FilesystemStorageRepository:
    """
    Storage adapter over the host filesystem.

    Args:
        crawler: Walker used by `crawl` (a default one is created if omitted)
        copy_on_cross_device: When a rename fails with EXDEV, copy then delete
            instead of returning CROSS_DEVICE
    """

    def __init__(self, crawler: FileSystemCrawler | None = None, copy_on_cross_device: bool = True) -> None:
        self._crawler = crawler or FileSystemCrawler()
        self._copy_on_cross_device = copy_on_cross_device

    async def read_file(self, filepath: str) -> Result[ReadStream]:
        def _open() -> ReadStream:
            handle = open(filepath, "rb")
            try:
                length = os.fstat(handle.fileno()).st_size
            except OSError:
                handle.close()
                raise
            content_type = guess_mime_type(filepath) or mimetypes.guess_type(filepath)[0]
            return ReadStream(stream=handle, type=content_type, length=length)

        try:
            return Result.Ok(await asyncio.to_thread(_open))
        except OSError as exc:
            return os_error_result(exc, "read file", filepath)

    async def write_file(self, filepath: str, data: bytes) -> Result[None]:
        def _write() -> None:
            with open(filepath, "wb") as f:
                f.write(data)

        try:
            await asyncio.to_thread(_write)
        except OSError as exc:
            return os_error_result(exc, "write file", filepath)
        return Result.Ok(None)

    async def remove(self, filepath: str, recursive: bool = False, force: bool = False) -> Result[None]:
        def _remove() -> None:
            if os.path.isdir(filepath) and not os.path.islink(filepath):
                if recursive:
                    shutil.rmtree(filepath)
                else:
                    os.rmdir(filepath)
            else:
                os.unlink(filepath)

        try:
            await asyncio.to_thread(_remove)
        except FileNotFoundError as exc:
            if force:
                return Result.Ok(None)
            return os_error_result(exc, "remove path", filepath)
        except OSError as exc:
            return os_error_result(exc, "remove path", filepath)
        logger.debug("Removed %s", filepath)
        return Result.Ok(None)

    async def remove_empty_dirs(self, folder: str, self_: bool = False) -> Result[None]:
        """
        Remove folders that contain no files, children before parents.
        Any file (hidden ones included) keeps its folder and all ancestors.
        """

        def _prune(directory: str, remove_self: bool) -> bool:
            empty = True
            with os.scandir(directory) as it:
                entries = list(it)
            for entry in entries:
                if entry.is_dir(follow_symlinks=False):
                    if not _prune(entry.path, True):
                        empty = False
                else:
                    empty = False
            if empty and remove_self:
                os.rmdir(directory)
                logger.debug("Removed empty folder %s", directory)
            return empty

        def _run() -> None:
            if not os.path.isdir(folder):
                return
            _prune(folder, self_)

        try:
            await asyncio.to_thread(_run)
        except FileNotFoundError:
            # Concurrent removal; nothing left to prune.
            return Result.Ok(None)
        except OSError as exc:
            return os_error_result(exc, "remove empty folders", folder)
        return Result.Ok(None)

    async def move_file(self, source: str, target: str) -> Result[None]:
        def _rename() -> None:
            if not os.path.lexists(source):
                raise FileNotFoundError(errno.ENOENT, os.strerror(errno.ENOENT), source)
            os.rename(source, target)

        try:
            await asyncio.to_thread(_rename)
            return Result.Ok(None)
        except OSError as exc:
            if exc.errno != errno.EXDEV or not self._copy_on_cross_device:
                return os_error_result(exc, "move file", source)

        logger.info("Cross-device move, falling back to copy and delete: %s -> %s", source, target)
        try:
            await asyncio.to_thread(self._copy_then_delete, source, target)
        except OSError as exc:
            return os_error_result(exc, "move file across devices", source)
        return Result.Ok(None)

    @staticmethod
    def _copy_then_delete(source: str, target: str) -> None:
        """
        Copy `source` next to `target` under a temporary name, swap it in, then
        delete `source`. On failure only the temporary copy is removed; an
        existing `target` is never touched.
        """
        is_dir = os.path.isdir(source) and not os.path.islink(source)
        if is_dir and os.path.lexists(target):
            # An existing folder is never merged into or replaced.
            raise FileExistsError(errno.EEXIST, os.strerror(errno.EEXIST), target)

        staging = os.path.join(
            os.path.dirname(os.path.abspath(target)),
            f".{os.path.basename(target)}.lumen-move-{uuid.uuid4().hex[:8]}",
        )
        try:
            if is_dir:
                shutil.copytree(source, staging, symlinks=True)
            else:
                shutil.copy2(source, staging, follow_symlinks=False)
            os.replace(staging, target)
        except OSError:
            if os.path.isdir(staging) and not os.path.islink(staging):
                shutil.rmtree(staging, ignore_errors=True)
            elif os.path.lexists(staging):
                os.unlink(staging)
            raise
        if is_dir:
            shutil.rmtree(source)
        else:
            os.unlink(source)

    async def mkdir(self, filepath: str) -> Result[None]:
        try:
            await asyncio.to_thread(os.makedirs, filepath, exist_ok=True)
        except FileExistsError:
            return Result.Err(ErrorCode.IO_ERROR, "Failed to create folder: a file exists at this path", path=filepath)
        except OSError as exc:
            return os_error_result(exc, "create folder", filepath)
        return Result.Ok(None)

    async def check_disk_usage(self, folder: str) -> Result[DiskUsage]:
        def _usage() -> DiskUsage:
            if not os.path.isdir(folder):
                raise FileNotFoundError(errno.ENOENT, os.strerror(errno.ENOENT), folder)
            if hasattr(os, "statvfs"):
                st = os.statvfs(folder)
                return DiskUsage(
                    available=st.f_bavail * st.f_frsize,
                    free=st.f_bfree * st.f_frsize,
                    total=st.f_blocks * st.f_frsize,
                )
            usage = shutil.disk_usage(folder)
            return DiskUsage(available=usage.free, free=usage.free, total=usage.total)

        try:
            return Result.Ok(await asyncio.to_thread(_usage))
        except OSError as exc:
            return os_error_result(exc, "check disk usage", folder)

    async def stat(self, filepath: str) -> Result[FileStats | None]:
        def _stat() -> FileStats | None:
            try:
                st = os.stat(filepath)
            except (FileNotFoundError, NotADirectoryError):
                return None
            return FileStats(
                size=st.st_size,
                mtime=datetime.fromtimestamp(st.st_mtime, tz=timezone.utc),
                can_read=os.access(filepath, os.R_OK),
                can_write=os.access(filepath, os.W_OK),
            )

        try:
            return Result.Ok(await asyncio.to_thread(_stat))
        except OSError as exc:
            return os_error_result(exc, "stat path", filepath)

    async def crawl(self, options: CrawlOptions) -> Result[list[str]]:
        return await self._crawler.crawl(options)

    async def create_zip_stream(self) -> Result[ZipStream]:
        try:
            return Result.Ok(ZipArchiveStream())
        except OSError as exc:
            return os_error_result(exc, "create zip stream")
