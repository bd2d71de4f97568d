"""
Storage contract shared by every backend.

Consumers depend on `StorageRepository`; `FilesystemStorageRepository` is the
local-disk adapter built by `deps.build_services`.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from typing import BinaryIO, Protocol, Sequence, runtime_checkable

from ...shared import Result


@dataclass(frozen=True)
class DiskUsage:
    """Byte counts for the volume containing a folder (point-in-time snapshot)."""

    available: int
    free: int
    total: int


@dataclass(frozen=True)
class FileStats:
    """Basic stats for a single path."""

    size: int
    mtime: datetime
    can_read: bool
    can_write: bool


@dataclass
class CrawlOptions:
    """
    Parameters for a single crawl.

    Attributes:
        paths_to_crawl: Base folders to scan
        exclusion_patterns: Case-insensitive glob patterns; matching entries and
            everything beneath them are skipped
        include_hidden: Also return dot-files and descend into dot-folders
    """

    paths_to_crawl: Sequence[str] = field(default_factory=list)
    exclusion_patterns: Sequence[str] = field(default_factory=list)
    include_hidden: bool = False


@dataclass
class ReadStream:
    """A readable byte stream positioned at offset 0."""

    stream: BinaryIO
    type: str | None = None
    length: int | None = None

    def close(self) -> None:
        self.stream.close()


@runtime_checkable
class ZipStream(Protocol):
    """Archive stream supporting incremental appends and an explicit finalize."""

    stream: BinaryIO
    type: str | None
    length: int | None

    def add_file(self, input_path: str, filename: str) -> None: ...

    async def finalize(self) -> None: ...

    def close(self) -> None: ...


class StorageRepository(Protocol):
    """Backend-agnostic filesystem surface used by the rest of the application."""

    async def read_file(self, filepath: str) -> Result[ReadStream]:
        """Open `filepath` for reading."""
        ...

    async def write_file(self, filepath: str, data: bytes) -> Result[None]:
        """Create or overwrite `filepath`; its parent must already exist."""
        ...

    async def remove(self, filepath: str, recursive: bool = False, force: bool = False) -> Result[None]:
        """Remove a file, or a folder tree when `recursive` is set."""
        ...

    async def remove_empty_dirs(self, folder: str, self_: bool = False) -> Result[None]:
        """Remove file-less folders below `folder` (and `folder` itself if `self_`)."""
        ...

    async def move_file(self, source: str, target: str) -> Result[None]:
        """Move `source` to `target`; the target's parent must exist."""
        ...

    async def mkdir(self, filepath: str) -> Result[None]:
        """Create a directory and any missing parents."""
        ...

    async def check_disk_usage(self, folder: str) -> Result[DiskUsage]:
        """Disk usage of the volume containing `folder`."""
        ...

    async def stat(self, filepath: str) -> Result[FileStats | None]:
        """Stats for `filepath`, or Ok(None) when it does not exist."""
        ...

    async def crawl(self, options: CrawlOptions) -> Result[list[str]]:
        """Absolute paths of supported media files under the crawl base paths."""
        ...

    async def create_zip_stream(self) -> Result[ZipStream]:
        """Start a new zip archive stream."""
        ...
