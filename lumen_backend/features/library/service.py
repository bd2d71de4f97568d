"""
Library service - discover media files in external library import paths.
"""
from __future__ import annotations

import asyncio
import logging
from dataclasses import dataclass, field
from datetime import datetime
from typing import Sequence

from ...adapters.storage import CrawlOptions, StorageRepository
from ...path_utils import is_under_any_root
from ...shared import ErrorCode, Result, classify_file, get_logger, log_structured, timer

logger = get_logger(__name__)

_STAT_BATCH_SIZE = 64


@dataclass
class AssetCandidate:
    path: str
    kind: str
    size: int
    mtime: datetime

    def to_dict(self) -> dict:
        return {
            "path": self.path,
            "kind": self.kind,
            "size": self.size,
            "mtime": self.mtime.isoformat(),
        }


@dataclass
class LibraryScanSummary:
    assets: list[AssetCandidate] = field(default_factory=list)
    # Crawled but gone by the time they were stat'ed
    missing: int = 0
    # Stat failed for another reason (permissions, I/O)
    failed: list[str] = field(default_factory=list)

    def to_dict(self) -> dict:
        return {
            "assets": [a.to_dict() for a in self.assets],
            "total": len(self.assets),
            "missing": self.missing,
            "failed": list(self.failed),
        }


class LibraryService:
    """
    Scans library import paths through the storage adapter.

    Import paths must sit under one of the allowed roots. The service owns
    no other state; each scan crawls, stats every hit and returns
    a summary for the ingestion layer.
    """

    def __init__(self, storage: StorageRepository, allowed_roots: Sequence[str]):
        """
        Args:
            storage: Storage adapter
            allowed_roots: Folders import paths must live in
        """
        self.storage = storage
        self.allowed_roots = [str(r) for r in allowed_roots]

    async def scan(
        self,
        import_paths: Sequence[str],
        exclusion_patterns: Sequence[str] = (),
        include_hidden: bool = False,
    ) -> Result[LibraryScanSummary]:
        """
        Crawl `import_paths` and stat every supported file.

        Args:
            import_paths: Library folders to crawl
            exclusion_patterns: Case-insensitive glob patterns to skip
            include_hidden: Include dot-files and dot-folders

        Returns:
            Result with a LibraryScanSummary, PERMISSION_DENIED when an import
            path lies outside the allowed roots, or the crawl error
        """
        outside = [p for p in import_paths if not is_under_any_root(p, self.allowed_roots)]
        if outside:
            logger.warning("Refusing library scan of %d path(s) outside library roots", len(outside))
            return Result.Err(ErrorCode.PERMISSION_DENIED, "Import path is outside the library roots", paths=outside)

        options = CrawlOptions(
            paths_to_crawl=list(import_paths),
            exclusion_patterns=list(exclusion_patterns),
            include_hidden=include_hidden,
        )
        with timer("library crawl", logger):
            crawl_res = await self.storage.crawl(options)
        if not crawl_res.ok:
            return Result.Err(crawl_res.code, crawl_res.error or "Crawl failed", **crawl_res.meta)

        paths = list(crawl_res.data or [])
        summary = LibraryScanSummary()
        for start in range(0, len(paths), _STAT_BATCH_SIZE):
            batch = paths[start:start + _STAT_BATCH_SIZE]
            results = await asyncio.gather(*(self.storage.stat(p) for p in batch))
            for path, stat_res in zip(batch, results):
                if not stat_res.ok:
                    logger.debug("Stat failed for %s: %s", path, stat_res.error)
                    summary.failed.append(path)
                    continue
                stats = stat_res.data
                if stats is None:
                    summary.missing += 1
                    continue
                summary.assets.append(
                    AssetCandidate(path=path, kind=classify_file(path), size=stats.size, mtime=stats.mtime)
                )

        log_structured(
            logger,
            logging.INFO,
            "Library scan complete",
            import_paths=len(options.paths_to_crawl),
            assets=len(summary.assets),
            missing=summary.missing,
            failed=len(summary.failed),
        )
        return Result.Ok(summary)

    async def prune_empty_folders(self, folder: str, include_self: bool = False) -> Result[None]:
        """Remove file-less folders left behind after assets were moved or deleted."""
        return await self.storage.remove_empty_dirs(folder, self_=include_self)
