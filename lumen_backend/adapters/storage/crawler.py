"""
FileSystemCrawler - filtered directory traversal for library crawls.

Each base path is walked on a thread-pool executor with an iterative scandir
stack. Excluded and hidden folders are pruned before descent, so large
excluded trees are never listed.
"""
from __future__ import annotations

import asyncio
import os
from collections.abc import Iterator, Sequence
from concurrent.futures import ThreadPoolExecutor
from fnmatch import fnmatchcase

from ...config import FS_WALK_MAX_WORKERS
from ...path_utils import normalize_path, relative_parts
from ...shared import SUPPORTED_EXTENSIONS, Result, get_logger
from .base import CrawlOptions
from .errors import os_error_result

logger = get_logger(__name__)

# Independent crawls share the pool; one walk per base path.
_FS_WALK_EXECUTOR = ThreadPoolExecutor(max_workers=FS_WALK_MAX_WORKERS, thread_name_prefix="lumen-fs-walk")

HIDDEN_PREFIX = "."
_GLOB_CHARS = frozenset("*?[")


class ExclusionMatcher:
    """
    Case-insensitive exclusion patterns, scoped to the crawl base path.

    Patterns are tested against the entry name and its path relative to the
    base, never the absolute path, so the folders above a base (or the base
    itself) cannot exclude anything.
    """

    def __init__(self, patterns: Sequence[str]) -> None:
        cleaned = []
        for raw in patterns or []:
            pattern = str(raw or "").strip().replace("\\", "/").lower()
            if pattern:
                cleaned.append(pattern)
        self._patterns = tuple(cleaned)

    def __bool__(self) -> bool:
        return bool(self._patterns)

    def matches(self, name: str, rel_path: str, is_dir: bool) -> bool:
        if not self._patterns:
            return False
        name = name.lower()
        rel = rel_path.lower()
        # Leading "/" lets "**/raw/**" match a folder directly below the base.
        candidates = [rel, "/" + rel]
        if is_dir:
            # "**/raw/**" should prune the raw folder itself, not just its children.
            candidates.extend(c + "/" for c in list(candidates))
        for pattern in self._patterns:
            if not any(ch in _GLOB_CHARS for ch in pattern):
                if name == pattern or rel == pattern:
                    return True
                continue
            if fnmatchcase(name, pattern):
                return True
            if any(fnmatchcase(c, pattern) for c in candidates):
                return True
        return False


class FileSystemCrawler:
    """
    Walks crawl base paths and returns absolute paths of supported media files.
    Directories are never returned; symlinked folders are not followed.
    """

    def __init__(self, executor: ThreadPoolExecutor | None = None) -> None:
        self._executor = executor or _FS_WALK_EXECUTOR

    @staticmethod
    def is_supported_file(name: str) -> bool:
        return os.path.splitext(name)[1].lower() in SUPPORTED_EXTENSIONS

    @staticmethod
    def is_hidden(name: str) -> bool:
        return name.startswith(HIDDEN_PREFIX)

    def iter_files(self, base: str, options: CrawlOptions) -> Iterator[str]:
        """
        Generator - yield supported files under `base` one by one.

        The base folder itself must be listable (its OSError propagates);
        unreadable subfolders are skipped.
        """
        matcher = ExclusionMatcher(options.exclusion_patterns)
        include_hidden = bool(options.include_hidden)
        stack: list[str] = [base]
        while stack:
            current = stack.pop()
            try:
                with os.scandir(current) as it:
                    entries = list(it)
            except OSError:
                if current == base:
                    raise
                logger.debug("Skipping unreadable folder during crawl: %s", current, exc_info=True)
                continue
            for entry in entries:
                if not include_hidden and self.is_hidden(entry.name):
                    continue
                is_dir = self._is_dir(entry)
                if matcher and matcher.matches(entry.name, relative_parts(entry.path, base), is_dir):
                    continue
                if is_dir:
                    stack.append(entry.path)
                    continue
                if self._is_file(entry) and self.is_supported_file(entry.name):
                    yield entry.path

    @staticmethod
    def _is_dir(entry: os.DirEntry) -> bool:
        try:
            return entry.is_dir(follow_symlinks=False)
        except OSError:
            return False

    @staticmethod
    def _is_file(entry: os.DirEntry) -> bool:
        # Symlinks to files are returned; dangling links are not.
        try:
            return entry.is_file(follow_symlinks=True)
        except OSError:
            return False

    def walk(self, base: str, options: CrawlOptions) -> list[str]:
        return list(self.iter_files(base, options))

    async def crawl(self, options: CrawlOptions) -> Result[list[str]]:
        """
        Crawl every base path in parallel and merge the hits.

        Returns:
            Ok(list of unique absolute file paths), or the classified error of
            the first base folder that exists but cannot be listed
        """
        bases: list[str] = []
        for raw in options.paths_to_crawl or []:
            base = normalize_path(str(raw))
            if base is None:
                logger.debug("Ignoring invalid crawl path: %r", raw)
                continue
            if not base.is_dir():
                logger.debug("Crawl path does not exist or is not a folder: %s", base)
                continue
            if str(base) not in bases:
                bases.append(str(base))

        if not bases:
            return Result.Ok([])

        loop = asyncio.get_running_loop()
        futures = [loop.run_in_executor(self._executor, self.walk, base, options) for base in bases]
        outcomes = await asyncio.gather(*futures, return_exceptions=True)

        # Overlapping base paths (e.g. /data and /data/2024) report the same files.
        merged: dict[str, None] = {}
        for base, outcome in zip(bases, outcomes):
            if isinstance(outcome, FileNotFoundError):
                logger.debug("Crawl path vanished: %s", base)
                continue
            if isinstance(outcome, OSError):
                return os_error_result(outcome, "crawl folder", base)
            if isinstance(outcome, BaseException):
                raise outcome
            for path in outcome:
                merged.setdefault(path, None)

        logger.debug("Crawl found %d file(s) in %d folder(s)", len(merged), len(bases))
        return Result.Ok(list(merged))
