"""
Timing helper for slow filesystem work (crawls, archive builds).
"""
from __future__ import annotations

import logging
import time
from collections.abc import Iterator
from contextlib import contextmanager


@contextmanager
def timer(label: str, logger: logging.Logger, level: int = logging.DEBUG) -> Iterator[None]:
    """
    Log how long the wrapped block took, even when it raises.

    Usage:
        with timer("library crawl", logger):
            await storage.crawl(options)
    """
    start = time.perf_counter()
    try:
        yield
    finally:
        logger.log(level, "%s took %.1f ms", label, (time.perf_counter() - start) * 1000.0)
