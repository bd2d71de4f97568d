"""
Storage abstraction: filesystem primitives, crawling and zip streaming.
"""
from .base import CrawlOptions, DiskUsage, FileStats, ReadStream, StorageRepository, ZipStream
from .crawler import ExclusionMatcher, FileSystemCrawler
from .errors import classify_os_error, os_error_result
from .filesystem import FilesystemStorageRepository
from .zip_stream import ZipArchiveStream

__all__ = [
    "CrawlOptions",
    "DiskUsage",
    "FileStats",
    "ReadStream",
    "StorageRepository",
    "ZipStream",
    "ExclusionMatcher",
    "FileSystemCrawler",
    "FilesystemStorageRepository",
    "ZipArchiveStream",
    "classify_os_error",
    "os_error_result",
]
