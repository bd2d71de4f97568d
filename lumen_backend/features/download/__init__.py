from .service import DownloadService, unique_archive_name

__all__ = ["DownloadService", "unique_archive_name"]
