from .service import AssetCandidate, LibraryScanSummary, LibraryService

__all__ = ["AssetCandidate", "LibraryScanSummary", "LibraryService"]
