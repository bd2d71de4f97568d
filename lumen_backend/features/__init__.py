"""Application services built on the storage and codec adapters."""
