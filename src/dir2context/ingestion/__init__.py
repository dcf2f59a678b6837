"""
Directory ingestion package.

Discovers, filters and reads the files of a source tree before they are
chunked and packed.
"""
from .manager import (
    DirectoryIngestionManager,
    IngestionResult,
    ScanOptions,
    ScanStats,
    file_section,
)

__all__ = [
    "DirectoryIngestionManager",
    "IngestionResult",
    "ScanOptions",
    "ScanStats",
    "file_section",
]
