"""
Directory ingestion.

Walks a source tree, applies the exclusion rules, reads every eligible file
and turns it into rendered sections (one per file, or one per semantic unit)
ready for the packer.
"""
from __future__ import annotations

import os
from dataclasses import dataclass, field
from fnmatch import fnmatch
from pathlib import Path
from typing import Callable, Iterable, Iterator, List, Optional, Sequence, Tuple

from ..chunking import SemanticUnit, TreeSitterChunker, whole_file_unit
from ..logger import get_logger

log = get_logger(__name__)


def normalize_extensions(values: Optional[Iterable[str]]) -> Optional[Tuple[str, ...]]:
    """Lower-case extensions and make sure each carries its leading dot."""
    if values is None:
        return None
    normalized = []
    for value in values:
        value = value.strip().lower()
        if not value:
            continue
        normalized.append(value if value.startswith(".") else f".{value}")
    return tuple(dict.fromkeys(normalized))


def _matches_any(name: str, patterns: Sequence[str]) -> bool:
    return any(fnmatch(name, pattern) for pattern in patterns)


def file_section(path: Path, content: str) -> str:
    """Render a whole file the way non-semantic output lays it out."""
    return f"File: {path.name}\nPath: {path}\n\n{content}\n\n"


@dataclass
class ScanOptions:
    """Filters applied while walking the tree."""

    allowed_extensions: Optional[Sequence[str]] = None
    exclude_dirs: Sequence[str] = ()
    exclude_files: Sequence[str] = ()
    ignore_hidden: bool = False

    def __post_init__(self) -> None:
        self.allowed_extensions = normalize_extensions(self.allowed_extensions)

    def accepts_file(self, name: str) -> bool:
        if self.ignore_hidden and name.startswith("."):
            return False
        if _matches_any(name, self.exclude_files):
            return False
        if self.allowed_extensions is None:
            return True
        return Path(name).suffix.lower() in self.allowed_extensions

    def accepts_directory(self, name: str) -> bool:
        if self.ignore_hidden and name.startswith("."):
            return False
        return not _matches_any(name, self.exclude_dirs)


@dataclass
class ScanStats:
    files_processed: int = 0
    directories_scanned: int = 0


@dataclass
class IngestionResult:
    sections: List[str] = field(default_factory=list)
    units: List[SemanticUnit] = field(default_factory=list)
    stats: ScanStats = field(default_factory=ScanStats)


class DirectoryIngestionManager:
    """High-level ingestion controller."""

    def __init__(
        self,
        options: Optional[ScanOptions] = None,
        chunker: Optional[TreeSitterChunker] = None,
    ) -> None:
        self.options = options or ScanOptions()
        self.chunker = chunker or TreeSitterChunker()

    def iter_source_files(self, root: Path, stats: Optional[ScanStats] = None) -> Iterator[Path]:
        """Yield eligible files under ``root`` in a stable, sorted order."""
        stats = stats if stats is not None else ScanStats()
        for current, dirs, filenames in os.walk(root):
            stats.directories_scanned += 1
            dirs[:] = sorted(d for d in dirs if self.options.accepts_directory(d))
            current_path = Path(current)
            for filename in sorted(filenames):
                if self.options.accepts_file(filename):
                    yield current_path / filename

    @staticmethod
    def read_source(path: Path) -> Optional[str]:
        try:
            return path.read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError) as exc:
            log.warning("file_read_failed", file=str(path), error=str(exc))
            return None

    def ingest(
        self,
        root: Path,
        semantic: bool = False,
        progress_callback: Optional[Callable[[Path], None]] = None,
    ) -> IngestionResult:
        """
        Read every eligible file under ``root`` and render its sections.

        In semantic mode each file is expanded into its function-level units;
        otherwise the file is a single section. Section order follows the
        walk, and within a file the chunker's traversal order.
        """
        if not root.is_dir():
            raise NotADirectoryError(f"Not a directory: {root}")

        result = IngestionResult()
        for path in self.iter_source_files(root, result.stats):
            content = self.read_source(path)
            if content is not None:
                result.stats.files_processed += 1
                if semantic:
                    units = self.chunker.chunk(content, str(path))
                    result.units.extend(units)
                    result.sections.extend(unit.render() for unit in units)
                else:
                    result.units.append(whole_file_unit(content, str(path)))
                    result.sections.append(file_section(path, content))
            if progress_callback:
                progress_callback(path)

        log.info(
            "directory_ingested",
            root=str(root),
            files=result.stats.files_processed,
            directories=result.stats.directories_scanned,
            sections=len(result.sections),
            semantic=semantic,
        )
        return result
