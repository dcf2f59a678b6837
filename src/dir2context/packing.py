"""
Size-bounded packing of rendered sections into output files.
"""
from __future__ import annotations

from pathlib import PurePath
from typing import Iterable, List, NamedTuple, Optional

from .logger import get_logger

log = get_logger(__name__)


class OutputChunk(NamedTuple):
    filename: str
    content: str


def partition_name(base_name: str, part: int) -> str:
    """Insert ``_part<N>`` before the final suffix of ``base_name``."""
    suffix = PurePath(base_name).suffix
    if not suffix:
        return f"{base_name}_part{part}"
    return f"{base_name[: -len(suffix)]}_part{part}{suffix}"


def pack_sections(
    sections: Iterable[str],
    base_name: str,
    max_size: Optional[int] = None,
) -> List[OutputChunk]:
    """
    Greedily pack ``sections`` into partitions of at most ``max_size`` characters.

    Sections are never split and never reordered. A section longer than
    ``max_size`` gets a partition of its own, which is the only way a
    partition can exceed the limit. Without a limit (``None`` or ``0``) a
    single chunk named ``base_name`` holds everything.
    """
    if max_size is not None and max_size < 0:
        raise ValueError(f"max_size must not be negative, got {max_size}")

    if not max_size:
        return [OutputChunk(base_name, "".join(sections))]

    chunks: List[OutputChunk] = []
    buffer: List[str] = []
    buffered = 0

    def flush() -> None:
        chunks.append(OutputChunk(partition_name(base_name, len(chunks) + 1), "".join(buffer)))

    for section in sections:
        if buffered and buffered + len(section) > max_size:
            flush()
            buffer = []
            buffered = 0
        buffer.append(section)
        buffered += len(section)

    if buffered:
        flush()

    log.info("sections_packed", base=base_name, max_size=max_size, chunks=len(chunks))
    return chunks
