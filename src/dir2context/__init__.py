"""
dir2context: flatten source trees into size-bounded context files.

The public entry points are :class:`~dir2context.chunking.TreeSitterChunker`
for per-file semantic chunking and :func:`~dir2context.packing.pack_sections`
for splitting rendered sections into output files.
"""

from .chunking import SemanticUnit, TreeSitterChunker, UnitKind
from .packing import OutputChunk, pack_sections
from .version import __version__

__all__ = [
    "OutputChunk",
    "SemanticUnit",
    "TreeSitterChunker",
    "UnitKind",
    "__version__",
    "pack_sections",
]
