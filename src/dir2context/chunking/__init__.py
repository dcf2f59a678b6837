"""
Semantic chunking of source files.

Integrates tree-sitter parsing with a grammar-neutral classifier to split
source files into function-level units ready for packing.
"""

from .tree_sitter_chunker import TreeSitterChunker
from .units import SemanticUnit, UnitKind, whole_file_unit

__all__ = ["SemanticUnit", "TreeSitterChunker", "UnitKind", "whole_file_unit"]
