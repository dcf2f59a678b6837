"""
Tree-sitter driven semantic chunking.

A file is parsed with the grammar registered for its extension and every
function-like node becomes its own :class:`SemanticUnit`. Files without a
grammar, files that fail to parse and files with no functions at all are
returned whole as a single ``file`` unit.
"""

from __future__ import annotations

import os
from pathlib import Path
from typing import Any, Callable, Dict, List, Optional, Union

from ..logger import get_logger
from .classifier import SyntaxClassifier
from .extractor import ChunkExtractor
from .grammars import build_parser, categories_for, grammar_for_extension
from .positions import SourceText
from .units import SemanticUnit, whole_file_unit
from .walker import collect

log = get_logger(__name__)

ParserFactory = Callable[[str], Any]


class TreeSitterChunker:
    """Tree-sitter powered chunker for the languages in the grammar registry."""

    def __init__(self, parser_factory: Optional[ParserFactory] = None) -> None:
        self.parser_factory = parser_factory or build_parser
        self.parsers: Dict[str, Any] = {}
        self.extractors: Dict[str, ChunkExtractor] = {}

    def _get_parser(self, grammar: str) -> Any:
        if grammar not in self.parsers:
            self.parsers[grammar] = self.parser_factory(grammar)
        return self.parsers[grammar]

    def _get_extractor(self, grammar: str) -> ChunkExtractor:
        if grammar not in self.extractors:
            self.extractors[grammar] = ChunkExtractor(SyntaxClassifier(categories_for(grammar)))
        return self.extractors[grammar]

    def chunk(self, content: str, file_path: Union[str, Path]) -> List[SemanticUnit]:
        """
        Split ``content`` into semantic units, in pre-order traversal order.

        Never raises for unsupported or unparsable input; those cases degrade
        to the whole-file unit.
        """
        path = str(file_path)
        grammar = grammar_for_extension(os.path.splitext(path)[1])
        if grammar is None:
            log.debug("semantic_chunk_unsupported", file=path)
            return [whole_file_unit(content, path)]

        try:
            units = self._chunk_with_tree_sitter(content, path, grammar)
        except Exception as exc:
            log.warning(
                "semantic_chunk_fallback",
                file=path,
                grammar=grammar,
                error=str(exc),
            )
            return [whole_file_unit(content, path)]

        if not units:
            log.info("semantic_chunk_empty", file=path, grammar=grammar)
            return [whole_file_unit(content, path)]

        log.info("semantic_chunks_created", file=path, grammar=grammar, units=len(units))
        return units

    def _chunk_with_tree_sitter(self, content: str, path: str, grammar: str) -> List[SemanticUnit]:
        parser = self._get_parser(grammar)
        extractor = self._get_extractor(grammar)
        tree = parser.parse(content.encode("utf-8"))
        source = SourceText(content)

        units: List[SemanticUnit] = []
        for node in collect(tree.root_node, extractor.classifier.is_semantic_unit):
            unit = extractor.extract(node, source, path)
            if unit is not None:
                units.append(unit)
        return units
