"""Build :class:`SemanticUnit` records from matched syntax nodes."""
from __future__ import annotations

from typing import Any, Optional

from ..logger import get_logger
from .classifier import SyntaxClassifier
from .positions import PositionError, SourceText
from .units import ANONYMOUS, SemanticUnit

log = get_logger(__name__)


class ChunkExtractor:
    """Turns one function-like node into one semantic unit."""

    def __init__(self, classifier: SyntaxClassifier) -> None:
        self.classifier = classifier

    def extract(self, node: Any, source: SourceText, file_path: str) -> Optional[SemanticUnit]:
        """
        Slice the node's text and attach name, comment, parameters and kind.

        Returns ``None`` when the node's boundaries do not fit the source;
        one bad node must not cost the rest of the file.
        """
        try:
            return self._build(node, source, file_path)
        except PositionError as exc:
            log.debug(
                "semantic_unit_dropped",
                file=file_path,
                node_type=node.type,
                error=str(exc),
            )
            return None

    def _build(self, node: Any, source: SourceText, file_path: str) -> SemanticUnit:
        classifier = self.classifier
        body = source.node_text(node)

        name_node = classifier.find_name_node(node)
        name = source.node_text(name_node).strip() if name_node is not None else ""

        comment = classifier.find_leading_comment(node)
        if comment is not None:
            first, last = comment
            content = source.slice(first, last) + "\n" + body
        else:
            content = body

        return SemanticUnit(
            kind=classifier.refine_kind(node, source, name_node),
            name=name or ANONYMOUS,
            content=content,
            file_path=file_path,
            start_line=node.start_point[0] + 1,
            end_line=node.end_point[0] + 1,
            parameters=classifier.parameter_texts(node, source),
        )
