"""
Per-node decisions over a parsed syntax tree.

The classifier never branches on the language. Everything grammar specific
is looked up in the :class:`~dir2context.chunking.grammars.NodeCategories`
it was built with, so the same predicates run against every tree.
"""
from __future__ import annotations

from typing import Any, List, Optional, Tuple

from .grammars import NodeCategories
from .positions import SourceText
from .units import UnitKind

PUNCTUATION_TOKENS = frozenset({",", "(", ")", "{", "}"})


def _row(point: Tuple[int, int]) -> int:
    return point[0]


class SyntaxClassifier:
    """Answers what a syntax node is and where its name, comment and parameters live."""

    def __init__(self, categories: NodeCategories) -> None:
        self.categories = categories

    def is_semantic_unit(self, node: Any) -> bool:
        # Keyword tokens can share a label with the construct (Python's `lambda`).
        return node.type in self.categories.function_types and getattr(node, "is_named", True)

    def find_name_node(self, node: Any) -> Optional[Any]:
        """
        Locate the child carrying the unit's identifier.

        Declarations name themselves. Anonymous forms (arrow functions,
        lambdas, unnamed function expressions) borrow the name of the binding
        they are assigned to, if their parent is such a binding.
        """
        own = self.categories.name_children.get(node.type)
        if own:
            for child in node.children:
                if child.type in own:
                    return child

        if node.type not in self.categories.anonymous_types:
            return None

        parent = node.parent
        if parent is None:
            return None
        bound = self.categories.binding_parents.get(parent.type)
        if not bound:
            return None
        for sibling in parent.children:
            if sibling.type in bound:
                return sibling
        return None

    def is_comment(self, node: Any) -> bool:
        return node.type in self.categories.comment_types

    def find_leading_comment(self, node: Any) -> Optional[Tuple[Any, Any]]:
        """
        Return the ``(first, last)`` comment nodes directly preceding ``node``.

        The immediate previous sibling is checked first. Otherwise the search
        climbs the parent chain, testing the sibling that precedes each
        ancestor on the path (``export function``, ``@decorator`` lines, a
        ``const f =`` binding whose arrow starts on the next line). It stops at
        the first statement or member container, so a comment above a class
        never reaches its members.
        """
        path = node
        while path is not None:
            previous = path.prev_sibling
            if previous is not None and self.is_comment(previous):
                return self._comment_block(previous), previous
            parent = path.parent
            if parent is None or parent.type in self.categories.container_types:
                return None
            path = parent
        return None

    def _comment_block(self, last: Any) -> Any:
        """Extend back over comments on consecutive lines; returns the first one."""
        first = last
        previous = first.prev_sibling
        while (
            previous is not None
            and self.is_comment(previous)
            and _row(previous.end_point) + 1 >= _row(first.start_point)
        ):
            first = previous
            previous = first.prev_sibling
        return first

    def parameter_texts(self, node: Any, source: SourceText) -> List[str]:
        container = next(
            (child for child in node.children if child.type in self.categories.parameter_containers),
            None,
        )
        if container is None:
            return []

        parameters: List[str] = []
        for child in container.children:
            if child.type not in self.categories.parameter_types:
                continue
            text = source.node_text(child).strip()
            if text and text not in PUNCTUATION_TOKENS:
                parameters.append(text)
        return parameters

    def refine_kind(self, node: Any, source: SourceText, name_node: Optional[Any] = None) -> UnitKind:
        if node.type in self.categories.constructor_types:
            return UnitKind.CONSTRUCTOR
        if node.type not in self.categories.method_types:
            return UnitKind.FUNCTION

        for child in node.children:
            if name_node is not None and child == name_node:
                continue
            token = self._token_text(child, source)
            if token in self.categories.accessor_tokens:
                return UnitKind.GET_METHOD if token == "get" else UnitKind.SET_METHOD

        if any(self._is_static_marker(child, source) for child in node.children):
            return UnitKind.STATIC_METHOD
        return UnitKind.METHOD

    @staticmethod
    def _token_text(node: Any, source: SourceText) -> Optional[str]:
        if node.children:
            return None
        return source.node_text(node).strip()

    def _is_static_marker(self, node: Any, source: SourceText) -> bool:
        static_types = self.categories.static_types
        if node.type in static_types:
            return True
        if node.type not in self.categories.modifier_types:
            return False
        if not node.children:
            return self._token_text(node, source) in static_types
        return any(
            grand.type in static_types or self._token_text(grand, source) in static_types
            for grand in node.children
        )
