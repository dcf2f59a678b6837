from __future__ import annotations

from typing import Callable, Iterator, List, Optional, Tuple

import pytest

from dir2context.logger import configure_logging


class FakeNode:
    """Just enough of ``tree_sitter.Node`` for the classifier and walker."""

    def __init__(
        self,
        type: str,
        start_point: Tuple[int, int],
        end_point: Tuple[int, int],
        children: Optional[List["FakeNode"]] = None,
        is_named: bool = True,
    ) -> None:
        self.type = type
        self.start_point = start_point
        self.end_point = end_point
        self.children = list(children or [])
        self.is_named = is_named
        self.parent: Optional[FakeNode] = None
        for child in self.children:
            child.parent = self

    @property
    def prev_sibling(self) -> Optional["FakeNode"]:
        if self.parent is None:
            return None
        siblings = self.parent.children
        index = next(i for i, sibling in enumerate(siblings) if sibling is self)
        return siblings[index - 1] if index else None

    def __repr__(self) -> str:  # pragma: no cover - debugging aid
        return f"FakeNode({self.type!r}, {self.start_point}, {self.end_point})"


class FakeTree:
    def __init__(self, root_node: FakeNode) -> None:
        self.root_node = root_node


class NodeBuilder:
    """Builds fake nodes whose points are located by searching the source."""

    def __init__(self, source: str) -> None:
        self.source = source

    def point(self, offset: int) -> Tuple[int, int]:
        before = self.source[:offset]
        row = before.count("\n")
        column = offset - (before.rfind("\n") + 1)
        return row, column

    def __call__(
        self,
        type: str,
        text: str,
        *children: FakeNode,
        nth: int = 0,
        named: bool = True,
    ) -> FakeNode:
        start = -1
        for _ in range(nth + 1):
            start = self.source.index(text, start + 1)
        return FakeNode(
            type,
            self.point(start),
            self.point(start + len(text)),
            list(children),
            is_named=named,
        )


@pytest.fixture
def node_builder() -> Callable[[str], NodeBuilder]:
    return NodeBuilder


@pytest.fixture
def fake_tree() -> Callable[[FakeNode], FakeTree]:
    return FakeTree


@pytest.fixture
def fake_node() -> Callable[..., FakeNode]:
    return FakeNode


@pytest.fixture(autouse=True)
def silence_logging() -> Iterator[None]:
    """Drop handlers bound to a test's captured streams once it finishes."""
    yield
    configure_logging(enable_console=False)
