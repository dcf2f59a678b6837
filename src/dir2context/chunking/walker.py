"""Pre-order traversal over syntax trees."""
from __future__ import annotations

from typing import Any, Callable, Iterator, List


def walk(root: Any) -> Iterator[Any]:
    """
    Yield every node under ``root`` (inclusive), parents before children.

    Children are visited in source order. An explicit stack keeps deeply
    nested trees from hitting the recursion limit.
    """
    stack = [root]
    while stack:
        node = stack.pop()
        yield node
        children = node.children
        if children:
            stack.extend(reversed(children))


def collect(root: Any, predicate: Callable[[Any], bool]) -> List[Any]:
    """Return all nodes matching ``predicate`` in visit order.

    Matching a node does not stop the descent: a closure nested in a matched
    method is collected as well.
    """
    return [node for node in walk(root) if predicate(node)]
