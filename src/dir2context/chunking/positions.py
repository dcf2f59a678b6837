"""
Row/column to character offset conversion.

Tree-sitter reports node boundaries as ``(row, column)`` points where the
column counts UTF-8 bytes. Slicing a Python ``str`` needs character offsets,
so every slice taken by the extractor goes through this module.
"""
from __future__ import annotations

from typing import Any, List, NamedTuple, Tuple


class PositionError(ValueError):
    """Raised when a point or span does not fit inside the source text."""


class Point(NamedTuple):
    row: int
    column: int


def offset(text: str, point: Tuple[int, int]) -> int:
    """Return the flat character offset of ``point`` inside ``text``.

    The lengths of all lines strictly before ``point.row`` are summed (plus
    one for each ``\\n`` terminator) and the column is added on top.
    """
    row, column = point
    lines = text.split("\n")
    total = 0
    for index in range(row):
        total += len(lines[index]) + 1
    return total + column


class SourceText:
    """A file's text with precomputed line starts for repeated slicing."""

    def __init__(self, text: str) -> None:
        self.text = text
        self.lines: List[str] = text.split("\n")
        starts = [0]
        for line in self.lines[:-1]:
            starts.append(starts[-1] + len(line) + 1)
        self._line_starts = starts

    def offset(self, point: Tuple[int, int]) -> int:
        row, column = point
        if row < 0 or row >= len(self.lines):
            raise PositionError(f"row {row} outside 0..{len(self.lines) - 1}")
        if column < 0 or column > len(self.lines[row]):
            raise PositionError(f"column {column} outside line {row}")
        return self._line_starts[row] + column

    def char_point(self, ts_point: Tuple[int, int]) -> Point:
        """Convert a tree-sitter point (byte column) to a character point."""
        row, byte_column = ts_point
        if row < 0 or row >= len(self.lines):
            raise PositionError(f"row {row} outside 0..{len(self.lines) - 1}")
        line = self.lines[row]
        if line.isascii():
            return Point(row, byte_column)
        encoded = line.encode("utf-8")
        if byte_column > len(encoded):
            raise PositionError(f"byte column {byte_column} outside line {row}")
        return Point(row, len(encoded[:byte_column].decode("utf-8", errors="ignore")))

    def span(self, node: Any) -> Tuple[int, int]:
        """Character offsets ``(start, end)`` covered by a syntax node."""
        start = self.offset(self.char_point(node.start_point))
        end = self.offset(self.char_point(node.end_point))
        if end < start:
            raise PositionError(f"span ends before it starts ({start} > {end})")
        return start, end

    def slice(self, start_node: Any, end_node: Any = None) -> str:
        """Text from the start of ``start_node`` to the end of ``end_node``."""
        start, _ = self.span(start_node)
        _, end = self.span(end_node if end_node is not None else start_node)
        if end < start:
            raise PositionError(f"span ends before it starts ({start} > {end})")
        return self.text[start:end]

    def node_text(self, node: Any) -> str:
        return self.slice(node)
