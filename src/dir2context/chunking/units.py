"""Semantic unit records and their text rendering."""
from __future__ import annotations

import os
from dataclasses import asdict, dataclass, field
from enum import Enum
from typing import Any, Dict, List

ANONYMOUS = "anonymous"


class UnitKind(str, Enum):
    """Refined category of a semantic unit."""

    FILE = "file"
    FUNCTION = "function"
    METHOD = "method"
    STATIC_METHOD = "static_method"
    CONSTRUCTOR = "constructor"
    GET_METHOD = "get_method"
    SET_METHOD = "set_method"


@dataclass
class SemanticUnit:
    """A labeled fragment of a source file (a function, method, or the whole file)."""

    kind: UnitKind
    name: str
    content: str
    file_path: str
    start_line: int
    end_line: int
    parameters: List[str] = field(default_factory=list)

    def render(self) -> str:
        """Render the unit as a metadata header, a blank line and its content."""
        header = [
            f"Type: {self.kind.value}",
            f"Name: {self.name}",
            f"Path: {self.file_path}",
        ]
        if self.parameters:
            header.append(f"Parameters: {', '.join(self.parameters)}")
        header.append(f"Lines: {self.start_line}-{self.end_line}")
        return "\n".join(header) + "\n\n" + self.content + "\n\n"

    def to_dict(self) -> Dict[str, Any]:
        payload = asdict(self)
        payload["kind"] = self.kind.value
        return payload


def count_lines(text: str) -> int:
    """Count ``\\n``-separated lines; a trailing newline opens an empty last line."""
    return text.count("\n") + 1


def whole_file_unit(content: str, file_path: str) -> SemanticUnit:
    """The fallback unit used when no finer-grained unit can be found."""
    return SemanticUnit(
        kind=UnitKind.FILE,
        name=os.path.basename(file_path),
        content=content,
        file_path=file_path,
        start_line=1,
        end_line=count_lines(content),
    )
