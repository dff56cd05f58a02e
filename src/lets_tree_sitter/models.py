from dataclasses import dataclass, field
from enum import Enum
from typing import List

from tree_sitter import Node, Tree


class PositionType(str, Enum):
    """Syntactic context of a cursor in a lets.yaml document"""

    MIXINS = "mixins"
    DEPENDS = "depends"
    NONE = "none"


@dataclass(frozen=True)
class Position:
    """Zero-based cursor position.

    ``character`` is a UTF-8 byte column, the unit tree-sitter reports in
    ``Node.start_point`` and ``Node.end_point``.
    """

    line: int
    character: int


@dataclass
class ParseResult:
    """Result of a tree-sitter parse operation"""

    tree: Tree
    source: str
    errors: List[str] = field(default_factory=list)


@dataclass
class NodeMatch:
    """Result of a tree-sitter query match"""

    node: Node
    captures: dict[str, Node]
