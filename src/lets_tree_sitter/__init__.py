"""
lets-tree-sitter - tree-sitter based structure queries over lets.yaml

This package provides:
- Parsing lets.yaml text with the tree-sitter YAML grammar
- Declarative query evaluation with named captures
- Cursor range predicates
- Cursor classification (mixins list, depends list, none)
"""

from .ast_walker import ASTWalker
from .errors import ConfigError, GrammarLoadError, LetsLsError, QuerySyntaxError
from .lets_patterns import CLASSIFICATION_ORDER, LetsPatterns
from .models import NodeMatch, ParseResult, Position, PositionType
from .parser import LetsParser, load_language
from .query import LetsQueryHelper
from .ranges import is_on_node_line, is_within_node, is_within_points

__all__ = [
    "ASTWalker",
    "CLASSIFICATION_ORDER",
    "ConfigError",
    "GrammarLoadError",
    "LetsLsError",
    "LetsParser",
    "LetsPatterns",
    "LetsQueryHelper",
    "NodeMatch",
    "ParseResult",
    "Position",
    "PositionType",
    "QuerySyntaxError",
    "is_on_node_line",
    "is_within_node",
    "is_within_points",
    "load_language",
]
