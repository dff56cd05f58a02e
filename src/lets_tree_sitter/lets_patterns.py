"""lets.yaml-specific structural patterns and cursor classification."""

from tree_sitter import Node

from .ast_walker import ASTWalker
from .models import ParseResult, Position, PositionType
from .parser import LetsParser
from .query import LetsQueryHelper
from .ranges import is_on_node_line, is_within_node

# mixins:
#   - lets.my.yaml
MIXINS_QUERY = """
(block_mapping_pair
    key: (flow_node) @key
    value: (block_node
        (block_sequence
            (block_sequence_item
                (flow_node) @value)))
    (#eq? @key "mixins"))
"""

# depends: [a, b]  or  depends:\n  - a
DEPENDS_QUERY = """
(block_mapping_pair
    key: (flow_node) @key
    value: [
        (flow_node (flow_sequence)) @depends
        (flow_node (flow_sequence (flow_node (plain_scalar (string_scalar))))) @depends
        (block_node (block_sequence (block_sequence_item) @depends))
    ]
    (#eq? @key "depends"))
"""

# Mixins is checked before depends and the first hit wins.
CLASSIFICATION_ORDER = (PositionType.MIXINS, PositionType.DEPENDS)


class LetsPatterns:
    """Decide which lets.yaml construct a cursor is in."""

    def __init__(self, parser: LetsParser | None = None, query_helper: LetsQueryHelper | None = None):
        self.parser = parser or LetsParser()
        self.query_helper = query_helper or LetsQueryHelper(self.parser.language)

    def get_position_type(self, text: str, pos: Position) -> PositionType:
        result = self.parser.parse_string(text)
        checks = {
            PositionType.MIXINS: self._in_mixins,
            PositionType.DEPENDS: self._in_depends,
        }
        for position_type in CLASSIFICATION_ORDER:
            if checks[position_type](result, pos):
                return position_type
        return PositionType.NONE

    def is_mixin_root_node(self, text: str, pos: Position) -> bool:
        """Check if pos is anywhere inside a `mixins:` pair, key through last item."""
        return self._in_mixins(self.parser.parse_string(text), pos)

    def is_depends_node(self, text: str, pos: Position) -> bool:
        """Check if pos is inside a `depends` list, flow or block style."""
        return self._in_depends(self.parser.parse_string(text), pos)

    def _in_mixins(self, result: ParseResult, pos: Position) -> bool:
        for m in self.query_helper.query(MIXINS_QUERY, result.tree.root_node):
            pair = ASTWalker.find_parent_of_type(m.captures["key"], "block_mapping_pair")
            if pair is not None and is_within_node(pair, pos):
                return True
        return False

    def _in_depends(self, result: ParseResult, pos: Position) -> bool:
        for m in self.query_helper.query(DEPENDS_QUERY, result.tree.root_node):
            node = m.captures.get("depends")
            if node is not None and self._depends_hit(node, pos):
                return True
        return False

    @staticmethod
    def _depends_hit(node: Node, pos: Position) -> bool:
        if node.type == "block_sequence_item":
            # an empty "-" still counts past its last column
            return is_within_node(node, pos) or is_on_node_line(node, pos)
        if node.type in ("flow_node", "flow_sequence"):
            return is_within_node(node, pos)
        return False
