from typing import List, Optional

from lets_tree_sitter import (
    ASTWalker,
    LetsParser,
    LetsQueryHelper,
    Position,
    is_on_node_line,
    is_within_node,
)
from lets_tree_sitter.lets_patterns import MIXINS_QUERY

from .models import Command

# Entries of the top-level `commands` mapping that have a block body
COMMANDS_QUERY = """
(
    (stream
        (document
            (block_node
                (block_mapping
                    (block_mapping_pair
                        key: (flow_node (plain_scalar (string_scalar) @section))
                        value: (block_node
                            (block_mapping
                                (block_mapping_pair
                                    key: (flow_node (plain_scalar (string_scalar) @cmd_key))
                                    value: (block_node) @cmd_body) @cmd)))))))
    (#eq? @section "commands")
)
"""


class SymbolExtractor:
    """Extracts command names and mixin filenames from lets.yaml text.

    Every call parses the text it is given; nothing is cached between calls.
    """

    def __init__(self, parser: Optional[LetsParser] = None, query_helper: Optional[LetsQueryHelper] = None):
        self.parser = parser or LetsParser()
        self.query_helper = query_helper or LetsQueryHelper(self.parser.language)

    def get_commands(self, text: str) -> List[Command]:
        """Commands in declaration order. Duplicate names are kept."""
        result = self.parser.parse_string(text)
        commands = []
        for m in self.query_helper.query(COMMANDS_QUERY, result.tree.root_node):
            if "cmd_key" in m.captures:
                commands.append(Command(name=ASTWalker.get_text(m.captures["cmd_key"], result.source)))
        return commands

    def get_current_command(self, text: str, pos: Position) -> Optional[Command]:
        """The command whose body contains pos, or None outside every body"""
        result = self.parser.parse_string(text)
        for m in self.query_helper.query(COMMANDS_QUERY, result.tree.root_node):
            pair = m.captures.get("cmd")
            if pair is None:
                continue

            body = pair.child_by_field_name("value")
            if body is None or not is_within_node(body, pos):
                continue

            name = ASTWalker.get_field_text(pair, "key", result.source)
            if name is not None:
                return Command(name=name)
        return None

    def extract_filename(self, text: str, pos: Position) -> Optional[str]:
        """Text of the mixins list item on pos's line, exactly as written"""
        result = self.parser.parse_string(text)
        for item in self.query_helper.captures_named(MIXINS_QUERY, result.tree.root_node, "value"):
            if item.parent is None or item.parent.type != "block_sequence_item":
                continue
            if is_on_node_line(item, pos):
                return ASTWalker.get_text(item, result.source)
        return None
