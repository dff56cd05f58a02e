from tree_sitter import Node
from typing import Callable, Optional, List


class ASTWalker:
    """Utilities for traversing and searching the YAML syntax tree"""

    @staticmethod
    def walk(node: Node, callback: Callable[[Node], None]):
        """Perform a depth-first traversal of the tree"""
        callback(node)
        for child in node.children:
            ASTWalker.walk(child, callback)

    @staticmethod
    def find_parent_of_type(node: Node, type_name: str) -> Optional[Node]:
        """Find the first parent node of a specific type"""
        current = node.parent
        while current:
            if current.type == type_name:
                return current
            current = current.parent
        return None

    @staticmethod
    def find_all(node: Node, predicate: Callable[[Node], bool]) -> List[Node]:
        """Find all descendant nodes (including node itself) matching predicate"""
        results = []

        def check(n):
            if predicate(n):
                results.append(n)

        ASTWalker.walk(node, check)
        return results

    @staticmethod
    def get_text(node: Node, source: bytes | str) -> str:
        """Slice the node's text out of the source it was parsed from.

        Node offsets are byte offsets, so str sources are encoded first.
        """
        data = source.encode("utf8") if isinstance(source, str) else source
        return data[node.start_byte : node.end_byte].decode("utf8", errors="replace")

    @staticmethod
    def get_field_text(node: Node, field_name: str, source: bytes | str) -> Optional[str]:
        """Text of the child bound to a grammar field (e.g. 'key' of a mapping pair)"""
        child = node.child_by_field_name(field_name)
        if child is None:
            return None
        return ASTWalker.get_text(child, source)

    @staticmethod
    def dump(node: Node, source: bytes | str, indent: int = 0) -> List[str]:
        """Render the subtree as indented 'kind [start - end]' lines"""
        lines = ["  " * indent + f"{node.type} [{tuple(node.start_point)} - {tuple(node.end_point)}]"]
        if node.type == "ERROR":
            lines.append("  " * (indent + 1) + f"ERROR TEXT: {ASTWalker.get_text(node, source)!r}")
        for child in node.children:
            lines.extend(ASTWalker.dump(child, source, indent + 1))
        return lines
