"""Cursor-versus-node range tests.

Positions and node points must use the same column unit (UTF-8 bytes).
"""

from typing import Tuple

from tree_sitter import Node

from .models import Position


def is_within_points(start: Tuple[int, int], end: Tuple[int, int], pos: Position) -> bool:
    """True if pos lies between start and end inclusive, comparing row then column."""
    start_row, start_column = start
    end_row, end_column = end

    if pos.line < start_row or pos.line > end_row:
        return False

    if pos.line == start_row and pos.character < start_column:
        return False

    if pos.line == end_row and pos.character > end_column:
        return False

    return True


def is_within_node(node: Node, pos: Position) -> bool:
    return is_within_points(node.start_point, node.end_point, pos)


def is_on_node_line(node: Node, pos: Position) -> bool:
    """True if node occupies a single row and pos is on that row, at any column.

    Looser than is_within_node: a cursor on trailing whitespace after a
    one-line list item still hits the item.
    """
    start_row = node.start_point[0]
    return start_row == node.end_point[0] and pos.line == start_row
