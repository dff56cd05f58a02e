"""Conversion between editor positions and tree-sitter columns.

LSP clients count ``character`` in UTF-16 code units; tree-sitter counts
columns in UTF-8 bytes. The core only ever sees byte columns.
"""

from lets_tree_sitter import Position


def _utf16_length(ch: str) -> int:
    return 2 if ord(ch) > 0xFFFF else 1


def to_byte_position(text: str, line: int, character: int) -> Position:
    """Map a (line, UTF-16 character) position to a UTF-8 byte column.

    Columns past the end of the line stay past the end by the same amount,
    so "one past the content" keeps meaning the same thing in both units.
    """
    lines = text.split("\n")
    if line < 0 or line >= len(lines):
        return Position(line=line, character=character)

    line_text = lines[line]
    units = 0
    byte_column = 0
    for ch in line_text:
        if units >= character:
            return Position(line=line, character=byte_column)
        units += _utf16_length(ch)
        byte_column += len(ch.encode("utf8"))

    return Position(line=line, character=byte_column + max(character - units, 0))
