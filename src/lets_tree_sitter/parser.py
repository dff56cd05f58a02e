"""Tree-sitter parser wrapper for lets.yaml documents."""

from functools import lru_cache
from pathlib import Path
from typing import List

import tree_sitter_yaml as tsy
from tree_sitter import Language, Node, Parser

from .ast_walker import ASTWalker
from .errors import GrammarLoadError
from .models import ParseResult


@lru_cache(maxsize=1)
def load_language() -> Language:
    """Load the YAML grammar. Language objects are immutable and safe to share."""
    try:
        return Language(tsy.language())
    except (TypeError, ValueError, OSError) as e:
        raise GrammarLoadError(f"could not load yaml language: {e}") from e


class LetsParser:
    """Parses lets.yaml text into a tree-sitter tree.

    A new ``tree_sitter.Parser`` is created for every parse, so one
    ``LetsParser`` can serve concurrent callers without sharing parse state.
    """

    def __init__(self):
        self.language = load_language()

    def parse_string(self, source: str) -> ParseResult:
        parser = Parser(self.language)
        tree = parser.parse(source.encode("utf8"))
        return ParseResult(tree=tree, source=source, errors=self._collect_errors(tree.root_node))

    def parse_file(self, file_path: Path) -> ParseResult:
        return self.parse_string(Path(file_path).read_text(encoding="utf-8"))

    def _collect_errors(self, root: Node) -> List[str]:
        if not root.has_error:
            return []

        errors = []
        for node in ASTWalker.find_all(root, lambda n: n.is_error or n.is_missing):
            row, column = node.start_point
            if node.is_missing:
                errors.append(f"{row + 1}:{column + 1}: missing {node.type}")
            else:
                errors.append(f"{row + 1}:{column + 1}: unexpected syntax")
        return errors
