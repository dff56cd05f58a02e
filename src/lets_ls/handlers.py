"""Completion and go-to-definition over lets.yaml text.

Results are plain values; the server turns them into LSP objects.
"""

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import List, Optional

from lets_symbols import Command, SymbolExtractor
from lets_tree_sitter import LetsParser, LetsPatterns, Position, PositionType

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class CompletionCandidate:
    label: str


def resolve_mixin_path(document_path: Path, filename: str) -> Optional[Path]:
    """Path of filename next to the document, if that file exists"""
    candidate = Path(document_path).parent / filename
    if candidate.exists():
        return candidate
    return None


class FeatureHandlers:
    def __init__(self, parser: Optional[LetsParser] = None):
        parser = parser or LetsParser()
        self.patterns = LetsPatterns(parser)
        self.extractor = SymbolExtractor(parser, self.patterns.query_helper)

    def complete(self, text: str, pos: Position) -> List[CompletionCandidate]:
        position_type = self.patterns.get_position_type(text, pos)
        logger.debug("completion at %s:%s is %s", pos.line, pos.character, position_type.value)

        if position_type is PositionType.DEPENDS:
            return self._complete_depends(text, pos)
        if position_type is PositionType.MIXINS:
            return self._complete_mixins()
        return []

    def find_definition(self, text: str, pos: Position, document_path: Path) -> Optional[Path]:
        if self.patterns.get_position_type(text, pos) is not PositionType.MIXINS:
            return None

        filename = self.extractor.extract_filename(text, pos)
        if filename is None:
            return None

        target = resolve_mixin_path(document_path, filename)
        if target is None:
            logger.info("mixin %s not found next to %s", filename, document_path)
        return target

    def _complete_depends(self, text: str, pos: Position) -> List[CompletionCandidate]:
        current = self.extractor.get_current_command(text, pos)
        if current is None:
            return []
        return depends_candidates(current, self.extractor.get_commands(text))

    def _complete_mixins(self) -> List[CompletionCandidate]:
        # TODO: offer yaml files from the document's directory
        return []


def depends_candidates(current: Command, commands: List[Command]) -> List[CompletionCandidate]:
    """Every command except the one being edited"""
    return [CompletionCandidate(label=cmd.name) for cmd in commands if cmd.name != current.name]
