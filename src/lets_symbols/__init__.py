"""Symbol extraction for lets.yaml: commands and mixin filenames."""

from .extractor import COMMANDS_QUERY, SymbolExtractor
from .models import Command

__all__ = ["COMMANDS_QUERY", "Command", "SymbolExtractor"]
