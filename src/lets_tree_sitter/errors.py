class LetsLsError(Exception):
    """Base class for lets-ls errors"""


class GrammarLoadError(LetsLsError):
    """The tree-sitter YAML grammar could not be loaded"""


class QuerySyntaxError(LetsLsError):
    """A structural query failed to compile against the YAML grammar"""


class ConfigError(LetsLsError):
    """Configuration file is unreadable or invalid"""
