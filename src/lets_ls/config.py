import logging
import tomllib
from fnmatch import fnmatch
from pathlib import Path
from typing import Any, List, Optional

from pydantic import BaseModel, ValidationError, field_validator

from lets_tree_sitter import ConfigError

CONFIG_TABLE = "lets-ls"


class ServerConfig(BaseModel):
    """Settings for the lets.yaml language server"""

    log_path: Optional[str] = None
    log_level: str = "INFO"
    document_patterns: List[str] = ["lets.yaml", "lets.*.yaml"]

    @field_validator("log_level")
    @classmethod
    def _known_level(cls, value: str) -> str:
        level = value.upper()
        if not isinstance(logging.getLevelName(level), int):
            raise ValueError(f"unknown log level: {value}")
        return level

    def merged_with(self, options: Any) -> "ServerConfig":
        """Overlay client initializationOptions (log_path, log_level) on this config"""
        if not options:
            return self
        if not isinstance(options, dict):
            raise ConfigError(f"initialization options must be an object, got {type(options).__name__}")
        overrides = {k: v for k, v in options.items() if k in ("log_path", "log_level") and v is not None}
        try:
            return self.model_validate({**self.model_dump(), **overrides})
        except ValidationError as e:
            raise ConfigError(f"invalid initialization options: {e}") from e

    def matches_document(self, path: str | Path) -> bool:
        name = Path(path).name
        return any(fnmatch(name, pattern) for pattern in self.document_patterns)


def load_config(config_path: Optional[Path] = None) -> ServerConfig:
    """Load [tool.lets-ls] from a TOML file. A missing file gives defaults."""
    if config_path is None or not config_path.exists():
        return ServerConfig()

    try:
        with open(config_path, "rb") as f:
            data = tomllib.load(f)
    except (OSError, tomllib.TOMLDecodeError) as e:
        raise ConfigError(f"could not read {config_path}: {e}") from e

    table = data.get("tool", {}).get(CONFIG_TABLE, {})
    try:
        return ServerConfig.model_validate(table)
    except ValidationError as e:
        raise ConfigError(f"invalid [tool.{CONFIG_TABLE}] in {config_path}: {e}") from e
