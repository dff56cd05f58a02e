import logging
import sys
from typing import Optional

from lets_tree_sitter import ConfigError

LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"

_handler: Optional[logging.Handler] = None


def configure_logging(level: str = "INFO", log_path: Optional[str] = None) -> logging.Logger:
    """Route the lets_ls logger tree to log_path, or stderr.

    stdout carries the LSP stream and must never receive log records.
    Calling again replaces the previous handler. If log_path cannot be
    opened, ConfigError is raised and the current handler stays in place.
    """
    global _handler

    if log_path:
        try:
            handler: logging.Handler = logging.FileHandler(log_path, encoding="utf-8")
        except OSError as e:
            raise ConfigError(f"cannot open log file {log_path}: {e}") from e
    else:
        handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(logging.Formatter(LOG_FORMAT))

    logger = logging.getLogger("lets_ls")
    if _handler is not None:
        logger.removeHandler(_handler)
        _handler.close()

    logger.addHandler(handler)
    logger.setLevel(level)
    _handler = handler
    return logger
