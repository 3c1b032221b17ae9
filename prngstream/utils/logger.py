"""
Logging setup for prngstream.

Provides a consistent logger that reads format/level from config.yaml.
Handlers write to stderr: stdout carries the keystream bytes.

Usage:
    from prngstream.utils.logger import get_logger
    logger = get_logger(__name__)
    logger.info("Generating keystreams...")
"""

import logging
from prngstream.utils.config import get_config

# Every logger handed out by get_logger, so the CLI can retune them together
_loggers: dict[str, logging.Logger] = {}


def get_logger(name: str) -> logging.Logger:
    """Create and return a configured logger.

    Args:
        name: Logger name (typically __name__ of the calling module).

    Returns:
        Configured logging.Logger instance.
    """
    config = get_config()
    log_cfg = config.get("logging", {})

    level = getattr(logging, str(log_cfg.get("level", "INFO")).upper(), logging.INFO)
    fmt = log_cfg.get("format", "%(asctime)s [%(levelname)s] %(name)s: %(message)s")

    logger = logging.getLogger(name)

    # Avoid adding duplicate handlers if called multiple times
    if not logger.handlers:
        handler = logging.StreamHandler()
        handler.setFormatter(logging.Formatter(fmt))
        logger.addHandler(handler)

    logger.setLevel(level)
    _loggers[name] = logger
    return logger


def set_log_level(level: int | str) -> None:
    """Apply `level` to every logger created through get_logger."""
    if isinstance(level, str):
        level = getattr(logging, level.upper(), logging.INFO)
    for logger in _loggers.values():
        logger.setLevel(level)
