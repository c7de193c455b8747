"""Logging for skills-to-agents.

The package logger writes WARNING and above to stderr; CLI output itself goes
through rich. When a logs directory is configured, a rotating file receives
everything at the configured level.
"""

from __future__ import annotations

import logging
from logging.handlers import RotatingFileHandler
from pathlib import Path
from typing import Any


LOGGER_NAME = "skills_to_agents"
LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"

_logger: logging.Logger | None = None


def parse_level(log_level: str) -> int:
    """Numeric level for a name such as ``"debug"``; unknown names map to INFO."""
    level = logging.getLevelName(log_level.upper())
    return level if isinstance(level, int) else logging.INFO


def _console_handler(formatter: logging.Formatter) -> logging.Handler:
    handler = logging.StreamHandler()
    handler.setLevel(logging.WARNING)
    handler.setFormatter(formatter)
    return handler


def _file_handler(
    path: Path,
    level: int,
    formatter: logging.Formatter,
    max_bytes: int,
    backup_count: int,
) -> logging.Handler:
    path.parent.mkdir(parents=True, exist_ok=True)
    handler = RotatingFileHandler(path, maxBytes=max_bytes, backupCount=backup_count, encoding="utf-8")
    handler.setLevel(level)
    handler.setFormatter(formatter)
    return handler


def setup_logging(
    log_level: str = "INFO",
    logs_dir: Path | None = None,
    log_file: str = "skills-to-agents.log",
    max_bytes: int = 1024 * 1024,  # 1MB
    backup_count: int = 3,
) -> logging.Logger:
    """Configure the package logger once and return it.

    Later calls return the already configured logger until
    :func:`reset_logger` is called.
    """
    global _logger
    if _logger is not None:
        return _logger

    level = parse_level(log_level)
    formatter = logging.Formatter(LOG_FORMAT, datefmt=DATE_FORMAT)

    logger = logging.getLogger(LOGGER_NAME)
    logger.setLevel(level)
    logger.handlers.clear()
    logger.addHandler(_console_handler(formatter))
    if logs_dir is not None:
        logger.addHandler(_file_handler(Path(logs_dir) / log_file, level, formatter, max_bytes, backup_count))

    _logger = logger
    return logger


def get_logger() -> logging.Logger:
    """Get the package logger. Sets up with defaults if not yet configured."""
    global _logger
    if _logger is None:
        return setup_logging()
    return _logger


def reset_logger() -> None:
    """Reset the global logger (for testing)."""
    global _logger
    if _logger is not None:
        _logger.handlers.clear()
        _logger = None


def log_skill_read(name: str, link: str) -> None:
    """Log a successfully parsed skill descriptor."""
    get_logger().debug("Skill read name=%s link=%s", name, link)


def log_sync_result(path: Path | str, changed: bool, written: bool, skill_count: int) -> None:
    """Log the outcome of a sync run."""
    get_logger().info(
        "Sync path=%s skills=%d changed=%s written=%s",
        path, skill_count, changed, written,
    )


def log_error(
    category: str,
    message: str,
    **extra: Any,
) -> None:
    """Log a classified error."""
    logger = get_logger()
    extra_str = " ".join(f"{k}={v}" for k, v in extra.items()) if extra else ""
    logger.error("Error category=%s message=%s %s", category, message, extra_str)
