"""Logging configuration for the Token Launcher.

Menus and results are printed with rich; log records are diagnostics and
go to stderr and, when a log file is given, to that file as well.
"""

import logging
import sys
from pathlib import Path
from typing import List, Optional, Union

DEFAULT_LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
LOG_FILE_NAME = "token-launcher.log"

# Libraries that log every request at INFO
NOISY_LOGGERS = ("httpx", "httpcore", "asyncio")


def configure_logging(
    log_level: str = "WARNING",
    log_file: Optional[Union[str, Path]] = None,
    log_format: str = DEFAULT_LOG_FORMAT
) -> None:
    """Configure the root logger.

    Args:
        log_level: Level name; unknown names fall back to WARNING
        log_file: Optional file that receives the same records as stderr
        log_format: Log format string
    """
    level = logging.getLevelName(log_level.upper())
    if not isinstance(level, int):
        level = logging.WARNING

    handlers: List[logging.Handler] = [logging.StreamHandler(sys.stderr)]
    if log_file is not None:
        handlers.append(logging.FileHandler(log_file, encoding="utf-8"))

    logging.basicConfig(level=level, format=log_format, handlers=handlers, force=True)

    for name in NOISY_LOGGERS:
        logging.getLogger(name).setLevel(max(level, logging.WARNING))


def get_logger(name: str) -> logging.Logger:
    return logging.getLogger(name)


def log_with_context(logger: logging.Logger, level: str, message: str, **context) -> None:
    """Log a message followed by `key=value` pairs.

    Args:
        logger: Logger instance
        level: Level name (debug, info, warning, error, critical)
        message: Log message
        context: Values appended to the message
    """
    log_method = getattr(logger, level.lower(), logger.info)
    if not context:
        log_method(message)
        return
    pairs = ", ".join(f"{key}={value!r}" for key, value in context.items())
    log_method(f"{message} [{pairs}]")
