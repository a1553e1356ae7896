"""Logging configuration for the cmsclient CLI.

Library modules only create module loggers. Handlers are attached here by the
application embedding the client; the CLI derives everything from the
`logging.*` settings (see `configure_logging`).
"""

import logging
import sys
from logging.handlers import RotatingFileHandler
from typing import Optional, Union

from cmsclient.infrastructure.config.settings import get_log_settings

DEFAULT_LOG_LEVEL = logging.WARNING
DEFAULT_LOG_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'
LOG_FILE_MAX_BYTES = 1_000_000
LOG_FILE_BACKUPS = 3

# httpx and httpcore log every request line at INFO; those records are only
# let through when the application itself runs at DEBUG.
HTTP_LIBRARY_LOGGERS = ("httpx", "httpcore")


def resolve_level(level: Union[int, str, None]) -> int:
    """Accepts logging.DEBUG-style ints or names like 'debug'."""
    if level is None:
        return DEFAULT_LOG_LEVEL
    if isinstance(level, int):
        return level
    resolved = logging.getLevelName(str(level).upper())
    return resolved if isinstance(resolved, int) else DEFAULT_LOG_LEVEL


def setup_logging(
    log_level: Union[int, str, None] = DEFAULT_LOG_LEVEL,
    log_format: Optional[str] = None,
    log_file: Optional[str] = None,
) -> int:
    """Installs fresh root handlers and returns the effective level.

    Args:
        log_level: Minimum level, as an int or a level name.
        log_format: Format string for records; the default includes the logger name.
        log_file: Optional path of a size-rotated log file.
    """
    level = resolve_level(log_level)
    root_logger = logging.getLogger()
    root_logger.setLevel(level)

    for handler in root_logger.handlers[:]:
        root_logger.removeHandler(handler)

    formatter = logging.Formatter(log_format or DEFAULT_LOG_FORMAT)

    # stderr keeps tables and JSON on stdout pipeable
    console_handler = logging.StreamHandler(sys.stderr)
    console_handler.setFormatter(formatter)
    root_logger.addHandler(console_handler)

    if log_file:
        try:
            file_handler = RotatingFileHandler(
                log_file, maxBytes=LOG_FILE_MAX_BYTES, backupCount=LOG_FILE_BACKUPS, encoding='utf-8'
            )
            file_handler.setFormatter(formatter)
            root_logger.addHandler(file_handler)
        except OSError as e:
            logging.error(f"Failed to set up file logging to {log_file}: {e}")

    http_level = level if level <= logging.DEBUG else max(level, logging.WARNING)
    for name in HTTP_LIBRARY_LOGGERS:
        logging.getLogger(name).setLevel(http_level)

    logging.debug(f"Logging configured. Level={logging.getLevelName(level)}, file={log_file}")
    return level


def configure_logging(verbose: bool = False) -> int:
    """Applies the `logging.level`, `logging.format` and `logging.file` settings.

    `verbose` (the CLI's --verbose flag) forces DEBUG regardless of the
    configured level.
    """
    log_settings = get_log_settings()
    level = logging.DEBUG if verbose else log_settings["level"]
    return setup_logging(log_level=level, log_format=log_settings["format"], log_file=log_settings["file"])
