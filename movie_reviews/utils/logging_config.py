"""
Logging configuration for the movie reviews API.

Every record carries a request id: the request tracking middleware passes
it through ``extra``; records logged outside a request show ``-``.
"""

import logging
import sys
from pathlib import Path
from logging.handlers import RotatingFileHandler
from typing import Optional

LOG_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - [%(request_id)s] %(message)s'
DATE_FORMAT = '%Y-%m-%d %H:%M:%S'

# Libraries that are chatty at INFO
QUIET_LOGGERS = ('aiosqlite', 'uvicorn.access')


class RequestIdFilter(logging.Filter):
    """Default request_id for records logged outside a request."""

    def filter(self, record: logging.LogRecord) -> bool:
        if not hasattr(record, "request_id"):
            record.request_id = "-"
        return True


def _build_handler(handler: logging.Handler, level: int) -> logging.Handler:
    handler.setLevel(level)
    handler.setFormatter(logging.Formatter(fmt=LOG_FORMAT, datefmt=DATE_FORMAT))
    handler.addFilter(RequestIdFilter())
    return handler


def setup_logging(
    log_file: Optional[str] = None,
    level: str = "INFO",
    log_dir: str = "logs",
    max_bytes: int = 10 * 1024 * 1024,  # 10MB
    backup_count: int = 5,
    sql_echo: bool = False,
) -> None:
    """
    Configure root logging: stdout always, plus a rotating file when asked.

    Args:
        log_file: File name under log_dir (None logs to console only)
        level: Logging level name; unknown names fall back to INFO
        log_dir: Directory for log files
        max_bytes: Size at which the log file rotates
        backup_count: Rotated files to keep
        sql_echo: Log every SQL statement through sqlalchemy.engine
    """
    numeric_level = logging.getLevelName(level.upper())
    if not isinstance(numeric_level, int):
        numeric_level = logging.INFO

    root_logger = logging.getLogger()
    root_logger.setLevel(numeric_level)
    root_logger.handlers.clear()

    root_logger.addHandler(_build_handler(logging.StreamHandler(sys.stdout), numeric_level))

    if log_file:
        full_log_path = Path(log_dir) / log_file
        full_log_path.parent.mkdir(parents=True, exist_ok=True)
        file_handler = RotatingFileHandler(full_log_path, maxBytes=max_bytes, backupCount=backup_count)
        root_logger.addHandler(_build_handler(file_handler, numeric_level))
        root_logger.info("Logging to file: %s", full_log_path)

    for name in QUIET_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)
    logging.getLogger('sqlalchemy.engine').setLevel(logging.INFO if sql_echo else logging.WARNING)


def get_logger(name: str, level: Optional[str] = None) -> logging.Logger:
    """Logger for a script or module, optionally with its own level."""
    logger = logging.getLogger(name)
    if level:
        logger.setLevel(level.upper())
    return logger


def configure_api_logging(level: str = "INFO", log_file: Optional[str] = None, sql_echo: bool = False):
    """
    Configure logging for the API process.

    Args:
        level: Logging level name (LOG_LEVEL)
        log_file: Optional file name under logs/ (LOG_FILE)
        sql_echo: Mirror SQL statements into the log (SQL_ECHO)
    """
    setup_logging(log_file=log_file, level=level, log_dir="logs", sql_echo=sql_echo)
