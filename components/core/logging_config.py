"""
Logging configuration for the finance tracker.

Provides centralized logging setup shared by all modules: a console handler,
a rotating general log file and a separate rotating error log.
"""

import logging
import logging.handlers
import os
from typing import Optional

APP_LOG_NAME = "app.log"
ERROR_LOG_NAME = "errors.log"


def setup_logging(level: str = "INFO", log_dir: Optional[str] = None) -> None:
    """
    Configure application-wide logging.

    Sets up:
    - Console handler for development feedback
    - Rotating file handler for general logs
    - Separate error log file

    Args:
        level: Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        log_dir: Directory for log files. File handlers are skipped when empty.
    """
    log_level = getattr(logging, level.upper(), logging.INFO)

    detailed_formatter = logging.Formatter(
        fmt='%(asctime)s | %(levelname)-8s | %(name)s:%(funcName)s:%(lineno)d | %(message)s',
        datefmt='%Y-%m-%d %H:%M:%S'
    )

    simple_formatter = logging.Formatter(
        fmt='%(asctime)s | %(levelname)-8s | %(message)s',
        datefmt='%H:%M:%S'
    )

    root_logger = logging.getLogger()
    root_logger.setLevel(log_level)
    root_logger.handlers.clear()

    console_handler = logging.StreamHandler()
    console_handler.setLevel(log_level)
    console_handler.setFormatter(simple_formatter)
    root_logger.addHandler(console_handler)

    if log_dir:
        os.makedirs(log_dir, exist_ok=True)

        # 10MB max, keep 5 backups
        file_handler = logging.handlers.RotatingFileHandler(
            os.path.join(log_dir, APP_LOG_NAME),
            maxBytes=10*1024*1024,
            backupCount=5,
            encoding='utf-8'
        )
        file_handler.setLevel(log_level)
        file_handler.setFormatter(detailed_formatter)
        root_logger.addHandler(file_handler)

        error_handler = logging.handlers.RotatingFileHandler(
            os.path.join(log_dir, ERROR_LOG_NAME),
            maxBytes=5*1024*1024,
            backupCount=3,
            encoding='utf-8'
        )
        error_handler.setLevel(logging.ERROR)
        error_handler.setFormatter(detailed_formatter)
        root_logger.addHandler(error_handler)

    logging.getLogger("uvicorn.access").setLevel(logging.INFO)
    logging.getLogger("uvicorn.error").setLevel(logging.INFO)
    logging.getLogger("sqlalchemy.engine").setLevel(logging.WARNING)

    root_logger.info(f"Logging configured at level: {level}")
    if log_dir:
        root_logger.info(f"Log directory: {log_dir}")


def get_logger(name: str) -> logging.Logger:
    """
    Get a logger for a specific module.

    Args:
        name: Usually __name__ of the calling module

    Returns:
        Logger instance
    """
    return logging.getLogger(name)
