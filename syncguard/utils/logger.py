"""
Logging Setup

Configures the ``syncguard`` logger: a console handler plus an optional
rotating debug log, both either plain text or JSON.

Author: SyncGuard Project
License: MIT
"""

import logging
import sys
from pathlib import Path
from logging.handlers import RotatingFileHandler
from pythonjsonlogger import jsonlogger
from typing import Optional

ROOT_LOGGER_NAME = "syncguard"

DATE_FORMAT = '%Y-%m-%d %H:%M:%S'
CONSOLE_FIELDS = '[%(asctime)s] %(levelname)s - %(name)s - %(message)s'
FILE_FIELDS = '[%(asctime)s] %(levelname)s - %(name)s - %(module)s:%(funcName)s:%(lineno)d - %(message)s'
JSON_CONSOLE_FIELDS = '%(asctime)s %(name)s %(levelname)s %(message)s'
JSON_FILE_FIELDS = '%(asctime)s %(name)s %(levelname)s %(module)s %(funcName)s %(lineno)d %(message)s'


class LevelColorFormatter(logging.Formatter):
    """Plain-text console formatter that colors the level name."""

    LEVEL_COLORS = {
        logging.DEBUG: '\033[36m',
        logging.INFO: '\033[32m',
        logging.WARNING: '\033[33m',
        logging.ERROR: '\033[31m',
        logging.CRITICAL: '\033[35m',
    }
    RESET = '\033[0m'

    def format(self, record):
        original = record.levelname
        color = self.LEVEL_COLORS.get(record.levelno)
        if color:
            record.levelname = f"{color}{original}{self.RESET}"
        try:
            return super().format(record)
        finally:
            # Other handlers see the same record
            record.levelname = original


def _console_formatter(json_format: bool) -> logging.Formatter:
    if json_format:
        return jsonlogger.JsonFormatter(JSON_CONSOLE_FIELDS)
    return LevelColorFormatter(CONSOLE_FIELDS, datefmt=DATE_FORMAT)


def _file_formatter(json_format: bool) -> logging.Formatter:
    if json_format:
        return jsonlogger.JsonFormatter(JSON_FILE_FIELDS)
    return logging.Formatter(FILE_FIELDS, datefmt=DATE_FORMAT)


def setup_logging(
    log_level: str = "INFO",
    log_to_file: bool = True,
    log_file_path: Optional[str] = None,
    log_rotation_size: int = 10485760,  # 10MB
    log_retention_count: int = 5,
    json_format: bool = False
) -> logging.Logger:
    """
    Configure the ``syncguard`` logger, replacing any earlier setup.

    Args:
        log_level: DEBUG, INFO, WARNING, ERROR or CRITICAL
        log_to_file: Also write to a rotating log file
        log_file_path: Debug log location (required with log_to_file)
        log_rotation_size: Bytes before the file is rotated
        log_retention_count: Rotated files to keep
        json_format: Emit JSON records instead of text

    Returns:
        The configured logger
    """
    level_name = str(log_level).upper()
    level = getattr(logging, level_name)

    if log_to_file and not log_file_path:
        raise ValueError("log_file_path is required when log_to_file is enabled")

    logger = logging.getLogger(ROOT_LOGGER_NAME)
    logger.setLevel(level)
    logger.propagate = False

    for old in list(logger.handlers):
        logger.removeHandler(old)
        old.close()

    handlers = [logging.StreamHandler(sys.stdout)]
    handlers[0].setFormatter(_console_formatter(json_format))

    if log_to_file:
        log_path = Path(log_file_path)
        log_path.parent.mkdir(parents=True, exist_ok=True)
        rotating = RotatingFileHandler(
            str(log_path),
            maxBytes=log_rotation_size,
            backupCount=log_retention_count,
            encoding='utf-8'
        )
        rotating.setFormatter(_file_formatter(json_format))
        handlers.append(rotating)

    for handler in handlers:
        handler.setLevel(level)
        logger.addHandler(handler)

    logger.info(f"Logging initialized at {level_name} level")
    if log_to_file:
        logger.info(f"File logging enabled: {log_file_path}")

    return logger


def setup_logging_from_config(config) -> logging.Logger:
    """Configure logging from a loaded Config, writing to its debug log path."""
    from ..config.config_loader import debug_log_path

    app = config.app
    return setup_logging(
        log_level=getattr(app.log_level, "value", app.log_level),
        log_to_file=app.log_to_file,
        log_file_path=str(debug_log_path(config)),
        log_rotation_size=app.log_rotation_size,
        log_retention_count=app.log_retention_count,
        json_format=app.json_format
    )


def get_logger(name: str) -> logging.Logger:
    """
    Get a logger below ``syncguard`` for a module.

    Args:
        name: Logger name (typically __name__)

    Returns:
        Logger instance
    """
    if name == ROOT_LOGGER_NAME or name.startswith(f"{ROOT_LOGGER_NAME}."):
        return logging.getLogger(name)
    return logging.getLogger(f"{ROOT_LOGGER_NAME}.{name}")
