# ========================
# src/etlflow/utils/logging_setup.py
# ========================

"""
Logging Configuration

Logging setup for applications embedding the ETL engine. The library itself
only creates module loggers and never configures handlers on import.
"""

import logging
import sys
from pathlib import Path
from typing import Optional

from .config import Config

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"


def setup_logging(log_level: Optional[str] = None,
                  log_file: Optional[str] = None,
                  log_dir: str = "logs") -> None:
    """
    Set up logging configuration for an ETL run.

    Args:
        log_level (str): Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL);
            defaults to Config().LOG_LEVEL
        log_file (str): Optional log file name
        log_dir (str): Directory for log files
    """
    if log_level is None:
        log_level = Config().LOG_LEVEL
    level = getattr(logging, log_level.upper())
    formatter = logging.Formatter(LOG_FORMAT, DATE_FORMAT)

    # Configure root logger
    root_logger = logging.getLogger()
    root_logger.setLevel(level)

    # Clear existing handlers
    root_logger.handlers.clear()

    # Console handler
    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setLevel(level)
    console_handler.setFormatter(formatter)
    root_logger.addHandler(console_handler)

    # File handler (if specified)
    if log_file:
        log_path = Path(log_dir)
        log_path.mkdir(parents=True, exist_ok=True)
        file_path = log_path / log_file
        file_handler = logging.FileHandler(file_path)
        file_handler.setLevel(logging.DEBUG)  # File gets all messages
        file_handler.setFormatter(formatter)
        root_logger.addHandler(file_handler)

        logging.info(f"Logging to file: {file_path}")

    logging.info(f"Logging initialized - Level: {log_level}")


def get_logger(name: str) -> logging.Logger:
    """
    Get a logger with the specified name.

    Args:
        name (str): Logger name

    Returns:
        logging.Logger: Configured logger
    """
    return logging.getLogger(name)
