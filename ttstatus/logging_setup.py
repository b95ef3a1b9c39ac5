"""Logging configuration for tt-status"""

import logging
import sys
from typing import Optional

_logger: Optional[logging.Logger] = None


def setup_logging(log_level: str = "WARNING", log_file: str = None,
                  debug: bool = False) -> logging.Logger:
    """
    Setup and configure logging for the application.

    Console output goes to stderr, stdout carries the status report.

    Args:
        log_level: Logging level (DEBUG, INFO, WARNING, ERROR)
        log_file: Optional file path for logging output
        debug: Force DEBUG level and let pymodbus log its frame trace

    Returns:
        Configured logger instance
    """
    global _logger

    logger = logging.getLogger("tt_status")
    if debug:
        log_level = "DEBUG"
    logger.setLevel(getattr(logging, log_level.upper(), logging.WARNING))

    # Clear any existing handlers
    logger.handlers = []

    formatter = logging.Formatter(
        fmt="%(asctime)s - %(levelname)s - %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S"
    )

    console_handler = logging.StreamHandler(sys.stderr)
    console_handler.setFormatter(formatter)
    logger.addHandler(console_handler)

    if log_file:
        file_handler = logging.FileHandler(log_file)
        file_handler.setFormatter(formatter)
        logger.addHandler(file_handler)

    _logger = logger
    return logger


def get_logger() -> logging.Logger:
    """
    Get the configured logger instance.

    Returns:
        Logger instance, creates default if not configured
    """
    global _logger

    if _logger is None:
        _logger = setup_logging()

    return _logger
