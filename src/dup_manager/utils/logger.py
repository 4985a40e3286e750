"""Logging configuration for dup-manager."""

import logging
import sys


def setup_logger(name: str = "dup_manager", level: int = logging.INFO) -> logging.Logger:
    """
    Set up a logger with console output.

    Module loggers are created with logging.getLogger(__name__) and propagate
    to the package logger configured here.

    Args:
        name: Logger name
        level: Logging level (default: INFO)

    Returns:
        Configured logger instance
    """
    logger = logging.getLogger(name)
    logger.setLevel(level)

    # Remove existing handlers to avoid duplicates
    logger.handlers.clear()

    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setLevel(level)
    console_handler.setFormatter(logging.Formatter(fmt="%(levelname)s: %(message)s"))
    logger.addHandler(console_handler)

    return logger
