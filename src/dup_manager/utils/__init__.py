"""Utility functions for configuration and logging."""

from dup_manager.utils.config import Config
from dup_manager.utils.logger import setup_logger

__all__ = ["Config", "setup_logger"]
