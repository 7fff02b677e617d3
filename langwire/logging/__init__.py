"""Logging utilities."""

from .utils import configure_logging, setup_file_logger

__all__ = ["configure_logging", "setup_file_logger"]
