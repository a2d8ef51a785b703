"""Logging helpers shared across redditkit."""

from redditkit.utils.logger import get_logger, log_api_call, setup_logging

__all__ = [
    "get_logger",
    "log_api_call",
    "setup_logging",
]
