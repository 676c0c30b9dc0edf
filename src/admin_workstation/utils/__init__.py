"""Shared utility helpers for the admin workstation."""

from .logging import LoggingOptions, configure_logging, get_logger
from .sanitize import escape_like, sanitize_log_message, sanitize_search_text
from .time import utc_now, as_utc

__all__ = [
    "LoggingOptions",
    "configure_logging",
    "get_logger",
    "sanitize_search_text",
    "sanitize_log_message",
    "escape_like",
    "utc_now",
    "as_utc",
]
