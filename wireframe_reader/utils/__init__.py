"""
Utility modules for the wireframe reader.

Contains logging, URL handling utilities, and constants.
"""

from .log import setup_logger, get_logger
from .urls import resolve_url, is_same_domain, ensure_dir
from .constants import (
    DEFAULT_ROOT_URL,
    DEFAULT_USER_AGENT,
    DEFAULT_TIMEOUT,
    DEFAULT_CONCURRENCY,
    DEFAULT_CRAWL_DELAY,
    DEFAULT_OUTPUT_DIR,
)

__all__ = [
    "setup_logger",
    "get_logger",
    "resolve_url",
    "is_same_domain",
    "ensure_dir",
    "DEFAULT_ROOT_URL",
    "DEFAULT_USER_AGENT",
    "DEFAULT_TIMEOUT",
    "DEFAULT_CONCURRENCY",
    "DEFAULT_CRAWL_DELAY",
    "DEFAULT_OUTPUT_DIR",
]
