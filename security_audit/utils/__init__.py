"""Utility modules."""

from .logger import setup_logger, get_logger
from .helpers import (
    load_config,
    get_section,
    format_timestamp,
    utcnow,
    is_private_ip,
)

__all__ = [
    "setup_logger",
    "get_logger",
    "load_config",
    "get_section",
    "format_timestamp",
    "utcnow",
    "is_private_ip",
]
