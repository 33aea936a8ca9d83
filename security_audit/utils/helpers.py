"""Helper utilities for the security audit engine."""

import ipaddress
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Optional

import yaml


def load_config(config_path: str = "config.yaml") -> dict[str, Any]:
    """
    Load configuration from YAML file.

    Args:
        config_path: Path to configuration file

    Returns:
        Configuration dictionary (empty for an empty file)

    Raises:
        FileNotFoundError: If config file doesn't exist
        yaml.YAMLError: If config file is invalid
    """
    path = Path(config_path)
    if not path.exists():
        raise FileNotFoundError(f"Configuration file not found: {config_path}")

    with open(path, "r") as f:
        return yaml.safe_load(f) or {}


def get_section(config: Optional[dict[str, Any]], section: str) -> dict[str, Any]:
    """Return a config section, tolerating a missing or null entry."""
    if not config:
        return {}
    return config.get(section) or {}


def format_timestamp(value: datetime, fmt: str = "%Y-%m-%d %H:%M:%S UTC") -> str:
    """
    Format a datetime as a human-readable UTC string.

    Args:
        value: Datetime (naive values are taken as UTC)
        fmt: Output format string

    Returns:
        Formatted datetime string
    """
    if value.tzinfo is None:
        value = value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc).strftime(fmt)


def utcnow() -> datetime:
    """Current time, timezone-aware."""
    return datetime.now(tz=timezone.utc)


def is_private_ip(ip: str) -> bool:
    """
    Check if an IP address is private (RFC 1918).

    Args:
        ip: IP address string

    Returns:
        True if IP is private, False otherwise
    """
    try:
        addr = ipaddress.ip_address(ip)
        return addr.is_private
    except ValueError:
        return False
