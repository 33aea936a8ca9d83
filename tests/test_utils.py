"""Tests for utility helpers."""

import logging
from datetime import datetime, timezone
from pathlib import Path

import pytest
import yaml

from security_audit.utils import (
    format_timestamp,
    get_logger,
    get_section,
    is_private_ip,
    load_config,
    setup_logger,
)


class TestLoadConfig:
    """Tests for configuration loading."""

    def test_missing_file(self, tmp_path):
        """Test loading a missing config file."""
        with pytest.raises(FileNotFoundError):
            load_config(str(tmp_path / "config.yaml"))

    def test_empty_file(self, tmp_path):
        """Test loading an empty config file."""
        path = tmp_path / "config.yaml"
        path.write_text("")
        assert load_config(str(path)) == {}

    def test_invalid_yaml(self, tmp_path):
        """Test loading invalid YAML."""
        path = tmp_path / "config.yaml"
        path.write_text("detection: [unclosed\n")

        with pytest.raises(yaml.YAMLError):
            load_config(str(path))

    def test_shipped_config(self):
        """Test the bundled config.yaml."""
        config = load_config(str(Path(__file__).parent.parent / "config.yaml"))

        assert config["detection"]["high_risk_countries"] == ["CN", "RU", "KP"]
        assert config["analysis"]["parallel"] is True

    def test_get_section(self):
        """Test config section lookup."""
        assert get_section(None, "detection") == {}
        assert get_section({"detection": None}, "detection") == {}
        assert get_section({"detection": {"spike_factor": 4}}, "detection") == {"spike_factor": 4}


class TestHelpers:
    """Tests for small helpers."""

    def test_format_timestamp(self):
        """Test timestamp formatting."""
        value = datetime(2024, 1, 1, 12, 30, tzinfo=timezone.utc)
        assert format_timestamp(value) == "2024-01-01 12:30:00 UTC"

    def test_format_naive_timestamp(self):
        """Test formatting a naive timestamp."""
        assert format_timestamp(datetime(2024, 1, 1), "%H:%M") == "00:00"

    @pytest.mark.parametrize(
        "ip,expected",
        [("10.1.2.3", True), ("192.168.0.1", True), ("8.8.8.8", False), ("not-an-ip", False)],
    )
    def test_is_private_ip(self, ip, expected):
        """Test private IP detection."""
        assert is_private_ip(ip) is expected


class TestLogger:
    """Tests for logger setup."""

    def test_get_logger_in_package_hierarchy(self):
        """Test logger naming."""
        assert get_logger("tests.module").name == "security_audit.tests.module"
        assert get_logger("security_audit.engine").name == "security_audit.engine"

    def test_setup_logger_attaches_handlers_once(self):
        """Test repeated logger setup."""
        name = "security_audit.test_once"

        logger = setup_logger(name, level="DEBUG")
        handlers = len(logger.handlers)
        setup_logger(name, level="WARNING")

        assert len(logger.handlers) == handlers
        assert logger.level == logging.WARNING
