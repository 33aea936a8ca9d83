"""Tests for the command line interface."""

import json

import pytest

import main

SNAPSHOT_DOC = {
    "services": [{"name": "SSH", "port": 22}, {"name": "MySQL", "port": 3306}],
    "server": {"ip": "10.0.0.5", "hostname": "db01", "os": "Debian 12"},
    "network": {"firewallActive": False},
    "security": {"riskLevel": "medium"},
}


@pytest.fixture
def no_config(tmp_path, monkeypatch):
    """Point the CLI at a config file that does not exist."""
    monkeypatch.delenv("SECURITY_AUDIT_LOG_LEVEL", raising=False)
    return str(tmp_path / "missing.yaml")


class TestParseArgs:
    """Tests for argument parsing."""

    def test_audit_defaults(self):
        """Test audit argument defaults."""
        args = main.parse_args(["audit", "snapshot.json"])

        assert args.command == "audit"
        assert args.snapshot_file == "snapshot.json"
        assert args.format == "markdown"
        assert args.output is None

    def test_traffic_options(self):
        """Test traffic options."""
        args = main.parse_args(["traffic", "samples.json", "-f", "json", "-o", "out.json", "-v"])

        assert args.samples_file == "samples.json"
        assert args.format == "json"
        assert args.output == "out.json"
        assert args.verbose

    def test_rejects_pdf(self):
        """Test that PDF output is not offered."""
        with pytest.raises(SystemExit):
            main.parse_args(["audit", "snapshot.json", "-f", "pdf"])


class TestMain:
    """Tests for main()."""

    def test_no_command(self):
        """Test running without a subcommand."""
        assert main.main([]) == 1

    def test_audit(self, tmp_path, no_config, capsys):
        """Test the audit command."""
        snapshot = tmp_path / "snapshot.json"
        snapshot.write_text(json.dumps(SNAPSHOT_DOC))
        output = tmp_path / "audit.json"

        code = main.main(
            ["audit", str(snapshot), "-f", "json", "-o", str(output), "-c", no_config]
        )

        assert code == 0
        data = json.loads(output.read_text(encoding="utf-8"))
        assert data["target"] == "db01"
        assert "database_services_exposed" in [f["id"] for f in data["findings"]]
        assert "Overall Score:" in capsys.readouterr().out

    def test_traffic(self, tmp_path, no_config):
        """Test the traffic command."""
        samples = [
            {
                "timestamp": f"2024-01-01T12:00:{i:02d}Z",
                "source": "185.220.101.4",
                "destination": "10.0.0.5",
                "protocol": "TCP",
                "port": 22,
            }
            for i in range(51)
        ]
        path = tmp_path / "samples.json"
        path.write_text(json.dumps(samples))
        output = tmp_path / "traffic.md"

        code = main.main(["traffic", str(path), "-o", str(output), "-c", no_config])

        assert code == 0
        content = output.read_text(encoding="utf-8")
        assert "SSH-Brute-Force-Angriff" in content
        assert "185.220.101.4" in content

    def test_missing_input(self, tmp_path, no_config, capsys):
        """Test a missing input file."""
        code = main.main(["audit", str(tmp_path / "nope.json"), "-c", no_config])

        assert code == 1
        assert "Error:" in capsys.readouterr().err

    def test_invalid_input(self, tmp_path, no_config):
        """Test a traffic record missing fields."""
        path = tmp_path / "samples.json"
        path.write_text(json.dumps([{"source": "a"}]))

        assert main.main(["traffic", str(path), "-c", no_config]) == 1

    def test_malformed_snapshot(self, tmp_path, no_config, capsys):
        """Test that a snapshot with the wrong shape exits with an error message."""
        path = tmp_path / "snapshot.json"
        path.write_text(json.dumps({"services": ["SSH"]}))

        code = main.main(["audit", str(path), "-c", no_config])

        assert code == 1
        assert "Error:" in capsys.readouterr().err

    def test_config_file(self, tmp_path, monkeypatch):
        """Test reporting settings from a config file."""
        monkeypatch.delenv("SECURITY_AUDIT_LOG_LEVEL", raising=False)
        config = tmp_path / "config.yaml"
        config.write_text("reporting:\n  title: Nightly Audit\n")
        snapshot = tmp_path / "snapshot.json"
        snapshot.write_text(json.dumps(SNAPSHOT_DOC))
        output = tmp_path / "audit.md"

        code = main.main(["audit", str(snapshot), "-o", str(output), "-c", str(config)])

        assert code == 0
        assert output.read_text(encoding="utf-8").startswith("# Nightly Audit")
