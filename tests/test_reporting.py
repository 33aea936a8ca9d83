"""Tests for report generation and exporters."""

import json
from datetime import datetime, timezone

import pytest

from security_audit.analyzers.base_analyzer import Category, Finding, Severity
from security_audit.engine import AuditResult
from security_audit.reporting import (
    JSONExporter,
    MarkdownExporter,
    ReportGenerator,
    get_exporter,
)
from security_audit.scoring import calculate_scores
from security_audit.summary import generate_summary
from security_audit.traffic import Anomaly

GENERATED = datetime(2024, 3, 1, 8, 30, tzinfo=timezone.utc)


def create_test_result() -> AuditResult:
    """Create an AuditResult with mixed severities."""
    findings = [
        Finding("low_one", "Low One", Severity.LOW, Category.NETWORK_SECURITY, "D", "Shared fix"),
        Finding("crit_one", "Crit One", Severity.CRITICAL, Category.CONFIGURATION, "D", "Urgent fix"),
        Finding("high_one", "High One", Severity.HIGH, Category.COMPLIANCE, "D", "Shared fix"),
    ]
    scores = calculate_scores(findings)
    return AuditResult(findings, scores, generate_summary(findings, scores), GENERATED)


def create_test_anomalies() -> list[Anomaly]:
    return [
        Anomaly("Traffic-Spike", Severity.MEDIUM, "Spike", GENERATED, (), "Analyse traffic"),
        Anomaly(
            "SSH-Brute-Force-Angriff",
            Severity.CRITICAL,
            "Brute force",
            GENERATED,
            ("185.220.101.4", "10.0.0.7"),
            "Block IP",
        ),
    ]


class TestReportGenerator:
    """Tests for ReportGenerator."""

    def test_audit_report(self):
        """Test building an audit report."""
        report = ReportGenerator().generate(result=create_test_result(), target="web01")

        assert report.title == "Security Audit Report"
        assert report.target == "web01"
        assert [f.id for f in report.findings] == ["crit_one", "high_one", "low_one"]
        assert report.critical_count == 1
        assert report.high_count == 1
        assert report.low_count == 1
        assert report.scores["overall"] == 57
        assert report.generated_at == "2024-03-01 08:30:00 UTC"
        assert report.anomalies == []

    def test_recommendations_prioritised_and_unique(self):
        """Test recommendation ordering and de-duplication."""
        report = ReportGenerator().generate(result=create_test_result())
        assert report.recommendations == ["Urgent fix", "Shared fix"]

    def test_traffic_report(self):
        """Test building a traffic report."""
        report = ReportGenerator().generate(anomalies=create_test_anomalies(), target="capture")

        assert report.findings == []
        assert report.scores == {}
        assert [a.type for a in report.anomalies] == ["SSH-Brute-Force-Angriff", "Traffic-Spike"]
        assert report.internal_ips == ["10.0.0.7"]
        assert report.external_ips == ["185.220.101.4"]
        assert report.recommendations == ["Block IP", "Analyse traffic"]

    def test_report_id_stable_for_same_input(self):
        """Test report id stability."""
        generator = ReportGenerator()
        result = create_test_result()

        first = generator.generate(result=result, target="web01")
        second = generator.generate(result=result, target="web01")

        assert first.report_id == second.report_id
        assert len(first.report_id) == 12

    def test_config(self):
        """Test reporting configuration."""
        config = {"reporting": {"title": "Quarterly Audit", "max_recommendations": 1}}

        report = ReportGenerator(config).generate(result=create_test_result())

        assert report.title == "Quarterly Audit"
        assert report.recommendations == ["Urgent fix"]

    def test_to_dict_groups_by_severity(self):
        """Test findings grouped by severity."""
        data = ReportGenerator().generate(result=create_test_result()).to_dict()

        assert [f["id"] for f in data["findings_by_severity"]["critical"]] == ["crit_one"]
        assert data["findings_by_severity"]["medium"] == []
        assert data["total_findings"] == 3


class TestExporters:
    """Tests for report exporters."""

    def test_markdown_audit(self, tmp_path):
        """Test Markdown export of an audit."""
        report = ReportGenerator().generate(result=create_test_result(), target="web01")

        path = MarkdownExporter().export(report, str(tmp_path / "out" / "report.md"))
        content = (tmp_path / "out" / "report.md").read_text(encoding="utf-8")

        assert path.endswith("report.md")
        assert content.startswith("# Security Audit Report")
        assert "**Target:** web01" in content
        assert "| Overall | 57/100 |" in content
        assert "### CRITICAL Severity" in content
        assert "`crit_one`" in content
        assert "1. Urgent fix" in content
        assert "Traffic Anomalies" not in content

    def test_markdown_traffic(self):
        """Test Markdown export of anomalies."""
        report = ReportGenerator().generate(anomalies=create_test_anomalies())

        content = MarkdownExporter().render(report)

        assert "## Traffic Anomalies" in content
        assert "185.220.101.4, 10.0.0.7" in content
        assert "### External IP Addresses" in content
        assert "## Scores" not in content

    def test_markdown_custom_template(self, tmp_path):
        """Test overriding the Markdown template."""
        (tmp_path / "report.md.j2").write_text("custom {{ title }}")
        report = ReportGenerator().generate(result=create_test_result())

        assert MarkdownExporter(str(tmp_path)).render(report) == "custom Security Audit Report"

    def test_json(self, tmp_path):
        """Test JSON export."""
        report = ReportGenerator().generate(
            result=create_test_result(), anomalies=create_test_anomalies()
        )

        JSONExporter().export(report, str(tmp_path / "report.json"))
        data = json.loads((tmp_path / "report.json").read_text(encoding="utf-8"))

        assert data["scores"]["overall"] == 57
        assert data["findings"][0]["riskScore"] == 0
        assert data["anomalies"][0]["affectedIPs"] == ["185.220.101.4", "10.0.0.7"]
        assert data["anomalies"][0]["type"] == "SSH-Brute-Force-Angriff"

    @pytest.mark.parametrize(
        "format_type,cls",
        [("markdown", MarkdownExporter), ("MD", MarkdownExporter), ("json", JSONExporter)],
    )
    def test_get_exporter(self, format_type, cls):
        """Test exporter lookup."""
        assert isinstance(get_exporter(format_type), cls)

    def test_unsupported_format(self):
        """Test rejecting an unknown format."""
        with pytest.raises(ValueError):
            get_exporter("pdf")
