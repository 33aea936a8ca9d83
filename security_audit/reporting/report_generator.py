"""Security audit report generator."""

import hashlib
from dataclasses import dataclass
from typing import Any, Optional

from ..analyzers.base_analyzer import Finding, Severity
from ..engine import AuditResult
from ..traffic import Anomaly
from ..utils.helpers import format_timestamp, get_section, is_private_ip, utcnow
from ..utils.logger import get_logger

logger = get_logger(__name__)

DEFAULT_TITLE = "Security Audit Report"


@dataclass
class ReportData:
    """Container for all report data."""

    # Metadata
    report_id: str
    title: str
    generated_at: str
    target: str

    # Audit
    summary: str
    scores: dict[str, int]
    findings: list[Finding]
    critical_count: int
    high_count: int
    medium_count: int
    low_count: int
    info_count: int

    # Traffic
    anomalies: list[Anomaly]
    internal_ips: list[str]
    external_ips: list[str]

    # Recommendations
    recommendations: list[str]

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for template rendering."""
        return {
            "report_id": self.report_id,
            "title": self.title,
            "generated_at": self.generated_at,
            "target": self.target,
            "summary": self.summary,
            "scores": self.scores,
            "findings": [f.to_dict() for f in self.findings],
            "findings_by_severity": {
                severity.value: [f.to_dict() for f in self.findings if f.severity == severity]
                for severity in Severity
            },
            "critical_count": self.critical_count,
            "high_count": self.high_count,
            "medium_count": self.medium_count,
            "low_count": self.low_count,
            "info_count": self.info_count,
            "total_findings": len(self.findings),
            "anomalies": [a.to_dict() for a in self.anomalies],
            "total_anomalies": len(self.anomalies),
            "internal_ips": self.internal_ips,
            "external_ips": self.external_ips,
            "recommendations": self.recommendations,
        }


class ReportGenerator:
    """Generate reports from audit results and traffic anomalies."""

    def __init__(self, config: Optional[dict[str, Any]] = None):
        """
        Initialize report generator.

        Args:
            config: Configuration dictionary
        """
        self.config = config or {}
        self.report_config = get_section(self.config, "reporting")
        self.title = self.report_config.get("title", DEFAULT_TITLE)
        self.max_recommendations = self.report_config.get("max_recommendations", 20)

    def generate(
        self,
        result: Optional[AuditResult] = None,
        anomalies: Optional[list[Anomaly]] = None,
        target: str = "",
    ) -> ReportData:
        """
        Generate a report.

        Either part may be omitted; an audit-only report has no traffic
        section and vice versa.

        Args:
            result: Audit result
            anomalies: Traffic anomalies
            target: Name of the audited host or traffic source

        Returns:
            ReportData containing all report information
        """
        logger.info("Generating security report...")

        findings = sorted(result.findings, key=lambda f: f.severity.rank) if result else []
        anomalies = sorted(anomalies or [], key=lambda a: a.severity.rank)

        affected = sorted({ip for a in anomalies for ip in a.affected_ips})
        generated = result.timestamp if result else utcnow()

        report_data = ReportData(
            report_id=self._generate_report_id(generated.isoformat(), target),
            title=self.title,
            generated_at=format_timestamp(generated),
            target=target,
            summary=result.summary if result else "",
            scores=result.scores.to_dict() if result else {},
            findings=findings,
            critical_count=result.critical_count if result else 0,
            high_count=result.high_count if result else 0,
            medium_count=result.medium_count if result else 0,
            low_count=result.low_count if result else 0,
            info_count=result.info_count if result else 0,
            anomalies=anomalies,
            internal_ips=[ip for ip in affected if is_private_ip(ip)],
            external_ips=[ip for ip in affected if not is_private_ip(ip)],
            recommendations=self._generate_recommendations(findings, anomalies),
        )

        logger.info(
            f"Report generated: {len(findings)} findings, {len(anomalies)} anomalies"
        )

        return report_data

    def _generate_report_id(self, generated: str, target: str) -> str:
        """Generate report ID from generation time and target."""
        return hashlib.sha256(f"{generated}|{target}".encode()).hexdigest()[:12].upper()

    def _generate_recommendations(
        self, findings: list[Finding], anomalies: list[Anomaly]
    ) -> list[str]:
        """Prioritized, de-duplicated recommendations, most severe first."""
        ranked = [(f.severity.rank, f.recommendation) for f in findings]
        ranked += [(a.severity.rank, a.recommendation) for a in anomalies]

        recommendations: list[str] = []
        seen: set[str] = set()

        # sorted() is stable, so equal severities keep their input order
        for _, rec in sorted(ranked, key=lambda r: r[0]):
            if rec not in seen:
                recommendations.append(rec)
                seen.add(rec)

        return recommendations[: self.max_recommendations]
