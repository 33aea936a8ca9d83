"""Compliance checks."""

from typing import Any, Optional

from ..snapshot import SystemSnapshot
from .base_analyzer import BaseAnalyzer, Category, Finding, Severity


class ComplianceAnalyzer(BaseAnalyzer):
    """Access-control and posture checks driven by collector hints."""

    category = Category.COMPLIANCE

    def __init__(self, config: Optional[dict[str, Any]] = None):
        """Initialize compliance analyzer."""
        super().__init__(config)
        self.name = "ComplianceAnalyzer"

    def analyze(self, snapshot: SystemSnapshot) -> list[Finding]:
        """
        Analyze compliance factors.

        Args:
            snapshot: System snapshot

        Returns:
            Compliance findings
        """
        findings: list[Finding] = []

        findings.extend(self._check_ssh_access(snapshot))
        findings.extend(self._check_risk_level(snapshot))
        findings.extend(self._check_root_accounts(snapshot))

        return findings

    def _check_ssh_access(self, snapshot: SystemSnapshot) -> list[Finding]:
        if not snapshot.has_service("SSH"):
            return []

        return [
            self._create_finding(
                "ssh_access_available",
                title="SSH Access Available",
                severity=Severity.INFO,
                description="SSH access is available for system administration.",
                recommendation=(
                    "Ensure SSH is properly configured with key-based authentication "
                    "and logging enabled."
                ),
                affected_component="Access Control",
                risk_score=1,
            )
        ]

    def _check_risk_level(self, snapshot: SystemSnapshot) -> list[Finding]:
        """Translate the collector's precomputed risk level."""
        risk_level = snapshot.security.risk_level

        if risk_level == "high":
            return [
                self._create_finding(
                    "high_risk_configuration",
                    title="High Risk Configuration",
                    severity=Severity.HIGH,
                    description=(
                        "System configuration indicates high security risk due to "
                        "multiple exposed critical services."
                    ),
                    recommendation=(
                        "Immediate security hardening required. Review firewall rules "
                        "and service configurations."
                    ),
                    affected_component="Overall Security Posture",
                    risk_score=8,
                )
            ]

        if risk_level == "medium":
            return [
                self._create_finding(
                    "medium_risk_configuration",
                    title="Medium Risk Configuration",
                    severity=Severity.MEDIUM,
                    description="System configuration indicates medium security risk.",
                    recommendation=(
                        "Review security configuration and apply recommended "
                        "hardening measures."
                    ),
                    affected_component="Security Configuration",
                    risk_score=5,
                )
            ]

        return []

    def _check_root_accounts(self, snapshot: SystemSnapshot) -> list[Finding]:
        """More than one UID-0 account breaks individual accountability."""
        if snapshot.system is None or snapshot.system.uid0_accounts is None:
            return []

        accounts = snapshot.system.uid0_accounts
        if len(accounts) <= 1:
            return []

        return [
            self._create_finding(
                "multiple_root_users",
                title="Multiple Root Users",
                severity=Severity.CRITICAL,
                description=f"{len(accounts)} users with root privileges found: {', '.join(accounts)}",
                recommendation="Reduce the number of root users to the minimum necessary.",
                affected_component="User Management",
                risk_score=10,
            )
        ]
