"""Service exposure analysis."""

from typing import Any, Optional

from ..snapshot import SystemSnapshot
from .base_analyzer import BaseAnalyzer, Category, Finding, Severity

DATABASE_SERVICES = ("MySQL", "PostgreSQL", "MongoDB", "Redis")

# Legacy daemons that send credentials in clear text
DANGEROUS_UNITS = ("telnet", "rsh", "rlogin", "tftp")


class ServiceSecurityAnalyzer(BaseAnalyzer):
    """Flag exposed databases, unencrypted web services and legacy daemons."""

    category = Category.SERVICE_SECURITY

    def __init__(self, config: Optional[dict[str, Any]] = None):
        """Initialize service security analyzer."""
        super().__init__(config)
        self.name = "ServiceSecurityAnalyzer"

    def analyze(self, snapshot: SystemSnapshot) -> list[Finding]:
        """
        Analyze the visible services.

        With no visible services the only finding is a visibility notice.

        Args:
            snapshot: System snapshot

        Returns:
            Service security findings
        """
        if not snapshot.visible_services:
            return [self._limited_visibility()]

        findings: list[Finding] = []

        findings.extend(self._check_databases(snapshot))
        findings.extend(self._check_web_encryption(snapshot))
        findings.extend(self._check_running_units(snapshot))

        return findings

    def _limited_visibility(self) -> Finding:
        return self._create_finding(
            "limited_service_visibility",
            title="Limited Service Visibility",
            severity=Severity.INFO,
            description="Limited visibility into running services due to network-based scanning.",
            recommendation="For complete service analysis, consider enabling agent-based monitoring.",
            affected_component="Service Discovery",
            risk_score=1,
        )

    def _check_databases(self, snapshot: SystemSnapshot) -> list[Finding]:
        """Database ports reachable from the network."""
        databases = [s for s in snapshot.visible_services if s.name in DATABASE_SERVICES]
        if not databases:
            return []

        return [
            self._create_finding(
                "database_services_exposed",
                title="Database Services Exposed",
                severity=Severity.HIGH,
                description=(
                    "Database services are accessible from the network: "
                    f"{', '.join(s.name for s in databases)}"
                ),
                recommendation=(
                    "Restrict database access to localhost or specific IP ranges. "
                    "Use proper authentication and encryption."
                ),
                affected_component="Database Configuration",
                risk_score=9,
            )
        ]

    def _check_web_encryption(self, snapshot: SystemSnapshot) -> list[Finding]:
        """Web services served over plain HTTP."""
        http_only = [s for s in snapshot.visible_services if s.protocol == "http"]
        if not http_only:
            return []

        return [
            self._create_finding(
                "unencrypted_web_services",
                title="Unencrypted Web Services",
                severity=Severity.MEDIUM,
                description=f"{len(http_only)} web service(s) are running without encryption.",
                recommendation="Implement HTTPS/TLS encryption for all web services.",
                affected_component="Web Server Configuration",
                risk_score=5,
            )
        ]

    def _check_running_units(self, snapshot: SystemSnapshot) -> list[Finding]:
        """Insecure daemons in the host's service list (authenticated collection only)."""
        if snapshot.system is None:
            return []

        units = [unit.lower() for unit in snapshot.system.running_services]
        findings: list[Finding] = []

        for daemon in DANGEROUS_UNITS:
            if any(daemon in unit for unit in units):
                findings.append(
                    self._create_finding(
                        f"insecure_service_{daemon}",
                        title=f"Insecure Service: {daemon}",
                        severity=Severity.HIGH,
                        description=f"The insecure service {daemon} is running.",
                        recommendation=f"Disable {daemon} and use secure alternatives.",
                        affected_component="System Services",
                        risk_score=8,
                    )
                )

        return findings
