"""Network exposure analysis."""

from typing import Any, Optional

from ..snapshot import SystemSnapshot
from .base_analyzer import BaseAnalyzer, Category, Finding, Severity

# Remote-access services that should rarely be exposed together
CRITICAL_SERVICES = ("SSH", "RDP", "FTP", "Telnet")
INSECURE_PROTOCOLS = ("FTP", "Telnet", "HTTP")
MAX_CRITICAL_SERVICES = 3


class NetworkSecurityAnalyzer(BaseAnalyzer):
    """Flag risky network exposure: remote-access services, plaintext protocols, firewall state."""

    category = Category.NETWORK_SECURITY

    def __init__(self, config: Optional[dict[str, Any]] = None):
        """Initialize network security analyzer."""
        super().__init__(config)
        self.name = "NetworkSecurityAnalyzer"

    def analyze(self, snapshot: SystemSnapshot) -> list[Finding]:
        """
        Analyze exposed services and network facts.

        Args:
            snapshot: System snapshot

        Returns:
            Network security findings
        """
        findings: list[Finding] = []

        findings.extend(self._check_critical_services(snapshot))
        findings.extend(self._check_insecure_protocols(snapshot))
        findings.extend(self._check_ssh_port(snapshot))
        findings.extend(self._check_firewall(snapshot))

        return findings

    def _check_critical_services(self, snapshot: SystemSnapshot) -> list[Finding]:
        """Too many remote-access services exposed at once."""
        exposed = [s for s in snapshot.visible_services if s.name in CRITICAL_SERVICES]
        if len(exposed) <= MAX_CRITICAL_SERVICES:
            return []

        return [
            self._create_finding(
                "excessive_critical_services",
                title="Excessive Critical Services Exposed",
                severity=Severity.HIGH,
                description=(
                    f"{len(exposed)} critical network services are exposed: "
                    f"{', '.join(s.name for s in exposed)}"
                ),
                recommendation=(
                    "Review and disable unnecessary services. "
                    "Consider using a firewall to restrict access."
                ),
                affected_component="Network Services",
                risk_score=8,
            )
        ]

    def _check_insecure_protocols(self, snapshot: SystemSnapshot) -> list[Finding]:
        """Plaintext protocols in use."""
        insecure = [s for s in snapshot.visible_services if s.name in INSECURE_PROTOCOLS]
        if not insecure:
            return []

        return [
            self._create_finding(
                "insecure_protocols",
                title="Insecure Protocols Detected",
                severity=Severity.MEDIUM,
                description=f"Insecure protocols found: {', '.join(s.name for s in insecure)}",
                recommendation=(
                    "Replace with secure alternatives (SFTP instead of FTP, "
                    "SSH instead of Telnet, HTTPS instead of HTTP)."
                ),
                affected_component="Protocol Configuration",
                risk_score=6,
            )
        ]

    def _check_ssh_port(self, snapshot: SystemSnapshot) -> list[Finding]:
        """SSH listening on the port every scanner tries first."""
        if not any(s.name == "SSH" and s.port == 22 for s in snapshot.visible_services):
            return []

        return [
            self._create_finding(
                "ssh_default_port",
                title="SSH on Default Port",
                severity=Severity.LOW,
                description=(
                    "SSH is running on the default port 22, which makes it a "
                    "target for automated attacks."
                ),
                recommendation="Consider changing SSH to a non-standard port and implement fail2ban.",
                affected_component="SSH Configuration",
                risk_score=3,
            )
        ]

    def _check_firewall(self, snapshot: SystemSnapshot) -> list[Finding]:
        """Host firewall reported inactive. Unknown state is not a finding."""
        if snapshot.network.firewall_active is not False:
            return []

        return [
            self._create_finding(
                "firewall_inactive",
                title="Firewall Not Active",
                severity=Severity.HIGH,
                description="No active firewall detected on the system.",
                recommendation="Enable and configure a firewall (UFW or iptables) with appropriate rules.",
                affected_component="Host Firewall",
                risk_score=8,
            )
        ]
