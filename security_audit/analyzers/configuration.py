"""Host configuration analysis."""

from typing import Any, Optional

from ..snapshot import IP_BASED_DISCOVERY, SystemSnapshot
from .base_analyzer import BaseAnalyzer, Category, Finding, Severity

LINUX_MARKERS = ("linux", "ubuntu", "debian", "centos", "rhel", "red hat", "fedora")


def os_family(os_name: Optional[str]) -> Optional[str]:
    """
    Classify an OS string.

    Args:
        os_name: OS description as reported by the collector

    Returns:
        "windows", "linux" or None when unknown
    """
    if not os_name:
        return None

    os_lower = os_name.lower()
    if "windows" in os_lower:
        return "windows"
    if any(marker in os_lower for marker in LINUX_MARKERS):
        return "linux"
    return None


class ConfigurationAnalyzer(BaseAnalyzer):
    """OS hardening advice plus sshd and patch-level checks."""

    category = Category.CONFIGURATION

    def __init__(self, config: Optional[dict[str, Any]] = None):
        """Initialize configuration analyzer."""
        super().__init__(config)
        self.name = "ConfigurationAnalyzer"

    def analyze(self, snapshot: SystemSnapshot) -> list[Finding]:
        """
        Analyze host configuration.

        Args:
            snapshot: System snapshot

        Returns:
            Configuration findings
        """
        findings: list[Finding] = []

        findings.extend(self._check_os_hardening(snapshot))
        findings.extend(self._check_visibility(snapshot))
        findings.extend(self._check_ssh_config(snapshot))
        findings.extend(self._check_updates(snapshot))

        return findings

    def _check_os_hardening(self, snapshot: SystemSnapshot) -> list[Finding]:
        family = os_family(snapshot.host.os)

        if family == "windows":
            return [
                self._create_finding(
                    "windows_hardening",
                    title="Windows Security Recommendations",
                    severity=Severity.INFO,
                    description="Windows system detected. Standard security hardening should be applied.",
                    recommendation=(
                        "Enable Windows Defender, configure automatic updates, disable "
                        "unnecessary services, and implement proper user access controls."
                    ),
                    affected_component="Operating System",
                    risk_score=2,
                )
            ]

        if family == "linux":
            return [
                self._create_finding(
                    "linux_hardening",
                    title="Linux Security Recommendations",
                    severity=Severity.INFO,
                    description="Linux system detected. Standard security hardening should be applied.",
                    recommendation=(
                        "Configure UFW/iptables firewall, enable automatic security updates, "
                        "implement SELinux/AppArmor, and disable root SSH access."
                    ),
                    affected_component="Operating System",
                    risk_score=2,
                )
            ]

        return []

    def _check_visibility(self, snapshot: SystemSnapshot) -> list[Finding]:
        if snapshot.metadata.collection_method != IP_BASED_DISCOVERY:
            return []

        return [
            self._create_finding(
                "limited_configuration_visibility",
                title="Limited Configuration Visibility",
                severity=Severity.INFO,
                description="Configuration analysis is limited due to network-based scanning approach.",
                recommendation=(
                    "For detailed configuration analysis, consider SSH-based agent "
                    "deployment or authenticated scanning."
                ),
                affected_component="Audit Methodology",
                risk_score=1,
            )
        ]

    def _check_ssh_config(self, snapshot: SystemSnapshot) -> list[Finding]:
        """sshd_config checks, only when the collector could read it."""
        if snapshot.system is None or snapshot.system.ssh is None:
            return []

        ssh = snapshot.system.ssh
        findings: list[Finding] = []

        if (ssh.permit_root_login or "").lower() == "yes":
            findings.append(
                self._create_finding(
                    "ssh_root_login_enabled",
                    title="SSH Root Login Enabled",
                    severity=Severity.CRITICAL,
                    description="SSH root login is enabled, which poses a significant security risk.",
                    recommendation="Disable SSH root login and use sudo for administrative tasks.",
                    affected_component="SSH Configuration",
                    risk_score=10,
                )
            )

        # sshd defaults to allowing passwords unless explicitly disabled
        if (ssh.password_authentication or "").lower() != "no":
            findings.append(
                self._create_finding(
                    "ssh_password_authentication",
                    title="SSH Password Authentication Enabled",
                    severity=Severity.HIGH,
                    description="SSH allows password authentication, enabling brute-force attacks.",
                    recommendation="Disable password authentication and use SSH keys only.",
                    affected_component="SSH Configuration",
                    risk_score=7,
                )
            )

        return findings

    def _check_updates(self, snapshot: SystemSnapshot) -> list[Finding]:
        if snapshot.system is None or not snapshot.system.pending_updates:
            return []

        pending = snapshot.system.pending_updates
        if pending > 20:
            severity, risk = Severity.HIGH, 7
        elif pending > 5:
            severity, risk = Severity.MEDIUM, 5
        else:
            severity, risk = Severity.LOW, 3

        return [
            self._create_finding(
                "outdated_packages",
                title="Outdated Packages",
                severity=severity,
                description=f"{pending} package updates are available.",
                recommendation="Install security updates and maintain regular update schedule.",
                affected_component="Package Management",
                risk_score=risk,
            )
        ]
