"""Performance indicators."""

from typing import Any, Optional

from ..snapshot import SystemSnapshot
from .base_analyzer import BaseAnalyzer, Category, Finding, Severity

MAX_SERVICES = 5
DISK_USAGE_LIMIT = 90


class PerformanceAnalyzer(BaseAnalyzer):
    """Resource pressure hints: service sprawl and full disks."""

    category = Category.PERFORMANCE

    def __init__(self, config: Optional[dict[str, Any]] = None):
        super().__init__(config)
        self.name = "PerformanceAnalyzer"

    def analyze(self, snapshot: SystemSnapshot) -> list[Finding]:
        findings: list[Finding] = []

        services = snapshot.visible_services
        if len(services) > MAX_SERVICES:
            findings.append(
                self._create_finding(
                    "high_service_count",
                    title="High Service Count",
                    severity=Severity.LOW,
                    description=(
                        f"{len(services)} network services are running, "
                        "which may impact performance."
                    ),
                    recommendation=(
                        "Review and disable unnecessary services to improve system "
                        "performance and security."
                    ),
                    affected_component="System Resources",
                    risk_score=2,
                )
            )

        if snapshot.system is not None:
            full = [d for d in snapshot.system.disk_usage if d.used_percent > DISK_USAGE_LIMIT]
            if full:
                findings.append(
                    self._create_finding(
                        "high_disk_usage",
                        title="High Disk Usage",
                        severity=Severity.MEDIUM,
                        description=(
                            f"One or more disks are over {DISK_USAGE_LIMIT}% full: "
                            + ", ".join(f"{d.mount} ({d.used_percent}%)" for d in full)
                        ),
                        recommendation="Free up disk space or expand storage capacity.",
                        affected_component="Storage",
                        risk_score=5,
                    )
                )

        return findings
