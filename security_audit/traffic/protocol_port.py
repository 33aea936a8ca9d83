"""Protocol mix and port usage."""

from collections import defaultdict
from typing import Any, Optional

from ..analyzers.base_analyzer import Severity
from ..snapshot import TrafficSample
from .base_detector import Anomaly, BaseDetector, distinct_sources, latest_timestamp

EPHEMERAL_PORT_FLOOR = 49152


class ProtocolPortDetector(BaseDetector):
    """Detect ICMP floods and busy ephemeral ports."""

    def __init__(self, config: Optional[dict[str, Any]] = None):
        """Initialize protocol/port detector."""
        super().__init__(config)
        self.name = "ProtocolPortDetector"

        self.icmp_ratio = self.detection_config.get("icmp_flood_ratio", 0.4)
        self.ephemeral_floor = self.detection_config.get("ephemeral_port_floor", EPHEMERAL_PORT_FLOOR)
        self.ephemeral_connections = self.detection_config.get("ephemeral_port_connections", 30)

    def detect(self, samples: list[TrafficSample]) -> list[Anomaly]:
        """
        Check protocol distribution and per-port volume.

        Args:
            samples: Traffic batch

        Returns:
            ICMP flood and unusual port anomalies
        """
        if not samples:
            return []

        anomalies: list[Anomaly] = []
        anomalies.extend(self._detect_icmp_flood(samples))
        anomalies.extend(self._detect_ephemeral_ports(samples))
        return anomalies

    def _detect_icmp_flood(self, samples: list[TrafficSample]) -> list[Anomaly]:
        icmp = [s for s in samples if s.protocol == "ICMP"]
        if len(icmp) <= len(samples) * self.icmp_ratio:
            return []

        return [
            Anomaly(
                type="ICMP-Flood-Angriff",
                severity=Severity.HIGH,
                description=f"Möglicher ICMP-Flood-Angriff erkannt ({len(icmp)} ICMP-Pakete)",
                timestamp=latest_timestamp(icmp),
                affected_ips=distinct_sources(icmp, 10),
                recommendation="ICMP-Traffic rate-limitieren oder temporär blockieren",
            )
        ]

    def _detect_ephemeral_ports(self, samples: list[TrafficSample]) -> list[Anomaly]:
        """Sustained traffic to a single port above the IANA dynamic range floor."""
        anomalies: list[Anomaly] = []

        by_port: dict[int, list[TrafficSample]] = defaultdict(list)
        for sample in samples:
            if sample.port > self.ephemeral_floor:
                by_port[sample.port].append(sample)

        for port in sorted(by_port):
            group = by_port[port]
            if len(group) <= self.ephemeral_connections:
                continue

            anomalies.append(
                Anomaly(
                    type="Ungewöhnliche Port-Aktivität",
                    severity=Severity.MEDIUM,
                    description=(
                        f"Ungewöhnlich hohe Aktivität auf Port {port} ({len(group)} Verbindungen)"
                    ),
                    timestamp=latest_timestamp(group),
                    affected_ips=distinct_sources(group, 5),
                    recommendation="Port-Aktivität untersuchen und ggf. Firewall-Regeln anpassen",
                )
            )

        return anomalies
