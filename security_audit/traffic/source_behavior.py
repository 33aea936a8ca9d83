"""Per-source behaviour: port scans and SSH brute force."""

from collections import defaultdict
from typing import Any, Optional

from ..analyzers.base_analyzer import Severity
from ..snapshot import TrafficSample
from .base_detector import Anomaly, BaseDetector, latest_timestamp

SSH_PORT = 22


class SourceBehaviorDetector(BaseDetector):
    """Detect scanning and brute-force behaviour of individual sources."""

    def __init__(self, config: Optional[dict[str, Any]] = None):
        """Initialize source behaviour detector."""
        super().__init__(config)
        self.name = "SourceBehaviorDetector"

        self.scan_min_ports = self.detection_config.get("port_scan_distinct_ports", 5)
        self.scan_min_connections = self.detection_config.get("port_scan_connections", 15)
        self.brute_force_connections = self.detection_config.get("ssh_brute_force_connections", 50)

    def detect(self, samples: list[TrafficSample]) -> list[Anomaly]:
        """
        Group samples by source and check each source's footprint.

        Args:
            samples: Traffic batch

        Returns:
            Port-scan and SSH brute-force anomalies
        """
        anomalies: list[Anomaly] = []

        by_source: dict[str, list[TrafficSample]] = defaultdict(list)
        for sample in samples:
            by_source[sample.source].append(sample)

        for source in sorted(by_source):
            group = by_source[source]
            ports = {s.port for s in group}
            count = len(group)

            if len(ports) > self.scan_min_ports and count > self.scan_min_connections:
                anomalies.append(
                    Anomaly(
                        type="Port-Scan-Angriff",
                        severity=Severity.HIGH,
                        description=(
                            f"{source} hat {len(ports)} verschiedene Ports in "
                            f"{count} Verbindungen angesprochen"
                        ),
                        timestamp=latest_timestamp(group),
                        affected_ips=(source,),
                        recommendation="IP-Adresse blockieren und Firewall-Regeln verschärfen",
                    )
                )

            if count > self.brute_force_connections and SSH_PORT in ports:
                anomalies.append(
                    Anomaly(
                        type="SSH-Brute-Force-Angriff",
                        severity=Severity.CRITICAL,
                        description=(
                            f"Möglicher SSH-Brute-Force-Angriff von {source} "
                            f"({count} Verbindungen)"
                        ),
                        timestamp=latest_timestamp(group),
                        affected_ips=(source,),
                        recommendation="Sofortige IP-Sperrung und SSH-Konfiguration überprüfen",
                    )
                )

        return anomalies
