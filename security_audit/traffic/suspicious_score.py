"""Correlation of collector-assigned suspicion scores."""

from typing import Any, Optional

from ..analyzers.base_analyzer import Severity
from ..snapshot import TrafficSample
from .base_detector import Anomaly, BaseDetector, distinct_sources, latest_timestamp


class SuspiciousScoreDetector(BaseDetector):
    """Fire when many samples carry a high suspicion score."""

    def __init__(self, config: Optional[dict[str, Any]] = None):
        """Initialize suspicious score detector."""
        super().__init__(config)
        self.name = "SuspiciousScoreDetector"

        self.score_threshold = self.detection_config.get("suspicious_score_threshold", 70)
        self.min_samples = self.detection_config.get("suspicious_min_samples", 10)

    def detect(self, samples: list[TrafficSample]) -> list[Anomaly]:
        """
        Count high-score samples across the batch.

        Args:
            samples: Traffic batch

        Returns:
            At most one anomaly listing up to 10 sources
        """
        flagged = [s for s in samples if s.suspicious_score > self.score_threshold]
        if len(flagged) <= self.min_samples:
            return []

        sources = {s.source for s in flagged}
        return [
            Anomaly(
                type="Verdächtige IP-Aktivität",
                severity=Severity.HIGH,
                description=f"{len(sources)} IPs mit hohem Verdachts-Score erkannt",
                timestamp=latest_timestamp(flagged),
                affected_ips=distinct_sources(flagged, 10),
                recommendation=(
                    "Verdächtige IPs in Threat-Intelligence-Datenbank überprüfen und blockieren"
                ),
            )
        ]
