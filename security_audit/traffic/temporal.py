"""Time-based anomalies: traffic spikes."""

from collections import Counter
from datetime import datetime, timezone
from typing import Any, Optional

from ..analyzers.base_analyzer import Severity
from ..snapshot import TrafficSample
from ..utils.helpers import format_timestamp
from .base_detector import Anomaly, BaseDetector


class TemporalDetector(BaseDetector):
    """Flag time buckets with far more traffic than the batch average.

    Buckets are fixed UTC slots (epoch floor), so the same sample always
    lands in the same bucket. The average is taken over non-empty buckets.
    """

    def __init__(self, config: Optional[dict[str, Any]] = None):
        super().__init__(config)
        self.name = "TemporalDetector"

        bucket_minutes = int(self.detection_config.get("spike_bucket_minutes", 10))
        if bucket_minutes < 1:
            raise ValueError(f"spike_bucket_minutes must be at least 1, got {bucket_minutes}")

        self.bucket_seconds = bucket_minutes * 60
        self.spike_factor = self.detection_config.get("spike_factor", 3)

    def detect(self, samples: list[TrafficSample]) -> list[Anomaly]:
        if not samples:
            return []

        buckets: Counter[int] = Counter(self._bucket(s) for s in samples)
        average = len(samples) / len(buckets)

        anomalies: list[Anomaly] = []
        for bucket in sorted(buckets):
            count = buckets[bucket]
            if count <= average * self.spike_factor:
                continue

            start = datetime.fromtimestamp(bucket * self.bucket_seconds, tz=timezone.utc)
            anomalies.append(
                Anomaly(
                    type="Traffic-Spike",
                    severity=Severity.MEDIUM,
                    description=(
                        f"Ungewöhnlicher Traffic-Spike um {format_timestamp(start, '%H:%M')} Uhr "
                        f"({count} Verbindungen, Durchschnitt {average:.1f})"
                    ),
                    timestamp=start,
                    affected_ips=(),
                    recommendation="Traffic-Muster analysieren und DDoS-Schutz aktivieren",
                )
            )

        return anomalies

    def _bucket(self, sample: TrafficSample) -> int:
        return int(sample.timestamp.timestamp()) // self.bucket_seconds
