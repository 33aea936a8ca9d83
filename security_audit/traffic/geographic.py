"""Traffic volume from high-risk jurisdictions."""

from collections import defaultdict
from typing import Any, Optional

from ..analyzers.base_analyzer import Severity
from ..snapshot import TrafficSample
from .base_detector import Anomaly, BaseDetector, distinct_sources, latest_timestamp

DEFAULT_HIGH_RISK_COUNTRIES = ("CN", "RU", "KP")


class GeographicDetector(BaseDetector):
    """Flag heavy traffic from configured high-risk countries.

    Country codes are taken from the samples as-is; samples without a
    country are ignored.
    """

    def __init__(self, config: Optional[dict[str, Any]] = None):
        super().__init__(config)
        self.name = "GeographicDetector"

        countries = self.detection_config.get("high_risk_countries", DEFAULT_HIGH_RISK_COUNTRIES)
        self.high_risk_countries = frozenset(c.upper() for c in countries)
        self.min_connections = self.detection_config.get("geo_connections", 20)
        self.max_affected = self.detection_config.get("geo_max_affected_ips", 5)

    def detect(self, samples: list[TrafficSample]) -> list[Anomaly]:
        anomalies: list[Anomaly] = []

        by_country: dict[str, list[TrafficSample]] = defaultdict(list)
        for sample in samples:
            if sample.country:
                by_country[sample.country.upper()].append(sample)

        for country in sorted(by_country):
            group = by_country[country]
            if country not in self.high_risk_countries or len(group) <= self.min_connections:
                continue

            anomalies.append(
                Anomaly(
                    type="Verdächtiger Geo-Traffic",
                    severity=Severity.MEDIUM,
                    description=(
                        f"Ungewöhnlich hoher Traffic aus {country} ({len(group)} Verbindungen)"
                    ),
                    timestamp=latest_timestamp(group),
                    affected_ips=distinct_sources(group, self.max_affected),
                    recommendation="Geo-Blocking für verdächtige Länder implementieren",
                )
            )

        return anomalies
