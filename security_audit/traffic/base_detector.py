"""Base detector class and the anomaly record."""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from datetime import datetime
from typing import Any, Iterable, Optional

from ..analyzers.base_analyzer import Severity
from ..snapshot import TrafficSample
from ..utils.helpers import get_section


@dataclass(frozen=True)
class Anomaly:
    """A classified suspicious traffic pattern."""

    type: str
    severity: Severity
    description: str
    timestamp: datetime
    affected_ips: tuple[str, ...]
    recommendation: str

    def __post_init__(self) -> None:
        object.__setattr__(self, "severity", Severity(self.severity))
        object.__setattr__(self, "affected_ips", tuple(self.affected_ips))

    def to_dict(self) -> dict[str, Any]:
        """Convert anomaly to dictionary."""
        return {
            "type": self.type,
            "severity": self.severity.value,
            "description": self.description,
            "timestamp": self.timestamp.isoformat(),
            "affectedIPs": list(self.affected_ips),
            "recommendation": self.recommendation,
        }


class BaseDetector(ABC):
    """Abstract base class for traffic pattern detectors.

    Detectors keep no state between calls; thresholds come from the
    ``detection`` config section with the documented defaults.
    """

    def __init__(self, config: Optional[dict[str, Any]] = None):
        """
        Initialize detector.

        Args:
            config: Optional configuration dictionary
        """
        self.config = config or {}
        self.detection_config = get_section(self.config, "detection")
        self.name = self.__class__.__name__

    @abstractmethod
    def detect(self, samples: list[TrafficSample]) -> list[Anomaly]:
        """
        Inspect a batch of samples.

        Args:
            samples: Traffic batch, in any order

        Returns:
            Anomalies found (empty when nothing matches)
        """
        pass


def distinct_sources(samples: Iterable[TrafficSample], limit: int) -> tuple[str, ...]:
    """Sorted distinct source IPs, truncated to limit. Independent of input order."""
    return tuple(sorted({s.source for s in samples})[:limit])


def latest_timestamp(samples: Iterable[TrafficSample]) -> datetime:
    """Timestamp of the newest sample in a non-empty group."""
    return max(s.timestamp for s in samples)
