"""Traffic pattern detectors."""

from .base_detector import Anomaly, BaseDetector
from .source_behavior import SourceBehaviorDetector
from .geographic import GeographicDetector
from .protocol_port import ProtocolPortDetector
from .temporal import TemporalDetector
from .suspicious_score import SuspiciousScoreDetector


def default_detectors(config=None) -> list[BaseDetector]:
    """The five detectors every traffic batch goes through."""
    return [
        SourceBehaviorDetector(config),
        GeographicDetector(config),
        ProtocolPortDetector(config),
        TemporalDetector(config),
        SuspiciousScoreDetector(config),
    ]


__all__ = [
    "Anomaly",
    "BaseDetector",
    "SourceBehaviorDetector",
    "GeographicDetector",
    "ProtocolPortDetector",
    "TemporalDetector",
    "SuspiciousScoreDetector",
    "default_detectors",
]
