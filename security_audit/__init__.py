"""Security posture scoring and traffic anomaly detection."""

from .analyzers import PENALTY_WEIGHTS, Category, Finding, Severity
from .engine import AuditResult, aggregate_findings, detect_traffic_anomalies, run_security_analysis
from .scoring import ScoreSet, calculate_scores, score
from .snapshot import SystemSnapshot, TrafficSample, load_snapshot, load_traffic_samples
from .summary import generate_summary
from .traffic import Anomaly

__version__ = "1.0.0"

__all__ = [
    "PENALTY_WEIGHTS",
    "Category",
    "Finding",
    "Severity",
    "AuditResult",
    "aggregate_findings",
    "detect_traffic_anomalies",
    "run_security_analysis",
    "ScoreSet",
    "calculate_scores",
    "score",
    "SystemSnapshot",
    "TrafficSample",
    "load_snapshot",
    "load_traffic_samples",
    "generate_summary",
    "Anomaly",
]
