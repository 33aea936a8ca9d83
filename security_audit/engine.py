"""Audit and traffic pipelines.

Both pipelines run their five components side by side on a thread pool and
join the results in registration order, so the output never depends on
which component finishes first.
"""

from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass
from datetime import datetime
from typing import Any, Callable, Iterable, Optional, Sequence, TypeVar

from .analyzers import BaseAnalyzer, Category, Finding, Severity, default_analyzers
from .scoring import ScoreSet, calculate_scores
from .snapshot import SystemSnapshot, TrafficSample
from .summary import generate_summary
from .traffic import Anomaly, BaseDetector, default_detectors
from .utils.helpers import get_section, utcnow
from .utils.logger import get_logger

logger = get_logger(__name__)

T = TypeVar("T")
R = TypeVar("R")

ID_PREFIXES: dict[Category, str] = {
    Category.NETWORK_SECURITY: "net",
    Category.SERVICE_SECURITY: "svc",
    Category.CONFIGURATION: "cfg",
    Category.PERFORMANCE: "perf",
    Category.COMPLIANCE: "comp",
}


@dataclass(frozen=True)
class AuditResult:
    """Outcome of one security analysis run."""

    findings: tuple[Finding, ...]
    scores: ScoreSet
    summary: str
    timestamp: datetime

    def __post_init__(self) -> None:
        object.__setattr__(self, "findings", tuple(self.findings))

    def _count(self, severity: Severity) -> int:
        return sum(1 for f in self.findings if f.severity == severity)

    @property
    def critical_count(self) -> int:
        return self._count(Severity.CRITICAL)

    @property
    def high_count(self) -> int:
        return self._count(Severity.HIGH)

    @property
    def medium_count(self) -> int:
        return self._count(Severity.MEDIUM)

    @property
    def low_count(self) -> int:
        return self._count(Severity.LOW)

    @property
    def info_count(self) -> int:
        return self._count(Severity.INFO)

    def get_findings_by_severity(self, severity: Severity) -> list[Finding]:
        """Get findings filtered by severity."""
        return [f for f in self.findings if f.severity == severity]

    def get_findings_by_category(self, category: Category) -> list[Finding]:
        """Get findings filtered by category."""
        return [f for f in self.findings if f.category == category]

    def to_dict(self) -> dict[str, Any]:
        """Convert result to dictionary."""
        return {
            "findings": [f.to_dict() for f in self.findings],
            "scores": self.scores.to_dict(),
            "summary": self.summary,
            "timestamp": self.timestamp.isoformat(),
        }


def aggregate_findings(groups: Iterable[Sequence[Finding]]) -> list[Finding]:
    """
    Merge per-analyzer findings into one list.

    Findings without an id get ``<prefix>-NNN`` numbered per category,
    skipping numbers already used as explicit ids. A repeated explicit id
    is dropped (first occurrence wins); distinct ids for a similar concern
    are kept.

    Args:
        groups: Analyzer outputs in analyzer order

    Returns:
        Findings with unique ids, in input order
    """
    groups = [list(group) for group in groups]
    reserved = {f.id for group in groups for f in group if f.id}

    merged: list[Finding] = []
    seen: set[str] = set()
    counters: dict[Category, int] = {}

    for group in groups:
        for finding in group:
            if not finding.id:
                finding = _with_id(finding, _next_id(finding.category, counters, reserved))

            if finding.id in seen:
                logger.debug(f"Dropping duplicate finding {finding.id}")
                continue

            seen.add(finding.id)
            merged.append(finding)

    return merged


def _next_id(category: Category, counters: dict[Category, int], reserved: set[str]) -> str:
    """Next free ``<prefix>-NNN`` for a category; generated ids never repeat."""
    while True:
        counters[category] = counters.get(category, 0) + 1
        candidate = f"{ID_PREFIXES[category]}-{counters[category]:03d}"
        if candidate not in reserved:
            return candidate


def _with_id(finding: Finding, finding_id: str) -> Finding:
    return Finding(
        id=finding_id,
        title=finding.title,
        severity=finding.severity,
        category=finding.category,
        description=finding.description,
        recommendation=finding.recommendation,
        affected_component=finding.affected_component,
        risk_score=finding.risk_score,
    )


def _fan_out(func: Callable[[T], R], items: list[T], config: Optional[dict[str, Any]]) -> list[R]:
    """Apply func to every item, on a thread pool unless disabled in config."""
    analysis_config = get_section(config, "analysis")
    if not items or not analysis_config.get("parallel", True):
        return [func(item) for item in items]

    max_workers = analysis_config.get("max_workers") or len(items)
    with ThreadPoolExecutor(max_workers=max_workers) as executor:
        # map() yields in submission order and re-raises worker exceptions
        return list(executor.map(func, items))


def run_security_analysis(
    snapshot: SystemSnapshot,
    config: Optional[dict[str, Any]] = None,
    analyzers: Optional[list[BaseAnalyzer]] = None,
) -> AuditResult:
    """
    Run every analyzer over a snapshot and score the result.

    Args:
        snapshot: System snapshot (read only)
        config: Optional configuration dictionary
        analyzers: Analyzer set to use instead of the default five

    Returns:
        AuditResult
    """
    analyzers = analyzers if analyzers is not None else default_analyzers(config)
    host = snapshot.host.hostname or snapshot.host.ip or "unknown host"
    logger.info(f"Starting security analysis of {host} with {len(analyzers)} analyzers")

    def run(analyzer: BaseAnalyzer) -> list[Finding]:
        findings = analyzer.analyze(snapshot)
        logger.debug(f"{analyzer.name}: {len(findings)} findings")
        return findings

    findings = aggregate_findings(_fan_out(run, analyzers, config))
    scores = calculate_scores(findings)
    summary = generate_summary(findings, scores)

    logger.info(
        f"Security analysis complete: {len(findings)} findings, "
        f"overall score {scores.overall}/100"
    )

    return AuditResult(
        findings=tuple(findings),
        scores=scores,
        summary=summary,
        timestamp=utcnow(),
    )


def detect_traffic_anomalies(
    samples: Sequence[TrafficSample],
    config: Optional[dict[str, Any]] = None,
    detectors: Optional[list[BaseDetector]] = None,
) -> list[Anomaly]:
    """
    Run every detector over a traffic batch.

    Outputs are concatenated in detector order without merging anomalies
    that mention the same IP.

    Args:
        samples: Traffic batch (read only)
        config: Optional configuration dictionary
        detectors: Detector set to use instead of the default five

    Returns:
        Anomalies from all detectors
    """
    samples = list(samples)
    if not samples:
        return []

    detectors = detectors if detectors is not None else default_detectors(config)
    logger.info(f"Scanning {len(samples)} traffic samples with {len(detectors)} detectors")

    def run(detector: BaseDetector) -> list[Anomaly]:
        anomalies = detector.detect(samples)
        logger.debug(f"{detector.name}: {len(anomalies)} anomalies")
        return anomalies

    anomalies = [a for group in _fan_out(run, detectors, config) for a in group]
    logger.info(f"Traffic scan complete: {len(anomalies)} anomalies")
    return anomalies
