"""Weighted-penalty scoring of findings.

score(findings) = max(0, 100 - sum of severity weights), using the single
PENALTY_WEIGHTS table. The overall figure is the score over all findings,
not an average of the category scores.
"""

from dataclasses import dataclass
from typing import Any, Iterable

from .analyzers.base_analyzer import Category, Finding

MAX_SCORE = 100


@dataclass(frozen=True)
class ScoreSet:
    """0-100 posture scores, overall and per dimension."""

    overall: int
    security: int
    performance: int
    compliance: int
    network_security: int
    service_security: int

    def __post_init__(self) -> None:
        for name, value in self.to_dict().items():
            if not 0 <= value <= MAX_SCORE:
                raise ValueError(f"Score {name} out of range 0-{MAX_SCORE}: {value}")

    def to_dict(self) -> dict[str, Any]:
        """Convert scores to dictionary."""
        return {
            "overall": self.overall,
            "security": self.security,
            "performance": self.performance,
            "compliance": self.compliance,
            "networkSecurity": self.network_security,
            "serviceSecurity": self.service_security,
        }


def score(findings: Iterable[Finding]) -> int:
    """
    Score a set of findings.

    Args:
        findings: Findings to penalise

    Returns:
        Integer score clamped into [0, 100]
    """
    penalty = sum(f.severity.weight for f in findings)
    return max(0, min(MAX_SCORE, MAX_SCORE - penalty))


def category_score(findings: Iterable[Finding], category: Category) -> int:
    """Score only the findings of one category."""
    return score(f for f in findings if f.category == category)


def calculate_scores(findings: list[Finding]) -> ScoreSet:
    """
    Compute the full score set.

    Configuration findings have no dimension of their own and only lower
    overall/security.

    Args:
        findings: Aggregated findings of one audit

    Returns:
        ScoreSet
    """
    overall = score(findings)
    return ScoreSet(
        overall=overall,
        security=overall,
        performance=category_score(findings, Category.PERFORMANCE),
        compliance=category_score(findings, Category.COMPLIANCE),
        network_security=category_score(findings, Category.NETWORK_SECURITY),
        service_security=category_score(findings, Category.SERVICE_SECURITY),
    )
