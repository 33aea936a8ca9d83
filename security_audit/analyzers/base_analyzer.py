"""Base analyzer class and the shared finding taxonomy."""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from enum import Enum
from typing import Any, Optional

from ..snapshot import SystemSnapshot


class Severity(Enum):
    """Finding and anomaly severity levels."""

    CRITICAL = "critical"
    HIGH = "high"
    MEDIUM = "medium"
    LOW = "low"
    INFO = "info"

    @property
    def weight(self) -> int:
        """Penalty subtracted from 100 for each finding of this severity."""
        return PENALTY_WEIGHTS[self]

    @property
    def rank(self) -> int:
        """Sort key, 0 for critical up to 4 for info."""
        return _RANKS[self]


# The only severity-to-penalty table. Every scoring call site goes through it.
PENALTY_WEIGHTS: dict[Severity, int] = {
    Severity.CRITICAL: 25,
    Severity.HIGH: 15,
    Severity.MEDIUM: 8,
    Severity.LOW: 3,
    Severity.INFO: 0,
}

_RANKS: dict[Severity, int] = {severity: i for i, severity in enumerate(Severity)}


class Category(Enum):
    """Analysis dimension a finding belongs to."""

    NETWORK_SECURITY = "Network Security"
    SERVICE_SECURITY = "Service Security"
    CONFIGURATION = "Configuration"
    PERFORMANCE = "Performance"
    COMPLIANCE = "Compliance"


@dataclass(frozen=True)
class Finding:
    """Represents a security finding."""

    id: str
    title: str
    severity: Severity
    category: Category
    description: str
    recommendation: str
    affected_component: Optional[str] = None
    risk_score: int = 0

    def __post_init__(self) -> None:
        # Accept the wire strings, reject anything outside the closed enums
        object.__setattr__(self, "severity", Severity(self.severity))
        object.__setattr__(self, "category", Category(self.category))
        if self.risk_score < 0:
            raise ValueError(f"risk_score must be >= 0, got {self.risk_score}")

    def to_dict(self) -> dict[str, Any]:
        """Convert finding to dictionary."""
        return {
            "id": self.id,
            "title": self.title,
            "severity": self.severity.value,
            "category": self.category.value,
            "description": self.description,
            "recommendation": self.recommendation,
            "affectedComponent": self.affected_component,
            "riskScore": self.risk_score,
        }


class BaseAnalyzer(ABC):
    """Abstract base class for snapshot analyzers."""

    category: Category

    def __init__(self, config: Optional[dict[str, Any]] = None):
        """
        Initialize analyzer.

        Args:
            config: Optional configuration dictionary
        """
        self.config = config or {}
        self.name = self.__class__.__name__

    @abstractmethod
    def analyze(self, snapshot: SystemSnapshot) -> list[Finding]:
        """
        Analyze a system snapshot.

        Must not raise on missing optional facts.

        Args:
            snapshot: Immutable system snapshot

        Returns:
            Findings for this analyzer's category (possibly empty)
        """
        pass

    def _create_finding(
        self,
        finding_id: str,
        title: str,
        severity: Severity,
        description: str,
        recommendation: str,
        **kwargs: Any,
    ) -> Finding:
        """Helper method to create findings in this analyzer's category."""
        return Finding(
            id=finding_id,
            title=title,
            severity=severity,
            category=self.category,
            description=description,
            recommendation=recommendation,
            **kwargs,
        )
