"""System snapshot analyzers."""

from .base_analyzer import (
    PENALTY_WEIGHTS,
    BaseAnalyzer,
    Category,
    Finding,
    Severity,
)
from .network_security import NetworkSecurityAnalyzer
from .service_security import ServiceSecurityAnalyzer
from .configuration import ConfigurationAnalyzer
from .performance import PerformanceAnalyzer
from .compliance import ComplianceAnalyzer


def default_analyzers(config=None) -> list[BaseAnalyzer]:
    """The five analyzers every audit runs."""
    return [
        NetworkSecurityAnalyzer(config),
        ServiceSecurityAnalyzer(config),
        ConfigurationAnalyzer(config),
        PerformanceAnalyzer(config),
        ComplianceAnalyzer(config),
    ]


__all__ = [
    "PENALTY_WEIGHTS",
    "BaseAnalyzer",
    "Category",
    "Finding",
    "Severity",
    "NetworkSecurityAnalyzer",
    "ServiceSecurityAnalyzer",
    "ConfigurationAnalyzer",
    "PerformanceAnalyzer",
    "ComplianceAnalyzer",
    "default_analyzers",
]
