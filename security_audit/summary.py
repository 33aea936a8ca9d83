"""Plain-language synopsis of an audit."""

from .analyzers.base_analyzer import Finding, Severity
from .scoring import ScoreSet

GOOD_SCORE = 80
FAIR_SCORE = 60


def generate_summary(findings: list[Finding], scores: ScoreSet) -> str:
    """
    Build the audit summary from severity counts and the overall score.

    Args:
        findings: Aggregated findings
        scores: Score set of the same audit

    Returns:
        Space-joined summary sentences
    """
    critical = sum(1 for f in findings if f.severity == Severity.CRITICAL)
    high = sum(1 for f in findings if f.severity == Severity.HIGH)
    medium = sum(1 for f in findings if f.severity == Severity.MEDIUM)

    parts = [f"Security audit completed with an overall score of {scores.overall}/100."]

    if critical > 0:
        parts.append(f"{critical} critical issue(s) require immediate attention.")
    if high > 0:
        parts.append(f"{high} high-priority issue(s) should be addressed soon.")
    if medium > 0:
        parts.append(f"{medium} medium-priority issue(s) identified for improvement.")

    if scores.overall >= GOOD_SCORE:
        parts.append("Overall security posture is good with minor improvements needed.")
    elif scores.overall >= FAIR_SCORE:
        parts.append("Security posture needs improvement. Address high-priority issues first.")
    else:
        parts.append(
            "Security posture requires significant attention. Immediate action recommended."
        )

    return " ".join(parts)
