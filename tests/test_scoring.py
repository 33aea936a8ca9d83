"""Tests for scoring and summary generation."""

import pytest

from security_audit.analyzers.base_analyzer import Category, Finding, Severity
from security_audit.scoring import ScoreSet, calculate_scores, category_score, score
from security_audit.summary import generate_summary


def make_finding(
    finding_id: str,
    severity: Severity,
    category: Category = Category.NETWORK_SECURITY,
) -> Finding:
    """Create a test Finding."""
    return Finding(
        id=finding_id,
        title=f"Finding {finding_id}",
        severity=severity,
        category=category,
        description="Test description",
        recommendation=f"Fix {finding_id}",
    )


class TestScore:
    """Tests for score()."""

    def test_no_findings_is_perfect(self):
        """Test score without findings."""
        assert score([]) == 100

    def test_one_critical_two_high(self):
        """Test one critical and two high findings."""
        findings = [
            make_finding("a", Severity.CRITICAL),
            make_finding("b", Severity.HIGH),
            make_finding("c", Severity.HIGH),
        ]
        assert score(findings) == 45

    def test_info_costs_nothing(self):
        """Test informational findings carry no penalty."""
        assert score([make_finding(str(i), Severity.INFO) for i in range(50)]) == 100

    def test_clamped_at_zero(self):
        """Test the lower clamp."""
        findings = [make_finding(str(i), Severity.CRITICAL) for i in range(10)]
        assert score(findings) == 0

    @pytest.mark.parametrize("severity", list(Severity))
    def test_always_in_range(self, severity):
        """Test score range for growing finding sets."""
        for n in range(0, 12):
            assert 0 <= score([make_finding(str(i), severity) for i in range(n)]) <= 100

    def test_adding_finding_never_raises_score(self):
        """Test score monotonicity."""
        findings = [make_finding("a", Severity.MEDIUM)]
        for severity in Severity:
            assert score(findings + [make_finding("b", severity)]) <= score(findings)

    def test_category_score(self):
        """Test per-category scoring."""
        findings = [
            make_finding("a", Severity.HIGH, Category.PERFORMANCE),
            make_finding("b", Severity.CRITICAL, Category.COMPLIANCE),
        ]
        assert category_score(findings, Category.PERFORMANCE) == 85
        assert category_score(findings, Category.SERVICE_SECURITY) == 100


class TestCalculateScores:
    """Tests for calculate_scores()."""

    def test_empty_findings_all_100(self):
        """Test all dimensions without findings."""
        scores = calculate_scores([])
        assert all(value == 100 for value in scores.to_dict().values())

    def test_overall_uses_all_findings(self):
        """Test overall and category scores together."""
        findings = [
            make_finding("net", Severity.HIGH, Category.NETWORK_SECURITY),
            make_finding("svc", Severity.MEDIUM, Category.SERVICE_SECURITY),
            make_finding("perf", Severity.LOW, Category.PERFORMANCE),
            make_finding("comp", Severity.CRITICAL, Category.COMPLIANCE),
        ]

        scores = calculate_scores(findings)

        assert scores.overall == 100 - 15 - 8 - 3 - 25
        assert scores.security == scores.overall
        assert scores.network_security == 85
        assert scores.service_security == 92
        assert scores.performance == 97
        assert scores.compliance == 75

    def test_configuration_only_lowers_overall(self):
        """Test configuration findings only affect overall."""
        scores = calculate_scores([make_finding("cfg", Severity.CRITICAL, Category.CONFIGURATION)])

        assert scores.overall == 75
        assert scores.security == 75
        assert scores.network_security == 100
        assert scores.service_security == 100
        assert scores.performance == 100
        assert scores.compliance == 100

    def test_score_set_range_enforced(self):
        """Test ScoreSet range validation."""
        with pytest.raises(ValueError):
            ScoreSet(101, 100, 100, 100, 100, 100)

    def test_to_dict_keys(self):
        """Test ScoreSet serialization keys."""
        assert set(calculate_scores([]).to_dict()) == {
            "overall",
            "security",
            "performance",
            "compliance",
            "networkSecurity",
            "serviceSecurity",
        }


class TestGenerateSummary:
    """Tests for generate_summary()."""

    def test_clean_audit(self):
        """Test summary of a clean audit."""
        summary = generate_summary([], calculate_scores([]))

        assert summary == (
            "Security audit completed with an overall score of 100/100. "
            "Overall security posture is good with minor improvements needed."
        )

    def test_critical_and_high(self):
        """Test summary with critical and high findings."""
        findings = [
            make_finding("a", Severity.CRITICAL),
            make_finding("b", Severity.HIGH),
            make_finding("c", Severity.HIGH),
        ]

        summary = generate_summary(findings, calculate_scores(findings))

        assert summary == (
            "Security audit completed with an overall score of 45/100. "
            "1 critical issue(s) require immediate attention. "
            "2 high-priority issue(s) should be addressed soon. "
            "Security posture requires significant attention. Immediate action recommended."
        )

    def test_needs_improvement_band(self):
        """Test summary in the middle band."""
        findings = [make_finding("a", Severity.HIGH), make_finding("b", Severity.MEDIUM)]

        summary = generate_summary(findings, calculate_scores(findings))

        assert "overall score of 77/100" in summary
        assert "1 medium-priority issue(s) identified for improvement." in summary
        assert summary.endswith(
            "Security posture needs improvement. Address high-priority issues first."
        )

    @pytest.mark.parametrize(
        "overall,closing",
        [
            (80, "Overall security posture is good"),
            (79, "Security posture needs improvement"),
            (60, "Security posture needs improvement"),
            (59, "Security posture requires significant attention"),
        ],
    )
    def test_closing_thresholds(self, overall, closing):
        """Test closing sentence thresholds."""
        scores = ScoreSet(overall, overall, 100, 100, 100, 100)
        assert closing in generate_summary([], scores)

    def test_low_findings_not_mentioned(self):
        """Test low findings are left out of the summary."""
        findings = [make_finding("a", Severity.LOW)]
        summary = generate_summary(findings, calculate_scores(findings))
        assert "issue(s)" not in summary

    def test_deterministic(self):
        """Test summary determinism."""
        findings = [make_finding("a", Severity.CRITICAL), make_finding("b", Severity.MEDIUM)]
        scores = calculate_scores(findings)
        assert generate_summary(findings, scores) == generate_summary(findings, scores)
