"""
Tests for the WCAG compliance checker.
"""

import pytest

from a11yeval.compliance import (
    WCAG_CRITERIA,
    WCAGComplianceChecker,
    generate_recommendations,
    percentage,
)
from a11yeval.config import AccessibilitySettings
from a11yeval.exceptions import InvalidWCAGLevelError
from a11yeval.types import (
    ComplianceLevel,
    EvaluationResult,
    Issue,
    IssueType,
    Principle,
    Standard,
    WCAGCriterion,
    WCAGLevel,
)


def wcag_issue(criterion_id: str) -> Issue:
    return Issue(
        type=IssueType.ERROR,
        rule=f"WCAG {criterion_id}",
        message="failure",
        standard=Standard.WCAG,
    )


def result_with(issues=(), passed=()) -> EvaluationResult:
    return EvaluationResult(issues=list(issues), passed_checks=list(passed))


@pytest.fixture
def checker(settings):
    return WCAGComplianceChecker(settings)


class TestCatalog:
    """Tests for the criteria catalog."""

    def test_catalog_contents(self) -> None:
        """Test the catalog size and level split."""
        levels = [c.level for c in WCAG_CRITERIA.values()]

        assert len(WCAG_CRITERIA) == 15
        assert levels.count(WCAGLevel.A) == 8
        assert levels.count(WCAGLevel.AA) == 4
        assert levels.count(WCAGLevel.AAA) == 3

    def test_criterion_id_validated(self) -> None:
        """Test malformed criterion ids are rejected."""
        with pytest.raises(ValueError):
            WCAGCriterion(
                id="1.1",
                name="Bad",
                level=WCAGLevel.A,
                principle=Principle.ROBUST,
                guideline="x",
            )

    def test_custom_criteria_merged(self) -> None:
        """Test custom criteria from settings are applicable."""
        custom = WCAGCriterion(
            id="4.1.2",
            name="Name, Role, Value",
            level=WCAGLevel.A,
            principle=Principle.ROBUST,
            guideline="4.1 Compatible",
        )
        checker = WCAGComplianceChecker(AccessibilitySettings(wcag={"custom_criteria": [custom]}))

        assert "4.1.2" in {c.id for c in checker.get_applicable_criteria("A")}
        assert "4.1.2" not in WCAG_CRITERIA


class TestApplicability:
    """Tests for applicable criteria selection."""

    def test_levels_nest(self, checker) -> None:
        """Test applicable sets grow with the level."""
        a = {c.id for c in checker.get_applicable_criteria("A")}
        aa = {c.id for c in checker.get_applicable_criteria("AA")}
        aaa = {c.id for c in checker.get_applicable_criteria(WCAGLevel.AAA)}

        assert a < aa < aaa
        assert len(aaa) == len(WCAG_CRITERIA)

    @pytest.mark.parametrize("level", ["B", "aa", "", "AAAA"])
    def test_invalid_level(self, checker, level) -> None:
        """Test invalid levels raise instead of defaulting."""
        with pytest.raises(InvalidWCAGLevelError) as exc_info:
            checker.evaluate_compliance(result_with(), level)

        assert "Must be one of: A, AA, AAA" in str(exc_info.value)


class TestEvaluateCompliance:
    """Tests for compliance reports."""

    def test_partition(self, checker) -> None:
        """Test the three lists partition the applicable criteria."""
        report = checker.evaluate_compliance(
            result_with([wcag_issue("1.4.3")], ["WCAG: images-alt-text"]), "AA"
        )

        passed = {c.id for c in report.passed_criteria}
        failed = {c.id for c in report.failed_criteria}
        not_applicable = {c.id for c in report.not_applicable_criteria}
        applicable = {c.id for c in checker.get_applicable_criteria("AA")}

        assert passed == {"1.1.1"}
        assert failed == {"1.4.3"}
        assert passed | failed | not_applicable == applicable
        assert not passed & failed
        assert len(passed) + len(failed) + len(not_applicable) == len(applicable)

    def test_level_a_failure_means_none(self, checker) -> None:
        """Test any level-A failure yields no conformance."""
        report = checker.evaluate_compliance(
            result_with([wcag_issue("1.1.1")], ["WCAG: headings-structure"]), "AAA"
        )

        assert report.level == ComplianceLevel.NONE
        assert report.meets_target is False

    def test_aa_only_failure_means_a(self, checker) -> None:
        """Test an AA failure with A passes yields A."""
        report = checker.evaluate_compliance(
            result_with([wcag_issue("1.4.3")], ["WCAG: images-alt-text"]), "AA"
        )

        assert report.level == ComplianceLevel.A
        assert report.overall_score == 50
        assert report.target_level == WCAGLevel.AA

    def test_no_failures_reaches_highest_tested_level(self, checker) -> None:
        """Test the level without failures needs passes at every level."""
        report = checker.evaluate_compliance(result_with(passed=["WCAG: form-labels"]), "AA")

        assert report.level == ComplianceLevel.A
        assert report.meets_target is False

    def test_no_passes_no_failures(self, checker) -> None:
        """Test an empty result."""
        report = checker.evaluate_compliance(result_with(), "AA")

        assert report.level == ComplianceLevel.NONE
        assert report.overall_score == 0
        assert report.passed_criteria == []
        assert report.detailed_scores.perceivable == 0

    def test_target_met(self, checker) -> None:
        """Test meeting the target through name-based passed checks."""
        report = checker.evaluate_compliance(
            result_with(passed=["WCAG: non-text-content", "Custom: contrast-(minimum)"]), "AA"
        )

        assert {c.id for c in report.passed_criteria} == {"1.1.1", "1.4.3"}
        assert report.level == ComplianceLevel.AA
        assert report.meets_target is True
        assert report.overall_score == 100

    def test_passed_check_matching_by_id(self, checker) -> None:
        """Test passed checks naming a criterion id."""
        report = checker.evaluate_compliance(result_with(passed=["Manual review 2.4.1"]), "A")

        assert [c.id for c in report.passed_criteria] == ["2.4.1"]

    def test_default_target_from_settings(self) -> None:
        """Test the configured default level is used."""
        checker = WCAGComplianceChecker(AccessibilitySettings(wcag={"default_level": "A"}))

        report = checker.evaluate_compliance(result_with())

        assert report.target_level == WCAGLevel.A
        assert len(report.not_applicable_criteria) == 8

    def test_non_wcag_issues_ignored(self, checker) -> None:
        """Test ARIA and axe issues do not fail criteria."""
        aria = Issue(
            type=IssueType.ERROR,
            rule="ARIA Required Attributes",
            message="m",
            standard=Standard.ARIA,
        )

        report = checker.evaluate_compliance(result_with([aria]), "AA")

        assert report.failed_criteria == []

    def test_score_monotonic(self, checker) -> None:
        """Test adding failures never raises the score."""
        passed = ["WCAG: images-alt-text", "WCAG: headings-structure"]
        scores = []
        for failures in ([], ["1.4.3"], ["1.4.3", "1.1.1"], ["1.4.3", "1.1.1", "1.3.1"]):
            report = checker.evaluate_compliance(
                result_with([wcag_issue(i) for i in failures], passed), "AA"
            )
            scores.append(report.overall_score)

        assert scores == sorted(scores, reverse=True)
        assert scores[0] == 100
        assert scores[-1] == 0

    def test_detailed_scores(self, checker) -> None:
        """Test per-principle scores."""
        report = checker.evaluate_compliance(
            result_with([wcag_issue("2.1.1")], ["WCAG: images-alt-text", "x 2.4.1"]), "A"
        )

        assert report.detailed_scores.perceivable == 100
        assert report.detailed_scores.operable == 50
        assert report.detailed_scores.understandable == 0
        assert report.detailed_scores.robust == 0

    def test_criteria_by_level(self, checker) -> None:
        """Test tested criteria grouped by level."""
        report = checker.evaluate_compliance(
            result_with([wcag_issue("1.4.3")], ["WCAG: images-alt-text"]), "AA"
        )

        assert [c.id for c in report.get_criteria_by_level(WCAGLevel.A)] == ["1.1.1"]
        assert [c.id for c in report.get_criteria_by_level(WCAGLevel.AA)] == ["1.4.3"]
        assert report.get_criteria_by_level(WCAGLevel.AAA) == []

    def test_recommendations_toggle(self) -> None:
        """Test recommendations follow the reporting setting."""
        on = WCAGComplianceChecker(AccessibilitySettings())
        off = WCAGComplianceChecker(
            AccessibilitySettings(reporting={"include_recommendations": False})
        )
        result = result_with([wcag_issue("1.1.1")])

        assert len(on.evaluate_compliance(result, "A").recommendations) == 1
        assert off.evaluate_compliance(result, "A").recommendations is None


class TestScoring:
    """Tests for score rounding."""

    @pytest.mark.parametrize(
        "passed,failed,expected",
        [(0, 0, 0), (1, 1, 50), (1, 7, 13), (7, 1, 88), (2, 1, 67), (1, 2, 33), (5, 0, 100)],
    )
    def test_percentage_rounds_half_up(self, passed, failed, expected) -> None:
        """Test halves round up."""
        assert percentage(passed, failed) == expected


class TestRecommendations:
    """Tests for recommendation text."""

    def test_template(self) -> None:
        """Test a criterion with a dedicated template."""
        (text,) = generate_recommendations([WCAG_CRITERIA["1.1.1"]])

        assert text.startswith("1.1.1 Non-text Content")
        assert 'alt=""' in text

    def test_generic(self) -> None:
        """Test the generic fallback."""
        (text,) = generate_recommendations([WCAG_CRITERIA["1.4.1"]])

        assert "Level: A | Principle: Perceivable" in text
        assert "G14, G111, G182" in text
        assert "G183" not in text
        assert "F13, F73" in text
        assert "https://www.w3.org/WAI/WCAG21/Understanding/141.html" in text

    def test_one_block_per_failure(self) -> None:
        """Test ordering and count."""
        failed = [WCAG_CRITERIA["2.4.6"], WCAG_CRITERIA["3.1.1"]]

        texts = generate_recommendations(failed)

        assert [t.split()[0] for t in texts] == ["2.4.6", "3.1.1"]
