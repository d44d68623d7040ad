"""
Tests for the accessibility evaluator.
"""

from unittest.mock import AsyncMock, MagicMock, patch

import httpx
import pytest

from a11yeval.axe import violations_to_issues
from a11yeval.config import AccessibilitySettings
from a11yeval.dom import HtmlDocument
from a11yeval.evaluator import AccessibilityEvaluator
from a11yeval.exceptions import DocumentParseError
from a11yeval.rules import AccessibilityRule, default_registry
from a11yeval.types import Impact, Issue, IssueType, Standard

AXE_VIOLATION = {
    "id": "color-contrast",
    "description": "Ensures the contrast between foreground and background colors meets WCAG 2 AA",
    "impact": "serious",
    "nodes": [
        {
            "html": '<p style="color:#ccc">Low</p>',
            "target": ["body", "p"],
            "impact": "serious",
        }
    ],
}


class ExplodingRule(AccessibilityRule):
    """Rule that always raises."""

    @property
    def name(self) -> str:
        return "exploding"

    @property
    def standard(self):
        return Standard.WCAG

    @property
    def wcag_criterion(self) -> str:
        return "2.4.1"

    def check(self, document):
        raise RuntimeError("boom")


class TestEvaluateDocument:
    """Tests for synchronous rule execution."""

    def test_accessible_document_passes_all_rules(self, plain_settings, accessible_html) -> None:
        """Test every built-in rule records a passed check."""
        evaluator = AccessibilityEvaluator(plain_settings)

        result = evaluator.evaluate_document(HtmlDocument.parse(accessible_html))

        assert result.issues == []
        assert result.passed_checks == [
            "WCAG: images-alt-text",
            "WCAG: headings-structure",
            "WCAG: form-labels",
            "ARIA: aria-required-attr",
            "ARIA: aria-valid-values",
        ]
        assert result.summary.total_issues == 0

    def test_failing_rule_is_not_passed(self, plain_settings) -> None:
        """Test one failing element suppresses the passed marker."""
        evaluator = AccessibilityEvaluator(plain_settings)

        result = evaluator.evaluate_document(
            HtmlDocument.parse('<img src="a.png" alt="ok"><img src="b.png">')
        )

        assert "WCAG: images-alt-text" not in result.passed_checks
        assert [issue.rule for issue in result.issues] == ["WCAG 1.1.1"]

    def test_rule_fault_is_isolated(self, plain_settings) -> None:
        """Test a raising rule neither passes nor fails and others still run."""
        registry = default_registry().with_rules(ExplodingRule())
        evaluator = AccessibilityEvaluator(plain_settings, registry=registry)

        result = evaluator.evaluate_document(HtmlDocument.parse('<img src="a.png">'))

        assert len(result.rule_faults) == 1
        fault = result.rule_faults[0]
        assert fault.rule == "exploding"
        assert fault.error_type == "RuntimeError"
        assert fault.message == "boom"
        assert "WCAG: exploding" not in result.passed_checks
        assert [issue.rule for issue in result.issues] == ["WCAG 1.1.1"]

    def test_strict_mode_reports_rule_faults(self) -> None:
        """Test strict mode turns a rule fault into an issue for its criterion."""
        settings = AccessibilitySettings(
            wcag={"strict_mode": True}, evaluation={"enable_enhanced_explanations": False}
        )
        registry = default_registry().with_rules(ExplodingRule())
        evaluator = AccessibilityEvaluator(settings, registry=registry)

        result = evaluator.evaluate_document(HtmlDocument.parse("<p>text</p>"))

        assert [issue.rule for issue in result.issues] == ["WCAG 2.4.1"]
        assert result.issues[0].message == "Rule exploding could not be evaluated: boom"

    def test_disabled_criterion_skips_rule(self) -> None:
        """Test rules for a disabled criterion are skipped and not passed."""
        settings = AccessibilitySettings(wcag={"disabled_criteria": ["1.1.1"]})
        evaluator = AccessibilityEvaluator(settings)

        result = evaluator.evaluate_document(HtmlDocument.parse('<img src="a.png">'))

        assert result.issues == []
        assert "WCAG: images-alt-text" not in result.passed_checks

    def test_disabled_criterion_drops_external_issues(self) -> None:
        """Test external issues naming a disabled criterion are dropped."""
        settings = AccessibilitySettings(wcag={"disabled_criteria": ["1.4.3"]})
        evaluator = AccessibilityEvaluator(settings)
        external = Issue(
            type=IssueType.ERROR,
            rule="WCAG 1.4.3",
            message="Low contrast",
            standard=Standard.WCAG,
        )

        result = evaluator.evaluate_document(HtmlDocument.parse("<p>x</p>"), [external])

        assert result.issues == []

    def test_min_impact_filter(self) -> None:
        """Test issues below the minimum impact are dropped, unrated issues kept."""
        settings = AccessibilitySettings(
            evaluation={"min_impact_level": "serious", "enable_enhanced_explanations": False}
        )
        evaluator = AccessibilityEvaluator(settings)
        unrated = Issue(type=IssueType.INFO, rule="note", message="n", standard=Standard.MDN)

        result = evaluator.evaluate_document(
            HtmlDocument.parse('<h1>a</h1><h3>b</h3><img src="x.png">'), [unrated]
        )

        assert [issue.rule for issue in result.issues] == ["WCAG 1.1.1", "note"]

    def test_passed_checks_can_be_omitted(self, accessible_html) -> None:
        """Test include_passed_checks=False."""
        settings = AccessibilitySettings(evaluation={"include_passed_checks": False})
        evaluator = AccessibilityEvaluator(settings)

        result = evaluator.evaluate_document(HtmlDocument.parse(accessible_html))

        assert result.passed_checks == []

    def test_collect_keeps_passed_checks(self, accessible_html) -> None:
        """Test collected results keep passed checks whatever the output setting."""
        settings = AccessibilitySettings(evaluation={"include_passed_checks": False})
        evaluator = AccessibilityEvaluator(settings)

        collected = evaluator.collect(HtmlDocument.parse(accessible_html))

        assert len(collected.passed_checks) == 5
        assert evaluator.for_output(collected).passed_checks == []
        assert len(collected.passed_checks) == 5

    def test_issue_filters(self, plain_settings) -> None:
        """Test filtering result issues by type and standard."""
        evaluator = AccessibilityEvaluator(plain_settings)

        result = evaluator.evaluate_document(
            HtmlDocument.parse('<img src="a.png"><h1>a</h1><h3>b</h3><div role="checkbox"></div>')
        )

        assert [i.rule for i in result.get_issues_by_type(IssueType.WARNING)] == ["WCAG 1.3.1"]
        assert [i.rule for i in result.get_issues_by_standard(Standard.ARIA)] == [
            "ARIA Required Attributes"
        ]
        assert result.get_issues_by_type(IssueType.INFO) == []

    def test_explanations_attached(self, settings) -> None:
        """Test issues carry explanations by default."""
        evaluator = AccessibilityEvaluator(settings)

        result = evaluator.evaluate_document(HtmlDocument.parse("<input>"))

        issue = result.issues[0]
        assert issue.is_explained()
        assert "Form controls" in issue.detailed_explanation
        assert issue.how_to_fix.code_example is not None

    def test_summary_counts(self, plain_settings) -> None:
        """Test the summary counters."""
        evaluator = AccessibilityEvaluator(plain_settings)

        result = evaluator.evaluate_document(
            HtmlDocument.parse(
                '<img src="a.png"><h1>a</h1><h3>b</h3><div role="checkbox"></div>'
            ),
            violations_to_issues([AXE_VIOLATION]),
        )

        summary = result.summary
        assert summary.total_issues == 4
        assert summary.errors == 3
        assert summary.warnings == 1
        assert summary.info == 0
        assert summary.by_standard == {"WCAG": 2, "ARIA": 1, "AXE": 1}
        assert summary.by_impact == {"critical": 1, "moderate": 1, "serious": 2}

    def test_summarize_skips_missing_impact(self) -> None:
        """Test issues without impact are not counted by impact."""
        issues = [Issue(type=IssueType.INFO, rule="r", message="m", standard=Standard.MDN)]

        summary = AccessibilityEvaluator.summarize(issues)

        assert summary.info == 1
        assert summary.by_impact == {}


class TestAxeIntegration:
    """Tests for merging axe-core results."""

    def test_violations_to_issues(self) -> None:
        """Test the violation mapping."""
        (issue,) = violations_to_issues([AXE_VIOLATION])

        assert issue.type == IssueType.ERROR
        assert issue.rule == "color-contrast"
        assert issue.standard == Standard.AXE
        assert issue.selector == "body p"
        assert issue.element == '<p style="color:#ccc">Low</p>'
        assert issue.impact == Impact.SERIOUS

    def test_violation_without_nodes(self) -> None:
        """Test a violation that lists no nodes."""
        (issue,) = violations_to_issues([{"id": "region", "description": "d", "nodes": []}])

        assert issue.element is None
        assert issue.selector is None

    @pytest.mark.asyncio
    async def test_axe_issues_are_merged(self, plain_settings, accessible_html) -> None:
        """Test axe issues are appended after rule issues."""
        runner = AsyncMock()
        runner.run.return_value = [AXE_VIOLATION]
        evaluator = AccessibilityEvaluator(plain_settings, axe_runner=runner)

        result = await evaluator.evaluate_html(accessible_html)

        runner.run.assert_awaited_once()
        assert [issue.standard for issue in result.issues] == [Standard.AXE]
        assert len(result.passed_checks) == 5

    @pytest.mark.asyncio
    async def test_axe_failure_is_isolated(self, plain_settings) -> None:
        """Test an axe failure still returns the rule results."""
        runner = AsyncMock()
        runner.run.side_effect = RuntimeError("browser crashed")
        evaluator = AccessibilityEvaluator(plain_settings, axe_runner=runner)

        result = await evaluator.evaluate_html('<img src="a.png">')

        assert [issue.rule for issue in result.issues] == ["WCAG 1.1.1"]
        assert result.summary.by_standard == {"WCAG": 1}

    @pytest.mark.asyncio
    async def test_malformed_axe_output_is_isolated(self, plain_settings) -> None:
        """Test unconvertible axe results are logged and dropped."""
        runner = AsyncMock()
        runner.run.return_value = [{"id": "x", "nodes": ["not-a-dict"]}]
        evaluator = AccessibilityEvaluator(plain_settings, axe_runner=runner)

        result = await evaluator.evaluate_html('<img src="a.png">')

        assert [issue.rule for issue in result.issues] == ["WCAG 1.1.1"]
        assert "AXE" not in result.summary.by_standard

    @pytest.mark.asyncio
    async def test_no_axe_runner_by_default(self, settings) -> None:
        """Test axe is off unless enabled."""
        evaluator = AccessibilityEvaluator(settings)

        assert evaluator.axe_runner is None
        assert await evaluator.run_axe("<p>x</p>") == []

    @pytest.mark.asyncio
    async def test_parse_error_propagates(self, settings) -> None:
        """Test invalid input is a hard error."""
        evaluator = AccessibilityEvaluator(settings)

        with pytest.raises(DocumentParseError):
            await evaluator.evaluate_html(None)  # type: ignore[arg-type]


class TestEvaluateUrl:
    """Tests for URL evaluation."""

    @pytest.mark.asyncio
    async def test_fetches_and_evaluates(self, plain_settings) -> None:
        """Test the fetched markup is evaluated."""
        response = MagicMock()
        response.text = '<img src="a.png">'
        response.status_code = 200
        client = AsyncMock()
        client.get.return_value = response
        client.__aenter__.return_value = client

        with patch("a11yeval.evaluator.httpx.AsyncClient", return_value=client) as factory:
            result = await AccessibilityEvaluator(plain_settings).evaluate_url(
                "https://example.com"
            )

        factory.assert_called_once_with(timeout=30.0, follow_redirects=True)
        client.get.assert_awaited_once_with("https://example.com")
        assert [issue.rule for issue in result.issues] == ["WCAG 1.1.1"]

    @pytest.mark.asyncio
    async def test_transport_errors_propagate(self, plain_settings) -> None:
        """Test fetch failures are raised to the caller."""
        client = AsyncMock()
        client.get.side_effect = httpx.ConnectError("refused")
        client.__aenter__.return_value = client

        with patch("a11yeval.evaluator.httpx.AsyncClient", return_value=client):
            with pytest.raises(httpx.ConnectError):
                await AccessibilityEvaluator(plain_settings).evaluate_url("https://example.com")
