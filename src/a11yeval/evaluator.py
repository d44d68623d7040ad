"""
Accessibility Evaluator

Runs the rule registry over a document, merges axe-core findings and
aggregates everything into an ``EvaluationResult``.
"""

from __future__ import annotations

from collections import Counter
from collections.abc import Iterable

import httpx

from .axe import AxeRunner, PlaywrightAxeRunner, violations_to_issues
from .config import AccessibilitySettings
from .dom import HtmlDocument
from .explanations import ExplanationGenerator
from .logging import RuleLogger, get_logger
from .rules import RuleRegistry, default_registry, passed_check_name
from .types import EvaluationResult, EvaluationSummary, Impact, Issue, IssueType, RuleFault

logger = get_logger(__name__)


class AccessibilityEvaluator:
    """Evaluates HTML documents against the registered rules.

    Each rule runs in isolation: a rule that raises is logged and recorded as
    a ``RuleFault`` without affecting the other rules. A rule that reports no
    issues is recorded in ``passed_checks`` as ``"<Standard>: <name>"``.

    Example:
        ```python
        evaluator = AccessibilityEvaluator(settings)
        result = await evaluator.evaluate_html("<img src='logo.png'>")
        print(result.summary.errors)
        ```
    """

    def __init__(
        self,
        settings: AccessibilitySettings | None = None,
        registry: RuleRegistry | None = None,
        axe_runner: AxeRunner | None = None,
    ) -> None:
        """Initialize the evaluator.

        Args:
            settings: Evaluation settings. Defaults are used when omitted.
            registry: Rules to run. Defaults to the built-in rules.
            axe_runner: axe-core runner. When omitted, a Playwright runner is
                created if ``settings.axe.enabled`` is set.
        """
        self.settings = settings or AccessibilitySettings()
        self.registry = registry if registry is not None else default_registry()
        if axe_runner is None and self.settings.axe.enabled:
            axe_runner = PlaywrightAxeRunner(self.settings)
        self.axe_runner = axe_runner
        self.explanations = ExplanationGenerator(self.settings)
        self.rule_logger = RuleLogger(logger)

    def evaluate_document(
        self, document: HtmlDocument, external_issues: Iterable[Issue] = ()
    ) -> EvaluationResult:
        """Run every enabled rule over ``document``.

        Args:
            document: Parsed document.
            external_issues: Issues from other engines (e.g. axe-core),
                merged after the rule issues.

        Returns:
            The aggregated evaluation result, shaped by the output settings.
        """
        return self.for_output(self.collect(document, external_issues))

    def for_output(self, result: EvaluationResult) -> EvaluationResult:
        """Apply ``evaluation.include_passed_checks`` to a collected result."""
        if self.settings.evaluation.include_passed_checks:
            return result
        return result.model_copy(update={"passed_checks": []})

    def collect(
        self, document: HtmlDocument, external_issues: Iterable[Issue] = ()
    ) -> EvaluationResult:
        """Like ``evaluate_document`` but always keeps every passed check.

        Compliance is computed from this result, so output settings never
        change the verdict.
        """
        found: list[tuple[Issue, str | None]] = []
        passed_checks: list[str] = []
        rule_faults: list[RuleFault] = []

        for name, rule in self.registry.items():
            criterion = rule.wcag_criterion
            if criterion and not self.settings.is_criterion_enabled(criterion):
                logger.debug("rule_skipped", rule=name, criterion=criterion)
                continue

            context = self.rule_logger.log_rule_start(name, standard=rule.standard.value)
            try:
                rule_issues = rule.check(document)
            except Exception as e:
                self.rule_logger.log_rule_end(context, error=e)
                rule_faults.append(
                    RuleFault(rule=name, error_type=type(e).__name__, message=str(e))
                )
                if self.settings.wcag.strict_mode:
                    # a rule that cannot run counts against its criterion
                    fault_issue = rule._create_issue(
                        None, f"Rule {name} could not be evaluated: {e}", Impact.SERIOUS
                    )
                    found.append((fault_issue, name))
                continue
            self.rule_logger.log_rule_end(context, issue_count=len(rule_issues))

            if rule_issues:
                found.extend((issue, name) for issue in rule_issues)
            else:
                passed_checks.append(passed_check_name(rule))

        found.extend((issue, None) for issue in external_issues)

        issues = [
            self._explain(issue, source) for issue, source in found if self._is_reported(issue)
        ]

        return EvaluationResult(
            issues=issues,
            summary=self.summarize(issues),
            passed_checks=passed_checks,
            rule_faults=rule_faults,
        )

    def _is_reported(self, issue: Issue) -> bool:
        min_impact = self.settings.evaluation.min_impact_level
        if issue.impact is not None and issue.impact.rank < min_impact.rank:
            return False
        criterion = issue.criterion_id
        return criterion is None or self.settings.is_criterion_enabled(criterion)

    def _explain(self, issue: Issue, source: str | None) -> Issue:
        if not self.settings.evaluation.enable_enhanced_explanations:
            return issue
        return self.explanations.explain(issue, source)

    @staticmethod
    def summarize(issues: list[Issue]) -> EvaluationSummary:
        """Count issues by type, standard and impact."""
        by_type = Counter(issue.type for issue in issues)
        by_standard = Counter(issue.standard.value for issue in issues)
        by_impact = Counter(issue.impact.value for issue in issues if issue.impact is not None)

        return EvaluationSummary(
            total_issues=len(issues),
            errors=by_type[IssueType.ERROR],
            warnings=by_type[IssueType.WARNING],
            info=by_type[IssueType.INFO],
            by_standard=dict(by_standard),
            by_impact=dict(by_impact),
        )

    async def evaluate_html(self, html: str | bytes) -> EvaluationResult:
        """Parse markup, run axe-core if configured, then run the rules.

        Raises:
            DocumentParseError: If the markup cannot be parsed.
        """
        document = HtmlDocument.parse(html)
        axe_issues = await self.run_axe(html)
        return self.evaluate_document(document, axe_issues)

    async def run_axe(self, html: str | bytes) -> list[Issue]:
        """axe-core issues for the markup; empty when axe is off or fails."""
        if self.axe_runner is None:
            return []

        markup = html.decode("utf-8", errors="replace") if isinstance(html, bytes) else html
        try:
            violations = await self.axe_runner.run(markup)
            return violations_to_issues(violations)
        except Exception as e:
            logger.error("axe_run_failed", error=str(e), error_type=type(e).__name__)
            return []

    async def evaluate_url(self, url: str) -> EvaluationResult:
        """Fetch a page and evaluate its markup.

        Raises:
            httpx.HTTPError: If the page cannot be fetched.
        """
        timeout = self.settings.evaluation.request_timeout
        async with httpx.AsyncClient(timeout=timeout, follow_redirects=True) as client:
            response = await client.get(url)
            response.raise_for_status()

        logger.info("document_fetched", url=url, status=response.status_code)
        return await self.evaluate_html(response.text)
