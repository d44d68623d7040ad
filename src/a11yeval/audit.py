"""
Accessibility Audit

Runs rule evaluation, ARIA validation and the WCAG compliance check over one
document using a single settings object.
"""

from __future__ import annotations

from pydantic import BaseModel

from .aria import ARIAValidator
from .axe import AxeRunner
from .compliance import WCAGComplianceChecker
from .config import AccessibilitySettings
from .dom import HtmlDocument
from .evaluator import AccessibilityEvaluator
from .logging import LogContext, get_logger
from .rules import RuleRegistry
from .types import ARIAValidationResult, ComplianceReport, EvaluationResult, WCAGLevel

logger = get_logger(__name__)


class AuditReport(BaseModel):
    """Combined outcome of an audit."""

    evaluation: EvaluationResult
    compliance: ComplianceReport
    aria: ARIAValidationResult | None = None


class AccessibilityAudit:
    """Wires the evaluator, ARIA validator and compliance checker together.

    Example:
        ```python
        audit = AccessibilityAudit(load_settings())
        report = await audit.audit_html(html, target_level="AA")
        print(report.compliance.level, report.compliance.overall_score)
        ```
    """

    def __init__(
        self,
        settings: AccessibilitySettings | None = None,
        registry: RuleRegistry | None = None,
        axe_runner: AxeRunner | None = None,
    ) -> None:
        self.settings = settings or AccessibilitySettings()
        self.evaluator = AccessibilityEvaluator(self.settings, registry, axe_runner)
        self.aria_validator = ARIAValidator(self.settings)
        self.checker = WCAGComplianceChecker(
            self.settings, check_criteria=self.evaluator.registry.criteria_by_check()
        )

    async def audit_html(
        self, html: str | bytes, target_level: WCAGLevel | str | None = None
    ) -> AuditReport:
        """Audit markup.

        Raises:
            DocumentParseError: If the markup cannot be parsed.
            InvalidWCAGLevelError: If ``target_level`` is not A, AA or AAA.
        """
        level = self.checker.resolve_level(target_level)

        document = HtmlDocument.parse(html)
        with LogContext(logger, target_level=level.value) as log:
            axe_issues = await self.evaluator.run_axe(html)
            evaluation = self.evaluator.collect(document, axe_issues)
            compliance = self.checker.evaluate_compliance(evaluation, level)
            evaluation = self.evaluator.for_output(evaluation)

            aria = None
            if self.settings.aria.enable_validation:
                aria = self.aria_validator.validate(document)

            log.info(
                "audit_completed",
                issues=evaluation.summary.total_issues,
                level=compliance.level.value,
                aria_issues=len(aria.issues) if aria is not None else None,
            )

        return AuditReport(evaluation=evaluation, compliance=compliance, aria=aria)
