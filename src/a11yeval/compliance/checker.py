"""
WCAG Compliance Checker

Maps the issues and passed checks of an ``EvaluationResult`` onto the WCAG
criteria catalog and derives a conformance level and scores.
"""

from __future__ import annotations

from collections.abc import Mapping

from ..config import AccessibilitySettings
from ..logging import get_logger
from ..rules import default_registry
from ..types import (
    ComplianceLevel,
    ComplianceReport,
    DetailedScores,
    EvaluationResult,
    Principle,
    WCAGCriterion,
    WCAGLevel,
)
from .criteria import WCAG_CRITERIA, merge_criteria
from .recommendations import generate_recommendations

logger = get_logger(__name__)

_LEVELS = (WCAGLevel.A, WCAGLevel.AA, WCAGLevel.AAA)

# Level reached when the first failure is found at the key level
_LEVEL_BELOW: dict[WCAGLevel, ComplianceLevel] = {
    WCAGLevel.A: ComplianceLevel.NONE,
    WCAGLevel.AA: ComplianceLevel.A,
    WCAGLevel.AAA: ComplianceLevel.AA,
}


def percentage(passed: int, failed: int) -> int:
    """Share of passed criteria as 0-100, rounding halves up. 0 when nothing was tested."""
    total = passed + failed
    if total == 0:
        return 0
    return (200 * passed + total) // (2 * total)


class WCAGComplianceChecker:
    """Computes WCAG compliance reports.

    A criterion is failed when any issue names it (``rule == "WCAG <id>"``),
    passed when a passed check refers to it, and not applicable otherwise.

    Args:
        settings: Settings supplying the default level, custom criteria and
            the recommendations switch.
        criteria: Base catalog. Defaults to ``WCAG_CRITERIA``.
        check_criteria: Passed-check marker to criterion id, used to build the
            readable form of each passed check. Defaults to the mapping of the
            built-in rules.
    """

    def __init__(
        self,
        settings: AccessibilitySettings | None = None,
        criteria: Mapping[str, WCAGCriterion] | None = None,
        check_criteria: Mapping[str, str] | None = None,
    ) -> None:
        self.settings = settings or AccessibilitySettings()
        self.criteria = merge_criteria(
            criteria if criteria is not None else WCAG_CRITERIA,
            self.settings.wcag.custom_criteria,
        )
        if check_criteria is None:
            check_criteria = default_registry().criteria_by_check()
        self.check_criteria = dict(check_criteria)

    def resolve_level(self, level: WCAGLevel | str | None = None) -> WCAGLevel:
        """The given level, or the configured default when ``None``.

        Raises:
            InvalidWCAGLevelError: If the level is not A, AA or AAA.
        """
        return self.settings.get_wcag_level(level)

    def get_applicable_criteria(self, target_level: WCAGLevel | str) -> list[WCAGCriterion]:
        """Catalog criteria at or below ``target_level``, in catalog order.

        Raises:
            InvalidWCAGLevelError: If the level is not A, AA or AAA.
        """
        target = self.resolve_level(target_level)
        return [c for c in self.criteria.values() if c.level.rank <= target.rank]

    def evaluate_compliance(
        self, result: EvaluationResult, target_level: WCAGLevel | str | None = None
    ) -> ComplianceReport:
        """Build the compliance report for an evaluation result.

        Args:
            result: Evaluation result to assess.
            target_level: Level to assess against. Defaults to
                ``settings.wcag.default_level``.

        Raises:
            InvalidWCAGLevelError: If the level is not A, AA or AAA.
        """
        target = self.resolve_level(target_level)
        applicable = self.get_applicable_criteria(target)

        failing_ids = {issue.criterion_id for issue in result.issues} - {None}
        readable_checks = self._readable_checks(result.passed_checks)

        passed: list[WCAGCriterion] = []
        failed: list[WCAGCriterion] = []
        not_applicable: list[WCAGCriterion] = []

        for criterion in applicable:
            if criterion.id in failing_ids:
                failed.append(criterion)
            elif self._is_tested(criterion, readable_checks):
                passed.append(criterion)
            else:
                not_applicable.append(criterion)

        level = self._compliance_level(passed, failed, target)
        recommendations = (
            generate_recommendations(failed)
            if self.settings.reporting.include_recommendations
            else None
        )

        logger.info(
            "compliance_evaluated",
            target_level=target.value,
            level=level.value,
            passed=len(passed),
            failed=len(failed),
        )

        return ComplianceReport(
            level=level,
            passed_criteria=passed,
            failed_criteria=failed,
            not_applicable_criteria=not_applicable,
            overall_score=percentage(len(passed), len(failed)),
            detailed_scores=self._detailed_scores(passed, failed),
            target_level=target,
            meets_target=level.value == target.value,
            recommendations=recommendations,
        )

    def _readable_checks(self, passed_checks: list[str]) -> list[str]:
        readable = []
        for check in passed_checks:
            criterion_id = self.check_criteria.get(check)
            readable.append(f"{check} {criterion_id}" if criterion_id else check)
        return readable

    @staticmethod
    def _is_tested(criterion: WCAGCriterion, checks: list[str]) -> bool:
        kebab = criterion.kebab_name
        return any(criterion.id in check or kebab in check.lower() for check in checks)

    @staticmethod
    def _compliance_level(
        passed: list[WCAGCriterion], failed: list[WCAGCriterion], target: WCAGLevel
    ) -> ComplianceLevel:
        levels = [level for level in _LEVELS if level.rank <= target.rank]

        failed_levels = {criterion.level for criterion in failed}
        for level in levels:
            if level in failed_levels:
                return _LEVEL_BELOW[level]

        passed_levels = {criterion.level for criterion in passed}
        achieved = ComplianceLevel.NONE
        for level in levels:
            if level not in passed_levels:
                break
            achieved = ComplianceLevel(level.value)
        return achieved

    @staticmethod
    def _detailed_scores(
        passed: list[WCAGCriterion], failed: list[WCAGCriterion]
    ) -> DetailedScores:
        scores = {}
        for principle in Principle:
            scores[principle.value.lower()] = percentage(
                sum(1 for c in passed if c.principle == principle),
                sum(1 for c in failed if c.principle == principle),
            )
        return DetailedScores(**scores)
