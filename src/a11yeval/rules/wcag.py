"""
WCAG Rules

Document-level checks for WCAG 2.1 success criteria 1.1.1 (Non-text Content)
and 1.3.1 (Info and Relationships).
"""

from __future__ import annotations

from a11yeval.dom import HtmlDocument, get_attr, text_snippet
from a11yeval.rules.base_rule import AccessibilityRule
from a11yeval.types import Impact, Issue, IssueType, Standard, WCAGLevel


class ImagesAltTextRule(AccessibilityRule):
    """WCAG 1.1.1: Images must have alternative text.

    An empty ``alt=""`` marks a decorative image and is compliant, as is
    ``role="presentation"``.
    """

    @property
    def name(self) -> str:
        return "images-alt-text"

    @property
    def standard(self) -> Standard:
        return Standard.WCAG

    @property
    def wcag_criterion(self) -> str:
        return "1.1.1"

    @property
    def level(self) -> WCAGLevel:
        return WCAGLevel.A

    @property
    def description(self) -> str:
        return "Images must have alternative text"

    def check(self, document: HtmlDocument) -> list[Issue]:
        issues: list[Issue] = []

        for img in document.select("img"):
            if get_attr(img, "alt") is not None:
                continue
            if "presentation" in (get_attr(img, "role") or ""):
                continue
            issues.append(
                self._create_issue(
                    img,
                    message="Images must have alternative text",
                    impact=Impact.CRITICAL,
                )
            )

        return issues


class HeadingsStructureRule(AccessibilityRule):
    """WCAG 1.3.1: Heading levels should not skip.

    Only compares each heading with the one immediately before it.
    """

    @property
    def name(self) -> str:
        return "headings-structure"

    @property
    def standard(self) -> Standard:
        return Standard.WCAG

    @property
    def wcag_criterion(self) -> str:
        return "1.3.1"

    @property
    def level(self) -> WCAGLevel:
        return WCAGLevel.A

    @property
    def description(self) -> str:
        return "Heading levels should increase one step at a time"

    def check(self, document: HtmlDocument) -> list[Issue]:
        issues: list[Issue] = []
        last_level = 0

        for heading in document.select("h1, h2, h3, h4, h5, h6"):
            level = int(heading.name[1])

            if last_level and level > last_level + 1:
                issues.append(
                    self._create_issue(
                        heading,
                        message=(
                            f"Heading levels should not skip (found h{level} after h{last_level})"
                        ),
                        impact=Impact.MODERATE,
                        issue_type=IssueType.WARNING,
                        snippet=text_snippet(heading),
                    )
                )
            last_level = level

        return issues


class FormLabelsRule(AccessibilityRule):
    """WCAG 1.3.1: Form controls must have associated labels.

    A control is labelled by a ``label[for]`` matching its id, an
    ``aria-label`` or an ``aria-labelledby``.
    """

    SKIPPED_INPUT_TYPES = frozenset({"submit", "button", "hidden"})

    @property
    def name(self) -> str:
        return "form-labels"

    @property
    def standard(self) -> Standard:
        return Standard.WCAG

    @property
    def wcag_criterion(self) -> str:
        return "1.3.1"

    @property
    def level(self) -> WCAGLevel:
        return WCAGLevel.A

    @property
    def description(self) -> str:
        return "Form controls must have associated labels"

    def check(self, document: HtmlDocument) -> list[Issue]:
        issues: list[Issue] = []
        label_targets = {
            get_attr(label, "for") for label in document.select("label[for]")
        }

        for control in document.select("input, select, textarea"):
            if get_attr(control, "type") in self.SKIPPED_INPUT_TYPES:
                continue

            control_id = get_attr(control, "id")
            has_label = bool(control_id) and control_id in label_targets

            if not has_label and not get_attr(control, "aria-label") and not get_attr(
                control, "aria-labelledby"
            ):
                issues.append(
                    self._create_issue(
                        control,
                        message="Form controls must have associated labels",
                        impact=Impact.CRITICAL,
                    )
                )

        return issues
