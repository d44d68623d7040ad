"""
ARIA Validator

Checks role legality, required properties, parent containment, property
values, ID references, redundant roles, hidden focusable content and landmark
uniqueness in a single pass over a document.
"""

from __future__ import annotations

import re

from bs4 import Tag

from ..config import AccessibilitySettings
from ..dom import (
    HtmlDocument,
    closest_with_role,
    css_selector,
    get_attr,
    get_role,
    has_focusable_descendant,
    is_focusable,
    outer_html,
)
from ..explanations import ARIAExplanationGenerator
from ..logging import get_logger
from ..types import ARIAIssue, ARIAStatistics, ARIAValidationResult, IssueType
from .roles import (
    ARIA_PROPERTIES,
    ARIA_STATES,
    DEPRECATED_ATTRIBUTES,
    LANDMARK_ROLES,
    REDUNDANT_ROLE_SELECTOR,
    merge_roles,
)

logger = get_logger(__name__)

SPECIFICATION = "WAI-ARIA 1.2"
_ARIA_ATTRIBUTE = re.compile(r"^aria-[a-z]+$")


class ARIAValidator:
    """Validates WAI-ARIA usage in HTML documents.

    The validator keeps no per-document state, so validating the same
    document twice gives identical results.

    Example:
        ```python
        validator = ARIAValidator()
        result = validator.validate('<div role="checkbox">Accept</div>')
        for issue in result.errors:
            print(issue.message)
        ```
    """

    def __init__(self, settings: AccessibilitySettings | None = None) -> None:
        self.settings = settings or AccessibilitySettings()
        self.roles = merge_roles(self.settings.aria.custom_roles)
        self.properties = ARIA_PROPERTIES
        self.states = ARIA_STATES
        self.explanations = ARIAExplanationGenerator(self.settings)

    def validate(self, html: str | bytes | HtmlDocument) -> ARIAValidationResult:
        """Validate ARIA usage.

        Args:
            html: Markup or an already parsed document.

        Returns:
            Issues, notes on correct role usage and usage statistics.

        Raises:
            DocumentParseError: If markup is given and cannot be parsed.
        """
        document = html if isinstance(html, HtmlDocument) else HtmlDocument.parse(html)
        issues: list[ARIAIssue] = []
        valid_usages: list[str] = []
        statistics = ARIAStatistics()

        self._check_roles(document, issues, valid_usages, statistics)
        self._check_properties(document, issues, statistics)
        self._check_redundant_roles(document, issues)
        self._check_hidden_focusable(document, issues)
        self._check_landmarks(document, issues)
        if not self.settings.aria.ignore_deprecated:
            self._check_deprecated(document, issues)

        if self.settings.evaluation.enable_enhanced_explanations:
            issues = [self.explanations.explain(issue) for issue in issues]

        logger.debug(
            "aria_validation_completed",
            issues=len(issues),
            aria_elements=statistics.total_aria_elements,
        )
        return ARIAValidationResult(
            issues=issues, valid_usages=valid_usages, statistics=statistics
        )

    def _issue(
        self,
        issue_type: IssueType,
        element: Tag | None,
        message: str,
        recommendation: str,
        selector: str | None = None,
    ) -> ARIAIssue:
        return ARIAIssue(
            type=issue_type,
            element=outer_html(element) if element is not None else "Multiple elements",
            selector=selector or (
                css_selector(element, prefer_role=True) if element is not None else ""
            ),
            message=message,
            recommendation=recommendation,
            specification=SPECIFICATION,
        )

    def _check_roles(
        self,
        document: HtmlDocument,
        issues: list[ARIAIssue],
        valid_usages: list[str],
        statistics: ARIAStatistics,
    ) -> None:
        for element in document.select("[role]"):
            role = get_role(element) or ""
            statistics.roles_used.add(role)
            statistics.total_aria_elements += 1

            spec = self.roles.get(role)
            if spec is None:
                issues.append(
                    self._issue(
                        IssueType.ERROR,
                        element,
                        f'Invalid ARIA role: "{role}"',
                        "Use a valid ARIA role from the WAI-ARIA specification",
                    )
                )
                continue

            for prop in sorted(spec.required_properties):
                if get_attr(element, prop) is None:
                    issues.append(
                        self._issue(
                            IssueType.ERROR,
                            element,
                            f'Missing required property "{prop}" for role="{role}"',
                            f'Add {prop} attribute to elements with role="{role}"',
                        )
                    )

            if spec.required_parent and closest_with_role(element, spec.required_parent) is None:
                parents = sorted(spec.required_parent)
                issues.append(
                    self._issue(
                        IssueType.ERROR,
                        element,
                        f'Role "{role}" must be contained within one of: {", ".join(parents)}',
                        f'Place this element inside an element with role="{parents[0]}"',
                    )
                )

            valid_usages.append(
                f'Correct use of role="{role}" on {css_selector(element, prefer_role=True)}'
            )

    def _check_properties(
        self, document: HtmlDocument, issues: list[ARIAIssue], statistics: ARIAStatistics
    ) -> None:
        for prop in self.properties:
            for element in document.iter_with_attribute(prop):
                statistics.properties_used.add(prop)
                if prop in self.states:
                    statistics.states_used.add(prop)

                value = get_attr(element, prop)
                if value == "":
                    issues.append(
                        self._issue(
                            IssueType.WARNING,
                            element,
                            f"Empty value for {prop}",
                            f"Provide a meaningful value for {prop} or remove the attribute",
                        )
                    )

                if prop == "aria-labelledby" and value:
                    for ref in value.split():
                        if document.element_by_id(ref) is None:
                            issues.append(
                                self._issue(
                                    IssueType.ERROR,
                                    element,
                                    f'aria-labelledby references non-existent ID: "{ref}"',
                                    f'Ensure element with id="{ref}" exists in the document',
                                )
                            )

        if self.settings.aria.strict_mode:
            known = set(self.properties) | DEPRECATED_ATTRIBUTES
            for element in document.select("*"):
                for attribute in element.attrs:
                    if _ARIA_ATTRIBUTE.match(attribute) and attribute not in known:
                        issues.append(
                            self._issue(
                                IssueType.WARNING,
                                element,
                                f"Unknown ARIA attribute {attribute}",
                                "Use an attribute defined by the WAI-ARIA specification",
                            )
                        )

    def _check_redundant_roles(self, document: HtmlDocument, issues: list[ARIAIssue]) -> None:
        for element in document.select(REDUNDANT_ROLE_SELECTOR):
            issues.append(
                self._issue(
                    IssueType.WARNING,
                    element,
                    f"Redundant ARIA role on {element.name} element",
                    "Remove redundant role attribute as the element has implicit semantics",
                )
            )

    def _check_hidden_focusable(self, document: HtmlDocument, issues: list[ARIAIssue]) -> None:
        for element in document.select('[aria-hidden="true"]'):
            if is_focusable(element) or has_focusable_descendant(element):
                issues.append(
                    self._issue(
                        IssueType.ERROR,
                        element,
                        'aria-hidden="true" on focusable element or container with '
                        "focusable children",
                        "Remove aria-hidden or make element and children non-focusable",
                    )
                )

    def _check_landmarks(self, document: HtmlDocument, issues: list[ARIAIssue]) -> None:
        for landmark in LANDMARK_ROLES:
            selector = f'[role="{landmark}"]'
            elements = document.select(selector)
            if len(elements) <= 1:
                continue

            if landmark == "main":
                issues.append(
                    self._issue(
                        IssueType.ERROR,
                        None,
                        "Multiple main landmarks found",
                        "Use only one main landmark per page",
                        selector=selector,
                    )
                )
                continue

            unlabeled = [
                el
                for el in elements
                if not get_attr(el, "aria-label") and not get_attr(el, "aria-labelledby")
            ]
            if unlabeled:
                issues.append(
                    self._issue(
                        IssueType.WARNING,
                        None,
                        f"Multiple {landmark} landmarks without unique labels",
                        f"Add aria-label or aria-labelledby to distinguish between {landmark} "
                        "landmarks",
                        selector=selector,
                    )
                )

    def _check_deprecated(self, document: HtmlDocument, issues: list[ARIAIssue]) -> None:
        for attribute in sorted(DEPRECATED_ATTRIBUTES):
            for element in document.iter_with_attribute(attribute):
                issues.append(
                    self._issue(
                        IssueType.WARNING,
                        element,
                        f"Deprecated ARIA attribute {attribute}",
                        f"Remove {attribute}; it is deprecated in WAI-ARIA 1.2",
                    )
                )
