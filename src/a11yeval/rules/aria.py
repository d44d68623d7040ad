"""
ARIA Rules

Lightweight ARIA attribute checks run by the rule executor alongside the WCAG
rules. The full role/containment analysis lives in ``a11yeval.aria``.
"""

from __future__ import annotations

from a11yeval.dom import HtmlDocument, get_attr, get_role
from a11yeval.rules.base_rule import AccessibilityRule
from a11yeval.types import Impact, Issue, Standard

REQUIRED_ATTRIBUTES: dict[str, tuple[str, ...]] = {
    "checkbox": ("aria-checked",),
    "combobox": ("aria-expanded",),
    "scrollbar": ("aria-valuenow", "aria-valuemin", "aria-valuemax"),
    "slider": ("aria-valuenow", "aria-valuemin", "aria-valuemax"),
}

VALID_VALUES: dict[str, tuple[str, ...]] = {
    "aria-checked": ("true", "false", "mixed"),
    "aria-disabled": ("true", "false"),
    "aria-expanded": ("true", "false"),
    "aria-hidden": ("true", "false"),
    "aria-invalid": ("true", "false", "grammar", "spelling"),
}


class AriaRequiredAttrRule(AccessibilityRule):
    """Widgets must carry the state attributes their role requires."""

    @property
    def name(self) -> str:
        return "aria-required-attr"

    @property
    def standard(self) -> Standard:
        return Standard.ARIA

    @property
    def issue_rule(self) -> str:
        return "ARIA Required Attributes"

    def check(self, document: HtmlDocument) -> list[Issue]:
        issues: list[Issue] = []

        for element in document.select("[role]"):
            role = get_role(element)
            for attribute in REQUIRED_ATTRIBUTES.get(role or "", ()):
                if get_attr(element, attribute) is None:
                    issues.append(
                        self._create_issue(
                            element,
                            message=f'Elements with role="{role}" must have {attribute} attribute',
                            impact=Impact.SERIOUS,
                        )
                    )

        return issues


class AriaValidValuesRule(AccessibilityRule):
    """Enumerated ARIA attributes must use one of their allowed tokens."""

    @property
    def name(self) -> str:
        return "aria-valid-values"

    @property
    def standard(self) -> Standard:
        return Standard.ARIA

    @property
    def issue_rule(self) -> str:
        return "ARIA Valid Values"

    def check(self, document: HtmlDocument) -> list[Issue]:
        issues: list[Issue] = []

        for attribute, allowed in VALID_VALUES.items():
            for element in document.select(f"[{attribute}]"):
                value = get_attr(element, attribute)
                if value and value not in allowed:
                    issues.append(
                        self._create_issue(
                            element,
                            message=(
                                f'Invalid value for {attribute}: "{value}". '
                                f"Valid values are: {', '.join(allowed)}"
                            ),
                            impact=Impact.SERIOUS,
                        )
                    )

        return issues
