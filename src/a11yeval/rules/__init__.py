"""
Accessibility Rules Module

Provides the built-in WCAG and ARIA rules and the registry they run from.
"""

from a11yeval.rules.aria import AriaRequiredAttrRule, AriaValidValuesRule
from a11yeval.rules.base_rule import AccessibilityRule
from a11yeval.rules.registry import RuleRegistry, passed_check_name
from a11yeval.rules.wcag import FormLabelsRule, HeadingsStructureRule, ImagesAltTextRule


def get_all_rules() -> list[AccessibilityRule]:
    """Get fresh instances of every built-in rule in execution order."""
    return [
        # WCAG 2.1
        ImagesAltTextRule(),
        HeadingsStructureRule(),
        FormLabelsRule(),
        # WAI-ARIA
        AriaRequiredAttrRule(),
        AriaValidValuesRule(),
    ]


def default_registry() -> RuleRegistry:
    """Registry holding the built-in rules."""
    return RuleRegistry(get_all_rules())


__all__ = [
    "AccessibilityRule",
    "AriaRequiredAttrRule",
    "AriaValidValuesRule",
    "FormLabelsRule",
    "HeadingsStructureRule",
    "ImagesAltTextRule",
    "RuleRegistry",
    "default_registry",
    "get_all_rules",
    "passed_check_name",
]
