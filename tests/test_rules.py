"""
Tests for the built-in rules and the rule registry.
"""

import pytest

from a11yeval.dom import HtmlDocument
from a11yeval.exceptions import RuleRegistrationError
from a11yeval.rules import (
    AccessibilityRule,
    AriaRequiredAttrRule,
    AriaValidValuesRule,
    FormLabelsRule,
    HeadingsStructureRule,
    ImagesAltTextRule,
    RuleRegistry,
    default_registry,
    passed_check_name,
)
from a11yeval.types import Impact, IssueType, Standard, WCAGLevel


def check(rule: AccessibilityRule, markup: str):
    return rule.check(HtmlDocument.parse(markup))


class CustomRule(AccessibilityRule):
    """Minimal rule used to exercise the registry."""

    def __init__(self, name: str = "custom-rule") -> None:
        self._name = name

    @property
    def name(self) -> str:
        return self._name

    @property
    def standard(self) -> Standard:
        return Standard.WCAG

    def check(self, document):
        return []


class TestImagesAltTextRule:
    """Tests for the images-alt-text rule."""

    def test_missing_alt_is_error(self) -> None:
        """Test an image without alt text."""
        issues = check(ImagesAltTextRule(), '<img src="a.png">')

        assert len(issues) == 1
        issue = issues[0]
        assert issue.type == IssueType.ERROR
        assert issue.rule == "WCAG 1.1.1"
        assert issue.message == "Images must have alternative text"
        assert issue.standard == Standard.WCAG
        assert issue.level == WCAGLevel.A
        assert issue.impact == Impact.CRITICAL
        assert issue.element.startswith("<img")
        assert issue.selector == "img"

    def test_empty_alt_is_compliant(self) -> None:
        """Test decorative images with alt=''."""
        assert check(ImagesAltTextRule(), '<img src="a.png" alt="">') == []

    def test_presentation_role_is_exempt(self) -> None:
        """Test role=presentation images."""
        assert check(ImagesAltTextRule(), '<img src="a.png" role="presentation">') == []

    def test_selector_uses_id(self) -> None:
        """Test the issue selector prefers the id."""
        issues = check(ImagesAltTextRule(), '<img id="hero" class="big" src="a.png">')

        assert issues[0].selector == "#hero"


class TestHeadingsStructureRule:
    """Tests for the headings-structure rule."""

    def test_skipped_level(self) -> None:
        """Test h1 followed by h3."""
        issues = check(HeadingsStructureRule(), "<h1>A</h1><h3>Details</h3>")

        assert len(issues) == 1
        assert issues[0].type == IssueType.WARNING
        assert issues[0].rule == "WCAG 1.3.1"
        assert issues[0].impact == Impact.MODERATE
        assert issues[0].message == "Heading levels should not skip (found h3 after h1)"
        assert issues[0].element == "Details"

    def test_only_previous_heading_is_compared(self) -> None:
        """Test that going back up never raises an issue."""
        assert check(HeadingsStructureRule(), "<h1>a</h1><h2>b</h2><h3>c</h3><h2>d</h2>") == []

    def test_first_heading_may_be_any_level(self) -> None:
        """Test a document starting at h3."""
        assert check(HeadingsStructureRule(), "<h3>a</h3><h4>b</h4>") == []


class TestFormLabelsRule:
    """Tests for the form-labels rule."""

    @pytest.mark.parametrize(
        "markup",
        [
            '<label for="n">Name</label><input id="n">',
            '<input aria-label="Name">',
            '<input aria-labelledby="x">',
            '<input type="submit">',
            '<input type="button">',
            '<input type="hidden">',
        ],
    )
    def test_labelled_or_exempt_controls(self, markup) -> None:
        """Test controls that need no further label."""
        assert check(FormLabelsRule(), markup) == []

    def test_unlabelled_controls(self) -> None:
        """Test input, select and textarea without labels."""
        issues = check(
            FormLabelsRule(),
            '<input id="a"><select></select><textarea></textarea><label for="b">B</label>',
        )

        assert len(issues) == 3
        assert {issue.rule for issue in issues} == {"WCAG 1.3.1"}
        assert all(issue.impact == Impact.CRITICAL for issue in issues)

    def test_empty_aria_label_does_not_count(self) -> None:
        """Test an empty aria-label is not a label."""
        assert len(check(FormLabelsRule(), '<input aria-label="">')) == 1


class TestAriaRules:
    """Tests for the ARIA attribute rules."""

    def test_checkbox_requires_checked(self) -> None:
        """Test a checkbox role without aria-checked."""
        issues = check(AriaRequiredAttrRule(), '<div role="checkbox">Accept</div>')

        assert len(issues) == 1
        assert issues[0].rule == "ARIA Required Attributes"
        assert issues[0].standard == Standard.ARIA
        assert issues[0].message == 'Elements with role="checkbox" must have aria-checked attribute'
        assert issues[0].impact == Impact.SERIOUS

    def test_slider_requires_three_values(self) -> None:
        """Test slider value attributes."""
        issues = check(AriaRequiredAttrRule(), '<div role="slider" aria-valuenow="3"></div>')

        assert [issue.message.split()[-2] for issue in issues] == [
            "aria-valuemin",
            "aria-valuemax",
        ]

    def test_invalid_token(self) -> None:
        """Test an aria-checked value outside its token list."""
        issues = check(AriaValidValuesRule(), '<div role="checkbox" aria-checked="yes"></div>')

        assert len(issues) == 1
        assert issues[0].rule == "ARIA Valid Values"
        assert issues[0].message == (
            'Invalid value for aria-checked: "yes". Valid values are: true, false, mixed'
        )

    def test_valid_and_empty_tokens(self) -> None:
        """Test allowed values and empty values are accepted."""
        markup = '<div aria-hidden="true"></div><div aria-invalid="spelling"></div><div aria-expanded=""></div>'

        assert check(AriaValidValuesRule(), markup) == []


class TestRuleRegistry:
    """Tests for RuleRegistry."""

    def test_default_registry_order(self) -> None:
        """Test the built-in rules run in a fixed order."""
        assert list(default_registry()) == [
            "images-alt-text",
            "headings-structure",
            "form-labels",
            "aria-required-attr",
            "aria-valid-values",
        ]
        assert default_registry().get_rule_names() == list(default_registry())

    def test_duplicate_names_rejected(self) -> None:
        """Test registering two rules with the same name."""
        with pytest.raises(RuleRegistrationError):
            RuleRegistry([CustomRule("dup"), CustomRule("dup")])

    def test_with_rules_returns_new_registry(self) -> None:
        """Test adding a custom rule leaves the base registry untouched."""
        base = default_registry()
        extended = base.with_rules(CustomRule())

        assert "custom-rule" in extended
        assert "custom-rule" not in base
        assert len(extended) == len(base) + 1

    def test_without(self) -> None:
        """Test removing rules by name."""
        registry = default_registry().without("form-labels")

        assert "form-labels" not in registry
        assert len(registry) == 4

    def test_registry_is_read_only(self) -> None:
        """Test the registry cannot be mutated."""
        registry = default_registry()

        with pytest.raises(TypeError):
            registry["x"] = CustomRule()  # type: ignore[index]

    def test_passed_check_names(self) -> None:
        """Test passed-check markers and their criteria."""
        registry = default_registry()

        assert passed_check_name(registry["images-alt-text"]) == "WCAG: images-alt-text"
        assert passed_check_name(registry["aria-valid-values"]) == "ARIA: aria-valid-values"
        assert registry.criteria_by_check() == {
            "WCAG: images-alt-text": "1.1.1",
            "WCAG: headings-structure": "1.3.1",
            "WCAG: form-labels": "1.3.1",
        }
