"""
Issue Explanations

Attaches extended explanations (user impact, assistive technology impact and
remediation steps) to rule issues and ARIA validation issues. Findings are
immutable, so enriched copies are returned.
"""

from __future__ import annotations

import re
from typing import TypeVar

from .config import AccessibilitySettings
from .types import ARIAIssue, Explanation, HowToFix, Issue, _ExplainedFinding

FindingT = TypeVar("FindingT", bound=_ExplainedFinding)

DEFAULT_EXPLANATION_KEY = "default"

RULE_EXPLANATIONS: dict[str, Explanation] = {
    "WCAG 1.1.1": Explanation(
        detailed_explanation=(
            "Images and other non-text content must have alternative text that serves the "
            "same purpose and conveys the same information as the visual content. This "
            "ensures that users who cannot see images can still understand the content "
            "through screen readers or other assistive technologies."
        ),
        user_impact=(
            "Users who are blind or have low vision rely on screen readers to understand web "
            "content. Without alternative text, images are completely inaccessible to these "
            "users."
        ),
        why=(
            "Alternative text is the primary way that visual information is made accessible "
            "to users with visual impairments. It also helps when images fail to load."
        ),
        assistive_technology_impact=(
            "Screen readers will either skip the image entirely or announce \"image\" or the "
            "filename, which is rarely meaningful to users."
        ),
        how_to_fix=HowToFix(
            steps=[
                "Add an alt attribute to every img element",
                "Write descriptive text that conveys the purpose and content of the image",
                'For decorative images, use alt="" (empty alt attribute)',
                "For complex images, consider using aria-describedby to reference detailed "
                "descriptions",
            ],
            bad_example='<img src="chart.jpg">',
            good_example='<img src="chart.jpg" alt="Sales increased 25% from Q1 to Q2 2024">',
            code_example=(
                "<!-- For informative images -->\n"
                '<img src="logo.jpg" alt="Company Name - Building Better Websites">\n\n'
                "<!-- For decorative images -->\n"
                '<img src="decorative-border.jpg" alt="">\n\n'
                "<!-- For complex images -->\n"
                '<img src="complex-chart.jpg" alt="Quarterly sales data" '
                'aria-describedby="chart-description">\n'
                '<div id="chart-description">\n'
                "  Detailed description of the chart data...\n"
                "</div>"
            ),
        ),
        related_guidelines=["WCAG 2.1 Success Criterion 1.1.1 Non-text Content"],
        documentation_links=[
            "https://www.w3.org/WAI/WCAG21/Understanding/non-text-content.html",
            "https://webaim.org/articles/alt/",
        ],
    ),
    "headings-structure": Explanation(
        detailed_explanation=(
            "Heading elements (h1-h6) should follow a logical hierarchy without skipping "
            "levels. This creates a meaningful document structure that assistive technology "
            "users can navigate efficiently."
        ),
        user_impact=(
            "Screen reader users often navigate by headings using keyboard shortcuts. A "
            "logical heading structure allows them to quickly understand page organization."
        ),
        why=(
            "Heading hierarchy provides semantic structure to content, similar to an outline. "
            "Skipping levels breaks this logical flow."
        ),
        assistive_technology_impact=(
            "Screen readers provide heading navigation features that rely on proper "
            "hierarchy. Skipped levels can make users think they missed content."
        ),
        how_to_fix=HowToFix(
            steps=[
                "Start with h1 for the main page title",
                "Use h2 for major sections",
                "Use h3 for subsections under h2, and so on",
                "Never skip heading levels (don't go from h2 to h4)",
            ],
            bad_example="<h1>Main Title</h1>\n<h4>Subsection</h4>",
            good_example="<h1>Main Title</h1>\n<h2>Section</h2>\n<h3>Subsection</h3>",
            code_example=(
                "<h1>Article Title</h1>\n"
                "<h2>Introduction</h2>\n"
                "<h2>Main Content</h2>\n"
                "<h3>Subsection A</h3>\n"
                "<h3>Subsection B</h3>\n"
                "<h4>Detail under B</h4>\n"
                "<h2>Conclusion</h2>"
            ),
        ),
        related_guidelines=["WCAG 2.1 Success Criterion 1.3.1 Info and Relationships"],
        documentation_links=[
            "https://www.w3.org/WAI/WCAG21/Understanding/info-and-relationships.html",
            "https://webaim.org/techniques/semanticstructure/",
        ],
    ),
    "form-labels": Explanation(
        detailed_explanation=(
            "Form controls must have accessible labels so users can understand what "
            "information is requested. Labels create programmatic relationships between the "
            "text and the control."
        ),
        user_impact=(
            "Users with visual impairments rely on screen readers to understand form fields. "
            "Without proper labels, they cannot determine what information to enter."
        ),
        why=(
            "Labels must be programmatically associated with controls so assistive "
            "technology can announce them when the field receives focus."
        ),
        assistive_technology_impact=(
            'Screen readers will announce unlabeled fields as "edit text" or similar generic '
            "terms."
        ),
        how_to_fix=HowToFix(
            steps=[
                "Use <label> elements with for attributes pointing to the input ID",
                "Alternatively, use aria-label for concise labels",
                "Use aria-labelledby to reference existing text as a label",
                "Ensure every form control has an accessible name",
            ],
            bad_example='<input type="email">',
            good_example='<label for="email">Email Address</label>\n<input type="email" id="email">',
            code_example=(
                "<!-- Using label element -->\n"
                '<label for="email">Email Address</label>\n'
                '<input type="email" id="email" required>\n\n'
                "<!-- Using aria-label -->\n"
                '<input type="email" aria-label="Email Address" required>\n\n'
                "<!-- Using aria-labelledby -->\n"
                '<h3 id="contact-heading">Contact Information</h3>\n'
                '<input type="email" aria-labelledby="contact-heading">'
            ),
        ),
        related_guidelines=["WCAG 2.1 Success Criterion 1.3.1 Info and Relationships"],
        documentation_links=[
            "https://www.w3.org/WAI/WCAG21/Understanding/info-and-relationships.html",
            "https://webaim.org/techniques/forms/",
        ],
    ),
    DEFAULT_EXPLANATION_KEY: Explanation(
        detailed_explanation=(
            "This accessibility issue affects how users with disabilities can perceive, "
            "understand, navigate, and interact with web content."
        ),
        user_impact=(
            "May create barriers for users with disabilities, including those using screen "
            "readers, keyboard navigation, or other assistive technologies."
        ),
        why=(
            "Following accessibility guidelines ensures that web content is usable by the "
            "widest possible range of people."
        ),
        assistive_technology_impact=(
            "May cause assistive technologies to provide incomplete or confusing information "
            "to users."
        ),
        how_to_fix=HowToFix(
            steps=[
                "Review the specific issue details",
                "Consult WCAG guidelines for detailed solutions",
                "Test with assistive technology if possible",
            ],
        ),
        related_guidelines=["WCAG 2.1 Guidelines"],
        documentation_links=["https://www.w3.org/WAI/WCAG21/"],
    ),
}

ARIA_RELATED_GUIDELINES = [
    "WAI-ARIA 1.2 Specification",
    "WCAG 2.1 Success Criterion 4.1.2 Name, Role, Value",
]
ARIA_DOCUMENTATION_LINKS = [
    "https://www.w3.org/TR/wai-aria-1.2/",
    "https://developer.mozilla.org/en-US/docs/Web/Accessibility/ARIA",
    "https://www.w3.org/WAI/ARIA/apg/",
]

PROPERTY_EXAMPLES: dict[tuple[str, str], str] = {
    ("checkbox", "aria-checked"): (
        "<!-- Checkbox role with required aria-checked -->\n"
        '<div role="checkbox" aria-checked="false" tabindex="0">\n'
        "  Subscribe to newsletter\n"
        "</div>"
    ),
    ("slider", "aria-valuenow"): (
        "<!-- Slider role with required properties -->\n"
        '<div role="slider"\n'
        '     aria-valuenow="50"\n'
        '     aria-valuemin="0"\n'
        '     aria-valuemax="100"\n'
        '     aria-label="Volume"\n'
        '     tabindex="0">\n'
        "</div>"
    ),
    ("combobox", "aria-expanded"): (
        "<!-- Combobox role with required aria-expanded -->\n"
        '<div role="combobox" aria-expanded="false" aria-haspopup="listbox"\n'
        '     aria-controls="options-list">\n'
        '  <input type="text" placeholder="Search options">\n'
        "</div>\n"
        '<ul role="listbox" id="options-list" hidden>\n'
        '  <li role="option">Option 1</li>\n'
        "</ul>"
    ),
}

_ROLE_IN_MESSAGE = re.compile(r'role="([^"]+)"')
_PROPERTY_IN_MESSAGE = re.compile(r'"([^"]+)" for role')


def _apply_explanation(
    finding: FindingT, explanation: Explanation, settings: AccessibilitySettings
) -> FindingT:
    """Copy ``finding`` with the explanation fields filled in."""
    how_to_fix = explanation.how_to_fix
    if not settings.evaluation.include_code_examples:
        how_to_fix = HowToFix(steps=list(how_to_fix.steps))

    links = (
        list(explanation.documentation_links)
        if settings.evaluation.enable_documentation_links
        else None
    )

    return finding.model_copy(
        update={
            "detailed_explanation": explanation.detailed_explanation,
            "user_impact": explanation.user_impact,
            "why": explanation.why,
            "assistive_technology_impact": explanation.assistive_technology_impact,
            "how_to_fix": how_to_fix,
            "related_guidelines": list(explanation.related_guidelines),
            "documentation_links": links,
        }
    )


class ExplanationGenerator:
    """Explains rule issues from a catalog keyed by rule.

    Lookup order is the name of the rule that produced the issue, then the
    issue's ``rule`` field, then the default entry.
    """

    def __init__(
        self,
        settings: AccessibilitySettings | None = None,
        catalog: dict[str, Explanation] | None = None,
    ) -> None:
        self.settings = settings or AccessibilitySettings()
        self.catalog = catalog if catalog is not None else RULE_EXPLANATIONS

    def lookup(self, issue: Issue, source_rule: str | None = None) -> Explanation:
        for key in (source_rule, issue.rule):
            if key and key in self.catalog:
                return self.catalog[key]
        return self.catalog.get(DEFAULT_EXPLANATION_KEY, RULE_EXPLANATIONS[DEFAULT_EXPLANATION_KEY])

    def explain(self, issue: Issue, source_rule: str | None = None) -> Issue:
        """Return a copy of ``issue`` carrying its explanation."""
        return _apply_explanation(issue, self.lookup(issue, source_rule), self.settings)


class ARIAExplanationGenerator:
    """Explains ARIA validation issues based on their message."""

    def __init__(self, settings: AccessibilitySettings | None = None) -> None:
        self.settings = settings or AccessibilitySettings()

    def explain(self, issue: ARIAIssue) -> ARIAIssue:
        explanation = self._explanation_for(issue.message)
        if explanation is None:
            # No catalog entry; only the shared references are attached
            update: dict[str, list[str] | None] = {
                "related_guidelines": list(ARIA_RELATED_GUIDELINES),
            }
            if self.settings.evaluation.enable_documentation_links:
                update["documentation_links"] = list(ARIA_DOCUMENTATION_LINKS)
            return issue.model_copy(update=update)
        return _apply_explanation(issue, explanation, self.settings)

    def _explanation_for(self, message: str) -> Explanation | None:
        if "Invalid ARIA role" in message:
            return self._invalid_role()
        if "Missing required property" in message:
            role_match = _ROLE_IN_MESSAGE.search(message)
            property_match = _PROPERTY_IN_MESSAGE.search(message)
            return self._missing_property(
                role_match.group(1) if role_match else "unknown",
                property_match.group(1) if property_match else "unknown",
            )
        if "aria-labelledby references non-existent ID" in message:
            return self._broken_reference()
        if "Redundant ARIA role" in message:
            return self._redundant_role()
        return None

    @staticmethod
    def _with_aria_references(**fields) -> Explanation:
        return Explanation(
            related_guidelines=list(ARIA_RELATED_GUIDELINES),
            documentation_links=list(ARIA_DOCUMENTATION_LINKS),
            **fields,
        )

    def _invalid_role(self) -> Explanation:
        return self._with_aria_references(
            detailed_explanation=(
                "ARIA roles define what an element is or does on the page. Using invalid or "
                "non-existent ARIA roles can confuse assistive technologies and provide "
                "incorrect information to users."
            ),
            user_impact=(
                "Screen readers may ignore invalid roles or announce them incorrectly, "
                "leading to confusion about the element's purpose."
            ),
            why=(
                "ARIA roles must come from the WAI-ARIA specification to behave consistently "
                "across assistive technologies and browsers."
            ),
            assistive_technology_impact=(
                "Invalid roles may be ignored, causing the element to fall back to its "
                "default semantic meaning or be announced incorrectly."
            ),
            how_to_fix=HowToFix(
                steps=[
                    "Check the WAI-ARIA specification for valid role names",
                    "Remove the invalid role attribute",
                    "Use a valid ARIA role that matches the element's purpose",
                    "Consider if a semantic HTML element might be more appropriate",
                ],
                bad_example='<div role="invalid-role">Content</div>',
                good_example='<div role="button">Content</div>',
                code_example=(
                    "<!-- Common valid ARIA roles -->\n"
                    '<div role="button">Custom Button</div>\n'
                    '<div role="navigation">Menu</div>\n'
                    '<div role="alert">Important Message</div>\n\n'
                    "<!-- Or use semantic HTML when possible -->\n"
                    "<button>Native Button</button>\n"
                    "<nav>Navigation</nav>"
                ),
            ),
        )

    def _missing_property(self, role: str, prop: str) -> Explanation:
        if prop == "aria-checked":
            good_example = f'<div role="{role}" {prop}="false">Content</div>'
        else:
            good_example = f'<div role="{role}" {prop}="appropriate-value">Content</div>'

        code_example = PROPERTY_EXAMPLES.get(
            (role, prop),
            f'<!-- Add {prop} to {role} -->\n<div role="{role}" {prop}="appropriate-value">\n'
            "  Content\n</div>",
        )

        return self._with_aria_references(
            detailed_explanation=(
                f'Elements with role="{role}" must have the {prop} attribute to properly '
                "communicate their state to assistive technologies."
            ),
            user_impact=(
                f"Without {prop}, users of assistive technology cannot understand the current "
                f"state of the {role} element."
            ),
            why=(
                f"The {prop} attribute provides state information that assistive "
                "technologies announce to users."
            ),
            assistive_technology_impact=(
                "Screen readers may announce the element without state information, or may "
                f"not announce it as the intended {role} type."
            ),
            how_to_fix=HowToFix(
                steps=[
                    f"Add the {prop} attribute to the element",
                    "Set an appropriate value based on the element's current state",
                    "Update the attribute value when the element's state changes",
                    "Test with a screen reader to verify the announcement",
                ],
                bad_example=f'<div role="{role}">Content</div>',
                good_example=good_example,
                code_example=code_example,
            ),
        )

    def _broken_reference(self) -> Explanation:
        return self._with_aria_references(
            detailed_explanation=(
                "The aria-labelledby attribute labels an element by referencing the ID of "
                "another element. When the referenced ID doesn't exist, this relationship is "
                "broken."
            ),
            user_impact=(
                "Screen readers cannot find the labeling text, so users may hear generic "
                'announcements like "button" without understanding what it does.'
            ),
            why=(
                "aria-labelledby only provides an accessible name when the referenced element "
                "exists in the document."
            ),
            assistive_technology_impact=(
                "The element will not have an accessible name, or will fall back to less "
                "descriptive naming methods."
            ),
            how_to_fix=HowToFix(
                steps=[
                    "Ensure the referenced element exists in the DOM",
                    "Check that the ID matches exactly (case-sensitive)",
                    "Verify the referenced element contains meaningful text",
                    "Consider aria-label if the labeling element doesn't exist",
                ],
                bad_example='<button aria-labelledby="missing-id">X</button>',
                good_example=(
                    '<h2 id="section-title">Settings</h2>\n'
                    '<button aria-labelledby="section-title">X</button>'
                ),
                code_example=(
                    '<h2 id="dialog-title">Confirm Delete</h2>\n'
                    '<div role="dialog" aria-labelledby="dialog-title">\n'
                    '  <button aria-labelledby="dialog-title">Delete</button>\n'
                    "</div>\n\n"
                    "<!-- Alternative with aria-label -->\n"
                    '<button aria-label="Close dialog">X</button>'
                ),
            ),
        )

    def _redundant_role(self) -> Explanation:
        return self._with_aria_references(
            detailed_explanation=(
                "HTML elements have implicit semantics that are communicated to assistive "
                "technologies automatically. An ARIA role matching those semantics is "
                "redundant."
            ),
            user_impact=(
                "Redundant roles usually don't break functionality, but they add unnecessary "
                "code."
            ),
            why="Semantic HTML elements already provide the correct role information.",
            assistive_technology_impact="No negative impact on assistive technology.",
            how_to_fix=HowToFix(
                steps=[
                    "Remove the redundant role attribute",
                    "Rely on the element's implicit semantics",
                    "Only add ARIA roles when changing or enhancing semantic meaning",
                ],
                bad_example='<button role="button">Click me</button>',
                good_example="<button>Click me</button>",
                code_example=(
                    "<nav>Navigation Menu</nav>  <!-- instead of <nav role=\"navigation\"> -->\n"
                    "<main>Main Content</main>   <!-- instead of <main role=\"main\"> -->\n"
                    "<button>Submit</button>     <!-- instead of <button role=\"button\"> -->"
                ),
            ),
        )
