"""
Remediation recommendations for failed WCAG criteria.

One plain-text block per failed criterion. Criteria without a dedicated
template get a generic block built from the catalog entry.
"""

from __future__ import annotations

from collections.abc import Iterable

from ..types import WCAGCriterion

UNDERSTANDING_URL = "https://www.w3.org/WAI/WCAG21/Understanding/{slug}.html"

_TEMPLATES: dict[str, str] = {
    "1.1.1": """\
{id} {name}
Why this matters: Users with visual impairments rely on alternative text to understand images. Without alt text, images are completely inaccessible.

How to fix:
1. Add alt attributes to all <img> elements
2. Write descriptive text that conveys the image's purpose and content
3. For decorative images, use alt="" (empty alt attribute)
4. For complex images (charts, diagrams), provide detailed descriptions

Examples:
Bad: <img src="chart.jpg">
Good: <img src="chart.jpg" alt="Q3 sales increased 25% compared to Q2">

Testing: Use a screen reader or remove CSS to see how content reads without images.
Resources: WCAG 2.1 Understanding Non-text Content, WebAIM Alt Text Guidelines""",
    "1.3.1": """\
{id} {name}
Why this matters: Proper structure helps all users navigate content efficiently, especially screen reader users who rely on headings and form labels.

How to fix:
1. Use proper heading hierarchy (h1, h2, h3; don't skip levels)
2. Associate form labels with controls using <label for="id"> or aria-label
3. Use semantic HTML elements (nav, main, aside, article)
4. Group related form fields with <fieldset> and <legend>

Examples:
Bad: <input type="email"> (no label)
Good: <label for="email">Email</label><input type="email" id="email">

Testing: Use browser dev tools to check heading structure, navigate with keyboard only.
Resources: WCAG 2.1 Understanding Info and Relationships, WebAIM Form Labels""",
    "1.4.3": """\
{id} {name}
Why this matters: Sufficient color contrast ensures text is readable for users with visual impairments, including color blindness and low vision.

How to fix:
1. Ensure normal text has at least 4.5:1 contrast ratio
2. Large text (18pt+ or 14pt+ bold) needs at least 3:1 contrast
3. Check contrast for all text, including links and button text
4. Don't rely solely on color to convey information

Tools: Browser dev tools, WebAIM Contrast Checker, Color Contrast Analyser
Testing: View your site in grayscale or simulate color blindness
Resources: WCAG 2.1 Understanding Contrast, WebAIM Contrast Checker""",
    "2.1.1": """\
{id} {name}
Why this matters: Many users cannot use a mouse and rely entirely on keyboard navigation due to motor disabilities or assistive technology.

How to fix:
1. Ensure all interactive elements are keyboard accessible
2. Provide visible focus indicators
3. Implement logical tab order
4. Add keyboard event handlers alongside mouse events
5. Use tabindex appropriately (0 for focusable, -1 to remove from tab order)

Testing: Navigate your entire site using only the Tab, Enter and arrow keys
Common issues: Custom dropdowns, modal dialogs, image carousels
Resources: WCAG 2.1 Understanding Keyboard, WebAIM Keyboard Navigation""",
    "2.4.6": """\
{id} {name}
Why this matters: Descriptive headings and labels help users understand page structure and form purposes quickly.

How to fix:
1. Write clear, descriptive headings that summarize section content
2. Use specific, meaningful labels for form controls
3. Avoid vague labels like "Click here" or "Submit"
4. Make headings and labels self-explanatory

Examples:
Bad: <h2>Info</h2>, <label>Name</label>
Good: <h2>Contact Information</h2>, <label>Full Name (required)</label>

Testing: Read only headings and labels. Do they make sense?
Resources: WCAG 2.1 Understanding Headings and Labels""",
}

_GENERIC = """\
{id} {name}
Level: {level} | Principle: {principle}

Guideline: {guideline}

Recommended techniques to implement: {techniques}

Common failure patterns to avoid: {failures}

Next steps:
1. Review the specific WCAG Success Criterion documentation
2. Identify which techniques apply to your content
3. Implement the most appropriate technique for your use case
4. Test with users and assistive technology

Resources: {url}"""


def understanding_url(criterion: WCAGCriterion) -> str:
    return UNDERSTANDING_URL.format(slug=criterion.id.replace(".", ""))


def recommendation_for(criterion: WCAGCriterion) -> str:
    template = _TEMPLATES.get(criterion.id)
    if template is not None:
        return template.format(id=criterion.id, name=criterion.name)

    return _GENERIC.format(
        id=criterion.id,
        name=criterion.name,
        level=criterion.level.value,
        principle=criterion.principle.value,
        guideline=criterion.guideline,
        techniques=", ".join(criterion.techniques[:3]),
        failures=", ".join(criterion.common_failures[:2]),
        url=understanding_url(criterion),
    )


def generate_recommendations(failed_criteria: Iterable[WCAGCriterion]) -> list[str]:
    """One recommendation block per failed criterion, in input order."""
    return [recommendation_for(criterion) for criterion in failed_criteria]
