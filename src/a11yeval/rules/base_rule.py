"""
Base Accessibility Rule

Abstract base class for document-level accessibility rules.
"""

from __future__ import annotations

from abc import ABC, abstractmethod

from bs4 import Tag

from a11yeval.dom import HtmlDocument, css_selector, outer_html
from a11yeval.types import Impact, Issue, IssueType, Standard, WCAGLevel


class AccessibilityRule(ABC):
    """Abstract base class for accessibility rules.

    A rule inspects a whole document and returns the issues it finds. Rules
    must not mutate the document and must not keep state between calls, so
    a single instance can check any number of documents.
    """

    @property
    @abstractmethod
    def name(self) -> str:
        """Unique identifier for this rule (e.g. 'images-alt-text')."""
        ...

    @property
    @abstractmethod
    def standard(self) -> Standard:
        """The standard this rule belongs to."""
        ...

    @property
    def wcag_criterion(self) -> str | None:
        """The WCAG success criterion this rule checks, if any."""
        return None

    @property
    def level(self) -> WCAGLevel | None:
        """The WCAG conformance level of the criterion, if any."""
        return None

    @property
    def description(self) -> str:
        """Human-readable description of what this rule checks."""
        return self.name

    @abstractmethod
    def check(self, document: HtmlDocument) -> list[Issue]:
        """Check the document for issues.

        Args:
            document: Parsed document to inspect.

        Returns:
            List of issues found (empty if the document passes).
        """
        ...

    @property
    def issue_rule(self) -> str:
        """Value of ``Issue.rule`` for issues raised by this rule."""
        if self.wcag_criterion:
            return f"WCAG {self.wcag_criterion}"
        return self.name

    def _create_issue(
        self,
        element: Tag | None,
        message: str,
        impact: Impact,
        issue_type: IssueType = IssueType.ERROR,
        snippet: str | None = None,
    ) -> Issue:
        """Helper to create an issue for an element.

        Args:
            element: The element with the issue.
            message: Description of the issue.
            impact: User impact of the issue.
            issue_type: Error, warning or info.
            snippet: Override the element markup shown in the issue.

        Returns:
            Issue instance.
        """
        return Issue(
            type=issue_type,
            rule=self.issue_rule,
            message=message,
            element=snippet if snippet is not None or element is None else outer_html(element),
            selector=css_selector(element) if element is not None else None,
            standard=self.standard,
            level=self.level,
            impact=impact,
        )

    def __repr__(self) -> str:
        return f"{type(self).__name__}(name={self.name!r})"
