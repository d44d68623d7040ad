"""
axe-core Integration

Runs the axe-core engine against a document in headless Chromium and maps its
violations onto ``Issue`` objects with ``standard=AXE``.

Example Usage:
==============
runner = PlaywrightAxeRunner(settings)
violations = await runner.run("<html>...</html>")
issues = violations_to_issues(violations)
"""

from __future__ import annotations

from collections.abc import Iterable
from typing import Any, Protocol

from playwright.async_api import async_playwright

from .config import AccessibilitySettings
from .logging import get_logger
from .types import Impact, Issue, IssueType, Standard

logger = get_logger(__name__)

AXE_RUN_SCRIPT = "options => axe.run(document, options)"


class AxeRunner(Protocol):
    """Anything that can run axe-core over markup and return its violations."""

    async def run(self, html: str) -> list[dict[str, Any]]: ...


def _impact(value: Any) -> Impact | None:
    try:
        return Impact(value) if value else None
    except ValueError:
        logger.debug("unknown_axe_impact", impact=value)
        return None


def violations_to_issues(violations: Iterable[dict[str, Any]]) -> list[Issue]:
    """Convert raw axe violations into issues.

    Only the first affected node of each violation is reported. A violation
    without nodes yields an issue with no element or selector.
    """
    issues: list[Issue] = []

    for violation in violations:
        nodes = violation.get("nodes") or []
        first = nodes[0] if nodes else {}
        target = first.get("target") or []

        issues.append(
            Issue(
                type=IssueType.ERROR,
                rule=violation.get("id", "axe"),
                message=violation.get("description") or violation.get("help") or "",
                element=first.get("html"),
                selector=" ".join(str(part) for part in target) if target else None,
                standard=Standard.AXE,
                impact=_impact(first.get("impact") if nodes else violation.get("impact")),
            )
        )

    return issues


class PlaywrightAxeRunner:
    """Loads markup into headless Chromium and runs axe-core on it."""

    def __init__(self, settings: AccessibilitySettings | None = None) -> None:
        self.settings = settings or AccessibilitySettings()

    async def run(self, html: str) -> list[dict[str, Any]]:
        options = self.settings.axe_run_options()

        async with async_playwright() as p:
            browser = await p.chromium.launch(headless=True)
            try:
                page = await browser.new_page()
                await page.set_content(html, wait_until="domcontentloaded")
                await page.add_script_tag(url=self.settings.axe.script_url)
                results = await page.evaluate(AXE_RUN_SCRIPT, options)
            finally:
                await browser.close()

        violations = results.get("violations", []) if isinstance(results, dict) else []
        logger.debug("axe_run_completed", violations=len(violations))
        return violations
