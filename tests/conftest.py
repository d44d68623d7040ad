"""Pytest configuration and fixtures."""

import pytest
from unittest.mock import AsyncMock

from a11yeval.config import AccessibilitySettings
from a11yeval.dom import HtmlDocument


@pytest.fixture(autouse=True)
def isolated_environment(monkeypatch, tmp_path):
    """Keep tests independent of the caller's environment and config files."""
    monkeypatch.setenv("A11YEVAL_DISABLE_CONSOLE_LOGGING", "1")
    monkeypatch.chdir(tmp_path)
    monkeypatch.setenv("HOME", str(tmp_path))
    for name in ("A11YEVAL_LOG_LEVEL", "A11YEVAL_WCAG__DEFAULT_LEVEL"):
        monkeypatch.delenv(name, raising=False)


@pytest.fixture
def settings():
    """Default settings."""
    return AccessibilitySettings()


@pytest.fixture
def plain_settings():
    """Settings without explanations, so issues compare field by field."""
    return AccessibilitySettings(evaluation={"enable_enhanced_explanations": False})


@pytest.fixture
def parse():
    """Parse markup into an HtmlDocument."""
    return HtmlDocument.parse


@pytest.fixture
def accessible_html():
    """A small page that passes every built-in rule."""
    return """
    <html lang="en">
      <body>
        <main>
          <h1>Title</h1>
          <h2>Section</h2>
          <img src="logo.png" alt="Company logo">
          <label for="email">Email</label>
          <input type="email" id="email">
        </main>
      </body>
    </html>
    """


@pytest.fixture
def axe_runner():
    """Mock axe runner returning no violations."""
    runner = AsyncMock()
    runner.run.return_value = []
    return runner
