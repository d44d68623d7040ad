"""Configuration package.

Settings are plain pydantic models validated on load and passed explicitly to
the evaluator, validator and compliance checker; there is no process-wide
configuration object.

Usage:
    from a11yeval.config import load_settings

    settings = load_settings()
    settings.is_criterion_enabled("1.1.1")
"""

from .loader import DEFAULT_CONFIG_FILENAMES, find_config_file, load_settings
from .settings import (
    WCAG_TAG_MAPPING,
    AccessibilitySettings,
    ARIAConfig,
    AxeConfig,
    EvaluationConfig,
    ReportFormat,
    ReportingConfig,
    WCAGConfig,
)

__all__ = [
    "AccessibilitySettings",
    "ARIAConfig",
    "AxeConfig",
    "EvaluationConfig",
    "ReportFormat",
    "ReportingConfig",
    "WCAGConfig",
    "WCAG_TAG_MAPPING",
    "DEFAULT_CONFIG_FILENAMES",
    "find_config_file",
    "load_settings",
]
