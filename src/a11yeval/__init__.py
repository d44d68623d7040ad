"""a11yeval: static accessibility evaluation of HTML documents.

Rule-based WCAG 2.1 and WAI-ARIA checks with a leveled, scored WCAG
compliance report.
"""

from .aria import ARIA_ROLES, ARIAValidator
from .audit import AccessibilityAudit, AuditReport
from .axe import AxeRunner, PlaywrightAxeRunner, violations_to_issues
from .compliance import WCAG_CRITERIA, WCAGComplianceChecker, generate_recommendations
from .config import AccessibilitySettings, load_settings
from .dom import HtmlDocument
from .evaluator import AccessibilityEvaluator
from .exceptions import (
    A11yEvalException,
    ConfigurationError,
    DocumentParseError,
    InvalidConfigurationException,
    InvalidWCAGLevelError,
    RuleRegistrationError,
)
from .explanations import ARIAExplanationGenerator, ExplanationGenerator
from .logging import configure_logging, get_logger, setup_logging
from .rules import AccessibilityRule, RuleRegistry, default_registry
from .types import (
    ARIAIssue,
    ARIARoleSpec,
    ARIAValidationResult,
    ComplianceLevel,
    ComplianceReport,
    EvaluationResult,
    EvaluationSummary,
    Impact,
    Issue,
    IssueType,
    RuleFault,
    Standard,
    WCAGCriterion,
    WCAGLevel,
)

__version__ = "0.1.0"

__all__ = [
    # Evaluation
    "AccessibilityEvaluator",
    "AccessibilityAudit",
    "AuditReport",
    "HtmlDocument",
    # Rules
    "AccessibilityRule",
    "RuleRegistry",
    "default_registry",
    # axe-core
    "AxeRunner",
    "PlaywrightAxeRunner",
    "violations_to_issues",
    # ARIA
    "ARIAValidator",
    "ARIA_ROLES",
    # Compliance
    "WCAGComplianceChecker",
    "WCAG_CRITERIA",
    "generate_recommendations",
    # Explanations
    "ExplanationGenerator",
    "ARIAExplanationGenerator",
    # Config
    "AccessibilitySettings",
    "load_settings",
    # Logging
    "setup_logging",
    "configure_logging",
    "get_logger",
    # Types
    "ARIAIssue",
    "ARIARoleSpec",
    "ARIAValidationResult",
    "ComplianceLevel",
    "ComplianceReport",
    "EvaluationResult",
    "EvaluationSummary",
    "Impact",
    "Issue",
    "IssueType",
    "RuleFault",
    "Standard",
    "WCAGCriterion",
    "WCAGLevel",
    # Exceptions
    "A11yEvalException",
    "ConfigurationError",
    "DocumentParseError",
    "InvalidConfigurationException",
    "InvalidWCAGLevelError",
    "RuleRegistrationError",
]
