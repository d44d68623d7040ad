"""
WCAG Compliance Module

Criteria catalog, compliance calculation and remediation recommendations.
"""

from .checker import WCAGComplianceChecker, percentage
from .criteria import WCAG_CRITERIA, merge_criteria
from .recommendations import generate_recommendations, understanding_url

__all__ = [
    "WCAGComplianceChecker",
    "WCAG_CRITERIA",
    "generate_recommendations",
    "merge_criteria",
    "percentage",
    "understanding_url",
]
