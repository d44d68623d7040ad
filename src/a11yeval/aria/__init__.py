"""WAI-ARIA role catalog and validator."""

from .roles import ARIA_PROPERTIES, ARIA_ROLES, ARIA_STATES, merge_roles
from .validator import ARIAValidator

__all__ = [
    "ARIAValidator",
    "ARIA_PROPERTIES",
    "ARIA_ROLES",
    "ARIA_STATES",
    "merge_roles",
]
