"""Exception hierarchy for a11yeval.

All errors raised by the library derive from ``A11yEvalException`` so callers
can catch them in one place. Only document construction failures and invalid
target levels are surfaced as hard errors during an evaluation; rule faults
and axe-core failures are recorded and logged instead.
"""

from typing import Any


class A11yEvalException(Exception):
    """Base exception for all a11yeval errors.

    Attributes:
        message: Human-readable error message
        error_code: Optional error code for programmatic handling
        context: Additional context information
    """

    def __init__(
        self, message: str, error_code: str | None = None, context: dict[str, Any] | None = None
    ) -> None:
        """Initialize the exception.

        Args:
            message: Error message
            error_code: Optional error code
            context: Optional context dictionary
        """
        super().__init__(message)
        self.message = message
        self.error_code = error_code
        self.context = context or {}

    def __str__(self) -> str:
        """Return string representation."""
        if self.error_code:
            return f"[{self.error_code}] {self.message}"
        return self.message


class DocumentParseError(A11yEvalException):
    """Raised when an HTML document cannot be constructed."""

    def __init__(self, reason: str, **kwargs) -> None:
        super().__init__(
            f"Unable to parse document: {reason}",
            error_code="DOCUMENT_PARSE_ERROR",
            context={"reason": reason, **kwargs},
        )


class InvalidWCAGLevelError(A11yEvalException):
    """Raised when a target conformance level is not one of A, AA or AAA."""

    def __init__(self, level: Any) -> None:
        super().__init__(
            f"Invalid target level: {level!r}. Must be one of: A, AA, AAA",
            error_code="INVALID_WCAG_LEVEL",
            context={"level": level},
        )


class RuleRegistrationError(A11yEvalException):
    """Raised when a rule registry is built with conflicting rules."""

    def __init__(self, rule_name: str, reason: str) -> None:
        super().__init__(
            f"Cannot register rule '{rule_name}': {reason}",
            error_code="RULE_REGISTRATION_ERROR",
            context={"rule": rule_name, "reason": reason},
        )


class ConfigurationError(A11yEvalException):
    """Base exception for configuration errors."""

    pass


class InvalidConfigurationException(ConfigurationError):
    """Raised when a configuration source cannot be used."""

    def __init__(self, config_key: str, reason: str, **kwargs) -> None:
        """Initialize with config details."""
        super().__init__(
            f"Invalid configuration for '{config_key}': {reason}",
            error_code="INVALID_CONFIG",
            context={"config_key": config_key, "reason": reason, **kwargs},
        )
