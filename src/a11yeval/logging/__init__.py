"""Logging module for a11yeval."""

from .logger import (
    LogContext,
    RuleLogger,
    configure_logging,
    get_logger,
    setup_logging,
)

__all__ = [
    "setup_logging",
    "configure_logging",
    "get_logger",
    "LogContext",
    "RuleLogger",
]
