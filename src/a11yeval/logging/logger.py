"""Structured logging for a11yeval, built on structlog over stdlib logging.

Rule faults, axe-core failures and configuration warnings are reported
through these loggers instead of being raised, so evaluation always returns a
complete result.

Logging is configured lazily on the first ``get_logger`` call from
``A11YEVAL_LOG_LEVEL``; ``configure_logging`` reconfigures it from a settings
object. Setting ``A11YEVAL_DISABLE_CONSOLE_LOGGING=1`` silences everything.
"""

import logging
import os
import sys
import time
from pathlib import Path
from typing import TYPE_CHECKING, Any, cast

import structlog

if TYPE_CHECKING:
    from ..config import AccessibilitySettings

DISABLE_CONSOLE_ENV = "A11YEVAL_DISABLE_CONSOLE_LOGGING"
LOG_LEVEL_ENV = "A11YEVAL_LOG_LEVEL"

_CALLSITE = (
    structlog.processors.CallsiteParameter.MODULE,
    structlog.processors.CallsiteParameter.FUNC_NAME,
    structlog.processors.CallsiteParameter.LINENO,
)

_configured = False


def _console_disabled() -> bool:
    return os.getenv(DISABLE_CONSOLE_ENV) == "1"


def _processor_chain(structured: bool, timestamps: bool, callsite: bool, colors: bool) -> list:
    chain: list[Any] = [
        structlog.stdlib.filter_by_level,
        structlog.stdlib.add_logger_name,
        structlog.stdlib.add_log_level,
        structlog.stdlib.PositionalArgumentsFormatter(),
    ]
    if timestamps:
        chain.append(structlog.processors.TimeStamper(fmt="iso", utc=True))
    if callsite:
        chain.append(structlog.processors.CallsiteParameterAdder(parameters=list(_CALLSITE)))
    chain += [
        structlog.processors.StackInfoRenderer(),
        structlog.processors.format_exc_info,
        structlog.processors.UnicodeDecoder(),
    ]
    renderer = (
        structlog.processors.JSONRenderer()
        if structured
        else structlog.dev.ConsoleRenderer(colors=colors)
    )
    chain.append(renderer)
    return chain


def _handlers(console: bool, log_file: Path | None) -> list[logging.Handler]:
    handlers: list[logging.Handler] = []
    if console:
        # stderr, so stdout is left to the calling tool
        handlers.append(logging.StreamHandler(sys.stderr))
    if log_file is not None:
        log_file.parent.mkdir(parents=True, exist_ok=True)
        handlers.append(logging.FileHandler(log_file, encoding="utf-8"))
    for handler in handlers:
        handler.setFormatter(logging.Formatter("%(message)s"))
    return handlers


def setup_logging(
    level: str = "INFO",
    log_file: Path | None = None,
    structured: bool = False,
    console: bool = True,
    add_timestamp: bool = True,
    add_caller_info: bool = False,
    colorize: bool = True,
) -> None:
    """Configure structlog and the stdlib root logger.

    Args:
        level: Log level name (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        log_file: Optional file receiving the same records as the console
        structured: Render JSON lines instead of the console format
        console: Write to stderr (forced off by A11YEVAL_DISABLE_CONSOLE_LOGGING)
        add_timestamp: Add ISO timestamps in UTC
        add_caller_info: Add module, function and line of the call site
        colorize: Colorize console output (ignored for JSON)
    """
    global _configured

    if _console_disabled():
        console, log_file = False, None

    structlog.configure(
        processors=_processor_chain(
            structured, add_timestamp, add_caller_info, colorize and console
        ),
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=True,
    )

    handlers = _handlers(console, log_file)
    if handlers:
        logging.disable(logging.NOTSET)
        root_level: int | str = level.upper()
    else:
        handlers = [logging.NullHandler()]
        root_level = logging.CRITICAL
    logging.basicConfig(format="%(message)s", level=root_level, handlers=handlers, force=True)
    _configured = True


def configure_logging(settings: "AccessibilitySettings") -> None:
    """Apply ``log_level``, ``log_file`` and ``structured_logging`` from settings."""
    setup_logging(
        level=settings.log_level,
        log_file=settings.log_file,
        structured=settings.structured_logging,
        colorize=not settings.structured_logging,
    )


def get_logger(name: str) -> structlog.stdlib.BoundLogger:
    """Return a structured logger, configuring logging on first use.

    Args:
        name: Logger name (typically __name__)
    """
    global _configured

    if not _configured:
        if _console_disabled():
            logging.disable(logging.CRITICAL)
            _configured = True
        else:
            setup_logging(level=os.getenv(LOG_LEVEL_ENV, "INFO"))
    return cast(structlog.stdlib.BoundLogger, structlog.get_logger(name))


class LogContext:
    """Binds key-value pairs to a logger for the duration of a ``with`` block.

    Example:
        ```python
        with LogContext(logger, target_level="AA") as log:
            log.info("audit_completed", issues=3)
        ```
    """

    def __init__(self, logger: structlog.stdlib.BoundLogger, **context: Any) -> None:
        self.logger = logger
        self.context = context
        self.bound: structlog.stdlib.BoundLogger | None = None

    def __enter__(self) -> structlog.stdlib.BoundLogger:
        self.bound = self.logger.bind(**self.context)
        return self.bound

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        if exc_type is not None and self.bound is not None:
            self.bound.debug("context_exited_with_error", error_type=exc_type.__name__)
        self.bound = None


class RuleLogger:
    """Times rule runs and logs their outcome."""

    def __init__(self, base_logger: structlog.stdlib.BoundLogger | None = None) -> None:
        self.logger = base_logger or get_logger(__name__)

    def log_rule_start(self, rule: str, **kwargs: Any) -> dict[str, Any]:
        """Log rule start and return the context to pass to ``log_rule_end``."""
        self.logger.debug("rule_started", rule=rule, **kwargs)
        return {"rule": rule, "started": time.perf_counter(), **kwargs}

    def log_rule_end(
        self,
        context: dict[str, Any],
        issue_count: int = 0,
        error: Exception | None = None,
    ) -> None:
        """Log ``rule_failed`` at error level or ``rule_completed`` at debug level.

        Args:
            context: Context from log_rule_start
            issue_count: Number of issues the rule produced
            error: Exception raised by the rule, if any
        """
        fields = dict(context)
        started = fields.pop("started")
        fields["duration_ms"] = round((time.perf_counter() - started) * 1000, 3)

        if error is None:
            self.logger.debug("rule_completed", issue_count=issue_count, **fields)
            return
        self.logger.error(
            "rule_failed", error=str(error), error_type=type(error).__name__, **fields
        )
