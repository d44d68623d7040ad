"""Configuration management for a11yeval using pydantic-settings.

Settings can come from keyword arguments, a JSON config file (see
``loader.load_settings``), a ``.env`` file and ``A11YEVAL_`` environment
variables. Nested sections use ``__`` as delimiter, for example
``A11YEVAL_WCAG__DEFAULT_LEVEL=AAA``. Environment variables win over every
other source.
"""

from enum import Enum
from pathlib import Path
from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic_settings import (
    BaseSettings,
    PydanticBaseSettingsSource,
    SettingsConfigDict,
)

from ..exceptions import InvalidWCAGLevelError
from ..logging import get_logger
from ..types import CRITERION_ID_PATTERN, ARIARoleSpec, Impact, WCAGCriterion, WCAGLevel

logger = get_logger(__name__)

WCAG_TAG_MAPPING: dict[WCAGLevel, tuple[str, ...]] = {
    WCAGLevel.A: ("wcag2a",),
    WCAGLevel.AA: ("wcag2a", "wcag2aa", "wcag21aa"),
    WCAGLevel.AAA: ("wcag2a", "wcag2aa", "wcag2aaa", "wcag21aa", "wcag21aaa"),
}


class ReportFormat(str, Enum):
    """Output format requested from the reporting layer."""

    DETAILED = "detailed"
    SUMMARY = "summary"
    COMPACT = "compact"


class WCAGConfig(BaseModel):
    """WCAG evaluation settings."""

    model_config = ConfigDict(populate_by_name=True)

    default_level: WCAGLevel = Field(
        WCAGLevel.AA, alias="defaultLevel", description="Target level when none is given"
    )
    enabled_criteria: list[str] = Field(
        default_factory=list,
        alias="enabledCriteria",
        description="Allow-list of criterion ids; empty means every criterion",
    )
    disabled_criteria: list[str] = Field(
        default_factory=list,
        alias="disabledCriteria",
        description="Criterion ids that are never checked or reported",
    )
    custom_criteria: list[WCAGCriterion] = Field(
        default_factory=list,
        alias="customCriteria",
        description="Extra criteria appended to the built-in catalog",
    )
    strict_mode: bool = Field(False, alias="strictMode")

    @field_validator("enabled_criteria", "disabled_criteria")
    @classmethod
    def _warn_on_malformed_ids(cls, value: list[str]) -> list[str]:
        for criterion_id in value:
            if not CRITERION_ID_PATTERN.match(criterion_id):
                logger.warning("invalid_criterion_id_format", criterion_id=criterion_id)
        return value


class ARIAConfig(BaseModel):
    """ARIA validation settings."""

    model_config = ConfigDict(populate_by_name=True)

    enable_validation: bool = Field(True, alias="enableValidation")
    custom_roles: list[ARIARoleSpec] = Field(
        default_factory=list,
        alias="customRoles",
        description="Roles added to the built-in catalog (same name replaces)",
    )
    ignore_deprecated: bool = Field(True, alias="ignoreDeprecated")
    strict_mode: bool = Field(False, alias="strictMode")


class EvaluationConfig(BaseModel):
    """Rule evaluation settings."""

    model_config = ConfigDict(populate_by_name=True)

    include_passed_checks: bool = Field(True, alias="includePassedChecks")
    min_impact_level: Impact = Field(
        Impact.MINOR,
        alias="minImpactLevel",
        description="Issues with a lower impact are dropped from the result",
    )
    enable_enhanced_explanations: bool = Field(True, alias="enableEnhancedExplanations")
    include_code_examples: bool = Field(True, alias="includeCodeExamples")
    enable_documentation_links: bool = Field(True, alias="enableDocumentationLinks")
    request_timeout: float = Field(
        30.0, gt=0, alias="requestTimeout", description="Timeout in seconds for URL fetches"
    )


class ReportingConfig(BaseModel):
    """Settings consumed by the reporting layer."""

    model_config = ConfigDict(populate_by_name=True)

    format: ReportFormat = ReportFormat.DETAILED
    include_recommendations: bool = Field(True, alias="includeRecommendations")
    group_by_principle: bool = Field(False, alias="groupByPrinciple")
    show_progress_scores: bool = Field(True, alias="showProgressScores")
    include_metadata: bool = Field(True, alias="includeMetadata")


class AxeConfig(BaseModel):
    """axe-core integration settings."""

    model_config = ConfigDict(populate_by_name=True)

    enabled: bool = Field(False, description="Run axe-core through Playwright")
    rules: dict[str, dict[str, Any]] = Field(
        default_factory=lambda: {
            rule: {"enabled": True}
            for rule in (
                "color-contrast",
                "document-title",
                "html-has-lang",
                "meta-viewport",
                "valid-lang",
                "page-has-heading-one",
            )
        }
    )
    tags: list[str] = Field(default_factory=lambda: ["wcag2a", "wcag2aa", "wcag21aa"])
    result_types: list[Literal["violations", "incomplete", "passes"]] = Field(
        default_factory=lambda: ["violations", "incomplete"], alias="resultTypes"
    )
    script_url: str = Field(
        "https://cdnjs.cloudflare.com/ajax/libs/axe-core/4.9.1/axe.min.js",
        alias="scriptUrl",
        description="Where the axe-core bundle is loaded from",
    )


class AccessibilitySettings(BaseSettings):
    """Main configuration settings for a11yeval."""

    model_config = SettingsConfigDict(
        env_prefix="A11YEVAL_",
        env_nested_delimiter="__",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        populate_by_name=True,
        extra="ignore",
    )

    wcag: WCAGConfig = Field(default_factory=WCAGConfig)
    aria: ARIAConfig = Field(default_factory=ARIAConfig)
    evaluation: EvaluationConfig = Field(default_factory=EvaluationConfig)
    reporting: ReportingConfig = Field(default_factory=ReportingConfig)
    axe: AxeConfig = Field(default_factory=AxeConfig)

    log_level: str = Field("INFO", description="Log level for the library loggers")
    log_file: Path | None = Field(None, description="Optional log file")
    structured_logging: bool = Field(False, description="Render logs as JSON")

    @classmethod
    def settings_customise_sources(
        cls,
        settings_cls: type[BaseSettings],
        init_settings: PydanticBaseSettingsSource,
        env_settings: PydanticBaseSettingsSource,
        dotenv_settings: PydanticBaseSettingsSource,
        file_secret_settings: PydanticBaseSettingsSource,
    ) -> tuple[PydanticBaseSettingsSource, ...]:
        return env_settings, dotenv_settings, init_settings, file_secret_settings

    def is_criterion_enabled(self, criterion_id: str) -> bool:
        """Check whether a criterion should be checked and reported.

        The disabled list takes precedence; a non-empty enabled list acts as
        an allow-list.
        """
        if criterion_id in self.wcag.disabled_criteria:
            return False
        if self.wcag.enabled_criteria:
            return criterion_id in self.wcag.enabled_criteria
        return True

    def get_wcag_level(self, override: WCAGLevel | str | None = None) -> WCAGLevel:
        """Return the override if given, otherwise the configured level.

        Raises:
            InvalidWCAGLevelError: If the override is not A, AA or AAA.
        """
        if override is None:
            return self.wcag.default_level
        try:
            return WCAGLevel(override)
        except ValueError:
            raise InvalidWCAGLevelError(override) from None

    def axe_run_options(self) -> dict[str, Any]:
        """Build the options object passed to ``axe.run``."""
        options: dict[str, Any] = {}

        if self.axe.tags:
            tags = list(dict.fromkeys([*self.axe.tags, *WCAG_TAG_MAPPING[self.wcag.default_level]]))
            options["runOnly"] = {"type": "tag", "values": tags}

        if self.axe.rules:
            options["rules"] = self.axe.rules

        if self.axe.result_types:
            options["resultTypes"] = list(self.axe.result_types)

        return options
