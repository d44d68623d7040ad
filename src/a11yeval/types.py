"""
Accessibility Type Definitions

Pydantic models for rule evaluation, ARIA validation and WCAG compliance.
"""

from __future__ import annotations

import re
from enum import Enum

from pydantic import BaseModel, ConfigDict, Field, field_validator

CRITERION_ID_PATTERN = re.compile(r"^\d+\.\d+\.\d+$")


class WCAGLevel(str, Enum):
    """WCAG conformance level."""

    A = "A"
    AA = "AA"
    AAA = "AAA"

    @property
    def rank(self) -> int:
        """Position in the strict order A < AA < AAA."""
        return _LEVEL_ORDER.index(self)


_LEVEL_ORDER = [WCAGLevel.A, WCAGLevel.AA, WCAGLevel.AAA]


class ComplianceLevel(str, Enum):
    """Conformance level achieved by a document."""

    A = "A"
    AA = "AA"
    AAA = "AAA"
    NONE = "None"


class IssueType(str, Enum):
    """Kind of finding."""

    ERROR = "error"
    WARNING = "warning"
    INFO = "info"


class Standard(str, Enum):
    """Standard a finding originates from."""

    WCAG = "WCAG"
    ARIA = "ARIA"
    MDN = "MDN"
    AXE = "AXE"


class Impact(str, Enum):
    """User impact of an issue."""

    MINOR = "minor"
    MODERATE = "moderate"
    SERIOUS = "serious"
    CRITICAL = "critical"

    @property
    def rank(self) -> int:
        return _IMPACT_ORDER.index(self)


_IMPACT_ORDER = [Impact.MINOR, Impact.MODERATE, Impact.SERIOUS, Impact.CRITICAL]


class Principle(str, Enum):
    """The four WCAG principles."""

    PERCEIVABLE = "Perceivable"
    OPERABLE = "Operable"
    UNDERSTANDABLE = "Understandable"
    ROBUST = "Robust"


class RoleCategory(str, Enum):
    """WAI-ARIA role taxonomy."""

    ABSTRACT = "abstract"
    WIDGET = "widget"
    DOCUMENT = "document"
    LANDMARK = "landmark"
    WINDOW = "window"


class HowToFix(BaseModel):
    """Remediation guidance attached to an explained issue."""

    steps: list[str] = Field(default_factory=list)
    code_example: str | None = Field(None, alias="codeExample")
    bad_example: str | None = Field(None, alias="badExample")
    good_example: str | None = Field(None, alias="goodExample")

    model_config = ConfigDict(populate_by_name=True, frozen=True)


class Explanation(BaseModel):
    """Extended explanation of why an issue matters and how to fix it."""

    detailed_explanation: str = Field(alias="detailedExplanation")
    user_impact: str = Field(alias="userImpact")
    why: str
    assistive_technology_impact: str = Field(alias="assistiveTechnologyImpact")
    how_to_fix: HowToFix = Field(alias="howToFix")
    related_guidelines: list[str] = Field(default_factory=list, alias="relatedGuidelines")
    documentation_links: list[str] = Field(default_factory=list, alias="documentationLinks")

    model_config = ConfigDict(populate_by_name=True, frozen=True)


class _ExplainedFinding(BaseModel):
    """Optional explanation fields shared by Issue and ARIAIssue."""

    detailed_explanation: str | None = Field(None, alias="detailedExplanation")
    user_impact: str | None = Field(None, alias="userImpact")
    why: str | None = None
    assistive_technology_impact: str | None = Field(None, alias="assistiveTechnologyImpact")
    how_to_fix: HowToFix | None = Field(None, alias="howToFix")
    related_guidelines: list[str] | None = Field(None, alias="relatedGuidelines")
    documentation_links: list[str] | None = Field(None, alias="documentationLinks")

    model_config = ConfigDict(populate_by_name=True, frozen=True)

    def is_explained(self) -> bool:
        return self.detailed_explanation is not None


class Issue(_ExplainedFinding):
    """An accessibility issue produced by a rule or by axe-core."""

    type: IssueType = Field(description="Whether this is an error, warning or info")
    rule: str = Field(description="Rule identifier, e.g. 'WCAG 1.1.1' or an axe rule id")
    message: str = Field(description="Human-readable description of the issue")
    element: str | None = Field(None, description="Truncated markup of the offending element")
    selector: str | None = Field(None, description="Selector to find the element")
    standard: Standard = Field(description="Standard the rule belongs to")
    level: WCAGLevel | None = Field(None, description="WCAG level of the rule, if any")
    impact: Impact | None = Field(None, description="User impact of the issue")

    @property
    def criterion_id(self) -> str | None:
        """Criterion id for rules named ``WCAG <id>``."""
        if self.rule.startswith("WCAG "):
            return self.rule[len("WCAG ") :]
        return None


class ARIAIssue(_ExplainedFinding):
    """An issue raised by the ARIA validator."""

    type: IssueType
    element: str
    selector: str
    message: str
    recommendation: str
    specification: str

    @field_validator("type")
    @classmethod
    def _no_info(cls, value: IssueType) -> IssueType:
        if value == IssueType.INFO:
            raise ValueError("ARIA issues are either errors or warnings")
        return value


class ARIARoleSpec(BaseModel):
    """Catalog entry describing one WAI-ARIA role."""

    name: str
    category: RoleCategory
    required_properties: frozenset[str] = Field(default_factory=frozenset, alias="requiredProperties")
    supported_properties: frozenset[str] = Field(
        default_factory=frozenset, alias="supportedProperties"
    )
    required_parent: frozenset[str] | None = Field(None, alias="requiredParent")
    required_children: frozenset[str] | None = Field(None, alias="requiredChildren")
    implicit_semantics: str | None = Field(None, alias="implicitSemantics")

    model_config = ConfigDict(populate_by_name=True, frozen=True)


class WCAGCriterion(BaseModel):
    """A WCAG success criterion."""

    id: str = Field(description="Dotted criterion id, e.g. '1.4.3'")
    name: str
    level: WCAGLevel
    principle: Principle
    guideline: str
    techniques: tuple[str, ...] = ()
    common_failures: tuple[str, ...] = Field((), alias="commonFailures")

    model_config = ConfigDict(populate_by_name=True, frozen=True)

    @field_validator("id")
    @classmethod
    def _check_id(cls, value: str) -> str:
        if not CRITERION_ID_PATTERN.match(value):
            raise ValueError(f"criterion id must look like '1.2.3', got {value!r}")
        return value

    @property
    def kebab_name(self) -> str:
        """Criterion name in kebab-case, e.g. 'non-text-content'."""
        return re.sub(r"\s+", "-", self.name.lower())


class EvaluationSummary(BaseModel):
    """Summary counts over an issue list."""

    total_issues: int = Field(0, alias="totalIssues")
    errors: int = 0
    warnings: int = 0
    info: int = 0
    by_standard: dict[str, int] = Field(default_factory=dict, alias="byStandard")
    by_impact: dict[str, int] = Field(default_factory=dict, alias="byImpact")

    model_config = ConfigDict(populate_by_name=True)


class RuleFault(BaseModel):
    """A rule that raised while checking a document."""

    rule: str
    error_type: str = Field(alias="errorType")
    message: str

    model_config = ConfigDict(populate_by_name=True, frozen=True)


class EvaluationResult(BaseModel):
    """Outcome of running the rule registry over one document."""

    issues: list[Issue] = Field(default_factory=list)
    summary: EvaluationSummary = Field(default_factory=EvaluationSummary)
    passed_checks: list[str] = Field(default_factory=list, alias="passedChecks")
    rule_faults: list[RuleFault] = Field(default_factory=list, alias="ruleFaults")

    model_config = ConfigDict(populate_by_name=True)

    def get_issues_by_type(self, issue_type: IssueType) -> list[Issue]:
        """Get issues filtered by type."""
        return [issue for issue in self.issues if issue.type == issue_type]

    def get_issues_by_standard(self, standard: Standard) -> list[Issue]:
        """Get issues filtered by standard."""
        return [issue for issue in self.issues if issue.standard == standard]


class ARIAStatistics(BaseModel):
    """Usage statistics gathered during ARIA validation."""

    total_aria_elements: int = Field(0, alias="totalARIAElements")
    roles_used: set[str] = Field(default_factory=set, alias="rolesUsed")
    properties_used: set[str] = Field(default_factory=set, alias="propertiesUsed")
    states_used: set[str] = Field(default_factory=set, alias="statesUsed")

    model_config = ConfigDict(populate_by_name=True)


class ARIAValidationResult(BaseModel):
    """Outcome of one ARIA validation pass."""

    issues: list[ARIAIssue] = Field(default_factory=list)
    valid_usages: list[str] = Field(default_factory=list, alias="validUsages")
    statistics: ARIAStatistics = Field(default_factory=ARIAStatistics)

    model_config = ConfigDict(populate_by_name=True)

    @property
    def errors(self) -> list[ARIAIssue]:
        return [issue for issue in self.issues if issue.type == IssueType.ERROR]

    @property
    def warnings(self) -> list[ARIAIssue]:
        return [issue for issue in self.issues if issue.type == IssueType.WARNING]


class DetailedScores(BaseModel):
    """Per-principle compliance scores (0-100)."""

    perceivable: int = 0
    operable: int = 0
    understandable: int = 0
    robust: int = 0


class ComplianceReport(BaseModel):
    """WCAG compliance verdict derived from an evaluation result."""

    level: ComplianceLevel
    passed_criteria: list[WCAGCriterion] = Field(default_factory=list, alias="passedCriteria")
    failed_criteria: list[WCAGCriterion] = Field(default_factory=list, alias="failedCriteria")
    not_applicable_criteria: list[WCAGCriterion] = Field(
        default_factory=list, alias="notApplicableCriteria"
    )
    overall_score: int = Field(0, ge=0, le=100, alias="overallScore")
    detailed_scores: DetailedScores = Field(default_factory=DetailedScores, alias="detailedScores")
    target_level: WCAGLevel | None = Field(None, alias="targetLevel")
    meets_target: bool | None = Field(None, alias="meetsTarget")
    recommendations: list[str] | None = None

    model_config = ConfigDict(populate_by_name=True)

    def get_criteria_by_level(self, level: WCAGLevel) -> list[WCAGCriterion]:
        """Get passed and failed criteria at one level."""
        return [
            criterion
            for criterion in self.passed_criteria + self.failed_criteria
            if criterion.level == level
        ]
