"""Domain models for fact-check issues and verification results."""

from enum import Enum
from typing import Any, Dict, List, Literal, Union

from pydantic import AliasChoices, BaseModel, ConfigDict, Field


class CheckMode(str, Enum):
    """Claim detection modes."""

    REALTIME = "realtime"  # Lightweight, obvious errors only
    DETAILED = "detailed"  # Thorough analysis with categories


class Confidence(str, Enum):
    """Ordinal confidence assigned to a candidate issue."""

    HIGH = "HIGH"
    MEDIUM = "MEDIUM"
    LOW = "LOW"


class IssueCategory(str, Enum):
    """Kind of problem found in detailed mode."""

    FACTUAL_ERROR = "factual_error"
    NEEDS_VERIFICATION = "needs_verification"
    MISLEADING = "misleading"
    OUTDATED = "outdated"


class Importance(str, Enum):
    """Importance of an issue found in detailed mode."""

    CRITICAL = "critical"
    MODERATE = "moderate"
    MINOR = "minor"


class FactCheckIssue(BaseModel):
    """A candidate factual problem found in the text."""

    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    text: str = Field(..., description="Exact text from the document being challenged")
    issue_description: str = Field(
        ...,
        validation_alias=AliasChoices("issueDescription", "issue", "issue_description"),
        serialization_alias="issueDescription",
        description="Clear statement of what is factually wrong",
    )
    confidence: Confidence = Field(..., description="Confidence level")
    suggestion: str = Field(..., description="The correct factual information")

    def to_dict(self) -> Dict[str, Any]:
        """Convert issue to dictionary for API responses."""
        return self.model_dump(by_alias=True, mode="json")


class DetailedFactCheckIssue(FactCheckIssue):
    """Issue emitted by detailed mode, with category and importance."""

    category: IssueCategory = Field(..., description="Category of issue")
    importance: Importance = Field(..., description="Importance level")


class RealtimeResult(BaseModel):
    """Realtime verification result: a flat ordered list of issues."""

    mode: Literal[CheckMode.REALTIME] = CheckMode.REALTIME
    issues: List[FactCheckIssue] = Field(default_factory=list)

    def to_payload(self) -> List[Dict[str, Any]]:
        """Wire shape of the result (a bare list)."""
        return [issue.to_dict() for issue in self.issues]


class DetailedResult(BaseModel):
    """Detailed verification result with summary and follow-up claims."""

    model_config = ConfigDict(populate_by_name=True)

    mode: Literal[CheckMode.DETAILED] = CheckMode.DETAILED
    summary: str = ""
    issues: List[DetailedFactCheckIssue] = Field(default_factory=list)
    verification_needed: List[str] = Field(
        default_factory=list,
        validation_alias=AliasChoices("verificationNeeded", "verification_needed"),
        serialization_alias="verificationNeeded",
    )

    def to_payload(self) -> Dict[str, Any]:
        """Wire shape of the result."""
        return {
            "summary": self.summary,
            "issues": [issue.to_dict() for issue in self.issues],
            "verificationNeeded": list(self.verification_needed),
        }


VerificationResult = Union[RealtimeResult, DetailedResult]


def empty_result(mode: CheckMode) -> VerificationResult:
    """Build an empty result in the shape of the given mode."""
    if mode == CheckMode.DETAILED:
        return DetailedResult(summary="No factual issues found.")
    return RealtimeResult()


def with_issues(result: VerificationResult, issues: List[FactCheckIssue]) -> VerificationResult:
    """Return a copy of the result carrying a new issue list."""
    return result.model_copy(update={"issues": list(issues)})
