"""Claim detection against the generative collaborator."""

import logging
from dataclasses import dataclass
from typing import Dict, List, Type

from pydantic import AliasChoices, BaseModel, Field

from ..errors import CollaboratorError
from ..models.fact_check_issue import (
    CheckMode,
    DetailedFactCheckIssue,
    DetailedResult,
    FactCheckIssue,
    RealtimeResult,
    VerificationResult,
)
from ..ports.ai_provider import AIProvider, ChatMessage

logger = logging.getLogger(__name__)


class RealtimeDetection(BaseModel):
    """Schema the collaborator must follow in realtime mode."""

    issues: List[FactCheckIssue] = Field(
        default_factory=list,
        description="Array of potential issues, empty if no issues found",
    )


class DetailedDetection(BaseModel):
    """Schema the collaborator must follow in detailed mode."""

    summary: str = Field(..., description="Overall assessment")
    issues: List[DetailedFactCheckIssue] = Field(default_factory=list)
    verification_needed: List[str] = Field(
        default_factory=list,
        validation_alias=AliasChoices("verificationNeeded", "verification_needed"),
        serialization_alias="verificationNeeded",
        description="List of claims that need source verification",
    )


REALTIME_PROMPT = """You are a fact-checking assistant. Analyze text for MAJOR factual errors only.

CRITICAL RULES:
1. ONLY flag obviously wrong, major factual errors
2. Use BROAD, GENERAL corrections - avoid specific numbers, dates, or measurements
3. Don't nitpick small details or provide overly precise "corrections"
4. Focus on clearly false statements that anyone would recognize as wrong
5. Use general language like "over X kilometers" instead of exact measurements
6. Don't flag creative writing, opinions, or subjective content

CORRECTION GUIDELINES:
- For lengths and sizes: "stretches over 21,000 kilometers", not exact figures
- For historical periods: "built over many centuries", not specific dates
- For materials: "traditional materials like stone and brick", not exhaustive lists
- For locations: "located in China", not specific regions

CONFIDENCE LEVELS:
- HIGH: Only for obviously false statements (chocolate walls, animals in wrong places)
- MEDIUM/LOW: Avoid these - if unsure, don't flag

Examples of what TO flag:
- "Great Wall made of chocolate" -> "made of traditional materials"
- "Located in Tokyo" -> "located in China"
- "Built by Napoleon" -> "built by Chinese dynasties"

Examples of what NOT to flag:
- Approximate measurements or dates
- Regional variations in spelling
- Minor historical details
- Style preferences

The "text" of every issue must be copied exactly from the document.
If uncertain about ANY detail, return an empty "issues" array."""

DETAILED_PROMPT = """You are a thorough fact-checking expert. Analyze the provided text comprehensively for factual accuracy.

Check for:
1. Factual errors in dates, numbers, events, and claims
2. Misleading or oversimplified statements
3. Claims that need sources or verification
4. Logical inconsistencies
5. Outdated information that may no longer be accurate

For each issue, provide detailed analysis with confidence levels and importance ratings.
Use category "factual_error", "needs_verification", "misleading" or "outdated",
and importance "critical", "moderate" or "minor".
The "text" of every issue must be copied exactly from the document."""


@dataclass(frozen=True)
class ModeProfile:
    """Per-mode instruction strength and limits."""

    system_prompt: str
    schema: Type[BaseModel]
    max_issues: int
    max_input_chars: int
    max_tokens: int


MODE_PROFILES: Dict[CheckMode, ModeProfile] = {
    CheckMode.REALTIME: ModeProfile(
        system_prompt=REALTIME_PROMPT,
        schema=RealtimeDetection,
        max_issues=15,
        max_input_chars=8000,
        max_tokens=2000,
    ),
    CheckMode.DETAILED: ModeProfile(
        system_prompt=DETAILED_PROMPT,
        schema=DetailedDetection,
        max_issues=25,
        max_input_chars=12000,
        max_tokens=4000,
    ),
}


def _truncate(text: str, limit: int) -> str:
    return text if len(text) <= limit else text[:limit] + "..."


def _is_locatable(fragment: str, text: str) -> bool:
    if not fragment.strip():
        return False
    return fragment in text or fragment.lower() in text.lower()


class ClaimDetector:
    """Produces candidate issues with one structured-output call."""

    def __init__(self, ai_provider: AIProvider, model: str = "gpt-4o", temperature: float = 0.1):
        """Initialize the detector.

        Args:
            ai_provider: Generative collaborator
            model: Model used for detection
            temperature: Sampling temperature
        """
        self._ai = ai_provider
        self._model = model
        self._temperature = temperature

    async def detect(self, text: str, mode: CheckMode) -> VerificationResult:
        """Detect candidate issues in normalized text.

        Args:
            text: Normalized plain text
            mode: Realtime or detailed

        Returns:
            Result in the mode's shape holding every raw candidate

        Raises:
            CollaboratorError: If the call fails or violates the schema
        """
        profile = MODE_PROFILES[mode]
        messages = [
            ChatMessage(role="system", content=profile.system_prompt),
            ChatMessage(
                role="user",
                content=(
                    f"Please fact-check this text (limit to max {profile.max_issues} issues):\n\n"
                    f"{_truncate(text, profile.max_input_chars)}"
                ),
            ),
        ]

        try:
            detection = await self._ai.generate_structured(
                messages,
                profile.schema,
                model=self._model,
                max_tokens=profile.max_tokens,
                temperature=self._temperature,
            )
        except CollaboratorError:
            raise
        except Exception as e:
            raise CollaboratorError(f"Claim detection failed: {e}", provider="generative") from e

        if not isinstance(detection, profile.schema):
            raise CollaboratorError(
                f"Claim detection returned {type(detection).__name__}, expected {profile.schema.__name__}",
                provider="generative",
            )

        issues = self._grounded(detection.issues, text)[:profile.max_issues]
        logger.info(f"📝 Detected {len(issues)} candidate issues ({mode.value} mode)")

        if mode == CheckMode.DETAILED:
            return DetailedResult(
                summary=detection.summary,
                issues=issues,
                verification_needed=detection.verification_needed,
            )
        return RealtimeResult(issues=issues)

    def _grounded(self, issues: List[FactCheckIssue], text: str) -> List[FactCheckIssue]:
        """Drop candidates whose challenged text is not in the input."""
        grounded = []
        for issue in issues:
            if _is_locatable(issue.text, text):
                grounded.append(issue)
            else:
                logger.warning(f"⚠️ Dropping candidate not found in input: {issue.text[:80]!r}")
        return grounded
