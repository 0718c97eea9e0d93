"""Cross-checks candidate issues against authoritative web sources."""

import logging
from dataclasses import dataclass, field
from enum import Enum
from typing import List, Optional, Sequence, Tuple, TypeVar

from pydantic import AliasChoices, BaseModel, Field

from ..models.fact_check_issue import Confidence, FactCheckIssue
from ..ports.ai_provider import AIProvider, ChatMessage
from ..ports.search_provider import SearchProvider, WebSearchResult
from .rate_limiter import RateLimiter

logger = logging.getLogger(__name__)

IssueT = TypeVar("IssueT", bound=FactCheckIssue)

SUPPORTED_NOTE = " (Note: Some web sources may support the original text)"

ADJUDICATION_PROMPT = """You are a fact-verification assistant. Compare the original claim with authoritative web sources and determine if the claim is factually accurate.

VERIFICATION RULES:
1. Only return HIGH confidence if web sources clearly support or contradict the claim
2. Return MEDIUM confidence if sources partially support the claim but with some uncertainty
3. Return LOW confidence if sources are unclear, contradictory, or insufficient
4. Focus on factual accuracy, not minor details or formatting
5. Judge only against the sources provided

Original claim to verify: "{claim}"
Original context: "{context}\""""


class WebJudgment(BaseModel):
    """Schema for the collaborator's adjudication."""

    is_verified: bool = Field(
        ...,
        validation_alias=AliasChoices("isVerified", "is_verified"),
        description="Whether the original claim is factually accurate based on web sources",
    )
    confidence: Confidence = Field(..., description="Confidence level of verification")
    explanation: str = Field(default="", description="Brief explanation of verification result")


class VerificationOutcome(str, Enum):
    """How cross-verification resolved a candidate."""

    CONFIRMED = "confirmed"  # Sources contradict the original text
    SUPPORTED = "supported"  # Sources support the original text
    UNCERTAIN = "uncertain"  # Judgment below HIGH confidence
    INCONCLUSIVE = "inconclusive"  # No search results
    FAILED = "failed"  # Search or adjudication raised


@dataclass
class CrossVerification:
    """Record of cross-verifying one candidate."""

    outcome: VerificationOutcome
    sources: List[WebSearchResult] = field(default_factory=list)
    judgment: Optional[WebJudgment] = None
    error: Optional[str] = None


class WebCrossVerifier:
    """Adjusts candidate confidence using rate-limited web search."""

    def __init__(
        self,
        search_provider: SearchProvider,
        ai_provider: AIProvider,
        rate_limiter: RateLimiter,
        include_domains: Sequence[str],
        model: str = "gpt-4o-mini",
        num_results: int = 3,
        excerpt_chars: int = 500,
        max_context_chars: int = 4000,
    ):
        """Initialize the verifier.

        Args:
            search_provider: Web-search collaborator
            ai_provider: Generative collaborator used as judge
            rate_limiter: Process-wide search throttle
            include_domains: Authoritative domain allow-list
            model: Model used for adjudication
            num_results: Results requested per search
            excerpt_chars: Text characters kept per source
            max_context_chars: Bound on the combined excerpts
        """
        self._search = search_provider
        self._ai = ai_provider
        self._limiter = rate_limiter
        self._domains = list(include_domains)
        self._model = model
        self._num_results = num_results
        self._excerpt_chars = excerpt_chars
        self._max_context_chars = max_context_chars

    async def verify(self, claim: str, context: str) -> CrossVerification:
        """Search for the claim and ask the judge whether the original text holds.

        Raises:
            Exception: Whatever the search or judge raised
        """
        query = f"{claim} facts verification"
        results = await self._limiter.call(
            lambda: self._search.search(query, self._domains, self._num_results)
        )
        if not results:
            logger.info(f"🤷 No web sources found for: {claim[:80]}")
            return CrossVerification(outcome=VerificationOutcome.INCONCLUSIVE)

        web_content = "\n\n".join(
            result.excerpt(self._excerpt_chars) for result in results
        )[:self._max_context_chars]

        messages = [
            ChatMessage(role="system", content=ADJUDICATION_PROMPT.format(claim=claim, context=context)),
            ChatMessage(
                role="user",
                content=(
                    "Please verify this claim against these authoritative sources:\n\n"
                    f"{web_content}\n\n"
                    "Is the original claim factually accurate?"
                ),
            ),
        ]
        judgment = await self._ai.generate_structured(
            messages, WebJudgment, model=self._model, max_tokens=300, temperature=0.1
        )

        if judgment.confidence != Confidence.HIGH:
            outcome = VerificationOutcome.UNCERTAIN
        elif judgment.is_verified:
            outcome = VerificationOutcome.SUPPORTED
        else:
            outcome = VerificationOutcome.CONFIRMED
        return CrossVerification(outcome=outcome, sources=list(results), judgment=judgment)

    @staticmethod
    def adjust(issue: IssueT, verification: CrossVerification) -> IssueT:
        """Apply the confidence-adjustment rule to one candidate."""
        if verification.outcome == VerificationOutcome.SUPPORTED:
            return issue.model_copy(update={
                "confidence": Confidence.LOW,
                "suggestion": f"{issue.suggestion}{SUPPORTED_NOTE}",
            })
        if verification.outcome == VerificationOutcome.CONFIRMED:
            return issue.model_copy(update={"confidence": Confidence.HIGH})
        return issue

    async def apply(self, issues: Sequence[IssueT], context: str) -> Tuple[List[IssueT], List[CrossVerification]]:
        """Cross-verify HIGH candidates sequentially and keep only HIGH ones.

        Args:
            issues: Candidates after filtering and generalization
            context: Full normalized text

        Returns:
            Surviving issues and the per-candidate verification records
        """
        adjusted: List[IssueT] = []
        records: List[CrossVerification] = []

        for issue in issues:
            if issue.confidence != Confidence.HIGH:
                continue

            logger.info(f"🌐 Web-verifying claim: {issue.text[:100]}")
            try:
                verification = await self.verify(issue.text, context)
            except Exception as e:
                logger.error(f"❌ Web verification failed for issue '{issue.text[:80]}': {e}", exc_info=True)
                verification = CrossVerification(outcome=VerificationOutcome.FAILED, error=str(e))

            records.append(verification)
            adjusted.append(self.adjust(issue, verification))

        final = [issue for issue in adjusted if issue.confidence == Confidence.HIGH]
        logger.info(f"✅ Web verification: {len(issues)} candidates → {len(final)} issues")
        return final, records
