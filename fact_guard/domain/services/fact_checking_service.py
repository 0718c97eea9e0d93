"""Service sequencing the fact-verification pipeline."""

import logging
import time
from collections import Counter
from enum import Enum
from typing import Callable, Optional, Union

from ..errors import InputError, StorageError
from ..models.correction import CorrectionType
from ..models.fact_check_issue import CheckMode, Confidence, VerificationResult, empty_result, with_issues
from ..models.fact_check_response import FactCheckResponse
from .claim_detector import ClaimDetector
from .content_cache import ContentCache, cache_key
from .correction_memory import CorrectionMemory
from .hallucination_filter import HallucinationFilter
from .suggestion_generalizer import SuggestionGeneralizer
from .text_normalizer import content_digest, is_checkable, normalize_markup
from .web_cross_verifier import WebCrossVerifier

logger = logging.getLogger(__name__)


class PipelineStage(str, Enum):
    """Stages that call collaborators and may fail a request."""

    DETECT = "detect"
    FILTER = "filter"
    GENERALIZE = "generalize"
    CROSS_VERIFY = "cross_verify"


def parse_mode(mode: Union[CheckMode, str, None]) -> CheckMode:
    """Parse a request mode, defaulting to realtime.

    Raises:
        InputError: If the mode is not recognized
    """
    if mode is None:
        return CheckMode.REALTIME
    try:
        return CheckMode(mode)
    except ValueError:
        raise InputError(f"Invalid mode: {mode}")


class FactCheckingService:
    """Coordinates normalization, caching, detection, filtering and verification."""

    def __init__(
        self,
        detector: ClaimDetector,
        generalizer: SuggestionGeneralizer,
        cache: ContentCache,
        correction_memory: CorrectionMemory,
        cross_verifier: Optional[WebCrossVerifier] = None,
        hallucination_filter: Optional[HallucinationFilter] = None,
        min_text_length: int = 2,
        clock: Callable[[], float] = time.perf_counter,
    ):
        """Initialize the service.

        Args:
            detector: Claim detector
            generalizer: Suggestion generalizer
            cache: Shared result cache
            correction_memory: Shared per-user correction history
            cross_verifier: Web cross-verifier, None to skip that stage
            hallucination_filter: Anti-hallucination filter
            min_text_length: Shorter normalized text is not checked
            clock: Clock used to measure processing time
        """
        self._detector = detector
        self._generalizer = generalizer
        self._cache = cache
        self._memory = correction_memory
        self._verifier = cross_verifier
        self._filter = hallucination_filter or HallucinationFilter()
        self._min_text_length = min_text_length
        self._clock = clock
        logger.info(
            f"🔧 FactCheckingService initialized (web verification: {'on' if cross_verifier else 'off'})"
        )

    @property
    def web_verification_enabled(self) -> bool:
        """Whether the cross-verification stage runs."""
        return self._verifier is not None

    async def fact_check(
        self,
        content: str,
        mode: Union[CheckMode, str, None] = CheckMode.REALTIME,
        user_id: Optional[str] = None,
    ) -> FactCheckResponse:
        """Fact check a block of prose.

        Args:
            content: Raw markup or plain text
            mode: "realtime" or "detailed"
            user_id: Caller identity for correction suppression

        Returns:
            Response holding HIGH-confidence issues only

        Raises:
            InputError: If content is missing or the mode is invalid
            CollaboratorError: If claim detection fails
        """
        started = self._clock()
        if not content or not content.strip():
            raise InputError("Content is required")
        check_mode = parse_mode(mode)

        def respond(result: VerificationResult, **flags) -> FactCheckResponse:
            return FactCheckResponse(
                mode=check_mode,
                result=result,
                content_length=len(content),
                plain_text_length=len(plain_text),
                processing_time=(self._clock() - started) * 1000,
                **flags,
            )

        plain_text = normalize_markup(content)
        if not is_checkable(plain_text, self._min_text_length):
            logger.info("✂️ Normalized text too short, skipping fact check")
            return respond(empty_result(check_mode))

        key = cache_key(content_digest(plain_text), check_mode)
        cached = self._cache.lookup(key)
        if cached is not None:
            logger.info(f"💾 Returning cached fact-check result for hash: {key}")
            return respond(cached, cached=True)

        if user_id and await self._memory.has_accepted_similar(user_id, plain_text):
            logger.info("🙋 User has previously accepted similar content, skipping fact-check")
            return respond(empty_result(check_mode), user_corrected=True)

        logger.info(f"🔍 Starting {check_mode.value} fact check: {plain_text[:100]}...")

        try:
            stage = PipelineStage.DETECT
            raw = await self._detector.detect(plain_text, check_mode)

            stage = PipelineStage.FILTER
            issues = self._filter.apply(raw.issues)

            stage = PipelineStage.GENERALIZE
            issues = await self._generalizer.apply(issues)

            stage = PipelineStage.CROSS_VERIFY
            if self._verifier is not None:
                issues, verifications = await self._verifier.apply(issues, plain_text)
                if verifications:
                    outcomes = Counter(record.outcome.value for record in verifications)
                    logger.info(f"🌐 Cross-verification outcomes: {dict(outcomes)}")
            issues = [issue for issue in issues if issue.confidence == Confidence.HIGH]
            result = with_issues(raw, issues)
        except Exception as e:
            logger.error(f"❌ Fact check failed at {stage.value}: {type(e).__name__}: {e}")
            raise

        try:
            self._cache.store(key, result)
        except StorageError as e:
            logger.warning(f"⚠️ Could not cache fact-check result: {e}")

        logger.info(
            f"✅ Fact check complete: {len(raw.issues)} candidates → {len(issues)} issues, cached with hash: {key}"
        )
        return respond(result, cached=False)

    async def record_feedback(
        self,
        user_id: str,
        original_text: str,
        corrected_text: str,
        correction_type: Union[CorrectionType, str],
    ) -> bool:
        """Record what a user did with a suggestion.

        Raises:
            InputError: If the correction type is invalid

        Returns:
            True if the feedback was stored
        """
        try:
            kind = CorrectionType(correction_type)
        except ValueError:
            raise InputError(f"Invalid correction type: {correction_type}")
        return await self._memory.record(user_id, original_text, corrected_text, kind)
