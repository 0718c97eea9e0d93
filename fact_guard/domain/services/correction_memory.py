"""Service remembering which corrections each user has already handled."""

import logging
import re
from typing import Set

from ..models.correction import CorrectionRecord, CorrectionType
from ..ports.correction_store import CorrectionStore
from .text_normalizer import content_digest

logger = logging.getLogger(__name__)

_PUNCTUATION_RE = re.compile(r"[^\w\s]")


def _token_set(text: str) -> Set[str]:
    normalized = _PUNCTUATION_RE.sub("", text.lower()).strip()
    return set(normalized.split())


def jaccard_similarity(first: str, second: str) -> float:
    """Token-set Jaccard similarity of two strings.

    Both strings are lower-cased and stripped of punctuation, then split on
    whitespace. Two empty strings have similarity 0.
    """
    tokens_a = _token_set(first)
    tokens_b = _token_set(second)
    union = tokens_a | tokens_b
    if not union:
        return 0.0
    return len(tokens_a & tokens_b) / len(union)


class CorrectionMemory:
    """Per-user correction history with similarity-based suppression."""

    def __init__(self, store: CorrectionStore, similarity_threshold: float = 0.7):
        """Initialize the service.

        Args:
            store: Correction storage port implementation
            similarity_threshold: Ratio above which texts count as similar
        """
        self._store = store
        self._threshold = similarity_threshold

    async def record(
        self,
        user_id: str,
        original_text: str,
        corrected_text: str,
        correction_type: CorrectionType,
    ) -> bool:
        """Append feedback to the user's history.

        Storage failures are logged and never raised to the caller.

        Returns:
            True if the record was stored
        """
        record = CorrectionRecord(
            user_id=user_id,
            content_digest=content_digest(original_text),
            original_text=original_text,
            corrected_text=corrected_text,
            correction_type=correction_type,
        )
        try:
            await self._store.append(record)
        except Exception as e:
            logger.warning(f"⚠️ Could not record correction for user {user_id}: {e}")
            return False

        logger.info(f"📝 Recorded {correction_type.value} correction for user {user_id}")
        return True

    async def has_accepted_similar(self, user_id: str, text: str) -> bool:
        """Check for an accepted correction similar to ``text``."""
        try:
            history = await self._store.list_for_user(user_id)
        except Exception as e:
            logger.warning(f"⚠️ Could not read correction history for user {user_id}: {e}")
            return False

        return any(
            record.correction_type == CorrectionType.ACCEPTED
            and jaccard_similarity(text, record.corrected_text) > self._threshold
            for record in history
        )
