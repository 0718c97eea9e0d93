"""Heuristic guards against fabricated corrections."""

import logging
import re
from typing import FrozenSet, List, Sequence, TypeVar

from ..models.fact_check_issue import Confidence, FactCheckIssue

logger = logging.getLogger(__name__)

IssueT = TypeVar("IssueT", bound=FactCheckIssue)

HALLUCINATION_INDICATORS: Sequence[re.Pattern] = (
    re.compile(r"\b\d{1,2}:\d{2}\s*(AM|PM)\b", re.IGNORECASE),
    re.compile(r"on\s+(monday|tuesday|wednesday|thursday|friday|saturday|sunday)", re.IGNORECASE),
    re.compile(
        r"in\s+(january|february|march|april|may|june|july|august|september|october|november|december)\s+\d{4}",
        re.IGNORECASE,
    ),
    re.compile(r"\$\d+\.\d{2}\b"),
    re.compile(r"\b\d+\s*%\s*of\b", re.IGNORECASE),
    re.compile(r"weighs?\s+exactly\s+\d+", re.IGNORECASE),
    re.compile(r"measures?\s+exactly\s+\d+", re.IGNORECASE),
    re.compile(r"according\s+to\s+[a-z\s]+\s+study", re.IGNORECASE),
    re.compile(r"research\s+shows\s+that", re.IGNORECASE),
)

FACTUAL_MARKERS: FrozenSet[str] = frozenset({
    "emperor", "dynasty", "century", "bc", "ad",
    "built", "constructed", "located", "made", "consists",
})

MAX_NOVEL_MARKERS = 2

_WORD_SPLIT_RE = re.compile(r"\W+")


def _words(text: str) -> List[str]:
    return [word for word in _WORD_SPLIT_RE.split(text.lower()) if word]


def contains_hallucination(suggestion: str) -> bool:
    """Check if a suggestion carries fabricated precision."""
    return any(pattern.search(suggestion) for pattern in HALLUCINATION_INDICATORS)


def count_novel_markers(original_text: str, suggestion: str) -> int:
    """Count factual-marker tokens in the suggestion absent from the original.

    Repeated tokens are counted each time they occur.
    """
    original_words = set(_words(original_text))
    return sum(
        1 for word in _words(suggestion)
        if word in FACTUAL_MARKERS and word not in original_words
    )


def injects_facts(original_text: str, suggestion: str) -> bool:
    """Check if a suggestion introduces facts not grounded in the original."""
    return count_novel_markers(original_text, suggestion) > MAX_NOVEL_MARKERS


class HallucinationFilter:
    """Drops candidates that are not HIGH confidence or look fabricated."""

    def accepts(self, issue: FactCheckIssue) -> bool:
        """Check whether a single candidate survives every predicate."""
        if issue.confidence != Confidence.HIGH:
            return False

        if contains_hallucination(issue.suggestion):
            logger.info(f"🚫 Filtered out hallucinated suggestion: {issue.suggestion}")
            return False

        if injects_facts(issue.text, issue.suggestion):
            logger.info(f"🚫 Filtered out fact-making suggestion: {issue.suggestion}")
            return False

        return True

    def apply(self, issues: Sequence[IssueT]) -> List[IssueT]:
        """Keep only the candidates that pass, in their original order."""
        kept = [issue for issue in issues if self.accepts(issue)]
        logger.info(f"🔎 Hallucination filter kept {len(kept)}/{len(issues)} candidates")
        return kept
