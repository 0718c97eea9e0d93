"""Rewrites overly precise suggestions into hedged phrasing."""

import logging
import math
import re
from typing import List, Sequence, TypeVar

from pydantic import AliasChoices, BaseModel, Field

from ..models.fact_check_issue import FactCheckIssue
from ..ports.ai_provider import AIProvider, ChatMessage

logger = logging.getLogger(__name__)

IssueT = TypeVar("IssueT", bound=FactCheckIssue)

_UNITS = r"(km|kilometers|miles|meters|feet|years|people|dollars)"

OVER_SPECIFIC_PATTERNS: Sequence[re.Pattern] = (
    re.compile(r"\d{4,}\s*" + _UNITS, re.IGNORECASE),
    re.compile(r"exactly\s+\d+", re.IGNORECASE),
    re.compile(r"precisely\s+\d+", re.IGNORECASE),
    re.compile(r"\d+\.\d+\s*(km|meters|years|percent)", re.IGNORECASE),
    re.compile(r"\d+,\d+"),
    re.compile(r"between\s+\d+\s+and\s+\d+", re.IGNORECASE),
    re.compile(r"approximately\s+\d{4,}", re.IGNORECASE),
)

GENERALIZER_PROMPT = """You are a correction generalizer. Take overly specific/precise corrections and make them more general and less likely to be wrong.

RULES:
1. Replace specific numbers with general ranges (e.g., "21,196 km" -> "over 21,000 km")
2. Replace exact dates with general periods (e.g., "220 BC" -> "around 3rd century BC")
3. Keep corrections truthful but less precise
4. Use words like "over", "around", "approximately", "many", "several"
5. Avoid exact measurements, dates, or counts

Examples:
- "21,196 kilometers" -> "over 21,000 kilometers"
- "built in 220 BC" -> "built over many centuries"
- "weighs exactly 2.5 kg" -> "weighs around 2-3 kg"
- "costs $1,234.56" -> "costs over $1,000"
- "built by Emperor Qin in 220 BC" -> "built by Chinese dynasties over many centuries"

Respond with the generalized suggestion only."""

_NUMBER = r"\d+(?:,\d+)*(?:\.\d+)?"
_HEDGE_WORDS = ("over", "around", "about", "approximately", "roughly", "nearly", "almost", "some", "than")

# Magnitudes past this are rendered as "many".
_MAX_MAGNITUDE = 1e12

_THOUSANDS_RE = re.compile(r"\d{1,3}(?:,\d{3})+")
_EXACT_RE = re.compile(r"\b(?:exactly|precisely)\s+(" + _NUMBER + ")", re.IGNORECASE)
_APPROX_RE = re.compile(r"\bapproximately\s+(" + _NUMBER + ")", re.IGNORECASE)
_RANGE_RE = re.compile(r"\bbetween\s+(" + _NUMBER + r")\s+and\s+(" + _NUMBER + ")", re.IGNORECASE)
_GROUPED_RE = re.compile(r"(\$?)(?<![\d,])(\d{1,3}(?:,\d{3})+)(?!\d|,\d)(?:\.\d+)?")
_COMMA_NUMBER_RE = re.compile(r"\$?(?<![\d,])\d+(?:,\d+)+(?:\.\d+)?")
_LONG_QUANTITY_RE = re.compile(r"(\$?)(\d{4,})(?:\.\d+)?(\s*" + _UNITS + r")", re.IGNORECASE)
_DECIMAL_RE = re.compile(r"(\d+)\.\d+(\s*(?:km|meters|years|percent))", re.IGNORECASE)


class GeneralizedSuggestion(BaseModel):
    """Schema for the generalizer's response."""

    generalized_suggestion: str = Field(
        ...,
        validation_alias=AliasChoices("generalizedSuggestion", "generalized_suggestion"),
        serialization_alias="generalizedSuggestion",
    )


def is_overly_specific(suggestion: str) -> bool:
    """Check if a suggestion is precise enough to be risky."""
    return any(pattern.search(suggestion) for pattern in OVER_SPECIFIC_PATTERNS)


def approximate_number(raw: str) -> str:
    """Render a number as a coarse magnitude ("21 thousand", "3 million").

    Commas are only read as thousands separators. Any other comma grouping
    ("1,5", "12,34") is ambiguous and becomes "some"; magnitudes too large
    to render become "many".
    """
    whole = raw.split(".", 1)[0]
    if "," in whole and not _THOUSANDS_RE.fullmatch(whole):
        return "some"
    value = float(raw.replace(",", ""))
    if not math.isfinite(value) or value >= _MAX_MAGNITUDE:
        return "many"
    for scale, word in ((1e9, "billion"), (1e6, "million"), (1e3, "thousand")):
        if value >= scale:
            quotient = value / scale
            if quotient < 10:
                # Floor to one decimal so "over" stays truthful.
                return f"{int(quotient * 10) / 10:g} {word}"
            return f"{int(quotient)} {word}"
    rounded = int(round(value))
    return "1 thousand" if rounded >= 1000 else str(rounded)


def _is_vague(approx: str) -> bool:
    return not approx[0].isdigit()


def _qualified(hedge: str, raw: str) -> str:
    approx = approximate_number(raw)
    return approx if _is_vague(approx) else f"{hedge} {approx}"


def _range(low: str, high: str) -> str:
    low, high = approximate_number(low), approximate_number(high)
    if _is_vague(low) or _is_vague(high):
        return "many" if "many" in (low, high) else "some"
    return f"roughly {low} to {high}"


def _hedged(match: re.Match, currency: str, number: str, hedge: str = "over") -> str:
    approx = approximate_number(number)
    if _is_vague(approx):
        return approx
    preceding = match.string[:match.start()].rstrip().lower()
    prefix = "" if preceding.endswith(_HEDGE_WORDS) else f"{hedge} "
    return f"{prefix}{currency}{approx}"


def fallback_generalize(suggestion: str) -> str:
    """Deterministic regex hedging used when the collaborator fails.

    Never raises and never returns an empty string for non-empty input.
    """
    text = _EXACT_RE.sub(lambda m: _qualified("around", m.group(1)), suggestion)
    text = _APPROX_RE.sub(lambda m: _qualified("approximately", m.group(1)), text)
    text = _RANGE_RE.sub(lambda m: _range(m.group(1), m.group(2)), text)
    text = _GROUPED_RE.sub(lambda m: _hedged(m, m.group(1), m.group(2)), text)
    # Whatever comma groupings remain are not thousands separators.
    text = _COMMA_NUMBER_RE.sub("some", text)
    text = _LONG_QUANTITY_RE.sub(lambda m: _hedged(m, m.group(1), m.group(2)) + m.group(3), text)
    text = _DECIMAL_RE.sub(lambda m: f"about {m.group(1)}{m.group(2)}", text)
    text = re.sub(r"\s{2,}", " ", text).strip()
    return text or suggestion


class SuggestionGeneralizer:
    """Hedges overly specific suggestions, falling back to regex rewriting."""

    def __init__(self, ai_provider: AIProvider, model: str = "gpt-4o-mini", temperature: float = 0.1):
        """Initialize the generalizer.

        Args:
            ai_provider: Generative collaborator
            model: Model used for rewriting
            temperature: Sampling temperature
        """
        self._ai = ai_provider
        self._model = model
        self._temperature = temperature

    async def generalize(self, suggestion: str, original_text: str) -> str:
        """Rewrite one suggestion with hedged quantifiers."""
        messages = [
            ChatMessage(role="system", content=GENERALIZER_PROMPT),
            ChatMessage(
                role="user",
                content=(
                    f'Original text: "{original_text}"\n'
                    f'Overly specific suggestion: "{suggestion}"\n\n'
                    "Please provide a more general version of this suggestion:"
                ),
            ),
        ]
        try:
            result = await self._ai.generate_structured(
                messages,
                GeneralizedSuggestion,
                model=self._model,
                temperature=self._temperature,
            )
            generalized = result.generalized_suggestion.strip()
            if generalized:
                return generalized
            logger.warning("⚠️ Generalizer returned an empty suggestion, using fallback")
        except Exception as e:
            logger.warning(f"⚠️ Error generalizing suggestion, using fallback: {e}")

        return fallback_generalize(suggestion)

    async def apply(self, issues: Sequence[IssueT]) -> List[IssueT]:
        """Generalize every overly specific suggestion, one at a time."""
        generalized = []
        for issue in issues:
            if is_overly_specific(issue.suggestion):
                logger.info(f"🎯 Detected overly specific suggestion, generalizing: {issue.suggestion}")
                suggestion = await self.generalize(issue.suggestion, issue.text)
                issue = issue.model_copy(update={"suggestion": suggestion})
            generalized.append(issue)
        return generalized
