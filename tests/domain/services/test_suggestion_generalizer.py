"""Tests for suggestion generalization."""

import pytest

from fact_guard.domain.errors import CollaboratorError
from fact_guard.domain.models.fact_check_issue import Confidence, FactCheckIssue
from fact_guard.domain.services.suggestion_generalizer import (
    GeneralizedSuggestion,
    SuggestionGeneralizer,
    approximate_number,
    fallback_generalize,
    is_overly_specific,
)


def make_issue(suggestion: str) -> FactCheckIssue:
    return FactCheckIssue(
        text="The Great Wall stretches 10 kilometers",
        issue_description="Far too short",
        confidence=Confidence.HIGH,
        suggestion=suggestion,
    )


@pytest.mark.parametrize(
    "suggestion",
    [
        "stretches 21196 kilometers",
        "exactly 42 floors",
        "precisely 7 wonders",
        "is 3.5 km long",
        "21,196 kilometers",
        "between 5 and 10 centuries",
        "approximately 21196 steps",
    ],
)
def test_detects_overly_specific(suggestion):
    """Each specificity pattern is recognised."""
    assert is_overly_specific(suggestion)


def test_broad_suggestion_is_not_overly_specific():
    """Hedged phrasing passes untouched."""
    assert not is_overly_specific("located in China")
    assert not is_overly_specific("stretches over 21 thousand kilometers")


@pytest.mark.parametrize(
    "raw, expected",
    [
        ("999", "999"),
        ("1500", "1.5 thousand"),
        ("21,196", "21 thousand"),
        ("2,500,000", "2.5 million"),
        ("3000000000", "3 billion"),
        ("8850", "8.8 thousand"),
    ],
)
def test_approximate_number(raw, expected):
    """Numbers are floored to a coarse magnitude."""
    assert approximate_number(raw) == expected


def test_fallback_hedges_grouped_number():
    """The canonical over-specific length is hedged."""
    result = fallback_generalize("The Great Wall stretches 21,196 kilometers")
    assert result == "The Great Wall stretches over 21 thousand kilometers"
    assert not is_overly_specific(result)


def test_fallback_does_not_double_hedge():
    """An existing hedge word is not repeated."""
    assert fallback_generalize("over 21,196 km") == "over 21 thousand km"


def test_fallback_rewrites_exact_and_ranges():
    """Exact values become 'around', ranges become 'roughly'."""
    assert fallback_generalize("The peak is exactly 8850 meters") == "The peak is around 8.8 thousand meters"
    assert fallback_generalize("built between 5000 and 8000 years ago") == (
        "built roughly 5 thousand to 8 thousand years ago"
    )


def test_fallback_rewrites_currency():
    """Currency amounts keep their symbol."""
    assert fallback_generalize("It costs $1,234.56") == "It costs over $1.2 thousand"


def test_fallback_rewrites_decimal_measurement():
    """Decimal measurements lose their fraction."""
    assert fallback_generalize("The bridge is 2.75 km long") == "The bridge is about 2 km long"


def test_fallback_handles_huge_numbers():
    """Numbers too large for a float are hedged instead of raising."""
    exact = fallback_generalize("exactly " + "9" * 400 + " km")
    grouped = fallback_generalize("spans 1" + ",000" * 110 + " km")

    assert exact == "many km"
    assert grouped == "spans many km"
    assert not is_overly_specific(exact)
    assert not is_overly_specific(grouped)


@pytest.mark.parametrize(
    "suggestion, expected",
    [
        ("between 1,5 and 2,5 km", "some km"),
        ("covers 2,5 km", "covers some km"),
        ("counted 12,3456 people", "counted some people"),
        ("exactly 12,34 people", "some people"),
    ],
)
def test_fallback_does_not_misread_non_thousands_commas(suggestion, expected):
    """Only thousands separators are stripped; other comma groupings become vague."""
    result = fallback_generalize(suggestion)

    assert result == expected
    assert not is_overly_specific(result)


@pytest.mark.parametrize("raw, expected", [("1,5", "some"), ("9" * 400, "many"), ("5000000000000", "many")])
def test_approximate_number_vague_values(raw, expected):
    """Ambiguous or unrenderable numbers fall back to a vague quantity."""
    assert approximate_number(raw) == expected


def test_fallback_never_empty():
    """Input without numbers comes back unchanged."""
    assert fallback_generalize("made of stone") == "made of stone"


@pytest.mark.asyncio
async def test_generalize_uses_collaborator(fake_ai):
    """A non-empty collaborator rewrite is used."""
    fake_ai.script(GeneralizedSuggestion, {"generalizedSuggestion": "stretches over 21,000 kilometers"})
    generalizer = SuggestionGeneralizer(fake_ai)

    result = await generalizer.generalize("stretches 21,196 kilometers", "stretches 10 kilometers")

    assert result == "stretches over 21,000 kilometers"
    call = fake_ai.calls_for(GeneralizedSuggestion)[0]
    assert call["model"] == "gpt-4o-mini"
    assert "stretches 21,196 kilometers" in call["messages"][-1].content


@pytest.mark.asyncio
async def test_generalize_falls_back_on_error(fake_ai):
    """A failing collaborator yields the regex fallback."""
    fake_ai.script(GeneralizedSuggestion, CollaboratorError("timeout"))
    generalizer = SuggestionGeneralizer(fake_ai)

    result = await generalizer.generalize("stretches 21,196 kilometers", "stretches 10 kilometers")

    assert result == "stretches over 21 thousand kilometers"


@pytest.mark.asyncio
async def test_generalize_falls_back_on_empty(fake_ai):
    """An empty rewrite yields the regex fallback."""
    fake_ai.script(GeneralizedSuggestion, {"generalizedSuggestion": "   "})
    generalizer = SuggestionGeneralizer(fake_ai)

    result = await generalizer.generalize("stretches 21,196 kilometers", "original")

    assert result == "stretches over 21 thousand kilometers"


@pytest.mark.asyncio
async def test_apply_only_touches_overly_specific(fake_ai):
    """Broad suggestions are passed through without a collaborator call."""
    fake_ai.script(GeneralizedSuggestion, {"generalizedSuggestion": "over 21,000 kilometers"})
    generalizer = SuggestionGeneralizer(fake_ai)
    issues = [make_issue("located in China"), make_issue("21,196 kilometers")]

    result = await generalizer.apply(issues)

    assert [issue.suggestion for issue in result] == ["located in China", "over 21,000 kilometers"]
    assert len(fake_ai.calls_for(GeneralizedSuggestion)) == 1
    assert issues[1].suggestion == "21,196 kilometers"


@pytest.mark.asyncio
async def test_apply_absorbs_unrenderable_number(fake_ai):
    """A failing collaborator and a huge number still produce a hedged suggestion."""
    fake_ai.script(GeneralizedSuggestion, CollaboratorError("timeout"))
    generalizer = SuggestionGeneralizer(fake_ai)

    result = await generalizer.apply([make_issue("exactly " + "9" * 400 + " km")])

    assert result[0].suggestion == "many km"
