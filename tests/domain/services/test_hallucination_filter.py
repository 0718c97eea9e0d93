"""Tests for the hallucination and fact-injection guards."""

import pytest

from fact_guard.domain.models.fact_check_issue import Confidence, FactCheckIssue
from fact_guard.domain.services.hallucination_filter import (
    HallucinationFilter,
    contains_hallucination,
    count_novel_markers,
    injects_facts,
)


def make_issue(text: str, suggestion: str, confidence: Confidence = Confidence.HIGH) -> FactCheckIssue:
    return FactCheckIssue(
        text=text,
        issue_description="Incorrect",
        confidence=confidence,
        suggestion=suggestion,
    )


@pytest.mark.parametrize(
    "suggestion",
    [
        "The ceremony began at 3:15 PM",
        "It opened on Tuesday",
        "It was finished in March 1987",
        "Tickets cost $12.50",
        "About 45% of visitors",
        "The statue weighs exactly 300 tons",
        "The tower measures exactly 324 meters",
        "According to a Harvard study, it works",
        "Research shows that walls are long",
    ],
)
def test_detects_fabricated_precision(suggestion):
    """Each indicator pattern flags a suggestion."""
    assert contains_hallucination(suggestion)


def test_plain_suggestion_is_not_hallucinated():
    """Broad corrections pass."""
    assert not contains_hallucination("located in China")
    assert not contains_hallucination("stretches over 21,000 kilometers")


def test_counts_novel_markers():
    """Markers already in the original are not novel."""
    assert count_novel_markers("The wall is long", "Emperor Qin built it in the 3rd century") == 3
    assert count_novel_markers("It was built long ago", "built by a dynasty") == 1


def test_repeated_markers_count_each_time():
    """A repeated novel marker counts once per occurrence."""
    assert count_novel_markers("A wall", "dynasty after dynasty after dynasty") == 3


def test_fact_injection_threshold():
    """More than two novel markers means injected facts."""
    assert injects_facts("The wall is long", "Built by an Emperor of the Qin dynasty in the 3rd century BC")
    assert not injects_facts("The wall is long", "It is very long and was built over time")


def test_filter_drops_non_high_confidence():
    """MEDIUM and LOW candidates never pass."""
    guard = HallucinationFilter()
    assert not guard.accepts(make_issue("Located in Tokyo", "located in China", Confidence.MEDIUM))
    assert not guard.accepts(make_issue("Located in Tokyo", "located in China", Confidence.LOW))
    assert guard.accepts(make_issue("Located in Tokyo", "located in China"))


def test_filter_drops_time_of_day_suggestion():
    """A suggestion with a time of day is dropped."""
    guard = HallucinationFilter()
    assert not guard.accepts(make_issue("The wall opened", "The wall opened at 3:15 PM"))


def test_filter_drops_fact_injection():
    """A suggestion inventing emperors and dynasties is dropped."""
    guard = HallucinationFilter()
    issue = make_issue("The wall is long", "Emperor Qin of the Qin dynasty built it in the 3rd century")
    assert not guard.accepts(issue)


def test_apply_preserves_order():
    """Survivors keep their relative order."""
    issues = [
        make_issue("a", "first"),
        make_issue("b", "dropped", Confidence.LOW),
        make_issue("c", "second"),
    ]
    kept = HallucinationFilter().apply(issues)
    assert [issue.suggestion for issue in kept] == ["first", "second"]
