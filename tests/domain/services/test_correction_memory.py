"""Tests for correction memory."""

import pytest

from fact_guard.domain.errors import StorageError
from fact_guard.domain.models.correction import CorrectionType
from fact_guard.domain.services.correction_memory import CorrectionMemory, jaccard_similarity
from fact_guard.domain.services.text_normalizer import content_digest


class FailingStore:
    """Store whose every operation fails."""

    async def append(self, record):
        raise StorageError("disk full")

    async def list_for_user(self, user_id):
        raise StorageError("unreachable")


def test_jaccard_identical_and_disjoint():
    """Identical token sets score 1, disjoint ones 0."""
    assert jaccard_similarity("The wall is long", "the WALL is long!") == 1.0
    assert jaccard_similarity("red apples", "blue sky") == 0.0


def test_jaccard_partial_overlap():
    """Overlap is intersection over union of token sets."""
    # {a, b, c} vs {b, c, d}: 2 shared of 4
    assert jaccard_similarity("a b c", "b c d") == pytest.approx(0.5)


def test_jaccard_empty_strings():
    """Two empty strings are not similar."""
    assert jaccard_similarity("", "") == 0.0
    assert jaccard_similarity("...", "") == 0.0


@pytest.mark.asyncio
async def test_record_appends_to_user_history(correction_store):
    """Feedback is stored with the digest of the original text."""
    memory = CorrectionMemory(correction_store)

    stored = await memory.record("user-1", "Located in Tokyo", "Located in China", CorrectionType.ACCEPTED)

    assert stored is True
    history = await correction_store.list_for_user("user-1")
    assert len(history) == 1
    assert history[0].content_digest == content_digest("Located in Tokyo")
    assert history[0].correction_type == CorrectionType.ACCEPTED
    assert await correction_store.list_for_user("user-2") == []


@pytest.mark.asyncio
async def test_history_is_append_only(correction_store):
    """Records accumulate in insertion order."""
    memory = CorrectionMemory(correction_store)
    await memory.record("u", "one", "1", CorrectionType.REJECTED)
    await memory.record("u", "two", "2", CorrectionType.IGNORED)

    history = await correction_store.list_for_user("u")
    assert [r.original_text for r in history] == ["one", "two"]


@pytest.mark.asyncio
async def test_accepted_similar_suppresses(correction_store):
    """Text similar to an accepted correction is recognised."""
    memory = CorrectionMemory(correction_store)
    await memory.record(
        "u",
        "The Great Wall of China is located in Tokyo.",
        "The Great Wall of China is located in China.",
        CorrectionType.ACCEPTED,
    )

    assert await memory.has_accepted_similar("u", "The Great Wall of China is located in China.")
    assert not await memory.has_accepted_similar("u", "Paris is the capital of France.")
    assert not await memory.has_accepted_similar("someone-else", "The Great Wall of China is located in China.")


@pytest.mark.asyncio
async def test_rejected_feedback_does_not_suppress(correction_store):
    """Only accepted corrections suppress checks."""
    memory = CorrectionMemory(correction_store)
    await memory.record("u", "sky is green", "sky is blue", CorrectionType.REJECTED)

    assert not await memory.has_accepted_similar("u", "sky is blue")


@pytest.mark.asyncio
async def test_threshold_is_strict(correction_store):
    """Similarity must exceed the threshold, not just reach it."""
    memory = CorrectionMemory(correction_store, similarity_threshold=0.5)
    await memory.record("u", "x", "a b c", CorrectionType.ACCEPTED)

    assert not await memory.has_accepted_similar("u", "b c d")


@pytest.mark.asyncio
async def test_storage_failures_are_absorbed():
    """Storage errors never reach the caller."""
    memory = CorrectionMemory(FailingStore())

    assert await memory.record("u", "a", "b", CorrectionType.ACCEPTED) is False
    assert await memory.has_accepted_similar("u", "b") is False
