"""Markup-to-plain-text conversion and content digests."""

import hashlib
import re

_TAG_RE = re.compile(r"<[^>]*>")
_WHITESPACE_RE = re.compile(r"\s+")

# Only the entities the editor emits; &amp; last so "&amp;lt;" stays "&lt;".
_ENTITIES = (
    ("&nbsp;", " "),
    ("&lt;", "<"),
    ("&gt;", ">"),
    ("&quot;", '"'),
    ("&#39;", "'"),
    ("&amp;", "&"),
)


def normalize_markup(content: str) -> str:
    """Strip tags, decode common entities and collapse whitespace.

    Args:
        content: Raw HTML or plain text

    Returns:
        Trimmed plain text
    """
    text = _TAG_RE.sub(" ", content or "")
    for entity, replacement in _ENTITIES:
        text = text.replace(entity, replacement)
    return _WHITESPACE_RE.sub(" ", text).strip()


def is_checkable(text: str, min_length: int = 2) -> bool:
    """Check whether normalized text is long enough to send downstream."""
    return len(text.strip()) >= min_length


def content_digest(text: str) -> str:
    """SHA-256 hex digest of the trimmed, lower-cased text."""
    return hashlib.sha256(text.strip().lower().encode("utf-8")).hexdigest()
