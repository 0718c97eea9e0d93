"""Tests for header-based caller identity."""

from fact_guard.infrastructure.auth.header_auth_adapter import HeaderAuthAdapter


def test_resolves_user_from_header():
    """The trimmed header value is the user id."""
    auth = HeaderAuthAdapter()
    assert auth.resolve_user({"X-User-Id": "  user-1 "}) == "user-1"


def test_lower_case_header_name():
    """Lower-cased header names are accepted."""
    auth = HeaderAuthAdapter("X-User-Id")
    assert auth.resolve_user({"x-user-id": "user-1"}) == "user-1"


def test_missing_or_blank_header():
    """No usable header means no identity."""
    auth = HeaderAuthAdapter()
    assert auth.resolve_user({}) is None
    assert auth.resolve_user({"X-User-Id": "   "}) is None
