"""Header-based implementation of the auth provider interface."""

from typing import Mapping, Optional

from ...domain.ports.auth_provider import AuthProvider


class HeaderAuthAdapter(AuthProvider):
    """Reads the caller identity set by an upstream authentication gateway."""

    def __init__(self, header_name: str = "X-User-Id"):
        """Initialize the adapter.

        Args:
            header_name: Header carrying the authenticated user id
        """
        self._header = header_name

    def resolve_user(self, headers: Mapping[str, str]) -> Optional[str]:
        """Return the user id from the request headers, if any."""
        value = headers.get(self._header) or headers.get(self._header.lower())
        if value and value.strip():
            return value.strip()
        return None

    @property
    def header_name(self) -> str:
        """Header consulted for the identity."""
        return self._header
