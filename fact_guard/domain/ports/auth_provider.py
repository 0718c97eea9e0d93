"""Protocol for the authentication collaborator."""

from typing import Mapping, Optional, Protocol


class AuthProvider(Protocol):
    """Resolves the caller identity for a request.

    The identity is only used as the correction-memory partition key.
    """

    def resolve_user(self, headers: Mapping[str, str]) -> Optional[str]:
        """Return the caller's user id, or None if unauthenticated."""
        ...
