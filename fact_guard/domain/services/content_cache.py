"""Content-addressed cache for verification results."""

import logging
import time
from dataclasses import dataclass
from typing import Callable, Optional

from cachetools import TTLCache

from ..errors import StorageError
from ..models.fact_check_issue import CheckMode, VerificationResult

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class CacheEntry:
    """A cached verification result."""

    result: VerificationResult
    stored_at: float
    expires_at: float


def cache_key(digest: str, mode: CheckMode) -> str:
    """Cache key for a content digest; results are kept per mode."""
    return f"{mode.value}:{digest}"


class ContentCache:
    """TTL cache of verification results with an LRU capacity bound.

    Expired entries are treated as absent and dropped lazily on lookup,
    and swept after every store. ``timer`` lets tests drive expiry.
    """

    def __init__(
        self,
        ttl: float = 24 * 60 * 60,
        maxsize: int = 1024,
        timer: Callable[[], float] = time.monotonic,
    ):
        """Initialize the cache.

        Args:
            ttl: Lifetime of every entry in seconds
            maxsize: Maximum number of entries before LRU eviction
            timer: Clock used for expiry
        """
        if ttl <= 0:
            raise ValueError("Cache TTL must be positive")
        self._ttl = ttl
        self._timer = timer
        self._entries: TTLCache = TTLCache(maxsize=maxsize, ttl=ttl, timer=timer)

    def lookup(self, key: str) -> Optional[VerificationResult]:
        """Get an unexpired result, removing expired entries as a side effect."""
        self._entries.expire()
        entry = self._entries.get(key)
        if entry is None:
            return None
        return entry.result

    def store(self, key: str, result: VerificationResult) -> None:
        """Store a result, overwriting any existing entry, then sweep.

        Raises:
            StorageError: If the entry could not be written
        """
        now = self._timer()
        try:
            self._entries[key] = CacheEntry(result=result, stored_at=now, expires_at=now + self._ttl)
        except Exception as e:
            raise StorageError(f"Failed to cache result: {e}") from e
        self.sweep()

    def sweep(self) -> int:
        """Remove all expired entries.

        Returns:
            Number of entries removed
        """
        expired = self._entries.expire()
        if expired:
            logger.debug(f"🧹 Swept {len(expired)} expired cache entries")
        return len(expired) if expired else 0

    @property
    def ttl(self) -> float:
        """Entry lifetime in seconds."""
        return self._ttl

    def __len__(self) -> int:
        return len(self._entries)
