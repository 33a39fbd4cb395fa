"""Single cached value with its expiry deadline."""
from dataclasses import dataclass
from typing import Any


@dataclass
class CacheEntry:
    """
    A value stored in a TTLCache.

    Attributes:
        value: Cached payload (opaque to the cache)
        stored_at: Clock reading when the value was inserted
        expires_at: Clock reading from which the entry is treated as absent
        hits: Number of lookups that returned this entry
    """

    value: Any
    stored_at: float
    expires_at: float
    hits: int = 0

    def is_expired(self, now: float) -> bool:
        return now >= self.expires_at

    def remaining_ttl(self, now: float) -> float:
        return max(0.0, self.expires_at - now)
