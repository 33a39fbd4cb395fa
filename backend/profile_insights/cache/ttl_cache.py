"""Time-To-Live (TTL) Cache with insertion-order size bound and hit statistics."""
import logging
import threading
import time
from typing import Any, Callable, Dict, List, Optional

from profile_insights.cache.entry import CacheEntry
from profile_insights.exceptions import CacheConfigurationError

logger = logging.getLogger(__name__)


class TTLCache:
    """
    Named in-memory cache with time-to-live (TTL) expiry and a size bound.

    Thread-safe cache that stores values with an expiry deadline and treats
    entries as absent once the deadline is reached. When `max_entries` is set,
    inserting beyond the bound evicts the oldest-inserted entries first.
    Expired entries are removed lazily on lookup and on `size()`, or eagerly
    with `prune_expired()`.

    Attributes:
        name: Store name reported in statistics
        ttl_seconds: Default time-to-live for entries
        max_entries: Maximum number of entries (None = unbounded)

    Example:
        >>> cache = TTLCache(name="analysis", ttl_seconds=600, max_entries=100)
        >>> cache.set("analysis-jane-doe-skills", {"top_skill": "Python"})
        >>> cache.get("analysis-jane-doe-skills")
        {'top_skill': 'Python'}
    """

    def __init__(
        self,
        name: str = "default",
        ttl_seconds: float = 300,
        max_entries: Optional[int] = None,
        clock: Callable[[], float] = time.monotonic,
    ):
        """
        Initialize TTL cache.

        Args:
            name: Store name used in statistics and logs
            ttl_seconds: Default time-to-live in seconds (default: 300 = 5 minutes)
            max_entries: Size bound, or None for no bound
            clock: Monotonic time source in seconds

        Raises:
            CacheConfigurationError: If ttl_seconds or max_entries is not positive
        """
        if ttl_seconds <= 0:
            raise CacheConfigurationError(f"Cache '{name}': ttl_seconds must be positive, got {ttl_seconds}")
        if max_entries is not None and max_entries < 1:
            raise CacheConfigurationError(f"Cache '{name}': max_entries must be at least 1, got {max_entries}")

        self.name = name
        self.ttl_seconds = ttl_seconds
        self.max_entries = max_entries
        self._clock = clock
        # dict preserves insertion order, which is the eviction order
        self._cache: Dict[str, CacheEntry] = {}
        self._hits = 0
        self._misses = 0
        self._lock = threading.RLock()

    @property
    def hits(self) -> int:
        return self._hits

    @property
    def misses(self) -> int:
        return self._misses

    def set(self, key: str, value: Any, ttl_seconds: Optional[float] = None) -> None:
        """
        Store a value, replacing any previous entry for the key.

        A replaced key moves to the newest position in eviction order. If the
        store is over `max_entries` afterwards, the oldest entries are evicted.
        A None value is ignored, since None is what get() returns for absent.

        Args:
            key: Cache key (e.g., "profile-jane-doe-overview")
            value: Value to cache
            ttl_seconds: Optional TTL override for this entry

        Thread-safe.
        """
        if not _is_usable_key(key):
            logger.warning(f"Cache '{self.name}': ignoring set with invalid key {key!r}")
            return
        if value is None:
            logger.warning(f"Cache '{self.name}': ignoring set of None for '{key}'")
            return
        ttl = self.ttl_seconds if ttl_seconds is None else ttl_seconds
        if ttl <= 0:
            logger.warning(f"Cache '{self.name}': ignoring set for '{key}' with non-positive TTL {ttl}")
            return

        with self._lock:
            now = self._clock()
            self._cache.pop(key, None)
            self._cache[key] = CacheEntry(value=value, stored_at=now, expires_at=now + ttl)

            if self.max_entries is not None:
                while len(self._cache) > self.max_entries:
                    oldest_key = next(iter(self._cache))
                    del self._cache[oldest_key]
                    logger.debug(f"Cache '{self.name}': evicted '{oldest_key}' (max_entries={self.max_entries})")

    def get(self, key: str) -> Optional[Any]:
        """
        Retrieve a value if it exists and hasn't expired.

        Args:
            key: Cache key

        Returns:
            Cached value on a hit, None on a miss or expiry

        Thread-safe.

        Example:
            >>> profile = cache.get("profile-jane-doe-overview")
            >>> if profile is None:
            ...     print("Cache miss or expired")
        """
        if not _is_usable_key(key):
            logger.warning(f"Cache '{self.name}': ignoring get with invalid key {key!r}")
            return None

        with self._lock:
            entry = self._cache.get(key)
            if entry is None:
                self._misses += 1
                return None

            if entry.is_expired(self._clock()):
                # Expired, remove and count as miss
                del self._cache[key]
                self._misses += 1
                logger.debug(f"Cache '{self.name}': '{key}' expired")
                return None

            entry.hits += 1
            self._hits += 1
            return entry.value

    def has(self, key: str) -> bool:
        """Return True if a live entry exists. Not counted as a hit or miss."""
        if not _is_usable_key(key):
            return False
        with self._lock:
            entry = self._cache.get(key)
            if entry is None:
                return False
            if entry.is_expired(self._clock()):
                del self._cache[key]
                return False
            return True

    def delete(self, key: str) -> bool:
        """
        Manually invalidate a cache entry.

        Args:
            key: Cache key to invalidate

        Returns:
            True if an entry was removed

        Thread-safe.
        """
        if not _is_usable_key(key):
            logger.warning(f"Cache '{self.name}': ignoring delete with invalid key {key!r}")
            return False
        with self._lock:
            return self._cache.pop(key, None) is not None

    def clear(self) -> None:
        """
        Clear all entries and reset hit/miss counters.

        Thread-safe.
        """
        with self._lock:
            removed = len(self._cache)
            self._cache.clear()
            self._hits = 0
            self._misses = 0
        logger.info(f"Cache '{self.name}': cleared {removed} entries")

    def size(self) -> int:
        """
        Get current number of live entries.

        Expired entries are pruned first so they never count.

        Returns:
            Count of live cached items
        """
        with self._lock:
            self._prune_locked()
            return len(self._cache)

    def hit_rate(self) -> float:
        """Fraction of lookups since the last clear that were hits (0.0 if none)."""
        with self._lock:
            return self._hit_rate_locked()

    def keys(self) -> List[str]:
        """Live keys, oldest insertion first."""
        with self._lock:
            self._prune_locked()
            return list(self._cache)

    def prune_expired(self) -> int:
        """
        Remove all expired entries from cache.

        Returns:
            Number of entries removed

        Thread-safe.
        """
        with self._lock:
            removed = self._prune_locked()
        if removed:
            logger.debug(f"Cache '{self.name}': pruned {removed} expired entries")
        return removed

    def get_or_set(self, key: str, factory: Callable[[], Any], ttl_seconds: Optional[float] = None) -> Any:
        """
        Return the cached value, computing and storing it on a miss.

        The factory runs outside the lock. A None result is returned but not
        cached. Exceptions raised by the factory propagate to the caller.

        Args:
            key: Cache key
            factory: Zero-argument callable producing the value
            ttl_seconds: Optional TTL override for the stored value

        Example:
            >>> cache.get_or_set("profile-jane-doe-overview", lambda: fetch_profile("jane-doe"))
        """
        cached = self.get(key)
        if cached is not None:
            return cached

        value = factory()
        if value is not None:
            self.set(key, value, ttl_seconds=ttl_seconds)
        return value

    def stats(self) -> Dict[str, Any]:
        """
        Get cache statistics.

        Returns:
            Dict with name, size, bounds, counters, hit rate and the oldest and
            newest keys

        Example:
            >>> stats = cache.stats()
            >>> print(f"{stats['name']}: {stats['size']} items, hit rate {stats['hit_rate']:.2f}")
            analysis: 5 items, hit rate 0.80
        """
        with self._lock:
            self._prune_locked()
            keys = list(self._cache)
            return {
                "name": self.name,
                "size": len(keys),
                "max_entries": self.max_entries,
                "ttl_seconds": self.ttl_seconds,
                "hits": self._hits,
                "misses": self._misses,
                "hit_rate": self._hit_rate_locked(),
                "oldest_key": keys[0] if keys else None,
                "newest_key": keys[-1] if keys else None,
            }

    def _prune_locked(self) -> int:
        now = self._clock()
        expired_keys = [k for k, entry in self._cache.items() if entry.is_expired(now)]
        for key in expired_keys:
            del self._cache[key]
        return len(expired_keys)

    def _hit_rate_locked(self) -> float:
        total = self._hits + self._misses
        if total == 0:
            return 0.0
        return self._hits / total

    def __repr__(self) -> str:
        return f"TTLCache(name={self.name!r}, ttl_seconds={self.ttl_seconds}, max_entries={self.max_entries})"


def _is_usable_key(key: Any) -> bool:
    return isinstance(key, str) and key != ""
