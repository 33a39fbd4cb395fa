"""Registry of named cache stores with cross-store operations."""
import logging
from typing import Any, Callable, Dict, Iterable, List, Optional

from profile_insights.cache.ttl_cache import TTLCache
from profile_insights.config.settings import CacheSettings, load_settings
from profile_insights.exceptions import CacheConfigurationError

logger = logging.getLogger(__name__)

PROFILE_STORE = "profile"
ANALYSIS_STORE = "analysis"
TOTAL_SIZE_KEY = "total_size"


class CacheRegistry:
    """Registry maintaining mapping from store name -> TTLCache instance."""

    def __init__(self):
        self._stores: Dict[str, TTLCache] = {}

    def register(self, store: TTLCache) -> None:
        if store.name == TOTAL_SIZE_KEY:
            raise CacheConfigurationError(f"'{TOTAL_SIZE_KEY}' is reserved and cannot name a cache store")
        if store.name in self._stores:
            raise CacheConfigurationError(f"Cache store '{store.name}' is already registered")
        self._stores[store.name] = store
        logger.info(f"Registered cache store {store!r}")

    def get(self, name: str) -> TTLCache:
        if name not in self._stores:
            raise KeyError(f"No cache store registered under '{name}'")
        return self._stores[name]

    def all(self) -> Dict[str, TTLCache]:
        return dict(self._stores)

    def names(self) -> List[str]:
        return list(self._stores)

    def cleanup_all(self) -> None:
        """Clear every registered store. Each store is cleared under its own lock."""
        for store in self._stores.values():
            store.clear()

    def prune_expired_all(self) -> Dict[str, int]:
        """Remove expired entries from every store; returns removed count per store."""
        removed = {name: store.prune_expired() for name, store in self._stores.items()}
        total = sum(removed.values())
        if total:
            logger.info(f"Cache prune: removed {total} expired entries")
        return removed

    def get_stats(self) -> Dict[str, Any]:
        """
        Snapshot size and hit rate of every store plus the summed size.

        Each store's numbers are taken at one instant; stores are read one
        after another, so the snapshot is not globally consistent under
        concurrent writes.

        Example:
            >>> registry.get_stats()
            {"profile": {"size": 2, "hit_rate": 0.5, ...}, "analysis": {...}, "total_size": 3}
        """
        stats: Dict[str, Any] = {}
        total_size = 0
        for name, store in self._stores.items():
            snapshot = store.stats()
            stats[name] = {
                "size": snapshot["size"],
                "hit_rate": snapshot["hit_rate"],
                "hits": snapshot["hits"],
                "misses": snapshot["misses"],
                "max_entries": snapshot["max_entries"],
            }
            total_size += snapshot["size"]
        stats[TOTAL_SIZE_KEY] = total_size
        return stats

    def warmup(self, keys: Iterable[str], factory: Callable[[str], Any], store: str = PROFILE_STORE) -> int:
        """
        Pre-populate a store with values for keys that are not cached yet.

        Failures from the factory are logged and skipped.

        Returns:
            Number of keys stored
        """
        target = self.get(store)
        stored = 0
        for key in keys:
            if target.has(key):
                continue
            try:
                value = factory(key)
            except Exception as e:
                logger.warning(f"Failed to warm up cache '{store}' for key '{key}': {e}")
                continue
            if value is None:
                continue
            target.set(key, value)
            stored += 1
        return stored


def build_cache_registry(
    settings: Optional[CacheSettings] = None,
    clock: Optional[Callable[[], float]] = None,
) -> CacheRegistry:
    """
    Create the registry holding the fixed "profile" and "analysis" stores.

    Args:
        settings: Store configuration (loaded from the environment if omitted)
        clock: Optional time source shared by both stores (tests)
    """
    settings = settings or load_settings()
    clock_kwargs = {"clock": clock} if clock is not None else {}

    registry = CacheRegistry()
    registry.register(
        TTLCache(
            name=PROFILE_STORE,
            ttl_seconds=settings.profile.ttl_seconds,
            max_entries=settings.profile.max_entries,
            **clock_kwargs,
        )
    )
    registry.register(
        TTLCache(
            name=ANALYSIS_STORE,
            ttl_seconds=settings.analysis.ttl_seconds,
            max_entries=settings.analysis.max_entries,
            **clock_kwargs,
        )
    )
    return registry
