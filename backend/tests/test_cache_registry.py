"""Unit tests for CacheRegistry and the profile/analysis store wiring."""
import pytest

from profile_insights.cache import ANALYSIS_STORE, PROFILE_STORE, CacheRegistry, TTLCache
from profile_insights.exceptions import CacheConfigurationError


def test_register_and_get_store():
    registry = CacheRegistry()
    store = TTLCache(name="scratch", ttl_seconds=60)
    registry.register(store)

    assert registry.get("scratch") is store
    assert registry.names() == ["scratch"]


def test_get_unknown_store_raises():
    registry = CacheRegistry()
    with pytest.raises(KeyError):
        registry.get("unknown")


def test_duplicate_and_reserved_names_rejected():
    registry = CacheRegistry()
    registry.register(TTLCache(name="profile", ttl_seconds=60))

    with pytest.raises(CacheConfigurationError):
        registry.register(TTLCache(name="profile", ttl_seconds=60))
    with pytest.raises(CacheConfigurationError):
        registry.register(TTLCache(name="total_size", ttl_seconds=60))


def test_build_registers_fixed_stores(registry):
    assert registry.names() == [PROFILE_STORE, ANALYSIS_STORE]
    assert registry.get(PROFILE_STORE).ttl_seconds == 24 * 60 * 60
    assert registry.get(ANALYSIS_STORE).max_entries == 100


def test_all_returns_copy(registry):
    stores = registry.all()
    stores.pop(PROFILE_STORE)
    assert PROFILE_STORE in registry.names()


def test_fresh_registries_are_isolated(cache_settings, clock):
    from profile_insights.cache import build_cache_registry

    first = build_cache_registry(cache_settings, clock=clock)
    second = build_cache_registry(cache_settings, clock=clock)
    first.get(PROFILE_STORE).set("profile-1", {"name": "User"})

    assert second.get(PROFILE_STORE).get("profile-1") is None


def test_clear_one_store_leaves_siblings(registry):
    profiles = registry.get(PROFILE_STORE)
    analyses = registry.get(ANALYSIS_STORE)
    profiles.set("profile-1", {"name": "User"})
    analyses.set("analysis-1", {"data": "test"})

    profiles.clear()

    assert profiles.get("profile-1") is None
    assert analyses.get("analysis-1") == {"data": "test"}


def test_cleanup_all_empties_every_store(registry):
    profiles = registry.get(PROFILE_STORE)
    analyses = registry.get(ANALYSIS_STORE)
    profiles.set("profile-1", {"name": "User"})
    analyses.set("analysis-1", {"data": "test"})
    profiles.get("profile-1")

    registry.cleanup_all()

    assert profiles.get("profile-1") is None
    assert analyses.get("analysis-1") is None
    assert registry.get_stats()["total_size"] == 0


def test_get_stats_aggregates_sizes(registry):
    profiles = registry.get(PROFILE_STORE)
    analyses = registry.get(ANALYSIS_STORE)
    profiles.set("key1", {"data": 1})
    profiles.set("key2", {"data": 2})
    analyses.set("key3", {"data": 3})
    profiles.get("key1")
    profiles.get("missing")

    stats = registry.get_stats()

    assert stats[PROFILE_STORE]["size"] == 2
    assert stats[ANALYSIS_STORE]["size"] == 1
    assert stats["total_size"] == 3
    assert stats[PROFILE_STORE]["hit_rate"] == 0.5
    assert 0.0 <= stats[ANALYSIS_STORE]["hit_rate"] <= 1.0


def test_get_stats_excludes_expired_entries(registry, clock):
    registry.get(ANALYSIS_STORE).set("key1", {"data": 1})
    registry.get(PROFILE_STORE).set("key2", {"data": 2})

    clock.advance(601)

    stats = registry.get_stats()
    assert stats[ANALYSIS_STORE]["size"] == 0
    assert stats[PROFILE_STORE]["size"] == 1
    assert stats["total_size"] == 1


def test_prune_expired_all(registry, clock):
    registry.get(ANALYSIS_STORE).set("key1", 1)
    registry.get(ANALYSIS_STORE).set("key2", 2)
    registry.get(PROFILE_STORE).set("key3", 3)

    clock.advance(601)

    assert registry.prune_expired_all() == {PROFILE_STORE: 0, ANALYSIS_STORE: 2}


def test_warmup_fills_missing_keys_and_skips_failures(registry):
    profiles = registry.get(PROFILE_STORE)
    profiles.set("profile-cached", "already here")

    def fetch(key):
        if key == "profile-broken":
            raise RuntimeError("upstream unavailable")
        return {"key": key}

    stored = registry.warmup(["profile-cached", "profile-new", "profile-broken"], fetch)

    assert stored == 1
    assert profiles.get("profile-cached") == "already here"
    assert profiles.get("profile-new") == {"key": "profile-new"}
    assert profiles.has("profile-broken") is False
