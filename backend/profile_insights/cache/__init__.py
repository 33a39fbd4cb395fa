"""In-memory TTL caches for profile lookups and derived analysis results."""
from .entry import CacheEntry
from .ttl_cache import TTLCache
from .cache_key import (
    generate_key,
    is_valid_key,
    normalize_profile_id,
    profile_cache_key,
    analysis_cache_key,
)
from .registry import (
    CacheRegistry,
    build_cache_registry,
    PROFILE_STORE,
    ANALYSIS_STORE,
)

__all__ = [
    "CacheEntry",
    "TTLCache",
    "generate_key",
    "is_valid_key",
    "normalize_profile_id",
    "profile_cache_key",
    "analysis_cache_key",
    "CacheRegistry",
    "build_cache_registry",
    "PROFILE_STORE",
    "ANALYSIS_STORE",
]
