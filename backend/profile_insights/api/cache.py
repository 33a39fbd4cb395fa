from fastapi import APIRouter, Depends, HTTPException, Request

from profile_insights.cache.registry import CacheRegistry
from profile_insights.cache.ttl_cache import TTLCache
from profile_insights.schemas.schemas import CacheClearResponse, CachePruneResponse, CacheStoreStats

# Router
router = APIRouter(prefix="/api/cache", tags=["cache"])


def get_cache_registry(request: Request) -> CacheRegistry:
    return request.app.state.cache_registry


def _get_store(registry: CacheRegistry, store_name: str) -> TTLCache:
    try:
        return registry.get(store_name)
    except KeyError:
        raise HTTPException(status_code=404, detail=f"Cache store '{store_name}' not found")


# =========================
# STATS
# =========================
@router.get("/stats")
def cache_stats(registry: CacheRegistry = Depends(get_cache_registry)):
    """Size and hit rate of every store plus the total size"""
    return registry.get_stats()


@router.get("/{store_name}", response_model=CacheStoreStats)
def store_stats(store_name: str, registry: CacheRegistry = Depends(get_cache_registry)):
    return _get_store(registry, store_name).stats()


# =========================
# INVALIDATION
# =========================
@router.post("/cleanup", response_model=CacheClearResponse)
def cleanup_all(registry: CacheRegistry = Depends(get_cache_registry)):
    """Clear every store (admin reset)"""
    registry.cleanup_all()
    return CacheClearResponse(cleared=registry.names())


@router.post("/prune", response_model=CachePruneResponse)
def prune_expired(registry: CacheRegistry = Depends(get_cache_registry)):
    removed = registry.prune_expired_all()
    return CachePruneResponse(removed=removed, total_removed=sum(removed.values()))


@router.delete("/{store_name}", response_model=CacheClearResponse)
def clear_store(store_name: str, registry: CacheRegistry = Depends(get_cache_registry)):
    _get_store(registry, store_name).clear()
    return CacheClearResponse(cleared=[store_name])
