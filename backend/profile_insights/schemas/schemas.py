from pydantic import BaseModel
from typing import Dict, Optional


# =========================
# CACHE SCHEMAS
# =========================
class CacheStoreStats(BaseModel):
    name: str
    size: int
    max_entries: Optional[int] = None
    ttl_seconds: float
    hits: int
    misses: int
    hit_rate: float
    oldest_key: Optional[str] = None
    newest_key: Optional[str] = None


class CacheClearResponse(BaseModel):
    cleared: list[str]


class CachePruneResponse(BaseModel):
    removed: Dict[str, int]
    total_removed: int
