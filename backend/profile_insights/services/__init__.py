"""Cache-aside helpers used by route handlers."""
from .insights_cache import InsightsCacheService

__all__ = ["InsightsCacheService"]
