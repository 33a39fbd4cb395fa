"""
Profile Insights FastAPI REST API
Composition root: builds the cache registry and mounts the operational cache router
"""

import logging
from typing import Optional

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from profile_insights.api import cache
from profile_insights.cache.registry import CacheRegistry, build_cache_registry
from profile_insights.config.settings import CacheSettings, load_settings

logger = logging.getLogger(__name__)


def create_app(
    settings: Optional[CacheSettings] = None,
    registry: Optional[CacheRegistry] = None,
) -> FastAPI:
    """Build the API with its own cache registry held in app.state."""
    settings = settings or load_settings()
    logging.basicConfig(
        level=settings.log_level,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )

    app = FastAPI(
        title="Profile Insights API",
        description="LinkedIn profile analytics backend - cache operations",
        version="1.0.0",
    )

    # CORS config for frontend
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.state.cache_registry = registry or build_cache_registry(settings)
    logger.info(f"Cache stores ready: {', '.join(app.state.cache_registry.names())}")

    app.include_router(cache.router)

    @app.get("/")
    def root():
        """API info"""
        return {
            "message": "Profile Insights API is running",
            "version": "1.0.0",
            "status": "operational",
            "docs": "/docs",
            "endpoints": {
                "cache_stats": "/api/cache/stats",
                "cache_store": "/api/cache/{store_name}",
                "cache_cleanup": "/api/cache/cleanup",
                "cache_prune": "/api/cache/prune",
            },
        }

    @app.get("/health")
    def health_check():
        """Simple health endpoint"""
        return {"status": "healthy", "cache_stores": app.state.cache_registry.names()}

    return app


app = create_app()


# Run with:
#   uvicorn main:app --reload --port 8000
