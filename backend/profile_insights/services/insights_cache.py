from __future__ import annotations

import logging
from typing import Any, Callable, Iterable, Optional

from profile_insights.cache.cache_key import (
    KEY_DELIMITER,
    analysis_cache_key,
    generate_key,
    normalize_profile_id,
    profile_cache_key,
)
from profile_insights.cache.registry import ANALYSIS_STORE, PROFILE_STORE, CacheRegistry

logger = logging.getLogger(__name__)

PROFILE_SECTIONS = ("overview", "insights", "activity", "visual")
ANALYSIS_TYPES = ("skills", "compensation", "competitive", "recommendations", "trends")


class InsightsCacheService:
    """Cache-aside access to the profile and analysis stores for route handlers.

    Fetching and computing payloads belongs to the caller; this service only
    decides whether the callable has to run.
    """

    def __init__(self, registry: CacheRegistry) -> None:
        self.profiles = registry.get(PROFILE_STORE)
        self.analyses = registry.get(ANALYSIS_STORE)

    def get_profile(self, profile_id: str, fetch: Callable[[], Any], section: str = "overview") -> Any:
        """Return cached profile data for a section, calling fetch() on a miss.

        Raises:
            ValueError: If section is not one of PROFILE_SECTIONS
        """
        if section not in PROFILE_SECTIONS:
            raise ValueError(f"Unknown profile section '{section}', expected one of {PROFILE_SECTIONS}")
        key = profile_cache_key(profile_id, section)
        return self.profiles.get_or_set(key, fetch)

    def get_analysis(
        self,
        profile_id: str,
        analysis_type: str,
        compute: Callable[[], Any],
        qualifiers: Iterable[object] = (),
        ttl_seconds: Optional[float] = None,
    ) -> Any:
        """Return a cached analysis result, calling compute() on a miss.

        Qualifiers distinguish variants of the same analysis (region, seniority).

        Raises:
            ValueError: If analysis_type is not one of ANALYSIS_TYPES
        """
        if analysis_type not in ANALYSIS_TYPES:
            raise ValueError(f"Unknown analysis type '{analysis_type}', expected one of {ANALYSIS_TYPES}")
        key = analysis_cache_key(profile_id, analysis_type, *qualifiers)
        return self.analyses.get_or_set(key, compute, ttl_seconds=ttl_seconds)

    def invalidate_profile(self, profile_id: str) -> int:
        """Drop every cached profile section and analysis for a profile.

        get_profile and get_analysis only accept the known sections and
        analysis types, so matching those covers every entry for the profile
        while "jane" does not take "jane-doe" entries with it. Qualified
        analysis keys are matched by prefix and share the delimiter limitation
        of generate_key.

        Returns:
            Number of entries removed
        """
        slug = normalize_profile_id(profile_id)
        removed = 0

        for section in PROFILE_SECTIONS:
            if self.profiles.delete(generate_key(PROFILE_STORE, slug, section)):
                removed += 1

        for analysis_type in ANALYSIS_TYPES:
            base = generate_key(ANALYSIS_STORE, slug, analysis_type)
            for key in self.analyses.keys():
                if key == base or key.startswith(base + KEY_DELIMITER):
                    if self.analyses.delete(key):
                        removed += 1

        logger.info(f"Invalidated {removed} cached entries for profile '{slug}'")
        return removed
