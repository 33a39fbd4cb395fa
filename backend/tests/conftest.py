import sys
from pathlib import Path

import pytest

# Ensure backend root is on sys.path for `import profile_insights` and `import main`
ROOT = Path(__file__).resolve().parent.parent
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from profile_insights.cache import build_cache_registry
from profile_insights.config.settings import CacheSettings, CacheStoreSettings
from fake_clock import FakeClock


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def cache_settings():
    return CacheSettings(
        profile=CacheStoreSettings(ttl_seconds=24 * 60 * 60, max_entries=1000),
        analysis=CacheStoreSettings(ttl_seconds=600, max_entries=100),
    )


@pytest.fixture
def registry(cache_settings, clock):
    """Fresh profile/analysis registry per test."""
    return build_cache_registry(cache_settings, clock=clock)
