"""Profile Insights backend: named in-memory caches behind the analytics routes."""
