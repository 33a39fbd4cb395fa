"""Exceptions raised by the profile insights backend."""


class CacheConfigurationError(ValueError):
    """Raised when a cache store or the cache settings are misconfigured."""
