"""
Cache and API settings loaded from the environment.

Values come from environment variables (a local .env file is loaded first)
and are validated once at startup. Stores are never reconfigured at runtime.
"""
import os
from typing import List, Optional

from dotenv import load_dotenv
from pydantic import BaseModel, Field, ValidationError, field_validator

from profile_insights.exceptions import CacheConfigurationError

# Load environment variables from .env file
load_dotenv()

DEFAULT_PROFILE_TTL_SECONDS = 24 * 60 * 60  # 24 hours
DEFAULT_PROFILE_MAX_ENTRIES = 1000
DEFAULT_ANALYSIS_TTL_SECONDS = 10 * 60  # 10 minutes
DEFAULT_ANALYSIS_MAX_ENTRIES = 100

DEFAULT_CORS_ORIGINS = [
    "http://localhost:3000",
    "http://localhost:5173",
    "http://localhost:8080",
    "http://127.0.0.1:8000",
]


class CacheStoreSettings(BaseModel):
    ttl_seconds: float = Field(gt=0)
    max_entries: Optional[int] = Field(default=None, ge=1)


class CacheSettings(BaseModel):
    profile: CacheStoreSettings = CacheStoreSettings(
        ttl_seconds=DEFAULT_PROFILE_TTL_SECONDS,
        max_entries=DEFAULT_PROFILE_MAX_ENTRIES,
    )
    analysis: CacheStoreSettings = CacheStoreSettings(
        ttl_seconds=DEFAULT_ANALYSIS_TTL_SECONDS,
        max_entries=DEFAULT_ANALYSIS_MAX_ENTRIES,
    )
    log_level: str = "INFO"
    cors_origins: List[str] = DEFAULT_CORS_ORIGINS

    @field_validator("log_level")
    @classmethod
    def _known_log_level(cls, value: str) -> str:
        level = value.upper()
        if level not in {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}:
            raise ValueError(f"unknown log level '{value}'")
        return level


def _env_number(name: str, default, cast):
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return default
    try:
        return cast(raw)
    except ValueError as exc:
        raise CacheConfigurationError(f"{name} must be a number, got '{raw}'") from exc


def _env_max_entries(name: str, default: int) -> Optional[int]:
    # "none" disables the bound for a store
    raw = os.getenv(name)
    if raw is not None and raw.strip().lower() == "none":
        return None
    return _env_number(name, default, int)


def load_settings() -> CacheSettings:
    """
    Build settings from environment variables.

    Environment variables:
        PROFILE_CACHE_TTL_SECONDS, PROFILE_CACHE_MAX_ENTRIES,
        ANALYSIS_CACHE_TTL_SECONDS, ANALYSIS_CACHE_MAX_ENTRIES,
        LOG_LEVEL, CORS_ORIGINS (comma separated)

    Raises:
        CacheConfigurationError: If a value is malformed or out of range
    """
    cors_raw = os.getenv("CORS_ORIGINS")
    cors_origins = (
        [origin.strip() for origin in cors_raw.split(",") if origin.strip()]
        if cors_raw
        else list(DEFAULT_CORS_ORIGINS)
    )

    try:
        return CacheSettings(
            profile=CacheStoreSettings(
                ttl_seconds=_env_number("PROFILE_CACHE_TTL_SECONDS", DEFAULT_PROFILE_TTL_SECONDS, float),
                max_entries=_env_max_entries("PROFILE_CACHE_MAX_ENTRIES", DEFAULT_PROFILE_MAX_ENTRIES),
            ),
            analysis=CacheStoreSettings(
                ttl_seconds=_env_number("ANALYSIS_CACHE_TTL_SECONDS", DEFAULT_ANALYSIS_TTL_SECONDS, float),
                max_entries=_env_max_entries("ANALYSIS_CACHE_MAX_ENTRIES", DEFAULT_ANALYSIS_MAX_ENTRIES),
            ),
            log_level=os.getenv("LOG_LEVEL", "INFO"),
            cors_origins=cors_origins,
        )
    except ValidationError as exc:
        raise CacheConfigurationError(f"Invalid cache settings: {exc}") from exc
