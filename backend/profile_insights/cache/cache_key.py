"""Cache key generation and validation logic."""
import re

KEY_DELIMITER = "-"

_VALID_KEY_RE = re.compile(r"[A-Za-z0-9-]+")
_NON_SLUG_RE = re.compile(r"[^a-z0-9]+")
_LINKEDIN_PATH_RE = re.compile(r"/in/([^/?#]+)", re.IGNORECASE)


def generate_key(category: str, *parts: object) -> str:
    """
    Build a cache key from a category and ordered parts.

    Parts are converted with str() and joined with "-". The result is
    deterministic and order-sensitive. A part that itself contains "-" can
    collide with a different split of the same characters, so callers should
    pass parts that are free of the delimiter (see normalize_profile_id).

    Args:
        category: Key namespace (e.g., "profile", "analysis")
        *parts: Remaining key components, in order

    Returns:
        Cache key string

    Raises:
        ValueError: If category is empty

    Example:
        >>> generate_key("profile", "user1", "tech")
        "profile-user1-tech"
    """
    if not category:
        raise ValueError("Cache key category must not be empty")
    return KEY_DELIMITER.join([str(category), *(str(part) for part in parts)])


def is_valid_key(key: str) -> bool:
    """
    Check that a key is non-empty and contains only letters, digits and hyphens.

    Advisory only: stores do not validate keys themselves.

    Example:
        >>> is_valid_key("valid-key-123")
        True
        >>> is_valid_key("key with spaces")
        False
    """
    if not isinstance(key, str):
        return False
    return _VALID_KEY_RE.fullmatch(key) is not None


def normalize_profile_id(identifier: str) -> str:
    """
    Turn a LinkedIn profile URL or username into a key-safe slug.

    Example:
        >>> normalize_profile_id("https://www.linkedin.com/in/Jane-Doe/")
        "jane-doe"
        >>> normalize_profile_id("jane_doe")
        "jane-doe"
    """
    raw = str(identifier).strip()
    match = _LINKEDIN_PATH_RE.search(raw)
    if match:
        raw = match.group(1)
    slug = _NON_SLUG_RE.sub(KEY_DELIMITER, raw.lower()).strip(KEY_DELIMITER)
    if not slug:
        raise ValueError(f"Cannot derive a profile id from {identifier!r}")
    return slug


def profile_cache_key(profile_id: str, section: str = "overview") -> str:
    """
    Generate a cache key for raw profile data.

    Example:
        >>> profile_cache_key("https://linkedin.com/in/jane-doe", "activity")
        "profile-jane-doe-activity"
    """
    return generate_key("profile", normalize_profile_id(profile_id), section)


def analysis_cache_key(profile_id: str, analysis_type: str, *qualifiers: object) -> str:
    """
    Generate a cache key for a derived analysis result.

    Example:
        >>> analysis_cache_key("jane-doe", "compensation", "us", "senior")
        "analysis-jane-doe-compensation-us-senior"
    """
    return generate_key("analysis", normalize_profile_id(profile_id), analysis_type, *qualifiers)
