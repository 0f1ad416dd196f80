"""Utility functions for sitedeploy."""

import hashlib
import time
from typing import Optional

# =============================================================================
# Constants for upload operations
# =============================================================================

# Assets are served with far-future caching; new content ships under new keys
DEFAULT_CACHE_CONTROL: str = "max-age=315360000, no-transform, public"

DEFAULT_ACL: str = "public-read"

DEFAULT_CONTENT_TYPE: str = "application/octet-stream"

# Build directories modified more recently than this are considered fresh
RECENT_BUILD_SECONDS: int = 3 * 60


# =============================================================================
# Hash calculation utilities
# =============================================================================


def calculate_etag(contents: bytes) -> str:
    """Calculate the S3 ETag for an object body.

    For single-part PutObject uploads, S3 reports the MD5 digest of the body
    as lowercase hex wrapped in double quotes.

    Args:
        contents: Object body

    Returns:
        Quoted hex MD5 digest

    Examples:
        >>> calculate_etag(b"")
        '"d41d8cd98f00b204e9800998ecf8427e"'
        >>> calculate_etag(b"hello")
        '"5d41402abc4b2a76b9719d911017c592"'
    """
    return f'"{hashlib.md5(contents).hexdigest()}"'


# =============================================================================
# Time formatting utilities
# =============================================================================


def _pluralize(count: int, unit: str) -> str:
    return f"1 {unit} ago" if count == 1 else f"{count} {unit}s ago"


def format_relative_time(
    timestamp: float, now: Optional[float] = None
) -> tuple[str, bool]:
    """Describe how long ago a timestamp was.

    Args:
        timestamp: Unix timestamp to describe
        now: Reference time (defaults to the current time)

    Returns:
        Tuple of (label, is_recent) where is_recent is True when the
        timestamp is less than three minutes old

    Examples:
        >>> format_relative_time(100.0, now=100.5)
        ('just now', True)
        >>> format_relative_time(0.0, now=90.0)
        ('2 minutes ago', True)
        >>> format_relative_time(0.0, now=7200.0)
        ('2 hours ago', False)
    """
    if now is None:
        now = time.time()
    duration = now - timestamp

    one_minute = 60
    one_hour = 60 * one_minute
    one_day = 24 * one_hour

    if duration < 1:
        return "just now", True

    if duration < one_minute:
        return _pluralize(round(duration), "second"), True

    if duration < one_hour:
        minutes = round(duration / one_minute)
        is_recent = minutes * one_minute < RECENT_BUILD_SECONDS
        return _pluralize(minutes, "minute"), is_recent

    if duration < one_day:
        return _pluralize(round(duration / one_hour), "hour"), False

    return _pluralize(round(duration / one_day), "day"), False
