"""Unit tests for utility functions."""

import hashlib

from sitedeploy.utils import calculate_etag, format_relative_time


class TestCalculateEtag:
    """Tests for calculate_etag function."""

    def test_known_values(self):
        """Test ETag calculation with known MD5 digests."""
        assert calculate_etag(b"") == '"d41d8cd98f00b204e9800998ecf8427e"'
        assert calculate_etag(b"hello") == '"5d41402abc4b2a76b9719d911017c592"'

    def test_quoted_lowercase_hex(self):
        """Test the ETag is a double-quoted lowercase hex digest."""
        etag = calculate_etag(b"<html></html>")
        assert etag.startswith('"') and etag.endswith('"')
        digest = etag[1:-1]
        assert digest == hashlib.md5(b"<html></html>").hexdigest()
        assert digest == digest.lower()
        assert len(digest) == 32

    def test_different_content_different_etag(self):
        """Test that changed content changes the ETag."""
        assert calculate_etag(b"v1") != calculate_etag(b"v2")


class TestFormatRelativeTime:
    """Tests for format_relative_time function."""

    def test_just_now(self):
        assert format_relative_time(100.0, now=100.4) == ("just now", True)

    def test_seconds(self):
        assert format_relative_time(0.0, now=1.0) == ("1 second ago", True)
        assert format_relative_time(0.0, now=42.0) == ("42 seconds ago", True)

    def test_minutes_recent_below_three(self):
        """Builds younger than three minutes are recent."""
        assert format_relative_time(0.0, now=60.0) == ("1 minute ago", True)
        assert format_relative_time(0.0, now=120.0) == ("2 minutes ago", True)

    def test_minutes_stale_from_three(self):
        assert format_relative_time(0.0, now=180.0) == ("3 minutes ago", False)
        assert format_relative_time(0.0, now=45 * 60.0) == ("45 minutes ago", False)

    def test_hours(self):
        assert format_relative_time(0.0, now=3600.0) == ("1 hour ago", False)
        assert format_relative_time(0.0, now=5 * 3600.0) == ("5 hours ago", False)

    def test_days(self):
        assert format_relative_time(0.0, now=86400.0) == ("1 day ago", False)
        assert format_relative_time(0.0, now=10 * 86400.0) == ("10 days ago", False)

    def test_defaults_to_current_time(self):
        """Test that omitting now uses the current time."""
        import time

        label, is_recent = format_relative_time(time.time())
        assert label == "just now"
        assert is_recent is True
