"""Tests for the InvalidationTrigger."""

from unittest.mock import Mock

import pytest

from sitedeploy.cdn import CdnClient
from sitedeploy.exceptions import SiteDeployInvalidationError
from sitedeploy.output import OutputFormatter
from sitedeploy.sync.invalidation import InvalidationTrigger, timestamp_reference


@pytest.fixture
def mock_cdn():
    """Create a mock CDN client."""
    cdn = Mock(spec=CdnClient)
    cdn.create_invalidation.return_value = "I2J0I21PCUYOIK"
    return cdn


@pytest.fixture
def mock_output():
    """Create a mock output formatter."""
    output = Mock(spec=OutputFormatter)
    output.quiet = True
    return output


class TestInvalidationTrigger:
    """Test InvalidationTrigger functionality."""

    def test_empty_keys_makes_no_call(self, mock_cdn, mock_output):
        trigger = InvalidationTrigger(mock_cdn, mock_output)

        assert trigger.invalidate([]) is None
        mock_cdn.create_invalidation.assert_not_called()

    def test_paths_are_prefixed_with_slash(self, mock_cdn, mock_output):
        trigger = InvalidationTrigger(
            mock_cdn, mock_output, reference_factory=lambda: "ref-1"
        )

        invalidation_id = trigger.invalidate(["app.js", "static/css/main.css"])

        assert invalidation_id == "I2J0I21PCUYOIK"
        mock_cdn.create_invalidation.assert_called_once_with(
            ["/app.js", "/static/css/main.css"], "ref-1"
        )

    def test_reference_is_fresh_per_invocation(self, mock_cdn, mock_output):
        references = iter(["ref-1", "ref-2"])
        trigger = InvalidationTrigger(
            mock_cdn, mock_output, reference_factory=lambda: next(references)
        )

        trigger.invalidate(["a.js"])
        trigger.invalidate(["b.js"])

        used = [c.args[1] for c in mock_cdn.create_invalidation.call_args_list]
        assert used == ["ref-1", "ref-2"]

    def test_failure_is_reported_not_raised(self, mock_cdn, mock_output):
        mock_cdn.create_invalidation.side_effect = SiteDeployInvalidationError(
            "Invalidation failed: TooManyInvalidationsInProgress"
        )
        trigger = InvalidationTrigger(mock_cdn, mock_output)

        assert trigger.invalidate(["app.js"]) is None
        mock_output.error.assert_called_once()
        assert "TooManyInvalidationsInProgress" in mock_output.error.call_args[0][0]


class TestTimestampReference:
    """Tests for timestamp_reference."""

    def test_is_millisecond_timestamp(self):
        reference = timestamp_reference()
        assert reference.isdigit()
        assert len(reference) >= 13
