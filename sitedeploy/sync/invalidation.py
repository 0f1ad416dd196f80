"""CDN invalidation for uploaded assets."""

import logging
import time
from typing import Callable, Optional

from ..cdn import CdnClient
from ..exceptions import SiteDeployInvalidationError
from ..output import OutputFormatter

logger = logging.getLogger(__name__)


def timestamp_reference() -> str:
    """Build a caller reference from the current time in milliseconds."""
    return str(int(time.time() * 1000))


class InvalidationTrigger:
    """Evicts the CDN's cached copies of freshly uploaded keys.

    Invalidation is independent from the upload phase: a failure here is
    reported but never undoes or repeats uploads. The CDN keeps serving the
    stale copies until they expire or a later run invalidates them.
    """

    def __init__(
        self,
        cdn: CdnClient,
        output: Optional[OutputFormatter] = None,
        reference_factory: Callable[[], str] = timestamp_reference,
    ):
        """Initialize invalidation trigger.

        Args:
            cdn: CloudFront client
            output: Output formatter for reporting failures
            reference_factory: Produces a caller reference per request
        """
        self.cdn = cdn
        self.output = output or OutputFormatter()
        self.reference_factory = reference_factory

    def invalidate(self, keys: list[str]) -> Optional[str]:
        """Request invalidation of the public paths of the given keys.

        Args:
            keys: Bucket keys uploaded in this run

        Returns:
            Invalidation ID, or None if nothing was requested or the
            request failed
        """
        if not keys:
            logger.debug("No keys to invalidate")
            return None

        paths = [f"/{key}" for key in keys]
        try:
            invalidation_id = self.cdn.create_invalidation(
                paths, self.reference_factory()
            )
        except SiteDeployInvalidationError as e:
            logger.warning("Invalidation of %d path(s) failed: %s", len(paths), e)
            self.output.error(str(e))
            return None

        logger.info(
            "Created invalidation %s for %d path(s)", invalidation_id, len(paths)
        )
        return invalidation_id
