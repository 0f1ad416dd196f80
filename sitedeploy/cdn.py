"""CloudFront client wrapper for sitedeploy."""

from __future__ import annotations

import logging
from typing import Any, Optional

import boto3
from botocore.exceptions import BotoCoreError, ClientError

from .exceptions import SiteDeployConfigError, SiteDeployInvalidationError

logger = logging.getLogger(__name__)


class CdnClient:
    """Client for the CloudFront distribution in front of the bucket."""

    def __init__(
        self,
        distribution_id: Optional[str],
        region: Optional[str] = None,
        client: Any = None,
    ):
        if not distribution_id:
            raise SiteDeployConfigError(
                "Distribution ID not configured. Please set "
                "SITEDEPLOY_DISTRIBUTION_ID or pass --distribution-id."
            )

        self.distribution_id = distribution_id
        self.region = region
        self._client = client

    def _get_client(self) -> Any:
        if self._client is None:
            self._client = boto3.client("cloudfront", region_name=self.region or None)
        return self._client

    def create_invalidation(self, paths: list[str], caller_reference: str) -> str:
        """Request eviction of cached copies of the given paths.

        Args:
            paths: Public paths, each starting with "/"
            caller_reference: Token unique per request, used by CloudFront
                to deduplicate retried submissions

        Returns:
            The invalidation ID

        Raises:
            SiteDeployInvalidationError: If the request fails or the response
                carries no invalidation
        """
        logger.debug(
            "CreateInvalidation %s for %d path(s), reference %s",
            self.distribution_id,
            len(paths),
            caller_reference,
        )
        try:
            response = self._get_client().create_invalidation(
                DistributionId=self.distribution_id,
                InvalidationBatch={
                    "CallerReference": caller_reference,
                    "Paths": {
                        "Items": paths,
                        "Quantity": len(paths),
                    },
                },
            )
        except (ClientError, BotoCoreError) as e:
            raise SiteDeployInvalidationError(f"Invalidation failed: {e}") from e

        invalidation = response.get("Invalidation")
        if not invalidation or not invalidation.get("Id"):
            logger.debug("Unexpected CreateInvalidation response: %r", response)
            raise SiteDeployInvalidationError(
                "Created invalidation, but the response defined no Invalidation"
            )

        return invalidation["Id"]
