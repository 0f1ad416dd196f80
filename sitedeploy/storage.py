"""S3 client wrapper for sitedeploy."""

from __future__ import annotations

import logging
from typing import Any, Optional

import boto3
from botocore.exceptions import BotoCoreError, ClientError

from .exceptions import (
    SiteDeployConfigError,
    SiteDeployNotFoundError,
    SiteDeployStorageError,
    SiteDeployUploadError,
)
from .utils import DEFAULT_ACL, DEFAULT_CACHE_CONTROL

logger = logging.getLogger(__name__)

# Error codes S3 uses to signal a missing object. HeadObject has no body,
# so botocore reports the bare status code there.
NOT_FOUND_CODES = frozenset({"404", "NoSuchKey", "NotFound"})


def _error_code(error: ClientError) -> str:
    return str(error.response.get("Error", {}).get("Code", ""))


class StorageClient:
    """Client for the S3 bucket that serves the site."""

    def __init__(
        self,
        bucket: Optional[str],
        region: Optional[str] = None,
        client: Any = None,
    ):
        """Initialize storage client.

        Args:
            bucket: Target bucket name
            region: AWS region of the bucket (uses the boto3 default if None)
            client: Pre-built boto3 S3 client (created lazily if not provided)
        """
        if not bucket:
            raise SiteDeployConfigError(
                "Bucket not configured. Please set SITEDEPLOY_BUCKET "
                "or pass --bucket."
            )

        self.bucket = bucket
        self.region = region
        self._client = client

    def _get_client(self) -> Any:
        """Get or create the boto3 S3 client."""
        if self._client is None:
            self._client = boto3.client("s3", region_name=self.region or None)
        return self._client

    def head_etag(self, key: str) -> str:
        """Fetch the ETag of the object stored under a key.

        Args:
            key: Object key

        Returns:
            The ETag exactly as S3 reports it (double-quoted hex digest)

        Raises:
            SiteDeployNotFoundError: If no object exists under the key
            SiteDeployStorageError: If the request fails for any other reason
        """
        try:
            response = self._get_client().head_object(Bucket=self.bucket, Key=key)
        except ClientError as e:
            code = _error_code(e)
            if code in NOT_FOUND_CODES:
                raise SiteDeployNotFoundError(
                    f"Object not found: s3://{self.bucket}/{key}", code=code
                ) from e
            raise SiteDeployStorageError(
                f"HeadObject failed for {key}: {e}", code=code
            ) from e
        except BotoCoreError as e:
            raise SiteDeployStorageError(f"HeadObject failed for {key}: {e}") from e

        return response.get("ETag", "")

    def put_object(self, key: str, body: bytes, content_type: str) -> dict:
        """Upload an object with public, long-lived caching headers.

        Args:
            key: Object key
            body: Object contents
            content_type: Content-Type header value

        Returns:
            Raw PutObject response

        Raises:
            SiteDeployUploadError: If the upload fails
        """
        logger.debug(
            "PutObject s3://%s/%s (%d bytes, %s)",
            self.bucket,
            key,
            len(body),
            content_type,
        )
        try:
            return self._get_client().put_object(
                ACL=DEFAULT_ACL,
                Body=body,
                Bucket=self.bucket,
                CacheControl=DEFAULT_CACHE_CONTROL,
                ContentType=content_type,
                Key=key,
            )
        except ClientError as e:
            raise SiteDeployUploadError(
                f"Upload failed for {key}: {e}", code=_error_code(e)
            ) from e
        except BotoCoreError as e:
            raise SiteDeployUploadError(f"Upload failed for {key}: {e}") from e
