"""Unit tests for the S3 and CloudFront client wrappers."""

from unittest.mock import Mock, patch

import pytest
from botocore.exceptions import ClientError, EndpointConnectionError

from sitedeploy.cdn import CdnClient
from sitedeploy.exceptions import (
    SiteDeployConfigError,
    SiteDeployInvalidationError,
    SiteDeployNotFoundError,
    SiteDeployStorageError,
    SiteDeployUploadError,
)
from sitedeploy.storage import StorageClient


def _client_error(code: str, operation: str) -> ClientError:
    return ClientError({"Error": {"Code": code, "Message": code}}, operation)


class TestStorageClient:
    """Tests for StorageClient."""

    def test_init_without_bucket_raises_error(self):
        with pytest.raises(SiteDeployConfigError, match="Bucket not configured"):
            StorageClient(None)

    @patch("sitedeploy.storage.boto3")
    def test_client_created_lazily_with_region(self, mock_boto3):
        storage = StorageClient("site-bucket", region="eu-west-1")
        mock_boto3.client.assert_not_called()

        storage._get_client()

        mock_boto3.client.assert_called_once_with("s3", region_name="eu-west-1")

    def test_head_etag_returns_quoted_etag(self):
        s3 = Mock()
        s3.head_object.return_value = {"ETag": '"abc123"', "ContentLength": 3}
        storage = StorageClient("site-bucket", client=s3)

        assert storage.head_etag("index.html") == '"abc123"'
        s3.head_object.assert_called_once_with(Bucket="site-bucket", Key="index.html")

    @pytest.mark.parametrize("code", ["404", "NoSuchKey", "NotFound"])
    def test_head_etag_not_found(self, code):
        s3 = Mock()
        s3.head_object.side_effect = _client_error(code, "HeadObject")
        storage = StorageClient("site-bucket", client=s3)

        with pytest.raises(SiteDeployNotFoundError) as exc_info:
            storage.head_etag("missing.js")
        assert exc_info.value.code == code

    def test_head_etag_other_client_error(self):
        s3 = Mock()
        s3.head_object.side_effect = _client_error("403", "HeadObject")
        storage = StorageClient("site-bucket", client=s3)

        with pytest.raises(SiteDeployStorageError) as exc_info:
            storage.head_etag("index.html")
        assert not isinstance(exc_info.value, SiteDeployNotFoundError)
        assert exc_info.value.code == "403"

    def test_head_etag_connection_error(self):
        s3 = Mock()
        s3.head_object.side_effect = EndpointConnectionError(
            endpoint_url="https://s3.amazonaws.com"
        )
        storage = StorageClient("site-bucket", client=s3)

        with pytest.raises(SiteDeployStorageError):
            storage.head_etag("index.html")

    def test_put_object_sets_caching_headers(self):
        s3 = Mock()
        s3.put_object.return_value = {"ETag": '"abc"'}
        storage = StorageClient("site-bucket", client=s3)

        storage.put_object("app.js", b"code", "text/javascript; charset=utf-8")

        s3.put_object.assert_called_once_with(
            ACL="public-read",
            Body=b"code",
            Bucket="site-bucket",
            CacheControl="max-age=315360000, no-transform, public",
            ContentType="text/javascript; charset=utf-8",
            Key="app.js",
        )

    def test_put_object_failure(self):
        s3 = Mock()
        s3.put_object.side_effect = _client_error("SlowDown", "PutObject")
        storage = StorageClient("site-bucket", client=s3)

        with pytest.raises(SiteDeployUploadError, match="app.js") as exc_info:
            storage.put_object("app.js", b"code", "text/javascript")
        assert exc_info.value.code == "SlowDown"


class TestCdnClient:
    """Tests for CdnClient."""

    def test_init_without_distribution_raises_error(self):
        with pytest.raises(SiteDeployConfigError, match="Distribution ID"):
            CdnClient("")

    def test_create_invalidation(self):
        cloudfront = Mock()
        cloudfront.create_invalidation.return_value = {
            "Location": "https://cloudfront.amazonaws.com/...",
            "Invalidation": {"Id": "I2J0I21PCUYOIK", "Status": "InProgress"},
        }
        cdn = CdnClient("E2HNK8Z3X3JDVG", client=cloudfront)

        invalidation_id = cdn.create_invalidation(["/a.js", "/b.css"], "1700000000000")

        assert invalidation_id == "I2J0I21PCUYOIK"
        cloudfront.create_invalidation.assert_called_once_with(
            DistributionId="E2HNK8Z3X3JDVG",
            InvalidationBatch={
                "CallerReference": "1700000000000",
                "Paths": {"Items": ["/a.js", "/b.css"], "Quantity": 2},
            },
        )

    def test_missing_invalidation_in_response(self):
        cloudfront = Mock()
        cloudfront.create_invalidation.return_value = {}
        cdn = CdnClient("E2HNK8Z3X3JDVG", client=cloudfront)

        with pytest.raises(SiteDeployInvalidationError, match="no Invalidation"):
            cdn.create_invalidation(["/a.js"], "1")

    def test_client_error(self):
        cloudfront = Mock()
        cloudfront.create_invalidation.side_effect = _client_error(
            "AccessDenied", "CreateInvalidation"
        )
        cdn = CdnClient("E2HNK8Z3X3JDVG", client=cloudfront)

        with pytest.raises(SiteDeployInvalidationError, match="AccessDenied"):
            cdn.create_invalidation(["/a.js"], "1")
