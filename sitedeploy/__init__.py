"""sitedeploy - deploy a static site build to S3 and invalidate CloudFront."""

__version__ = "0.1.0"

from .cdn import CdnClient  # noqa: E402
from .exceptions import (  # noqa: E402
    SiteDeployConfigError,
    SiteDeployError,
    SiteDeployInvalidationError,
    SiteDeployNotFoundError,
    SiteDeployScanError,
    SiteDeployStorageError,
    SiteDeployUploadError,
)
from .storage import StorageClient  # noqa: E402
from .utils import calculate_etag  # noqa: E402

__all__ = [
    "__version__",
    "CdnClient",
    "StorageClient",
    "SiteDeployError",
    "SiteDeployConfigError",
    "SiteDeployInvalidationError",
    "SiteDeployNotFoundError",
    "SiteDeployScanError",
    "SiteDeployStorageError",
    "SiteDeployUploadError",
    "calculate_etag",
]
