"""Exception hierarchy for sitedeploy."""

from typing import Optional


class SiteDeployError(Exception):
    """Base exception for all sitedeploy errors."""


class SiteDeployConfigError(SiteDeployError):
    """Raised when required configuration is missing or invalid."""


class SiteDeployScanError(SiteDeployError):
    """Raised when the build directory cannot be enumerated."""


class SiteDeployStorageError(SiteDeployError):
    """Raised when a call to the object store fails."""

    def __init__(self, message: str, code: Optional[str] = None):
        super().__init__(message)
        self.code = code


class SiteDeployNotFoundError(SiteDeployStorageError):
    """Raised when an object does not exist in the bucket."""


class SiteDeployUploadError(SiteDeployStorageError):
    """Raised when an object could not be written to the bucket."""


class SiteDeployInvalidationError(SiteDeployError):
    """Raised when a CDN invalidation request fails."""
