"""Remote state probing for deploy operations."""

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Optional

from ..exceptions import SiteDeployNotFoundError, SiteDeployStorageError
from ..storage import StorageClient

logger = logging.getLogger(__name__)


class ProbeErrorPolicy(str, Enum):
    """How to treat probe failures other than "object not found"."""

    UPLOAD = "upload"
    """Treat the object as absent, forcing an upload attempt"""

    ABORT = "abort"
    """Propagate the error so the run stops"""


@dataclass(frozen=True)
class RemoteMetadata:
    """Metadata of the object currently stored under a key."""

    etag: Optional[str] = None
    """Stored ETag, or None if no object exists"""

    @property
    def exists(self) -> bool:
        return self.etag is not None


ABSENT = RemoteMetadata()


class RemoteStateProber:
    """Looks up the stored ETag for one key at a time.

    Results are never cached: every call asks the bucket.
    """

    def __init__(
        self,
        storage: StorageClient,
        error_policy: ProbeErrorPolicy = ProbeErrorPolicy.UPLOAD,
    ):
        """Initialize remote state prober.

        Args:
            storage: Storage client for the target bucket
            error_policy: Handling of failures other than "not found"
        """
        self.storage = storage
        self.error_policy = error_policy

    def probe(self, key: str) -> RemoteMetadata:
        """Fetch the metadata of the object stored under a key.

        Args:
            key: Bucket key

        Returns:
            RemoteMetadata; ``ABSENT`` if the object does not exist, or if
            the lookup failed under the UPLOAD policy

        Raises:
            SiteDeployStorageError: If the lookup failed under the ABORT policy
        """
        try:
            etag = self.storage.head_etag(key)
        except SiteDeployNotFoundError:
            logger.debug("No remote object for %s", key)
            return ABSENT
        except SiteDeployStorageError as e:
            if self.error_policy == ProbeErrorPolicy.ABORT:
                raise
            logger.warning("Could not probe %s, treating as absent: %s", key, e)
            return ABSENT

        return RemoteMetadata(etag=etag)
