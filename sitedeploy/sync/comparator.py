"""Change detection logic for deploy operations."""

from dataclasses import dataclass
from enum import Enum
from typing import Optional

from .remote import RemoteMetadata
from .scanner import Asset


class SyncAction(str, Enum):
    """Actions that can be taken for an asset."""

    UPLOAD = "upload"
    """Write the local file to the bucket"""

    SKIP = "skip"
    """Stored object already matches (no action needed)"""

    IGNORE = "ignore"
    """Asset is excluded from deployment"""


@dataclass
class SyncDecision:
    """Represents a decision about how to sync an asset."""

    action: SyncAction
    """Action to take"""

    reason: str
    """Human-readable reason for this decision"""

    asset: Asset
    """Asset the decision applies to"""

    local_etag: Optional[str] = None
    """ETag computed from the local contents"""

    remote_etag: Optional[str] = None
    """ETag of the stored object, if any"""


class FileComparator:
    """Compares local content hashes against stored ETags."""

    def check_ignored(self, asset: Asset) -> Optional[SyncDecision]:
        """Return an IGNORE decision for excluded assets, None otherwise."""
        if asset.ignored:
            return SyncDecision(
                action=SyncAction.IGNORE,
                reason="Matches an ignore rule",
                asset=asset,
            )
        return None

    def compare(
        self, asset: Asset, local_etag: str, remote: RemoteMetadata
    ) -> SyncDecision:
        """Decide whether an asset must be uploaded.

        Args:
            asset: Asset being synced
            local_etag: ETag computed from the local contents
            remote: Metadata of the stored object

        Returns:
            SyncDecision with action UPLOAD or SKIP
        """
        if not remote.exists:
            return SyncDecision(
                action=SyncAction.UPLOAD,
                reason="New asset",
                asset=asset,
                local_etag=local_etag,
            )

        if remote.etag == local_etag:
            return SyncDecision(
                action=SyncAction.SKIP,
                reason="Content unchanged (ETag match)",
                asset=asset,
                local_etag=local_etag,
                remote_etag=remote.etag,
            )

        return SyncDecision(
            action=SyncAction.UPLOAD,
            reason="Content changed (ETag mismatch)",
            asset=asset,
            local_etag=local_etag,
            remote_etag=remote.etag,
        )
