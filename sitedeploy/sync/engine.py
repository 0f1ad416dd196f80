"""Core sync engine for deploying a build directory."""

import logging
import time
from typing import Callable, Optional

from ..exceptions import SiteDeployStorageError
from ..storage import StorageClient
from ..utils import calculate_etag
from .comparator import FileComparator, SyncAction
from .remote import RemoteStateProber
from .scanner import Asset
from .state import AssetState, SyncResult

logger = logging.getLogger(__name__)

AssetReporter = Callable[[Asset, AssetState], None]


def _no_report(asset: Asset, state: AssetState) -> None:
    pass


class SyncEngine:
    """Uploads changed assets one at a time, stopping at the first failure.

    The bucket is the only source of truth for what is already deployed:
    every asset's local ETag is compared against a fresh HeadObject, so a run
    is correct regardless of earlier runs.
    """

    def __init__(
        self,
        storage: StorageClient,
        prober: Optional[RemoteStateProber] = None,
        reporter: Optional[AssetReporter] = None,
        comparator: Optional[FileComparator] = None,
    ):
        """Initialize sync engine.

        Args:
            storage: Storage client for the target bucket
            prober: Remote state prober (defaults to one over ``storage``
                with the UPLOAD error policy)
            reporter: Called with (asset, state) on every state transition
            comparator: Change detection logic
        """
        self.storage = storage
        self.prober = prober or RemoteStateProber(storage)
        self.reporter = reporter or _no_report
        self.comparator = comparator or FileComparator()

    def run(self, assets: list[Asset], dry_run: bool = False) -> SyncResult:
        """Sync assets to the bucket in the given order.

        Args:
            assets: Assets in enumeration order
            dry_run: If True, report what would be uploaded without uploading

        Returns:
            SyncResult. When an asset fails, the result is marked aborted and
            no later asset is probed or uploaded.

        Examples:
            >>> engine = SyncEngine(StorageClient("my-bucket"))
            >>> result = engine.run(AssetScanner().scan(Path("build")))
            >>> print(f"Uploaded {len(result.uploaded)} asset(s)")
        """
        result = SyncResult()
        start_time = time.time()

        for asset in assets:
            ignored = self.comparator.check_ignored(asset)
            if ignored is not None:
                logger.debug("%s: %s", asset.key, ignored.reason)
                self._finish(result, asset, AssetState.IGNORED)
                continue

            try:
                contents = asset.read_contents()
                decision = self.comparator.compare(
                    asset,
                    calculate_etag(contents),
                    self.prober.probe(asset.key),
                )
            except (OSError, SiteDeployStorageError) as e:
                logger.debug("Failed to check %s: %s", asset.key, e)
                return self._abort(result, asset, e)

            logger.debug(
                "%s: %s (local %s, remote %s)",
                decision.asset.key,
                decision.reason,
                decision.local_etag,
                decision.remote_etag,
            )

            if decision.action == SyncAction.SKIP:
                self._finish(result, asset, AssetState.SKIPPED)
                continue

            if dry_run:
                self._finish(result, asset, AssetState.PLANNED)
                continue

            self.reporter(asset, AssetState.UPLOADING)
            try:
                self.storage.put_object(asset.key, contents, asset.content_type)
            except SiteDeployStorageError as e:
                logger.debug("Failed to upload %s: %s", asset.key, e)
                return self._abort(result, asset, e)

            self._finish(result, asset, AssetState.UPLOADED)

        logger.debug(
            "Sync of %d asset(s) took %.2fs", len(assets), time.time() - start_time
        )
        return result

    def _finish(self, result: SyncResult, asset: Asset, state: AssetState) -> None:
        result.record(asset.key, state)
        self.reporter(asset, state)

    def _abort(
        self, result: SyncResult, asset: Asset, error: Exception
    ) -> SyncResult:
        self._finish(result, asset, AssetState.ERROR)
        result.aborted = True
        result.failed_key = asset.key
        result.error = error
        return result
