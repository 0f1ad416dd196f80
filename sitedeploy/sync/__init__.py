"""Sync engine for sitedeploy - change detection, upload and invalidation."""

from .comparator import FileComparator, SyncAction, SyncDecision
from .engine import SyncEngine
from .ignore import IGNORED_SUFFIXES, MANIFEST_FILE_NAME, IgnoreRules
from .invalidation import InvalidationTrigger
from .remote import ABSENT, ProbeErrorPolicy, RemoteMetadata, RemoteStateProber
from .scanner import Asset, AssetScanner, get_content_type
from .state import AssetState, SyncResult

__all__ = [
    "SyncEngine",
    "SyncResult",
    "AssetState",
    "Asset",
    "AssetScanner",
    "get_content_type",
    "FileComparator",
    "SyncAction",
    "SyncDecision",
    "IgnoreRules",
    "IGNORED_SUFFIXES",
    "MANIFEST_FILE_NAME",
    "InvalidationTrigger",
    "RemoteStateProber",
    "RemoteMetadata",
    "ProbeErrorPolicy",
    "ABSENT",
]
