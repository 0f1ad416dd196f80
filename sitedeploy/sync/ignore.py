"""Rules for build artifacts that are never deployed."""

import fnmatch
import logging
from pathlib import Path
from typing import Optional

logger = logging.getLogger(__name__)

# Filename suffixes of non-deployable artifacts: macOS Finder metadata and
# the license sidecars emitted by bundlers next to minified scripts.
IGNORED_SUFFIXES: tuple[str, ...] = (".DS_Store", ".js.LICENSE.txt")

# Build manifest written at the root of the build directory
MANIFEST_FILE_NAME = "asset-manifest.json"


class IgnoreRules:
    """Decides whether a file under the build directory must be skipped.

    Built-in rules always apply. Extra glob patterns are matched against the
    key (relative POSIX path) and against the bare filename, so ``*.map``
    ignores source maps at any depth and ``static/media/*`` a subtree.

    Examples:
        >>> rules = IgnoreRules(Path("/site/build"), patterns=["*.map"])
        >>> rules.is_ignored(Path("/site/build/.DS_Store"))
        True
        >>> rules.is_ignored(Path("/site/build/static/js/main.js.map"))
        True
        >>> rules.is_ignored(Path("/site/build/index.html"))
        False
    """

    def __init__(self, root: Path, patterns: Optional[list[str]] = None):
        """Initialize ignore rules.

        Args:
            root: Absolute build directory
            patterns: Extra glob patterns to ignore
        """
        self.root = root
        self.patterns = list(patterns or [])
        self.manifest_path = root / MANIFEST_FILE_NAME

    def is_ignored(self, path: Path) -> bool:
        """Check whether an absolute file path is excluded from deployment.

        Args:
            path: Absolute path of a file under the root

        Returns:
            True if the file must not be synced
        """
        if path.name.endswith(IGNORED_SUFFIXES):
            return True

        if path == self.manifest_path:
            return True

        if self.patterns:
            key = path.relative_to(self.root).as_posix()
            for pattern in self.patterns:
                if fnmatch.fnmatchcase(key, pattern) or fnmatch.fnmatchcase(
                    path.name, pattern
                ):
                    logger.debug("Ignoring %s (pattern %s)", key, pattern)
                    return True

        return False
