"""Build directory scanning for deploy operations."""

import logging
import mimetypes
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from ..exceptions import SiteDeployScanError
from ..utils import DEFAULT_CONTENT_TYPE
from .ignore import IgnoreRules

logger = logging.getLogger(__name__)

# Types whose registered charset is UTF-8, besides every text/* type
UTF8_CONTENT_TYPES = frozenset(
    {
        "application/javascript",
        "application/json",
        "application/manifest+json",
    }
)

# Build outputs the stdlib table maps differently from browsers and CDNs
WEB_CONTENT_TYPES = {
    ".map": "application/json",
    ".webmanifest": "application/manifest+json",
    ".xml": "application/xml",
}

for _extension, _mime_type in WEB_CONTENT_TYPES.items():
    mimetypes.add_type(_mime_type, _extension)


def get_content_type(filename: str) -> str:
    """Determine the Content-Type header for a file.

    Args:
        filename: File name or path

    Returns:
        MIME type, with a ``charset=utf-8`` suffix for textual types

    Examples:
        >>> get_content_type("index.html")
        'text/html; charset=utf-8'
        >>> get_content_type("logo.png")
        'image/png'
        >>> get_content_type("main.js.map")
        'application/json; charset=utf-8'
        >>> get_content_type("sitemap.xml")
        'application/xml'
        >>> get_content_type("blob.unknownext")
        'application/octet-stream'
    """
    mime_type, _ = mimetypes.guess_type(filename, strict=False)
    if not mime_type:
        return DEFAULT_CONTENT_TYPE

    if mime_type.startswith("text/") or mime_type in UTF8_CONTENT_TYPES:
        return f"{mime_type}; charset=utf-8"
    return mime_type


@dataclass(frozen=True)
class Asset:
    """Represents a deployable file in the build directory."""

    key: str
    """Bucket key: relative path with forward slashes and no leading slash"""

    content_type: str
    """Content-Type header sent with the upload"""

    path: Path
    """Absolute path to the file"""

    ignored: bool = False
    """Whether the file is excluded from deployment"""

    def read_contents(self) -> bytes:
        """Read the full file contents."""
        return self.path.read_bytes()


class AssetScanner:
    """Enumerates the files of a build directory as assets.

    Directory entries are visited in sorted order so that the same build
    always produces the same asset sequence.

    Examples:
        >>> scanner = AssetScanner(ignore_patterns=["*.map"])
        >>> assets = scanner.scan(Path("build"))
        >>> [a.key for a in assets if not a.ignored]
        ['index.html', 'static/js/main.js']
    """

    def __init__(self, ignore_patterns: Optional[list[str]] = None):
        """Initialize asset scanner.

        Args:
            ignore_patterns: Extra glob patterns to mark as ignored
        """
        self.ignore_patterns = ignore_patterns or []

    def scan(self, build_dir: Path) -> list[Asset]:
        """Recursively enumerate all regular files under a directory.

        Args:
            build_dir: Root of the build output

        Returns:
            List of assets in enumeration order

        Raises:
            SiteDeployScanError: If any entry cannot be read. No partial
                result is returned.
        """
        root = build_dir.resolve()
        rules = IgnoreRules(root, self.ignore_patterns)
        assets: list[Asset] = []

        try:
            self._scan_directory(root, root, rules, assets)
        except OSError as e:
            raise SiteDeployScanError(f"Failed to scan {root}: {e}") from e

        logger.debug("Found %d asset(s) under %s", len(assets), root)
        return assets

    def _scan_directory(
        self,
        directory: Path,
        root: Path,
        rules: IgnoreRules,
        output: list[Asset],
    ) -> None:
        for item in sorted(directory.iterdir(), key=lambda p: p.name):
            if item.is_dir():
                self._scan_directory(item, root, rules, output)
            elif item.is_file():
                output.append(
                    Asset(
                        key=item.relative_to(root).as_posix(),
                        content_type=get_content_type(item.name),
                        path=item,
                        ignored=rules.is_ignored(item),
                    )
                )
            else:
                logger.debug("Skipping non-regular file %s", item)
