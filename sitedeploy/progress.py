"""Per-asset status lines for deploy runs.

Each asset gets one line. When the same asset changes state again (for
example uploading -> uploaded) its line is rewritten in place on terminals;
any other asset starts a new line.
"""

from typing import Optional

from rich.console import Console
from rich.control import Control, ControlType
from rich.text import Text

from .sync.scanner import Asset
from .sync.state import AssetState

# (badge, badge style, key style) per state
_BADGES: dict[AssetState, tuple[str, str, str]] = {
    AssetState.ERROR: ("    ERROR ", "bold on #cd5a68", ""),
    AssetState.SKIPPED: ("  SKIPPED ", "bold on #394253", "dim"),
    AssetState.UPLOADED: (" UPLOADED ", "bold #000000 on #9cbf87", ""),
    AssetState.UPLOADING: ("WORKING.. ", "bold #000000 on #f1ca81", ""),
    AssetState.IGNORED: ("  IGNORED ", "bold", "dim"),
    AssetState.PLANNED: ("  PLANNED ", "bold #000000 on #81a8f1", ""),
}

ERASE_LAST_LINE = Control(
    (ControlType.CURSOR_UP, 1),
    (ControlType.ERASE_IN_LINE, 2),
    ControlType.CARRIAGE_RETURN,
)


def format_asset_line(asset: Asset, state: AssetState) -> Text:
    """Build the status line for an asset in a given state."""
    badge, badge_style, key_style = _BADGES[state]
    return Text.assemble((badge, badge_style), " ", (asset.key, key_style))


class AssetStatusReporter:
    """Renders asset state transitions to a console.

    The reporter only remembers which asset it wrote last. It has no
    influence on the sync run it observes.
    """

    def __init__(self, console: Optional[Console] = None, quiet: bool = False):
        """Initialize the reporter.

        Args:
            console: Rich console to write to (defaults to stdout)
            quiet: Suppress all status lines
        """
        self.console = console or Console(highlight=False)
        self.quiet = quiet
        self._last_asset: Optional[Asset] = None

    def write_asset(self, asset: Asset, state: AssetState) -> None:
        """Write or rewrite the status line for an asset.

        Args:
            asset: Asset whose state changed
            state: New state
        """
        if self.quiet:
            return

        if self._last_asset is asset:
            self.erase_last_line()
        else:
            self._last_asset = asset

        self.console.print(format_asset_line(asset, state))

    def erase_last_line(self) -> None:
        """Remove the previously written line (terminals only)."""
        if self.console.is_terminal:
            self.console.control(ERASE_LAST_LINE)

    __call__ = write_asset
