"""Per-run sync state: asset states and run results."""

from dataclasses import dataclass, field
from enum import Enum
from typing import Optional


class AssetState(str, Enum):
    """States an asset passes through during a run."""

    IGNORED = "ignored"
    SKIPPED = "skipped"
    UPLOADING = "uploading"
    UPLOADED = "uploaded"
    ERROR = "error"
    PLANNED = "planned"
    """Would be uploaded (dry run only)"""

    @property
    def is_terminal(self) -> bool:
        """Whether this state is an asset's final outcome for the run."""
        return self is not AssetState.UPLOADING


@dataclass
class SyncResult:
    """Outcome of a single sync run.

    Nothing here outlives the run: the uploaded keys are handed to the
    invalidation step and then discarded.
    """

    outcomes: dict[str, AssetState] = field(default_factory=dict)
    """Terminal state per asset key, in processing order"""

    uploaded: list[str] = field(default_factory=list)
    """Keys uploaded successfully, in upload order"""

    planned: list[str] = field(default_factory=list)
    """Keys that would be uploaded (dry run only)"""

    aborted: bool = False
    """Whether the run stopped early because of an error"""

    failed_key: Optional[str] = None
    """Key of the asset that caused the abort"""

    error: Optional[Exception] = None
    """Exception that caused the abort"""

    def record(self, key: str, state: AssetState) -> None:
        """Record the terminal state of an asset."""
        self.outcomes[key] = state
        if state == AssetState.UPLOADED:
            self.uploaded.append(key)
        elif state == AssetState.PLANNED:
            self.planned.append(key)

    def count(self, state: AssetState) -> int:
        """Count assets that ended in a given state."""
        return sum(1 for outcome in self.outcomes.values() if outcome == state)

    @property
    def succeeded(self) -> bool:
        return not self.aborted
