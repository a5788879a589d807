"""Retention pass result entity."""

from dataclasses import dataclass, field
from pathlib import Path


@dataclass(frozen=True)
class TrimResult:
    """Outcome of one retention pass.

    Attributes:
        total: Entries found before trimming
        removed: Entries deleted, oldest first
        failed: Entries whose deletion failed and were left in place
    """

    total: int = 0
    removed: list[Path] = field(default_factory=list)
    failed: list[Path] = field(default_factory=list)

    @property
    def remaining(self) -> int:
        """Entries left after the pass."""
        return self.total - len(self.removed)
