"""Domain ports (protocols for external collaborators)."""

from __future__ import annotations

from .fetching import (
    ChangelogSource,
    ChangelogUnavailableError,
    SnapshotSource,
    SnapshotUnavailableError,
)

__all__ = [
    "ChangelogSource",
    "ChangelogUnavailableError",
    "SnapshotSource",
    "SnapshotUnavailableError",
]
