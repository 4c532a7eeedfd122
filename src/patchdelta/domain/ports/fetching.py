"""Ports for fetching snapshots and changelogs from external providers."""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol, runtime_checkable

if TYPE_CHECKING:
    from patchdelta.domain.model import ChangelogBlock, Snapshot


class SnapshotUnavailableError(RuntimeError):
    """Raised when a required snapshot cannot be supplied. Fatal to a run."""

    def __init__(self, message: str, *, version: str | None = None) -> None:
        super().__init__(message)
        self.version = version


class ChangelogUnavailableError(RuntimeError):
    """Raised when a changelog cannot be supplied. Runs degrade to structural-only output."""


@runtime_checkable
class SnapshotSource(Protocol):
    """Callable port returning the structured snapshot for one version."""

    def __call__(self, version: str) -> Snapshot: ...

    def versions(self) -> list[str]:
        """Known versions, newest first."""
        ...


@runtime_checkable
class ChangelogSource(Protocol):
    """Callable port returning per-entity changelog blocks for one version."""

    def __call__(self, version: str) -> list[ChangelogBlock]: ...


__all__ = [
    "ChangelogSource",
    "ChangelogUnavailableError",
    "SnapshotSource",
    "SnapshotUnavailableError",
]
