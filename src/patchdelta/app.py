"""Application orchestration entry points."""

from __future__ import annotations

from logging import getLogger
from typing import TYPE_CHECKING

import httpx

from patchdelta.adapters.ddragon import DataDragonSource
from patchdelta.adapters.patch_notes import PatchNotesSource, known_names_from
from patchdelta.config import get_ddragon_config, get_engine_config, get_patch_notes_config
from patchdelta.domain.ports import ChangelogUnavailableError
from patchdelta.domain.reconciliation import IdentityResolver, ReconciliationEngine
from patchdelta.domain.reconciliation.segment import group_by_heading
from patchdelta.domain.versions import previous_version

if TYPE_CHECKING:
    from patchdelta.domain.model import ChangelogBlock, ReconciliationResult, Snapshot
    from patchdelta.domain.ports import ChangelogSource, SnapshotSource


log = getLogger(__name__)


def build_engine() -> ReconciliationEngine:
    config = get_engine_config()
    return ReconciliationEngine(epsilon=config.float_epsilon)


def list_versions(*, source: SnapshotSource | None = None) -> list[str]:
    """Published versions, newest first."""

    effective_source = source or DataDragonSource(config=get_ddragon_config())
    return effective_source.versions()


def resolve_versions(
    source: SnapshotSource,
    *,
    version: str | None = None,
    previous: str | None = None,
) -> tuple[str, str]:
    """``(previous, current)``; the published list is only consulted for missing values."""

    if version is not None and previous is not None:
        return previous, version
    versions = source.versions()
    if previous is None:
        return previous_version(versions, version)
    if not versions:
        raise ValueError("No versions available")
    return previous, versions[0]


def build_patch_report(
    *,
    snapshot_source: SnapshotSource | None = None,
    changelog_source: ChangelogSource | None = None,
    changelog_text: str | None = None,
    version: str | None = None,
    previous: str | None = None,
    use_patch_notes: bool = True,
    engine: ReconciliationEngine | None = None,
) -> ReconciliationResult:
    """Reconcile one version against its predecessor using the configured adapters.

    Snapshot failures propagate. Changelog failures degrade the run to
    structural-only output. ``changelog_text`` (a plain heading-delimited
    document) takes precedence over ``changelog_source``; with neither, the
    public release notes are scraped unless ``use_patch_notes`` is false.
    """

    effective_source = snapshot_source or DataDragonSource(config=get_ddragon_config())
    effective_engine = engine or build_engine()
    previous_id, current_id = resolve_versions(
        effective_source, version=version, previous=previous
    )
    log.info("Starting patch report: previous=%s, current=%s", previous_id, current_id)

    previous_snapshot = effective_source(previous_id)
    current_snapshot = effective_source(current_id)

    blocks: list[ChangelogBlock] = []
    preamble: list[str] = []
    if changelog_text is not None:
        resolver = IdentityResolver.for_snapshot(current_snapshot, rules=effective_engine.rules)
        blocks, preamble = group_by_heading(changelog_text.splitlines(), resolver)
    else:
        source = changelog_source
        if source is None and use_patch_notes:
            source = _default_changelog_source(current_snapshot)
        if source is not None:
            blocks = _fetch_changelog(source, current_id)

    result = effective_engine.reconcile(
        previous_snapshot, current_snapshot, blocks, preamble=preamble
    )
    log.info(
        "Finished patch report %s: change_sets=%s, changelog_blocks=%s, unresolved=%s",
        current_id,
        len(result.change_sets),
        len(blocks),
        len(result.diagnostics),
    )
    return result


def _default_changelog_source(current: Snapshot) -> ChangelogSource:
    return PatchNotesSource(
        config=get_patch_notes_config(),
        known_names=known_names_from(current),
    )


def _fetch_changelog(source: ChangelogSource, version: str) -> list[ChangelogBlock]:
    try:
        return source(version)
    except (ChangelogUnavailableError, httpx.HTTPError) as exc:
        log.warning("Changelog for %s unavailable, continuing structural-only: %s", version, exc)
        return []
