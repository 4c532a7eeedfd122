"""Orchestrator for one reconciliation run.

The engine is synchronous and pure: both snapshots and the changelog blocks
are fetched beforehand, and every lookup table is rebuilt per call.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING

from patchdelta.domain.model import (
    ChangelogBlock,
    Diagnostics,
    EntityChangeSet,
    Item,
    ReconciliationResult,
)

from .aliases import DEFAULT_ALIAS_RULES, AliasRules
from .diff import DEFAULT_EPSILON, diff_entities
from .merge import concatenate, merge_change_sets, ordered_ids
from .resolve import IdentityResolver
from .segment import segment_block

if TYPE_CHECKING:
    from collections.abc import Iterable

    from patchdelta.domain.model import EntityId, Snapshot

log = logging.getLogger(__name__)

NO_ALIAS_MATCH = "no_alias_match"
NO_HEADING = "no_heading"


@dataclass(slots=True, kw_only=True)
class ReconciliationEngine:
    """Diff two snapshots, attribute changelog blocks and merge both sides."""

    rules: AliasRules = DEFAULT_ALIAS_RULES
    epsilon: float = DEFAULT_EPSILON

    def reconcile(
        self,
        previous: Snapshot,
        current: Snapshot,
        changelog: Iterable[ChangelogBlock] = (),
        *,
        preamble: Iterable[str] = (),
    ) -> ReconciliationResult:
        """Produce ordered change sets plus diagnostics for ``current`` vs ``previous``."""

        resolver = IdentityResolver.for_snapshot(current, rules=self.rules)
        diagnostics = Diagnostics()

        textual = self._attribute_changelog(changelog, current, resolver, diagnostics)
        structural = self._diff_snapshots(previous, current, referenced=textual.keys())

        preamble_lines = tuple(line for line in preamble if line.strip())
        if preamble_lines:
            diagnostics.add(
                ChangelogBlock(entity_name_raw="", lines=preamble_lines),
                reason=NO_HEADING,
            )

        change_sets: list[EntityChangeSet] = []
        for entity_id in ordered_ids(current, structural, textual):
            merged = merge_change_sets(structural.get(entity_id), textual.get(entity_id))
            merged.is_new = entity_id not in previous
            if not merged.is_empty():
                change_sets.append(merged)

        log.info(
            "Reconciled %s -> %s: change_sets=%s, unresolved=%s",
            previous.version,
            current.version,
            len(change_sets),
            len(diagnostics),
        )
        return ReconciliationResult(
            version=current.version,
            previous_version=previous.version,
            change_sets=change_sets,
            diagnostics=diagnostics,
        )

    def _diff_snapshots(
        self,
        previous: Snapshot,
        current: Snapshot,
        *,
        referenced: Iterable[EntityId],
    ) -> dict[EntityId, EntityChangeSet]:
        referenced_ids = set(referenced)
        structural: dict[EntityId, EntityChangeSet] = {}
        for entity in current:
            old = previous.get(entity.entity_id)
            if old is None:
                continue
            if isinstance(entity, Item) and not entity.purchasable:
                if entity.entity_id not in referenced_ids:
                    continue
            change_set = diff_entities(old, entity, epsilon=self.epsilon)
            if not change_set.is_empty():
                structural[entity.entity_id] = change_set
        return structural

    def _attribute_changelog(
        self,
        changelog: Iterable[ChangelogBlock],
        current: Snapshot,
        resolver: IdentityResolver,
        diagnostics: Diagnostics,
    ) -> dict[EntityId, EntityChangeSet]:
        textual: dict[EntityId, EntityChangeSet] = {}
        for block in changelog:
            entity_id = resolver.resolve(block.entity_name_raw, block.kind_hint)
            if entity_id is None:
                log.info(
                    "Unresolved changelog entity %r (%s lines)",
                    block.entity_name_raw,
                    len(block.lines),
                )
                diagnostics.add(block, reason=NO_ALIAS_MATCH)
                continue
            entity = current.get(entity_id)
            name = entity.name if entity is not None else block.entity_name_raw
            change_set = segment_block(block, entity_id, name)
            if entity_id in textual:
                concatenate(textual[entity_id], change_set)
            else:
                textual[entity_id] = change_set
        return textual


def reconcile(
    previous: Snapshot,
    current: Snapshot,
    changelog: Iterable[ChangelogBlock] = (),
    *,
    preamble: Iterable[str] = (),
    rules: AliasRules = DEFAULT_ALIAS_RULES,
    epsilon: float = DEFAULT_EPSILON,
) -> ReconciliationResult:
    """Convenience wrapper around :class:`ReconciliationEngine`."""

    engine = ReconciliationEngine(rules=rules, epsilon=epsilon)
    return engine.reconcile(previous, current, changelog, preamble=preamble)


__all__ = ["NO_ALIAS_MATCH", "NO_HEADING", "ReconciliationEngine", "reconcile"]
