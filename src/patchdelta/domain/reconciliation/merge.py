"""Merge structural and changelog change sets.

Structural records are authoritative: a changelog record is dropped when a
structural record with the same canonical attribute already exists in the same
place (scalar list, ability slot, passive). Surviving changelog records are
classified here, once everything is in place.
"""

from __future__ import annotations

import logging
from dataclasses import replace
from typing import TYPE_CHECKING

from patchdelta.domain.model import KIND_ORDER, EntityChangeSet, Polarity

from .classify import canonical_attribute, classify

if TYPE_CHECKING:
    from collections.abc import Iterable, Mapping

    from patchdelta.domain.model import ChangeRecord, EntityId, Snapshot

log = logging.getLogger(__name__)


def finalize_polarity(record: ChangeRecord) -> ChangeRecord:
    if record.polarity is not Polarity.ADJUSTMENT:
        return record
    polarity = classify(record.attribute, record.old, record.new)
    if polarity is Polarity.ADJUSTMENT:
        return record
    return replace(record, polarity=polarity)


def concatenate(first: EntityChangeSet, second: EntityChangeSet) -> EntityChangeSet:
    """Append ``second`` (a later block for the same entity) onto ``first``."""

    first.scalar_changes.extend(second.scalar_changes)
    for slot, records in second.ability_changes.items():
        for record in records:
            first.add_ability_change(slot, record)
    if second.passive_change is not None:
        if first.passive_change is None:
            first.passive_change = second.passive_change
        else:
            first.passive_change = replace(
                first.passive_change,
                new=f"{first.passive_change.new}\n{second.passive_change.new}",
            )
    first.free_context.extend(second.free_context)
    first.summary = _join_text(first.summary, second.summary)
    first.context = _join_text(first.context, second.context)
    if first.declared_polarity is None:
        first.declared_polarity = second.declared_polarity
    return first


def merge_change_sets(
    structural: EntityChangeSet | None,
    textual: EntityChangeSet | None,
) -> EntityChangeSet:
    """Combine both sides for one entity; at least one side must be present."""

    if textual is None:
        if structural is None:
            raise ValueError("merge_change_sets needs at least one change set")
        return structural
    if structural is None:
        merged = EntityChangeSet(entity_id=textual.entity_id, name=textual.name)
    else:
        if structural.entity_id != textual.entity_id:
            raise ValueError(
                f"Cannot merge change sets of {structural.entity_id} and {textual.entity_id}"
            )
        merged = structural

    merged.scalar_changes.extend(
        _new_records(merged.entity_id, merged.scalar_changes, textual.scalar_changes)
    )
    for slot, records in textual.ability_changes.items():
        existing = merged.ability_changes.get(slot, [])
        for record in _new_records(merged.entity_id, existing, records):
            merged.add_ability_change(slot, record)

    if textual.passive_change is not None:
        if merged.passive_change is None:
            merged.passive_change = finalize_polarity(textual.passive_change)
        else:
            log.debug("Dropping changelog passive text for %s: structural change exists", merged.entity_id)

    merged.free_context.extend(textual.free_context)
    merged.summary = merged.summary or textual.summary
    merged.context = merged.context or textual.context
    merged.declared_polarity = merged.declared_polarity or textual.declared_polarity
    return merged


def _new_records(
    entity_id: EntityId,
    existing: Iterable[ChangeRecord],
    candidates: Iterable[ChangeRecord],
) -> list[ChangeRecord]:
    taken = {canonical_attribute(record.attribute) for record in existing}
    accepted: list[ChangeRecord] = []
    for record in candidates:
        if canonical_attribute(record.attribute) in taken:
            log.debug(
                "Dropping changelog record %r for %s: structural record exists",
                record.attribute,
                entity_id,
            )
            continue
        accepted.append(finalize_polarity(record))
    return accepted


def ordered_ids(
    current: Snapshot,
    structural: Mapping[EntityId, EntityChangeSet],
    textual: Mapping[EntityId, EntityChangeSet],
) -> list[EntityId]:
    """Kind order first, then current snapshot order, then changelog order."""

    wanted = set(structural) | set(textual)
    ordered: list[EntityId] = []
    for kind in KIND_ORDER:
        ordered.extend(
            entity.entity_id for entity in current.of_kind(kind) if entity.entity_id in wanted
        )
        ordered.extend(
            entity_id
            for entity_id in textual
            if entity_id.kind is kind and entity_id not in current
        )
    return ordered


def _join_text(first: str, second: str) -> str:
    if first and second:
        return f"{first}\n{second}"
    return first or second
