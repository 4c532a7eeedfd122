"""JSON rendering of a reconciliation result."""

from __future__ import annotations

import json
from typing import TYPE_CHECKING, Any

from patchdelta.domain.model import ABILITY_SLOTS

if TYPE_CHECKING:
    from patchdelta.domain.model import (
        ChangeRecord,
        EntityChangeSet,
        ReconciliationResult,
        UnresolvedBlock,
    )


def record_to_dict(record: ChangeRecord) -> dict[str, Any]:
    return {
        "attribute": record.attribute,
        "old": record.old,
        "new": record.new,
        "polarity": str(record.polarity),
        "origin": str(record.origin),
    }


def change_set_to_dict(change_set: EntityChangeSet) -> dict[str, Any]:
    return {
        "id": str(change_set.entity_id),
        "kind": str(change_set.kind),
        "name": change_set.name,
        "is_new": change_set.is_new,
        "declared_polarity": (
            str(change_set.declared_polarity) if change_set.declared_polarity else None
        ),
        "scalar_changes": [record_to_dict(record) for record in change_set.scalar_changes],
        "ability_changes": {
            str(slot): [record_to_dict(record) for record in change_set.ability_changes[slot]]
            for slot in ABILITY_SLOTS
            if change_set.ability_changes.get(slot)
        },
        "passive_change": (
            record_to_dict(change_set.passive_change) if change_set.passive_change else None
        ),
        "free_context": list(change_set.free_context),
        "summary": change_set.summary,
        "context": change_set.context,
    }


def unresolved_to_dict(block: UnresolvedBlock) -> dict[str, Any]:
    return {
        "name": block.entity_name_raw,
        "kind_hint": str(block.kind_hint) if block.kind_hint else None,
        "reason": block.reason,
        "lines": list(block.lines),
    }


def result_to_dict(result: ReconciliationResult) -> dict[str, Any]:
    return {
        "version": result.version,
        "previous_version": result.previous_version,
        "change_sets": [change_set_to_dict(change_set) for change_set in result.change_sets],
        "diagnostics": [unresolved_to_dict(block) for block in result.diagnostics.unresolved],
    }


def render_json(result: ReconciliationResult, *, indent: int | None = 2) -> str:
    return json.dumps(result_to_dict(result), ensure_ascii=False, indent=indent)
