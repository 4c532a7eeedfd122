"""Public domain model surface."""

from __future__ import annotations

from patchdelta.domain.model.changes import (
    ChangelogBlock,
    ChangeRecord,
    ChangeValue,
    Diagnostics,
    EntityChangeSet,
    ReconciliationResult,
    UnresolvedBlock,
)
from patchdelta.domain.model.entities import (
    Ability,
    Champion,
    Entity,
    EntityId,
    Item,
    Passive,
    RankedArray,
    Rune,
    Snapshot,
    SummonerAbility,
)
from patchdelta.domain.model.enums import (
    ABILITY_SLOTS,
    KIND_ORDER,
    AbilitySlot,
    ChangeOrigin,
    EntityKind,
    Polarity,
    PolarityRule,
)

__all__ = [  # noqa: RUF022
    # enums
    "ABILITY_SLOTS",
    "KIND_ORDER",
    "AbilitySlot",
    "ChangeOrigin",
    "EntityKind",
    "Polarity",
    "PolarityRule",
    # entities
    "EntityId",
    "Entity",
    "Champion",
    "Ability",
    "Passive",
    "Item",
    "Rune",
    "SummonerAbility",
    "RankedArray",
    "Snapshot",
    # changes
    "ChangeValue",
    "ChangeRecord",
    "EntityChangeSet",
    "ChangelogBlock",
    "UnresolvedBlock",
    "Diagnostics",
    "ReconciliationResult",
]
