"""Entity identity resolution across snapshot, scraped and extracted names."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING

from .aliases import DEFAULT_ALIAS_RULES, AliasRules, AliasTable, build_alias_table
from .normalize import normalize_name

if TYPE_CHECKING:
    from patchdelta.domain.model import EntityId, EntityKind, Snapshot

log = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class IdentityResolver:
    """Map raw names from any source onto canonical entity ids.

    A failed resolution is ``None``; callers decide how to degrade.
    """

    table: AliasTable
    rules: AliasRules = DEFAULT_ALIAS_RULES

    @classmethod
    def for_snapshot(
        cls,
        snapshot: Snapshot,
        *,
        rules: AliasRules = DEFAULT_ALIAS_RULES,
    ) -> IdentityResolver:
        return cls(build_alias_table(snapshot, rules=rules), rules)

    def resolve(self, raw_name: str, hint: EntityKind | None = None) -> EntityId | None:
        key = normalize_name(raw_name)
        if not key:
            return None

        exact = self.table.lookup(key, hint)
        if exact is not None:
            return exact

        if self.rules.is_blacklisted(raw_name) or not self.rules.suggests_upgrade(raw_name):
            return None

        fuzzy = self._scan_upgrades(key, hint)
        if fuzzy is not None:
            log.debug("Resolved %r to %s by containment", raw_name, fuzzy)
        return fuzzy

    def _scan_upgrades(self, key: str, hint: EntityKind | None) -> EntityId | None:
        if len(key) < self.rules.min_fuzzy_key_length:
            return None
        for candidate_key, ids in self.table.items():
            if len(candidate_key) < self.rules.min_fuzzy_key_length:
                continue
            if key not in candidate_key and candidate_key not in key:
                continue
            upgrades = [
                entity_id
                for entity_id in ids
                if entity_id in self.table.upgrade_ids and (hint is None or entity_id.kind is hint)
            ]
            if upgrades:
                return upgrades[0]
        return None
