"""Alias table construction for identity resolution.

Responsibilities of this stage:
- register every known name of every snapshot entity under its normalized form
- apply a small declarative exception list (legacy names, compound names that
  must never be split, cross-locale names the provider does not publish)
- stay read-only after construction; each run builds its own table

Multiple registrations may point at the same id and the same key may be
claimed by entities of different kinds, so the table is a multi-key mapping.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import TYPE_CHECKING

from patchdelta.domain.model import Entity, EntityId, EntityKind, Item, Rune

from .normalize import loose_name, normalize_name

if TYPE_CHECKING:
    from collections.abc import Iterable, Iterator, Mapping

    from patchdelta.domain.model import Snapshot

log = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True, kw_only=True)
class ManualAlias:
    """Hand-authored alias registration.

    ``target`` pins one canonical id; otherwise every entity of ``kind`` whose
    names contain all ``name_contains`` words receives the aliases.
    """

    kind: EntityKind
    names: tuple[str, ...]
    target: str | None = None
    name_contains: tuple[str, ...] = ()
    upgrades_only: bool = False

    def __post_init__(self) -> None:
        if self.target is None and not self.name_contains:
            raise ValueError("ManualAlias needs either a target id or name_contains words")


DEFAULT_MANUAL_ALIASES: tuple[ManualAlias, ...] = (
    ManualAlias(kind=EntityKind.CHAMPION, target="MonkeyKing", names=("Wukong",)),
    ManualAlias(
        kind=EntityKind.ITEM,
        name_contains=("anochecer",),
        upgrades_only=True,
        names=("Ocaso y Amanecer", "Anochecer y Amanecer", "Dusk and Dawn"),
    ),
    ManualAlias(
        kind=EntityKind.ITEM,
        name_contains=("hambre", "interminable"),
        upgrades_only=True,
        names=("Endless Hunger",),
    ),
    ManualAlias(kind=EntityKind.ITEM, name_contains=("duskblade",), names=("Duskblade",)),
    ManualAlias(
        kind=EntityKind.ITEM,
        target="7025",
        names=("Protoplasm Harness", "Arnés de Protoplasma"),
    ),
    ManualAlias(kind=EntityKind.ITEM, target="7031", names=("Endless Hunger",)),
    ManualAlias(kind=EntityKind.ITEM, target="7002", names=("Dusk and Dawn",)),
    ManualAlias(kind=EntityKind.RUNE, target="8352", names=("Cash Back", "Reembolso")),
    ManualAlias(kind=EntityKind.RUNE, target="8369", names=("Triple Tonic", "Tónico Triple")),
    ManualAlias(kind=EntityKind.RUNE, target="8230", names=("Phase Rush", "Irrupción de Fase")),
)


@dataclass(frozen=True, slots=True, kw_only=True)
class AliasRules:
    """Declarative exceptions consumed by the alias table and the resolver."""

    manual_aliases: tuple[ManualAlias, ...] = DEFAULT_MANUAL_ALIASES
    upgrade_id_floor: int = 7000
    upgrade_markers: tuple[str, ...] = ("ornn",)
    upgrade_prefixes: tuple[str, ...] = ("mejora de ornn:", "ornn upgrade:")
    upgrade_keywords: tuple[str, ...] = (
        "hambre",
        "ocaso",
        "amanecer",
        "anochecer",
        "eterna",
        "interminable",
        "dawn",
        "dusk",
        "hunger",
        "endless",
    )
    fuzzy_blacklist: tuple[str, ...] = ("turret plates", "champion bounties", "actualizer")
    min_fuzzy_key_length: int = 4

    def is_upgrade(self, entity: Entity) -> bool:
        """High-numbered reward/upgrade items get prefixed aliases and fuzzy lookup."""

        if not isinstance(entity, Item):
            return False
        numeric = entity.entity_id.numeric
        if numeric is not None and numeric > self.upgrade_id_floor:
            return True
        description = loose_name(entity.description)
        return any(marker in description for marker in self.upgrade_markers)

    def suggests_upgrade(self, raw_name: str) -> bool:
        name = loose_name(raw_name)
        return any(keyword in name for keyword in self.upgrade_keywords)

    def is_blacklisted(self, raw_name: str) -> bool:
        name = loose_name(raw_name)
        return any(term in name for term in self.fuzzy_blacklist)


DEFAULT_ALIAS_RULES = AliasRules()


@dataclass(frozen=True, slots=True)
class AliasTable:
    """Normalized name -> canonical ids, in registration order."""

    _entries: Mapping[str, tuple[EntityId, ...]] = field(repr=False)
    upgrade_ids: frozenset[EntityId] = frozenset()

    def __len__(self) -> int:
        return len(self._entries)

    def __contains__(self, key: object) -> bool:
        return isinstance(key, str) and normalize_name(key) in self._entries

    def keys(self) -> tuple[str, ...]:
        return tuple(self._entries)

    def items(self) -> Iterator[tuple[str, tuple[EntityId, ...]]]:
        return iter(self._entries.items())

    def candidates(self, name: str) -> tuple[EntityId, ...]:
        return self._entries.get(normalize_name(name), ())

    def lookup(self, name: str, hint: EntityKind | None = None) -> EntityId | None:
        """Exact lookup; the hint picks among kinds sharing one key."""

        return _pick(self._entries.get(normalize_name(name), ()), hint)


def _pick(candidates: tuple[EntityId, ...], hint: EntityKind | None) -> EntityId | None:
    if not candidates:
        return None
    if hint is not None:
        for candidate in candidates:
            if candidate.kind is hint:
                return candidate
    return candidates[0]


@dataclass(slots=True)
class _AliasTableBuilder:
    entries: dict[str, list[EntityId]] = field(default_factory=dict[str, list[EntityId]])
    upgrade_ids: set[EntityId] = field(default_factory=set[EntityId])

    def register(self, name: str | None, entity_id: EntityId) -> None:
        key = normalize_name(name)
        if not key:
            return
        bucket = self.entries.setdefault(key, [])
        if entity_id not in bucket:
            bucket.append(entity_id)

    def build(self) -> AliasTable:
        frozen = {key: tuple(ids) for key, ids in self.entries.items()}
        return AliasTable(MappingProxyType(frozen), frozenset(self.upgrade_ids))


def build_alias_table(snapshot: Snapshot, *, rules: AliasRules = DEFAULT_ALIAS_RULES) -> AliasTable:
    """Build the per-run alias table from the current snapshot plus ``rules``."""

    builder = _AliasTableBuilder()
    for entity in snapshot:
        _register_entity(builder, entity, rules)
    for alias in rules.manual_aliases:
        _register_manual_alias(builder, snapshot, alias, rules)
    table = builder.build()
    log.debug("Built alias table: keys=%s, entities=%s", len(table), len(snapshot))
    return table


def _register_entity(builder: _AliasTableBuilder, entity: Entity, rules: AliasRules) -> None:
    entity_id = entity.entity_id
    builder.register(entity.id, entity_id)
    for name in entity.names():
        builder.register(name, entity_id)
    if isinstance(entity, Rune) and entity.key:
        builder.register(entity.key, entity_id)
    if rules.is_upgrade(entity):
        builder.upgrade_ids.add(entity_id)
        for prefix in rules.upgrade_prefixes:
            for name in entity.names():
                builder.register(f"{prefix} {name}", entity_id)


def _register_manual_alias(
    builder: _AliasTableBuilder,
    snapshot: Snapshot,
    alias: ManualAlias,
    rules: AliasRules,
) -> None:
    targets = list(_manual_alias_targets(snapshot, alias, rules))
    if not targets:
        log.debug("Skipping alias %s: no %s target in snapshot", alias.names, alias.kind)
        return
    for entity in targets:
        for name in alias.names:
            builder.register(name, entity.entity_id)


def _manual_alias_targets(
    snapshot: Snapshot,
    alias: ManualAlias,
    rules: AliasRules,
) -> Iterable[Entity]:
    if alias.target is not None:
        entity = snapshot.get(EntityId(alias.kind, alias.target))
        return () if entity is None else (entity,)
    words = tuple(loose_name(word) for word in alias.name_contains)
    return tuple(
        entity
        for entity in snapshot.of_kind(alias.kind)
        if (not alias.upgrades_only or rules.is_upgrade(entity))
        and any(all(word in loose_name(name) for word in words) for name in entity.names())
    )
