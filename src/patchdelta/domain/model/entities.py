"""Catalog entities and versioned snapshots.

Entities are immutable value objects: a snapshot is fetched once per version
and only ever compared against another snapshot, never mutated.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from types import MappingProxyType
from typing import TYPE_CHECKING, ClassVar

from .enums import ABILITY_SLOTS, AbilitySlot, EntityKind

if TYPE_CHECKING:
    from collections.abc import Iterable, Iterator, Mapping


type RankedValue = float | None
type RankedArray = tuple[RankedValue, ...]


@dataclass(frozen=True, slots=True, order=True)
class EntityId:
    """Canonical identity of an entity: its kind plus the provider's stable id."""

    kind: EntityKind
    value: str

    def __str__(self) -> str:
        return f"{self.kind}:{self.value}"

    @property
    def numeric(self) -> int | None:
        """Provider id as an integer, when it is one (items and runes)."""

        return int(self.value) if self.value.isdigit() else None


@dataclass(frozen=True, slots=True, kw_only=True)
class Ability:
    name: str
    description: str = ""
    cooldown: str | None = None
    cost: str | None = None
    range: str | None = None
    effects: tuple[RankedArray, ...] = ()


@dataclass(frozen=True, slots=True, kw_only=True)
class Passive:
    name: str
    description: str = ""


@dataclass(frozen=True, slots=True, kw_only=True)
class Entity:
    """Fields shared by every entity variant."""

    kind: ClassVar[EntityKind]

    id: str
    name: str
    description: str = ""
    aliases: tuple[str, ...] = ()

    @property
    def entity_id(self) -> EntityId:
        return EntityId(self.kind, self.id)

    def names(self) -> tuple[str, ...]:
        """Every name this entity is known by, display name first."""

        return (self.name, *self.aliases)


@dataclass(frozen=True, slots=True, kw_only=True)
class Champion(Entity):
    kind: ClassVar[EntityKind] = EntityKind.CHAMPION

    stats: Mapping[str, float] = field(default_factory=lambda: MappingProxyType({}))
    abilities: tuple[Ability, ...] = ()
    passive: Passive | None = None

    def __post_init__(self) -> None:
        if len(self.abilities) > len(ABILITY_SLOTS):
            raise ValueError(
                f"Champion {self.id} has {len(self.abilities)} abilities; at most "
                f"{len(ABILITY_SLOTS)} are supported"
            )

    def ability(self, slot: AbilitySlot) -> Ability | None:
        index = ABILITY_SLOTS.index(slot)
        if index < len(self.abilities):
            return self.abilities[index]
        return None


@dataclass(frozen=True, slots=True, kw_only=True)
class Item(Entity):
    kind: ClassVar[EntityKind] = EntityKind.ITEM

    cost: int | None = None
    modifiers: Mapping[str, float] = field(default_factory=lambda: MappingProxyType({}))
    purchasable: bool = True


@dataclass(frozen=True, slots=True, kw_only=True)
class Rune(Entity):
    kind: ClassVar[EntityKind] = EntityKind.RUNE

    key: str | None = None
    path: str | None = None


@dataclass(frozen=True, slots=True, kw_only=True)
class SummonerAbility(Entity):
    kind: ClassVar[EntityKind] = EntityKind.SUMMONER

    cooldown: str | None = None


@dataclass(frozen=True, slots=True)
class Snapshot:
    """All entities published for one provider version.

    A snapshot may mix kinds; entities keep insertion order so that output
    ordering is deterministic.
    """

    version: str
    _entities: Mapping[EntityId, Entity] = field(repr=False)

    @classmethod
    def of(cls, version: str, entities: Iterable[Entity]) -> Snapshot:
        indexed: dict[EntityId, Entity] = {}
        for entity in entities:
            entity_id = entity.entity_id
            if entity_id in indexed:
                raise ValueError(f"Duplicate entity id {entity_id} in snapshot {version}")
            indexed[entity_id] = entity
        return cls(version, MappingProxyType(indexed))

    def __len__(self) -> int:
        return len(self._entities)

    def __iter__(self) -> Iterator[Entity]:
        return iter(self._entities.values())

    def __contains__(self, entity_id: object) -> bool:
        return entity_id in self._entities

    def get(self, entity_id: EntityId) -> Entity | None:
        return self._entities.get(entity_id)

    def ids(self) -> tuple[EntityId, ...]:
        return tuple(self._entities)

    def of_kind(self, kind: EntityKind) -> tuple[Entity, ...]:
        return tuple(entity for entity in self._entities.values() if entity.kind is kind)

    def merged_with(self, other: Snapshot) -> Snapshot:
        """Return a snapshot holding the entities of both (same version only)."""

        if other.version != self.version:
            raise ValueError(
                f"Cannot merge snapshots of different versions: {self.version} != {other.version}"
            )
        return Snapshot.of(self.version, (*self, *other))
