from __future__ import annotations

from types import MappingProxyType
from typing import TYPE_CHECKING

from patchdelta.domain.model import (
    Ability,
    Champion,
    Item,
    Passive,
    Rune,
    Snapshot,
    SummonerAbility,
)

if TYPE_CHECKING:
    from collections.abc import Mapping

    from patchdelta.domain.model import Entity, RankedArray


def make_ability(
    name: str = "Orbe del engaño",
    *,
    cooldown: str | None = "7/7/7/7/7",
    cost: str | None = "65/70/75/80/85",
    effects: tuple[RankedArray, ...] = (),
    description: str = "Lanza un orbe.",
) -> Ability:
    return Ability(
        name=name,
        description=description,
        cooldown=cooldown,
        cost=cost,
        range="880",
        effects=effects,
    )


def make_champion(
    champion_id: str = "Ahri",
    name: str | None = None,
    *,
    stats: Mapping[str, float] | None = None,
    abilities: tuple[Ability, ...] | None = None,
    passive: Passive | None = None,
    aliases: tuple[str, ...] = (),
    description: str = "",
) -> Champion:
    return Champion(
        id=champion_id,
        name=name or champion_id,
        description=description,
        aliases=aliases,
        stats=MappingProxyType(dict(stats or {"hp": 590.0, "attackdamage": 53.0})),
        abilities=abilities if abilities is not None else (make_ability(),),
        passive=passive or Passive(name="Robo de esencia", description="Cura al acertar."),
    )


def make_item(
    item_id: str = "3031",
    name: str = "Filo del Infinito",
    *,
    cost: int | None = 3400,
    modifiers: Mapping[str, float] | None = None,
    purchasable: bool = True,
    description: str = "",
    aliases: tuple[str, ...] = (),
) -> Item:
    return Item(
        id=item_id,
        name=name,
        description=description,
        aliases=aliases,
        cost=cost,
        modifiers=MappingProxyType(dict(modifiers or {"FlatPhysicalDamageMod": 65.0})),
        purchasable=purchasable,
    )


def make_rune(
    rune_id: str = "8005",
    name: str = "Compás letal",
    *,
    key: str = "PressTheAttack",
    description: str = "Golpea tres veces.",
) -> Rune:
    return Rune(id=rune_id, name=name, key=key, path="Precisión", description=description)


def make_summoner(
    summoner_id: str = "SummonerFlash",
    name: str = "Destello",
    *,
    cooldown: str | None = "300",
    description: str = "Teletransporta a tu campeón.",
) -> SummonerAbility:
    return SummonerAbility(
        id=summoner_id,
        name=name,
        description=description,
        cooldown=cooldown,
    )


def make_snapshot(version: str, *entities: Entity) -> Snapshot:
    return Snapshot.of(version, entities)
