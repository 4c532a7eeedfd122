"""Translate Data Dragon payloads into domain entities."""

from __future__ import annotations

from collections import defaultdict
from types import MappingProxyType
from typing import TYPE_CHECKING

from patchdelta.domain.model import (
    Ability,
    Champion,
    Entity,
    EntityId,
    Item,
    Passive,
    Rune,
    SummonerAbility,
)

if TYPE_CHECKING:
    from collections.abc import Iterable, Mapping

    from patchdelta.domain.model import RankedArray

    from .schema import (
        ChampionFullResponse,
        ChampionPayload,
        ItemResponse,
        RunePathList,
        SpellPayload,
        SummonerResponse,
    )

type AliasMap = Mapping[EntityId, tuple[str, ...]]

SUMMONERS_RIFT_MAP_ID = "11"
NO_ALIASES: AliasMap = MappingProxyType({})


def translate_champions(
    response: ChampionFullResponse,
    *,
    aliases: AliasMap = NO_ALIASES,
) -> list[Champion]:
    return [_translate_champion(payload, aliases) for payload in response.data.values()]


def _translate_champion(payload: ChampionPayload, aliases: AliasMap) -> Champion:
    passive = (
        Passive(name=payload.passive.name, description=payload.passive.description)
        if payload.passive is not None
        else None
    )
    return Champion(
        id=payload.id,
        name=payload.name,
        description=payload.title,
        aliases=aliases.get(EntityId(Champion.kind, payload.id), ()),
        stats=MappingProxyType(dict(payload.stats)),
        abilities=tuple(_translate_spell(spell) for spell in payload.spells[:4]),
        passive=passive,
    )


def _translate_spell(spell: SpellPayload) -> Ability:
    effects: list[RankedArray] = [tuple(values) if values else () for values in spell.effect]
    return Ability(
        name=spell.name,
        description=spell.description,
        cooldown=spell.cooldown_burn,
        cost=spell.cost_burn,
        range=spell.range_burn,
        effects=tuple(effects),
    )


def translate_items(response: ItemResponse, *, aliases: AliasMap = NO_ALIASES) -> list[Item]:
    """Summoner's Rift items only; other modes reuse display names under other ids."""

    items: list[Item] = []
    for item_id, payload in response.data.items():
        if payload.maps and not payload.maps.get(SUMMONERS_RIFT_MAP_ID, False):
            continue
        items.append(
            Item(
                id=item_id,
                name=payload.name,
                description=payload.description,
                aliases=aliases.get(EntityId(Item.kind, item_id), ()),
                cost=payload.gold.total,
                modifiers=MappingProxyType(dict(payload.stats)),
                purchasable=payload.gold.purchasable and payload.in_store,
            )
        )
    return items


def translate_runes(paths: RunePathList, *, aliases: AliasMap = NO_ALIASES) -> list[Rune]:
    runes: list[Rune] = []
    for path in paths.root:
        for slot in path.slots:
            for payload in slot.runes:
                rune_id = str(payload.id)
                runes.append(
                    Rune(
                        id=rune_id,
                        name=payload.name,
                        description=payload.long_desc,
                        aliases=aliases.get(EntityId(Rune.kind, rune_id), ()),
                        key=payload.key,
                        path=path.name,
                    )
                )
    return runes


def translate_summoners(
    response: SummonerResponse,
    *,
    aliases: AliasMap = NO_ALIASES,
) -> list[SummonerAbility]:
    return [
        SummonerAbility(
            id=payload.id,
            name=payload.name,
            description=payload.description,
            aliases=aliases.get(EntityId(SummonerAbility.kind, payload.id), ()),
            cooldown=payload.cooldown_burn,
        )
        for payload in response.data.values()
    ]


def alias_map(
    entities: Iterable[Entity],
    *,
    exclude: Mapping[EntityId, str] | None = None,
) -> AliasMap:
    """Names of ``entities`` keyed by id, skipping names equal to ``exclude[id]``."""

    collected: defaultdict[EntityId, list[str]] = defaultdict(list)
    for entity in entities:
        entity_id = entity.entity_id
        skip = exclude.get(entity_id) if exclude else None
        if entity.name and entity.name != skip and entity.name not in collected[entity_id]:
            collected[entity_id].append(entity.name)
    return MappingProxyType({entity_id: tuple(names) for entity_id, names in collected.items()})
