"""Structural diff of two versions of one entity.

Responsibilities of this stage:
- compare scalar stats with a small float tolerance
- compare ranked effect arrays after dropping placeholders, suppressing
  all-zero replacements (the provider's way of saying "field removed")
- compare free text after trimming; text changes are always adjustments

Every emitted record is classified here; changelog records are classified
later, after merge.
"""

from __future__ import annotations

import logging
from functools import singledispatch
from typing import TYPE_CHECKING

from patchdelta.domain.model import (
    ABILITY_SLOTS,
    ChangeOrigin,
    ChangeRecord,
    Champion,
    Entity,
    EntityChangeSet,
    Item,
    Polarity,
    Rune,
    SummonerAbility,
)

from .classify import classify

if TYPE_CHECKING:
    from collections.abc import Iterator, Mapping

    from patchdelta.domain.model import Ability, RankedArray

log = logging.getLogger(__name__)

DEFAULT_EPSILON = 1e-4


def diff_entities(old: Entity, new: Entity, *, epsilon: float = DEFAULT_EPSILON) -> EntityChangeSet:
    """Return the structural change set between two versions of the same entity."""

    if old.entity_id != new.entity_id:
        raise ValueError(f"Cannot diff different entities: {old.entity_id} vs {new.entity_id}")
    if type(old) is not type(new):
        raise TypeError(f"Cannot diff {type(old).__name__} against {type(new).__name__}")
    change_set = EntityChangeSet(entity_id=new.entity_id, name=new.name)
    _diff_variant(new, old, change_set, epsilon)
    return change_set


def format_number(value: float) -> str:
    """Render ``60.0`` as ``"60"`` and ``0.35`` as ``"0.35"``."""

    if float(value).is_integer():
        return str(int(value))
    return str(round(value, 6))


def join_ranks(values: RankedArray) -> str:
    return "/".join(format_number(value) for value in values if value is not None)


def numbers_differ(old: float, new: float, epsilon: float) -> bool:
    return abs(old - new) > epsilon


@singledispatch
def _diff_variant(new: Entity, old: Entity, change_set: EntityChangeSet, epsilon: float) -> None:
    _append(change_set.scalar_changes, _text_record("description", old.description, new.description))


@_diff_variant.register
def _(new: Champion, old: Champion, change_set: EntityChangeSet, epsilon: float) -> None:
    change_set.scalar_changes.extend(_diff_stats(old.stats, new.stats, epsilon, missing=None))

    for slot in ABILITY_SLOTS:
        old_ability = old.ability(slot)
        new_ability = new.ability(slot)
        if old_ability is None or new_ability is None:
            continue
        for record in _diff_ability(old_ability, new_ability, epsilon):
            change_set.add_ability_change(slot, record)

    if old.passive is not None and new.passive is not None:
        change_set.passive_change = _text_record(
            "description", old.passive.description, new.passive.description
        )


@_diff_variant.register
def _(new: Item, old: Item, change_set: EntityChangeSet, epsilon: float) -> None:
    scalars = change_set.scalar_changes
    scalars.extend(_diff_stats(old.modifiers, new.modifiers, epsilon, missing=0.0))
    if old.cost is not None and new.cost is not None and old.cost != new.cost:
        scalars.append(_record("gold", old.cost, new.cost))
    _append(scalars, _text_record("description", old.description, new.description))


@_diff_variant.register
def _(new: Rune, old: Entity, change_set: EntityChangeSet, epsilon: float) -> None:
    _append(change_set.scalar_changes, _text_record("description", old.description, new.description))


@_diff_variant.register
def _(
    new: SummonerAbility, old: SummonerAbility, change_set: EntityChangeSet, epsilon: float
) -> None:
    scalars = change_set.scalar_changes
    _append(scalars, _rank_string_record("cooldown", old.cooldown, new.cooldown))
    _append(scalars, _text_record("description", old.description, new.description))


def _diff_stats(
    old: Mapping[str, float],
    new: Mapping[str, float],
    epsilon: float,
    *,
    missing: float | None,
) -> Iterator[ChangeRecord]:
    keys = list(new)
    keys.extend(key for key in old if key not in new)
    for key in keys:
        before = old.get(key, missing)
        after = new.get(key, missing)
        if before is None or after is None:
            continue
        if numbers_differ(before, after, epsilon):
            yield _record(key, before, after)


def _diff_ability(old: Ability, new: Ability, epsilon: float) -> Iterator[ChangeRecord]:
    for attribute, before, after in (
        ("cooldown", old.cooldown, new.cooldown),
        ("cost", old.cost, new.cost),
    ):
        record = _rank_string_record(attribute, before, after)
        if record is not None:
            yield record

    for old_effect, new_effect in zip(old.effects, new.effects, strict=False):
        record = _effect_record(old_effect, new_effect, epsilon)
        if record is not None:
            yield record

    record = _text_record("description", old.description, new.description)
    if record is not None:
        yield record


def _effect_record(old: RankedArray, new: RankedArray, epsilon: float) -> ChangeRecord | None:
    before = [value for value in old if value is not None]
    after = [value for value in new if value is not None]
    if not before or not after:
        return None
    if len(before) == len(after) and not any(
        numbers_differ(a, b, epsilon) for a, b in zip(before, after, strict=True)
    ):
        return None
    if all(value == 0 for value in after):
        log.debug("Suppressing all-zero effect array (was %s)", join_ranks(old))
        return None
    old_text, new_text = join_ranks(old), join_ranks(new)
    if old_text == new_text:
        return None
    return _record("damage", old_text, new_text)


def _rank_string_record(attribute: str, old: str | None, new: str | None) -> ChangeRecord | None:
    if old is None or new is None:
        return None
    before, after = old.strip(), new.strip()
    if not before or not after or before == after:
        return None
    return _record(attribute, before, after)


def _text_record(attribute: str, old: str, new: str) -> ChangeRecord | None:
    if old.strip() == new.strip():
        return None
    return ChangeRecord(attribute=attribute, old=old, new=new, polarity=Polarity.ADJUSTMENT)


def _record(attribute: str, old: float | int | str, new: float | int | str) -> ChangeRecord:
    return ChangeRecord(
        attribute=attribute,
        old=old,
        new=new,
        polarity=classify(attribute, old, new),
        origin=ChangeOrigin.STRUCTURAL,
    )


def _append(records: list[ChangeRecord], record: ChangeRecord | None) -> None:
    if record is not None:
        records.append(record)
