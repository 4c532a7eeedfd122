from __future__ import annotations

import pytest

from patchdelta.domain.model import (
    AbilitySlot,
    ChangeOrigin,
    ChangeRecord,
    EntityChangeSet,
    EntityId,
    EntityKind,
    Polarity,
)
from patchdelta.domain.reconciliation.merge import (
    concatenate,
    finalize_polarity,
    merge_change_sets,
    ordered_ids,
)
from tests.helpers.snapshots import make_champion, make_item, make_snapshot

AHRI = EntityId(EntityKind.CHAMPION, "Ahri")


def _changelog(attribute: str, old: str, new: str) -> ChangeRecord:
    return ChangeRecord(attribute=attribute, old=old, new=new, origin=ChangeOrigin.CHANGELOG)


def _structural_set() -> EntityChangeSet:
    change_set = EntityChangeSet(entity_id=AHRI, name="Ahri")
    change_set.add_ability_change(
        AbilitySlot.Q,
        ChangeRecord(attribute="cooldown", old="10/9/8", new="10/9/7", polarity=Polarity.BUFF),
    )
    change_set.passive_change = ChangeRecord(attribute="description", old="Cura 10.", new="Cura 12.")
    return change_set


def test_structural_records_win_over_changelog_duplicates() -> None:
    textual = EntityChangeSet(entity_id=AHRI, name="ahri", summary="Ahri recibe mejoras.")
    textual.add_ability_change(AbilitySlot.Q, _changelog("Enfriamiento", "10", "9"))
    textual.add_ability_change(AbilitySlot.Q, _changelog("Daño", "60/120", "70/130"))
    textual.passive_change = _changelog("description", "", "Ahora cura más.")

    merged = merge_change_sets(_structural_set(), textual)

    q_records = merged.ability_changes[AbilitySlot.Q]
    assert [(record.attribute, record.origin, record.polarity) for record in q_records] == [
        ("cooldown", ChangeOrigin.STRUCTURAL, Polarity.BUFF),
        ("Daño", ChangeOrigin.CHANGELOG, Polarity.BUFF),
    ]
    assert merged.passive_change is not None
    assert merged.passive_change.new == "Cura 12."
    assert merged.name == "Ahri"
    assert merged.summary == "Ahri recibe mejoras."


def test_changelog_only_entity_is_classified_at_merge() -> None:
    textual = EntityChangeSet(entity_id=AHRI, name="Ahri", free_context=["Ajustes."])
    textual.scalar_changes.append(_changelog("Vida", "600", "630"))
    textual.add_ability_change(AbilitySlot.W, _changelog("note", "", "Ahora ralentiza."))

    merged = merge_change_sets(None, textual)

    assert [record.polarity for record in merged.records()] == [
        Polarity.BUFF,
        Polarity.ADJUSTMENT,
    ]
    assert merged.free_context == ["Ajustes."]


def test_commentary_in_a_slot_survives_structural_description_change() -> None:
    structural = EntityChangeSet(entity_id=AHRI, name="Ahri")
    structural.add_ability_change(
        AbilitySlot.W, ChangeRecord(attribute="description", old="Viejo", new="Nuevo")
    )
    textual = EntityChangeSet(entity_id=AHRI, name="Ahri")
    textual.add_ability_change(AbilitySlot.W, _changelog("note", "", "Ahora ralentiza."))

    merged = merge_change_sets(structural, textual)

    assert [record.attribute for record in merged.ability_changes[AbilitySlot.W]] == [
        "description",
        "note",
    ]


def test_merge_needs_at_least_one_side() -> None:
    with pytest.raises(ValueError, match="at least one"):
        merge_change_sets(None, None)


def test_merge_rejects_mismatched_entities() -> None:
    other = EntityChangeSet(entity_id=EntityId(EntityKind.CHAMPION, "Zed"), name="Zed")

    with pytest.raises(ValueError, match="Cannot merge"):
        merge_change_sets(_structural_set(), other)


def test_finalize_polarity_keeps_declared_record_polarity() -> None:
    record = ChangeRecord(
        attribute="Daño", old="60", new="50", polarity=Polarity.BUFF, origin=ChangeOrigin.CHANGELOG
    )

    assert finalize_polarity(record) is record
    assert finalize_polarity(_changelog("Daño", "60", "50")).polarity is Polarity.NERF


def test_concatenate_joins_blocks_for_the_same_entity() -> None:
    first = EntityChangeSet(entity_id=AHRI, name="Ahri", summary="Primero")
    first.passive_change = _changelog("description", "", "Línea uno")
    second = EntityChangeSet(
        entity_id=AHRI, name="Ahri", summary="Segundo", declared_polarity=Polarity.NERF
    )
    second.passive_change = _changelog("description", "", "Línea dos")
    second.add_ability_change(AbilitySlot.E, _changelog("Daño", "1", "2"))

    joined = concatenate(first, second)

    assert joined is first
    assert joined.passive_change is not None
    assert joined.passive_change.new == "Línea uno\nLínea dos"
    assert joined.summary == "Primero\nSegundo"
    assert joined.declared_polarity is Polarity.NERF
    assert list(joined.ability_changes) == [AbilitySlot.E]


def test_ordered_ids_follow_kind_then_snapshot_order() -> None:
    current = make_snapshot(
        "14.24.1",
        make_item("3031"),
        make_champion("Zed"),
        make_champion("Ahri"),
    )
    zed = EntityId(EntityKind.CHAMPION, "Zed")
    item = EntityId(EntityKind.ITEM, "3031")
    structural = {item: EntityChangeSet(entity_id=item, name="Filo")}
    textual = {
        AHRI: EntityChangeSet(entity_id=AHRI, name="Ahri"),
        zed: EntityChangeSet(entity_id=zed, name="Zed"),
    }

    assert ordered_ids(current, structural, textual) == [zed, AHRI, item]
