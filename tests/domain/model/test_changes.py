from __future__ import annotations

import pytest

from patchdelta.domain.model import (
    AbilitySlot,
    ChangelogBlock,
    ChangeOrigin,
    ChangeRecord,
    Diagnostics,
    EntityChangeSet,
    EntityId,
    EntityKind,
    Polarity,
    ReconciliationResult,
)

AHRI = EntityId(EntityKind.CHAMPION, "Ahri")


def _record(attribute: str, old: str = "1", new: str = "2") -> ChangeRecord:
    return ChangeRecord(attribute=attribute, old=old, new=new, origin=ChangeOrigin.CHANGELOG)


def test_change_record_rejects_noop_changes() -> None:
    with pytest.raises(ValueError, match="No-op change"):
        ChangeRecord(attribute="hp", old=600.0, new=600.0)


def test_change_record_defaults_to_structural_adjustment() -> None:
    record = ChangeRecord(attribute="hp", old=600.0, new=630.0)

    assert record.polarity is Polarity.ADJUSTMENT
    assert record.origin is ChangeOrigin.STRUCTURAL


def test_change_set_records_follow_display_order() -> None:
    change_set = EntityChangeSet(entity_id=AHRI, name="Ahri")
    change_set.add_ability_change(AbilitySlot.R, _record("r"))
    change_set.add_ability_change(AbilitySlot.Q, _record("q"))
    change_set.scalar_changes.append(_record("hp"))
    change_set.passive_change = ChangeRecord(attribute="description", old="", new="Nueva pasiva")

    assert [record.attribute for record in change_set.records()] == ["hp", "q", "r", "description"]
    assert change_set.kind is EntityKind.CHAMPION


def test_change_set_with_only_commentary_is_not_empty() -> None:
    change_set = EntityChangeSet(entity_id=AHRI, name="Ahri")
    assert change_set.is_empty()

    change_set.free_context.append("Ajustes generales.")
    assert not change_set.is_empty()


def test_diagnostics_keep_raw_block_content() -> None:
    diagnostics = Diagnostics()
    diagnostics.add(
        ChangelogBlock(
            entity_name_raw="Campeón desconocido",
            lines=("Daño: 1 -> 2",),
            kind_hint=EntityKind.CHAMPION,
        ),
        reason="no_alias_match",
    )

    assert len(diagnostics) == 1
    unresolved = diagnostics.unresolved[0]
    assert unresolved.entity_name_raw == "Campeón desconocido"
    assert unresolved.lines == ("Daño: 1 -> 2",)
    assert unresolved.reason == "no_alias_match"


def test_result_lookup_by_kind_and_id() -> None:
    item = EntityId(EntityKind.ITEM, "3031")
    result = ReconciliationResult(
        version="14.24.1",
        previous_version="14.23.1",
        change_sets=[
            EntityChangeSet(entity_id=AHRI, name="Ahri"),
            EntityChangeSet(entity_id=item, name="Filo del Infinito"),
        ],
    )

    assert [change_set.name for change_set in result.for_kind(EntityKind.ITEM)] == [
        "Filo del Infinito"
    ]
    found = result.get(AHRI)
    assert found is not None
    assert found.name == "Ahri"
    assert result.get(EntityId(EntityKind.RUNE, "8005")) is None
