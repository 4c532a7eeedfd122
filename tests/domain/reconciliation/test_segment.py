from __future__ import annotations

import pytest

from patchdelta.domain.model import (
    AbilitySlot,
    ChangelogBlock,
    ChangeRecord,
    EntityId,
    EntityKind,
    Polarity,
)
from patchdelta.domain.reconciliation import (
    IdentityResolver,
    group_by_heading,
    segment_block,
    segment_lines,
)
from patchdelta.domain.reconciliation.segment import Section, detect_heading, kind_for_heading
from tests.helpers.snapshots import make_champion, make_item, make_snapshot

AHRI = EntityId(EntityKind.CHAMPION, "Ahri")


@pytest.mark.parametrize(
    ("line", "section"),
    [
        ("Estadísticas básicas", Section.STATS),
        ("**Base stats**", Section.STATS),
        ("Pasiva - Robo de esencia", Section.PASSIVE),
        ("Passive", Section.PASSIVE),
        ("Q - Orbe del engaño", Section.Q),
        ("**W**", Section.W),
        ("E: Encanto", Section.E),
        ("R", Section.R),
        ("Reducción de armadura: 5 -> 10", None),
        ("Pasivamente aumenta la vida", None),
        ("q - minúscula", None),
    ],
)
def test_detect_heading(line: str, section: Section | None) -> None:
    assert detect_heading(line) is section


def test_segment_lines_routes_each_section() -> None:
    segmented = segment_lines(
        [
            "Ahri es más fuerte al principio de la partida.",
            "Estadísticas básicas",
            "Vida: 600 -> 630",
            "Pasiva - Robo de esencia",
            "Ahora cura más.",
            "Q - Orbe del engaño",
            "Daño: 60/120/180 -> 50/110/170",
            "Ahora atraviesa súbditos.",
            "W",
            "• Enfriamiento: 9 -> 8",
        ]
    )

    assert segmented.free_context == [
        "Ahri es más fuerte al principio de la partida.",
        "Estadísticas básicas",
        "Vida: 600 -> 630",
    ]
    assert segmented.passive is not None
    assert (segmented.passive.old, segmented.passive.new) == ("", "Ahora cura más.")
    q_records = segmented.abilities[AbilitySlot.Q]
    assert [(record.attribute, record.old, record.new) for record in q_records] == [
        ("Daño", "60/120/180", "50/110/170"),
        ("note", "", "Ahora atraviesa súbditos."),
    ]
    assert [record.attribute for record in segmented.abilities[AbilitySlot.W]] == ["Enfriamiento"]


def test_segment_lines_accounts_for_every_content_line_once() -> None:
    content = [
        "Introducción",
        "Daño: 1 -> 2",
        "comentario de Q",
        "Enfriamiento: 3 -> 4",
        "primera línea de pasiva",
        "segunda línea de pasiva",
        "Vida: 500 -> 520",
    ]
    lines = [
        content[0],
        "",
        "Q",
        content[1],
        "•",
        content[2],
        "W",
        content[3],
        "Pasiva",
        content[4],
        "   ",
        content[5],
        "Estadísticas",
        content[6],
    ]

    segmented = segment_lines(lines)

    structured = sum(len(records) for records in segmented.abilities.values())
    passive = segmented.passive.new.split("\n") if segmented.passive else []
    commentary = [line for line in segmented.free_context if line != "Estadísticas"]
    assert structured + len(passive) + len(commentary) == len(content)
    assert passive == [content[4], content[5]]
    assert commentary == [content[0], content[6]]


def test_segment_block_carries_block_metadata() -> None:
    block = ChangelogBlock(
        entity_name_raw="ahri",
        lines=("Q", "Daño: 1 -> 2"),
        kind_hint=EntityKind.CHAMPION,
        summary="Resumen",
        context="Contexto del desarrollador",
        declared_polarity=Polarity.NERF,
    )

    change_set = segment_block(block, AHRI, "Ahri")

    assert change_set.entity_id == AHRI
    assert change_set.name == "Ahri"
    assert change_set.summary == "Resumen"
    assert change_set.context == "Contexto del desarrollador"
    assert change_set.declared_polarity is Polarity.NERF
    records = change_set.ability_changes[AbilitySlot.Q]
    assert len(records) == 1
    assert isinstance(records[0], ChangeRecord)


def test_kind_for_heading() -> None:
    assert kind_for_heading("Campeones") is EntityKind.CHAMPION
    assert kind_for_heading("Objetos") is EntityKind.ITEM
    assert kind_for_heading("Runas") is EntityKind.RUNE
    assert kind_for_heading("Hechizos de invocador") is EntityKind.SUMMONER
    assert kind_for_heading("Cambios de ARAM") is None


def test_group_by_heading_splits_document_into_blocks() -> None:
    snapshot = make_snapshot(
        "14.24.1",
        make_champion("Ahri"),
        make_item("3031", "Filo del Infinito"),
    )
    resolver = IdentityResolver.for_snapshot(snapshot)
    lines = [
        "Notas generales de la versión.",
        "## Campeones",
        "Ahri",
        "Q",
        "Daño: 1 -> 2",
        "### Zed",
        "Ahora es más rápido.",
        "",
        "## Objetos",
        "**Filo del Infinito:**",
        "Daño de ataque: 65 -> 70",
    ]

    blocks, preamble = group_by_heading(lines, resolver)

    assert preamble == ["Notas generales de la versión."]
    assert [(block.entity_name_raw, block.kind_hint, block.lines) for block in blocks] == [
        ("Ahri", EntityKind.CHAMPION, ("Q", "Daño: 1 -> 2")),
        ("Zed", EntityKind.CHAMPION, ("Ahora es más rápido.",)),
        ("Filo del Infinito", EntityKind.ITEM, ("Daño de ataque: 65 -> 70",)),
    ]


def test_group_by_heading_keeps_prose_naming_an_item_inside_its_block() -> None:
    snapshot = make_snapshot(
        "14.24.1",
        make_item("3031", "Filo del Infinito"),
        make_item("7002", "Anochecer y Amanecer de Draktharr"),
    )
    resolver = IdentityResolver.for_snapshot(snapshot)
    lines = [
        "## Objetos",
        "Filo del Infinito",
        "Daño de ataque: 65 -> 70",
        "Ahora combina mejor con Ocaso y Amanecer.",
        "Crítico: 20% -> 25%",
    ]

    blocks, preamble = group_by_heading(lines, resolver)

    assert preamble == []
    assert [(block.entity_name_raw, block.lines) for block in blocks] == [
        (
            "Filo del Infinito",
            (
                "Daño de ataque: 65 -> 70",
                "Ahora combina mejor con Ocaso y Amanecer.",
                "Crítico: 20% -> 25%",
            ),
        )
    ]


def test_group_by_heading_opens_blocks_on_exact_aliases() -> None:
    snapshot = make_snapshot(
        "14.24.1",
        make_champion("MonkeyKing", "Wukong"),
        make_item("7002", "Anochecer y Amanecer de Draktharr"),
    )
    resolver = IdentityResolver.for_snapshot(snapshot)

    blocks, _ = group_by_heading(
        ["wukong", "Vida: 600 -> 610", "Ocaso y Amanecer:", "Daño: 10 -> 12"],
        resolver,
    )

    assert [block.entity_name_raw for block in blocks] == ["wukong", "Ocaso y Amanecer"]
