from __future__ import annotations

import pytest

from patchdelta.domain.model import ChangeOrigin, ChangeRecord, Polarity
from patchdelta.domain.reconciliation import ArrowRule, BugFixRule, parse_line
from patchdelta.domain.reconciliation.parse import strip_bullet


def test_arrow_line_becomes_record() -> None:
    assert parse_line("Daño: 60/120/180 -> 50/110/170") == ChangeRecord(
        attribute="Daño",
        old="60/120/180",
        new="50/110/170",
        polarity=Polarity.ADJUSTMENT,
        origin=ChangeOrigin.CHANGELOG,
    )


def test_bug_fix_line_has_empty_old_value() -> None:
    record = parse_line("Corrección de error: ya no se cancela al usar Flash.")

    assert isinstance(record, ChangeRecord)
    assert record.attribute == "Corrección de error"
    assert record.old == ""
    assert record.new == "ya no se cancela al usar Flash."
    assert record.polarity is Polarity.ADJUSTMENT


@pytest.mark.parametrize(
    ("line", "attribute", "old", "new"),
    [
        ("• Enfriamiento: 12 ⇒ 10", "Enfriamiento", "12", "10"),
        ("- Vida base: 600 → 630", "Vida base", "600", "630"),
        ("**Maná por nivel:** 30 => 35", "Maná por nivel", "30", "35"),
        ("Daño (monstruos): 60 -> 80.", "Daño", "60", "80"),
        ("Armadura: 30 – 32", "Armadura", "30", "32"),
        ("Coste: 50 &rArr; 40", "Coste", "50", "40"),
        ("Alcance: 550 ➤ 575", "Alcance", "550", "575"),
    ],
)
def test_arrow_spelling_variants(line: str, attribute: str, old: str, new: str) -> None:
    record = parse_line(line)

    assert isinstance(record, ChangeRecord)
    assert (record.attribute, record.old, record.new) == (attribute, old, new)


@pytest.mark.parametrize(
    ("line", "expected"),
    [
        ("• Ahora también ralentiza a los enemigos.", "Ahora también ralentiza a los enemigos."),
        ("Maná: 50 -> 50", "Maná: 50 -> 50"),
        ("Sin etiqueta -> nuevo", "Sin etiqueta -> nuevo"),
    ],
)
def test_unmatched_lines_fall_back_to_commentary(line: str, expected: str) -> None:
    assert parse_line(line) == expected


def test_rules_are_independently_usable() -> None:
    assert BugFixRule().apply("Daño: 1 -> 2") is None
    assert ArrowRule().apply("Bug fix: texto") is None
    record = BugFixRule().apply("Bug fix: texto")
    assert record is not None
    assert record.new == "texto"


def test_strip_bullet_keeps_hyphenated_words() -> None:
    assert strip_bullet("- Vida") == "Vida"
    assert strip_bullet("-5 de armadura") == "-5 de armadura"
    assert strip_bullet("•Vida") == "Vida"
