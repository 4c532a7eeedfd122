from __future__ import annotations

import pytest

from patchdelta.domain.reconciliation.normalize import loose_name, normalize_name, strip_diacritics


@pytest.mark.parametrize(
    ("raw", "expected"),
    [
        ("Kai'Sa", "kaisa"),
        ("Nunu y Willump", "nunuywillump"),
        ("  Cho'Gath  ", "chogath"),
        ("Tónico Triple", "tonicotriple"),
        ("ＡＨＲＩ", "ahri"),
        ("", ""),
        (None, ""),
    ],
)
def test_normalize_name_folds_case_accents_and_punctuation(raw: str | None, expected: str) -> None:
    assert normalize_name(raw) == expected


def test_normalize_name_is_idempotent() -> None:
    once = normalize_name("Mejora de Ornn: Anochecer y Amanecer")

    assert normalize_name(once) == once


def test_loose_name_keeps_word_boundaries() -> None:
    assert loose_name("  Mejora   de ORNN ") == "mejora de ornn"
    assert loose_name("Irrupción de Fase") == "irrupcion de fase"


def test_strip_diacritics_keeps_base_letters() -> None:
    assert strip_diacritics("Ñandú") == "Nandu"
