from __future__ import annotations

import json
from pathlib import Path

import pytest

from patchdelta.domain.model import Passive, Snapshot
from tests.helpers.snapshots import (
    make_ability,
    make_champion,
    make_item,
    make_rune,
    make_snapshot,
    make_summoner,
)

DATA_DIR = Path(__file__).resolve().parent / "data"


@pytest.fixture(autouse=True)
def _isolate_environment(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
    for name in (
        "PATCHDELTA_DATA_DIR",
        "PATCHDELTA_HTTP_CACHE",
        "PATCHDELTA_LOCALE",
        "PATCHDELTA_ALIAS_LOCALES",
        "PATCHDELTA_FLOAT_EPSILON",
        "DDRAGON_BASE_URL",
        "PATCH_NOTES_BASE_URL",
        "PATCH_NOTES_LOCALE",
    ):
        monkeypatch.delenv(name, raising=False)
    monkeypatch.setenv("PATCHDELTA_DATA_DIR", str(tmp_path / "data"))
    monkeypatch.setenv("PATCHDELTA_HTTP_CACHE", "off")


@pytest.fixture(scope="session")
def patch_notes_html() -> str:
    return (DATA_DIR / "patch_notes_es.html").read_text(encoding="utf-8")


@pytest.fixture(scope="session")
def extraction_payload() -> dict[str, object]:
    return json.loads((DATA_DIR / "extraction.json").read_text(encoding="utf-8"))


@pytest.fixture(scope="session")
def ddragon_payloads() -> dict[str, object]:
    return json.loads((DATA_DIR / "ddragon_payloads.json").read_text(encoding="utf-8"))


@pytest.fixture
def previous_snapshot() -> Snapshot:
    return make_snapshot(
        "14.23.1",
        make_champion(
            "Ahri",
            stats={"hp": 590.0, "attackdamage": 53.0},
            abilities=(
                make_ability(cooldown="10/9/8/7/6", effects=((None, 60.0, 120.0, 180.0),)),
            ),
        ),
        make_champion("MonkeyKing", "Wukong"),
        make_item("3031", "Filo del Infinito", cost=3400),
        make_item("2010", "Galleta", cost=50, purchasable=False),
        make_rune("8005", "Compás letal"),
        make_summoner("SummonerFlash", "Destello", cooldown="300"),
    )


@pytest.fixture
def current_snapshot() -> Snapshot:
    return make_snapshot(
        "14.24.1",
        make_champion(
            "Ahri",
            stats={"hp": 610.0, "attackdamage": 53.0},
            abilities=(
                make_ability(cooldown="10/9/8/7/5", effects=((None, 60.0, 120.0, 180.0),)),
            ),
        ),
        make_champion("MonkeyKing", "Wukong"),
        make_champion(
            "Aurora",
            abilities=(),
            passive=Passive(name="Espíritu", description="Nueva campeona."),
        ),
        make_item("3031", "Filo del Infinito", cost=3450),
        make_item("2010", "Galleta", cost=75, purchasable=False),
        make_rune("8005", "Compás letal"),
        make_summoner("SummonerFlash", "Destello", cooldown="300"),
    )
