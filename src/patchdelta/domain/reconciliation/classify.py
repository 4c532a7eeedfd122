"""Buff / nerf / adjustment classification.

Responsibilities of this stage:
- map provider stat keys and localized changelog labels onto one canonical
  attribute vocabulary
- attach a polarity rule to every canonical attribute
- compare a single representative number per side (the last rank)

Precise per-rank directionality is not attempted: a change that raises early
ranks but lowers the last one classifies as the last rank says.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from types import MappingProxyType
from typing import TYPE_CHECKING

from patchdelta.domain.model import Polarity, PolarityRule

from .normalize import normalize_name

if TYPE_CHECKING:
    from collections.abc import Mapping

    from patchdelta.domain.model import ChangeValue


@dataclass(frozen=True, slots=True)
class AttributeTerm:
    """One vocabulary entry: ``contains`` matches substrings, ``exact`` whole labels."""

    canonical: str
    contains: tuple[str, ...] = ()
    exact: tuple[str, ...] = ()

    def matches(self, key: str) -> bool:
        return key in self.exact or any(token in key for token in self.contains)


# Order matters: the first matching term wins.
ATTRIBUTE_VOCABULARY: tuple[AttributeTerm, ...] = (
    AttributeTerm("note", exact=("note",)),
    AttributeTerm("bug_fix", contains=("correcciondeerror", "bugfix")),
    AttributeTerm("description", contains=("descripcion", "description")),
    AttributeTerm("cooldown", contains=("enfriamiento", "cooldown", "recarga"), exact=("cd",)),
    AttributeTerm("gold", contains=("oro", "gold", "precio", "price")),
    AttributeTerm("cost", contains=("coste", "costo", "cost")),
    AttributeTerm("duration", contains=("duracion", "duration")),
    AttributeTerm("regen", contains=("regeneracion", "regen")),
    AttributeTerm("penetration", contains=("letalidad", "lethality", "penetracion", "penetration")),
    AttributeTerm("ratio", contains=("ratio", "relacion", "escalado", "scaling")),
    AttributeTerm(
        "heal_shield",
        contains=("curacion", "heal", "escudo", "shield", "robodevida", "lifesteal", "omnivamp"),
    ),
    AttributeTerm(
        "attack_speed",
        contains=("velocidaddeataque", "attackspeed"),
        exact=("as",),
    ),
    AttributeTerm(
        "move_speed",
        contains=("velocidaddemovimiento", "movespeed", "movementspeed"),
        exact=("ms",),
    ),
    AttributeTerm(
        "attack_damage",
        contains=("danodeataque", "attackdamage", "physicaldamage"),
        exact=("ad",),
    ),
    AttributeTerm(
        "ability_power",
        contains=("poderdehabilidad", "abilitypower", "magicdamagemod"),
        exact=("ap",),
    ),
    AttributeTerm(
        "magic_resist",
        contains=("resistenciamagica", "magicresist", "spellblock"),
        exact=("mr",),
    ),
    AttributeTerm("armor", contains=("armadura", "armor")),
    AttributeTerm("range", contains=("alcance", "rango", "range")),
    AttributeTerm(
        "health",
        contains=("vida", "salud", "health", "hppool"),
        exact=("hp", "hpperlevel"),
    ),
    AttributeTerm("mana", contains=("manapool", "mppool"), exact=("mp", "mpperlevel", "mana")),
    AttributeTerm("crit", contains=("critico", "crit")),
    AttributeTerm("damage", contains=("dano", "damage", "dmg")),
)

_LOWER_IS_BETTER = ("cooldown", "cost", "gold")
_CONTEXTUAL = ("note", "bug_fix", "description", "duration")
_HIGHER_IS_BETTER = (
    "ratio",
    "regen",
    "heal_shield",
    "attack_speed",
    "move_speed",
    "attack_damage",
    "ability_power",
    "magic_resist",
    "armor",
    "penetration",
    "range",
    "health",
    "mana",
    "crit",
    "damage",
)

POLARITY_RULES: Mapping[str, PolarityRule] = MappingProxyType(
    {
        **dict.fromkeys(_LOWER_IS_BETTER, PolarityRule.LOWER_IS_BETTER),
        **dict.fromkeys(_CONTEXTUAL, PolarityRule.CONTEXTUAL),
        **dict.fromkeys(_HIGHER_IS_BETTER, PolarityRule.HIGHER_IS_BETTER),
    }
)

_NUMBER = re.compile(r"-?\d+(?:[.,]\d+)?")
_THOUSANDS = re.compile(r"(?<![\d.,])[1-9]\d{0,2}(?:[.,]\d{3})+(?![.,]?\d)")


def canonical_attribute(label: str) -> str:
    """Canonical attribute for a stat key or localized label.

    Unknown labels fall back to their normalized form so they still key merges.
    """

    key = normalize_name(label)
    for term in ATTRIBUTE_VOCABULARY:
        if term.matches(key):
            return term.canonical
    return key


def rule_for(attribute: str) -> PolarityRule:
    return POLARITY_RULES.get(canonical_attribute(attribute), PolarityRule.CONTEXTUAL)


def representative_number(value: ChangeValue | None) -> float | None:
    """Last rank of a ``/``-joined sequence as a float, or ``None``."""

    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, int | float):
        return float(value)
    tokens = [token for token in value.split("/") if token.strip()]
    if not tokens:
        return None
    token = _THOUSANDS.sub(lambda grouped: re.sub(r"[.,]", "", grouped.group(0)), tokens[-1])
    match = _NUMBER.search(token)
    if match is None:
        return None
    return float(match.group(0).replace(",", "."))


def classify(
    attribute: str,
    old: ChangeValue | None,
    new: ChangeValue | None,
    rule: PolarityRule | None = None,
) -> Polarity:
    rule = rule if rule is not None else rule_for(attribute)
    if rule is PolarityRule.CONTEXTUAL:
        return Polarity.ADJUSTMENT

    before = representative_number(old)
    after = representative_number(new)
    if before is None or after is None or before == after:
        return Polarity.ADJUSTMENT

    improved = after > before if rule is PolarityRule.HIGHER_IS_BETTER else after < before
    return Polarity.BUFF if improved else Polarity.NERF
