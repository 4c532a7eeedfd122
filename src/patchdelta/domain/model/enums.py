"""Domain enums (pure, dependency-light)."""

from __future__ import annotations

from enum import StrEnum


class EntityKind(StrEnum):
    """Discriminator for the four tracked entity variants."""

    CHAMPION = "champion"
    ITEM = "item"
    RUNE = "rune"
    SUMMONER = "summoner"


class Polarity(StrEnum):
    BUFF = "buff"
    NERF = "nerf"
    ADJUSTMENT = "adjustment"


class PolarityRule(StrEnum):
    """How a numeric move of an attribute translates into a polarity."""

    HIGHER_IS_BETTER = "higher_is_better"
    LOWER_IS_BETTER = "lower_is_better"
    CONTEXTUAL = "contextual"


class AbilitySlot(StrEnum):
    Q = "Q"
    W = "W"
    E = "E"
    R = "R"


ABILITY_SLOTS: tuple[AbilitySlot, ...] = (
    AbilitySlot.Q,
    AbilitySlot.W,
    AbilitySlot.E,
    AbilitySlot.R,
)


class ChangeOrigin(StrEnum):
    """Which side of the pipeline produced a change record."""

    STRUCTURAL = "structural"
    CHANGELOG = "changelog"


KIND_ORDER: tuple[EntityKind, ...] = (
    EntityKind.CHAMPION,
    EntityKind.ITEM,
    EntityKind.RUNE,
    EntityKind.SUMMONER,
)
