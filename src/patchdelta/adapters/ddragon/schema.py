"""Pydantic models describing the Data Dragon static data payloads."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field, RootModel, field_validator


class DataDragonBaseModel(BaseModel):
    model_config = ConfigDict(extra="ignore", populate_by_name=True)


class VersionList(RootModel[list[str]]):
    """``api/versions.json``: newest first."""


class SpellPayload(DataDragonBaseModel):
    id: str
    name: str
    description: str = ""
    tooltip: str = ""
    cooldown_burn: str | None = Field(default=None, alias="cooldownBurn")
    cost_burn: str | None = Field(default=None, alias="costBurn")
    range_burn: str | None = Field(default=None, alias="rangeBurn")
    effect: list[list[float | None] | None] = Field(default_factory=list)

    @field_validator("effect", mode="before")
    @classmethod
    def _none_to_empty(cls, value: object) -> object:
        return [] if value is None else value


class PassivePayload(DataDragonBaseModel):
    name: str
    description: str = ""


class ChampionPayload(DataDragonBaseModel):
    id: str
    key: str
    name: str
    title: str = ""
    stats: dict[str, float] = Field(default_factory=dict)
    spells: list[SpellPayload] = Field(default_factory=list)
    passive: PassivePayload | None = None


class ChampionFullResponse(DataDragonBaseModel):
    version: str
    data: dict[str, ChampionPayload]


class GoldPayload(DataDragonBaseModel):
    base: int = 0
    total: int = 0
    sell: int = 0
    purchasable: bool = True


class ItemPayload(DataDragonBaseModel):
    name: str
    description: str = ""
    plaintext: str = ""
    gold: GoldPayload = Field(default_factory=GoldPayload)
    stats: dict[str, float] = Field(default_factory=dict)
    maps: dict[str, bool] = Field(default_factory=dict)
    in_store: bool = Field(default=True, alias="inStore")


class ItemResponse(DataDragonBaseModel):
    version: str
    data: dict[str, ItemPayload]


class RunePayload(DataDragonBaseModel):
    id: int
    key: str
    name: str
    short_desc: str = Field(default="", alias="shortDesc")
    long_desc: str = Field(default="", alias="longDesc")


class RuneSlotPayload(DataDragonBaseModel):
    runes: list[RunePayload] = Field(default_factory=list)


class RunePathPayload(DataDragonBaseModel):
    id: int
    key: str
    name: str
    slots: list[RuneSlotPayload] = Field(default_factory=list)


class RunePathList(RootModel[list[RunePathPayload]]):
    """``runesReforged.json``: a bare list of rune paths."""


class SummonerPayload(DataDragonBaseModel):
    id: str
    key: str
    name: str
    description: str = ""
    cooldown_burn: str | None = Field(default=None, alias="cooldownBurn")
    modes: list[str] = Field(default_factory=list)


class SummonerResponse(DataDragonBaseModel):
    version: str
    data: dict[str, SummonerPayload]
