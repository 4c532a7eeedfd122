"""Pydantic models for model-extracted (or hand-written) changelog JSON.

Two shapes are accepted:

- a bare list (or an object wrapping one under ``changes``, ``data``,
  ``items`` or ``elements``) of ``{name, type, changes}`` entries whose
  ``changes`` is one ``;``-separated string;
- ``{"champions": [...], "changes": [...]}`` where champion entries may carry
  pre-split ``stats`` triples.
"""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

WRAPPER_KEYS = ("changes", "data", "items", "elements")


class ExtractionBaseModel(BaseModel):
    model_config = ConfigDict(extra="ignore", populate_by_name=True)


class StatPayload(ExtractionBaseModel):
    stat: str
    old: str = ""
    new: str = ""

    @field_validator("old", "new", mode="before")
    @classmethod
    def _stringify(cls, value: object) -> object:
        if value is None:
            return ""
        if isinstance(value, int | float):
            return str(value)
        return value


class EntryPayload(ExtractionBaseModel):
    name: str
    type: str = ""
    changes: str | list[str] = ""
    details: str | list[str] = ""
    stats: list[StatPayload] = Field(default_factory=list)

    @field_validator("changes", "details", mode="before")
    @classmethod
    def _none_to_empty(cls, value: object) -> object:
        return "" if value is None else value

    def parts(self) -> list[str]:
        """``;``-separated parts of ``changes`` (falling back to ``details``)."""

        raw = self.changes or self.details
        chunks = raw if isinstance(raw, list) else [raw]
        return [part.strip() for chunk in chunks for part in chunk.split(";") if part.strip()]


class ExtractionDocument(ExtractionBaseModel):
    champions: list[EntryPayload] = Field(default_factory=list)
    changes: list[EntryPayload] = Field(default_factory=list)
    summary: str = ""

    @model_validator(mode="before")
    @classmethod
    def _unwrap(cls, value: Any) -> Any:
        if isinstance(value, list):
            return {"changes": value}
        if isinstance(value, dict) and "champions" not in value:
            for key in WRAPPER_KEYS:
                entries = value.get(key)
                if isinstance(entries, list):
                    return {"changes": entries, "summary": value.get("summary") or ""}
            return {"changes": [], "summary": value.get("summary") or ""}
        return value

    def entries(self) -> list[EntryPayload]:
        """Champion entries first, each tagged as such when it has no type."""

        champions = [
            entry if entry.type else entry.model_copy(update={"type": "CHAMPION"})
            for entry in self.champions
        ]
        return [*champions, *self.changes]
