"""Change records and the per-entity change sets produced by one reconciliation run."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from .enums import ABILITY_SLOTS, AbilitySlot, ChangeOrigin, EntityKind, Polarity

if TYPE_CHECKING:
    from collections.abc import Iterator

    from .entities import EntityId


type ChangeValue = float | int | str


@dataclass(frozen=True, slots=True, kw_only=True)
class ChangeRecord:
    """One atomic before/after observation for a single attribute."""

    attribute: str
    old: ChangeValue
    new: ChangeValue
    polarity: Polarity = Polarity.ADJUSTMENT
    origin: ChangeOrigin = ChangeOrigin.STRUCTURAL

    def __post_init__(self) -> None:
        if self.old == self.new:
            raise ValueError(
                f"No-op change for attribute {self.attribute!r}: {self.old!r} == {self.new!r}"
            )


@dataclass(slots=True, kw_only=True)
class EntityChangeSet:
    """All changes attributed to one canonical entity in one run."""

    entity_id: EntityId
    name: str
    scalar_changes: list[ChangeRecord] = field(default_factory=list["ChangeRecord"])
    ability_changes: dict[AbilitySlot, list[ChangeRecord]] = field(
        default_factory=dict["AbilitySlot", "list[ChangeRecord]"]
    )
    passive_change: ChangeRecord | None = None
    free_context: list[str] = field(default_factory=list[str])
    summary: str = ""
    context: str = ""
    declared_polarity: Polarity | None = None
    is_new: bool = False

    @property
    def kind(self) -> EntityKind:
        return self.entity_id.kind

    def add_ability_change(self, slot: AbilitySlot, record: ChangeRecord) -> None:
        self.ability_changes.setdefault(slot, []).append(record)

    def records(self) -> Iterator[ChangeRecord]:
        """Every record in display order: scalars, slots Q..R, passive."""

        yield from self.scalar_changes
        for slot in ABILITY_SLOTS:
            yield from self.ability_changes.get(slot, ())
        if self.passive_change is not None:
            yield self.passive_change

    def is_empty(self) -> bool:
        return (
            not self.scalar_changes
            and not any(self.ability_changes.values())
            and self.passive_change is None
            and not self.free_context
            and not self.summary
            and not self.context
        )


@dataclass(frozen=True, slots=True, kw_only=True)
class ChangelogBlock:
    """Raw changelog text attributed to one (still unresolved) entity name."""

    entity_name_raw: str
    lines: tuple[str, ...] = ()
    kind_hint: EntityKind | None = None
    summary: str = ""
    context: str = ""
    section: str | None = None
    declared_polarity: Polarity | None = None


@dataclass(frozen=True, slots=True, kw_only=True)
class UnresolvedBlock:
    """A changelog block that could not be attributed to any canonical entity."""

    entity_name_raw: str
    lines: tuple[str, ...]
    kind_hint: EntityKind | None = None
    reason: str = "no_alias_match"


@dataclass(slots=True)
class Diagnostics:
    unresolved: list[UnresolvedBlock] = field(default_factory=list[UnresolvedBlock])

    def add(self, block: ChangelogBlock, *, reason: str) -> None:
        self.unresolved.append(
            UnresolvedBlock(
                entity_name_raw=block.entity_name_raw,
                lines=block.lines,
                kind_hint=block.kind_hint,
                reason=reason,
            )
        )

    def __len__(self) -> int:
        return len(self.unresolved)


@dataclass(slots=True, kw_only=True)
class ReconciliationResult:
    """Output of one engine run: ordered change sets plus diagnostics."""

    version: str
    previous_version: str
    change_sets: list[EntityChangeSet] = field(default_factory=list[EntityChangeSet])
    diagnostics: Diagnostics = field(default_factory=Diagnostics)

    def for_kind(self, kind: EntityKind) -> list[EntityChangeSet]:
        return [change_set for change_set in self.change_sets if change_set.kind is kind]

    def get(self, entity_id: EntityId) -> EntityChangeSet | None:
        for change_set in self.change_sets:
            if change_set.entity_id == entity_id:
                return change_set
        return None
