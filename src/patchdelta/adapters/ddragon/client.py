"""Data Dragon snapshot source."""

from __future__ import annotations

import asyncio
from dataclasses import dataclass
from itertools import chain
from logging import getLogger
from typing import TYPE_CHECKING

import httpx
from pydantic import ValidationError

from patchdelta.adapters.http_resilience import ResilientClient
from patchdelta.domain.model import EntityKind, Snapshot
from patchdelta.domain.ports import SnapshotUnavailableError

from .schema import ChampionFullResponse, ItemResponse, RunePathList, SummonerResponse, VersionList
from .translator import (
    NO_ALIASES,
    alias_map,
    translate_champions,
    translate_items,
    translate_runes,
    translate_summoners,
)

if TYPE_CHECKING:
    from collections.abc import Callable, Iterable

    from patchdelta.config.ddragon import DataDragonConfig
    from patchdelta.config.http_resilience import ResilienceConfig
    from patchdelta.domain.model import Entity

    from .translator import AliasMap

log = getLogger(__name__)

VERSIONS_PATH = "/api/versions.json"
DATA_FILES: dict[EntityKind, str] = {
    EntityKind.CHAMPION: "championFull.json",
    EntityKind.ITEM: "item.json",
    EntityKind.RUNE: "runesReforged.json",
    EntityKind.SUMMONER: "summoner.json",
}


class DataDragonAPIError(RuntimeError):
    """Raised when Data Dragon returns an unexpected response."""


@dataclass(frozen=True, slots=True)
class _LocalePayloads:
    champions: ChampionFullResponse | None = None
    items: ItemResponse | None = None
    runes: RunePathList | None = None
    summoners: SummonerResponse | None = None

    def entities(self, aliases: AliasMap = NO_ALIASES) -> list[Entity]:
        entities: list[Entity] = []
        if self.champions is not None:
            entities.extend(translate_champions(self.champions, aliases=aliases))
        if self.items is not None:
            entities.extend(translate_items(self.items, aliases=aliases))
        if self.runes is not None:
            entities.extend(translate_runes(self.runes, aliases=aliases))
        if self.summoners is not None:
            entities.extend(translate_summoners(self.summoners, aliases=aliases))
        return entities


class DataDragonSource:
    """Fetch versioned catalog snapshots from the Data Dragon CDN.

    Implements the ``SnapshotSource`` port. Names published in the alias
    locales are attached to each entity so changelogs written in those
    languages resolve too.
    """

    def __init__(
        self,
        *,
        config: DataDragonConfig,
        kinds: Iterable[EntityKind] = tuple(DATA_FILES),
        client_factory: Callable[[ResilienceConfig], ResilientClient] | None = None,
    ) -> None:
        self._config = config
        self._kinds = tuple(kinds)
        self._client_factory = client_factory or ResilientClient

    def __call__(self, version: str) -> Snapshot:
        try:
            return asyncio.run(self._fetch_snapshot_async(version))
        except (httpx.HTTPError, ValidationError, DataDragonAPIError) as exc:
            raise SnapshotUnavailableError(
                f"Data Dragon snapshot {version} unavailable: {exc}", version=version
            ) from exc

    def versions(self) -> list[str]:
        try:
            return asyncio.run(self._fetch_versions_async())
        except (httpx.HTTPError, ValidationError, DataDragonAPIError) as exc:
            raise SnapshotUnavailableError(f"Data Dragon version list unavailable: {exc}") from exc

    async def _fetch_versions_async(self) -> list[str]:
        async with self._client_factory(self._config.resilience) as client:
            payload = await self._get_json(client, VERSIONS_PATH)
        return VersionList.model_validate(payload).root

    async def _fetch_snapshot_async(self, version: str) -> Snapshot:
        async with self._client_factory(self._config.resilience) as client:
            primary = await self._fetch_locale(client, version, self._config.locale)
            secondary: list[_LocalePayloads] = []
            for locale in self._config.alias_locales:
                try:
                    secondary.append(await self._fetch_locale(client, version, locale))
                except (httpx.HTTPError, ValidationError, DataDragonAPIError) as exc:
                    log.warning("Skipping alias locale %s for %s: %s", locale, version, exc)

        primary_names = {entity.entity_id: entity.name for entity in primary.entities()}
        aliases = alias_map(
            chain.from_iterable(payloads.entities() for payloads in secondary),
            exclude=primary_names,
        )
        snapshot = Snapshot.of(version, primary.entities(aliases))
        log.info(
            "Fetched Data Dragon snapshot %s (%s): %s entities, %s alias locales",
            version,
            self._config.locale,
            len(snapshot),
            len(secondary),
        )
        return snapshot

    async def _fetch_locale(
        self,
        client: ResilientClient,
        version: str,
        locale: str,
    ) -> _LocalePayloads:
        base = f"/cdn/{version}/data/{locale}"
        fetched: dict[EntityKind, object] = {}
        for kind in self._kinds:
            fetched[kind] = await self._get_json(client, f"{base}/{DATA_FILES[kind]}")

        def parse[T](kind: EntityKind, model: Callable[[object], T]) -> T | None:
            return model(fetched[kind]) if kind in fetched else None

        return _LocalePayloads(
            champions=parse(EntityKind.CHAMPION, ChampionFullResponse.model_validate),
            items=parse(EntityKind.ITEM, ItemResponse.model_validate),
            runes=parse(EntityKind.RUNE, RunePathList.model_validate),
            summoners=parse(EntityKind.SUMMONER, SummonerResponse.model_validate),
        )

    async def _get_json(self, client: ResilientClient, path: str) -> object:
        if self._config.resilience.base_url is None:
            raise DataDragonAPIError("Missing Data Dragon base_url in resilience configuration")
        response = await client.get(path)
        response.raise_for_status()
        try:
            return response.json()
        except ValueError as exc:
            raise DataDragonAPIError(f"Unexpected non-JSON payload at {path}") from exc
