"""Release-notes changelog source."""

from __future__ import annotations

import asyncio
from logging import getLogger
from typing import TYPE_CHECKING

import httpx

from patchdelta.adapters.http_resilience import ResilientClient
from patchdelta.domain.model import EntityKind
from patchdelta.domain.ports import ChangelogUnavailableError
from patchdelta.domain.versions import patch_note_slugs

from .scraper import parse_patch_notes

if TYPE_CHECKING:
    from collections.abc import Callable, Mapping

    from patchdelta.config.http_resilience import ResilienceConfig
    from patchdelta.config.patch_notes import PatchNotesConfig
    from patchdelta.domain.model import ChangelogBlock, Snapshot

log = getLogger(__name__)


def known_names_from(snapshot: Snapshot) -> dict[EntityKind, tuple[str, ...]]:
    """Every published name (primary and alias locales) grouped by kind."""

    names: dict[EntityKind, list[str]] = {}
    for entity in snapshot:
        names.setdefault(entity.kind, []).extend(entity.names())
    return {kind: tuple(dict.fromkeys(values)) for kind, values in names.items()}


class PatchNotesSource:
    """Scrape the public release-notes page of one version.

    Implements the ``ChangelogSource`` port. The page URL is not derivable
    with certainty from the provider version, so each candidate slug is tried
    in turn until one yields entries.
    """

    def __init__(
        self,
        *,
        config: PatchNotesConfig,
        known_names: Mapping[EntityKind, tuple[str, ...]] | None = None,
        client_factory: Callable[[ResilienceConfig], ResilientClient] | None = None,
    ) -> None:
        self._config = config
        self._known_names = known_names
        self._client_factory = client_factory or ResilientClient

    def __call__(self, version: str) -> list[ChangelogBlock]:
        try:
            slugs = patch_note_slugs(version)
        except ValueError as exc:
            raise ChangelogUnavailableError(str(exc)) from exc
        return asyncio.run(self._fetch_async(version, slugs))

    async def _fetch_async(self, version: str, slugs: list[str]) -> list[ChangelogBlock]:
        async with self._client_factory(self._config.resilience) as client:
            for slug in slugs:
                url = self._config.url_for(slug)
                html = await self._get_page(client, url)
                if html is None:
                    continue
                blocks = parse_patch_notes(html, known_names=self._known_names)
                if blocks:
                    log.info(
                        "Fetched release notes for %s from %s: %s entries",
                        version,
                        url,
                        len(blocks),
                    )
                    return blocks
                log.debug("No entries parsed from %s", url)

        raise ChangelogUnavailableError(
            f"No release notes found for {version} (tried slugs: {', '.join(slugs)})"
        )

    async def _get_page(self, client: ResilientClient, url: str) -> str | None:
        try:
            response = await client.get(url)
        except httpx.HTTPError as exc:
            log.warning("Release notes request to %s failed: %s", url, exc)
            return None
        if not response.is_success:
            log.debug("Release notes page %s returned %s", url, response.status_code)
            return None
        return response.text
