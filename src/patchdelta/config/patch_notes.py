"""Release-note (patch notes web page) configuration values."""

from __future__ import annotations

from dataclasses import dataclass

from .env import env_str
from .http_resilience import RateLimit, ResilienceConfig, RetryPolicy
from .storage import StorageConfig, get_storage_config

DEFAULT_PATCH_NOTES_BASE_URL = "https://www.leagueoflegends.com"
DEFAULT_PATCH_NOTES_LOCALE = "es-es"
BROWSER_HEADERS = {
    "User-Agent": (
        "Mozilla/5.0 (Windows NT 10.0; Win64; x64) AppleWebKit/537.36 "
        "(KHTML, like Gecko) Chrome/120.0.0.0 Safari/537.36"
    ),
    "Accept": "text/html,application/xhtml+xml,application/xml;q=0.9,*/*;q=0.8",
}


@dataclass(frozen=True, slots=True)
class PatchNotesConfig:
    locale: str
    resilience: ResilienceConfig

    def url_for(self, slug: str) -> str:
        """Path (relative to the base URL) of the notes page for one slug."""

        return f"/{self.locale}/news/game-updates/patch-{slug}-notes/"


def get_patch_notes_config(*, storage: StorageConfig | None = None) -> PatchNotesConfig:
    storage_config = storage or get_storage_config()
    resilience = ResilienceConfig(
        name="patch_notes",
        base_url=env_str("PATCH_NOTES_BASE_URL", DEFAULT_PATCH_NOTES_BASE_URL).rstrip("/"),
        timeout_seconds=20.0,
        ratelimit=RateLimit(max_calls=2, per_seconds=1.0),
        retry=RetryPolicy(total=2, status_forcelist=frozenset({429, 500, 502, 503, 504})),
        cache=storage_config.cache_config(),
        default_headers=BROWSER_HEADERS,
    )
    return PatchNotesConfig(
        locale=env_str("PATCH_NOTES_LOCALE", DEFAULT_PATCH_NOTES_LOCALE),
        resilience=resilience,
    )
