"""Data Dragon (structured snapshot provider) configuration values."""

from __future__ import annotations

from dataclasses import dataclass

from .env import env_list, env_str
from .http_resilience import RateLimit, ResilienceConfig, RetryPolicy
from .storage import StorageConfig, get_storage_config

DEFAULT_DDRAGON_BASE_URL = "https://ddragon.leagueoflegends.com"
DEFAULT_LOCALE = "es_ES"
DEFAULT_ALIAS_LOCALES = ("en_US",)


@dataclass(frozen=True, slots=True)
class DataDragonConfig:
    locale: str
    alias_locales: tuple[str, ...]
    resilience: ResilienceConfig


def get_ddragon_config(*, storage: StorageConfig | None = None) -> DataDragonConfig:
    storage_config = storage or get_storage_config()
    locale = env_str("PATCHDELTA_LOCALE", DEFAULT_LOCALE)
    alias_locales = tuple(
        alias for alias in env_list("PATCHDELTA_ALIAS_LOCALES", DEFAULT_ALIAS_LOCALES) if alias != locale
    )
    resilience = ResilienceConfig(
        name="ddragon",
        base_url=env_str("DDRAGON_BASE_URL", DEFAULT_DDRAGON_BASE_URL).rstrip("/"),
        ratelimit=RateLimit(max_calls=10, per_seconds=1.0),
        retry=RetryPolicy(total=3),
        cache=storage_config.cache_config(),
    )
    return DataDragonConfig(locale=locale, alias_locales=alias_locales, resilience=resilience)
