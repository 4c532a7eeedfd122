"""Local storage locations (HTTP cache)."""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Final

from .env import env_str
from .errors import ConfigurationError
from .http_resilience import CacheConfig

APP_DIR_NAME: Final[str] = "patchdelta"
HTTP_CACHE_FILENAME: Final[str] = "http_cache.db"
HTTP_CACHE_TTL_SECONDS: Final[float] = 6 * 3600.0
CACHE_BACKENDS: Final[tuple[str, ...]] = ("memory", "sqlite", "off")


@dataclass(frozen=True, slots=True)
class StorageConfig:
    data_dir: Path
    http_cache_filename: str = HTTP_CACHE_FILENAME
    http_cache_backend: str = "memory"

    def resolve_data_dir(self) -> Path:
        return self.data_dir.expanduser().resolve()

    def ensure_data_dir(self) -> Path:
        data_dir = self.resolve_data_dir()
        data_dir.mkdir(parents=True, exist_ok=True)
        return data_dir

    def http_cache_path(self, *, ensure: bool = True) -> Path:
        base = self.ensure_data_dir() if ensure else self.resolve_data_dir()
        return base / self.http_cache_filename

    def cache_config(self) -> CacheConfig | None:
        """HTTP cache settings for the configured backend (``None`` when off)."""

        if self.http_cache_backend == "off":
            return None
        if self.http_cache_backend == "sqlite":
            return CacheConfig(
                backend="sqlite",
                sqlite_path=str(self.http_cache_path()),
                default_ttl_seconds=HTTP_CACHE_TTL_SECONDS,
            )
        return CacheConfig(backend="memory")


def _default_data_dir() -> Path:
    if os.name == "nt":
        base = os.getenv("LOCALAPPDATA")
        base_path = Path(base) if base else (Path.home() / "AppData" / "Local")
    else:
        base = os.getenv("XDG_DATA_HOME")
        base_path = Path(base) if base else (Path.home() / ".local" / "share")
    return (base_path / APP_DIR_NAME).expanduser().resolve()


def get_storage_config() -> StorageConfig:
    env_dir = os.getenv("PATCHDELTA_DATA_DIR")
    data_dir = Path(env_dir) if env_dir else _default_data_dir()
    backend = env_str("PATCHDELTA_HTTP_CACHE", "memory").lower()
    if backend not in CACHE_BACKENDS:
        raise ConfigurationError(
            f"PATCHDELTA_HTTP_CACHE must be one of {', '.join(CACHE_BACKENDS)}, got {backend!r}"
        )
    return StorageConfig(data_dir=data_dir, http_cache_backend=backend)
