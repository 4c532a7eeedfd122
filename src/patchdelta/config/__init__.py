"""Application configuration helpers."""

from __future__ import annotations

from .ddragon import DataDragonConfig, get_ddragon_config
from .engine import EngineConfig, get_engine_config
from .env import env_float, env_list, env_str
from .errors import ConfigurationError
from .http_resilience import CacheConfig, RateLimit, ResilienceConfig, RetryPolicy
from .logging import configure_logging
from .patch_notes import PatchNotesConfig, get_patch_notes_config
from .storage import StorageConfig, get_storage_config

__all__ = [
    "CacheConfig",
    "ConfigurationError",
    "DataDragonConfig",
    "EngineConfig",
    "PatchNotesConfig",
    "RateLimit",
    "ResilienceConfig",
    "RetryPolicy",
    "StorageConfig",
    "configure_logging",
    "env_float",
    "env_list",
    "env_str",
    "get_ddragon_config",
    "get_engine_config",
    "get_patch_notes_config",
    "get_storage_config",
]
