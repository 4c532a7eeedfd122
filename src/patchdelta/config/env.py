"""Environment variable loaders for configuration."""

from __future__ import annotations

import os
from typing import TYPE_CHECKING

from .errors import ConfigurationError

if TYPE_CHECKING:
    from collections.abc import Sequence


def env_str(name: str, default: str) -> str:
    """Optional string setting; blank counts as unset."""

    value = os.getenv(name)
    if value is None or not value.strip():
        return default
    return value.strip()


def env_float(name: str, default: float) -> float:
    value = os.getenv(name)
    if value is None or not value.strip():
        return default
    try:
        parsed = float(value)
    except ValueError:
        raise ConfigurationError(f"{name} must be a number, got {value!r}") from None
    if parsed < 0:
        raise ConfigurationError(f"{name} must not be negative, got {value!r}")
    return parsed


def env_list(name: str, default: Sequence[str]) -> tuple[str, ...]:
    """Comma-separated setting; an explicitly empty value yields an empty tuple."""

    value = os.getenv(name)
    if value is None:
        return tuple(default)
    return tuple(part.strip() for part in value.split(",") if part.strip())
