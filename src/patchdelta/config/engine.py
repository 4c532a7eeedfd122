"""Reconciliation engine settings."""

from __future__ import annotations

from dataclasses import dataclass

from .env import env_float

DEFAULT_FLOAT_EPSILON = 1e-4


@dataclass(frozen=True, slots=True)
class EngineConfig:
    float_epsilon: float = DEFAULT_FLOAT_EPSILON


def get_engine_config() -> EngineConfig:
    return EngineConfig(float_epsilon=env_float("PATCHDELTA_FLOAT_EPSILON", DEFAULT_FLOAT_EPSILON))
