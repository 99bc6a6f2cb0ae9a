# fire_planner/config.py
from __future__ import annotations

import os
from dataclasses import dataclass


@dataclass(frozen=True)
class EngineConfig:
    """Policy knobs for the projection engine.

    max_savings_rate: share of monthly income a plan may ask to be saved
    safe_withdrawal_rate: annual withdrawal cap used for passive income
    post_retirement_haircut / post_retirement_floor: percentage points taken
        off the expected return after retirement, and the floor it cannot drop below
    safe_withdrawal_benchmark: percent used to label a withdrawal rate safe
    """

    max_savings_rate: float = 0.8
    safe_withdrawal_rate: float = 0.04
    post_retirement_haircut: float = 2.0
    post_retirement_floor: float = 4.0
    safe_withdrawal_benchmark: float = 4.0


DEFAULT_CONFIG = EngineConfig()


def _env_float(name: str, default: float) -> float:
    raw = os.getenv(name)
    if raw is None or not str(raw).strip():
        return default
    try:
        return float(raw)
    except ValueError as exc:
        raise ValueError(f"{name} must be numeric, got {raw!r}") from exc


def load_config_from_env() -> EngineConfig:
    """Builds an EngineConfig from env flags.

    Env vars:
      FIRE_MAX_SAVINGS_RATE=0.8          -> achievable ceiling (fraction of income)
      FIRE_SAFE_WITHDRAWAL_RATE=0.04     -> cap for passive income estimate
      FIRE_POST_RETIREMENT_HAIRCUT=2     -> points removed from expected return
      FIRE_POST_RETIREMENT_FLOOR=4       -> minimum post-retirement return (%)
    """
    return EngineConfig(
        max_savings_rate=_env_float("FIRE_MAX_SAVINGS_RATE", DEFAULT_CONFIG.max_savings_rate),
        safe_withdrawal_rate=_env_float("FIRE_SAFE_WITHDRAWAL_RATE", DEFAULT_CONFIG.safe_withdrawal_rate),
        post_retirement_haircut=_env_float("FIRE_POST_RETIREMENT_HAIRCUT", DEFAULT_CONFIG.post_retirement_haircut),
        post_retirement_floor=_env_float("FIRE_POST_RETIREMENT_FLOOR", DEFAULT_CONFIG.post_retirement_floor),
        safe_withdrawal_benchmark=DEFAULT_CONFIG.safe_withdrawal_benchmark,
    )
