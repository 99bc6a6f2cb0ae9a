"""FIRE corpus planning engine."""

from .config import DEFAULT_CONFIG, EngineConfig, load_config_from_env
from .errors import FirePlannerError, InvalidExpense, InvalidProfile

__all__ = [
    "DEFAULT_CONFIG",
    "EngineConfig",
    "FirePlannerError",
    "InvalidExpense",
    "InvalidProfile",
    "load_config_from_env",
]
