"""Configuration loading and validation."""

from prattle.config.schema import PrattleConfig, WireConfig
from prattle.config.loader import load_config, merge_configs, wire_overrides

__all__ = [
    "PrattleConfig",
    "WireConfig",
    "load_config",
    "merge_configs",
    "wire_overrides",
]
