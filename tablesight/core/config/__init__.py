"""Configuration loading utilities."""

from .config_loader import (
    load_analytics_config,
    load_unified_config,
    get_config_path,
    get_config_value,
    reload_configs,
)

__all__ = [
    "load_analytics_config",
    "load_unified_config",
    "get_config_path",
    "get_config_value",
    "reload_configs",
]
