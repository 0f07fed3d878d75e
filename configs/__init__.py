"""Configuration module."""

from .config import (
    Settings,
    DataConfig,
    ExperimentConfig,
    DEFAULT_SETTINGS_PATH,
    load_settings,
    get_default_config,
    get_config,
)

__all__ = [
    "Settings",
    "DataConfig",
    "ExperimentConfig",
    "DEFAULT_SETTINGS_PATH",
    "load_settings",
    "get_default_config",
    "get_config",
]
