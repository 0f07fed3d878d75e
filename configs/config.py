"""
Configuration settings for the retail panel split preparation.

This module centralizes the split settings, data locations and output options.
Split settings are read from a YAML file with uppercase keys and are immutable
once loaded.
"""

import logging
import numbers
import os
from dataclasses import dataclass, field
from datetime import date, datetime
from typing import Any, Dict, List, Mapping, Optional

import pandas as pd
import yaml

from retail_cv.exceptions import ConfigurationError

logger = logging.getLogger(__name__)

DEFAULT_SETTINGS_PATH = os.path.join(os.path.dirname(os.path.abspath(__file__)), "settings.yaml")


# =============================================================================
# SPLIT SETTINGS
# =============================================================================

@dataclass(frozen=True)
class Settings:
    """Rolling split settings (week offsets are relative to ``start_date``)."""
    n_splits: int
    horizon: int
    gap: int
    first_week: int
    last_week: int
    start_date: date

    # YAML key -> field name
    KEYS = {
        "N_SPLITS": "n_splits",
        "HORIZON": "horizon",
        "GAP": "gap",
        "FIRST_WEEK": "first_week",
        "LAST_WEEK": "last_week",
        "START_DATE": "start_date",
    }

    def __post_init__(self):
        # frozen: bypass __setattr__ to store normalised values
        for name in ("n_splits", "horizon", "gap", "first_week", "last_week"):
            value = getattr(self, name)
            if isinstance(value, bool) or not isinstance(value, numbers.Integral):
                raise ConfigurationError(f"{name} must be an integer, got {value!r}")
            object.__setattr__(self, name, int(value))

        if self.n_splits <= 0:
            raise ConfigurationError(f"n_splits must be positive, got {self.n_splits}")
        if self.horizon <= 0:
            raise ConfigurationError(f"horizon must be positive, got {self.horizon}")
        if self.gap < 0:
            raise ConfigurationError(f"gap must be non-negative, got {self.gap}")
        if self.first_week > self.last_week:
            raise ConfigurationError(
                f"first_week ({self.first_week}) is after last_week ({self.last_week})"
            )

        object.__setattr__(self, "start_date", _parse_date(self.start_date))

    @classmethod
    def from_dict(cls, values: Mapping[str, Any]) -> "Settings":
        """
        Build settings from a key-value mapping.

        Accepts the uppercase configuration keys (``N_SPLITS``, ...) as well
        as the lowercase field names.
        """
        fields = set(cls.KEYS.values())
        kwargs = {}
        for key, value in values.items():
            name = cls.KEYS.get(key, key)
            if name in fields:
                kwargs[name] = value
            else:
                logger.debug(f"Ignoring unknown settings key: {key}")

        missing = [key for key, name in cls.KEYS.items() if name not in kwargs]
        if missing:
            raise ConfigurationError(f"Missing required settings: {missing}")

        return cls(**kwargs)

    def to_dict(self) -> Dict[str, Any]:
        return {key: getattr(self, name) for key, name in self.KEYS.items()}


def _parse_date(value: Any) -> date:
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    try:
        return pd.Timestamp(str(value)).date()
    except (ValueError, TypeError) as e:
        raise ConfigurationError(f"Invalid start_date: {value!r}") from e


def load_settings(path: Optional[str] = None) -> Settings:
    """
    Load split settings from a YAML file.

    Parameters
    ----------
    path : str, optional
        Path to the YAML file. Defaults to ``configs/settings.yaml``.

    Returns
    -------
    Settings
        Validated, immutable settings.
    """
    if path is None:
        path = DEFAULT_SETTINGS_PATH

    if not os.path.exists(path):
        raise FileNotFoundError(f"Settings file not found at: {path}")
    with open(path, "r", encoding="utf-8") as f:
        values = yaml.safe_load(f)

    if not isinstance(values, dict):
        raise ConfigurationError(f"Settings file must contain a mapping: {path}")

    settings = Settings.from_dict(values)
    logger.info(f"Loaded settings from {path}: {settings.to_dict()}")
    return settings


# =============================================================================
# DATA CONFIGURATION
# =============================================================================

@dataclass
class DataConfig:
    """Data locations, target column and output format."""
    filepath: str = "data/oj.csv"
    output_dir: str = "data/splits"
    output_format: str = "csv"

    target_col: str = "logmove"

    # Known-in-advance covariates exposed for the forecast window
    aux_cols: List[str] = field(default_factory=list)


# =============================================================================
# EXPERIMENT CONFIGURATION
# =============================================================================

@dataclass
class ExperimentConfig:
    """Main pipeline configuration."""
    settings: Settings
    data: DataConfig = field(default_factory=DataConfig)

    # Output settings
    results_dir: str = "results"
    make_plots: bool = False


# =============================================================================
# DEFAULT CONFIGURATION INSTANCE
# =============================================================================

def get_default_config() -> ExperimentConfig:
    """Get default configuration built from the bundled settings file."""
    return ExperimentConfig(settings=load_settings())


def get_config(settings_path: Optional[str] = None, **data_overrides) -> ExperimentConfig:
    """Get configuration from a settings file with data overrides applied."""
    config = ExperimentConfig(settings=load_settings(settings_path))
    for name, value in data_overrides.items():
        if not hasattr(config.data, name):
            raise ConfigurationError(f"Unknown data option: {name}")
        setattr(config.data, name, value)
    return config
