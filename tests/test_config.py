"""
Unit tests for settings loading and validation.
"""

import dataclasses
from datetime import date

import numpy as np
import pytest

from configs import Settings, load_settings, get_default_config, get_config
from retail_cv.exceptions import ConfigurationError


VALID = {
    "N_SPLITS": 3,
    "HORIZON": 2,
    "GAP": 2,
    "FIRST_WEEK": 40,
    "LAST_WEEK": 156,
    "START_DATE": "1989-09-14",
}


class TestSettings:
    """Tests for the Settings record."""

    def test_from_uppercase_keys(self):
        settings = Settings.from_dict(VALID)

        assert settings.n_splits == 3
        assert settings.horizon == 2
        assert settings.gap == 2
        assert settings.first_week == 40
        assert settings.last_week == 156
        assert settings.start_date == date(1989, 9, 14)

    def test_from_field_names(self):
        values = {key.lower(): value for key, value in VALID.items()}
        assert Settings.from_dict(values) == Settings.from_dict(VALID)

    def test_immutable(self):
        settings = Settings.from_dict(VALID)
        with pytest.raises(dataclasses.FrozenInstanceError):
            settings.gap = 5

    def test_missing_key(self):
        values = dict(VALID)
        del values["HORIZON"]
        with pytest.raises(ConfigurationError, match="HORIZON"):
            Settings.from_dict(values)

    def test_unknown_keys_ignored(self):
        values = dict(VALID, DATA_DIR="data")
        assert Settings.from_dict(values).n_splits == 3

    def test_numpy_integers_accepted(self):
        values = {key: np.int64(value) for key, value in VALID.items() if key != "START_DATE"}
        settings = Settings.from_dict(dict(values, START_DATE=VALID["START_DATE"]))

        assert settings == Settings.from_dict(VALID)
        assert type(settings.n_splits) is int

    def test_bool_rejected(self):
        with pytest.raises(ConfigurationError):
            Settings.from_dict(dict(VALID, GAP=True))

    def test_gap_zero_is_valid(self):
        settings = Settings.from_dict(dict(VALID, GAP=0))
        assert settings.gap == 0

    @pytest.mark.parametrize("key, value", [
        ("GAP", -1),
        ("HORIZON", 0),
        ("HORIZON", -2),
        ("N_SPLITS", 0),
        ("N_SPLITS", 2.5),
        ("FIRST_WEEK", 200),
        ("START_DATE", "not a date"),
    ])
    def test_invalid_values(self, key, value):
        with pytest.raises(ConfigurationError):
            Settings.from_dict(dict(VALID, **{key: value}))

    def test_to_dict_round_trip(self):
        settings = Settings.from_dict(VALID)
        assert Settings.from_dict(settings.to_dict()) == settings


class TestLoadSettings:
    """Tests for YAML settings loading."""

    def test_load_yaml(self, tmp_path):
        path = tmp_path / "settings.yaml"
        path.write_text(
            "N_SPLITS: 4\n"
            "HORIZON: 3\n"
            "GAP: 1\n"
            "FIRST_WEEK: 40\n"
            "LAST_WEEK: 120\n"
            "START_DATE: 1989-09-14\n"
        )

        settings = load_settings(str(path))

        assert settings.n_splits == 4
        assert settings.horizon == 3
        assert settings.start_date == date(1989, 9, 14)

    def test_missing_file(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            load_settings(str(tmp_path / "missing.yaml"))

    def test_not_a_mapping(self, tmp_path):
        path = tmp_path / "settings.yaml"
        path.write_text("- 1\n- 2\n")
        with pytest.raises(ConfigurationError):
            load_settings(str(path))

    def test_default_settings(self):
        config = get_default_config()

        assert config.settings.n_splits == 10
        assert config.settings.horizon == 2
        assert config.settings.gap == 2
        assert config.settings.first_week == 40
        assert config.settings.last_week == 156
        assert config.data.target_col == "logmove"

    def test_data_overrides(self):
        config = get_config(filepath="raw.csv", output_format="pickle")
        assert config.data.filepath == "raw.csv"
        assert config.data.output_format == "pickle"

        with pytest.raises(ConfigurationError):
            get_config(not_an_option=1)

    @pytest.mark.parametrize("option", ["key_cols", "week_col"])
    def test_column_layout_not_configurable(self, option):
        with pytest.raises(ConfigurationError, match=option):
            get_config(**{option: "region"})
